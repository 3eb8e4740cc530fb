"""Command-line entry point: `python -m shot_coach` or `shot-coach`."""

import argparse
from typing import Optional, Sequence

import uvicorn

from .config import settings


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="shot-coach", description="Sports-practice coaching API")
    p.add_argument("--host", default=settings.host, help="Bind address")
    p.add_argument("--port", type=int, default=settings.port, help="Bind port")
    p.add_argument("--log-level", default=settings.log_level, help="DEBUG, INFO, WARNING, ERROR")
    p.add_argument("--reload", action="store_true", help="Restart on code changes (development)")
    return p.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None):
    args = parse_args(argv)
    uvicorn.run(
        "shot_coach.app:app",
        host=args.host,
        port=args.port,
        log_level=args.log_level.lower(),
        reload=args.reload,
    )


if __name__ == "__main__":
    main()
