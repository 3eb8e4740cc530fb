"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from .config import settings
from .llm import ChatCompletionClient, CoachError
from .routes import chat, coach, settings as settings_routes
from .routes.deps import set_chat_client

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


async def _check_provider_connectivity(client: ChatCompletionClient):
    """Attempt a lightweight model listing against the configured provider."""
    logger.info("Provider URL: %s", client.config.base_url)
    logger.info("Model: %s", client.config.default_model)
    try:
        listing = await client.list_models()
    except CoachError as e:
        logger.warning("Cannot reach provider at %s: %s", client.config.base_url, e)
        logger.warning("Coaching requests will fall back to demo responses until it is available.")
        return
    count = len(listing.get("data", [])) if isinstance(listing, dict) else 0
    logger.info("Provider is reachable, %d model(s) listed", count)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Builds the shared chat-completion client and closes it on shutdown."""
    client = ChatCompletionClient(
        base_url=settings.base_url,
        api_key=settings.api_key,
        default_model=settings.model,
        temperature=settings.temperature,
        max_tokens=settings.max_tokens,
        timeout=settings.timeout,
    )
    set_chat_client(client)
    await _check_provider_connectivity(client)

    yield

    await client.close()
    logger.info("Provider client closed")


app = FastAPI(lifespan=lifespan)

app.include_router(coach.router)
app.include_router(chat.router)
app.include_router(settings_routes.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
