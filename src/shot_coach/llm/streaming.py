"""Decoding of `data: ` framed chat-completion streams.

Providers deliver a streamed completion as newline-delimited frames:

    data: {"choices": [{"delta": {"content": "Bend"}}]}
    data: {"choices": [{"delta": {"content": " your knees"}}]}
    data: [DONE]

The text arrives in arbitrary chunks, so a frame may span several reads.
`SSELineDecoder` reassembles complete lines, `parse_frame` interprets one
line, and `ChatEventStream` pulls chunks from an open httpx response on
demand and yields the decoded JSON events.
"""

import json
import logging
from typing import Any, AsyncIterator, Optional

import httpx

from .errors import ProtocolError, from_request_error
from .types import delta_content

logger = logging.getLogger(__name__)

DATA_PREFIX = "data: "
DONE_TOKEN = "[DONE]"
MAX_LINE_LENGTH = 1024 * 1024

# Returned by parse_frame for the terminal frame.
DONE = object()


class SSELineDecoder:
    """Buffers partial reads and hands back complete lines only."""

    def __init__(self, max_line_length: int = MAX_LINE_LENGTH):
        self._buffer = ""
        self._max_line_length = max_line_length

    def feed(self, text: str) -> list[str]:
        self._buffer += text
        *lines, self._buffer = self._buffer.split("\n")
        if len(self._buffer) > self._max_line_length:
            raise ProtocolError(
                f"Stream line exceeds {self._max_line_length} characters without a newline"
            )
        return [line.rstrip("\r") for line in lines]

    def flush(self) -> list[str]:
        """Return the unterminated remainder, if any."""
        remainder, self._buffer = self._buffer.rstrip("\r"), ""
        return [remainder] if remainder else []


def parse_frame(line: str) -> Any:
    """Interpret one line of the stream.

    Returns DONE for the terminal frame, the decoded JSON payload for a data
    frame, or None for anything that should be skipped (keep-alives,
    comments, other SSE fields, undecodable JSON).
    """
    if not line.startswith(DATA_PREFIX):
        return None
    payload = line[len(DATA_PREFIX):]
    if payload.strip() == DONE_TOKEN:
        return DONE
    try:
        return json.loads(payload)
    except json.JSONDecodeError:
        logger.debug("Skipping undecodable stream frame: %r", payload[:80])
        return None


class ChatEventStream:
    """Lazy, single-use async iterator of stream events.

    Reads happen only when no decoded event is pending. The underlying
    response is released by `aclose()`, which runs on normal completion,
    on the terminal frame, on a read failure and when the consumer stops
    early (call `aclose()` or use `async with`).
    """

    def __init__(self, response: httpx.Response):
        self._response = response
        self._chunks: Optional[AsyncIterator[str]] = None
        self._decoder = SSELineDecoder()
        self._pending: list[Any] = []
        self._finished = False
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def __aiter__(self) -> "ChatEventStream":
        return self

    async def __anext__(self) -> Any:
        while not self._pending:
            if self._finished:
                await self.aclose()
                raise StopAsyncIteration
            await self._read_chunk()
        return self._pending.pop(0)

    async def _read_chunk(self):
        if self._chunks is None:
            self._chunks = self._response.aiter_text()
        try:
            chunk = await self._chunks.__anext__()
        except StopAsyncIteration:
            self._accept(self._decoder.flush())
            self._finished = True
            return
        except httpx.RequestError as exc:
            await self.aclose()
            raise from_request_error(exc, "Stream interrupted") from exc
        except BaseException:
            await self.aclose()
            raise

        try:
            lines = self._decoder.feed(chunk)
        except ProtocolError:
            await self.aclose()
            raise
        self._accept(lines)

    def _accept(self, lines: list[str]):
        for line in lines:
            event = parse_frame(line)
            if event is DONE:
                self._finished = True
                return
            if event is not None:
                self._pending.append(event)

    async def aclose(self):
        if self._closed:
            return
        self._closed = True
        self._finished = True
        self._pending.clear()
        await self._response.aclose()
        logger.debug("Stream response closed")

    async def __aenter__(self) -> "ChatEventStream":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()


async def collect_content(stream: ChatEventStream) -> str:
    """Drain a stream and join the delta contents."""
    parts = []
    async with stream:
        async for event in stream:
            parts.append(delta_content(event))
    return "".join(parts)
