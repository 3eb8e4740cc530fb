"""Conversational coaching endpoint."""

import json
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from ..coach import CoachService
from ..config import settings
from ..fallback import demo_chat_response
from ..llm import ChatEventStream, CoachError, delta_content
from .deps import get_coach
from .schemas import ChatRequestIn

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])

NO_RESPONSE = "Sorry, I could not generate a response."


async def relay_stream(stream: ChatEventStream):
    """Re-frame provider deltas as `data: {"content": ...}` events.

    A failure is reported as a `data: {"error": ...}` frame and the relay
    always ends with `data: [DONE]`, unless the client disconnected.
    """
    try:
        async with stream:
            async for event in stream:
                text = delta_content(event)
                if text:
                    yield f"data: {json.dumps({'content': text})}\n\n"
    except CoachError as e:
        logger.error("Stream ended early: %s", e)
        yield f"data: {json.dumps({'error': str(e)})}\n\n"
    except Exception as e:
        logger.exception("Unexpected failure while relaying stream")
        yield f"data: {json.dumps({'error': f'{type(e).__name__}: {e}'})}\n\n"
    yield "data: [DONE]\n\n"


@router.post("/chat")
async def chat(body: ChatRequestIn, coach: CoachService = Depends(get_coach)):
    sport = body.sport or settings.default_sport
    metrics = body.metrics.to_metrics()
    history = [m.to_message() for m in body.history]

    try:
        result = await coach.chat(metrics, sport, history, body.message, stream=body.stream)
    except CoachError as e:
        logger.warning("Chat request failed, falling back to demo mode: %s", e)
        content = (
            f"Error: {e}\n\nFalling back to demo mode...\n\n"
            + demo_chat_response(body.message, metrics, sport)
        )
        return {"role": "assistant", "content": content, "fallback": True}

    if body.stream:
        return StreamingResponse(relay_stream(result), media_type="text/event-stream")

    return {"role": "assistant", "content": result.content or NO_RESPONSE, "fallback": False}
