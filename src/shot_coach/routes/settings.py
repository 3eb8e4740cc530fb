"""Runtime provider settings and connection test."""

import logging

from fastapi import APIRouter, Depends

from ..llm import ChatCompletionClient, CoachError
from .deps import get_chat_client
from .schemas import SettingsUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/settings", tags=["settings"])


def _describe(client: ChatCompletionClient) -> dict:
    return {
        "base_url": client.config.base_url,
        "model": client.config.default_model,
        "api_key_set": client.config.api_key is not None,
        "max_tokens": client.config.max_tokens,
        "temperature": client.config.temperature,
    }


@router.get("")
async def read_settings(client: ChatCompletionClient = Depends(get_chat_client)):
    return _describe(client)


@router.put("")
async def update_settings(
    body: SettingsUpdate,
    client: ChatCompletionClient = Depends(get_chat_client),
):
    """Push new provider values into the running client.

    An empty api_key clears the credential; omitted fields stay unchanged.
    """
    if body.base_url:
        client.set_endpoint(body.base_url)
    if body.api_key is not None:
        client.set_credential(body.api_key)
    if body.model:
        client.set_default_model(body.model)
    return _describe(client)


@router.get("/test")
async def test_connection(client: ChatCompletionClient = Depends(get_chat_client)):
    """Check the model listing without retries."""
    try:
        listing = await client.list_models()
    except CoachError as e:
        return {"success": False, "message": f"Connection failed: {e}", "model_count": 0}

    models = listing.get("data") if isinstance(listing, dict) else None
    count = len(models) if isinstance(models, list) else 0
    return {
        "success": True,
        "message": f"Connection successful! Found {count} models.",
        "model_count": count,
    }
