"""Shared route dependencies. The client is set at app startup."""

from ..coach import CoachService
from ..config import settings
from ..llm import ChatCompletionClient, RetryingChatClient

_chat_client: ChatCompletionClient = None  # type: ignore


def set_chat_client(client: ChatCompletionClient):
    global _chat_client
    _chat_client = client


def get_chat_client() -> ChatCompletionClient:
    return _chat_client


def get_coach() -> CoachService:
    client = get_chat_client()
    return CoachService(
        RetryingChatClient(client, attempts=settings.retry_attempts, delay=settings.retry_delay)
    )
