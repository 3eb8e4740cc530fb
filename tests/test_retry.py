"""Unit tests for the opt-in retry wrapper."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from shot_coach.llm import ApiError, AuthError, ChatResponse, RetryingChatClient, TransportError
from shot_coach.llm.retry import is_retryable


@pytest.fixture
def inner():
    client = MagicMock()
    client.list_models = AsyncMock()
    client.complete = AsyncMock()
    return client


class TestIsRetryable:
    def test_transport_and_server_errors_retry(self):
        assert is_retryable(TransportError("reset"))
        assert is_retryable(ApiError(503, "unavailable"))
        assert is_retryable(ApiError(429, "slow down"))

    def test_client_errors_do_not_retry(self):
        assert not is_retryable(AuthError(401, "bad key"))
        assert not is_retryable(ApiError(400, "bad request"))
        assert not is_retryable(ValueError("bad messages"))


class TestRetryingChatClient:
    @pytest.mark.asyncio
    async def test_retries_transport_errors_until_success(self, inner):
        inner.list_models.side_effect = [TransportError("reset"), TransportError("reset"), {"data": []}]
        client = RetryingChatClient(inner, attempts=3, delay=0)

        assert await client.list_models() == {"data": []}
        assert inner.list_models.await_count == 3

    @pytest.mark.asyncio
    async def test_gives_up_after_attempts(self, inner):
        inner.complete.side_effect = TransportError("down")
        client = RetryingChatClient(inner, attempts=2, delay=0)

        with pytest.raises(TransportError):
            await client.complete([])
        assert inner.complete.await_count == 2

    @pytest.mark.asyncio
    async def test_auth_error_is_not_retried(self, inner):
        inner.complete.side_effect = AuthError(401, "bad key")
        client = RetryingChatClient(inner, attempts=5, delay=0)

        with pytest.raises(AuthError):
            await client.complete([])
        assert inner.complete.await_count == 1

    @pytest.mark.asyncio
    async def test_passes_arguments_through(self, inner):
        inner.complete.return_value = ChatResponse()
        client = RetryingChatClient(inner, attempts=1, delay=0)

        result = await client.complete(["msg"], model="phi3", stream=True)

        assert isinstance(result, ChatResponse)
        inner.complete.assert_awaited_once_with(["msg"], model="phi3", stream=True)

    def test_setters_reach_wrapped_client(self, inner):
        client = RetryingChatClient(inner)

        client.set_credential("sk-new")

        inner.set_credential.assert_called_once_with("sk-new")
