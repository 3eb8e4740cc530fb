"""Opt-in retry policy around a chat-completion client.

`ChatCompletionClient` never retries on its own. Callers that want the
configured retry count and delay applied wrap it in `RetryingChatClient`.
"""

import logging
from typing import Optional, Sequence, Union

from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from .base import BaseLLMClient
from .errors import ApiError, AuthError, TransportError
from .streaming import ChatEventStream
from .types import ChatMessage, ChatResponse

logger = logging.getLogger(__name__)


def is_retryable(exc: BaseException) -> bool:
    """Network failures, rate limiting and provider-side 5xx are worth another try."""
    if isinstance(exc, TransportError):
        return True
    if isinstance(exc, ApiError) and not isinstance(exc, AuthError):
        return exc.status_code == 429 or exc.status_code >= 500
    return False


class RetryingChatClient(BaseLLMClient):
    """Delegates to another client, retrying with capped exponential backoff.

    A streamed completion is retried only while the stream is being opened;
    once the event stream has been handed back, failures surface to the
    consumer unchanged.
    """

    def __init__(
        self,
        client: BaseLLMClient,
        attempts: int = 3,
        delay: float = 1.0,
        max_delay: float = 30.0,
    ):
        self.client = client
        self.attempts = max(1, attempts)
        self.delay = delay
        self.max_delay = max_delay

    def _retrying(self) -> AsyncRetrying:
        return AsyncRetrying(
            stop=stop_after_attempt(self.attempts),
            wait=wait_exponential(multiplier=self.delay, min=self.delay, max=self.max_delay),
            retry=retry_if_exception(is_retryable),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )

    async def list_models(self) -> dict:
        async for attempt in self._retrying():
            with attempt:
                return await self.client.list_models()

    async def complete(
        self,
        messages: Sequence[ChatMessage],
        model: Optional[str] = None,
        stream: bool = False,
    ) -> Union[ChatResponse, ChatEventStream]:
        async for attempt in self._retrying():
            with attempt:
                return await self.client.complete(messages, model=model, stream=stream)

    def __getattr__(self, name):
        # set_credential, set_endpoint, close and config reach the wrapped client
        if name == "client":
            raise AttributeError(name)
        return getattr(self.client, name)
