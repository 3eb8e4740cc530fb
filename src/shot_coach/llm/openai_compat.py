"""Client for OpenAI-compatible chat-completion providers."""

import json
import logging
from typing import Optional, Sequence, Union

import httpx

from .base import BaseLLMClient
from .errors import ApiError, AuthError, ProtocolError, from_request_error
from .streaming import ChatEventStream
from .types import ChatMessage, ChatRequest, ChatResponse, ClientConfig

logger = logging.getLogger(__name__)


class ChatCompletionClient(BaseLLMClient):
    """LLM client that talks to an OpenAI-compatible HTTP API.

    The endpoint and credential can be changed at runtime with
    `set_endpoint` and `set_credential`. Each call captures the URL and
    headers when it starts, so a change never affects a call in flight.
    """

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        default_model: str = "gpt-3.5-turbo",
        temperature: float = 0.7,
        max_tokens: int = 1000,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = ClientConfig(
            base_url=base_url.rstrip("/"),
            api_key=api_key or None,
            default_model=default_model,
            temperature=temperature,
            max_tokens=max_tokens,
        )
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def set_credential(self, api_key: Optional[str]):
        self.config.api_key = api_key or None
        logger.info("Credential %s", "updated" if self.config.api_key else "cleared")

    def set_endpoint(self, base_url: str):
        self.config.base_url = base_url.rstrip("/")
        logger.info("Endpoint set to %s", self.config.base_url)

    def set_default_model(self, model: str):
        self.config.default_model = model
        logger.info("Default model set to %s", model)

    @property
    def headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.config.api_key:
            headers["Authorization"] = f"Bearer {self.config.api_key}"
        return headers

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout, transport=self._transport)
        return self._client

    async def list_models(self) -> dict:
        url = f"{self.config.base_url}/models"
        headers = self.headers
        client = await self._get_client()

        try:
            response = await client.get(url, headers=headers)
        except httpx.RequestError as exc:
            logger.error("Model listing failed: %s", exc)
            raise from_request_error(exc, f"Model listing from {url} failed") from exc

        _raise_for_status(response)
        return _decode_json(response)

    async def complete(
        self,
        messages: Sequence[ChatMessage],
        model: Optional[str] = None,
        stream: bool = False,
    ) -> Union[ChatResponse, ChatEventStream]:
        """Request a completion.

        With stream=True the status is checked before the stream is returned.
        Consume it inside `async with` so the connection is released even when
        the loop breaks early:

            stream = await client.complete(messages, stream=True)
            async with stream:
                async for event in stream:
                    ...

        Raises:
            TransportError: The provider could not be reached.
            AuthError: The credential was rejected (401/403).
            ApiError: Any other non-2xx status.
            ProtocolError: A 2xx body that cannot be decoded or parsed.
        """
        request = ChatRequest(
            model=model or self.config.default_model,
            messages=tuple(messages),
            stream=stream,
            temperature=self.config.temperature,
            max_tokens=self.config.max_tokens,
        )
        url = f"{self.config.base_url}/chat/completions"
        headers = self.headers
        client = await self._get_client()

        logger.debug(
            "Chat request: url=%s model=%s messages=%d stream=%s key=%s",
            url, request.model, len(request.messages), stream,
            "set" if "Authorization" in headers else "none",
        )

        http_request = client.build_request("POST", url, json=request.to_payload(), headers=headers)
        try:
            response = await client.send(http_request, stream=stream)
        except httpx.RequestError as exc:
            logger.error("Chat request failed: %s", exc)
            raise from_request_error(exc, f"Chat request to {url} failed") from exc

        if not stream:
            _raise_for_status(response)
            try:
                result = ChatResponse.from_json(_decode_json(response))
            except ValueError as exc:
                raise ProtocolError(f"Unexpected completion body: {exc}") from exc
            logger.debug("Chat response: choices=%d", len(result.choices))
            return result

        if not response.is_success:
            try:
                await response.aread()
            except httpx.RequestError as exc:
                raise from_request_error(exc, "Failed reading error body") from exc
            finally:
                await response.aclose()
            _raise_for_status(response)
        return ChatEventStream(response)

    async def close(self):
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "ChatCompletionClient":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()


def _raise_for_status(response: httpx.Response):
    if response.is_success:
        return

    message = _error_message(response)
    logger.warning("Provider returned %d: %s", response.status_code, message)
    if response.status_code in (401, 403):
        raise AuthError(response.status_code, message)
    raise ApiError(response.status_code, message)


def _error_message(response: httpx.Response) -> str:
    """Prefer the provider's {"error": {"message"}}; fall back to the status text."""
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str) and error:
            return error
    return response.reason_phrase or f"HTTP {response.status_code}"


def _decode_json(response: httpx.Response):
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ProtocolError(f"Malformed JSON from {response.request.url}: {exc}") from exc
