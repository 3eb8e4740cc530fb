"""Chat-completion layer."""

from .base import BaseLLMClient
from .errors import ApiError, AuthError, CoachError, ProtocolError, TransportError
from .openai_compat import ChatCompletionClient
from .retry import RetryingChatClient
from .streaming import ChatEventStream, SSELineDecoder, collect_content, parse_frame
from .types import ChatMessage, ChatRequest, ChatResponse, ClientConfig, delta_content

__all__ = [
    "BaseLLMClient",
    "ChatCompletionClient",
    "RetryingChatClient",
    "ChatEventStream",
    "SSELineDecoder",
    "collect_content",
    "parse_frame",
    "ChatMessage",
    "ChatRequest",
    "ChatResponse",
    "ClientConfig",
    "delta_content",
    "CoachError",
    "TransportError",
    "AuthError",
    "ApiError",
    "ProtocolError",
]
