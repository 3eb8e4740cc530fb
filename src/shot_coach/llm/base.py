"""Abstract base class for chat-completion clients."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence, Union

from .streaming import ChatEventStream
from .types import ChatMessage, ChatResponse


class BaseLLMClient(ABC):
    """Abstract interface for chat-completion backends."""

    @abstractmethod
    async def list_models(self) -> dict:
        """Return the provider's model listing.

        Used by callers as a connectivity check before a completion call.
        """
        ...

    @abstractmethod
    async def complete(
        self,
        messages: Sequence[ChatMessage],
        model: Optional[str] = None,
        stream: bool = False,
    ) -> Union[ChatResponse, ChatEventStream]:
        """Request a completion for the given conversation.

        Args:
            messages: Ordered conversation, system message first.
            model: Model identifier; the client's default when omitted.
            stream: Return a lazy event stream instead of a parsed response.

        Returns:
            A ChatResponse, or a ChatEventStream when stream is True.
        """
        ...
