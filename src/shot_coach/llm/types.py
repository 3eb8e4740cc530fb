"""Types for the chat-completion layer."""

from dataclasses import dataclass, field
from typing import Any, Optional

ROLES = ("system", "user", "assistant")


@dataclass(frozen=True)
class ChatMessage:
    """A message in a chat conversation."""
    role: str  # "system", "user", or "assistant"
    content: str

    def __post_init__(self):
        if self.role not in ROLES:
            raise ValueError(f"Unknown message role: {self.role!r}")

    def to_dict(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}

    @classmethod
    def from_dict(cls, data: dict) -> "ChatMessage":
        return cls(role=data.get("role", "assistant"), content=data.get("content") or "")


@dataclass(frozen=True)
class ChatRequest:
    """Body of a POST to the completions endpoint."""
    model: str
    messages: tuple[ChatMessage, ...]
    stream: bool = False
    temperature: float = 0.7
    max_tokens: int = 1000

    def __post_init__(self):
        if not self.messages:
            raise ValueError("A chat request needs at least one message")
        system_positions = [i for i, m in enumerate(self.messages) if m.role == "system"]
        if len(system_positions) > 1 or system_positions not in ([], [0]):
            raise ValueError("Only a single, leading system message is allowed")
        if not 0 <= self.temperature <= 2:
            raise ValueError("Temperature must be between 0 and 2")
        if self.max_tokens <= 0:
            raise ValueError("max_tokens must be positive")

    def to_payload(self) -> dict[str, Any]:
        return {
            "model": self.model,
            "messages": [m.to_dict() for m in self.messages],
            "stream": self.stream,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }


@dataclass(frozen=True)
class Choice:
    """One candidate completion."""
    index: int
    message: ChatMessage
    finish_reason: Optional[str] = None


@dataclass
class ChatResponse:
    """Parsed non-streaming completion."""
    choices: list[Choice] = field(default_factory=list)
    model: Optional[str] = None
    usage: Optional[dict] = None
    raw: dict = field(default_factory=dict)

    @property
    def content(self) -> Optional[str]:
        """Text of the first choice, or None when no content was produced."""
        if not self.choices:
            return None
        return self.choices[0].message.content

    @classmethod
    def from_json(cls, data: Any) -> "ChatResponse":
        """Build from a decoded body. Raises ValueError on a wrong shape."""
        if not isinstance(data, dict):
            raise ValueError("response body is not a JSON object")
        raw_choices = data.get("choices", [])
        if not isinstance(raw_choices, list):
            raise ValueError("'choices' is not a list")

        choices = []
        for position, item in enumerate(raw_choices):
            if not isinstance(item, dict) or not isinstance(item.get("message"), dict):
                raise ValueError(f"choice {position} has no message object")
            choices.append(
                Choice(
                    index=item.get("index", position),
                    message=ChatMessage.from_dict(item["message"]),
                    finish_reason=item.get("finish_reason"),
                )
            )
        return cls(choices=choices, model=data.get("model"), usage=data.get("usage"), raw=data)


@dataclass
class ClientConfig:
    """Transport configuration owned by one client instance."""
    base_url: str
    api_key: Optional[str] = None
    default_model: str = "gpt-3.5-turbo"
    temperature: float = 0.7
    max_tokens: int = 1000


def delta_content(event: dict) -> str:
    """Extract choices[0].delta.content from a stream event, or ''."""
    if not isinstance(event, dict):
        return ""
    choices = event.get("choices")
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        return ""
    delta = choices[0].get("delta")
    if not isinstance(delta, dict):
        return ""
    content = delta.get("content")
    return content if isinstance(content, str) else ""
