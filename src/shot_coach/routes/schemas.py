"""Request and response bodies for the HTTP API."""

from typing import Literal, Optional

from pydantic import BaseModel, Field

from ..analytics import Attempt, SessionMetrics
from ..llm import ChatMessage


class AttemptIn(BaseModel):
    x: float
    y: float
    err: float = Field(ge=0)
    hit: bool
    angle: float = 0.0

    def to_attempt(self) -> Attempt:
        return Attempt(x=self.x, y=self.y, err=self.err, hit=self.hit, angle=self.angle)


class MetricsIn(BaseModel):
    total: int = 0
    makes: int = 0
    acc: float = 0.0
    mre: float = 0.0
    spread: float = 0.0
    release_avg: float = Field(default=0.0, alias="releaseAvg")
    release_sd: float = Field(default=0.0, alias="releaseSd")

    model_config = {"populate_by_name": True}

    def to_metrics(self) -> SessionMetrics:
        return SessionMetrics(**self.model_dump())


class MessageIn(BaseModel):
    role: Literal["user", "assistant"]
    content: str

    def to_message(self) -> ChatMessage:
        return ChatMessage(role=self.role, content=self.content)


class PatternRequest(BaseModel):
    attempts: list[AttemptIn] = Field(default_factory=list)


class InsightsRequest(BaseModel):
    metrics: MetricsIn = Field(default_factory=MetricsIn)
    attempts: list[AttemptIn] = Field(default_factory=list)
    sport: Optional[str] = None
    time_available: int = Field(default=30, gt=0)


class ChatRequestIn(BaseModel):
    message: str = Field(min_length=1)
    history: list[MessageIn] = Field(default_factory=list)
    metrics: MetricsIn = Field(default_factory=MetricsIn)
    sport: Optional[str] = None
    stream: bool = False


class SettingsUpdate(BaseModel):
    base_url: Optional[str] = None
    api_key: Optional[str] = None
    model: Optional[str] = None
