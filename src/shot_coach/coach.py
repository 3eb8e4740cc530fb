"""Coaching requests built on top of the chat-completion client."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Union

from . import prompts
from .analytics import Attempt, PatternSignals, SessionMetrics, analyze_patterns
from .llm import BaseLLMClient, ChatEventStream, ChatMessage, ChatResponse

logger = logging.getLogger(__name__)


@dataclass
class CoachingReport:
    """Result of a full coaching run. Any text may be None when the model produced nothing."""
    insights: Optional[str]
    practice_plan: Optional[str]
    pattern_analysis: Optional[str]
    signals: PatternSignals


class CoachService:
    """Shapes coaching prompts and returns the model's text."""

    def __init__(self, client: BaseLLMClient, model: Optional[str] = None):
        self.client = client
        self.model = model

    async def check_connection(self) -> dict:
        """Connectivity check before committing to completion calls."""
        return await self.client.list_models()

    async def _ask(self, messages: list[ChatMessage]) -> Optional[str]:
        response = await self.client.complete(messages, model=self.model)
        return response.content

    async def insights(self, metrics: SessionMetrics, sport: str) -> Optional[str]:
        return await self._ask(prompts.coaching_insights_messages(metrics, sport))

    async def practice_plan(
        self,
        metrics: SessionMetrics,
        sport: str,
        time_available: int = 30,
    ) -> Optional[str]:
        return await self._ask(prompts.practice_plan_messages(metrics, sport, time_available))

    async def shot_pattern(self, attempts: Iterable[Attempt], sport: str) -> Optional[str]:
        return await self._ask(prompts.shot_pattern_messages(attempts, sport))

    async def full_report(
        self,
        metrics: SessionMetrics,
        attempts: Sequence[Attempt],
        sport: str,
        time_available: int = 30,
    ) -> CoachingReport:
        snapshot = tuple(attempts)
        await self.check_connection()

        logger.info("Requesting coaching report: sport=%s attempts=%d", sport, len(snapshot))
        insights, plan, pattern = await asyncio.gather(
            self.insights(metrics, sport),
            self.practice_plan(metrics, sport, time_available),
            self.shot_pattern(snapshot, sport),
        )
        return CoachingReport(
            insights=insights,
            practice_plan=plan,
            pattern_analysis=pattern,
            signals=analyze_patterns(snapshot),
        )

    async def chat(
        self,
        metrics: SessionMetrics,
        sport: str,
        history: Sequence[ChatMessage],
        user_message: str,
        stream: bool = False,
    ) -> Union[ChatResponse, ChatEventStream]:
        messages = prompts.chat_messages(metrics, sport, history, user_message)
        return await self.client.complete(messages, model=self.model, stream=stream)
