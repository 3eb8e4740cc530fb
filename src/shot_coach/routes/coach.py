"""Coaching report and shot-pattern endpoints."""

import logging

from fastapi import APIRouter, Depends

from ..analytics import analyze_patterns
from ..coach import CoachService
from ..config import settings
from ..fallback import demo_insights
from ..llm import CoachError
from .deps import get_coach
from .schemas import InsightsRequest, PatternRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/coach", tags=["coach"])


@router.post("/patterns")
async def shot_patterns(body: PatternRequest):
    """Bias, trend and fatigue signals for an attempt log. No model call."""
    signals = analyze_patterns(a.to_attempt() for a in body.attempts)
    return signals.to_dict()


@router.post("/insights")
async def coaching_insights(body: InsightsRequest, coach: CoachService = Depends(get_coach)):
    sport = body.sport or settings.default_sport
    metrics = body.metrics.to_metrics()
    attempts = [a.to_attempt() for a in body.attempts]

    try:
        report = await coach.full_report(metrics, attempts, sport, body.time_available)
    except CoachError as e:
        logger.warning("Coaching report failed, serving demo insights: %s", e)
        return {
            "fallback": True,
            "error": str(e),
            "insights": demo_insights(metrics, sport),
            "practice_plan": None,
            "pattern_analysis": None,
            "signals": analyze_patterns(attempts).to_dict(),
        }

    return {
        "fallback": False,
        "insights": report.insights,
        "practice_plan": report.practice_plan,
        "pattern_analysis": report.pattern_analysis,
        "signals": report.signals.to_dict(),
    }
