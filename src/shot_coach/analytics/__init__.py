"""Attempt-log analytics."""

from .patterns import analyze_patterns, compute_trend, detect_fatigue, hit_rate, mean_error
from .types import Attempt, PatternSignals, SessionMetrics, Trend

__all__ = [
    "analyze_patterns",
    "compute_trend",
    "detect_fatigue",
    "hit_rate",
    "mean_error",
    "Attempt",
    "PatternSignals",
    "SessionMetrics",
    "Trend",
]
