"""Shot-pattern analytics over an attempt log.

Every function here is pure: the log is copied into a tuple on entry and
nothing is cached between calls. An empty log is not an error; it yields
the neutral signals (no bias, Stable, no fatigue).
"""

from typing import Iterable

from .types import Attempt, PatternSignals, Trend

FATIGUE_WINDOW = 10
FATIGUE_THRESHOLD = 0.70


def hit_rate(attempts: Iterable[Attempt]) -> float:
    """Fraction of hits, 0.0 for an empty log."""
    snapshot = tuple(attempts)
    if not snapshot:
        return 0.0
    return sum(1 for a in snapshot if a.hit) / len(snapshot)


def mean_error(attempts: Iterable[Attempt]) -> float:
    """Mean radial error, 0.0 for an empty log."""
    snapshot = tuple(attempts)
    if not snapshot:
        return 0.0
    return sum(a.err for a in snapshot) / len(snapshot)


def _mean(values: tuple[float, ...]) -> float:
    return sum(values) / len(values) if values else 0.0


def compute_trend(attempts: Iterable[Attempt]) -> Trend:
    """Compare hit rates of the first and second half of the log.

    The split is at n // 2, so an odd-length log puts the extra attempt in
    the second half. With fewer than two attempts one half is empty and
    the trend is Stable.
    """
    snapshot = tuple(attempts)
    middle = len(snapshot) // 2
    first, second = snapshot[:middle], snapshot[middle:]
    if not first or not second:
        return Trend.STABLE

    first_rate, second_rate = hit_rate(first), hit_rate(second)
    if second_rate > first_rate:
        return Trend.IMPROVING
    if second_rate < first_rate:
        return Trend.DECLINING
    return Trend.STABLE


def detect_fatigue(attempts: Iterable[Attempt]) -> bool:
    """True when the hit rate over the last ten attempts drops below 70%."""
    recent = tuple(attempts)[-FATIGUE_WINDOW:]
    if not recent:
        return False
    return hit_rate(recent) < FATIGUE_THRESHOLD


def analyze_patterns(attempts: Iterable[Attempt]) -> PatternSignals:
    snapshot = tuple(attempts)
    return PatternSignals(
        lr_bias=_mean(tuple(a.x for a in snapshot)),
        ud_bias=_mean(tuple(a.y for a in snapshot)),
        trend=compute_trend(snapshot),
        fatigue=detect_fatigue(snapshot),
    )
