"""Attempt log and summary metric types."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Attempt:
    """One recorded practice attempt.

    x and y are the signed deviation from the target centre (right and up
    are positive), err the radial error magnitude and angle the release
    angle in degrees.
    """
    x: float
    y: float
    err: float
    hit: bool
    angle: float = 0.0

    def __post_init__(self):
        if self.err < 0:
            raise ValueError("Radial error cannot be negative")


@dataclass(frozen=True)
class SessionMetrics:
    """Summary statistics supplied alongside the attempt log."""
    total: int = 0
    makes: int = 0
    acc: float = 0.0          # percent
    mre: float = 0.0          # mean radial error, cm
    spread: float = 0.0       # cm
    release_avg: float = 0.0  # degrees
    release_sd: float = 0.0   # degrees


class Trend(Enum):
    IMPROVING = "Improving"
    DECLINING = "Declining"
    STABLE = "Stable"


@dataclass(frozen=True)
class PatternSignals:
    """Directional bias, trend and fatigue derived from an attempt log."""
    lr_bias: float
    ud_bias: float
    trend: Trend
    fatigue: bool

    def to_dict(self) -> dict:
        return {
            "lr_bias": self.lr_bias,
            "ud_bias": self.ud_bias,
            "trend": self.trend.value,
            "fatigue": self.fatigue,
        }
