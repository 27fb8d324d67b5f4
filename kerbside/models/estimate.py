# kerbside/models/estimate.py
"""Estimation results. Produced fresh per request, never persisted."""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Optional

MIN_AVAILABILITY = 5.0
MAX_AVAILABILITY = 95.0


class Confidence(str, Enum):
    VERY_HIGH = "very_high"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class AvailabilityEstimate:
    availability_pct: float
    confidence: Confidence
    zones_analyzed: int = 0
    restriction_factor: float = 1.0
    strategy: Optional[str] = None     # which fallback stage produced it

    def to_dict(self) -> dict:
        data = asdict(self)
        data["confidence"] = self.confidence.value
        return data


@dataclass(frozen=True)
class StrategyOutcome:
    """Result of one fallback stage: an estimate, or the reason there isn't one."""
    strategy: str
    estimate: Optional[AvailabilityEstimate] = None
    reason: Optional[str] = None
    error: bool = False      # True when the stage raised, False when it had no data to work with

    @property
    def ok(self) -> bool:
        return self.estimate is not None

    @classmethod
    def success(cls, strategy: str, estimate: AvailabilityEstimate) -> "StrategyOutcome":
        return cls(strategy=strategy, estimate=estimate)

    @classmethod
    def skipped(cls, strategy: str, reason: str) -> "StrategyOutcome":
        return cls(strategy=strategy, reason=reason)

    @classmethod
    def failed(cls, strategy: str, reason: str) -> "StrategyOutcome":
        return cls(strategy=strategy, reason=reason, error=True)


def clamp_availability(value: float) -> float:
    return max(MIN_AVAILABILITY, min(MAX_AVAILABILITY, value))
