"""Value objects shared by the attention metrics engine."""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

PERCENT_DISPLAY_CAP = 100.0


@dataclass(frozen=True)
class Band:
    """One row of a threshold table."""

    tier: int
    label: str
    min: float
    max: Optional[float]
    description: str

    def as_row(self, rank_key: str = "tier") -> Dict[str, object]:
        return {
            rank_key: self.tier,
            "label": self.label,
            "min": self.min,
            "max": self.max,
            "description": self.description,
        }


@dataclass(frozen=True)
class ScanEvent:
    converted: bool
    scan_to_action_seconds: Optional[float] = None


@dataclass(frozen=True)
class MetricInput:
    """Counts for one aggregation window (a date range, a program, an IP...)."""

    pause_opportunities: int
    verified_engagements: int
    scan_durations_seconds: Tuple[float, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class TierResult:
    tier: int
    label: str
    value: float

    @property
    def display_value(self) -> float:
        return round(self.value, 2)


@dataclass(frozen=True)
class A2ARResult(TierResult):
    pause_opportunities: int
    verified_engagements: int

    @property
    def percentage(self) -> float:
        """Rate for display: two decimals, never above 100."""
        return round(min(self.value, PERCENT_DISPLAY_CAP), 2)

    def to_dict(self) -> Dict[str, object]:
        return {
            "pauseOpportunities": self.pause_opportunities,
            "qrDownloads": self.verified_engagements,
            "percentage": self.percentage,
            "tier": self.tier,
            "label": self.label,
        }


@dataclass(frozen=True)
class ASVResult(TierResult):
    sample_count: int

    def to_dict(self) -> Dict[str, object]:
        return {
            "averageSeconds": self.display_value,
            "tier": self.tier,
            "label": self.label,
        }


@dataclass(frozen=True)
class ACIResult:
    score: float
    level: int
    label: str

    def to_dict(self) -> Dict[str, object]:
        return {
            "score": round(self.score, 2),
            "level": self.level,
            "label": self.label,
        }


@dataclass(frozen=True)
class AttentionMetrics:
    a2ar: A2ARResult
    asv: ASVResult
    aci: ACIResult

    def to_dict(self) -> Dict[str, Dict[str, object]]:
        return {
            "a2ar": self.a2ar.to_dict(),
            "asv": self.asv.to_dict(),
            "aci": self.aci.to_dict(),
        }


__all__ = [
    "Band",
    "ScanEvent",
    "MetricInput",
    "TierResult",
    "A2ARResult",
    "ASVResult",
    "ACIResult",
    "AttentionMetrics",
]
