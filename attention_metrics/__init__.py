"""Attention metrics scoring engine (A2AR, ASV, ACI)."""

from .aggregator import aggregate
from .models import (
    A2ARResult,
    ACIResult,
    ASVResult,
    AttentionMetrics,
    MetricInput,
    ScanEvent,
    TierResult,
)
from .scoring import classify_a2ar, classify_aci, classify_asv, score_events, score_input
from .thresholds import reference_tables

__all__ = [
    "aggregate",
    "classify_a2ar",
    "classify_asv",
    "classify_aci",
    "score_events",
    "score_input",
    "reference_tables",
    "A2ARResult",
    "ACIResult",
    "ASVResult",
    "AttentionMetrics",
    "MetricInput",
    "ScanEvent",
    "TierResult",
]
