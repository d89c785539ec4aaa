"""Tier classification for A2AR, ASV and ACI."""

from typing import Sequence

from .models import A2ARResult, ACIResult, ASVResult, AttentionMetrics, MetricInput, ScanEvent
from .aggregator import aggregate
from .thresholds import (
    A2AR_BANDS,
    ACI_BANDS,
    ACI_MAX_SCORE,
    ACI_MIN_SCORE,
    ASV_BANDS,
    NO_DATA_LABEL,
)


def a2ar_rate(pause_opportunities: int, verified_engagements: int) -> float:
    """Return the conversion percentage, 0 when there were no opportunities."""
    if pause_opportunities == 0:
        return 0.0
    return 100.0 * verified_engagements / pause_opportunities


def classify_a2ar(pause_opportunities: int, verified_engagements: int) -> A2ARResult:
    """Classify the attention-to-action rate.

    Rates below the first band (including a window with no opportunities)
    and rates in the gaps between bands take the nearest lower tier, so
    the result is always at least tier 1 ``Low``.
    """
    rate = a2ar_rate(pause_opportunities, verified_engagements)

    band = A2AR_BANDS[0]
    for candidate in reversed(A2AR_BANDS):
        if rate >= candidate.min:
            band = candidate
            break

    return A2ARResult(
        tier=band.tier,
        label=band.label,
        value=rate,
        pause_opportunities=pause_opportunities,
        verified_engagements=verified_engagements,
    )


def classify_asv(durations_seconds: Sequence[float]) -> ASVResult:
    """Classify the mean scan velocity; faster scans earn higher tiers.

    A mean sitting exactly on a boundary belongs to the faster band
    (40s is Fair, 5s is Exceptional). No samples means no data.
    """
    count = len(durations_seconds)
    if count == 0:
        return ASVResult(tier=0, label=NO_DATA_LABEL, value=0.0, sample_count=0)

    mean = sum(durations_seconds) / count

    band = ASV_BANDS[-1]
    for candidate in ASV_BANDS[:-1]:
        if mean > candidate.min:
            band = candidate
            break

    return ASVResult(tier=band.tier, label=band.label, value=mean, sample_count=count)


def classify_aci(a2ar_tier: int, asv_tier: int) -> ACIResult:
    """Combine the A2AR and ASV tiers into the composite index."""
    if a2ar_tier <= 0 or asv_tier <= 0:
        return ACIResult(score=0.0, level=0, label=NO_DATA_LABEL)

    score = ((a2ar_tier + asv_tier) / 2) * 2
    score = max(ACI_MIN_SCORE, min(ACI_MAX_SCORE, score))

    band = ACI_BANDS[0]
    for candidate in reversed(ACI_BANDS):
        if score >= candidate.min:
            band = candidate
            break

    return ACIResult(score=score, level=band.tier, label=band.label)


def score_input(metric_input: MetricInput) -> AttentionMetrics:
    a2ar = classify_a2ar(metric_input.pause_opportunities, metric_input.verified_engagements)
    asv = classify_asv(metric_input.scan_durations_seconds)
    aci = classify_aci(a2ar.tier, asv.tier)
    return AttentionMetrics(a2ar=a2ar, asv=asv, aci=aci)


def score_events(events: Sequence[ScanEvent]) -> AttentionMetrics:
    return score_input(aggregate(events))


__all__ = [
    "a2ar_rate",
    "classify_a2ar",
    "classify_asv",
    "classify_aci",
    "score_input",
    "score_events",
]
