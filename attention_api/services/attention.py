"""Business logic for attention metric operations."""
from __future__ import annotations

from collections import defaultdict
from datetime import date, datetime, time, timedelta
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from attention_metrics import AttentionMetrics, ScanEvent, reference_tables, score_events
from attention_metrics.scoring import a2ar_rate

from ..logging_config import get_logger
from ..models import (
    AttentionMetricsResponse,
    DailyEntry,
    DailyResponse,
    IpMetricsResponse,
    ProgramBreakdownResponse,
    ProgramMetrics,
    PublisherBreakdownResponse,
    PublisherMetrics,
    TierTablesResponse,
)
from ..repositories.scans import fetch_scans

log = get_logger(__name__)

Row = Mapping[str, object]

UNKNOWN_PROGRAM = "N/A"
DIRECT_PUBLISHER = "Direct"


def window_start(days: int, now: Optional[datetime] = None) -> datetime:
    """Return midnight ``days`` days before ``now`` as an aware datetime.

    A naive ``now`` (the default) is read as local wall-clock time, and the
    result carries the local UTC offset in effect on the start day rather than
    today's offset.
    """

    current = now if now is not None else datetime.now()
    start_day = current.date() - timedelta(days=days)
    if current.tzinfo is None:
        return datetime.combine(start_day, time.min).astimezone()
    return datetime.combine(start_day, time.min, tzinfo=current.tzinfo)


def row_to_event(row: Row) -> ScanEvent:
    seconds = row.get("asv_seconds")
    return ScanEvent(
        converted=row.get("conversion") is True,
        scan_to_action_seconds=float(seconds) if seconds is not None else None,
    )


def to_response(metrics: AttentionMetrics) -> AttentionMetricsResponse:
    return AttentionMetricsResponse.model_validate(metrics.to_dict())


def _score_rows(rows: Sequence[Row]) -> AttentionMetrics:
    return score_events([row_to_event(row) for row in rows])


def _group_rows(rows: Sequence[Row], key: Callable[[Row], str]) -> Dict[str, List[Row]]:
    groups: Dict[str, List[Row]] = defaultdict(list)
    for row in rows:
        groups[key(row)].append(row)
    return groups


def _program_of(row: Row) -> str:
    return str(row.get("program") or UNKNOWN_PROGRAM)


def _publisher_of(row: Row) -> str:
    return str(row.get("publisher") or DIRECT_PUBLISHER)


def _scored_groups(rows: Sequence[Row], key: Callable[[Row], str]) -> List[Tuple[str, AttentionMetrics]]:
    scored = [(name, _score_rows(group)) for name, group in _group_rows(rows, key).items()]
    scored.sort(key=lambda item: (-item[1].a2ar.pause_opportunities, item[0]))
    return scored


def get_summary(days: int) -> Optional[AttentionMetricsResponse]:
    """Return attention metrics over every scan in the window."""

    rows = fetch_scans(window_start(days))
    if rows is None:
        log.warning("Scan fetch failed for %d day summary", days)
        return None

    if not rows:
        log.info("No scans in the last %d days; returning empty metrics", days)

    metrics = _score_rows(rows)
    log.info(
        "Summary over %d days: opportunities=%d engagements=%d asv_samples=%d aci=%s",
        days,
        metrics.a2ar.pause_opportunities,
        metrics.a2ar.verified_engagements,
        metrics.asv.sample_count,
        metrics.aci.label,
    )
    return to_response(metrics)


def get_program_breakdown(days: int) -> Optional[ProgramBreakdownResponse]:
    """Return attention metrics per program, busiest first."""

    rows = fetch_scans(window_start(days))
    if rows is None:
        log.warning("Scan fetch failed for %d day program breakdown", days)
        return None

    programs = [
        ProgramMetrics.model_validate({"program": name, **metrics.to_dict()})
        for name, metrics in _scored_groups(rows, _program_of)
    ]
    log.info("Scored %d programs over %d days", len(programs), days)
    return ProgramBreakdownResponse(programs=programs)


def get_publisher_breakdown(days: int) -> Optional[PublisherBreakdownResponse]:
    """Return attention metrics per publisher, busiest first."""

    rows = fetch_scans(window_start(days))
    if rows is None:
        log.warning("Scan fetch failed for %d day publisher breakdown", days)
        return None

    publishers = [
        PublisherMetrics.model_validate({"publisher": name, **metrics.to_dict()})
        for name, metrics in _scored_groups(rows, _publisher_of)
    ]
    log.info("Scored %d publishers over %d days", len(publishers), days)
    return PublisherBreakdownResponse(publishers=publishers)


def _scan_day(row: Row) -> date:
    created_at = row["created_at"]
    if isinstance(created_at, datetime):
        return created_at.astimezone().date() if created_at.tzinfo else created_at.date()
    if isinstance(created_at, date):
        return created_at
    return datetime.fromisoformat(str(created_at)).date()


def get_daily(days: int) -> Optional[DailyResponse]:
    """Return per-day opportunity and conversion counts with the A2AR rate."""

    rows = fetch_scans(window_start(days))
    if rows is None:
        log.warning("Scan fetch failed for %d day daily series", days)
        return None

    counts: Dict[date, List[int]] = defaultdict(lambda: [0, 0])
    for row in rows:
        bucket = counts[_scan_day(row)]
        bucket[0] += 1
        if row.get("conversion") is True:
            bucket[1] += 1

    daily = [
        DailyEntry(
            date=day,
            pause_opportunities=opportunities,
            verified_conversions=conversions,
            a2ar=round(a2ar_rate(opportunities, conversions), 2),
        )
        for day, (opportunities, conversions) in sorted(counts.items())
    ]
    return DailyResponse(daily=daily)


def get_ip_metrics(ip: str, days: int) -> Optional[IpMetricsResponse]:
    """Return attention metrics for scans from a single IP address."""

    rows = fetch_scans(window_start(days), ip=ip)
    if rows is None:
        log.warning("Scan fetch failed for IP '%s'", ip)
        return None

    log.info("Scoring %d scans for IP '%s'", len(rows), ip)
    return IpMetricsResponse(ip=ip, metrics=to_response(_score_rows(rows)))


def get_tier_tables() -> TierTablesResponse:
    return TierTablesResponse.model_validate(reference_tables())
