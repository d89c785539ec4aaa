"""Collapse scan events from one window into classifier inputs."""

from typing import Iterable

from .models import MetricInput, ScanEvent


def aggregate(events: Iterable[ScanEvent]) -> MetricInput:
    """Count opportunities and engagements and collect reported durations.

    Events without a duration are left out of the duration samples rather
    than counted as zero; a reported duration of 0 is kept.
    """
    pause_opportunities = 0
    verified_engagements = 0
    durations = []

    for event in events:
        pause_opportunities += 1
        if event.converted is True:
            verified_engagements += 1
        if event.scan_to_action_seconds is not None:
            durations.append(float(event.scan_to_action_seconds))

    return MetricInput(
        pause_opportunities=pause_opportunities,
        verified_engagements=verified_engagements,
        scan_durations_seconds=tuple(durations),
    )


__all__ = ["aggregate"]
