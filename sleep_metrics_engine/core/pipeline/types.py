"""
Type definitions for the metrics pipeline.

SampleProvider is the only seam to the outside world: anything that can
return stage intervals and sensor samples for a time range (a health-data
store, a CSV export, a test double) can drive the pipeline.

NightInputs is the fully materialized input for one night, so the pipeline
can also run without a provider.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from datetime import date, datetime

    from sleep_metrics_engine.core.algorithms.timeline import NightTimeline
    from sleep_metrics_engine.core.constants import SensorKind
    from sleep_metrics_engine.core.dataclasses import SensorSample, SleepInterval


@runtime_checkable
class SampleProvider(Protocol):
    """
    Source of stage intervals and sensor samples.

    Both methods return lists, empty when there is no data, never None.
    Failures are raised as ordinary exceptions; the orchestrator wraps them.
    """

    def fetch_intervals(self, start: datetime, end: datetime) -> list[SleepInterval]:
        """Intervals whose start lies in [start, end)."""
        ...

    def fetch_samples(self, kind: SensorKind, start: datetime, end: datetime) -> list[SensorSample]:
        """Samples of one kind whose timestamp lies in [start, end]."""
        ...


@dataclass(frozen=True)
class NightInputs:
    """
    Everything needed to compute metrics for one night.

    Attributes:
        day: Calendar day the night belongs to
        timeline: That day's intervals
        window_timelines: One timeline per day of the trailing window,
            oldest first, ending with `day`
        sensors: Sleep-window samples per sensor kind
        day_heart_rate: Full calendar day of heart-rate samples for the dip;
            None falls back to the heart-rate series in `sensors`

    """

    day: date
    timeline: NightTimeline
    window_timelines: Sequence[NightTimeline] = ()
    sensors: Mapping[SensorKind, Sequence[SensorSample]] = field(default_factory=dict)
    day_heart_rate: Sequence[SensorSample] | None = None
