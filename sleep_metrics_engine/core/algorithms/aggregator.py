"""
Single-night interval aggregation.

This module turns one night's stage timeline into duration and quality
metrics: per-stage durations and percentages, time in bed, sleep efficiency,
onset time, interruptions and stage transitions.

Terminology Glossary:
    Asleep duration:
        Sum of LIGHT, DEEP and REM interval durations. Overlapping intervals
        are summed, not merged.

    Time in bed:
        Bounding box of the night, latest end minus earliest start over IN_BED
        and asleep intervals. AWAKE intervals do not move the bounds but the
        time they cover inside the bounds is still part of time in bed.

    Interruption:
        An asleep interval directly followed (in start order) by an AWAKE
        interval. Waking up into sleep is not an interruption.

    Transition:
        Any adjacent pair of intervals whose stages differ.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from sleep_metrics_engine.core.constants import (
    ASLEEP_STAGES,
    DEFAULT_SLEEP_TARGET_HOURS,
    DISTRIBUTION_STAGES,
    IN_BED_OR_ASLEEP_STAGES,
    SECONDS_PER_HOUR,
    StageLabel,
)

if TYPE_CHECKING:
    from datetime import time

    from .timeline import NightTimeline

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NightAggregate:
    """
    Duration and quality metrics for one night.

    Attributes:
        # Durations (seconds)
        light_seconds: Total LIGHT duration
        deep_seconds: Total DEEP duration
        rem_seconds: Total REM duration
        awake_seconds: Total AWAKE duration
        asleep_seconds: LIGHT + DEEP + REM
        time_in_bed_seconds: Bounding box over IN_BED and asleep intervals (None without such intervals)

        # Percentages of asleep duration (None when nothing was slept)
        light_percentage: Rounded to nearest integer
        deep_percentage: Rounded to nearest integer
        rem_percentage: Rounded to nearest integer

        # Quality indices
        sleep_efficiency: asleep / time in bed * 100 (None if time in bed <= 0)
        onset_time: Time of day of the first asleep interval
        interruptions: Asleep -> AWAKE transitions
        transitions: Adjacent stage changes

        # Display helpers
        stage_distribution_hours: Hours per stage for AWAKE, LIGHT, DEEP and REM
        sleep_goal_progress: asleep / target clamped to [0, 1]
        interval_count: Number of intervals in the night

    """

    light_seconds: float
    deep_seconds: float
    rem_seconds: float
    awake_seconds: float
    asleep_seconds: float
    time_in_bed_seconds: float | None

    light_percentage: int | None
    deep_percentage: int | None
    rem_percentage: int | None

    sleep_efficiency: float | None
    onset_time: time | None
    interruptions: int
    transitions: int

    stage_distribution_hours: dict[StageLabel, float] = field(default_factory=dict)
    sleep_goal_progress: float = 0.0
    interval_count: int = 0

    @property
    def asleep_hours(self) -> float:
        """Asleep duration in hours."""
        return self.asleep_seconds / SECONDS_PER_HOUR


class IntervalAggregator:
    """
    Aggregate one night's timeline into NightAggregate metrics.

    Example:
        ```python
        aggregator = IntervalAggregator()
        aggregate = aggregator.aggregate(timeline)
        print(f"Sleep efficiency: {aggregate.sleep_efficiency:.1f}%")
        ```

    """

    def __init__(self, sleep_target_hours: float = DEFAULT_SLEEP_TARGET_HOURS) -> None:
        self.sleep_target_hours = sleep_target_hours

    def aggregate(self, timeline: NightTimeline) -> NightAggregate:
        """
        Calculate all single-night metrics.

        Args:
            timeline: The night's stage timeline (may be empty)

        Returns:
            NightAggregate; metrics that cannot be computed are None

        """
        light_seconds = timeline.total_duration(StageLabel.LIGHT)
        deep_seconds = timeline.total_duration(StageLabel.DEEP)
        rem_seconds = timeline.total_duration(StageLabel.REM)
        awake_seconds = timeline.total_duration(StageLabel.AWAKE)
        asleep_seconds = timeline.total_duration(ASLEEP_STAGES)

        time_in_bed_seconds = self._time_in_bed(timeline)

        sleep_efficiency = None
        if time_in_bed_seconds is not None and time_in_bed_seconds > 0:
            sleep_efficiency = asleep_seconds / time_in_bed_seconds * 100

        first_asleep = timeline.first(ASLEEP_STAGES)
        onset_time = first_asleep.start.time().replace(second=0, microsecond=0) if first_asleep else None

        aggregate = NightAggregate(
            light_seconds=light_seconds,
            deep_seconds=deep_seconds,
            rem_seconds=rem_seconds,
            awake_seconds=awake_seconds,
            asleep_seconds=asleep_seconds,
            time_in_bed_seconds=time_in_bed_seconds,
            light_percentage=self._percentage(light_seconds, asleep_seconds),
            deep_percentage=self._percentage(deep_seconds, asleep_seconds),
            rem_percentage=self._percentage(rem_seconds, asleep_seconds),
            sleep_efficiency=sleep_efficiency,
            onset_time=onset_time,
            interruptions=self._count_interruptions(timeline),
            transitions=self._count_transitions(timeline),
            stage_distribution_hours={stage: timeline.total_duration(stage) / SECONDS_PER_HOUR for stage in DISTRIBUTION_STAGES},
            sleep_goal_progress=self._goal_progress(asleep_seconds),
            interval_count=len(timeline),
        )

        logger.debug(
            "Aggregated night %s: asleep=%.0fs, tib=%s, efficiency=%s, interruptions=%d",
            timeline.day,
            asleep_seconds,
            time_in_bed_seconds,
            sleep_efficiency,
            aggregate.interruptions,
        )
        return aggregate

    def _time_in_bed(self, timeline: NightTimeline) -> float | None:
        """Latest end minus earliest start over IN_BED and asleep intervals."""
        bounds = timeline.bounds(IN_BED_OR_ASLEEP_STAGES)
        if bounds is None:
            return None
        start, end = bounds
        return (end - start).total_seconds()

    def _percentage(self, stage_seconds: float, asleep_seconds: float) -> int | None:
        """Stage share of asleep time, rounded to nearest integer."""
        if asleep_seconds <= 0:
            return None
        return round(stage_seconds / asleep_seconds * 100)

    def _goal_progress(self, asleep_seconds: float) -> float:
        """Fraction of the nightly sleep target reached, capped at 1.0."""
        target_seconds = self.sleep_target_hours * SECONDS_PER_HOUR
        if asleep_seconds <= 0 or target_seconds <= 0:
            return 0.0
        return min(asleep_seconds / target_seconds, 1.0)

    def _count_interruptions(self, timeline: NightTimeline) -> int:
        """
        Count asleep -> AWAKE transitions.

        Args:
            timeline: Timeline with intervals sorted by start

        Returns:
            Number of interruptions

        """
        intervals = timeline.intervals
        return sum(
            1 for previous, current in zip(intervals, intervals[1:]) if previous.stage in ASLEEP_STAGES and current.stage == StageLabel.AWAKE
        )

    def _count_transitions(self, timeline: NightTimeline) -> int:
        """Count adjacent pairs whose stages differ."""
        intervals = timeline.intervals
        return sum(1 for previous, current in zip(intervals, intervals[1:]) if previous.stage != current.stage)


def aggregate_night(timeline: NightTimeline, sleep_target_hours: float = DEFAULT_SLEEP_TARGET_HOURS) -> NightAggregate:
    """Convenience wrapper around IntervalAggregator.aggregate."""
    return IntervalAggregator(sleep_target_hours=sleep_target_hours).aggregate(timeline)
