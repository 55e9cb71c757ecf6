#!/usr/bin/env python3
"""
Test data factories for nights, sensor series and providers.

Nights are described as consecutive (stage, minutes) segments starting at a
given timestamp, which keeps expected totals easy to compute by hand.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING
from unittest.mock import MagicMock

from sleep_metrics_engine.core.algorithms import NightTimeline
from sleep_metrics_engine.core.constants import StageLabel
from sleep_metrics_engine.core.dataclasses import SensorSample, SleepInterval

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from sleep_metrics_engine.core.constants import SensorKind

# Monday
BASE_DAY = date(2024, 1, 15)

# ============================================================================
# SEGMENT TEMPLATES
# ============================================================================

# 22:00 - 04:30: 6h asleep, 6.5h in bed, two awakenings
FRAGMENTED_NIGHT: tuple[tuple[StageLabel, int], ...] = (
    (StageLabel.IN_BED, 10),
    (StageLabel.LIGHT, 90),
    (StageLabel.DEEP, 60),
    (StageLabel.AWAKE, 10),
    (StageLabel.REM, 60),
    (StageLabel.LIGHT, 90),
    (StageLabel.AWAKE, 10),
    (StageLabel.LIGHT, 60),
)

# 00:30 - 07:30: 7h asleep, all intervals start on the same calendar day
SAME_DAY_NIGHT: tuple[tuple[StageLabel, int], ...] = (
    (StageLabel.LIGHT, 120),
    (StageLabel.DEEP, 60),
    (StageLabel.REM, 90),
    (StageLabel.LIGHT, 150),
)


# ============================================================================
# FACTORIES
# ============================================================================


def make_interval(start: datetime, minutes: float, stage: StageLabel) -> SleepInterval:
    """Create an interval lasting the given number of minutes."""
    return SleepInterval(start=start, duration=minutes * 60, stage=stage)


def make_segments(start: datetime, segments: Iterable[tuple[StageLabel, float]]) -> list[SleepInterval]:
    """Create back-to-back intervals from (stage, minutes) segments."""
    intervals = []
    cursor = start
    for stage, minutes in segments:
        intervals.append(make_interval(cursor, minutes, stage))
        cursor += timedelta(minutes=minutes)
    return intervals


def make_night(start: datetime, segments: Iterable[tuple[StageLabel, float]], day: date | None = None) -> NightTimeline:
    """Create a timeline of back-to-back segments, tied to the start date unless given."""
    return NightTimeline(make_segments(start, segments), day=day or start.date())


def make_week(
    end_day: date,
    segments: Sequence[tuple[StageLabel, float]] = SAME_DAY_NIGHT,
    hour: int = 0,
    minute: int = 30,
    days: int = 7,
) -> list[NightTimeline]:
    """Identical nights for each of `days` days ending at end_day, oldest first."""
    timelines = []
    for offset in range(days - 1, -1, -1):
        day = end_day - timedelta(days=offset)
        timelines.append(make_night(datetime(day.year, day.month, day.day, hour, minute), segments, day=day))
    return timelines


def make_samples(values: Iterable[tuple[datetime, float]]) -> list[SensorSample]:
    return [SensorSample(timestamp=timestamp, value=value) for timestamp, value in values]


def make_provider(
    intervals: Sequence[SleepInterval],
    samples: Mapping[SensorKind, Sequence[SensorSample]] | None = None,
) -> MagicMock:
    """Mock SampleProvider serving the given data filtered by the requested range."""
    series = samples or {}
    provider = MagicMock()
    provider.fetch_intervals.side_effect = lambda start, end: [interval for interval in intervals if start <= interval.start < end]
    provider.fetch_samples.side_effect = lambda kind, start, end: [
        sample for sample in series.get(kind, ()) if start <= sample.timestamp <= end
    ]
    return provider
