"""
Multi-night regularity analysis.

Computes cross-night metrics over a trailing window of calendar days (seven
by default) ending at the reference date:

    - Onset consistency: how close each night's sleep onset lies to the first
      night's onset, on a 24-hour clock
    - Sleep Regularity Index (SRI): percentage agreement of the per-minute
      asleep/awake state across every pair of days
    - Sleep debt: cumulative shortfall against the nightly sleep target
    - Social jet lag: distance between the average sleep midpoint on weekdays
      and on weekends

Timelines are passed in chronological order, one per calendar day, empty
timelines included. A day with no data still counts in the SRI (all minutes
awake) and in the sleep debt (nothing slept).

Reference:
    Phillips AJK, et al. (2017). Irregular sleep/wake patterns are associated
    with poorer academic performance and delayed circadian and sleep/wake
    timing. Scientific Reports, 7:3216.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from itertools import combinations
from typing import TYPE_CHECKING

import numpy as np

from sleep_metrics_engine.core.constants import (
    ASLEEP_STAGES,
    DEFAULT_CONSISTENCY_TOLERANCE_MINUTES,
    DEFAULT_SLEEP_TARGET_HOURS,
    MIN_ONSETS_FOR_CONSISTENCY,
    MINUTES_PER_DAY,
    SECONDS_PER_HOUR,
    SECONDS_PER_MINUTE,
    WEEKEND_ISO_WEEKDAYS,
)

from .utils import circular_minute_difference, clamp, minute_of_day, safe_mean

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import date

    from .timeline import NightTimeline

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegularityMetrics:
    """
    Cross-night metrics for a trailing window. None means unavailable.

    Attributes:
        onset_consistency: 0-100, 100 when every onset matches the first one
        sleep_regularity: SRI, 0-100
        sleep_debt_hours: Signed; positive is debt, negative is surplus
        social_jet_lag_hours: Absolute weekday/weekend midpoint distance
        days_in_window: Number of calendar days analyzed
        days_with_sleep: Days with at least one asleep interval

    """

    onset_consistency: float | None
    sleep_regularity: float | None
    sleep_debt_hours: float | None
    social_jet_lag_hours: float | None
    days_in_window: int = 0
    days_with_sleep: int = 0


def _calendar_day(timeline: NightTimeline) -> date | None:
    """The timeline's day, or the date of its first interval when unset."""
    if timeline.day is not None:
        return timeline.day
    first = timeline.first()
    return first.start.date() if first is not None else None


def onset_consistency(
    timelines: Sequence[NightTimeline],
    tolerance_minutes: float = DEFAULT_CONSISTENCY_TOLERANCE_MINUTES,
) -> float | None:
    """
    Score how regular sleep onset is across nights.

    The chronologically first onset is the reference. For every other onset the
    circular time-of-day distance min(|d|, 1440 - |d|) in minutes is taken;
    score = 100 - avg_distance / tolerance * 100, clamped to [0, 100].

    Args:
        timelines: One timeline per day
        tolerance_minutes: Average distance that scores 0 (default 30)

    Returns:
        Score in [0, 100], or None with fewer than two onsets

    """
    onsets = sorted(first.start for timeline in timelines if (first := timeline.first(ASLEEP_STAGES)) is not None)
    if len(onsets) < MIN_ONSETS_FOR_CONSISTENCY:
        return None

    reference = minute_of_day(onsets[0])
    differences = [circular_minute_difference(reference, minute_of_day(onset)) for onset in onsets[1:]]
    average_difference = sum(differences) / len(differences)

    score = 100 - average_difference / tolerance_minutes * 100
    return clamp(score, 0.0, 100.0)


def sleep_bitmap(timelines: Sequence[NightTimeline]) -> np.ndarray:
    """
    Per-minute asleep bitmap, shape (days, 1440).

    An asleep interval marks int(duration / 60) minutes starting at its start
    minute of day. Coverage past midnight continues into the next day's row and
    is dropped after the last day.
    """
    flat = np.zeros(len(timelines) * MINUTES_PER_DAY, dtype=bool)
    for day_index, timeline in enumerate(timelines):
        for interval in timeline.filter(ASLEEP_STAGES):
            start = day_index * MINUTES_PER_DAY + minute_of_day(interval.start)
            length = int(interval.duration // SECONDS_PER_MINUTE)
            flat[start : start + length] = True
    return flat.reshape(len(timelines), MINUTES_PER_DAY)


def regularity_index_from_bitmap(bitmap: np.ndarray) -> float | None:
    """
    Sleep Regularity Index from a (days, 1440) boolean bitmap.

    SRI = agreements / comparisons * 100 over every unordered pair of days and
    every minute. Returns None with fewer than two days or no asleep minute.
    A window with no sleep at all would otherwise score 100 (every minute
    agrees on "awake"); it is reported as unavailable instead.
    """
    days = bitmap.shape[0]
    if days < 2 or not bitmap.any():
        return None

    agreements = 0
    comparisons = 0
    for first, second in combinations(range(days), 2):
        agreements += int(np.count_nonzero(bitmap[first] == bitmap[second]))
        comparisons += bitmap.shape[1]

    return agreements / comparisons * 100


def sleep_regularity_index(timelines: Sequence[NightTimeline]) -> float | None:
    """Sleep Regularity Index for consecutive days of timelines."""
    return regularity_index_from_bitmap(sleep_bitmap(timelines))


def sleep_debt_hours(
    timelines: Sequence[NightTimeline],
    target_hours: float = DEFAULT_SLEEP_TARGET_HOURS,
) -> float | None:
    """
    Signed sleep debt in hours: sum over days of (target - asleep).

    Returns None only for an empty window.
    """
    if not timelines:
        return None
    target_seconds = target_hours * SECONDS_PER_HOUR
    debt_seconds = sum(target_seconds - timeline.total_duration(ASLEEP_STAGES) for timeline in timelines)
    return debt_seconds / SECONDS_PER_HOUR


def social_jet_lag_hours(timelines: Sequence[NightTimeline], strict: bool = False) -> float | None:
    """
    Absolute difference between weekday and weekend sleep midpoints, in hours.

    Each day's midpoint is the middle of its sleep window in epoch seconds.
    Monday to Friday are weekdays. An empty bucket averages to 0, which yields
    a very large value when only one bucket has data; pass strict=True to get
    None instead.

    Returns:
        Hours, or None when no day has a sleep window (or, in strict mode, when
        either bucket is empty). With both buckets empty the zero-midpoint rule
        would give 0.0; that is reported as unavailable instead

    """
    weekday_midpoints: list[float] = []
    weekend_midpoints: list[float] = []

    for timeline in timelines:
        window = timeline.sleep_window()
        day = _calendar_day(timeline)
        if window is None or day is None:
            continue
        start, end = window
        midpoint = start.timestamp() + (end.timestamp() - start.timestamp()) / 2
        if day.isoweekday() in WEEKEND_ISO_WEEKDAYS:
            weekend_midpoints.append(midpoint)
        else:
            weekday_midpoints.append(midpoint)

    if not weekday_midpoints and not weekend_midpoints:
        return None

    if not weekday_midpoints or not weekend_midpoints:
        if strict:
            return None
        logger.warning(
            "Social jet lag computed with an empty %s bucket; value is not meaningful",
            "weekday" if not weekday_midpoints else "weekend",
        )

    weekday_average = safe_mean(weekday_midpoints)
    weekend_average = safe_mean(weekend_midpoints)
    weekday_average = weekday_average if weekday_average is not None else 0.0
    weekend_average = weekend_average if weekend_average is not None else 0.0

    return abs(weekday_average - weekend_average) / SECONDS_PER_HOUR


class RegularityAnalyzer:
    """
    Compute every cross-night metric for a trailing window.

    Example:
        ```python
        analyzer = RegularityAnalyzer(sleep_target_hours=8.0)
        metrics = analyzer.analyze(week_of_timelines)
        print(f"SRI: {metrics.sleep_regularity:.1f}%")
        ```

    """

    def __init__(
        self,
        sleep_target_hours: float = DEFAULT_SLEEP_TARGET_HOURS,
        consistency_tolerance_minutes: float = DEFAULT_CONSISTENCY_TOLERANCE_MINUTES,
        strict_social_jet_lag: bool = False,
    ) -> None:
        self.sleep_target_hours = sleep_target_hours
        self.consistency_tolerance_minutes = consistency_tolerance_minutes
        self.strict_social_jet_lag = strict_social_jet_lag

    def analyze(self, timelines: Sequence[NightTimeline]) -> RegularityMetrics:
        """
        Analyze consecutive days of timelines.

        Args:
            timelines: One timeline per calendar day in chronological order

        Returns:
            RegularityMetrics with None for anything that cannot be computed

        """
        days_with_sleep = sum(1 for timeline in timelines if timeline.first(ASLEEP_STAGES) is not None)
        logger.debug("Analyzing regularity over %d days (%d with sleep)", len(timelines), days_with_sleep)

        return RegularityMetrics(
            onset_consistency=onset_consistency(timelines, self.consistency_tolerance_minutes),
            sleep_regularity=sleep_regularity_index(timelines),
            sleep_debt_hours=sleep_debt_hours(timelines, self.sleep_target_hours),
            social_jet_lag_hours=social_jet_lag_hours(timelines, strict=self.strict_social_jet_lag),
            days_in_window=len(timelines),
            days_with_sleep=days_with_sleep,
        )


def analyze_regularity(timelines: Sequence[NightTimeline], **kwargs: float | bool) -> RegularityMetrics:
    """Convenience wrapper around RegularityAnalyzer.analyze."""
    return RegularityAnalyzer(**kwargs).analyze(timelines)
