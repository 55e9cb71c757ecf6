"""
Stage timeline model.

A NightTimeline is the canonical, immutable view of one calendar day's
stage-labelled intervals. Every other component queries it for per-stage
totals and for the bounds of intervals matching a stage predicate.

Durations are summed per stage exactly as reported. Overlapping intervals are
not merged, so overlapping time is counted once per interval; this keeps
historical values reproducible.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from datetime import date, datetime
from typing import Union

from sleep_metrics_engine.core.constants import NON_AWAKE_STAGES, StageLabel
from sleep_metrics_engine.core.dataclasses import SleepInterval

logger = logging.getLogger(__name__)

StagePredicate = Union[StageLabel, Iterable[StageLabel], Callable[[StageLabel], bool], None]


def _as_predicate(stages: StagePredicate) -> Callable[[StageLabel], bool]:
    """Normalize a stage, a collection of stages or a callable into a predicate."""
    if stages is None:
        return lambda _stage: True
    if isinstance(stages, StageLabel):
        return lambda stage: stage == stages
    if callable(stages):
        return stages
    wanted = frozenset(stages)
    return lambda stage: stage in wanted


class NightTimeline:
    """
    Immutable collection of one night's sleep intervals.

    Intervals are sorted ascending by start at construction (stable, so equal
    starts keep provider order). Queries on an empty timeline return 0 or None
    and never raise.

    Example:
        ```python
        timeline = NightTimeline(intervals, day=date(2024, 1, 15))
        asleep = timeline.total_duration(ASLEEP_STAGES)
        window = timeline.sleep_window()
        ```

    """

    __slots__ = ("_day", "_intervals")

    def __init__(self, intervals: Iterable[SleepInterval] = (), day: date | None = None) -> None:
        self._intervals: tuple[SleepInterval, ...] = tuple(sorted(intervals, key=lambda interval: interval.start))
        self._day = day
        logger.debug("Built timeline for %s with %d intervals", day, len(self._intervals))

    @property
    def day(self) -> date | None:
        """Calendar day this timeline was fetched for, if known."""
        return self._day

    @property
    def intervals(self) -> tuple[SleepInterval, ...]:
        """Intervals sorted ascending by start."""
        return self._intervals

    def __len__(self) -> int:
        return len(self._intervals)

    def __iter__(self) -> Iterator[SleepInterval]:
        return iter(self._intervals)

    def __bool__(self) -> bool:
        return bool(self._intervals)

    def __repr__(self) -> str:
        return f"NightTimeline(day={self._day!r}, intervals={len(self._intervals)})"

    def filter(self, stages: StagePredicate) -> tuple[SleepInterval, ...]:
        """Intervals whose stage matches, in start order."""
        predicate = _as_predicate(stages)
        return tuple(interval for interval in self._intervals if predicate(interval.stage))

    def total_duration(self, stages: StagePredicate = None) -> float:
        """Sum of durations in seconds over intervals whose stage matches."""
        return sum((interval.duration for interval in self.filter(stages)), 0.0)

    def earliest_start(self, stages: StagePredicate = None) -> datetime | None:
        """Earliest start among matching intervals, or None."""
        matching = self.filter(stages)
        if not matching:
            return None
        return min(interval.start for interval in matching)

    def latest_end(self, stages: StagePredicate = None) -> datetime | None:
        """Latest end among matching intervals, or None."""
        matching = self.filter(stages)
        if not matching:
            return None
        return max(interval.end for interval in matching)

    def bounds(self, stages: StagePredicate = None) -> tuple[datetime, datetime] | None:
        """(earliest start, latest end) among matching intervals, or None."""
        start = self.earliest_start(stages)
        end = self.latest_end(stages)
        if start is None or end is None:
            return None
        return start, end

    def first(self, stages: StagePredicate = None) -> SleepInterval | None:
        """First interval (by start) whose stage matches, or None."""
        matching = self.filter(stages)
        return matching[0] if matching else None

    def sleep_window(self) -> tuple[datetime, datetime] | None:
        """Bounds over every interval that is not AWAKE; None if there is none."""
        return self.bounds(NON_AWAKE_STAGES)
