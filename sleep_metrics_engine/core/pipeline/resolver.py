"""
Day-boundary resolution.

A night is recorded under the day it started, so early in the morning "today"
usually has no intervals yet. Requests for today fall back to yesterday,
exactly once. Any other empty day stays empty.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING

from sleep_metrics_engine.utils.date_range import previous_day

if TYPE_CHECKING:
    from collections.abc import Callable

    from sleep_metrics_engine.core.algorithms.timeline import NightTimeline

logger = logging.getLogger(__name__)


class DayBoundaryResolver:
    """
    Pick the day whose data answers a request.

    Args:
        load_timeline: Returns the timeline for a calendar day
        clock: Returns the current date; defaults to date.today

    Example:
        ```python
        resolver = DayBoundaryResolver(orchestrator.load_timeline)
        timeline = resolver.resolve(date.today())
        if timeline is None:
            ...  # nothing recorded for today or last night
        ```

    """

    def __init__(self, load_timeline: Callable[[date], NightTimeline], clock: Callable[[], date] | None = None) -> None:
        self._load_timeline = load_timeline
        self._clock = clock or date.today

    def resolve(self, day: date, today: date | None = None) -> NightTimeline | None:
        """
        Timeline to compute metrics from, or None when there is none.

        Args:
            day: Requested calendar day
            today: Current date; the clock is asked when omitted

        Returns:
            The requested day's timeline if it has intervals, yesterday's when
            `day` is today and today is empty, otherwise None

        """
        timeline = self._load_timeline(day)
        if timeline:
            return timeline

        today = today if today is not None else self._clock()
        if day != today:
            logger.debug("No intervals for %s", day)
            return None

        yesterday = previous_day(day)
        logger.info("No intervals yet for today (%s); using %s", day, yesterday)
        fallback = self._load_timeline(yesterday)
        if fallback:
            return fallback

        logger.debug("No intervals for %s either", yesterday)
        return None
