#!/usr/bin/env python3
"""
Centralized date range calculation utilities.

This module is the single source of truth for the calendar-day windows the
pipeline fetches data for. A night belongs to the calendar day its samples
start on (midnight to midnight), and multi-night metrics use a trailing window
of consecutive days ending at the reference date.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import tzinfo


@dataclass(frozen=True)
class DateRange:
    """Immutable date range with start and end timestamps (end exclusive)."""

    start: datetime
    end: datetime

    @property
    def start_timestamp(self) -> float:
        """Get start as Unix timestamp."""
        return self.start.timestamp()

    @property
    def end_timestamp(self) -> float:
        """Get end as Unix timestamp."""
        return self.end.timestamp()

    @property
    def duration_hours(self) -> float:
        """Get duration in hours."""
        return (self.end - self.start).total_seconds() / 3600

    def contains(self, moment: datetime) -> bool:
        """True when moment lies in [start, end)."""
        return self.start <= moment < self.end


def get_day_range(target_date: date | datetime, tz: tzinfo | None = None) -> DateRange:
    """
    Get the midnight-to-midnight range for a calendar day.

    Args:
        target_date: The day (a datetime is truncated to its date)
        tz: Timezone for the range; None gives naive datetimes

    Returns:
        DateRange from 00:00 on the day to 00:00 the next day

    Example:
        >>> range = get_day_range(date(2024, 1, 15))
        >>> range.start, range.end
        (datetime.datetime(2024, 1, 15, 0, 0), datetime.datetime(2024, 1, 16, 0, 0))

    """
    if isinstance(target_date, datetime):
        target_date = target_date.date()
    start = datetime.combine(target_date, time.min, tzinfo=tz)
    return DateRange(start=start, end=start + timedelta(days=1))


def get_trailing_days(end_date: date, count: int) -> list[date]:
    """
    Consecutive calendar days ending at end_date, oldest first.

    Example:
        >>> get_trailing_days(date(2024, 1, 15), 3)
        [datetime.date(2024, 1, 13), datetime.date(2024, 1, 14), datetime.date(2024, 1, 15)]

    """
    return [end_date - timedelta(days=offset) for offset in range(count - 1, -1, -1)]


def get_trailing_range(end_date: date, count: int, tz: tzinfo | None = None) -> DateRange:
    """Range covering the trailing window of count days ending at end_date."""
    first_day = end_date - timedelta(days=count - 1)
    return DateRange(start=get_day_range(first_day, tz).start, end=get_day_range(end_date, tz).end)


def previous_day(target_date: date) -> date:
    """The calendar day before target_date."""
    return target_date - timedelta(days=1)
