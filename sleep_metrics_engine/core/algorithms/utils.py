"""
Shared utility functions for the metric algorithms.

Interval overlap, time-of-day arithmetic and guarded averaging used by more
than one component live here to avoid duplicated edge-case handling.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from sleep_metrics_engine.core.constants import MINUTES_PER_DAY

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import datetime, time


def overlap_seconds(start1: datetime, end1: datetime, start2: datetime, end2: datetime) -> float:
    """
    Overlap of two time windows in seconds.

    overlap = max(0, min(end1, end2) - max(start1, start2))

    Example:
        >>> from datetime import datetime
        >>> overlap_seconds(
        ...     datetime(2024, 1, 1, 22, 0), datetime(2024, 1, 1, 22, 10),
        ...     datetime(2024, 1, 1, 22, 5), datetime(2024, 1, 1, 22, 20),
        ... )
        300.0

    """
    return max(0.0, (min(end1, end2) - max(start1, start2)).total_seconds())


def minute_of_day(value: datetime | time) -> int:
    """Whole minutes since midnight in the value's own zone (0-1439)."""
    return value.hour * 60 + value.minute


def circular_minute_difference(first: float, second: float) -> float:
    """
    Shortest distance between two minute-of-day values, wrapping at midnight.

    Example:
        >>> circular_minute_difference(23 * 60 + 50, 10)
        20

    """
    diff = abs(first - second) % MINUTES_PER_DAY
    return min(diff, MINUTES_PER_DAY - diff)


def safe_mean(values: Iterable[float]) -> float | None:
    """Arithmetic mean, or None when there are no values."""
    array = np.fromiter(values, dtype=np.float64)
    if array.size == 0:
        return None
    return float(array.mean())


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp value to [lower, upper]."""
    return max(lower, min(upper, value))
