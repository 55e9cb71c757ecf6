"""
Sensor window reduction.

Averages auxiliary sensor series over the night's sleep window and computes
the day/night heart-rate dip.

The sleep window is (earliest start, latest end) over every interval that is
not AWAKE. A sample belongs to the window when its timestamp lies in
[window start, window end], both ends inclusive. Samples are not assumed to be
sorted.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

import numpy as np

from sleep_metrics_engine.core.constants import (
    DEFAULT_DAY_END_HOUR,
    DEFAULT_DAY_START_HOUR,
    SPO2_FRACTION_MAX,
    SensorKind,
)
from sleep_metrics_engine.core.validation import InputValidator

from .utils import safe_mean

if TYPE_CHECKING:
    from datetime import datetime

    from sleep_metrics_engine.core.dataclasses import SensorSample

    from .timeline import NightTimeline

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SensorAverages:
    """
    Per-sensor results for one night. None means unavailable.

    Attributes:
        heart_rate: Mean heart rate in the sleep window (bpm)
        hrv: Mean heart-rate variability in the sleep window (ms)
        spo2: Mean blood oxygen in the sleep window (percent)
        respiratory_rate: Mean respiratory rate in the sleep window (breaths/min)
        resting_heart_rate: Most recent resting heart rate of the day (bpm)
        heart_rate_dip: Day/night heart-rate dip (percent, never negative)

    """

    heart_rate: float | None = None
    hrv: float | None = None
    spo2: float | None = None
    respiratory_rate: float | None = None
    resting_heart_rate: float | None = None
    heart_rate_dip: float | None = None


def average_in_window(samples: Sequence[SensorSample], window: tuple[datetime, datetime] | None) -> float | None:
    """
    Mean of sample values whose timestamp falls inside the window.

    Args:
        samples: Sensor samples in any order
        window: (start, end) of the sleep window, or None when it cannot be determined

    Returns:
        The mean, or None if there is no window or no sample inside it

    """
    if window is None:
        return None
    start, end = window
    return safe_mean(sample.value for sample in samples if start <= sample.timestamp <= end)


def normalize_spo2(value: float) -> float:
    """Report blood oxygen as percent; values <= 1.0 are fractions."""
    if value <= SPO2_FRACTION_MAX:
        return value * 100
    return value


def latest_value(samples: Sequence[SensorSample]) -> float | None:
    """Value of the most recent sample, or None when there are none."""
    if not samples:
        return None
    return max(samples, key=lambda sample: sample.timestamp).value


def heart_rate_dip(
    samples: Sequence[SensorSample],
    day_start_hour: int = DEFAULT_DAY_START_HOUR,
    day_end_hour: int = DEFAULT_DAY_END_HOUR,
) -> float | None:
    """
    Percentage drop of night-time heart rate relative to day-time heart rate.

    Samples whose hour lies in [day_start_hour, day_end_hour) are "day", all
    others "night". The hour is read in each timestamp's own zone. dip = max(0, (avg_day - avg_night) / avg_day * 100).

    Args:
        samples: A full day of heart-rate samples
        day_start_hour: First hour of the day bucket (default 8)
        day_end_hour: Hour at which the day bucket ends (default 20)

    Returns:
        Dip in percent, or None if either bucket is empty or the day average is 0

    Example:
        With a day average of 60 bpm and a night average of 48 bpm the dip is
        20%. A night average above the day average reports 0%, not a negative dip.

    """
    InputValidator.validate_hour_range(day_start_hour, day_end_hour)

    hours = np.array([sample.timestamp.hour for sample in samples], dtype=np.int64)
    values = np.array([sample.value for sample in samples], dtype=np.float64)
    is_day = (hours >= day_start_hour) & (hours < day_end_hour)

    if not is_day.any() or is_day.all():
        logger.debug("Heart-rate dip unavailable: day=%d night=%d samples", int(is_day.sum()), int((~is_day).sum()))
        return None

    avg_day = float(values[is_day].mean())
    avg_night = float(values[~is_day].mean())
    if avg_day == 0:
        return None

    return max(0.0, (avg_day - avg_night) / avg_day * 100)


def reduce_sensors(
    timeline: NightTimeline,
    series: Mapping[SensorKind, Sequence[SensorSample]],
    day_start_hour: int = DEFAULT_DAY_START_HOUR,
    day_end_hour: int = DEFAULT_DAY_END_HOUR,
    day_heart_rate: Sequence[SensorSample] | None = None,
) -> SensorAverages:
    """
    Reduce every available sensor series for one night.

    The dip is computed from `day_heart_rate`, a full calendar day of
    heart-rate samples. Without it the heart-rate series in `series` is used
    for both the sleep-window average and the dip.

    Args:
        timeline: The night's stage timeline
        series: Samples per sensor kind; missing kinds are unavailable
        day_heart_rate: Calendar-day heart-rate samples for the dip

    Returns:
        SensorAverages with None for anything that cannot be computed

    """
    window = timeline.sleep_window()
    if window is None:
        logger.debug("No non-awake intervals for %s; sleep-window averages unavailable", timeline.day)

    heart_rate_samples = series.get(SensorKind.HEART_RATE, ())
    spo2_samples = [replace(sample, value=normalize_spo2(sample.value)) for sample in series.get(SensorKind.SPO2, ())]

    return SensorAverages(
        heart_rate=average_in_window(heart_rate_samples, window),
        hrv=average_in_window(series.get(SensorKind.HRV, ()), window),
        spo2=average_in_window(spo2_samples, window),
        respiratory_rate=average_in_window(series.get(SensorKind.RESPIRATORY_RATE, ()), window),
        resting_heart_rate=latest_value(series.get(SensorKind.RESTING_HEART_RATE, ())),
        heart_rate_dip=heart_rate_dip(
            heart_rate_samples if day_heart_rate is None else day_heart_rate,
            day_start_hour,
            day_end_hour,
        ),
    )
