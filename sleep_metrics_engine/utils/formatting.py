#!/usr/bin/env python3
"""
Display formatting for metrics results.

Unavailable values render as "N/A". Precision follows the dashboard cards:
durations as "7h 05m", efficiency and SpO2 to one decimal, stage percentages,
consistency, dip, heart rate and HRV as whole numbers.

Also builds the content of the daily sleep-quality notification; delivering
it is the caller's job.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import time

    from sleep_metrics_engine.core.dataclasses_metrics import MetricsResult

NOT_AVAILABLE = "N/A"

NOTIFICATION_TITLE = "Your Sleep Quality Score"
NOTIFICATION_CATEGORY = "sleepQualityCategory"
NOTIFICATION_IDENTIFIER = "sleepQualityNotification"


def format_duration(seconds: float | None) -> str:
    """Format seconds as "Xh MMm" (e.g. "7h 05m")."""
    if seconds is None:
        return NOT_AVAILABLE
    whole = int(seconds)
    return f"{whole // 3600}h {whole % 3600 // 60:02d}m"


def format_percentage(value: float | None, decimals: int = 0) -> str:
    """Format a percentage, e.g. "88.2%"."""
    if value is None:
        return NOT_AVAILABLE
    return f"{value:.{decimals}f}%"


def format_measurement(value: float | None, unit: str, decimals: int = 0) -> str:
    """Format a value with its unit, e.g. "55 ms"."""
    if value is None:
        return NOT_AVAILABLE
    return f"{value:.{decimals}f} {unit}"


def format_time_of_day(value: time | None) -> str:
    """Format a time of day as "HH:MM"."""
    if value is None:
        return NOT_AVAILABLE
    return f"{value.hour:02d}:{value.minute:02d}"


def format_count(value: int | None) -> str:
    if value is None:
        return NOT_AVAILABLE
    return str(value)


def to_display_dict(result: MetricsResult) -> dict[str, str]:
    """Render every scalar metric of a result as display text."""
    return {
        "total_sleep": format_duration(result.asleep_seconds),
        "light_sleep": format_duration(result.light_seconds),
        "deep_sleep": format_duration(result.deep_seconds),
        "rem_sleep": format_duration(result.rem_seconds),
        "light_percentage": format_percentage(result.light_percentage),
        "deep_percentage": format_percentage(result.deep_percentage),
        "rem_percentage": format_percentage(result.rem_percentage),
        "time_in_bed": format_duration(result.time_in_bed_seconds),
        "sleep_efficiency": format_percentage(result.sleep_efficiency, 1),
        "sleep_onset": format_time_of_day(result.onset_time),
        "interruptions": format_count(result.interruptions),
        "transitions": format_count(result.transitions),
        "sleep_consistency": format_percentage(result.sleep_consistency),
        "sleep_debt": format_measurement(result.sleep_debt_hours, "hrs", 1),
        "sleep_regularity": format_percentage(result.sleep_regularity, 1),
        "social_jet_lag": format_measurement(result.social_jet_lag_hours, "hrs", 1),
        "heart_rate_dip": format_percentage(result.heart_rate_dip),
        "average_sleeping_heart_rate": format_measurement(result.average_sleeping_heart_rate, "bpm"),
        "average_sleeping_hrv": format_measurement(result.average_sleeping_hrv, "ms"),
        "average_sleeping_spo2": format_percentage(result.average_sleeping_spo2, 1),
        "average_respiratory_rate": format_measurement(result.average_respiratory_rate, "b/min", 1),
        "resting_heart_rate": format_measurement(result.resting_heart_rate, "bpm"),
        "quality_score": format_count(result.quality_score),
    }


@dataclass(frozen=True)
class QualityNotification:
    """Content of the daily sleep-quality notification."""

    title: str
    body: str
    category: str = NOTIFICATION_CATEGORY
    identifier: str = NOTIFICATION_IDENTIFIER


def build_quality_notification(score: int | None) -> QualityNotification | None:
    """Notification content for a score; None when there is no score to report."""
    if score is None:
        return None
    return QualityNotification(
        title=NOTIFICATION_TITLE,
        body=f"Last night's sleep quality score is {score} out of 100.",
    )
