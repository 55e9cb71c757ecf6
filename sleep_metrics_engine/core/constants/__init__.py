"""
Constants for the Sleep Metrics Engine.

The constants are organized into domain-specific modules:
- stages: Sleep stage labels, stage groupings and sensor kinds
- metrics: Numeric defaults for metric derivation

All constants are re-exported from this __init__.py:

    from sleep_metrics_engine.core.constants import StageLabel, ASLEEP_STAGES
"""

from .metrics import (
    DEFAULT_CONSISTENCY_TOLERANCE_MINUTES,
    DEFAULT_DAY_END_HOUR,
    DEFAULT_DAY_START_HOUR,
    DEFAULT_EPOCH_SECONDS,
    DEFAULT_SLEEP_TARGET_HOURS,
    DEFAULT_WINDOW_DAYS,
    MIN_ONSETS_FOR_CONSISTENCY,
    MINUTES_PER_DAY,
    QUALITY_SCORE_MAX,
    QUALITY_SCORE_MIN,
    SECONDS_PER_HOUR,
    SECONDS_PER_MINUTE,
    SPO2_FRACTION_MAX,
    WEEKEND_ISO_WEEKDAYS,
)
from .stages import (
    ASLEEP_STAGES,
    DISTRIBUTION_STAGES,
    IN_BED_OR_ASLEEP_STAGES,
    NON_AWAKE_STAGES,
    SLEEP_WINDOW_SENSORS,
    SensorKind,
    StageLabel,
)

__all__ = [
    "ASLEEP_STAGES",
    "DEFAULT_CONSISTENCY_TOLERANCE_MINUTES",
    "DEFAULT_DAY_END_HOUR",
    "DEFAULT_DAY_START_HOUR",
    "DEFAULT_EPOCH_SECONDS",
    "DEFAULT_SLEEP_TARGET_HOURS",
    "DEFAULT_WINDOW_DAYS",
    "DISTRIBUTION_STAGES",
    "IN_BED_OR_ASLEEP_STAGES",
    "MINUTES_PER_DAY",
    "MIN_ONSETS_FOR_CONSISTENCY",
    "NON_AWAKE_STAGES",
    "QUALITY_SCORE_MAX",
    "QUALITY_SCORE_MIN",
    "SECONDS_PER_HOUR",
    "SECONDS_PER_MINUTE",
    "SLEEP_WINDOW_SENSORS",
    "SPO2_FRACTION_MAX",
    "WEEKEND_ISO_WEEKDAYS",
    "SensorKind",
    "StageLabel",
]
