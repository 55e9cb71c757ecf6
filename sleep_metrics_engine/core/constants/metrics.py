"""
Numeric constants for metric derivation.

Defaults for the configurable values live here so that the algorithm
functions can be called without settings; EngineSettings overrides them.
"""

SECONDS_PER_MINUTE: int = 60
SECONDS_PER_HOUR: int = 3600
MINUTES_PER_DAY: int = 1440

# Hypnogram
DEFAULT_EPOCH_SECONDS: int = 300

# Multi-night window
DEFAULT_WINDOW_DAYS: int = 7
DEFAULT_SLEEP_TARGET_HOURS: float = 8.0
DEFAULT_CONSISTENCY_TOLERANCE_MINUTES: float = 30.0
MIN_ONSETS_FOR_CONSISTENCY: int = 2

# Day/night heart-rate partition, local hour in [start, end) is "day"
DEFAULT_DAY_START_HOUR: int = 8
DEFAULT_DAY_END_HOUR: int = 20

# Weekend by date.isoweekday(): Saturday=6, Sunday=7
WEEKEND_ISO_WEEKDAYS: frozenset[int] = frozenset({6, 7})

# SpO2 values at or below this are fractions, not percentages
SPO2_FRACTION_MAX: float = 1.0

# Quality score bounds
QUALITY_SCORE_MIN: int = 0
QUALITY_SCORE_MAX: int = 100
