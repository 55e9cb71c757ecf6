"""
Stage and sensor constants for the Sleep Metrics Engine.

Contains the sleep stage label enum with its single display/source mapping
table, the stage groupings used by every metric, and the sensor kinds the
engine reduces.
"""

from __future__ import annotations

from enum import StrEnum


class StageLabel(StrEnum):
    """
    Pre-classified sleep stage of an interval.

    Display codes exist only for chart mapping and must never be used in
    comparisons; metric logic works with the labels and the stage groupings
    below.

    Attributes:
        IN_BED: In bed, not yet classified as asleep
        AWAKE: Awake during the night
        LIGHT: Light (core) sleep, also used for unspecified sleep
        DEEP: Deep (slow-wave) sleep
        REM: Rapid-eye-movement sleep

    """

    IN_BED = "in_bed"
    AWAKE = "awake"
    LIGHT = "light"
    DEEP = "deep"
    REM = "rem"

    @property
    def display_code(self) -> int:
        """Ordinal used by charts (0=In Bed ... 4=REM)."""
        return _STAGE_TABLE[self][0]

    def get_display_name(self) -> str:
        """Get human-readable display name."""
        return _STAGE_TABLE[self][1]

    @property
    def is_asleep(self) -> bool:
        """True for stages counted as sleep."""
        return self in ASLEEP_STAGES

    @classmethod
    def from_display_code(cls, code: int) -> StageLabel | None:
        """Inverse of display_code. Returns None for unknown codes."""
        for label, (display_code, _name, _source_values) in _STAGE_TABLE.items():
            if display_code == code:
                return label
        return None

    @classmethod
    def from_source_value(cls, value: int) -> StageLabel | None:
        """
        Map a platform sleep-analysis category value to a stage label.

        Category values: 0=inBed, 1=asleepUnspecified, 2=awake, 3=asleepCore,
        4=asleepDeep, 5=asleepREM. Unspecified sleep is treated as light sleep.

        Returns:
            The matching label, or None for values the engine does not know.
            Callers drop samples that map to None.

        """
        for label, (_display_code, _name, source_values) in _STAGE_TABLE.items():
            if value in source_values:
                return label
        return None


# label -> (display code, display name, platform category values)
_STAGE_TABLE: dict[StageLabel, tuple[int, str, tuple[int, ...]]] = {
    StageLabel.IN_BED: (0, "In Bed", (0,)),
    StageLabel.AWAKE: (1, "Awake", (2,)),
    StageLabel.LIGHT: (2, "Light", (1, 3)),
    StageLabel.DEEP: (3, "Deep", (4,)),
    StageLabel.REM: (4, "REM", (5,)),
}

ASLEEP_STAGES: frozenset[StageLabel] = frozenset({StageLabel.LIGHT, StageLabel.DEEP, StageLabel.REM})
IN_BED_OR_ASLEEP_STAGES: frozenset[StageLabel] = frozenset({StageLabel.IN_BED, *ASLEEP_STAGES})
NON_AWAKE_STAGES: frozenset[StageLabel] = frozenset(label for label in StageLabel if label != StageLabel.AWAKE)

# Order used by the stage distribution chart
DISTRIBUTION_STAGES: tuple[StageLabel, ...] = (StageLabel.AWAKE, StageLabel.LIGHT, StageLabel.DEEP, StageLabel.REM)


class SensorKind(StrEnum):
    """Auxiliary sensor series reduced over the sleep window."""

    HEART_RATE = "heart_rate"
    HRV = "hrv"
    SPO2 = "spo2"
    RESPIRATORY_RATE = "respiratory_rate"
    RESTING_HEART_RATE = "resting_heart_rate"

    @property
    def unit(self) -> str:
        """Unit the engine reports values in."""
        units = {
            SensorKind.HEART_RATE: "bpm",
            SensorKind.HRV: "ms",
            SensorKind.SPO2: "%",
            SensorKind.RESPIRATORY_RATE: "breaths/min",
            SensorKind.RESTING_HEART_RATE: "bpm",
        }
        return units[self]

    def get_display_name(self) -> str:
        """Get human-readable display name."""
        names = {
            SensorKind.HEART_RATE: "Heart Rate",
            SensorKind.HRV: "Heart Rate Variability",
            SensorKind.SPO2: "Blood Oxygen",
            SensorKind.RESPIRATORY_RATE: "Respiratory Rate",
            SensorKind.RESTING_HEART_RATE: "Resting Heart Rate",
        }
        return names[self]


# Kinds averaged over the sleep window
SLEEP_WINDOW_SENSORS: tuple[SensorKind, ...] = (
    SensorKind.HEART_RATE,
    SensorKind.HRV,
    SensorKind.SPO2,
    SensorKind.RESPIRATORY_RATE,
)
