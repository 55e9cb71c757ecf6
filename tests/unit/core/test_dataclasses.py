"""
Tests for the engine dataclasses and stage constants.

Tests construction-time validation of intervals and samples, the result
container and the stage label mappings.
"""

from __future__ import annotations

import math
from dataclasses import FrozenInstanceError
from datetime import date, datetime, time

import pytest

from sleep_metrics_engine.core.constants import ASLEEP_STAGES, NON_AWAKE_STAGES, SensorKind, StageLabel
from sleep_metrics_engine.core.dataclasses import HypnogramEpoch, SensorSample, SleepInterval
from sleep_metrics_engine.core.dataclasses_metrics import MetricsResult
from sleep_metrics_engine.core.exceptions import ErrorCodes, MalformedIntervalError, ValidationError

START = datetime(2024, 1, 15, 22, 0)


# ============================================================================
# Test SleepInterval
# ============================================================================


class TestSleepInterval:
    """Tests for SleepInterval validation and helpers."""

    def test_end_is_start_plus_duration(self) -> None:
        interval = SleepInterval(start=START, duration=5400, stage=StageLabel.DEEP)
        assert interval.end == datetime(2024, 1, 15, 23, 30)

    def test_stage_string_is_coerced(self) -> None:
        interval = SleepInterval(start=START, duration=60, stage="rem")
        assert interval.stage is StageLabel.REM

    def test_integer_duration_becomes_float(self) -> None:
        interval = SleepInterval(start=START, duration=60, stage=StageLabel.LIGHT)
        assert isinstance(interval.duration, float)

    def test_zero_duration_allowed(self) -> None:
        assert SleepInterval(start=START, duration=0, stage=StageLabel.LIGHT).end == START

    def test_negative_duration_rejected(self) -> None:
        with pytest.raises(MalformedIntervalError) as exc_info:
            SleepInterval(start=START, duration=-1, stage=StageLabel.LIGHT)
        assert exc_info.value.error_code == ErrorCodes.NEGATIVE_DURATION

    @pytest.mark.parametrize("duration", [math.nan, math.inf, -math.inf])
    def test_non_finite_duration_rejected(self, duration: float) -> None:
        with pytest.raises(MalformedIntervalError):
            SleepInterval(start=START, duration=duration, stage=StageLabel.LIGHT)

    def test_unknown_stage_rejected(self) -> None:
        with pytest.raises(ValidationError, match="Unknown sleep stage"):
            SleepInterval(start=START, duration=60, stage="napping")

    def test_start_must_be_datetime(self) -> None:
        with pytest.raises(ValidationError):
            SleepInterval(start="2024-01-15 22:00", duration=60, stage=StageLabel.LIGHT)

    def test_from_bounds(self) -> None:
        interval = SleepInterval.from_bounds(START, datetime(2024, 1, 15, 22, 30), StageLabel.AWAKE)
        assert interval.duration == 1800

    def test_from_bounds_reversed_rejected(self) -> None:
        with pytest.raises(MalformedIntervalError):
            SleepInterval.from_bounds(START, datetime(2024, 1, 15, 21, 0), StageLabel.AWAKE)

    def test_frozen(self) -> None:
        interval = SleepInterval(start=START, duration=60, stage=StageLabel.LIGHT)
        with pytest.raises(FrozenInstanceError):
            interval.duration = 120


# ============================================================================
# Test SensorSample and HypnogramEpoch
# ============================================================================


class TestSensorSample:
    """Tests for SensorSample validation."""

    def test_value_becomes_float(self) -> None:
        assert SensorSample(timestamp=START, value=60).value == 60.0

    @pytest.mark.parametrize("value", [math.nan, math.inf, "fast"])
    def test_invalid_value_rejected(self, value) -> None:
        with pytest.raises(ValidationError):
            SensorSample(timestamp=START, value=value)


class TestHypnogramEpoch:
    """Tests for HypnogramEpoch helpers."""

    def test_duration(self) -> None:
        epoch = HypnogramEpoch(start=START, end=datetime(2024, 1, 15, 22, 5), stage=StageLabel.LIGHT)
        assert epoch.duration_seconds == 300
        assert not epoch.is_transition_marker

    def test_marker(self) -> None:
        assert HypnogramEpoch(start=START, end=START, stage=None).is_transition_marker


# ============================================================================
# Test MetricsResult
# ============================================================================


class TestMetricsResult:
    """Tests for the result container."""

    def test_empty_result_is_all_unavailable(self) -> None:
        result = MetricsResult.empty(date(2024, 1, 15))

        assert result.day == date(2024, 1, 15)
        assert not result.has_data
        assert result.hypnogram == ()
        values = result.to_dict()
        for name, value in values.items():
            if name not in ("day", "hypnogram"):
                assert value is None, name

    def test_zero_is_kept_distinct_from_missing(self) -> None:
        result = MetricsResult(day=date(2024, 1, 15), resolved_day=date(2024, 1, 15), interruptions=0)
        assert result.interruptions == 0
        assert result.has_data

    def test_to_dict_includes_epochs(self) -> None:
        epoch = HypnogramEpoch(start=START, end=datetime(2024, 1, 15, 22, 5), stage=StageLabel.DEEP)
        result = MetricsResult(day=date(2024, 1, 15), onset_time=time(22, 0), hypnogram=(epoch,))

        values = result.to_dict()

        assert values["onset_time"] == time(22, 0)
        assert values["hypnogram"] == ({"start": START, "end": datetime(2024, 1, 15, 22, 5), "stage": StageLabel.DEEP},)


# ============================================================================
# Test Stage Constants
# ============================================================================


class TestStageLabel:
    """Tests for stage label mappings."""

    @pytest.mark.parametrize(
        ("label", "code"),
        [(StageLabel.IN_BED, 0), (StageLabel.AWAKE, 1), (StageLabel.LIGHT, 2), (StageLabel.DEEP, 3), (StageLabel.REM, 4)],
    )
    def test_display_code_round_trip(self, label: StageLabel, code: int) -> None:
        assert label.display_code == code
        assert StageLabel.from_display_code(code) is label

    @pytest.mark.parametrize(
        ("value", "label"),
        [
            (0, StageLabel.IN_BED),
            (1, StageLabel.LIGHT),
            (2, StageLabel.AWAKE),
            (3, StageLabel.LIGHT),
            (4, StageLabel.DEEP),
            (5, StageLabel.REM),
        ],
    )
    def test_source_values(self, value: int, label: StageLabel) -> None:
        assert StageLabel.from_source_value(value) is label

    def test_unknown_codes(self) -> None:
        assert StageLabel.from_source_value(9) is None
        assert StageLabel.from_display_code(7) is None

    def test_groupings(self) -> None:
        assert ASLEEP_STAGES == {StageLabel.LIGHT, StageLabel.DEEP, StageLabel.REM}
        assert StageLabel.AWAKE not in NON_AWAKE_STAGES
        assert StageLabel.IN_BED in NON_AWAKE_STAGES
        assert StageLabel.REM.is_asleep
        assert not StageLabel.IN_BED.is_asleep

    def test_display_names(self) -> None:
        assert StageLabel.REM.get_display_name() == "REM"
        assert SensorKind.SPO2.get_display_name() == "Blood Oxygen"
        assert SensorKind.HRV.unit == "ms"
