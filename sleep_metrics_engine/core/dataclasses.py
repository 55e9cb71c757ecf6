#!/usr/bin/env python3
"""
Input dataclasses for the Sleep Metrics Engine.

These immutable records are what a sample provider hands to the engine:
stage-labelled sleep intervals and timestamped sensor samples. Validation
happens at construction so that downstream algorithms can trust their inputs.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from sleep_metrics_engine.core.constants import StageLabel
from sleep_metrics_engine.core.exceptions import ErrorCodes, ValidationError
from sleep_metrics_engine.core.validation import InputValidator


@dataclass(frozen=True)
class SleepInterval:
    """
    One stage-labelled interval of a night.

    Intervals of the same night may overlap; raw provider samples are not
    guaranteed to be disjoint.

    Attributes:
        start: Interval start timestamp
        duration: Length in seconds (finite, non-negative)
        stage: Pre-classified sleep stage

    """

    start: datetime
    duration: float
    stage: StageLabel

    def __post_init__(self) -> None:
        InputValidator.validate_timestamp(self.start, "start")
        object.__setattr__(self, "duration", InputValidator.validate_duration(self.duration))
        if not isinstance(self.stage, StageLabel):
            try:
                object.__setattr__(self, "stage", StageLabel(self.stage))
            except ValueError as e:
                msg = f"Unknown sleep stage: {self.stage!r}"
                raise ValidationError(msg, ErrorCodes.INVALID_INPUT) from e

    @property
    def end(self) -> datetime:
        """Interval end (start + duration)."""
        return self.start + timedelta(seconds=self.duration)

    @classmethod
    def from_bounds(cls, start: datetime, end: datetime, stage: StageLabel) -> SleepInterval:
        """Build an interval from start/end timestamps. Raises if end precedes start."""
        return cls(start=start, duration=(end - start).total_seconds(), stage=stage)


@dataclass(frozen=True)
class SensorSample:
    """
    A single sensor reading.

    The unit depends on the SensorKind of the series the sample belongs to.
    """

    timestamp: datetime
    value: float

    def __post_init__(self) -> None:
        InputValidator.validate_timestamp(self.timestamp)
        object.__setattr__(self, "value", InputValidator.validate_sample_value(self.value))


@dataclass(frozen=True)
class HypnogramEpoch:
    """
    One resampled hypnogram bucket.

    Attributes:
        start: Epoch start
        end: Epoch end (equal to start for transition markers)
        stage: Stage with the greatest overlap, or None for epochs no interval covers

    """

    start: datetime
    end: datetime
    stage: StageLabel | None

    @property
    def duration_seconds(self) -> float:
        """Epoch width in seconds."""
        return (self.end - self.start).total_seconds()

    @property
    def is_transition_marker(self) -> bool:
        """True for zero-width markers inserted at stage changes."""
        return self.start == self.end
