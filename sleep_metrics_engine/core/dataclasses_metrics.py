#!/usr/bin/env python3
"""Result dataclasses returned to the presentation layer."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from datetime import date, time

    from sleep_metrics_engine.core.algorithms.aggregator import NightAggregate
    from sleep_metrics_engine.core.algorithms.regularity import RegularityMetrics
    from sleep_metrics_engine.core.algorithms.sensors import SensorAverages
    from sleep_metrics_engine.core.dataclasses import HypnogramEpoch


@dataclass(frozen=True)
class MetricsResult:
    """
    All metrics for one requested date.

    Every field is independently nullable: None means the value could not be
    computed from the available data. Zero is always a real value (for example
    zero interruptions), never a stand-in for missing data.

    Attributes:
        day: Date that was requested
        resolved_day: Date whose data was actually used (yesterday after a
            today-fallback), None when no data was found
        hypnogram: Resampled epochs, empty without data

    """

    day: date
    resolved_day: date | None = None

    # Durations (seconds)
    light_seconds: float | None = None
    deep_seconds: float | None = None
    rem_seconds: float | None = None
    awake_seconds: float | None = None
    asleep_seconds: float | None = None
    time_in_bed_seconds: float | None = None

    # Percentages of asleep time
    light_percentage: int | None = None
    deep_percentage: int | None = None
    rem_percentage: int | None = None

    # Single-night quality
    sleep_efficiency: float | None = None
    onset_time: time | None = None
    interruptions: int | None = None
    transitions: int | None = None
    sleep_goal_progress: float | None = None

    # Multi-night
    sleep_consistency: float | None = None
    sleep_debt_hours: float | None = None
    sleep_regularity: float | None = None
    social_jet_lag_hours: float | None = None

    # Sensors
    heart_rate_dip: float | None = None
    average_sleeping_heart_rate: float | None = None
    average_sleeping_hrv: float | None = None
    average_sleeping_spo2: float | None = None
    average_respiratory_rate: float | None = None
    resting_heart_rate: float | None = None

    # Composite
    quality_score: int | None = None

    hypnogram: tuple[HypnogramEpoch, ...] = field(default_factory=tuple)

    @classmethod
    def empty(cls, day: date) -> MetricsResult:
        """All-unavailable result for a date without data."""
        return cls(day=day)

    @classmethod
    def from_components(
        cls,
        day: date,
        resolved_day: date,
        aggregate: NightAggregate,
        sensors: SensorAverages,
        regularity: RegularityMetrics,
        quality_score: int | None,
        hypnogram: tuple[HypnogramEpoch, ...],
    ) -> MetricsResult:
        """Assemble a result from the outputs of every component."""
        return cls(
            day=day,
            resolved_day=resolved_day,
            light_seconds=aggregate.light_seconds,
            deep_seconds=aggregate.deep_seconds,
            rem_seconds=aggregate.rem_seconds,
            awake_seconds=aggregate.awake_seconds,
            asleep_seconds=aggregate.asleep_seconds,
            time_in_bed_seconds=aggregate.time_in_bed_seconds,
            light_percentage=aggregate.light_percentage,
            deep_percentage=aggregate.deep_percentage,
            rem_percentage=aggregate.rem_percentage,
            sleep_efficiency=aggregate.sleep_efficiency,
            onset_time=aggregate.onset_time,
            interruptions=aggregate.interruptions,
            transitions=aggregate.transitions,
            sleep_goal_progress=aggregate.sleep_goal_progress,
            sleep_consistency=regularity.onset_consistency,
            sleep_debt_hours=regularity.sleep_debt_hours,
            sleep_regularity=regularity.sleep_regularity,
            social_jet_lag_hours=regularity.social_jet_lag_hours,
            heart_rate_dip=sensors.heart_rate_dip,
            average_sleeping_heart_rate=sensors.heart_rate,
            average_sleeping_hrv=sensors.hrv,
            average_sleeping_spo2=sensors.spo2,
            average_respiratory_rate=sensors.respiratory_rate,
            resting_heart_rate=sensors.resting_heart_rate,
            quality_score=quality_score,
            hypnogram=hypnogram,
        )

    @property
    def has_data(self) -> bool:
        """True when some night's data was used."""
        return self.resolved_day is not None

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary (hypnogram epochs become dicts)."""
        return asdict(self)
