"""
Sleep metric algorithms - pure, framework-agnostic implementations.

Every component is a pure function (or a stateless class wrapping one) over
immutable inputs, so they can be used from any caller and from several
threads at once.

Package Structure:
    timeline.py     - NightTimeline: per-stage totals and bounds over one night
    aggregator.py   - Single-night durations, efficiency, onset, interruptions
    hypnogram.py    - Fixed-width epoch resampling for charts
    sensors.py      - Sleep-window sensor averages and heart-rate dip
    regularity.py   - Onset consistency, SRI, sleep debt, social jet lag
    quality.py      - Composite quality score
    utils.py        - Overlap and time-of-day helpers

Example Usage:
    ```python
    from sleep_metrics_engine.core.algorithms import (
        NightTimeline,
        aggregate_night,
        bin_hypnogram,
    )

    timeline = NightTimeline(intervals)
    aggregate = aggregate_night(timeline)
    epochs = bin_hypnogram(timeline, epoch_seconds=300)
    ```
"""

from __future__ import annotations

from .aggregator import IntervalAggregator, NightAggregate, aggregate_night
from .hypnogram import bin_hypnogram, epochs_to_dataframe, to_stage_string
from .quality import QualityBreakdown, QualityInputs, QualityScorer, score_sleep_quality
from .regularity import (
    RegularityAnalyzer,
    RegularityMetrics,
    analyze_regularity,
    onset_consistency,
    regularity_index_from_bitmap,
    sleep_bitmap,
    sleep_debt_hours,
    sleep_regularity_index,
    social_jet_lag_hours,
)
from .sensors import SensorAverages, average_in_window, heart_rate_dip, latest_value, reduce_sensors
from .timeline import NightTimeline

__all__ = [
    # Aggregation
    "IntervalAggregator",
    "NightAggregate",
    # Quality
    "QualityBreakdown",
    "QualityInputs",
    "QualityScorer",
    # Regularity
    "RegularityAnalyzer",
    "RegularityMetrics",
    # Sensors
    "SensorAverages",
    # Timeline
    "NightTimeline",
    "aggregate_night",
    "analyze_regularity",
    "average_in_window",
    # Hypnogram
    "bin_hypnogram",
    "epochs_to_dataframe",
    "heart_rate_dip",
    "latest_value",
    "onset_consistency",
    "reduce_sensors",
    "regularity_index_from_bitmap",
    "score_sleep_quality",
    "sleep_bitmap",
    "sleep_debt_hours",
    "sleep_regularity_index",
    "social_jet_lag_hours",
    "to_stage_string",
]
