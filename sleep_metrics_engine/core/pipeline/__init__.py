"""
Metrics pipeline.

Fetches a night of data through a SampleProvider and runs every algorithm
component over it.

Example Usage:
    >>> from sleep_metrics_engine.core.pipeline import MetricsOrchestrator
    >>> result = MetricsOrchestrator(provider).compute(date.today())
"""

from __future__ import annotations

from .orchestrator import MetricsOrchestrator, compute_metrics
from .resolver import DayBoundaryResolver
from .types import NightInputs, SampleProvider

__all__ = [
    "DayBoundaryResolver",
    "MetricsOrchestrator",
    "NightInputs",
    "SampleProvider",
    "compute_metrics",
]
