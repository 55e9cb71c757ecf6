"""
Pipeline orchestration for nightly sleep metrics.

This module wires the pure algorithm components together. It fetches one
night's intervals (with the today-to-yesterday fallback), the trailing window
of nights and the sensor series from a SampleProvider, then runs aggregation,
hypnogram resampling, sensor reduction, regularity analysis and quality
scoring into a single MetricsResult.

Example Usage:
    >>> from sleep_metrics_engine.core.pipeline import MetricsOrchestrator
    >>>
    >>> orchestrator = MetricsOrchestrator(provider)
    >>> result = orchestrator.compute(date(2024, 1, 15))
    >>> result.quality_score
    82

"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import replace
from typing import TYPE_CHECKING

from sleep_metrics_engine.config import get_settings
from sleep_metrics_engine.core.algorithms import (
    IntervalAggregator,
    NightTimeline,
    QualityInputs,
    QualityScorer,
    RegularityAnalyzer,
    bin_hypnogram,
    reduce_sensors,
)
from sleep_metrics_engine.core.constants import SLEEP_WINDOW_SENSORS, SensorKind
from sleep_metrics_engine.core.dataclasses_metrics import MetricsResult
from sleep_metrics_engine.core.exceptions import ErrorCodes, ProviderError
from sleep_metrics_engine.utils.date_range import get_day_range, get_trailing_days, get_trailing_range

from .resolver import DayBoundaryResolver
from .types import NightInputs

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import date, datetime, tzinfo

    from sleep_metrics_engine.config import EngineSettings
    from sleep_metrics_engine.core.dataclasses import SensorSample, SleepInterval

    from .types import SampleProvider

logger = logging.getLogger(__name__)


class MetricsOrchestrator:
    """
    Compute every metric for a requested day.

    The orchestrator holds only its provider, settings and clock; each call
    fetches fresh data, so one instance can serve any number of requests.

    Example:
        >>> orchestrator = MetricsOrchestrator(provider, settings=EngineSettings(epoch_seconds=60))
        >>> result = orchestrator.compute(date.today())
        >>> result.resolved_day  # yesterday, if nothing is recorded for today yet

    """

    def __init__(
        self,
        provider: SampleProvider,
        settings: EngineSettings | None = None,
        tz: tzinfo | None = None,
        clock: Callable[[], date] | None = None,
    ) -> None:
        """
        Initialize the orchestrator.

        Args:
            provider: Source of intervals and sensor samples
            settings: Engine settings; the cached environment settings when None
            tz: Timezone for calendar-day boundaries. Aware provider timestamps are
                converted to it, so day grouping, onset and the heart-rate dip read
                local wall-clock time. None gives naive ranges and leaves timestamps as is
            clock: Returns the current date, used to detect "today"

        """
        self._provider = provider
        self._settings = settings if settings is not None else get_settings()
        self._tz = tz
        self._resolver = DayBoundaryResolver(self.load_timeline, clock)

    @property
    def settings(self) -> EngineSettings:
        return self._settings

    # =========================================================================
    # Provider access
    # =========================================================================

    def _fetch_intervals(self, start: datetime, end: datetime) -> list[SleepInterval]:
        try:
            intervals = self._provider.fetch_intervals(start, end)
        except Exception as e:
            msg = f"Failed to fetch intervals for {start} - {end}: {e}"
            raise ProviderError(msg, ErrorCodes.PROVIDER_FAILED, {"start": start, "end": end}) from e

        if intervals is None:
            msg = f"Provider returned None instead of a list of intervals for {start} - {end}"
            raise ProviderError(msg, ErrorCodes.PROVIDER_FAILED, {"start": start, "end": end})
        return self._localize_intervals(list(intervals))

    def _fetch_samples(self, kind: SensorKind, start: datetime, end: datetime) -> list[SensorSample]:
        try:
            samples = self._provider.fetch_samples(kind, start, end)
        except Exception as e:
            msg = f"Failed to fetch {kind.get_display_name()} samples for {start} - {end}: {e}"
            raise ProviderError(msg, ErrorCodes.PROVIDER_FAILED, {"kind": str(kind), "start": start, "end": end}) from e

        if samples is None:
            msg = f"Provider returned None instead of a list of {kind.get_display_name()} samples"
            raise ProviderError(msg, ErrorCodes.PROVIDER_FAILED, {"kind": str(kind)})
        return self._localize_samples(list(samples))

    # =========================================================================
    # Local time
    # =========================================================================

    def _to_local(self, value: datetime) -> datetime:
        """Express an aware timestamp in the orchestrator timezone; naive values pass through."""
        if self._tz is None or value.tzinfo is None:
            return value
        return value.astimezone(self._tz)

    def _localize_intervals(self, intervals: list[SleepInterval]) -> list[SleepInterval]:
        return [replace(interval, start=self._to_local(interval.start)) for interval in intervals]

    def _localize_samples(self, samples: list[SensorSample]) -> list[SensorSample]:
        return [replace(sample, timestamp=self._to_local(sample.timestamp)) for sample in samples]

    # =========================================================================
    # Input assembly
    # =========================================================================

    def load_timeline(self, day: date) -> NightTimeline:
        """Timeline of the intervals that start on `day`."""
        day_range = get_day_range(day, self._tz)
        intervals = self._fetch_intervals(day_range.start, day_range.end)
        return NightTimeline((interval for interval in intervals if interval.start.date() == day), day=day)

    def load_window(self, end_day: date) -> list[NightTimeline]:
        """One timeline per day of the trailing window ending at `end_day`, oldest first."""
        window_days = self._settings.regularity_window_days
        window_range = get_trailing_range(end_day, window_days, self._tz)
        intervals = self._fetch_intervals(window_range.start, window_range.end)

        by_day: defaultdict[date, list[SleepInterval]] = defaultdict(list)
        for interval in intervals:
            by_day[interval.start.date()].append(interval)

        return [NightTimeline(by_day.get(day, ()), day=day) for day in get_trailing_days(end_day, window_days)]

    def load_inputs(self, timeline: NightTimeline) -> NightInputs:
        """Fetch the window and sensor series for an already loaded night."""
        day = timeline.day
        if day is None:
            msg = "Timeline must be tied to a calendar day"
            raise ValueError(msg)

        sensors: dict[SensorKind, list[SensorSample]] = {}
        window = timeline.sleep_window()
        if window is not None:
            for kind in SLEEP_WINDOW_SENSORS:
                sensors[kind] = self._fetch_samples(kind, *window)

        day_range = get_day_range(day, self._tz)
        sensors[SensorKind.RESTING_HEART_RATE] = self._fetch_samples(
            SensorKind.RESTING_HEART_RATE, day_range.start, day_range.end
        )
        day_heart_rate = self._fetch_samples(SensorKind.HEART_RATE, day_range.start, day_range.end)

        return NightInputs(
            day=day,
            timeline=timeline,
            window_timelines=tuple(self.load_window(day)),
            sensors=sensors,
            day_heart_rate=day_heart_rate,
        )

    # =========================================================================
    # Computation
    # =========================================================================

    def compute(self, day: date, today: date | None = None) -> MetricsResult:
        """
        Compute all metrics for a requested day.

        Args:
            day: Requested calendar day
            today: Current date; the injected clock is asked when omitted

        Returns:
            MetricsResult for `day` (using yesterday's data when `day` is today
            and nothing is recorded yet), or an all-unavailable result

        Raises:
            ProviderError: If the provider raises or returns None

        """
        timeline = self._resolver.resolve(day, today)
        if timeline is None:
            logger.info("No sleep data for %s; returning empty metrics", day)
            return MetricsResult.empty(day)

        return self.compute_from_inputs(self.load_inputs(timeline), requested_day=day)

    def compute_from_inputs(self, inputs: NightInputs, requested_day: date | None = None) -> MetricsResult:
        """
        Run the pipeline on materialized inputs.

        Args:
            inputs: The night and its trailing window
            requested_day: Day reported as `MetricsResult.day`; defaults to inputs.day

        Returns:
            MetricsResult, empty when the night has no intervals

        """
        requested_day = requested_day or inputs.day
        if not inputs.timeline:
            return MetricsResult.empty(requested_day)

        settings = self._settings
        aggregate = IntervalAggregator(settings.sleep_target_hours).aggregate(inputs.timeline)
        hypnogram = bin_hypnogram(inputs.timeline, settings.epoch_seconds)
        sensors = reduce_sensors(
            inputs.timeline,
            inputs.sensors,
            settings.day_start_hour,
            settings.day_end_hour,
            day_heart_rate=inputs.day_heart_rate,
        )
        regularity = RegularityAnalyzer(
            sleep_target_hours=settings.sleep_target_hours,
            consistency_tolerance_minutes=settings.consistency_tolerance_minutes,
            strict_social_jet_lag=settings.strict_social_jet_lag,
        ).analyze(inputs.window_timelines or (inputs.timeline,))

        quality_score = QualityScorer().score(
            QualityInputs(
                interval_count=aggregate.interval_count,
                asleep_hours=aggregate.asleep_hours,
                sleep_efficiency=aggregate.sleep_efficiency,
                deep_percentage=aggregate.deep_percentage,
                rem_percentage=aggregate.rem_percentage,
                onset_consistency=regularity.onset_consistency,
                heart_rate_dip=sensors.heart_rate_dip,
                average_sleeping_hrv=sensors.hrv,
                interruptions=aggregate.interruptions,
            )
        )

        logger.debug(
            "Computed metrics for %s (resolved %s): %d intervals, %d epochs, score=%s",
            requested_day,
            inputs.day,
            aggregate.interval_count,
            len(hypnogram),
            quality_score,
        )

        return MetricsResult.from_components(
            day=requested_day,
            resolved_day=inputs.day,
            aggregate=aggregate,
            sensors=sensors,
            regularity=regularity,
            quality_score=quality_score,
            hypnogram=hypnogram,
        )


def compute_metrics(provider: SampleProvider, day: date, today: date | None = None, **kwargs) -> MetricsResult:
    """Convenience wrapper: MetricsOrchestrator(provider, **kwargs).compute(day, today)."""
    return MetricsOrchestrator(provider, **kwargs).compute(day, today)
