"""
Tests for NightTimeline in core/algorithms/timeline.py.

Tests ordering, per-stage totals and bound queries.
"""

from __future__ import annotations

from datetime import date, datetime

import pytest

from sleep_metrics_engine.core.algorithms import NightTimeline
from sleep_metrics_engine.core.constants import ASLEEP_STAGES, StageLabel
from tests.fixtures import make_interval

# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def unordered_intervals():
    """Intervals supplied out of order, with an awake stretch at the end."""
    return [
        make_interval(datetime(2024, 1, 15, 23, 0), 60, StageLabel.DEEP),
        make_interval(datetime(2024, 1, 15, 22, 0), 60, StageLabel.LIGHT),
        make_interval(datetime(2024, 1, 16, 0, 30), 30, StageLabel.AWAKE),
        make_interval(datetime(2024, 1, 16, 0, 0), 30, StageLabel.REM),
    ]


@pytest.fixture
def timeline(unordered_intervals) -> NightTimeline:
    return NightTimeline(unordered_intervals, day=date(2024, 1, 15))


# ============================================================================
# Test Ordering
# ============================================================================


class TestOrdering:
    """Tests for interval ordering."""

    def test_intervals_sorted_by_start(self, timeline: NightTimeline) -> None:
        """Intervals are exposed in ascending start order."""
        starts = [interval.start for interval in timeline.intervals]
        assert starts == sorted(starts)

    def test_equal_starts_keep_input_order(self) -> None:
        """Sorting is stable for intervals starting together."""
        start = datetime(2024, 1, 15, 22, 0)
        first = make_interval(start, 10, StageLabel.LIGHT)
        second = make_interval(start, 5, StageLabel.DEEP)

        timeline = NightTimeline([first, second])

        assert timeline.intervals == (first, second)

    def test_len_iter_and_bool(self, timeline: NightTimeline) -> None:
        assert len(timeline) == 4
        assert list(timeline) == list(timeline.intervals)
        assert timeline
        assert not NightTimeline()

    def test_day_is_kept(self, timeline: NightTimeline) -> None:
        assert timeline.day == date(2024, 1, 15)


# ============================================================================
# Test Totals
# ============================================================================


class TestTotalDuration:
    """Tests for per-stage duration sums."""

    def test_single_stage(self, timeline: NightTimeline) -> None:
        assert timeline.total_duration(StageLabel.DEEP) == 3600

    def test_stage_set(self, timeline: NightTimeline) -> None:
        """Asleep total covers light, deep and REM."""
        assert timeline.total_duration(ASLEEP_STAGES) == 3600 + 3600 + 1800

    def test_callable_predicate(self, timeline: NightTimeline) -> None:
        assert timeline.total_duration(lambda stage: stage.is_asleep) == 9000

    def test_all_stages_when_no_predicate(self, timeline: NightTimeline) -> None:
        assert timeline.total_duration() == 3600 + 3600 + 1800 + 1800

    def test_missing_stage_totals_zero(self, timeline: NightTimeline) -> None:
        assert timeline.total_duration(StageLabel.IN_BED) == 0

    def test_overlapping_intervals_summed(self) -> None:
        """Overlapping time is counted once per interval."""
        start = datetime(2024, 1, 15, 22, 0)
        timeline = NightTimeline(
            [
                make_interval(start, 60, StageLabel.LIGHT),
                make_interval(start, 60, StageLabel.LIGHT),
            ]
        )

        assert timeline.total_duration(StageLabel.LIGHT) == 7200


# ============================================================================
# Test Bounds
# ============================================================================


class TestBounds:
    """Tests for earliest start / latest end queries."""

    def test_bounds_over_all_intervals(self, timeline: NightTimeline) -> None:
        assert timeline.bounds() == (datetime(2024, 1, 15, 22, 0), datetime(2024, 1, 16, 1, 0))

    def test_bounds_for_stage(self, timeline: NightTimeline) -> None:
        assert timeline.bounds(StageLabel.DEEP) == (datetime(2024, 1, 15, 23, 0), datetime(2024, 1, 16, 0, 0))

    def test_latest_end_uses_end_not_start(self) -> None:
        """A long early interval can end after a short late one."""
        timeline = NightTimeline(
            [
                make_interval(datetime(2024, 1, 15, 22, 0), 240, StageLabel.LIGHT),
                make_interval(datetime(2024, 1, 15, 23, 0), 10, StageLabel.LIGHT),
            ]
        )

        assert timeline.latest_end() == datetime(2024, 1, 16, 2, 0)

    def test_sleep_window_excludes_awake(self, timeline: NightTimeline) -> None:
        assert timeline.sleep_window() == (datetime(2024, 1, 15, 22, 0), datetime(2024, 1, 16, 0, 30))

    def test_first_matching_interval(self, timeline: NightTimeline) -> None:
        first = timeline.first(StageLabel.REM)
        assert first is not None
        assert first.start == datetime(2024, 1, 16, 0, 0)

    def test_no_match_returns_none(self, timeline: NightTimeline) -> None:
        assert timeline.bounds(StageLabel.IN_BED) is None
        assert timeline.first(StageLabel.IN_BED) is None
        assert timeline.earliest_start(StageLabel.IN_BED) is None
        assert timeline.latest_end(StageLabel.IN_BED) is None

    def test_awake_only_has_no_sleep_window(self) -> None:
        timeline = NightTimeline([make_interval(datetime(2024, 1, 15, 22, 0), 30, StageLabel.AWAKE)])
        assert timeline.sleep_window() is None
