"""
Tests for DayBoundaryResolver in core/pipeline/resolver.py.

Tests the single today-to-yesterday fallback.
"""

from __future__ import annotations

from datetime import date, datetime
from unittest.mock import MagicMock

import pytest

from sleep_metrics_engine.core.algorithms import NightTimeline
from sleep_metrics_engine.core.constants import StageLabel
from sleep_metrics_engine.core.pipeline import DayBoundaryResolver
from tests.fixtures import make_night

TODAY = date(2024, 1, 16)
YESTERDAY = date(2024, 1, 15)

# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def yesterday_night() -> NightTimeline:
    return make_night(datetime(2024, 1, 15, 23, 0), [(StageLabel.LIGHT, 60)])


def loader_for(nights: dict[date, NightTimeline]) -> MagicMock:
    """Mock timeline loader returning empty timelines for unknown days."""
    return MagicMock(side_effect=lambda day: nights.get(day, NightTimeline(day=day)))


# ============================================================================
# Test Resolution
# ============================================================================


class TestResolve:
    """Tests for DayBoundaryResolver.resolve."""

    def test_day_with_data_is_used(self, yesterday_night: NightTimeline) -> None:
        load = loader_for({YESTERDAY: yesterday_night})

        result = DayBoundaryResolver(load).resolve(YESTERDAY, today=TODAY)

        assert result is yesterday_night
        load.assert_called_once_with(YESTERDAY)

    def test_empty_today_falls_back_to_yesterday(self, yesterday_night: NightTimeline) -> None:
        load = loader_for({YESTERDAY: yesterday_night})

        result = DayBoundaryResolver(load).resolve(TODAY, today=TODAY)

        assert result is yesterday_night
        assert [call.args[0] for call in load.call_args_list] == [TODAY, YESTERDAY]

    def test_empty_today_and_yesterday(self) -> None:
        load = loader_for({})

        assert DayBoundaryResolver(load).resolve(TODAY, today=TODAY) is None
        assert load.call_count == 2

    def test_empty_past_day_does_not_fall_back(self, yesterday_night: NightTimeline) -> None:
        """Only today falls back, and never more than one day."""
        load = loader_for({date(2024, 1, 9): yesterday_night})

        assert DayBoundaryResolver(load).resolve(date(2024, 1, 10), today=TODAY) is None
        load.assert_called_once_with(date(2024, 1, 10))

    def test_clock_used_when_today_omitted(self, yesterday_night: NightTimeline) -> None:
        load = loader_for({YESTERDAY: yesterday_night})
        resolver = DayBoundaryResolver(load, clock=lambda: TODAY)

        assert resolver.resolve(TODAY) is yesterday_night

    def test_explicit_today_overrides_clock(self) -> None:
        load = loader_for({})
        resolver = DayBoundaryResolver(load, clock=lambda: TODAY)

        assert resolver.resolve(TODAY, today=date(2024, 2, 1)) is None
        load.assert_called_once_with(TODAY)
