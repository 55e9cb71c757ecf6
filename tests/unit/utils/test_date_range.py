"""
Tests for calendar-day range helpers in utils/date_range.py.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

from sleep_metrics_engine.utils.date_range import (
    DateRange,
    get_day_range,
    get_trailing_days,
    get_trailing_range,
    previous_day,
)


class TestGetDayRange:
    """Tests for midnight-to-midnight ranges."""

    def test_naive_range(self) -> None:
        day_range = get_day_range(date(2024, 1, 15))

        assert day_range.start == datetime(2024, 1, 15)
        assert day_range.end == datetime(2024, 1, 16)
        assert day_range.duration_hours == 24

    def test_datetime_truncated_to_date(self) -> None:
        assert get_day_range(datetime(2024, 1, 15, 17, 45)).start == datetime(2024, 1, 15)

    def test_timezone_aware_range(self) -> None:
        day_range = get_day_range(date(2024, 1, 15), tz=timezone.utc)

        assert day_range.start.tzinfo is timezone.utc
        assert day_range.start_timestamp == datetime(2024, 1, 15, tzinfo=timezone.utc).timestamp()
        assert day_range.end_timestamp - day_range.start_timestamp == 86400

    def test_end_exclusive(self) -> None:
        day_range = get_day_range(date(2024, 1, 15))
        assert day_range.contains(datetime(2024, 1, 15))
        assert day_range.contains(datetime(2024, 1, 15, 23, 59, 59))
        assert not day_range.contains(datetime(2024, 1, 16))


class TestTrailingWindow:
    """Tests for trailing day windows."""

    def test_trailing_days_oldest_first(self) -> None:
        assert get_trailing_days(date(2024, 3, 2), 3) == [date(2024, 2, 29), date(2024, 3, 1), date(2024, 3, 2)]

    def test_single_day(self) -> None:
        assert get_trailing_days(date(2024, 1, 15), 1) == [date(2024, 1, 15)]

    def test_trailing_range(self) -> None:
        window = get_trailing_range(date(2024, 1, 17), 7)

        assert window == DateRange(start=datetime(2024, 1, 11), end=datetime(2024, 1, 18))
        assert window.duration_hours == 7 * 24

    def test_previous_day_crosses_year(self) -> None:
        assert previous_day(date(2024, 1, 1)) == date(2023, 12, 31)
