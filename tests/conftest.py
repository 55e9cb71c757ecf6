#!/usr/bin/env python3
"""
Shared test fixtures for the sleep metrics engine.
Provides common nights, settings and setup.
"""

from __future__ import annotations

from datetime import datetime

import pytest

from sleep_metrics_engine.config import EngineSettings, get_settings
from tests.fixtures import BASE_DAY, FRAGMENTED_NIGHT, SAME_DAY_NIGHT, make_night


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "edge_case: mark test as an edge-case test")


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Keep cached settings from leaking between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> EngineSettings:
    """Default engine settings."""
    return EngineSettings()


@pytest.fixture
def fragmented_night():
    """22:00-04:30 night: 6h asleep, 6.5h in bed, two awakenings."""
    return make_night(datetime(2024, 1, 15, 22, 0), FRAGMENTED_NIGHT)


@pytest.fixture
def same_day_night():
    """00:30-07:30 night on BASE_DAY: 7h asleep, no awakenings."""
    return make_night(datetime(BASE_DAY.year, BASE_DAY.month, BASE_DAY.day, 0, 30), SAME_DAY_NIGHT)
