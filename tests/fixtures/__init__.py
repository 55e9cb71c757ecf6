"""Test fixtures package."""

from tests.fixtures.night_fixtures import (
    BASE_DAY,
    FRAGMENTED_NIGHT,
    SAME_DAY_NIGHT,
    make_interval,
    make_night,
    make_provider,
    make_samples,
    make_segments,
    make_week,
)

__all__ = [
    "BASE_DAY",
    "FRAGMENTED_NIGHT",
    "SAME_DAY_NIGHT",
    "make_interval",
    "make_night",
    "make_provider",
    "make_samples",
    "make_segments",
    "make_week",
]
