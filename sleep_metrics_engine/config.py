"""
Engine configuration using Pydantic Settings.

Single source of configuration for the metrics pipeline.
Loads from environment variables (prefix SLEEP_METRICS_) with .env file support.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Literal

from pydantic import Field, model_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from sleep_metrics_engine.core.constants import (
    DEFAULT_CONSISTENCY_TOLERANCE_MINUTES,
    DEFAULT_DAY_END_HOUR,
    DEFAULT_DAY_START_HOUR,
    DEFAULT_EPOCH_SECONDS,
    DEFAULT_SLEEP_TARGET_HOURS,
    DEFAULT_WINDOW_DAYS,
)
from sleep_metrics_engine.core.exceptions import ConfigurationError, ErrorCodes


class EngineSettings(BaseSettings):
    """Engine settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SLEEP_METRICS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"

    # Hypnogram
    epoch_seconds: int = Field(default=DEFAULT_EPOCH_SECONDS, gt=0)

    # Multi-night window
    regularity_window_days: int = Field(default=DEFAULT_WINDOW_DAYS, ge=2)
    sleep_target_hours: float = Field(default=DEFAULT_SLEEP_TARGET_HOURS, gt=0, le=24)
    consistency_tolerance_minutes: float = Field(default=DEFAULT_CONSISTENCY_TOLERANCE_MINUTES, gt=0)
    strict_social_jet_lag: bool = False  # True: empty weekday/weekend bucket -> unavailable

    # Day/night heart-rate partition, [day_start_hour, day_end_hour) is daytime
    day_start_hour: int = Field(default=DEFAULT_DAY_START_HOUR, ge=0, le=23)
    day_end_hour: int = Field(default=DEFAULT_DAY_END_HOUR, ge=1, le=24)

    @model_validator(mode="after")
    def check_day_hours(self) -> EngineSettings:
        """Daytime must start before it ends."""
        if self.day_start_hour >= self.day_end_hour:
            msg = f"day_start_hour ({self.day_start_hour}) must be less than day_end_hour ({self.day_end_hour})"
            raise ValueError(msg)
        return self


def load_settings(**overrides: Any) -> EngineSettings:
    """
    Build settings from the environment plus explicit overrides.

    Raises:
        ConfigurationError: If any value fails validation

    """
    try:
        return EngineSettings(**overrides)
    except PydanticValidationError as e:
        msg = f"Invalid engine settings: {e.error_count()} error(s)"
        raise ConfigurationError(msg, ErrorCodes.CONFIG_INVALID, {"errors": e.errors()}) from e


@lru_cache
def get_settings() -> EngineSettings:
    """Get cached settings instance."""
    return load_settings()
