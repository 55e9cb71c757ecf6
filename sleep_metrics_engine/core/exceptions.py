#!/usr/bin/env python3
"""
Custom Exception Classes for the Sleep Metrics Engine
Provides structured error handling with specific exception types.

Missing data is never an error: computations that lack inputs return None.
Exceptions are reserved for malformed inputs and invalid configuration.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class SleepMetricsError(Exception):
    """Base exception for all sleep metrics engine errors."""

    def __init__(self, message: str, error_code: str | None = None, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}

    def __str__(self) -> str:
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message


class ValidationError(SleepMetricsError):
    """Raised when input validation fails."""


class MalformedIntervalError(ValidationError):
    """Raised when a sleep interval has a negative or non-finite duration."""


class ConfigurationError(SleepMetricsError):
    """Raised when configuration is invalid."""


class PipelineError(SleepMetricsError):
    """Base exception for orchestration failures."""


class ProviderError(PipelineError):
    """Raised when the sample provider fails to return data."""


# Error codes for specific error types
class ErrorCodes(StrEnum):
    """Standardized error codes."""

    # Validation errors
    INVALID_INPUT = "INVALID_INPUT"
    OUT_OF_RANGE = "OUT_OF_RANGE"
    MISSING_REQUIRED = "MISSING_REQUIRED"
    NEGATIVE_DURATION = "NEGATIVE_DURATION"
    NON_FINITE_VALUE = "NON_FINITE_VALUE"

    # Configuration errors
    CONFIG_INVALID = "CONFIG_INVALID"

    # Pipeline errors
    PROVIDER_FAILED = "PROVIDER_FAILED"
