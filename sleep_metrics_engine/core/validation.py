#!/usr/bin/env python3
"""
Input Validation Module for the Sleep Metrics Engine
Provides validation for intervals, samples and algorithm parameters.
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import Any

from sleep_metrics_engine.core.exceptions import ErrorCodes, MalformedIntervalError, ValidationError


class InputValidator:
    """Input validation for engine data and parameters."""

    @staticmethod
    def validate_duration(duration: Any) -> float:
        """
        Validate an interval duration in seconds.

        Args:
            duration: Duration to validate

        Returns:
            Duration as float

        Raises:
            MalformedIntervalError: If duration is not a finite, non-negative number

        """
        try:
            seconds = float(duration)
        except (TypeError, ValueError) as e:
            msg = f"Duration must be a number of seconds, got {duration!r}"
            raise MalformedIntervalError(msg, ErrorCodes.INVALID_INPUT) from e

        if not math.isfinite(seconds):
            msg = f"Duration must be finite, got {seconds}"
            raise MalformedIntervalError(msg, ErrorCodes.NON_FINITE_VALUE)

        if seconds < 0:
            msg = f"Duration cannot be negative: {seconds}"
            raise MalformedIntervalError(msg, ErrorCodes.NEGATIVE_DURATION, context={"duration": seconds})

        return seconds

    @staticmethod
    def validate_timestamp(value: Any, field_name: str = "timestamp") -> datetime:
        """
        Validate that a value is a datetime.

        Raises:
            ValidationError: If value is not a datetime

        """
        if not isinstance(value, datetime):
            msg = f"{field_name} must be a datetime, got {type(value).__name__}"
            raise ValidationError(msg, ErrorCodes.INVALID_INPUT)
        return value

    @staticmethod
    def validate_sample_value(value: Any) -> float:
        """
        Validate a sensor sample value.

        Raises:
            ValidationError: If value is not a finite number

        """
        try:
            number = float(value)
        except (TypeError, ValueError) as e:
            msg = f"Sample value must be numeric, got {value!r}"
            raise ValidationError(msg, ErrorCodes.INVALID_INPUT) from e

        if not math.isfinite(number):
            msg = f"Sample value must be finite, got {number}"
            raise ValidationError(msg, ErrorCodes.NON_FINITE_VALUE)

        return number

    @staticmethod
    def validate_positive_int(value: Any, field_name: str) -> int:
        """
        Validate a strictly positive integer parameter (epoch width, window size).

        Raises:
            ValidationError: If value is not an integer greater than zero

        """
        if isinstance(value, bool) or not isinstance(value, int):
            msg = f"{field_name} must be an integer, got {value!r}"
            raise ValidationError(msg, ErrorCodes.INVALID_INPUT)
        if value <= 0:
            msg = f"{field_name} must be positive, got {value}"
            raise ValidationError(msg, ErrorCodes.OUT_OF_RANGE)
        return value

    @staticmethod
    def validate_hour_range(start_hour: int, end_hour: int) -> tuple[int, int]:
        """
        Validate a [start_hour, end_hour) local-hour partition.

        Raises:
            ValidationError: If hours are outside 0-24 or start is not before end

        """
        if not (0 <= start_hour <= 23 and 1 <= end_hour <= 24):
            msg = f"Hours out of range: start={start_hour}, end={end_hour}"
            raise ValidationError(msg, ErrorCodes.OUT_OF_RANGE)
        if start_hour >= end_hour:
            msg = f"start_hour ({start_hour}) must be less than end_hour ({end_hour})"
            raise ValidationError(msg, ErrorCodes.OUT_OF_RANGE)
        return start_hour, end_hour
