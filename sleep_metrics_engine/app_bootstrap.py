#!/usr/bin/env python3
"""
Application bootstrap utilities.

Provides shared setup for logging, driven by EngineSettings.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sleep_metrics_engine.config import get_settings

if TYPE_CHECKING:
    from pathlib import Path

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str | None = None, log_file: Path | None = None) -> None:
    """
    Set up logging for callers embedding the engine.

    Args:
        level: Log level name; defaults to EngineSettings.log_level
        log_file: Optional file to log to in addition to stderr

    """
    level_name = (level or get_settings().log_level).upper()

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )
