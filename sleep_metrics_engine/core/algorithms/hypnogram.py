"""
Hypnogram binning.

Resamples a night's raw stage intervals into fixed-width epochs for
visualization. Each epoch takes the stage that overlaps it the longest.

Algorithm Details:
    - Epochs run from the earliest interval start to the latest interval end
    - The final epoch is clipped to the latest interval end
    - Per epoch, overlap with every interval is accumulated per stage, iterating
      intervals in start order
    - The stage with the greatest accumulated overlap wins; on ties the stage
      encountered first keeps the epoch
    - Epochs that no interval overlaps carry stage None
    - Optionally a zero-width marker epoch is inserted at every stage change so
      charts can draw a step function
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import TYPE_CHECKING

import pandas as pd

from sleep_metrics_engine.core.constants import DEFAULT_EPOCH_SECONDS, StageLabel
from sleep_metrics_engine.core.dataclasses import HypnogramEpoch
from sleep_metrics_engine.core.validation import InputValidator

from .utils import overlap_seconds

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime

    from .timeline import NightTimeline

logger = logging.getLogger(__name__)

HYPNOGRAM_COLUMNS: tuple[str, ...] = ("start", "end", "stage", "display_code")

# One character per epoch: 1=deep, 2=light, 3=REM, 4=awake, 0=in bed, "-" = no data
_STAGE_CHARACTERS: dict[StageLabel, str] = {
    StageLabel.DEEP: "1",
    StageLabel.LIGHT: "2",
    StageLabel.REM: "3",
    StageLabel.AWAKE: "4",
    StageLabel.IN_BED: "0",
}
_GAP_CHARACTER = "-"


def _dominant_stage(timeline: NightTimeline, epoch_start: datetime, epoch_end: datetime) -> StageLabel | None:
    """Stage with the greatest accumulated overlap; first-encountered wins ties."""
    accumulated: dict[StageLabel, float] = {}
    for interval in timeline:
        overlap = overlap_seconds(interval.start, interval.end, epoch_start, epoch_end)
        if overlap > 0:
            accumulated[interval.stage] = accumulated.get(interval.stage, 0.0) + overlap

    best_stage: StageLabel | None = None
    best_overlap = 0.0
    for stage, total in accumulated.items():
        if total > best_overlap:
            best_stage = stage
            best_overlap = total
    return best_stage


def bin_hypnogram(
    timeline: NightTimeline,
    epoch_seconds: int = DEFAULT_EPOCH_SECONDS,
    include_transitions: bool = False,
) -> tuple[HypnogramEpoch, ...]:
    """
    Resample a timeline into fixed-width hypnogram epochs.

    Args:
        timeline: Night to resample
        epoch_seconds: Epoch width in seconds (default 300 = 5 minutes)
        include_transitions: Insert a zero-width marker at each stage change

    Returns:
        Epochs in chronological order; empty for an empty timeline

    Raises:
        ValidationError: If epoch_seconds is not a positive integer

    Example:
        >>> epochs = bin_hypnogram(timeline)
        >>> [(e.start.strftime("%H:%M"), e.stage) for e in epochs[:2]]
        [('22:00', <StageLabel.LIGHT: 'light'>), ('22:05', <StageLabel.LIGHT: 'light'>)]

    """
    InputValidator.validate_positive_int(epoch_seconds, "epoch_seconds")

    bounds = timeline.bounds()
    if bounds is None:
        return ()

    night_start, night_end = bounds
    step = timedelta(seconds=epoch_seconds)

    epochs: list[HypnogramEpoch] = []
    previous_stage: StageLabel | None = None
    epoch_start = night_start
    while epoch_start < night_end:
        epoch_end = min(epoch_start + step, night_end)
        stage = _dominant_stage(timeline, epoch_start, epoch_end)

        if include_transitions and epochs and stage != previous_stage:
            epochs.append(HypnogramEpoch(start=epoch_start, end=epoch_start, stage=stage))

        epochs.append(HypnogramEpoch(start=epoch_start, end=epoch_end, stage=stage))
        previous_stage = stage
        epoch_start = epoch_end

    logger.debug("Binned %d intervals into %d hypnogram epochs of %ds", len(timeline), len(epochs), epoch_seconds)
    return tuple(epochs)


def epochs_to_dataframe(epochs: Sequence[HypnogramEpoch]) -> pd.DataFrame:
    """
    Convert hypnogram epochs into a chart-ready DataFrame.

    Columns: start, end, stage (label value or None), display_code (0-4, NA for gaps).
    """
    if not epochs:
        return pd.DataFrame({column: pd.Series(dtype="object") for column in HYPNOGRAM_COLUMNS})

    frame = pd.DataFrame(
        {
            "start": [epoch.start for epoch in epochs],
            "end": [epoch.end for epoch in epochs],
            "stage": pd.Series(
                [epoch.stage.value if epoch.stage is not None else None for epoch in epochs],
                dtype="object",
            ),
            "display_code": pd.array(
                [epoch.stage.display_code if epoch.stage is not None else None for epoch in epochs],
                dtype="Int64",
            ),
        }
    )
    return frame


def to_stage_string(epochs: Sequence[HypnogramEpoch]) -> str:
    """
    Encode epochs as a compact stage string, one character per epoch.

    Transition markers are skipped. 1=deep, 2=light, 3=REM, 4=awake, 0=in bed,
    "-" for epochs without data.
    """
    return "".join(
        _STAGE_CHARACTERS[epoch.stage] if epoch.stage is not None else _GAP_CHARACTER
        for epoch in epochs
        if not epoch.is_transition_marker
    )
