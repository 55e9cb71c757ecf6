"""
Composite sleep quality score.

A deterministic, bucketed weighted sum with a maximum of 100 points:

    Factor              Buckets                                        Points
    Total sleep         7-9 h / 6-7 h or 9-10 h / 5-6 h / other        30 / 20 / 10 / 5
    Efficiency          >=85 / >=75 / >=65 / other                     20 / 15 / 10 / 5
    Deep sleep %        13-23 / >23 / 10-13 / other                    15 / 10 / 5 / 2
    REM sleep %         20-25 / >25 / 15-20 / other                    15 / 10 / 5 / 2
    Onset consistency   >=80 / >=60 / other                            10 / 5 / 2
    Heart-rate dip      >=10 / other                                   5 / 2
    Sleeping HRV (ms)   >50 / >30 / other                              5 / 2 / 1

One point is subtracted per interruption (floor 0) and the result is clamped
to [0, 100]. Factors whose input is unavailable contribute no points. A night
without any interval has no score at all.

Inputs are compared at the precision they are displayed with: efficiency to one
decimal, stage percentages, consistency, dip and HRV to whole numbers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sleep_metrics_engine.core.constants import QUALITY_SCORE_MAX, QUALITY_SCORE_MIN

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QualityInputs:
    """
    Already-computed single-night and weekly values the score is built from.

    Attributes:
        interval_count: Number of intervals in the night (0 means no score)
        asleep_hours: Total sleep in hours
        sleep_efficiency: Percent, or None
        deep_percentage: Percent of asleep time, or None
        rem_percentage: Percent of asleep time, or None
        onset_consistency: 7-day consistency percent, or None
        heart_rate_dip: Percent, or None
        average_sleeping_hrv: Milliseconds, or None
        interruptions: Asleep -> awake transitions

    """

    interval_count: int
    asleep_hours: float
    sleep_efficiency: float | None = None
    deep_percentage: float | None = None
    rem_percentage: float | None = None
    onset_consistency: float | None = None
    heart_rate_dip: float | None = None
    average_sleeping_hrv: float | None = None
    interruptions: int = 0


@dataclass(frozen=True)
class QualityBreakdown:
    """Points awarded per factor, for explaining a score."""

    score: int | None
    points: dict[str, int] = field(default_factory=dict)
    penalty: int = 0


def _round_or_none(value: float | None, digits: int = 0) -> float | None:
    if value is None:
        return None
    return round(value, digits)


def total_sleep_points(hours: float) -> int:
    if 7 <= hours <= 9:
        return 30
    if 6 <= hours < 7 or 9 < hours <= 10:
        return 20
    if 5 < hours < 6:
        return 10
    return 5


def efficiency_points(efficiency: float) -> int:
    if efficiency >= 85:
        return 20
    if efficiency >= 75:
        return 15
    if efficiency >= 65:
        return 10
    return 5


def deep_sleep_points(percentage: float) -> int:
    if 13 <= percentage <= 23:
        return 15
    if percentage > 23:
        return 10
    if 10 <= percentage < 13:
        return 5
    return 2


def rem_sleep_points(percentage: float) -> int:
    if 20 <= percentage <= 25:
        return 15
    if percentage > 25:
        return 10
    if 15 <= percentage < 20:
        return 5
    return 2


def consistency_points(consistency: float) -> int:
    if consistency >= 80:
        return 10
    if consistency >= 60:
        return 5
    return 2


def heart_rate_dip_points(dip: float) -> int:
    return 5 if dip >= 10 else 2


def hrv_points(hrv: float) -> int:
    if hrv > 50:
        return 5
    if hrv > 30:
        return 2
    return 1


class QualityScorer:
    """Score one night from QualityInputs."""

    def breakdown(self, inputs: QualityInputs) -> QualityBreakdown:
        """
        Score a night and report the points of every factor.

        Args:
            inputs: The night's computed metrics

        Returns:
            QualityBreakdown; score is None when the night has no intervals

        """
        if inputs.interval_count == 0:
            return QualityBreakdown(score=None)

        points: dict[str, int] = {"total_sleep": total_sleep_points(inputs.asleep_hours)}

        factors = (
            ("efficiency", _round_or_none(inputs.sleep_efficiency, 1), efficiency_points),
            ("deep_sleep", _round_or_none(inputs.deep_percentage), deep_sleep_points),
            ("rem_sleep", _round_or_none(inputs.rem_percentage), rem_sleep_points),
            ("consistency", _round_or_none(inputs.onset_consistency), consistency_points),
            ("heart_rate_dip", _round_or_none(inputs.heart_rate_dip), heart_rate_dip_points),
            ("hrv", _round_or_none(inputs.average_sleeping_hrv), hrv_points),
        )
        for name, value, rule in factors:
            if value is not None:
                points[name] = rule(value)

        subtotal = sum(points.values())
        penalty = max(0, inputs.interruptions)
        score = max(QUALITY_SCORE_MIN, subtotal - penalty)
        score = min(QUALITY_SCORE_MAX, score)

        logger.debug("Quality score %d (subtotal=%d, penalty=%d, factors=%s)", score, subtotal, penalty, points)
        return QualityBreakdown(score=score, points=points, penalty=penalty)

    def score(self, inputs: QualityInputs) -> int | None:
        """Composite score in [0, 100], or None for a night without intervals."""
        return self.breakdown(inputs).score


def score_sleep_quality(inputs: QualityInputs) -> int | None:
    """Convenience wrapper around QualityScorer.score."""
    return QualityScorer().score(inputs)
