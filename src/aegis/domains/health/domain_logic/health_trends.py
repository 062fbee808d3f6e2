"""Trend helpers over sequences of overall health scores (oldest first)."""

from __future__ import annotations

import statistics
from collections.abc import Sequence

from aegis.domains.health.domain_logic.reading_models import (
    DECLINE_RATIO,
    PREDICTION_SLOPE_THRESHOLD,
    TrendDirection,
)


def is_consistent_decline(scores: Sequence[float], ratio: float = DECLINE_RATIO) -> bool:
    """True when strictly decreasing steps make up enough of the window.

    The count of decreasing consecutive pairs is compared against
    ``ratio * len(scores)``; with a 10-score window that means at least 7 of
    the 9 steps must go down.
    """
    if len(scores) < 2:
        return False
    declines = sum(1 for prev, cur in zip(scores, scores[1:]) if cur < prev)
    return declines >= len(scores) * ratio


def least_squares_slope(scores: Sequence[float]) -> float:
    """Slope of the ordinary least-squares line through (index, score)."""
    if len(scores) < 2:
        return 0.0
    return statistics.linear_regression(list(range(len(scores))), list(scores)).slope


def classify_slope(
    slope: float, threshold: float = PREDICTION_SLOPE_THRESHOLD
) -> TrendDirection:
    if slope > threshold:
        return "improving"
    if slope < -threshold:
        return "declining"
    return "stable"
