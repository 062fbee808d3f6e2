"""Unit tests for score trend helpers."""

from __future__ import annotations

import pytest

from aegis.domains.health.domain_logic.health_trends import (
    classify_slope,
    is_consistent_decline,
    least_squares_slope,
)


class TestConsistentDecline:
    def test_strictly_decreasing(self):
        assert is_consistent_decline([10, 9, 8, 7, 6, 5, 4, 3, 2, 1])

    def test_flat_scores_are_not_a_decline(self):
        assert not is_consistent_decline([80] * 10)

    def test_equal_neighbours_do_not_count(self):
        assert not is_consistent_decline([90, 90, 89, 89, 88, 88, 87, 87, 86, 86])

    def test_too_short(self):
        assert not is_consistent_decline([])
        assert not is_consistent_decline([50])

    def test_ratio_is_against_window_length(self):
        # 2 of 2 steps down: 2 >= 3 * 0.7
        assert is_consistent_decline([3, 2, 1])
        # 1 of 2 steps down: 1 < 2.1
        assert not is_consistent_decline([3, 4, 1])


class TestLeastSquaresSlope:
    def test_perfect_line(self):
        assert least_squares_slope([1, 2, 3, 4, 5]) == pytest.approx(1.0)
        assert least_squares_slope([96, 92, 88, 84, 80]) == pytest.approx(-4.0)

    def test_flat(self):
        assert least_squares_slope([70, 70, 70, 70, 70]) == pytest.approx(0.0)

    def test_noisy_series(self):
        # sum((x - 2) * (y - 74)) / 10 with y = 70, 74, 72, 78, 76
        assert least_squares_slope([70, 74, 72, 78, 76]) == pytest.approx(1.6)

    def test_degenerate_input(self):
        assert least_squares_slope([]) == 0.0
        assert least_squares_slope([42]) == 0.0


class TestClassifySlope:
    @pytest.mark.parametrize(
        "slope,direction",
        [(2.5, "improving"), (2.0, "stable"), (0.0, "stable"), (-2.0, "stable"), (-2.01, "declining")],
    )
    def test_thresholds(self, slope, direction):
        assert classify_slope(slope) == direction
