"""
Tests for trend confidence scoring.
"""

import math

import pytest

from trend_forecaster.confidence import calculate_confidence, population_stddev, score_trend
from trend_forecaster.models import TrendDirection
from trend_forecaster.trends import detect_trends


@pytest.fixture
def make_trend(make_samples):
    def _make(scores):
        trends = detect_trends("technology", make_samples(scores))
        assert len(trends) == 1
        return trends[0]
    return _make


class TestPopulationStddev:
    """Tests for population standard deviation."""

    def test_empty(self):
        assert population_stddev([]) == 0.0

    def test_single_value(self):
        assert population_stddev([4]) == 0.0

    def test_divides_by_n(self):
        assert population_stddev([3, 5, 4]) == pytest.approx(math.sqrt(2 / 3))


class TestCalculateConfidence:
    """Tests for the weighted confidence score."""

    def test_breakdown(self, make_trend):
        trend = make_trend([3, 5, 4])
        breakdown = score_trend(trend, minimum_data_points=2)
        assert breakdown.data_point_score == 1.0
        assert breakdown.duration_score == pytest.approx(0.1)
        assert breakdown.strength_score == pytest.approx(0.04)
        assert breakdown.consistency_score == pytest.approx(1 - math.sqrt(2 / 3))
        expected = 0.3 + 0.025 + 0.01 + 0.2 * (1 - math.sqrt(2 / 3))
        assert calculate_confidence(trend, 2) == pytest.approx(expected)

    def test_sparse_trend_is_far_below_threshold(self, make_trend):
        """Three points against a minimum of 100 stays well under 0.75."""
        trend = make_trend([1, 1, 1])
        breakdown = score_trend(trend, minimum_data_points=100)
        assert breakdown.data_point_score == pytest.approx(0.03)
        assert breakdown.total == pytest.approx(0.009 + 0.025 + 0.0025 + 0.2)
        assert breakdown.total < 0.75

    def test_monotonic_in_data_points(self, make_trend):
        """More data points never lowers the score until it saturates."""
        trend = make_trend([2, 2, 2, 2, 2, 2])
        scores = [calculate_confidence(trend, minimum) for minimum in (60, 30, 12, 6, 3)]
        assert scores == sorted(scores)
        assert scores[-1] == scores[-2]

    def test_duration_saturates(self, make_trend):
        trend = make_trend([1] * 45)
        assert score_trend(trend, 10).duration_score == 1.0

    def test_strength_is_not_clamped(self, make_trend):
        """Very strong trends can push confidence above one."""
        trend = make_trend([400, 400, 400])
        breakdown = score_trend(trend, 3)
        assert breakdown.strength_score == pytest.approx(4.0)
        assert breakdown.total > 1.0

    def test_inconsistent_trend_loses_consistency(self, make_trend):
        trend = make_trend([-1, -9, -1, -9])
        assert trend.direction == TrendDirection.NEGATIVE
        assert score_trend(trend, 4).consistency_score == 0.0
