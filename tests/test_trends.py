"""
Tests for sentiment trend segmentation.
"""

from datetime import timedelta

import pytest

from trend_forecaster.models import TopicAssignment, TrendDirection
from trend_forecaster.trends import build_samples, classify_direction, detect_trends


class TestClassifyDirection:
    """Tests for the sign-to-direction rule."""

    def test_signs(self):
        assert classify_direction(2) == TrendDirection.POSITIVE
        assert classify_direction(-1) == TrendDirection.NEGATIVE

    def test_zero_folds_into_negative_by_default(self):
        assert classify_direction(0) == TrendDirection.NEGATIVE

    def test_zero_is_neutral_when_not_folded(self):
        assert classify_direction(0, neutral_as_negative=False) == TrendDirection.NEUTRAL


class TestDetectTrends:
    """Tests for detect_trends."""

    def test_empty_input(self):
        assert detect_trends("technology", []) == []

    def test_trailing_short_run_is_discarded(self, make_samples):
        """[+3, +5, +4, -2] yields one positive trend over the first three days."""
        samples = make_samples([3, 5, 4, -2])
        trends = detect_trends("technology", samples)
        assert len(trends) == 1
        trend = trends[0]
        assert trend.topic == "technology"
        assert trend.direction == TrendDirection.POSITIVE
        assert trend.duration == 3
        assert trend.strength == 12
        assert trend.average_strength == pytest.approx(4.0)
        assert list(trend.data_points) == samples[:3]

    def test_single_direction_gives_one_trend(self, make_samples):
        trends = detect_trends("economy", make_samples([-1, -2, -3, -4, -5]))
        assert len(trends) == 1
        assert trends[0].direction == TrendDirection.NEGATIVE
        assert trends[0].duration == 5

    def test_alternating_input_gives_no_trends(self, make_samples):
        assert detect_trends("health", make_samples([1, -1, 1, -1, 1, -1])) == []

    def test_multiple_runs(self, make_samples):
        """Both runs of three or more survive; the two-sample run in between does not."""
        trends = detect_trends("politics", make_samples([1, 2, 3, -1, -1, 4, 4, 4, 4]))
        assert [(t.direction, t.duration) for t in trends] == [
            (TrendDirection.POSITIVE, 3),
            (TrendDirection.POSITIVE, 4),
        ]

    def test_zero_breaks_negative_run(self, make_samples):
        """A zero never extends a run, so [-1, 0, -2] has no run of three."""
        assert detect_trends("health", make_samples([-1, 0, -2])) == []

    def test_all_zero_input_gives_no_trend(self, make_samples):
        assert detect_trends("health", make_samples([0, 0, 0])) == []
        assert detect_trends("health", make_samples([0] * 10)) == []

    def test_zero_seeds_negative_run(self, make_samples):
        """A zero can start a negative run that later negatives extend."""
        trends = detect_trends("health", make_samples([-1, 0, -1, -1, -1]))
        assert [(t.direction, t.duration, t.strength) for t in trends] == [(TrendDirection.NEGATIVE, 4, 3)]

    def test_zero_does_not_seed_when_neutral(self, make_samples):
        trends = detect_trends("health", make_samples([-1, 0, -1, -1, -1]), neutral_as_negative=False)
        assert [(t.direction, t.duration) for t in trends] == [(TrendDirection.NEGATIVE, 3)]

    def test_zero_breaks_runs_when_neutral(self, make_samples):
        samples = make_samples([-1, 0, -2, 0, 0, 0])
        assert detect_trends("health", samples, neutral_as_negative=False) == []

    def test_duration_matches_data_points(self, make_samples):
        samples = make_samples([1, 1, 1, -2, -2, -2, -2, 0, 3, 3])
        for trend in detect_trends("technology", samples):
            assert trend.duration > 2
            assert trend.duration == len(trend.data_points)


class TestBuildSamples:
    """Tests for projecting topic assignments onto samples."""

    def test_sorted_by_timestamp(self, make_item):
        newer = make_item(score=1, days_ago=1)
        older = make_item(score=-1, days_ago=3)
        samples = build_samples([
            TopicAssignment(item=newer, topic="technology", relevance_score=2.0),
            TopicAssignment(item=older, topic="technology", relevance_score=1.0),
        ])
        assert [s.sentiment for s in samples] == [-1, 1]
        assert samples[0].relevance == 1.0

    def test_ties_keep_collection_order(self, make_item):
        first = make_item(score=5, days_ago=2)
        second = make_item(score=-5, days_ago=2)
        samples = build_samples([
            TopicAssignment(item=first, topic="technology", relevance_score=0.0),
            TopicAssignment(item=second, topic="technology", relevance_score=0.0),
        ])
        assert [s.sentiment for s in samples] == [5, -5]
        assert samples[0].timestamp == samples[1].timestamp
