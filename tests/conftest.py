"""
Pytest configuration and fixtures for trend forecaster tests.
"""

from datetime import datetime, timedelta, timezone

import pytest

from trend_forecaster.models import (
    DataItem,
    Sentiment,
    SentimentLabel,
    SentimentSample,
    Source,
)
from trend_forecaster.timeline import sequential_ids


NOW = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


def label_for(score):
    if score > 0:
        return SentimentLabel.POSITIVE
    if score < 0:
        return SentimentLabel.NEGATIVE
    return SentimentLabel.NEUTRAL


@pytest.fixture
def now():
    """Fixed reference time used by every test."""
    return NOW


@pytest.fixture
def make_item():
    """Factory for data items with an explicit sentiment score."""
    def _make(score=0, days_ago=0, source=Source.NEWS, title="tech report", **kwargs):
        return DataItem(
            source=source,
            timestamp=NOW - timedelta(days=days_ago),
            sentiment=Sentiment(score=score, label=label_for(score)),
            title=title,
            **kwargs,
        )
    return _make


@pytest.fixture
def make_samples():
    """Factory turning a list of scores into daily sentiment samples."""
    def _make(scores, start=NOW):
        return [
            SentimentSample(timestamp=start + timedelta(days=index), sentiment=score, relevance=1.0)
            for index, score in enumerate(scores)
        ]
    return _make


@pytest.fixture
def ids():
    """Deterministic event id factory."""
    return sequential_ids()
