"""
Tests for the stateful service layer.
"""

from datetime import timedelta

import pytest

from trend_forecaster.collector import DataCollector
from trend_forecaster.config import AnalysisConfig, ServiceConfig
from trend_forecaster.errors import InsufficientDataError
from trend_forecaster.models import EventType, RawItem, Source
from trend_forecaster.providers import MockProvider
from trend_forecaster.service import ForecastService
from trend_forecaster.timeline import TimelineFilters


def _raw(now, days_ago, title):
    return RawItem(source=Source.NEWS, published_at=now - timedelta(days=days_ago), title=title)


@pytest.fixture
def service(now, ids):
    raw = [
        _raw(now, 4, "good software news"),
        _raw(now, 3, "great software news"),
        _raw(now, 2, "excellent software news"),
        _raw(now, 45, "old software rumour"),
    ]
    config = AnalysisConfig(minimum_data_points=3, confidence_threshold=0.0, future_horizon_days=2)
    collector = DataCollector(ServiceConfig(analysis=config), providers=[MockProvider(raw)])
    collector.collect()
    return ForecastService(collector, id_factory=ids)


class TestForecastService:
    """Tests for ForecastService."""

    def test_uses_collector_analysis_config(self, service):
        assert service.config.minimum_data_points == 3

    def test_generate_predictions(self, service, now):
        predictions = service.generate_predictions(now)
        assert len(predictions) == 2
        assert service.predictions() == predictions
        assert service.last_analysis == now

    def test_predictions_are_replaced(self, service, now):
        service.generate_predictions(now)
        service.collector.cleanup(now, past_days=3)
        with pytest.raises(InsufficientDataError):
            service.generate_predictions(now)
        # a failed run leaves the previous output published
        assert len(service.predictions()) == 2

    def test_prediction_filters(self, service, now):
        service.generate_predictions(now)
        assert service.predictions(topic="health") == []
        assert len(service.predictions(start=now + timedelta(days=2))) == 1

    def test_update_timeline(self, service, now):
        service.generate_predictions(now)
        events = service.update_timeline(now)
        # the 45-day-old item is outside the 30-day window
        assert len(events) == 5
        assert [e.id for e in events][:3] == ["evt_1", "evt_2", "evt_3"]
        assert len(service.events(TimelineFilters(event_type=EventType.PREDICTION))) == 2
        stats = service.statistics()
        assert stats.total == 5
        assert stats.by_type == {"historical": 3, "prediction": 2}

    def test_returned_lists_are_copies(self, service, now):
        service.generate_predictions(now)
        service.update_timeline(now)
        service.events().clear()
        service.predictions().clear()
        assert len(service.events()) == 5
        assert len(service.predictions()) == 2
