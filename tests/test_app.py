"""
Tests for the Flask HTTP layer.
"""

import pytest

from app import create_app
from trend_forecaster.collector import DataCollector
from trend_forecaster.config import AnalysisConfig, ServiceConfig
from trend_forecaster.providers import MockProvider
from trend_forecaster.service import ForecastService


def _client(config):
    collector = DataCollector(ServiceConfig(analysis=config), providers=[MockProvider()])
    app = create_app(ForecastService(collector))
    app.config["TESTING"] = True
    return app.test_client()


@pytest.fixture
def client():
    return _client(AnalysisConfig(minimum_data_points=1, confidence_threshold=0.0))


class TestRoutes:
    """Tests for the API routes."""

    def test_service_is_registered(self):
        service = ForecastService(DataCollector(ServiceConfig(), providers=[MockProvider()]))
        assert create_app(service).extensions["forecast_service"] is service

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.get_json()["status"] == "healthy"

    def test_collect_and_list_data(self, client):
        collected = client.post("/collect").get_json()
        assert collected["collected"] == {"news": 1, "twitter": 1, "reddit": 1}
        payload = client.get("/data?source=twitter").get_json()
        assert payload["count"] == 1
        assert payload["data"][0]["source"] == "twitter"
        assert payload["data"][0]["sentiment"]["label"] == "negative"

    def test_invalid_source(self, client):
        response = client.get("/data?source=myspace")
        assert response.status_code == 400

    def test_predict_with_insufficient_data(self):
        client = _client(AnalysisConfig())
        response = client.post("/predict")
        assert response.status_code == 400
        assert "Insufficient data" in response.get_json()["error"]

    def test_predict(self, client):
        client.post("/collect")
        payload = client.post("/predict").get_json()
        assert payload["status"] == "success"
        assert payload["count"] == len(payload["predictions"])
        assert client.get("/predictions?topic=technology").status_code == 200

    def test_timeline_flow(self, client):
        client.post("/collect")
        client.post("/predict")
        update = client.post("/timeline/update").get_json()
        assert update["eventsCount"] == 3
        events = client.get("/timeline?type=historical&sortOrder=desc").get_json()["events"]
        assert len(events) == 3
        assert all(event["type"] == "historical" for event in events)
        assert events[0]["date"] > events[-1]["date"]
        tagged = client.get("/timeline?tags=reddit").get_json()
        assert tagged["count"] == 1
        stats = client.get("/timeline/stats").get_json()["statistics"]
        assert stats["total"] == 3
        assert stats["average_confidence"] == 0
        assert {"tag": "news", "count": 1} in stats["top_tags"]

    def test_bad_filter_value(self, client):
        assert client.get("/timeline?minConfidence=high").status_code == 400
        assert client.get("/timeline?startDate=yesterday").status_code == 400
