from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from trend_forecaster import ServiceConfig, TimelineFilters
from trend_forecaster.collector import DataCollector
from trend_forecaster.models import EventType, Source
from trend_forecaster.scheduler import CollectionScheduler
from trend_forecaster.serialization import to_dict
from trend_forecaster.service import ForecastService
from trend_forecaster.timeline import SortOrder


def _parse_datetime(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        raise ValueError(f"Invalid date: {value!r}") from None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _parse_float(name: str) -> Optional[float]:
    value = request.args.get(name)
    if value is None or value == "":
        return None
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"`{name}` must be a number") from None


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def create_app(service: Optional[ForecastService] = None) -> Flask:
    app = Flask(__name__)
    if service is None:
        config = ServiceConfig.from_env()
        service = ForecastService(DataCollector(config))
    app.extensions["forecast_service"] = service

    @app.get("/health")
    def healthcheck():
        return {"status": "healthy", "timestamp": _now()}

    @app.post("/collect")
    def collect():
        counts = service.collector.collect()
        return jsonify({"status": "success", "collected": counts, "timestamp": _now()})

    @app.get("/data")
    def data():
        source = request.args.get("source")
        items = service.collector.snapshot(
            source=Source(source) if source else None,
            start=_parse_datetime(request.args.get("startDate")),
            end=_parse_datetime(request.args.get("endDate")),
        )
        return jsonify({"status": "success", "data": to_dict(items), "count": len(items), "timestamp": _now()})

    @app.post("/predict")
    def predict():
        predictions = service.generate_predictions()
        return jsonify(
            {"status": "success", "predictions": to_dict(predictions), "count": len(predictions), "timestamp": _now()}
        )

    @app.get("/predictions")
    def predictions():
        results = service.predictions(
            topic=request.args.get("topic"),
            min_confidence=_parse_float("minConfidence"),
            start=_parse_datetime(request.args.get("startDate")),
            end=_parse_datetime(request.args.get("endDate")),
        )
        return jsonify({"status": "success", "predictions": to_dict(results), "count": len(results), "timestamp": _now()})

    @app.post("/timeline/update")
    def update_timeline():
        events = service.update_timeline()
        return jsonify({"status": "success", "eventsCount": len(events), "timestamp": _now()})

    @app.get("/timeline")
    def timeline():
        event_type = request.args.get("type")
        tags = request.args.get("tags")
        filters = TimelineFilters(
            start_date=_parse_datetime(request.args.get("startDate")),
            end_date=_parse_datetime(request.args.get("endDate")),
            event_type=EventType(event_type) if event_type else None,
            tags=[tag for tag in tags.split(",") if tag] if tags else [],
            min_relevance=_parse_float("minRelevance"),
            min_confidence=_parse_float("minConfidence"),
            sort_order=SortOrder(request.args.get("sortOrder") or "asc"),
        )
        events = service.events(filters)
        return jsonify({"status": "success", "events": to_dict(events), "count": len(events), "timestamp": _now()})

    @app.get("/timeline/stats")
    def timeline_stats():
        stats = to_dict(service.statistics())
        stats["top_tags"] = [{"tag": tag, "count": count} for tag, count in stats["top_tags"]]
        return jsonify({"status": "success", "statistics": stats, "timestamp": _now()})

    @app.errorhandler(ValueError)
    def handle_value_error(exc: ValueError):
        return jsonify({"status": "error", "error": str(exc), "timestamp": _now()}), 400

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception):  # pragma: no cover - runtime guard
        if isinstance(exc, HTTPException):
            return exc
        app.logger.exception("Uncaught exception when handling %s", request.path)
        return jsonify({"status": "error", "error": "Unexpected server error", "detail": str(exc)}), 500

    return app


app = create_app()


if __name__ == "__main__":
    scheduler = CollectionScheduler(app.extensions["forecast_service"].collector)
    scheduler.start()
    try:
        app.run(host="0.0.0.0", port=scheduler.config.port)
    finally:
        scheduler.stop()
