from __future__ import annotations

from datetime import datetime, timedelta
import logging
import threading
from typing import List, Optional

from .collector import DataCollector
from .config import AnalysisConfig
from .engine import generate_trends_and_predictions
from .models import Prediction, TimelineEvent, TimelineStatistics
from .predictions import filter_predictions
from .timeline import IdFactory, TimelineFilters, build_timeline, compute_statistics, query_timeline

logger = logging.getLogger(__name__)


class ForecastService:
    """Owns the published predictions and timeline for one running service.

    The forecasting functions are stateless; this class hands them snapshots
    and swaps in each run's complete output under a lock.
    """

    def __init__(
        self,
        collector: DataCollector,
        config: Optional[AnalysisConfig] = None,
        id_factory: Optional[IdFactory] = None,
    ) -> None:
        self.collector = collector
        self.config = config or collector.config.analysis
        self._id_factory = id_factory
        self._lock = threading.Lock()
        self._predictions: List[Prediction] = []
        self._events: List[TimelineEvent] = []
        self.last_analysis: Optional[datetime] = None
        self.last_update: Optional[datetime] = None

    def generate_predictions(self, now: Optional[datetime] = None) -> List[Prediction]:
        now = now or datetime.now().astimezone()
        predictions = generate_trends_and_predictions(self.collector.snapshot(), now, self.config)
        with self._lock:
            self._predictions = predictions
            self.last_analysis = now
        return list(predictions)

    def predictions(
        self,
        topic: Optional[str] = None,
        min_confidence: Optional[float] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[Prediction]:
        with self._lock:
            current = list(self._predictions)
        return filter_predictions(current, topic=topic, min_confidence=min_confidence, start=start, end=end)

    def update_timeline(self, now: Optional[datetime] = None) -> List[TimelineEvent]:
        now = now or datetime.now().astimezone()
        history = self.collector.snapshot(start=now - timedelta(days=self.config.past_window_days), end=now)
        with self._lock:
            predictions = list(self._predictions)
        events = build_timeline(history, predictions, self._id_factory)
        with self._lock:
            self._events = events
            self.last_update = now
        logger.info("Timeline rebuilt with %d events", len(events))
        return list(events)

    def events(self, filters: Optional[TimelineFilters] = None) -> List[TimelineEvent]:
        with self._lock:
            current = list(self._events)
        return query_timeline(current, filters)

    def statistics(self) -> TimelineStatistics:
        with self._lock:
            current = list(self._events)
        return compute_statistics(current)
