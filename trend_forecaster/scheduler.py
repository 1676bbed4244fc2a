"""
Periodic collection and retention for a running service.

News providers, social providers and the retention cleanup each run on their
own interval from ``ServiceConfig``. Jobs run on a background thread.
"""

from __future__ import annotations

from datetime import datetime, timezone
import logging
import threading
from typing import Callable, List, Optional

import schedule

from .collector import DataCollector
from .config import ServiceConfig

logger = logging.getLogger(__name__)


class CollectionScheduler:
    """Runs collector jobs on fixed intervals in a daemon thread."""

    def __init__(
        self,
        collector: DataCollector,
        config: Optional[ServiceConfig] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.collector = collector
        self.config = config or collector.config
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._scheduler = schedule.Scheduler()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._scheduler.every(self.config.news_interval_minutes).minutes.do(self._guarded, self.collect_news)
        self._scheduler.every(self.config.social_interval_minutes).minutes.do(self._guarded, self.collect_social)
        self._scheduler.every(self.config.cleanup_interval_minutes).minutes.do(self._guarded, self.cleanup)

    @property
    def jobs(self) -> List[schedule.Job]:
        return list(self._scheduler.jobs)

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def collect_news(self) -> None:
        self.collector.collect(social=False)

    def collect_social(self) -> None:
        self.collector.collect(social=True)

    def cleanup(self) -> None:
        self.collector.cleanup(self._clock(), self.config.analysis.past_window_days)

    def _guarded(self, job: Callable[[], None]) -> None:
        try:
            job()
        except Exception:
            logger.exception("Scheduled job %s failed", job.__name__)

    def run_all(self) -> None:
        """Run every job immediately, regardless of its next due time."""
        self._scheduler.run_all()

    def _run(self) -> None:
        self.run_all()
        while not self._stop.is_set():
            self._scheduler.run_pending()
            self._stop.wait(1)

    def start(self) -> None:
        if self.running:
            logger.warning("Collection scheduler already running")
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="collection-scheduler", daemon=True)
        self._thread.start()
        logger.info(
            "Collection scheduler started: news every %d min, social every %d min, cleanup every %d min",
            self.config.news_interval_minutes,
            self.config.social_interval_minutes,
            self.config.cleanup_interval_minutes,
        )

    def stop(self) -> None:
        if not self.running:
            return
        self._stop.set()
        self._thread.join(timeout=5)
        self._thread = None
        logger.info("Collection scheduler stopped")
