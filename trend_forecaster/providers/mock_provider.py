from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional

from ..models import EngagementMetrics, RawItem, Source
from .base import BaseProvider


class MockProvider(BaseProvider):
    """Returns hard-coded news and social posts for offline development."""

    name = "mock"

    def __init__(self, items: Optional[List[RawItem]] = None, now: Optional[datetime] = None) -> None:
        self._items = items
        self._now = now

    def fetch(self, limit: int = 50) -> Iterable[RawItem]:
        items = self._items if self._items is not None else self._sample()
        return items[:limit]

    def _sample(self) -> List[RawItem]:
        now = self._now or datetime.now(timezone.utc)
        return [
            RawItem(
                source=Source.NEWS,
                published_at=now - timedelta(days=3),
                title="Great quarter for software makers",
                description="Analysts call the digital innovation push an excellent bet.",
                url="https://example.com/software-quarter",
            ),
            RawItem(
                source=Source.TWITTER,
                published_at=now - timedelta(days=2),
                content="Climate policy debate is going badly, poor turnout at the green summit",
                metrics=EngagementMetrics(likes=1200, shares=300, comments=45),
            ),
            RawItem(
                source=Source.REDDIT,
                published_at=now - timedelta(days=1),
                title="Healthcare costs: any good news?",
                content="New treatment trial shows positive early results https://example.com/trial",
                metrics=EngagementMetrics(score=842, comments=120),
            ),
        ]
