from __future__ import annotations

from datetime import datetime, timedelta
import logging
import re
import threading
from typing import Dict, Iterable, List, Optional, Set

import requests

from .config import ServiceConfig
from .models import DataItem, RawItem, Source
from .providers.base import BaseProvider, ProviderList
from .providers.newsapi_provider import NewsAPIProvider
from .providers.reddit_provider import RedditProvider
from .providers.rss_provider import RSSProvider
from .providers.twitter_provider import TwitterProvider
from .sentiment import score_sentiment

logger = logging.getLogger(__name__)


class DataCollector:
    """Pulls raw content from providers and keeps a scored in-memory snapshot.

    Sentiment is computed once, when an item is ingested. Readers always get a
    copy of the collection, so a collection run or a retention cleanup never
    changes a list someone else is iterating over.
    """

    def __init__(self, config: Optional[ServiceConfig] = None, providers: Optional[Iterable[BaseProvider]] = None) -> None:
        self.config = config or ServiceConfig.from_env()
        if providers is not None:
            self.providers: ProviderList = list(providers)
        else:
            self.providers = self._build_providers()
        if not self.providers:
            raise RuntimeError("No providers configured for DataCollector")
        self._items: List[DataItem] = []
        self._seen: Set[str] = set()
        self._lock = threading.Lock()
        self.last_collection: Optional[datetime] = None

    def _build_providers(self) -> ProviderList:
        providers: ProviderList = []
        if self.config.newsapi_key:
            providers.append(NewsAPIProvider(self.config.newsapi_key))
        providers.append(RSSProvider(self.config.rss_feeds or None))
        if self.config.twitter_bearer_token:
            providers.append(TwitterProvider(self.config.twitter_bearer_token, query=self.config.twitter_query))
        if self.config.reddit_access_token:
            providers.append(RedditProvider(self.config.reddit_access_token, subreddit=self.config.reddit_subreddit))
        return providers

    def collect(self, social: Optional[bool] = None) -> Dict[str, int]:
        """Fetch from the providers; returns the number of new items per source.

        ``social=True`` restricts the run to social providers, ``False`` to news
        providers and ``None`` runs all of them.
        """
        fresh: List[DataItem] = []
        for provider in self.providers:
            if social is not None and provider.social != social:
                continue
            try:
                raw_items = list(provider.fetch(limit=self.config.per_provider_limit))
            except requests.RequestException as exc:
                logger.warning("Provider %s failed: %s", provider.name, exc)
                continue
            fresh.extend(self.ingest(raw) for raw in raw_items)
        with self._lock:
            counts = self._store(fresh)
            self.last_collection = datetime.now().astimezone()
        logger.info("Collected %d new items", sum(counts.values()))
        return counts

    @staticmethod
    def ingest(raw: RawItem) -> DataItem:
        text = f"{raw.title or ''} {raw.description or raw.content or ''}"
        return DataItem(
            source=raw.source,
            timestamp=raw.published_at,
            sentiment=score_sentiment(text),
            title=raw.title,
            content=raw.content,
            description=raw.description,
            url=raw.url,
            metrics=raw.metrics,
        )

    def add(self, items: Iterable[DataItem]) -> Dict[str, int]:
        """Store already scored items, skipping duplicates like ``collect``."""
        with self._lock:
            return self._store(items)

    def _store(self, items: Iterable[DataItem]) -> Dict[str, int]:
        # Caller holds the lock.
        counts = {source.value: 0 for source in Source}
        for item in items:
            key = _dedupe_key(item)
            if key and key in self._seen:
                continue
            if key:
                self._seen.add(key)
            self._items.append(item)
            counts[item.source.value] += 1
        return counts

    def snapshot(
        self,
        source: Optional[Source] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[DataItem]:
        with self._lock:
            items = list(self._items)
        if source is not None:
            items = [item for item in items if item.source == source]
        if start is not None:
            items = [item for item in items if item.timestamp >= start]
        if end is not None:
            items = [item for item in items if item.timestamp <= end]
        return items

    def cleanup(self, now: datetime, past_days: int) -> int:
        """Drop items older than the retention window; returns how many were evicted.

        Dedupe keys of evicted items are forgotten too, so the key set stays
        bounded by the retained items.
        """
        cutoff = now - timedelta(days=past_days)
        with self._lock:
            kept = [item for item in self._items if item.timestamp >= cutoff]
            evicted = len(self._items) - len(kept)
            self._items = kept
            self._seen = {key for key in map(_dedupe_key, kept) if key}
        if evicted:
            logger.info("Evicted %d items older than %s", evicted, cutoff.isoformat())
        return evicted


def _dedupe_key(item: DataItem) -> Optional[str]:
    if item.url:
        return item.url
    text = (item.title or item.body).strip().lower()
    normalized = re.sub(r"[^a-z0-9]+", "", text[:120])
    return normalized or None
