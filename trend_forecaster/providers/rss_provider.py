from __future__ import annotations

from datetime import datetime, timezone
import logging
from typing import Dict, Iterable, List, Mapping, Optional

import feedparser
import requests

from ..models import RawItem, Source
from .base import BaseProvider

logger = logging.getLogger(__name__)


class RSSProvider(BaseProvider):
    """Fetches news entries from a set of RSS/Atom feeds."""

    DEFAULT_FEEDS: Dict[str, str] = {
        "wired-business": "https://www.wired.com/feed/category/business/latest/rss",
        "wired-science": "https://www.wired.com/feed/category/science/latest/rss",
    }
    name = "rss"

    def __init__(self, feeds: Optional[Mapping[str, str]] = None) -> None:
        self._feeds = dict(feeds or self.DEFAULT_FEEDS)

    def fetch(self, limit: int = 50) -> Iterable[RawItem]:
        results: List[RawItem] = []
        for feed_name, url in self._feeds.items():
            try:
                response = requests.get(url, timeout=10)
                response.raise_for_status()
            except requests.RequestException as exc:
                logger.warning("Skipping feed %s: %s", feed_name, exc)
                continue
            feed = feedparser.parse(response.content)
            for entry in feed.entries or []:
                title = entry.get("title")
                summary = entry.get("summary")
                if not (title or summary):
                    continue
                results.append(
                    RawItem(
                        source=Source.NEWS,
                        published_at=_parse_published(entry),
                        title=title,
                        description=summary,
                        content=_get_content(entry),
                        url=entry.get("link"),
                    )
                )
                if len(results) >= limit:
                    return results
        return results


def _get_content(entry: Mapping[str, object]) -> Optional[str]:
    contents = entry.get("content")
    if not contents:
        return None
    parts: List[str] = []
    for part in contents:
        if isinstance(part, Mapping):
            value = part.get("value")
            if isinstance(value, str):
                parts.append(value)
    return "\n\n".join(parts) if parts else None


def _parse_published(entry: Mapping[str, object]) -> datetime:
    for key in ("published_parsed", "updated_parsed"):
        parsed = entry.get(key)
        if parsed:
            return datetime(*parsed[:6], tzinfo=timezone.utc)
    return datetime.now(timezone.utc)
