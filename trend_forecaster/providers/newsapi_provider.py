from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Optional

import requests

from ..models import RawItem, Source
from .base import BaseProvider


class NewsAPIProvider(BaseProvider):
    """Fetches top headlines from newsapi.org."""

    BASE_URL = "https://newsapi.org/v2/top-headlines"
    name = "newsapi"

    def __init__(self, api_key: str, language: str = "en") -> None:
        if not api_key:
            raise ValueError("NewsAPIProvider requires an API key")
        self._api_key = api_key
        self._language = language

    def fetch(self, limit: int = 50) -> Iterable[RawItem]:
        response = requests.get(
            self.BASE_URL,
            params={"language": self._language, "pageSize": limit},
            headers={"Authorization": self._api_key},
            timeout=10,
        )
        response.raise_for_status()
        payload = response.json()
        for article in payload.get("articles", []):
            title = article.get("title")
            description = article.get("description")
            if not (title or description):
                continue
            yield RawItem(
                source=Source.NEWS,
                published_at=_parse_date(article.get("publishedAt")),
                title=title,
                description=description,
                content=article.get("content"),
                url=article.get("url"),
            )


def _parse_date(value: Optional[str]) -> datetime:
    if value:
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            pass
    return datetime.now(timezone.utc)
