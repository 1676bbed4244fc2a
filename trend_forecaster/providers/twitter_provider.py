from __future__ import annotations

from typing import Iterable

import requests

from ..models import EngagementMetrics, RawItem, Source
from .base import BaseProvider
from .newsapi_provider import _parse_date


class TwitterProvider(BaseProvider):
    """Searches recent tweets through the Twitter v2 API."""

    BASE_URL = "https://api.twitter.com/2/tweets/search/recent"
    name = "twitter"
    social = True

    def __init__(self, bearer_token: str, query: str = "trending") -> None:
        if not bearer_token:
            raise ValueError("TwitterProvider requires a bearer token")
        self._bearer_token = bearer_token
        self._query = query

    def fetch(self, limit: int = 50) -> Iterable[RawItem]:
        # The search endpoint only accepts 10..100 results per page.
        max_results = min(max(limit, 10), 100)
        response = requests.get(
            self.BASE_URL,
            params={
                "query": self._query,
                "max_results": max_results,
                "tweet.fields": "created_at,public_metrics",
            },
            headers={"Authorization": f"Bearer {self._bearer_token}"},
            timeout=10,
        )
        response.raise_for_status()
        for tweet in response.json().get("data", [])[:limit]:
            text = tweet.get("text")
            if not text:
                continue
            counts = tweet.get("public_metrics") or {}
            tweet_id = tweet.get("id")
            yield RawItem(
                source=Source.TWITTER,
                published_at=_parse_date(tweet.get("created_at")),
                content=text,
                url=f"https://twitter.com/i/web/status/{tweet_id}" if tweet_id else None,
                metrics=EngagementMetrics(
                    likes=counts.get("like_count", 0),
                    shares=counts.get("retweet_count", 0),
                    comments=counts.get("reply_count", 0),
                ),
            )
