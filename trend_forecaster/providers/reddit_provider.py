from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable

import requests

from ..models import EngagementMetrics, RawItem, Source
from .base import BaseProvider


class RedditProvider(BaseProvider):
    """Reads the hot listing of a subreddit through Reddit's OAuth API."""

    BASE_URL = "https://oauth.reddit.com/r/{subreddit}/hot"
    USER_AGENT = "trend-forecaster/0.1"
    name = "reddit"
    social = True

    def __init__(self, access_token: str, subreddit: str = "all") -> None:
        if not access_token:
            raise ValueError("RedditProvider requires an access token")
        self._access_token = access_token
        self._subreddit = subreddit

    def fetch(self, limit: int = 50) -> Iterable[RawItem]:
        response = requests.get(
            self.BASE_URL.format(subreddit=self._subreddit),
            params={"limit": limit},
            headers={
                "Authorization": f"Bearer {self._access_token}",
                "User-Agent": self.USER_AGENT,
            },
            timeout=10,
        )
        response.raise_for_status()
        children = response.json().get("data", {}).get("children", [])
        for child in children[:limit]:
            post = child.get("data") or {}
            title = post.get("title")
            if not title:
                continue
            created = post.get("created_utc")
            permalink = post.get("permalink")
            yield RawItem(
                source=Source.REDDIT,
                published_at=(
                    datetime.fromtimestamp(created, tz=timezone.utc) if created is not None else datetime.now(timezone.utc)
                ),
                title=title,
                content=post.get("selftext") or None,
                url=f"https://www.reddit.com{permalink}" if permalink else post.get("url"),
                metrics=EngagementMetrics(score=post.get("score", 0), comments=post.get("num_comments", 0)),
            )
