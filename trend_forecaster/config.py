from __future__ import annotations

from dataclasses import dataclass, field
import os
from typing import Dict, Optional


def _parse_feeds(value: Optional[str]) -> Dict[str, str]:
    """Parse ``name=url`` pairs; bare URLs are keyed by their position."""
    feeds: Dict[str, str] = {}
    if not value:
        return feeds
    for index, item in enumerate(part.strip() for part in value.split(",")):
        if not item:
            continue
        name, sep, url = item.partition("=")
        if sep:
            feeds[name.strip()] = url.strip()
        else:
            feeds[f"feed{index + 1}"] = item
    return feeds


def _parse_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer if set") from None


def _parse_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{name} must be a number if set") from None


def _parse_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    raise ValueError(f"{name} must be a boolean if set")


@dataclass(slots=True)
class AnalysisConfig:
    """Tuning knobs for trend detection and prediction synthesis."""

    minimum_data_points: int = 100
    confidence_threshold: float = 0.75
    future_horizon_days: int = 7
    past_window_days: int = 30
    # A zero-sentiment sample may seed a negative run unless this is switched off.
    neutral_as_negative: bool = True

    def __post_init__(self) -> None:
        if self.minimum_data_points < 1:
            raise ValueError("minimum_data_points must be at least 1")
        if not 0.0 <= self.confidence_threshold <= 1.0:
            raise ValueError("confidence_threshold must be between 0 and 1")
        if self.future_horizon_days < 0:
            raise ValueError("future_horizon_days must not be negative")
        if self.past_window_days < 0:
            raise ValueError("past_window_days must not be negative")

    @classmethod
    def from_env(cls) -> "AnalysisConfig":
        return cls(
            minimum_data_points=_parse_int("TREND_FORECASTER_MIN_DATA_POINTS", 100),
            confidence_threshold=_parse_float("TREND_FORECASTER_CONFIDENCE_THRESHOLD", 0.75),
            future_horizon_days=_parse_int("TREND_FORECASTER_FUTURE_DAYS", 7),
            past_window_days=_parse_int("TREND_FORECASTER_PAST_DAYS", 30),
            neutral_as_negative=_parse_bool("TREND_FORECASTER_NEUTRAL_AS_NEGATIVE", True),
        )


@dataclass(slots=True)
class ServiceConfig:
    """Runtime configuration for the collector and HTTP service."""

    newsapi_key: Optional[str] = None
    rss_feeds: Dict[str, str] = field(default_factory=dict)
    twitter_bearer_token: Optional[str] = None
    twitter_query: str = "trending"
    reddit_access_token: Optional[str] = None
    reddit_subreddit: str = "all"
    per_provider_limit: int = 50
    news_interval_minutes: int = 60
    social_interval_minutes: int = 30
    cleanup_interval_minutes: int = 10
    port: int = 8000
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)

    def __post_init__(self) -> None:
        for name in ("news_interval_minutes", "social_interval_minutes", "cleanup_interval_minutes"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be at least 1")

    @classmethod
    def from_env(cls) -> "ServiceConfig":
        return cls(
            newsapi_key=os.getenv("NEWSAPI_KEY"),
            rss_feeds=_parse_feeds(os.getenv("TREND_FORECASTER_RSS_FEEDS")),
            twitter_bearer_token=os.getenv("TWITTER_BEARER_TOKEN"),
            twitter_query=os.getenv("TREND_FORECASTER_TWITTER_QUERY") or "trending",
            reddit_access_token=os.getenv("REDDIT_ACCESS_TOKEN"),
            reddit_subreddit=os.getenv("TREND_FORECASTER_SUBREDDIT") or "all",
            per_provider_limit=_parse_int("TREND_FORECASTER_FETCH_LIMIT", 50),
            news_interval_minutes=_parse_int("TREND_FORECASTER_NEWS_INTERVAL", 60),
            social_interval_minutes=_parse_int("TREND_FORECASTER_SOCIAL_INTERVAL", 30),
            cleanup_interval_minutes=_parse_int("TREND_FORECASTER_CLEANUP_INTERVAL", 10),
            port=_parse_int("PORT", 8000),
            analysis=AnalysisConfig.from_env(),
        )
