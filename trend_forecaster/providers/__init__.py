from .base import BaseProvider, ProviderList
from .mock_provider import MockProvider
from .newsapi_provider import NewsAPIProvider
from .reddit_provider import RedditProvider
from .rss_provider import RSSProvider
from .twitter_provider import TwitterProvider

__all__ = [
    "BaseProvider",
    "ProviderList",
    "MockProvider",
    "NewsAPIProvider",
    "RSSProvider",
    "RedditProvider",
    "TwitterProvider",
]
