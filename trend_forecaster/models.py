from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Tuple


class Source(str, Enum):
    NEWS = "news"
    TWITTER = "twitter"
    REDDIT = "reddit"


class SentimentLabel(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class TrendDirection(str, Enum):
    """Direction of a sentiment run.

    Detected trends are only ever ``POSITIVE`` or ``NEGATIVE``. ``NEUTRAL`` is
    the classification of a zero-score sample when zero is not folded into
    the negative direction; runs of neutral samples are never emitted.
    """

    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class EventType(str, Enum):
    HISTORICAL = "historical"
    PREDICTION = "prediction"


@dataclass(frozen=True, slots=True)
class Sentiment:
    score: int
    label: SentimentLabel


@dataclass(frozen=True, slots=True)
class EngagementMetrics:
    """Engagement counts; which ones are present depends on the source."""

    likes: Optional[int] = None
    shares: Optional[int] = None
    comments: Optional[int] = None
    score: Optional[int] = None


@dataclass(frozen=True, slots=True)
class RawItem:
    """Unscored content as returned by a provider."""

    source: Source
    published_at: datetime
    title: Optional[str] = None
    content: Optional[str] = None
    description: Optional[str] = None
    url: Optional[str] = None
    metrics: Optional[EngagementMetrics] = None


@dataclass(frozen=True, slots=True)
class DataItem:
    """A collected piece of content with its ingestion-time sentiment."""

    source: Source
    timestamp: datetime
    sentiment: Sentiment
    title: Optional[str] = None
    content: Optional[str] = None
    description: Optional[str] = None
    url: Optional[str] = None
    metrics: Optional[EngagementMetrics] = None

    def __post_init__(self) -> None:
        if not (self.title or self.content or self.description):
            raise ValueError("DataItem requires a title, description or content")
        if self.timestamp.tzinfo is None or self.timestamp.utcoffset() is None:
            raise ValueError("DataItem timestamp must be timezone-aware")

    @property
    def body(self) -> str:
        return self.description or self.content or ""

    @property
    def text(self) -> str:
        """Title and body as used for topic matching."""
        return f"{self.title or ''} {self.body}"


@dataclass(frozen=True, slots=True)
class TopicAssignment:
    item: DataItem
    topic: str
    relevance_score: float


@dataclass(frozen=True, slots=True)
class SentimentSample:
    timestamp: datetime
    sentiment: int
    relevance: float


@dataclass(frozen=True, slots=True)
class Trend:
    topic: str
    direction: TrendDirection
    strength: float
    duration: int
    data_points: Tuple[SentimentSample, ...]

    @property
    def average_strength(self) -> float:
        return self.strength / self.duration if self.duration else 0.0


@dataclass(frozen=True, slots=True)
class TrendSnapshot:
    direction: TrendDirection
    strength: float


@dataclass(frozen=True, slots=True)
class PredictionDetails:
    summary: str
    analysis: str
    implications: Tuple[str, ...]


@dataclass(frozen=True, slots=True)
class PredictionMetadata:
    data_points: int
    trend_duration: int


@dataclass(frozen=True, slots=True)
class Prediction:
    topic: str
    predicted_date: datetime
    trend: TrendSnapshot
    confidence: float
    details: PredictionDetails
    created_at: datetime
    metadata: PredictionMetadata


@dataclass(frozen=True, slots=True)
class Link:
    type: str
    url: str


@dataclass(slots=True)
class TimelineEvent(ABC):
    id: str
    date: datetime
    title: str
    description: str
    tags: List[str]

    @property
    @abstractmethod
    def type(self) -> EventType:
        """Whether the event is historical or a prediction."""


@dataclass(slots=True)
class HistoricalEvent(TimelineEvent):
    source: Source
    sentiment: Sentiment
    relevance: int
    metrics: Optional[EngagementMetrics] = None
    links: List[Link] = field(default_factory=list)

    @property
    def type(self) -> EventType:
        return EventType.HISTORICAL


@dataclass(slots=True)
class PredictionEvent(TimelineEvent):
    topic: str
    confidence: float
    trend: TrendSnapshot
    implications: Tuple[str, ...]
    analysis: str
    metadata: PredictionMetadata

    @property
    def type(self) -> EventType:
        return EventType.PREDICTION


@dataclass(frozen=True, slots=True)
class TimelineStatistics:
    total: int
    by_type: Dict[str, int]
    by_topic: Dict[str, int]
    average_confidence: float
    top_tags: List[Tuple[str, int]]
