from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
import itertools
import math
import re
from typing import Callable, Iterable, List, Optional, Sequence, Tuple
from uuid import uuid4

from .models import (
    DataItem,
    EngagementMetrics,
    EventType,
    HistoricalEvent,
    Link,
    Prediction,
    PredictionEvent,
    Source,
    TimelineEvent,
    TimelineStatistics,
)
from .predictions import strength_label
from .topics import TAG_KEYWORDS, TopicClassifier

IdFactory = Callable[[], str]

_URL_RE = re.compile(r"https?://\S+")
_tag_classifier = TopicClassifier(TAG_KEYWORDS)


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(slots=True)
class TimelineFilters:
    """Conjunctive event filters; unset fields do not filter."""

    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    event_type: Optional[EventType] = None
    tags: List[str] = field(default_factory=list)
    min_relevance: Optional[float] = None
    min_confidence: Optional[float] = None
    sort_order: SortOrder = SortOrder.ASC


def random_event_id() -> str:
    return f"evt_{uuid4().hex[:9]}"


def sequential_ids(prefix: str = "evt_") -> IdFactory:
    counter = itertools.count(1)
    return lambda: f"{prefix}{next(counter)}"


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _truncate(text: str, length: int = 50) -> str:
    return f"{text[:length]}..."


def event_title(item: DataItem) -> str:
    if item.title:
        return item.title
    if item.source is Source.TWITTER:
        return f"Tweet: {_truncate(item.content or '')}"
    if item.source is Source.REDDIT:
        return f"Reddit Post: {item.title or ''}"
    if item.description:
        return f"News: {_truncate(item.description)}"
    return "News: No description"


def event_relevance(item: DataItem) -> int:
    """Engagement plus sentiment strength, scaled to an integer in 0..100."""
    score = 0.0
    metrics = item.metrics or EngagementMetrics()
    if metrics.likes:
        score += min(metrics.likes / 1000, 5)
    if metrics.shares:
        score += min(metrics.shares / 500, 5)
    if metrics.comments:
        score += min(metrics.comments / 100, 5)
    score += abs(item.sentiment.score) * 2
    return min(_round_half_up(score * 10), 100)


def event_tags(item: DataItem) -> List[str]:
    tags = [item.source.value, item.sentiment.label.value]
    tags.extend(_tag_classifier.topics_for(item))
    return list(dict.fromkeys(tags))


def extract_links(item: DataItem) -> List[Link]:
    links: List[Link] = []
    if item.url:
        links.append(Link(type="source", url=item.url))
    for url in _URL_RE.findall(item.body):
        if url != item.url:
            links.append(Link(type="reference", url=url))
    return links


def prediction_title(prediction: Prediction) -> str:
    strength = strength_label(prediction.trend.strength).capitalize()
    return f"{strength} {prediction.trend.direction.value} trend predicted in {prediction.topic}"


def prediction_tags(prediction: Prediction) -> List[str]:
    bucket = _round_half_up(prediction.confidence * 10) / 10
    tags = [
        "prediction",
        prediction.topic,
        prediction.trend.direction.value,
        f"confidence-{bucket:g}",
    ]
    return list(dict.fromkeys(tags))


def item_to_event(item: DataItem, id_factory: IdFactory = random_event_id) -> HistoricalEvent:
    return HistoricalEvent(
        id=id_factory(),
        date=item.timestamp,
        title=event_title(item),
        description=item.body,
        tags=event_tags(item),
        source=item.source,
        sentiment=item.sentiment,
        relevance=event_relevance(item),
        metrics=item.metrics,
        links=extract_links(item),
    )


def prediction_to_event(prediction: Prediction, id_factory: IdFactory = random_event_id) -> PredictionEvent:
    return PredictionEvent(
        id=id_factory(),
        date=prediction.predicted_date,
        title=prediction_title(prediction),
        description=prediction.details.summary,
        tags=prediction_tags(prediction),
        topic=prediction.topic,
        confidence=prediction.confidence,
        trend=prediction.trend,
        implications=prediction.details.implications,
        analysis=prediction.details.analysis,
        metadata=prediction.metadata,
    )


def build_timeline(
    items: Iterable[DataItem],
    predictions: Iterable[Prediction],
    id_factory: Optional[IdFactory] = None,
) -> List[TimelineEvent]:
    """Merge historical items and predictions into one date-ordered timeline."""
    id_factory = id_factory or random_event_id
    events: List[TimelineEvent] = [item_to_event(item, id_factory) for item in list(items)]
    events.extend(prediction_to_event(prediction, id_factory) for prediction in list(predictions))
    return sorted(events, key=lambda event: event.date)


def _matches(event: TimelineEvent, filters: TimelineFilters) -> bool:
    if filters.start_date is not None and event.date < filters.start_date:
        return False
    if filters.end_date is not None and event.date > filters.end_date:
        return False
    if filters.event_type is not None and event.type != filters.event_type:
        return False
    if filters.tags and not any(tag in event.tags for tag in filters.tags):
        return False
    if filters.min_relevance is not None and isinstance(event, HistoricalEvent):
        if event.relevance < filters.min_relevance:
            return False
    if filters.min_confidence is not None and isinstance(event, PredictionEvent):
        if event.confidence < filters.min_confidence:
            return False
    return True


def query_timeline(
    events: Iterable[TimelineEvent],
    filters: Optional[TimelineFilters] = None,
) -> List[TimelineEvent]:
    filters = filters or TimelineFilters()
    matched = [event for event in list(events) if _matches(event, filters)]
    return sorted(
        matched,
        key=lambda event: event.date,
        reverse=filters.sort_order == SortOrder.DESC,
    )


def top_tags(events: Iterable[TimelineEvent], limit: int = 10) -> List[Tuple[str, int]]:
    """Most frequent tags; ties keep first-seen order."""
    counts: Counter[str] = Counter()
    for event in events:
        counts.update(event.tags)
    return counts.most_common(limit)


def compute_statistics(events: Sequence[TimelineEvent]) -> TimelineStatistics:
    snapshot = list(events)
    by_type = {EventType.HISTORICAL.value: 0, EventType.PREDICTION.value: 0}
    by_topic: Counter[str] = Counter()
    confidence_total = 0.0
    for event in snapshot:
        by_type[event.type.value] += 1
        if isinstance(event, PredictionEvent):
            by_topic[event.topic] += 1
            confidence_total += event.confidence
    prediction_count = by_type[EventType.PREDICTION.value]
    average = confidence_total / prediction_count if prediction_count else 0.0
    return TimelineStatistics(
        total=len(snapshot),
        by_type=by_type,
        by_topic=dict(by_topic),
        average_confidence=average,
        top_tags=top_tags(snapshot),
    )
