from __future__ import annotations

import re
from typing import Dict, Iterable, List, Mapping, Pattern, Sequence, Tuple

from .models import DataItem, TopicAssignment

TOPIC_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "technology": ("ai", "tech", "software", "digital", "innovation"),
    "politics": ("government", "policy", "election", "political"),
    "economy": ("market", "economy", "financial", "stock", "trade"),
    "health": ("medical", "health", "healthcare", "disease", "treatment"),
    "environment": ("climate", "environmental", "sustainable", "green"),
}

# Tags on timeline events use a slightly narrower vocabulary than grouping.
TAG_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "technology": ("tech", "digital", "software", "ai", "innovation"),
    "politics": ("government", "policy", "election", "political"),
    "economy": ("market", "economic", "financial", "trade"),
    "health": ("health", "medical", "healthcare", "disease"),
    "environment": ("climate", "environmental", "sustainable"),
}


class TopicClassifier:
    """Assigns items to topics by literal keyword matching.

    Keyword patterns are compiled once per classifier. An item can match any
    number of topics; each match carries a relevance score of keyword hits per
    hundred characters of the matched text.
    """

    def __init__(self, keywords: Mapping[str, Sequence[str]] = TOPIC_KEYWORDS) -> None:
        self._patterns: Dict[str, List[Pattern[str]]] = {
            topic: [re.compile(re.escape(keyword.lower())) for keyword in words]
            for topic, words in keywords.items()
        }

    @property
    def topics(self) -> List[str]:
        return list(self._patterns)

    def classify(self, item: DataItem) -> Dict[str, TopicAssignment]:
        content = item.text.lower()
        assignments: Dict[str, TopicAssignment] = {}
        for topic, patterns in self._patterns.items():
            if not any(pattern.search(content) for pattern in patterns):
                continue
            assignments[topic] = TopicAssignment(
                item=item,
                topic=topic,
                relevance_score=_relevance(content, patterns),
            )
        return assignments

    def topics_for(self, item: DataItem) -> List[str]:
        return list(self.classify(item))

    def relevance(self, content: str, topic: str) -> float:
        return _relevance(content.lower(), self._patterns[topic])

    def group(self, items: Iterable[DataItem]) -> Dict[str, List[TopicAssignment]]:
        """Bucket items by topic, preserving collection order within a topic."""
        grouped: Dict[str, List[TopicAssignment]] = {topic: [] for topic in self._patterns}
        for item in items:
            for topic, assignment in self.classify(item).items():
                grouped[topic].append(assignment)
        return grouped


def _relevance(content: str, patterns: Iterable[Pattern[str]]) -> float:
    if not content:
        return 0.0
    hits = sum(len(pattern.findall(content)) for pattern in patterns)
    return hits / len(content) * 100


default_classifier = TopicClassifier()
