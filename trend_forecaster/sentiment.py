from __future__ import annotations

from typing import Optional

from .models import Sentiment, SentimentLabel

_POSITIVE = (
    "good",
    "great",
    "awesome",
    "excellent",
    "happy",
    "positive",
)

_NEGATIVE = (
    "bad",
    "terrible",
    "awful",
    "negative",
    "sad",
    "poor",
)


def score_sentiment(text: Optional[str]) -> Sentiment:
    """Score ``text`` from the lexicon: +1 per positive word present, -1 per negative one."""
    if not text:
        return Sentiment(score=0, label=SentimentLabel.NEUTRAL)
    lowered = text.lower()
    pos_hits = sum(1 for token in _POSITIVE if token in lowered)
    neg_hits = sum(1 for token in _NEGATIVE if token in lowered)
    score = pos_hits - neg_hits
    if score > 0:
        return Sentiment(score=score, label=SentimentLabel.POSITIVE)
    if score < 0:
        return Sentiment(score=score, label=SentimentLabel.NEGATIVE)
    return Sentiment(score=score, label=SentimentLabel.NEUTRAL)
