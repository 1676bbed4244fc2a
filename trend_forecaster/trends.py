from __future__ import annotations

from typing import Iterable, List, Optional

from .models import SentimentSample, TopicAssignment, Trend, TrendDirection

MIN_TREND_DURATION = 3


def classify_direction(score: float, neutral_as_negative: bool = True) -> TrendDirection:
    """Map a sentiment score to the direction of the run it seeds.

    There is no neutral trend by default: a zero score seeds a negative run.
    Passing ``neutral_as_negative=False`` gives zero its own direction, which
    is never emitted as a trend.
    """
    if score > 0:
        return TrendDirection.POSITIVE
    if score < 0 or neutral_as_negative:
        return TrendDirection.NEGATIVE
    return TrendDirection.NEUTRAL


def _continues(direction: TrendDirection, score: float) -> bool:
    # Only a strictly signed score extends a run; zero always breaks it.
    if direction is TrendDirection.POSITIVE:
        return score > 0
    if direction is TrendDirection.NEGATIVE:
        return score < 0
    return False


def build_samples(assignments: Iterable[TopicAssignment]) -> List[SentimentSample]:
    samples = [
        SentimentSample(
            timestamp=assignment.item.timestamp,
            sentiment=assignment.item.sentiment.score,
            relevance=assignment.relevance_score,
        )
        for assignment in assignments
    ]
    # sorted() is stable, so equal timestamps keep collection order.
    return sorted(samples, key=lambda sample: sample.timestamp)


class _Run:
    __slots__ = ("direction", "strength", "samples")

    def __init__(self, direction: TrendDirection, sample: SentimentSample) -> None:
        self.direction = direction
        self.strength = float(abs(sample.sentiment))
        self.samples = [sample]

    def extend(self, sample: SentimentSample) -> None:
        self.strength += abs(sample.sentiment)
        self.samples.append(sample)

    def close(self, topic: str) -> Optional[Trend]:
        if self.direction is TrendDirection.NEUTRAL or len(self.samples) < MIN_TREND_DURATION:
            return None
        return Trend(
            topic=topic,
            direction=self.direction,
            strength=self.strength,
            duration=len(self.samples),
            data_points=tuple(self.samples),
        )


def detect_trends(
    topic: str,
    samples: Iterable[SentimentSample],
    neutral_as_negative: bool = True,
) -> List[Trend]:
    """Split time-ordered samples into maximal same-direction runs.

    Runs shorter than three samples are dropped. The scan is greedy and never
    revisits a closed run.
    """
    trends: List[Trend] = []
    current: Optional[_Run] = None
    for sample in samples:
        if current is not None and _continues(current.direction, sample.sentiment):
            current.extend(sample)
            continue
        if current is not None:
            trend = current.close(topic)
            if trend is not None:
                trends.append(trend)
        current = _Run(classify_direction(sample.sentiment, neutral_as_negative), sample)
    if current is not None:
        trend = current.close(topic)
        if trend is not None:
            trends.append(trend)
    return trends
