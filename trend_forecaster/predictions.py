from __future__ import annotations

from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Optional, Tuple

from .config import AnalysisConfig
from .confidence import calculate_confidence
from .errors import MissingImplicationTableError
from .models import (
    Prediction,
    PredictionDetails,
    PredictionMetadata,
    Trend,
    TrendDirection,
    TrendSnapshot,
)

IMPLICATIONS: Dict[str, Dict[TrendDirection, Tuple[str, ...]]] = {
    "technology": {
        TrendDirection.POSITIVE: ("Increased innovation", "New product launches", "Market growth"),
        TrendDirection.NEGATIVE: ("Technical challenges", "Security concerns", "Market saturation"),
    },
    "politics": {
        TrendDirection.POSITIVE: ("Policy reforms", "International cooperation", "Social progress"),
        TrendDirection.NEGATIVE: ("Political tension", "Policy gridlock", "Social unrest"),
    },
    "economy": {
        TrendDirection.POSITIVE: ("Market growth", "Investment opportunities", "Economic stability"),
        TrendDirection.NEGATIVE: ("Market volatility", "Economic uncertainty", "Investment risks"),
    },
    "health": {
        TrendDirection.POSITIVE: ("Medical breakthroughs", "Healthcare improvements", "Public health gains"),
        TrendDirection.NEGATIVE: ("Health challenges", "Healthcare issues", "Public health concerns"),
    },
    "environment": {
        TrendDirection.POSITIVE: ("Environmental progress", "Sustainable solutions", "Conservation success"),
        TrendDirection.NEGATIVE: ("Environmental challenges", "Climate concerns", "Resource depletion"),
    },
}


def strength_label(average_strength: float) -> str:
    if average_strength > 7:
        return "strong"
    if average_strength > 4:
        return "moderate"
    return "mild"


def lookup_implications(topic: str, direction: TrendDirection) -> Tuple[str, ...]:
    try:
        return IMPLICATIONS[topic][direction]
    except KeyError:
        raise MissingImplicationTableError(topic, direction.value) from None


def horizon_dates(now: datetime, days: int) -> List[datetime]:
    return [now + timedelta(days=offset) for offset in range(1, days + 1)]


def describe_trend(topic: str, trend: Trend) -> PredictionDetails:
    return PredictionDetails(
        summary=f"{strength_label(trend.average_strength)} {trend.direction.value} trend in {topic}",
        analysis=f"Based on analysis of {len(trend.data_points)} data points over {trend.duration} days",
        implications=lookup_implications(topic, trend.direction),
    )


def synthesize_predictions(
    topic: str,
    trends: Iterable[Trend],
    config: AnalysisConfig,
    now: Optional[datetime] = None,
) -> List[Prediction]:
    """Project each trend onto every horizon date.

    Results are ordered by trend, then by date. Trends whose confidence falls
    below the configured threshold contribute nothing.
    """
    now = now or datetime.now().astimezone()
    dates = horizon_dates(now, config.future_horizon_days)
    predictions: List[Prediction] = []
    for trend in trends:
        confidence = calculate_confidence(trend, config.minimum_data_points)
        if confidence < config.confidence_threshold:
            continue
        details = describe_trend(topic, trend)
        snapshot = TrendSnapshot(direction=trend.direction, strength=trend.average_strength)
        metadata = PredictionMetadata(data_points=len(trend.data_points), trend_duration=trend.duration)
        for predicted_date in dates:
            predictions.append(
                Prediction(
                    topic=topic,
                    predicted_date=predicted_date,
                    trend=snapshot,
                    confidence=confidence,
                    details=details,
                    created_at=now,
                    metadata=metadata,
                )
            )
    return predictions


def filter_predictions(
    predictions: Iterable[Prediction],
    topic: Optional[str] = None,
    min_confidence: Optional[float] = None,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> List[Prediction]:
    results = list(predictions)
    if topic:
        results = [p for p in results if p.topic == topic]
    if min_confidence is not None:
        results = [p for p in results if p.confidence >= min_confidence]
    if start is not None:
        results = [p for p in results if p.predicted_date >= start]
    if end is not None:
        results = [p for p in results if p.predicted_date <= end]
    return results
