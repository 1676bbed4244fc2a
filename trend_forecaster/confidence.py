from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Sequence

from .models import Trend

DATA_POINT_WEIGHT = 0.30
DURATION_WEIGHT = 0.25
STRENGTH_WEIGHT = 0.25
CONSISTENCY_WEIGHT = 0.20

DURATION_SATURATION = 30
STRENGTH_SCALE = 100


@dataclass(frozen=True, slots=True)
class ConfidenceBreakdown:
    data_point_score: float
    duration_score: float
    strength_score: float
    consistency_score: float

    @property
    def total(self) -> float:
        return (
            self.data_point_score * DATA_POINT_WEIGHT
            + self.duration_score * DURATION_WEIGHT
            + self.strength_score * STRENGTH_WEIGHT
            + self.consistency_score * CONSISTENCY_WEIGHT
        )


def population_stddev(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    mean = sum(values) / len(values)
    variance = sum((value - mean) ** 2 for value in values) / len(values)
    return math.sqrt(variance)


def score_trend(trend: Trend, minimum_data_points: int) -> ConfidenceBreakdown:
    data_points = len(trend.data_points)
    data_point_score = min(data_points / minimum_data_points, 1.0) if minimum_data_points > 0 else 0.0
    # strength_score is left unclamped, so totals above 1 are possible.
    return ConfidenceBreakdown(
        data_point_score=data_point_score,
        duration_score=min(trend.duration / DURATION_SATURATION, 1.0),
        strength_score=trend.average_strength / STRENGTH_SCALE,
        consistency_score=1 - min(population_stddev([p.sentiment for p in trend.data_points]), 1.0),
    )


def calculate_confidence(trend: Trend, minimum_data_points: int) -> float:
    return score_trend(trend, minimum_data_points).total
