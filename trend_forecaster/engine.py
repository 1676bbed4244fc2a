from __future__ import annotations

from datetime import datetime
import logging
from typing import Iterable, List, Optional

from .config import AnalysisConfig
from .errors import InsufficientDataError
from .models import DataItem, Prediction
from .predictions import synthesize_predictions
from .topics import TopicClassifier, default_classifier
from .trends import build_samples, detect_trends

logger = logging.getLogger(__name__)


def generate_trends_and_predictions(
    items: Iterable[DataItem],
    now: Optional[datetime] = None,
    config: Optional[AnalysisConfig] = None,
    classifier: Optional[TopicClassifier] = None,
) -> List[Prediction]:
    """Run classification, trend detection and synthesis over a snapshot of items.

    Raises ``InsufficientDataError`` when fewer than ``minimum_data_points``
    items are supplied. The returned list is a complete replacement for any
    previously published predictions.
    """
    snapshot = list(items)
    config = config or AnalysisConfig()
    classifier = classifier or default_classifier
    now = now or datetime.now().astimezone()
    if len(snapshot) < config.minimum_data_points:
        raise InsufficientDataError(len(snapshot), config.minimum_data_points)

    predictions: List[Prediction] = []
    for topic, assignments in classifier.group(snapshot).items():
        samples = build_samples(assignments)
        trends = detect_trends(topic, samples, neutral_as_negative=config.neutral_as_negative)
        topic_predictions = synthesize_predictions(topic, trends, config, now)
        logger.debug(
            "Topic %s: %d samples, %d trends, %d predictions",
            topic,
            len(samples),
            len(trends),
            len(topic_predictions),
        )
        predictions.extend(topic_predictions)
    logger.info("Generated %d predictions from %d items", len(predictions), len(snapshot))
    return predictions
