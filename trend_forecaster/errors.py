from __future__ import annotations


class TrendForecasterError(Exception):
    """Base class for errors raised by the forecasting core."""


class InsufficientDataError(TrendForecasterError, ValueError):
    """Raised when fewer items are available than the analysis requires."""

    def __init__(self, available: int, required: int) -> None:
        super().__init__(f"Insufficient data points. Need at least {required}, got {available}")
        self.available = available
        self.required = required


class MissingImplicationTableError(TrendForecasterError, LookupError):
    """Raised when no implication phrases exist for a topic/direction pair."""

    def __init__(self, topic: str, direction: str) -> None:
        super().__init__(f"No implications defined for topic {topic!r} with direction {direction!r}")
        self.topic = topic
        self.direction = direction
