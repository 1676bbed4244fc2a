"""Sentiment trend detection and forecasting over collected news and social posts."""

from .config import AnalysisConfig, ServiceConfig
from .engine import generate_trends_and_predictions
from .errors import InsufficientDataError, MissingImplicationTableError, TrendForecasterError
from .timeline import TimelineFilters, build_timeline, compute_statistics, query_timeline

__all__ = [
    "AnalysisConfig",
    "ServiceConfig",
    "generate_trends_and_predictions",
    "build_timeline",
    "query_timeline",
    "compute_statistics",
    "TimelineFilters",
    "TrendForecasterError",
    "InsufficientDataError",
    "MissingImplicationTableError",
]
