"""Metrics module using Prometheus."""

from .prometheus_metrics import (
    HTTPMetrics,
    LessonMetrics,
    setup_metrics,
    get_metrics_handler,
)

__all__ = [
    "HTTPMetrics",
    "LessonMetrics",
    "setup_metrics",
    "get_metrics_handler",
]
