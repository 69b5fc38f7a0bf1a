"""Prometheus metrics definitions and helpers.

Provides the HTTP and domain metrics exported by the Lessons API.
"""

from typing import Callable

from prometheus_client import (
    Counter,
    Gauge,
    Histogram,
    generate_latest,
    REGISTRY,
    CollectorRegistry,
)


class HTTPMetrics:
    """Request-level metrics recorded by the logging middleware."""

    def __init__(self, registry: CollectorRegistry = REGISTRY) -> None:
        """Initialize HTTP metrics.

        Args:
            registry: Prometheus registry to use
        """
        self.requests_total = Counter(
            "http_requests_total",
            "Total HTTP requests",
            ["method", "endpoint", "status"],
            registry=registry,
        )

        self.request_duration = Histogram(
            "http_request_duration_seconds",
            "HTTP request duration in seconds",
            ["method", "endpoint"],
            buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
            registry=registry,
        )

        self.requests_in_progress = Gauge(
            "http_requests_in_progress",
            "HTTP requests currently in progress",
            ["method"],
            registry=registry,
        )


class LessonMetrics:
    """Domain metrics for items, uploads and notifications."""

    def __init__(self, registry: CollectorRegistry = REGISTRY) -> None:
        """Initialize domain metrics.

        Args:
            registry: Prometheus registry to use
        """
        self.items_created = Counter(
            "items_created_total",
            "Total number of items created",
            ["category"],
            registry=registry,
        )

        self.items_deleted = Counter(
            "items_deleted_total",
            "Total number of items deleted",
            registry=registry,
        )

        self.items_stored = Gauge(
            "items_stored",
            "Number of items currently held in memory",
            registry=registry,
        )

        self.uploads = Counter(
            "uploads_total",
            "Total number of uploaded files stored",
            registry=registry,
        )

        self.upload_bytes = Counter(
            "upload_bytes_total",
            "Total bytes written by file uploads",
            registry=registry,
        )

        self.notifications_sent = Counter(
            "notifications_sent_total",
            "Total number of notifications delivered by background tasks",
            registry=registry,
        )


def setup_metrics(
    registry: CollectorRegistry = REGISTRY,
) -> tuple[HTTPMetrics, LessonMetrics]:
    """Setup and return metric instances.

    Returns:
        Tuple of (HTTPMetrics, LessonMetrics)
    """
    return HTTPMetrics(registry), LessonMetrics(registry)


def get_metrics_handler(registry: CollectorRegistry = REGISTRY) -> Callable[[], bytes]:
    """Get metrics handler for HTTP endpoint.

    Returns:
        Function that generates Prometheus metrics output
    """

    def metrics_handler() -> bytes:
        return generate_latest(registry)

    return metrics_handler
