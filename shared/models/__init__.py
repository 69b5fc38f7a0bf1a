"""Shared Pydantic models."""

from .common import (
    HealthResponse,
    HealthStatus,
)

__all__ = [
    "HealthResponse",
    "HealthStatus",
]
