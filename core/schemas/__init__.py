"""Schemas for the core app."""

from core.schemas.health import (
    DependencyHealth,
    LivenessResponse,
    ReadinessResponse,
)

__all__ = [
    "DependencyHealth",
    "LivenessResponse",
    "ReadinessResponse",
]
