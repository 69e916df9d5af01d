"""Enumerations for the core app."""

from core.enums.health_status import HealthStatus
from core.enums.job_status import JobStatus
from core.enums.notification import (
    DeliveryOutcome,
    EventType,
    NotificationCategory,
    NotificationFrequency,
)

__all__ = [
    "DeliveryOutcome",
    "EventType",
    "HealthStatus",
    "JobStatus",
    "NotificationCategory",
    "NotificationFrequency",
]
