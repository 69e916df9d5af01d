"""Database models for core application."""

from core.models.digest_delivery import DigestDelivery
from core.models.event import Event
from core.models.job_log import JobLog
from core.models.notification_preferences import NotificationPreferences
from core.models.push_subscription import PushSubscription
from core.models.user import User

__all__ = [
    "DigestDelivery",
    "Event",
    "JobLog",
    "NotificationPreferences",
    "PushSubscription",
    "User",
]
