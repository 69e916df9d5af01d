"""Notification schemas."""

from core.schemas.notification.category_setting import CategorySetting
from core.schemas.notification.delivery_context import NotificationDeliveryContext
from core.schemas.notification.delivery_report import DeliveryReport
from core.schemas.notification.notification_payload import (
    NotificationAction,
    NotificationPayload,
)
from core.schemas.notification.notification_preferences_data import (
    NotificationPreferencesData,
)
from core.schemas.notification.notification_preferences_update import (
    NotificationPreferencesUpdate,
)
from core.schemas.notification.tick_summary import TickSummary

__all__ = [
    "CategorySetting",
    "DeliveryReport",
    "NotificationAction",
    "NotificationDeliveryContext",
    "NotificationPayload",
    "NotificationPreferencesData",
    "NotificationPreferencesUpdate",
    "TickSummary",
]
