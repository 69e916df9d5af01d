"""Per-tick delivery context schema."""

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel
from core.schemas.notification.notification_preferences_data import (
    NotificationPreferencesData,
)
from core.schemas.push.subscription_info import SubscriptionInfo


class NotificationDeliveryContext(BaseSchemaModel):
    """Working set for one user within a single scheduler tick.

    Built by the preference resolver and discarded after the tick.
    """

    user_id: int = Field(..., description="User the context belongs to")
    preferences: NotificationPreferencesData
    subscriptions: list[SubscriptionInfo] = Field(default_factory=list)
