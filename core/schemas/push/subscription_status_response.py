"""Response schema for push subscription status."""

from datetime import datetime

from core.schemas.base_schema_model import BaseSchemaModel


class SubscriptionDetail(BaseSchemaModel):
    """Public view of a stored push subscription."""

    id: int
    endpoint: str
    user_agent: str | None = None
    created_at: datetime


class SubscriptionStatusResponse(BaseSchemaModel):
    """Whether the current user has at least one registered device."""

    is_subscribed: bool
    subscription: SubscriptionDetail | None = None
