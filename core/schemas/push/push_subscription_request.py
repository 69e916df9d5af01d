"""Request schema for registering a push subscription."""

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel
from core.schemas.push.subscription_keys import SubscriptionKeys


class PushSubscriptionRequest(BaseSchemaModel):
    """Browser push subscription sent by the frontend on subscribe.

    Re-subscribing with an endpoint that already exists refreshes its keys.
    """

    endpoint: str = Field(..., min_length=1, description="Push service endpoint URL")
    keys: SubscriptionKeys
    user_agent: str | None = Field(None, description="Browser user agent")
