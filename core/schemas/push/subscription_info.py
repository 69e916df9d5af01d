"""Push subscription info schema."""

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel
from core.schemas.push.subscription_keys import SubscriptionKeys


class SubscriptionInfo(BaseSchemaModel):
    """Endpoint and keys needed to deliver to one device."""

    endpoint: str = Field(..., min_length=1)
    keys: SubscriptionKeys
