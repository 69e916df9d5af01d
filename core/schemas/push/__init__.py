"""Push subscription schemas."""

from core.schemas.push.push_subscription_request import PushSubscriptionRequest
from core.schemas.push.subscription_info import SubscriptionInfo
from core.schemas.push.subscription_keys import SubscriptionKeys
from core.schemas.push.subscription_status_response import (
    SubscriptionDetail,
    SubscriptionStatusResponse,
)
from core.schemas.push.unsubscribe_request import UnsubscribeRequest

__all__ = [
    "PushSubscriptionRequest",
    "SubscriptionDetail",
    "SubscriptionInfo",
    "SubscriptionKeys",
    "SubscriptionStatusResponse",
    "UnsubscribeRequest",
]
