"""Push subscription key pair schema."""

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel


class SubscriptionKeys(BaseSchemaModel):
    """Encryption keys a browser hands out with its push subscription."""

    p256dh: str = Field(..., min_length=1, description="Client public key")
    auth: str = Field(..., min_length=1, description="Client auth secret")
