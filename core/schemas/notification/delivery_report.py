"""Delivery report schema."""

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel


class DeliveryReport(BaseSchemaModel):
    """Outcome of fanning one notification out to a user's devices."""

    user_id: int
    attempted: int = Field(0, description="Devices a delivery was attempted to")
    delivered: int = Field(0, description="Devices that accepted the message")
    expired: int = Field(0, description="Registrations pruned as gone")
    failed: int = Field(0, description="Transient per-device failures")
    expired_endpoints: list[str] = Field(
        default_factory=list, description="Endpoints pruned during this send"
    )
