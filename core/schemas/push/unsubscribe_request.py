"""Request schema for removing a push subscription."""

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel


class UnsubscribeRequest(BaseSchemaModel):
    """Endpoint of the registration to remove."""

    endpoint: str = Field(..., min_length=1)
