"""Event summary schema."""

from datetime import datetime

from core.schemas.base_schema_model import BaseSchemaModel


class EventSummary(BaseSchemaModel):
    """Read-only projection of an event used to compose notifications."""

    id: int
    title: str
    type: str
    start_at: datetime
    location: str | None = None
