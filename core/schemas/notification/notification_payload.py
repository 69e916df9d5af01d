"""Push notification payload schema."""

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel


class NotificationAction(BaseSchemaModel):
    """Action button shown on a notification."""

    action: str
    title: str
    icon: str | None = None


class NotificationPayload(BaseSchemaModel):
    """Payload delivered to the service worker of each device.

    ``tag`` controls replacement on the client: notifications sharing a tag
    replace each other instead of stacking.
    """

    title: str = Field(..., description="Notification title")
    body: str = Field(..., description="Notification body text")
    url: str | None = Field(None, description="Page opened on click")
    tag: str | None = Field(None, description="Client-side replacement tag")
    require_interaction: bool | None = None
    actions: list[NotificationAction] | None = None

    def to_json(self) -> str:
        """Serialize for the push service with camelCase keys."""
        return self.model_dump_json(by_alias=True, exclude_none=True)
