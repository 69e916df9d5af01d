"""Category setting schema."""

from pydantic import Field

from core.enums import NotificationFrequency
from core.schemas.base_schema_model import BaseSchemaModel


class CategorySetting(BaseSchemaModel):
    """Enabled flag and frequency tier of one notification category."""

    enabled: bool = Field(..., description="Whether the category is enabled")
    frequency: NotificationFrequency = Field(
        ..., description="Delivery frequency tier"
    )

    @property
    def is_active(self) -> bool:
        """Return True if the category contributes to any delivery."""
        return self.enabled and self.frequency != NotificationFrequency.NEVER

    @property
    def is_immediate(self) -> bool:
        """Return True if the category is set to immediate alerts."""
        return self.enabled and self.frequency == NotificationFrequency.IMMEDIATE
