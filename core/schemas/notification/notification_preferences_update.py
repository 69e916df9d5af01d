"""Request schema for updating notification preferences."""

from pydantic import field_validator

from core.enums import NotificationFrequency
from core.schemas.base_schema_model import BaseSchemaModel
from core.services.time_windows import parse_hhmm


class NotificationPreferencesUpdate(BaseSchemaModel):
    """Partial update of a user's notification preferences.

    Only fields present in the request are written; omitted fields keep
    their stored (or default) value.
    """

    tides_enabled: bool | None = None
    sports_enabled: bool | None = None
    astronomy_enabled: bool | None = None
    agriculture_enabled: bool | None = None
    cultural_enabled: bool | None = None
    holidays_enabled: bool | None = None

    tides_frequency: NotificationFrequency | None = None
    sports_frequency: NotificationFrequency | None = None
    astronomy_frequency: NotificationFrequency | None = None
    agriculture_frequency: NotificationFrequency | None = None
    cultural_frequency: NotificationFrequency | None = None
    holidays_frequency: NotificationFrequency | None = None

    preferred_notification_time: str | None = None
    quiet_hours_start: str | None = None
    quiet_hours_end: str | None = None

    @field_validator(
        "preferred_notification_time", "quiet_hours_start", "quiet_hours_end"
    )
    @classmethod
    def _validate_time_of_day(cls, value: str | None) -> str | None:
        if value is not None:
            parse_hhmm(value)
        return value

    def changed_fields(self) -> dict:
        """Return the fields supplied in the request, by model field name."""
        return self.model_dump(exclude_unset=True, exclude_none=True)
