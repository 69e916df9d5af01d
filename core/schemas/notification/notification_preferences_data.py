"""Notification preferences schema."""

from operator import attrgetter

from pydantic import Field, field_validator

from core.constants.notifications import (
    DEFAULT_PREFERRED_NOTIFICATION_TIME,
    DEFAULT_QUIET_HOURS_END,
    DEFAULT_QUIET_HOURS_START,
)
from core.enums import NotificationCategory, NotificationFrequency
from core.schemas.base_schema_model import BaseSchemaModel
from core.schemas.notification.category_setting import CategorySetting
from core.services.time_windows import parse_hhmm

_CATEGORY_FIELDS: dict[NotificationCategory, tuple[attrgetter, attrgetter]] = {
    NotificationCategory.TIDES: (
        attrgetter("tides_enabled"),
        attrgetter("tides_frequency"),
    ),
    NotificationCategory.SPORTS: (
        attrgetter("sports_enabled"),
        attrgetter("sports_frequency"),
    ),
    NotificationCategory.ASTRONOMY: (
        attrgetter("astronomy_enabled"),
        attrgetter("astronomy_frequency"),
    ),
    NotificationCategory.AGRICULTURE: (
        attrgetter("agriculture_enabled"),
        attrgetter("agriculture_frequency"),
    ),
    NotificationCategory.CULTURAL: (
        attrgetter("cultural_enabled"),
        attrgetter("cultural_frequency"),
    ),
    NotificationCategory.HOLIDAYS: (
        attrgetter("holidays_enabled"),
        attrgetter("holidays_frequency"),
    ),
}


class NotificationPreferencesData(BaseSchemaModel):
    """A user's notification preferences.

    Serialized with camelCase aliases (``tidesEnabled``,
    ``preferredNotificationTime``, ...) for the API and built from the
    ORM row with ``model_validate``. Defaults mirror the database defaults
    so users without a stored row get the same behavior.
    """

    tides_enabled: bool = True
    sports_enabled: bool = True
    astronomy_enabled: bool = True
    agriculture_enabled: bool = False
    cultural_enabled: bool = True
    holidays_enabled: bool = True

    tides_frequency: NotificationFrequency = NotificationFrequency.IMMEDIATE
    sports_frequency: NotificationFrequency = NotificationFrequency.DAILY
    astronomy_frequency: NotificationFrequency = NotificationFrequency.DAILY
    agriculture_frequency: NotificationFrequency = NotificationFrequency.WEEKLY
    cultural_frequency: NotificationFrequency = NotificationFrequency.WEEKLY
    holidays_frequency: NotificationFrequency = NotificationFrequency.DAILY

    preferred_notification_time: str = Field(
        DEFAULT_PREFERRED_NOTIFICATION_TIME,
        description="Local time of the daily digest (HH:MM)",
    )
    quiet_hours_start: str = Field(
        DEFAULT_QUIET_HOURS_START, description="Quiet hours start (HH:MM)"
    )
    quiet_hours_end: str = Field(
        DEFAULT_QUIET_HOURS_END, description="Quiet hours end (HH:MM)"
    )

    @field_validator(
        "preferred_notification_time",
        "quiet_hours_start",
        "quiet_hours_end",
        mode="before",
    )
    @classmethod
    def _default_blank_times(cls, value, info):
        if value is None or value == "":
            return cls.model_fields[info.field_name].default
        return value

    @field_validator(
        "preferred_notification_time", "quiet_hours_start", "quiet_hours_end"
    )
    @classmethod
    def _validate_time_of_day(cls, value: str) -> str:
        parse_hhmm(value)
        return value

    def setting_for(self, category: NotificationCategory) -> CategorySetting:
        """Return the (enabled, frequency) pair of a category."""
        enabled_of, frequency_of = _CATEGORY_FIELDS[category]
        return CategorySetting(enabled=enabled_of(self), frequency=frequency_of(self))

    def active_categories(self) -> list[NotificationCategory]:
        """Return categories that are enabled with a frequency other than never."""
        return [
            category
            for category in NotificationCategory
            if self.setting_for(category).is_active
        ]
