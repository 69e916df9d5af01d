"""Per-user notification preferences model.

One row per user, created lazily on the first preference write. Reads for
users without a row fall back to the column defaults declared here.
"""

from django.db import models

from core.constants.notifications import (
    DEFAULT_PREFERRED_NOTIFICATION_TIME,
    DEFAULT_QUIET_HOURS_END,
    DEFAULT_QUIET_HOURS_START,
)
from core.enums import NotificationFrequency

FREQUENCY_CHOICES = [(frequency.value, frequency.value) for frequency in NotificationFrequency]


def _frequency_field(default: NotificationFrequency) -> models.CharField:
    return models.CharField(
        max_length=16,
        choices=FREQUENCY_CHOICES,
        default=default.value,
    )


class NotificationPreferences(models.Model):
    """Granular notification settings for a single user.

    Six independent (enabled, frequency) pairs, one per notification
    category, plus the preferred digest time and the quiet-hours window.
    All times are local HH:MM strings; quiet hours may wrap past midnight.
    """

    id = models.AutoField(primary_key=True)
    user = models.OneToOneField(
        "core.User",
        on_delete=models.CASCADE,
        related_name="notification_preferences",
        db_column="user_id",
    )

    tides_enabled = models.BooleanField(default=True)
    sports_enabled = models.BooleanField(default=True)
    astronomy_enabled = models.BooleanField(default=True)
    agriculture_enabled = models.BooleanField(default=False)
    cultural_enabled = models.BooleanField(default=True)
    holidays_enabled = models.BooleanField(default=True)

    tides_frequency = _frequency_field(NotificationFrequency.IMMEDIATE)
    sports_frequency = _frequency_field(NotificationFrequency.DAILY)
    astronomy_frequency = _frequency_field(NotificationFrequency.DAILY)
    agriculture_frequency = _frequency_field(NotificationFrequency.WEEKLY)
    cultural_frequency = _frequency_field(NotificationFrequency.WEEKLY)
    holidays_frequency = _frequency_field(NotificationFrequency.DAILY)

    preferred_notification_time = models.CharField(
        max_length=5, default=DEFAULT_PREFERRED_NOTIFICATION_TIME
    )
    quiet_hours_start = models.CharField(max_length=5, default=DEFAULT_QUIET_HOURS_START)
    quiet_hours_end = models.CharField(max_length=5, default=DEFAULT_QUIET_HOURS_END)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Django model metadata."""

        db_table = "notification_preferences"
        managed = False

    def __str__(self) -> str:
        """Return string representation of the preferences."""
        return f"Notification preferences for user {self.user_id}"

    def __repr__(self) -> str:
        """Return detailed representation of the preferences."""
        return (
            f"<NotificationPreferences(user={self.user_id}, "
            f"preferred={self.preferred_notification_time}, "
            f"quiet={self.quiet_hours_start}-{self.quiet_hours_end})>"
        )
