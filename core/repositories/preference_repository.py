"""Repository for notification preference queries."""

from django.db.models import QuerySet

from core.models import NotificationPreferences
from core.schemas.notification import NotificationPreferencesUpdate


class PreferenceRepository:
    """Repository encapsulating notification preference persistence.

    Preferences are owned by their user: rows are created lazily on the
    first write and only ever updated through an upsert.
    """

    @staticmethod
    def get_all_notification_preferences() -> QuerySet[NotificationPreferences]:
        """Return every stored preference row.

        The scheduler processes the full user population on each tick.
        """
        return NotificationPreferences.objects.all().order_by("user_id")

    @staticmethod
    def get_for_user(user_id: int) -> NotificationPreferences | None:
        """Return the stored preferences of a user, if any."""
        return NotificationPreferences.objects.filter(user_id=user_id).first()

    @staticmethod
    def upsert_for_user(
        user_id: int, update: NotificationPreferencesUpdate
    ) -> NotificationPreferences:
        """Create or update a user's preferences with the supplied fields.

        Args:
            user_id: Owner of the preferences
            update: Validated partial update

        Returns:
            The stored preferences row
        """
        preferences, _created = NotificationPreferences.objects.update_or_create(
            user_id=user_id,
            defaults=update.changed_fields(),
        )
        return preferences
