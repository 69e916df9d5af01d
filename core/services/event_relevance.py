"""Event relevance fetcher.

Read-only projections over the event store for the two delivery paths:
the daily digest and the immediate alerts.
"""

from datetime import timedelta

from django.conf import settings

from core.constants.notifications import (
    CATEGORY_EVENT_TYPES,
    DEFAULT_DIGEST_EVENT_LIMIT,
    DEFAULT_IMMEDIATE_EVENT_LIMIT,
    DIGEST_HORIZON_HOURS,
    IMMEDIATE_ALERT_CATEGORY,
    IMMEDIATE_HORIZON_HOURS,
)
from core.enums import EventType
from core.repositories import EventRepository
from core.schemas.event import EventSummary
from core.schemas.notification import NotificationDeliveryContext
from core.services.clock import Clock, system_clock


class EventRelevanceFetcher:
    """Looks up upcoming events matching a user's enabled categories."""

    def __init__(
        self,
        clock: Clock | None = None,
        event_repository: type[EventRepository] = EventRepository,
        digest_limit: int | None = None,
        immediate_limit: int | None = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            clock: Source of the current instant
            event_repository: Event store
            digest_limit: Maximum events per digest
            immediate_limit: Maximum events per immediate alert pass
        """
        self.clock = clock or system_clock
        self.events = event_repository
        self.digest_limit = digest_limit or getattr(
            settings, "NOTIFICATION_DIGEST_EVENT_LIMIT", DEFAULT_DIGEST_EVENT_LIMIT
        )
        self.immediate_limit = immediate_limit or getattr(
            settings,
            "NOTIFICATION_IMMEDIATE_EVENT_LIMIT",
            DEFAULT_IMMEDIATE_EVENT_LIMIT,
        )

    def digest_event_types(
        self, context: NotificationDeliveryContext
    ) -> list[EventType]:
        """Return the event types covered by the user's active categories."""
        types: list[EventType] = []
        for category in context.preferences.active_categories():
            types.extend(CATEGORY_EVENT_TYPES[category])
        return types

    def digest_events(self, context: NotificationDeliveryContext) -> list[EventSummary]:
        """Return events starting in the next 24 hours for the digest.

        Returns an empty list without touching the store when the user has
        no active category.
        """
        types = self.digest_event_types(context)
        if not types:
            return []

        now = self.clock.now()
        return self._query(
            types, now, now + timedelta(hours=DIGEST_HORIZON_HOURS), self.digest_limit
        )

    def immediate_events(
        self, context: NotificationDeliveryContext
    ) -> list[EventSummary]:
        """Return tide events starting within the next hour.

        Only users with the tides category at immediate frequency get any.
        """
        setting = context.preferences.setting_for(IMMEDIATE_ALERT_CATEGORY)
        if not setting.is_immediate:
            return []

        now = self.clock.now()
        return self._query(
            CATEGORY_EVENT_TYPES[IMMEDIATE_ALERT_CATEGORY],
            now,
            now + timedelta(hours=IMMEDIATE_HORIZON_HOURS),
            self.immediate_limit,
        )

    def _query(self, types, start_after, start_before, limit) -> list[EventSummary]:
        rows = self.events.query_events(
            types=[event_type.value for event_type in types],
            start_after=start_after,
            start_before=start_before,
            limit=limit,
        )
        return [EventSummary.model_validate(row) for row in rows]
