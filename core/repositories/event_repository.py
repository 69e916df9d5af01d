"""Repository for calendar event queries."""

from collections.abc import Iterable
from datetime import datetime, timedelta
from typing import Any

from core.enums import EventType
from core.models import Event


class EventRepository:
    """Repository encapsulating event store queries.

    The notification scheduler only uses the read methods; the write
    methods serve the event importers.
    """

    @staticmethod
    def query_events(
        types: Iterable[str],
        start_after: datetime,
        start_before: datetime,
        limit: int,
    ) -> list[Event]:
        """Return events of the given types starting in ``[start_after, start_before)``.

        Args:
            types: Event type codes to include
            start_after: Inclusive lower bound of the start time
            start_before: Exclusive upper bound of the start time
            limit: Maximum number of events, soonest first

        Returns:
            Matching events ordered by start time
        """
        type_codes = [str(getattr(code, "value", code)) for code in types]
        if not type_codes or limit <= 0:
            return []

        return list(
            Event.objects.filter(
                type__in=type_codes,
                start_at__gte=start_after,
                start_at__lt=start_before,
            ).order_by("start_at", "id")[:limit]
        )

    @staticmethod
    def find_tide_near(
        location: str,
        start_at: datetime,
        tolerance: timedelta,
    ) -> Event | None:
        """Return a tide event at a location starting within a tolerance."""
        return Event.objects.filter(
            type=EventType.TIDE.value,
            location=location,
            start_at__gte=start_at - tolerance,
            start_at__lte=start_at + tolerance,
        ).first()

    @staticmethod
    def create_event(**fields: Any) -> Event:
        """Insert a new event."""
        return Event.objects.create(**fields)
