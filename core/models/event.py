"""Calendar event model.

Events are produced by importers (tides, football fixtures) and by users.
The notification scheduler only ever reads them.
"""

from typing import ClassVar

from django.db import models

from core.enums import EventType


class Event(models.Model):
    """A typed, timestamped calendar item.

    Attributes:
        type: Category code (tide, match_liga, astronomy, ...).
        title: Short human-readable title used in notifications.
        description: Optional longer description.
        start_at: When the event starts.
        end_at: Optional end of the event.
        location: Optional free-text location (e.g. "Faro, Algarve").
        visibility: Region visibility code.
        tags: List of free-form tags.
        meta: Provider-specific metadata.
        source: Where the event came from (manual, worldtides-api, ...).
        created_by: Optional author of user-created events.
    """

    id = models.AutoField(primary_key=True)
    type = models.CharField(
        max_length=32,
        choices=[(event_type.value, event_type.value) for event_type in EventType],
        help_text="Event category code",
    )
    title = models.TextField(help_text="Event title")
    description = models.TextField(null=True, blank=True)
    start_at = models.DateTimeField(help_text="When the event starts")
    end_at = models.DateTimeField(null=True, blank=True)
    location = models.TextField(null=True, blank=True)
    visibility = models.CharField(max_length=16, default="PT")
    tags = models.JSONField(default=list, blank=True)
    meta = models.JSONField(null=True, blank=True)
    source = models.CharField(max_length=64, default="manual")
    created_by = models.ForeignKey(
        "core.User",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="events",
        db_column="created_by",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Django model metadata."""

        db_table = "events"
        managed = False
        ordering: ClassVar[list[str]] = ["start_at"]
        indexes: ClassVar[list] = [
            models.Index(fields=["type", "start_at"]),
            models.Index(fields=["start_at"]),
        ]

    def __str__(self) -> str:
        """Return string representation of event."""
        return f"{self.type}: {self.title}"

    def __repr__(self) -> str:
        """Return detailed representation of event."""
        return (
            f"<Event(id={self.id}, type={self.type}, "
            f"start_at={self.start_at.isoformat() if self.start_at else None})>"
        )
