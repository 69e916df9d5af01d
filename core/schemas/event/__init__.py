"""Event schemas."""

from core.schemas.event.event_summary import EventSummary

__all__ = ["EventSummary"]
