"""Notification-related enumerations.

This module contains enums for preference categories, frequency tiers,
event types and push delivery outcomes used throughout the calendar service.
"""

from enum import Enum


class NotificationCategory(str, Enum):
    """User-facing notification categories.

    Each category has its own enabled flag and frequency tier in the user's
    notification preferences and maps to one or more event types.
    """

    TIDES = "tides"
    SPORTS = "sports"
    ASTRONOMY = "astronomy"
    AGRICULTURE = "agriculture"
    CULTURAL = "cultural"
    HOLIDAYS = "holidays"


class NotificationFrequency(str, Enum):
    """Delivery frequency tier for a notification category.

    NEVER suppresses delivery for the category even when it is enabled.
    """

    IMMEDIATE = "immediate"
    DAILY = "daily"
    WEEKLY = "weekly"
    NEVER = "never"


class EventType(str, Enum):
    """Category codes of calendar events stored in the events table."""

    TIDE = "tide"
    MATCH_LIGA = "match_liga"
    UEFA = "uefa"
    FIFA = "fifa"
    ASTRONOMY = "astronomy"
    MOON = "moon"
    AGRICULTURE = "agriculture"
    EVENT_PT = "event_pt"
    CULTURAL = "cultural"
    HOLIDAY = "holiday"
    CUSTOM = "custom"


class DeliveryOutcome(str, Enum):
    """Result of a single push delivery attempt to one device.

    EXPIRED means the push service reported the registration as gone and
    the subscription should be pruned.
    """

    DELIVERED = "delivered"
    EXPIRED = "expired"
    TRANSIENT_ERROR = "transient_error"
