"""Exception handling utilities for the calendar service."""

from core.exceptions.downstream_exceptions import (
    DownstreamServiceError,
    DownstreamServiceUnavailableError,
)
from core.exceptions.handlers import custom_exception_handler
from core.exceptions.notification_exceptions import (
    InvalidTimeFormatError,
    NotificationError,
    PushNotConfiguredError,
    TideLocationNotFoundError,
)

__all__ = [
    "DownstreamServiceError",
    "DownstreamServiceUnavailableError",
    "InvalidTimeFormatError",
    "NotificationError",
    "PushNotConfiguredError",
    "TideLocationNotFoundError",
    "custom_exception_handler",
]
