"""Exceptions raised by the notification scheduling subsystem."""


class NotificationError(Exception):
    """Base exception for notification subsystem errors."""


class PushNotConfiguredError(NotificationError):
    """Push channel used without VAPID signing keys configured."""

    def __init__(self, message: str | None = None):
        """Initialize push not configured error.

        Args:
            message: Optional custom error message
        """
        super().__init__(
            message
            or "Push notifications are not configured (missing VAPID keys)"
        )


class InvalidTimeFormatError(NotificationError, ValueError):
    """Time-of-day string is not a valid HH:MM value."""

    def __init__(self, value: object):
        """Initialize invalid time format error.

        Args:
            value: The offending value
        """
        self.value = value
        super().__init__(f"Invalid time of day {value!r}, expected HH:MM")


class TideLocationNotFoundError(NotificationError):
    """Requested tide location is not one of the known coastal locations."""

    def __init__(self, location_name: str, available: list[str]):
        """Initialize tide location not found error.

        Args:
            location_name: Name that was requested
            available: Names of the known locations
        """
        self.location_name = location_name
        self.available = available
        super().__init__(
            f"Location '{location_name}' not found. "
            f"Available locations: {', '.join(available)}"
        )
