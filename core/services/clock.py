"""Injectable clock used by the scheduling components."""

from datetime import datetime

from django.utils import timezone


class Clock:
    """Source of the current instant.

    Scheduling code never calls ``timezone.now()`` directly so tests can
    substitute a fixed instant.
    """

    def now(self) -> datetime:
        """Return the current aware instant (UTC)."""
        return timezone.now()

    def local_now(self) -> datetime:
        """Return the current instant in the configured local time zone."""
        return timezone.localtime(self.now())


class FixedClock(Clock):
    """Clock frozen at a given instant, advanced manually."""

    def __init__(self, instant: datetime) -> None:
        """Initialize the clock.

        Args:
            instant: Aware datetime the clock reports.
        """
        if timezone.is_naive(instant):
            raise ValueError("FixedClock requires an aware datetime")
        self._instant = instant

    def now(self) -> datetime:
        """Return the frozen instant."""
        return self._instant

    def set(self, instant: datetime) -> None:
        """Move the clock to a new instant."""
        if timezone.is_naive(instant):
            raise ValueError("FixedClock requires an aware datetime")
        self._instant = instant


system_clock = Clock()
