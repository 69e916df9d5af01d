"""Time-of-day window evaluation for quiet hours and digest send windows.

All comparisons are done in minutes since local midnight. The functions are
pure: callers pass the local wall-clock time to test against.
"""

import re
from datetime import datetime, time

from core.constants.notifications import DEFAULT_SEND_WINDOW_MINUTES
from core.exceptions import InvalidTimeFormatError

MINUTES_PER_DAY = 24 * 60

_HHMM_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")

LocalTime = time | datetime | int


def parse_hhmm(value: str) -> int:
    """Parse an ``HH:MM`` string into minutes since midnight.

    Args:
        value: Time of day such as ``"08:30"``.

    Returns:
        Minutes since midnight in ``[0, 1440)``.

    Raises:
        InvalidTimeFormatError: If the value is not a valid time of day.
    """
    if not isinstance(value, str):
        raise InvalidTimeFormatError(value)

    match = _HHMM_PATTERN.match(value.strip())
    if match is None:
        raise InvalidTimeFormatError(value)

    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise InvalidTimeFormatError(value)

    return hours * 60 + minutes


def minutes_since_midnight(now: LocalTime) -> int:
    """Convert a local time (or an already-converted minute count) to minutes."""
    if isinstance(now, int):
        if not 0 <= now < MINUTES_PER_DAY:
            raise ValueError(f"Minute of day out of range: {now}")
        return now
    return now.hour * 60 + now.minute


def is_within_quiet_hours(start: str, end: str, now: LocalTime) -> bool:
    """Check whether ``now`` falls inside the quiet-hours window.

    Both bounds are inclusive. When ``start > end`` the window wraps past
    midnight (e.g. 22:00-08:00). A window with ``start == end`` is empty.

    Args:
        start: Quiet hours start as ``HH:MM``.
        end: Quiet hours end as ``HH:MM``.
        now: Local time to test.

    Returns:
        True if notifications must be held back at ``now``.
    """
    start_minutes = parse_hhmm(start)
    end_minutes = parse_hhmm(end)
    current = minutes_since_midnight(now)

    if start_minutes == end_minutes:
        return False

    if start_minutes > end_minutes:
        return current >= start_minutes or current <= end_minutes

    return start_minutes <= current <= end_minutes


def is_within_send_window(
    preferred_time: str,
    now: LocalTime,
    window_minutes: int = DEFAULT_SEND_WINDOW_MINUTES,
) -> bool:
    """Check whether ``now`` is inside ``[preferred_time, preferred_time + window)``.

    The window itself does not wrap past midnight: a preferred time in the
    last ``window_minutes`` of the day only matches until 23:59.

    Args:
        preferred_time: Preferred digest time as ``HH:MM``.
        now: Local time to test.
        window_minutes: Window length in minutes.

    Returns:
        True if a digest may be sent at ``now``.
    """
    delta = minutes_since_midnight(now) - parse_hhmm(preferred_time)
    return 0 <= delta < window_minutes
