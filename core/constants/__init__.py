"""Constants package for core application."""

from core.constants.http import (
    DEFAULT_RATE_LIMIT_REQUESTS,
    DEFAULT_RATE_LIMIT_STRICT_REQUESTS,
    DEFAULT_RATE_LIMIT_WINDOW,
    PROCESS_TIME_HEADER,
    RATE_LIMIT_MESSAGE,
    RATE_LIMIT_STRICT_MESSAGE,
    REQUEST_ID_HEADER,
    SECURITY_HEADERS,
    SLOW_REQUEST_THRESHOLD,
    STRICT_RATE_LIMIT_PATH_SUFFIXES,
)
from core.constants.notifications import CATEGORY_EVENT_TYPES

__all__ = [
    "CATEGORY_EVENT_TYPES",
    "DEFAULT_RATE_LIMIT_REQUESTS",
    "DEFAULT_RATE_LIMIT_STRICT_REQUESTS",
    "DEFAULT_RATE_LIMIT_WINDOW",
    "PROCESS_TIME_HEADER",
    "RATE_LIMIT_MESSAGE",
    "RATE_LIMIT_STRICT_MESSAGE",
    "REQUEST_ID_HEADER",
    "SECURITY_HEADERS",
    "SLOW_REQUEST_THRESHOLD",
    "STRICT_RATE_LIMIT_PATH_SUFFIXES",
]
