"""Structlog processors adding correlation and service metadata."""

import os
import threading

from colorama import Fore, Style, just_fix_windows_console
from structlog.typing import EventDict, WrappedLogger

from core.logging.context import get_request_id

just_fix_windows_console()

_LEVEL_COLORS = {
    "DEBUG": Fore.CYAN,
    "INFO": Fore.GREEN,
    "WARNING": Fore.YELLOW,
    "ERROR": Fore.RED,
    "CRITICAL": Fore.RED + Style.BRIGHT,
}

# Fields rendered in the console prefix or kept out of console lines
_CONSOLE_HIDDEN_FIELDS = frozenset(
    {
        "level",
        "timestamp",
        "request_id",
        "logger",
        "event",
        "process_id",
        "thread_id",
        "service_name",
        "environment",
    }
)


def add_request_context(
    _logger: WrappedLogger, _method_name: str, event_dict: EventDict
) -> EventDict:
    """Add the current request id (or ``tick-<uuid>`` id) to the event."""
    request_id = get_request_id()
    if request_id:
        event_dict["request_id"] = request_id
    return event_dict


def add_service_context(
    _logger: WrappedLogger, _method_name: str, event_dict: EventDict
) -> EventDict:
    """Add the service name and deployment environment to the event."""
    event_dict["service_name"] = os.getenv("SERVICE_NAME", "almanaque-service")
    event_dict["environment"] = os.getenv("ENVIRONMENT", "development")
    return event_dict


def add_process_info(
    _logger: WrappedLogger, _method_name: str, event_dict: EventDict
) -> EventDict:
    """Add process and thread ids; scheduler and push fan-out run on threads."""
    event_dict["process_id"] = os.getpid()
    event_dict["thread_id"] = threading.get_ident()
    return event_dict


def console_renderer(
    _logger: WrappedLogger, _method_name: str, event_dict: EventDict
) -> str:
    """Render an event as one colored console line.

    Format: ``[LEVEL] timestamp | request_id | logger | event key=value ...``
    """
    level = str(event_dict.get("level", "info")).upper()
    color = _LEVEL_COLORS.get(level, Fore.WHITE)

    line = (
        f"{color}[{level:<8}]{Style.RESET_ALL} "
        f"{Fore.WHITE}{event_dict.get('timestamp', '')}{Style.RESET_ALL} | "
        f"{Fore.MAGENTA}{event_dict.get('request_id', '-')}{Style.RESET_ALL} | "
        f"{Fore.BLUE}{event_dict.get('logger', 'root')}{Style.RESET_ALL} | "
        f"{event_dict.get('event', '')}"
    )

    extra = " ".join(
        f"{key}={value}"
        for key, value in event_dict.items()
        if key not in _CONSOLE_HIDDEN_FIELDS
    )
    if extra:
        line += f" {Fore.YELLOW}{extra}{Style.RESET_ALL}"
    return line
