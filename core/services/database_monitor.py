"""Background reconnection watcher for the calendar database."""

import threading

from django.db import connection
from django.db.utils import OperationalError

import structlog

logger = structlog.get_logger(__name__)

MAX_BACKOFF_SECONDS = 300


def backoff_interval(failures: int, base_seconds: int, grace_failures: int) -> int:
    """Return the wait before the next reconnection attempt.

    The base interval is used for the first ``grace_failures`` attempts,
    then doubles per failure up to ten times the base, never above five
    minutes.
    """
    if failures <= grace_failures:
        return base_seconds
    multiplier = min(2 ** (failures - grace_failures), 10)
    return int(min(base_seconds * multiplier, MAX_BACKOFF_SECONDS))


class DatabaseMonitor:
    """Polls the database only while it is down.

    Started by the readiness check when the database connection is lost;
    exits on its own once a connection succeeds. The scheduler keeps
    running meanwhile and its passes fail until the database is back.
    """

    def __init__(
        self,
        check_interval_seconds: int = 30,
        max_consecutive_failures: int = 3,
    ) -> None:
        """Initialize the database monitor.

        Args:
            check_interval_seconds: Base interval between reconnection attempts
            max_consecutive_failures: Failures before backoff starts
        """
        self.check_interval_seconds = check_interval_seconds
        self.max_consecutive_failures = max_consecutive_failures
        self._is_running = False
        self._monitor_thread: threading.Thread | None = None
        self._stop_event = threading.Event()
        self._consecutive_failures = 0

    def start_monitoring(self) -> None:
        """Start the watcher thread unless one is already running."""
        if self._is_running:
            return

        self._is_running = True
        self._stop_event.clear()
        self._consecutive_failures = 0
        self._monitor_thread = threading.Thread(
            target=self._monitor_loop,
            name="DatabaseMonitor",
            daemon=True,
        )
        self._monitor_thread.start()
        logger.info("database_monitor_started")

    def stop_monitoring(self) -> None:
        """Stop the watcher thread."""
        if not self._is_running:
            return

        self._is_running = False
        self._stop_event.set()
        if self._monitor_thread is not None:
            self._monitor_thread.join(timeout=5.0)
            self._monitor_thread = None
        logger.info("database_monitor_stopped")

    def _monitor_loop(self) -> None:
        while not self._stop_event.is_set():
            if self.check_connection():
                logger.info(
                    "database_connection_recovered",
                    failures=self._consecutive_failures,
                )
                self._consecutive_failures = 0
                self._is_running = False
                return

            self._consecutive_failures += 1
            if self._consecutive_failures % 10 == 0:
                logger.warning(
                    "database_still_unavailable",
                    attempts=self._consecutive_failures,
                )

            self._stop_event.wait(
                timeout=backoff_interval(
                    self._consecutive_failures,
                    self.check_interval_seconds,
                    self.max_consecutive_failures,
                )
            )

    def check_connection(self) -> bool:
        """Return True if a database connection can be established."""
        try:
            connection.ensure_connection()
        except OperationalError:
            return False
        except Exception as e:
            logger.error("database_check_failed", error=str(e))
            return False
        return True

    @property
    def is_monitoring(self) -> bool:
        """Return True while the watcher thread is active."""
        return self._is_running

    @property
    def consecutive_failures(self) -> int:
        """Return the failed attempts since the monitor started."""
        return self._consecutive_failures


database_monitor = DatabaseMonitor()
