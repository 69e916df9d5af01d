"""Periodic notification scheduler.

Owns the tick loop that drives the delivery gate. One instance per
deployment: running several schedulers would send duplicates.
"""

import threading
import time
import uuid
from datetime import UTC, date

from django.conf import settings

import django_rq
import structlog

from core.constants.notifications import (
    DAILY_DIGEST_JOB_NAME,
    IMMEDIATE_ALERTS_JOB_NAME,
)
from core.jobs.notification_jobs import (
    send_daily_digest_job,
    send_immediate_alerts_job,
)
from core.jobs.tide_jobs import import_tide_events_job
from core.logging.context import clear_request_id, set_request_id
from core.services.clock import Clock, system_clock
from core.services.delivery_gate import DeliveryGate

logger = structlog.get_logger(__name__)


class NotificationScheduler:
    """Fixed-interval tick source for digest and immediate alert delivery.

    Ticks fire on wall-clock multiples of the interval, like a cron
    schedule, so each send window is visited at its start.

    Nothing is persisted between runs: a send window missed while the
    process is down is not caught up on the next start. Tests call
    ``tick()`` directly with a fixed clock instead of starting the thread.
    """

    def __init__(
        self,
        gate: DeliveryGate | None = None,
        clock: Clock | None = None,
        interval_seconds: int | None = None,
        tick_timeout_seconds: int | None = None,
        tide_import_hour_utc: int | None = None,
    ) -> None:
        """Initialize the scheduler.

        Args:
            gate: Delivery gate run on each tick
            clock: Source of the current instant
            interval_seconds: Seconds between ticks
            tick_timeout_seconds: Budget for one tick
            tide_import_hour_utc: UTC hour at which the tide import is enqueued
        """
        self.clock = clock or system_clock
        self.gate = gate or DeliveryGate(clock=self.clock)
        self.interval_seconds = (
            interval_seconds or settings.NOTIFICATION_TICK_INTERVAL_SECONDS
        )
        self.tick_timeout_seconds = (
            tick_timeout_seconds or settings.NOTIFICATION_TICK_TIMEOUT_SECONDS
        )
        self.tide_import_hour_utc = (
            tide_import_hour_utc
            if tide_import_hour_utc is not None
            else settings.TIDE_IMPORT_HOUR_UTC
        )
        self._is_running = False
        self._thread: threading.Thread | None = None
        self._stop_event = threading.Event()
        self._tick_lock = threading.Lock()
        self._last_tide_import: date | None = None

    def start(self) -> bool:
        """Start the tick thread if not already running.

        Returns:
            False when the push channel is not configured
        """
        if self._is_running:
            logger.debug("scheduler_already_running")
            return True

        if not self.gate.push.enabled:
            logger.error("scheduler_not_started_push_not_configured")
            return False

        self._is_running = True
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run_loop,
            name="NotificationScheduler",
            daemon=True,
        )
        self._thread.start()
        logger.info("scheduler_started", interval_seconds=self.interval_seconds)
        return True

    def stop(self) -> None:
        """Stop the tick thread, letting a running tick finish first."""
        if not self._is_running:
            return

        self._is_running = False
        self._stop_event.set()

        if self._thread is not None:
            self._thread.join(timeout=5.0)
            self._thread = None

        logger.info("scheduler_stopped")

    def _run_loop(self) -> None:
        next_run = self._next_boundary(time.time())
        while not self._stop_event.wait(timeout=max(0.0, next_run - time.time())):
            try:
                self.tick()
            except Exception as e:
                logger.error("scheduler_tick_crashed", error=str(e), exc_info=True)

            finished = time.time()
            if finished - next_run >= self.interval_seconds:
                logger.warning(
                    "scheduler_tick_overran_interval",
                    duration_seconds=round(finished - next_run, 1),
                    interval_seconds=self.interval_seconds,
                )
            next_run = self._next_boundary(max(finished, next_run))

    def _next_boundary(self, after: float) -> float:
        """Return the first wall-clock multiple of the interval after ``after``.

        Ticks stay on a fixed grid (``:00``, ``:15``, ... for 900 seconds)
        however long each tick takes; a boundary passed while a tick is
        still running is skipped.
        """
        return (after // self.interval_seconds + 1) * self.interval_seconds

    def tick(self) -> dict:
        """Run one digest pass and one immediate alert pass.

        Both passes share one deadline. Log lines of the tick carry a
        ``tick-<uuid>`` correlation id.

        Returns:
            Summaries keyed by job name (None for a failed pass)
        """
        if not self._tick_lock.acquire(blocking=False):
            logger.warning("scheduler_tick_overlap_skipped")
            return {}

        tick_id = f"tick-{uuid.uuid4()}"
        set_request_id(tick_id)
        try:
            deadline = time.monotonic() + self.tick_timeout_seconds
            logger.info("scheduler_tick_started", at=self.clock.now().isoformat())

            digest = send_daily_digest_job(self.gate, deadline)
            alerts = send_immediate_alerts_job(self.gate, deadline)
            self._maybe_enqueue_tide_import()

            return {
                DAILY_DIGEST_JOB_NAME: digest,
                IMMEDIATE_ALERTS_JOB_NAME: alerts,
            }
        finally:
            clear_request_id()
            self._tick_lock.release()

    def _maybe_enqueue_tide_import(self) -> bool:
        now = self.clock.now().astimezone(UTC)
        today = now.date()
        if now.hour != self.tide_import_hour_utc or self._last_tide_import == today:
            return False

        django_rq.get_queue("default").enqueue(import_tide_events_job)
        self._last_tide_import = today
        logger.info("tide_import_enqueued", date=today.isoformat())
        return True

    @property
    def is_running(self) -> bool:
        """Return True while the tick thread is active."""
        return self._is_running


notification_scheduler = NotificationScheduler()
