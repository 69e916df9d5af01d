"""Delivery gate: decides, per user per tick, what to send.

Two passes share the same candidate list shape:

* the daily digest, sent once inside the user's preferred send window
  with up to ten upcoming events across their active categories;
* immediate tide alerts, sent for every tide starting within the hour to
  users who chose immediate frequency for tides, regardless of the
  preferred time.

Quiet hours and users without devices are filtered out upstream by the
preference resolver.
"""

import time

from django.conf import settings

import structlog

from core.constants.notifications import (
    DAILY_DIGEST_JOB_NAME,
    DEFAULT_SEND_WINDOW_MINUTES,
    DIGEST_BODY_EVENT_COUNT,
    DIGEST_TAG,
    DIGEST_TITLE_TEMPLATE,
    IMMEDIATE_ALERTS_JOB_NAME,
    NOTIFICATION_URL,
    TIDE_ALERT_TAG_PREFIX,
    TIDE_ALERT_TITLE,
)
from core.exceptions import PushNotConfiguredError
from core.repositories import DigestRepository
from core.schemas.event import EventSummary
from core.schemas.notification import (
    NotificationDeliveryContext,
    NotificationPayload,
    TickSummary,
)
from core.services.clock import Clock, system_clock
from core.services.event_relevance import EventRelevanceFetcher
from core.services.preference_resolver import PreferenceResolver
from core.services.push_notification_service import PushNotificationService
from core.services.time_windows import is_within_send_window

logger = structlog.get_logger(__name__)


def compose_digest(events: list[EventSummary]) -> NotificationPayload:
    """Build the daily digest payload for a non-empty event list.

    The body lists the first three titles only, without a "more" marker.
    """
    titles = [event.title for event in events[:DIGEST_BODY_EVENT_COUNT]]
    return NotificationPayload(
        title=DIGEST_TITLE_TEMPLATE.format(count=len(events)),
        body=", ".join(titles),
        url=NOTIFICATION_URL,
        tag=DIGEST_TAG,
    )


def compose_tide_alert(event: EventSummary) -> NotificationPayload:
    """Build the alert payload for a single upcoming tide."""
    body = f"{event.title} - {event.location}" if event.location else event.title
    return NotificationPayload(
        title=TIDE_ALERT_TITLE,
        body=body,
        url=NOTIFICATION_URL,
        tag=f"{TIDE_ALERT_TAG_PREFIX}{event.id}",
    )


class DeliveryGate:
    """Runs the digest and immediate alert passes of a scheduler tick."""

    def __init__(
        self,
        clock: Clock | None = None,
        resolver: PreferenceResolver | None = None,
        relevance: EventRelevanceFetcher | None = None,
        push_service: PushNotificationService | None = None,
        digest_repository: type[DigestRepository] = DigestRepository,
        window_minutes: int | None = None,
        sent_marker_enabled: bool | None = None,
    ) -> None:
        """Initialize the gate.

        Args:
            clock: Source of the current instant, shared with the collaborators
                built here
            resolver: Builds the eligible delivery contexts
            relevance: Looks up events for each context
            push_service: Delivery channel
            digest_repository: Store of per-day digest markers
            window_minutes: Length of the digest send window
            sent_marker_enabled: Record sent digests and skip users already
                served today
        """
        self.clock = clock or system_clock
        self.resolver = resolver or PreferenceResolver(clock=self.clock)
        self.relevance = relevance or EventRelevanceFetcher(clock=self.clock)
        self.push = push_service or PushNotificationService()
        self.digests = digest_repository
        self.window_minutes = window_minutes or getattr(
            settings, "NOTIFICATION_SEND_WINDOW_MINUTES", DEFAULT_SEND_WINDOW_MINUTES
        )
        if sent_marker_enabled is None:
            sent_marker_enabled = getattr(
                settings, "NOTIFICATION_DIGEST_SENT_MARKER_ENABLED", True
            )
        self.sent_marker_enabled = sent_marker_enabled

    def run_daily_digest(self, deadline: float | None = None) -> TickSummary:
        """Send the daily digest to every user whose send window is open.

        Args:
            deadline: ``time.monotonic()`` value after which remaining users
                are skipped

        Returns:
            Counters for the pass

        Raises:
            PushNotConfiguredError: If the push channel has no VAPID keys
        """
        return self._run(DAILY_DIGEST_JOB_NAME, self._deliver_digest, deadline)

    def run_immediate_alerts(self, deadline: float | None = None) -> TickSummary:
        """Send one alert per tide starting within the hour to opted-in users.

        Not gated by the preferred notification time.

        Args:
            deadline: ``time.monotonic()`` value after which remaining users
                are skipped

        Returns:
            Counters for the pass

        Raises:
            PushNotConfiguredError: If the push channel has no VAPID keys
        """
        return self._run(IMMEDIATE_ALERTS_JOB_NAME, self._deliver_alerts, deadline)

    def _run(self, job_name, deliver, deadline) -> TickSummary:
        if not self.push.enabled:
            raise PushNotConfiguredError()

        contexts = self.resolver.resolve_delivery_candidates()
        summary = TickSummary(job_name=job_name, users_considered=len(contexts))

        for index, context in enumerate(contexts):
            if deadline is not None and time.monotonic() > deadline:
                summary.timed_out = True
                logger.warning(
                    "tick_deadline_exceeded",
                    job_name=job_name,
                    users_remaining=len(contexts) - index,
                )
                break

            try:
                deliver(context, summary)
            except Exception as e:
                summary.users_failed += 1
                logger.error(
                    "user_delivery_failed",
                    job_name=job_name,
                    user_id=context.user_id,
                    error=str(e),
                    exc_info=True,
                )

        logger.info("delivery_pass_completed", **summary.model_dump())
        return summary

    def _deliver_digest(
        self, context: NotificationDeliveryContext, summary: TickSummary
    ) -> None:
        local_now = self.clock.local_now()
        if not is_within_send_window(
            context.preferences.preferred_notification_time,
            local_now,
            self.window_minutes,
        ):
            summary.users_skipped += 1
            return

        digest_date = local_now.date()
        if self.sent_marker_enabled and self.digests.was_sent(
            context.user_id, digest_date
        ):
            logger.debug(
                "digest_already_sent",
                user_id=context.user_id,
                digest_date=digest_date.isoformat(),
            )
            summary.users_skipped += 1
            return

        events = self.relevance.digest_events(context)
        if not events:
            summary.users_skipped += 1
            return

        report = self.push.send_to_user(
            context.user_id, compose_digest(events), context.subscriptions
        )
        summary.notifications_sent += 1
        summary.devices_reached += report.delivered
        if report.delivered:
            summary.users_notified += 1
            if self.sent_marker_enabled:
                self.digests.mark_sent(context.user_id, digest_date, len(events))

        logger.info(
            "digest_sent",
            user_id=context.user_id,
            event_count=len(events),
            devices=report.delivered,
        )

    def _deliver_alerts(
        self, context: NotificationDeliveryContext, summary: TickSummary
    ) -> None:
        events = self.relevance.immediate_events(context)
        if not events:
            summary.users_skipped += 1
            return

        reached = 0
        subscriptions = list(context.subscriptions)
        for event in events:
            if not subscriptions:
                break
            try:
                report = self.push.send_to_user(
                    context.user_id, compose_tide_alert(event), subscriptions
                )
            except Exception as e:
                logger.error(
                    "tide_alert_failed",
                    user_id=context.user_id,
                    event_id=event.id,
                    error=str(e),
                    exc_info=True,
                )
                continue

            summary.notifications_sent += 1
            reached += report.delivered
            if report.expired_endpoints:
                pruned = set(report.expired_endpoints)
                subscriptions = [s for s in subscriptions if s.endpoint not in pruned]
            logger.info(
                "tide_alert_sent",
                user_id=context.user_id,
                event_id=event.id,
                devices=report.delivered,
            )

        summary.devices_reached += reached
        if reached:
            summary.users_notified += 1
