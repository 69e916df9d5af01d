"""Preference resolver for scheduler ticks.

Turns the stored notification preferences into per-user delivery contexts,
dropping users that are currently in quiet hours or have no devices.
"""

from pydantic import ValidationError

import structlog

from core.exceptions import InvalidTimeFormatError
from core.repositories import PreferenceRepository, SubscriptionRepository
from core.schemas.notification import (
    NotificationDeliveryContext,
    NotificationPreferencesData,
)
from core.services.clock import Clock, system_clock
from core.services.push_notification_service import deliverable_subscriptions
from core.services.time_windows import is_within_quiet_hours

logger = structlog.get_logger(__name__)


class PreferenceResolver:
    """Builds the eligible delivery contexts for one tick."""

    def __init__(
        self,
        clock: Clock | None = None,
        preference_repository: type[PreferenceRepository] = PreferenceRepository,
        subscription_repository: type[SubscriptionRepository] = SubscriptionRepository,
    ) -> None:
        """Initialize the resolver.

        Args:
            clock: Source of the current instant
            preference_repository: Preference store
            subscription_repository: Subscription store
        """
        self.clock = clock or system_clock
        self.preferences = preference_repository
        self.subscriptions = subscription_repository

    def resolve_delivery_candidates(self) -> list[NotificationDeliveryContext]:
        """Return a delivery context for every user eligible this tick.

        Users in quiet hours and users without registered devices are left
        out. A failure while resolving one user is logged and that user is
        skipped; the remaining users are still resolved.

        Returns:
            Contexts in user id order
        """
        local_now = self.clock.local_now()
        contexts: list[NotificationDeliveryContext] = []

        for row in self.preferences.get_all_notification_preferences():
            try:
                context = self._resolve_one(row, local_now)
            except (InvalidTimeFormatError, ValidationError) as e:
                logger.warning(
                    "malformed_preferences_skipped",
                    user_id=row.user_id,
                    error=str(e),
                )
                continue
            except Exception as e:
                logger.error(
                    "preference_resolution_failed",
                    user_id=row.user_id,
                    error=str(e),
                    exc_info=True,
                )
                continue

            if context is not None:
                contexts.append(context)

        logger.debug(
            "delivery_candidates_resolved",
            candidates=len(contexts),
            local_time=local_now.strftime("%H:%M"),
        )
        return contexts

    def _resolve_one(self, row, local_now) -> NotificationDeliveryContext | None:
        preferences = NotificationPreferencesData.model_validate(row)

        if is_within_quiet_hours(
            preferences.quiet_hours_start, preferences.quiet_hours_end, local_now
        ):
            logger.debug("user_in_quiet_hours", user_id=row.user_id)
            return None

        subscriptions = deliverable_subscriptions(
            row.user_id, self.subscriptions.get_subscriptions_for_user(row.user_id)
        )
        if not subscriptions:
            return None

        return NotificationDeliveryContext(
            user_id=row.user_id,
            preferences=preferences,
            subscriptions=subscriptions,
        )
