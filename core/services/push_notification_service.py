"""Web push delivery channel.

Fans a notification out to every registered device of a user using
pywebpush, pruning registrations the push service reports as gone.
"""

from concurrent.futures import ThreadPoolExecutor

from django.conf import settings

from pydantic import ValidationError

import structlog
from pywebpush import WebPushException, webpush

from core.enums import DeliveryOutcome, NotificationCategory
from core.exceptions import PushNotConfiguredError
from core.repositories import PreferenceRepository, SubscriptionRepository
from core.schemas.notification import (
    DeliveryReport,
    NotificationPayload,
    NotificationPreferencesData,
)
from core.schemas.push import SubscriptionInfo, SubscriptionKeys

logger = structlog.get_logger(__name__)

# Push service responses meaning the registration no longer exists
EXPIRED_STATUS_CODES = frozenset({404, 410})

MAX_DELIVERY_WORKERS = 8


def deliverable_subscriptions(user_id: int, rows) -> list[SubscriptionInfo]:
    """Convert stored registrations, skipping rows with unusable keys.

    A malformed registration is logged and left out so the user's other
    devices are still targeted.
    """
    subscriptions = []
    for row in rows:
        try:
            subscriptions.append(SubscriptionInfo(endpoint=row.endpoint, keys=row.keys))
        except ValidationError as e:
            logger.warning(
                "malformed_subscription_skipped",
                user_id=user_id,
                endpoint=row.endpoint[:50],
                error=str(e),
            )
    return subscriptions


class PushNotificationService:
    """Push delivery channel signed with the VAPID key pair."""

    def __init__(
        self,
        public_key: str | None = None,
        private_key: str | None = None,
        subject: str | None = None,
        timeout: float | None = None,
        subscription_repository: type[SubscriptionRepository] = SubscriptionRepository,
    ) -> None:
        """Initialize the channel from arguments or Django settings.

        Args:
            public_key: VAPID public key handed to browsers
            private_key: VAPID private key used to sign messages
            subject: VAPID ``sub`` claim (mailto: or https: URL)
            timeout: Per-request timeout in seconds
            subscription_repository: Subscription store used for lookup and pruning
        """
        self.public_key = public_key if public_key is not None else settings.VAPID_PUBLIC_KEY
        self.private_key = (
            private_key if private_key is not None else settings.VAPID_PRIVATE_KEY
        )
        self.subject = subject or settings.VAPID_SUBJECT
        self.timeout = timeout or settings.NOTIFICATION_EXTERNAL_CALL_TIMEOUT_SECONDS
        self.subscriptions = subscription_repository

    @property
    def enabled(self) -> bool:
        """Return True when both VAPID keys are configured."""
        return bool(self.public_key and self.private_key)

    def require_enabled(self) -> None:
        """Raise PushNotConfiguredError unless both VAPID keys are set."""
        if not self.enabled:
            raise PushNotConfiguredError()

    def deliver(
        self, endpoint: str, keys: SubscriptionKeys | dict, payload_json: str
    ) -> DeliveryOutcome:
        """Deliver an encrypted payload to a single device.

        Args:
            endpoint: Push service endpoint of the device
            keys: Client key pair of the registration
            payload_json: Serialized notification payload

        Returns:
            DELIVERED on success, EXPIRED when the registration is gone,
            TRANSIENT_ERROR for anything else

        Raises:
            PushNotConfiguredError: If VAPID keys are missing
        """
        self.require_enabled()
        if isinstance(keys, SubscriptionKeys):
            keys = keys.model_dump()

        try:
            webpush(
                subscription_info={"endpoint": endpoint, "keys": keys},
                data=payload_json,
                vapid_private_key=self.private_key,
                vapid_claims={"sub": self.subject},
                timeout=self.timeout,
            )
        except WebPushException as e:
            status_code = getattr(e.response, "status_code", None)
            if status_code in EXPIRED_STATUS_CODES:
                return DeliveryOutcome.EXPIRED
            logger.warning(
                "push_delivery_failed",
                endpoint=endpoint[:50],
                status_code=status_code,
                error=str(e),
            )
            return DeliveryOutcome.TRANSIENT_ERROR
        except Exception as e:
            logger.warning(
                "push_delivery_error",
                endpoint=endpoint[:50],
                error=str(e),
            )
            return DeliveryOutcome.TRANSIENT_ERROR

        return DeliveryOutcome.DELIVERED

    def send_to_user(
        self,
        user_id: int,
        payload: NotificationPayload,
        subscriptions: list[SubscriptionInfo] | None = None,
    ) -> DeliveryReport:
        """Send a notification to every registered device of a user.

        Devices are attempted concurrently and independently. Expired
        registrations are deleted; transient failures leave the
        registration in place for the next tick.

        Args:
            user_id: Recipient user
            payload: Notification to deliver
            subscriptions: Devices to target; looked up when omitted

        Returns:
            Per-device counters

        Raises:
            PushNotConfiguredError: If VAPID keys are missing
        """
        self.require_enabled()

        if subscriptions is None:
            subscriptions = deliverable_subscriptions(
                user_id, self.subscriptions.get_subscriptions_for_user(user_id)
            )

        report = DeliveryReport(user_id=user_id, attempted=len(subscriptions))
        if not subscriptions:
            logger.debug("no_subscriptions_for_user", user_id=user_id)
            return report

        payload_json = payload.to_json()
        workers = min(MAX_DELIVERY_WORKERS, len(subscriptions))
        with ThreadPoolExecutor(
            max_workers=workers, thread_name_prefix="push-delivery"
        ) as executor:
            outcomes = list(
                executor.map(
                    lambda sub: self.deliver(sub.endpoint, sub.keys, payload_json),
                    subscriptions,
                )
            )

        # Pruning runs on the calling thread so all writes share its DB connection
        for sub, outcome in zip(subscriptions, outcomes, strict=True):
            if outcome == DeliveryOutcome.DELIVERED:
                report.delivered += 1
            elif outcome == DeliveryOutcome.EXPIRED:
                report.expired += 1
                report.expired_endpoints.append(sub.endpoint)
                self.subscriptions.delete_subscription(sub.endpoint)
                logger.info(
                    "subscription_pruned",
                    user_id=user_id,
                    endpoint=sub.endpoint[:50],
                )
            else:
                report.failed += 1

        logger.info(
            "push_sent_to_user",
            user_id=user_id,
            tag=payload.tag,
            delivered=report.delivered,
            expired=report.expired,
            failed=report.failed,
        )
        return report

    def send_with_preferences(
        self,
        user_id: int,
        category: NotificationCategory,
        payload: NotificationPayload,
    ) -> DeliveryReport | None:
        """Send only if the user wants immediate alerts for the category.

        Users without stored preferences are treated as having the defaults.

        Returns:
            The delivery report, or None when the preferences rule it out
        """
        row = PreferenceRepository.get_for_user(user_id)
        preferences = (
            NotificationPreferencesData.model_validate(row)
            if row is not None
            else NotificationPreferencesData()
        )

        if not preferences.setting_for(category).is_immediate:
            logger.debug(
                "push_suppressed_by_preferences",
                user_id=user_id,
                category=category.value,
            )
            return None

        return self.send_to_user(user_id, payload)


push_notification_service = PushNotificationService()
