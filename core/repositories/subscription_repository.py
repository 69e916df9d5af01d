"""Repository for push subscription queries."""

from django.db.models import QuerySet

from core.models import PushSubscription
from core.schemas.push import PushSubscriptionRequest


class SubscriptionRepository:
    """Repository encapsulating push subscription persistence.

    The endpoint URL is the natural key of a registration.
    """

    @staticmethod
    def get_subscriptions_for_user(user_id: int) -> QuerySet[PushSubscription]:
        """Return all device registrations of a user."""
        return PushSubscription.objects.filter(user_id=user_id)

    @staticmethod
    def get_first_for_user(user_id: int) -> PushSubscription | None:
        """Return the oldest registration of a user, if any."""
        return PushSubscription.objects.filter(user_id=user_id).first()

    @staticmethod
    def upsert(user_id: int, request: PushSubscriptionRequest) -> PushSubscription:
        """Register a device, refreshing keys when the endpoint already exists.

        Args:
            user_id: Owner of the registration
            request: Validated subscription sent by the browser

        Returns:
            The stored subscription
        """
        subscription, _created = PushSubscription.objects.update_or_create(
            endpoint=request.endpoint,
            defaults={
                "user_id": user_id,
                "keys": request.keys.model_dump(),
                "user_agent": request.user_agent,
            },
        )
        return subscription

    @staticmethod
    def delete_subscription(endpoint: str) -> int:
        """Delete a registration by endpoint if it exists.

        Safe to call repeatedly or concurrently for the same endpoint.

        Returns:
            Number of rows deleted (0 or 1)
        """
        deleted, _per_model = PushSubscription.objects.filter(endpoint=endpoint).delete()
        return deleted
