"""Push subscription model for web push device registrations."""

from typing import ClassVar

from django.db import models


class PushSubscription(models.Model):
    """A single browser/device registration for web push.

    The endpoint URL is the natural key of a registration. A user may own
    any number of subscriptions (one per device). Rows are removed on
    explicit unsubscribe or when the push service reports the endpoint gone.

    Attributes:
        user: Owner of the registration.
        endpoint: Push service endpoint URL (unique).
        keys: Encryption key pair ``{"p256dh": ..., "auth": ...}``.
        user_agent: Optional browser user agent captured at subscribe time.
    """

    id = models.AutoField(primary_key=True)
    user = models.ForeignKey(
        "core.User",
        on_delete=models.CASCADE,
        related_name="push_subscriptions",
        db_column="user_id",
    )
    endpoint = models.TextField(unique=True)
    keys = models.JSONField()
    user_agent = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Django model metadata."""

        db_table = "push_subscriptions"
        managed = False
        ordering: ClassVar[list[str]] = ["created_at"]

    def __str__(self) -> str:
        """Return string representation of the subscription."""
        return f"Push subscription {self.endpoint[:50]} for user {self.user_id}"

    def __repr__(self) -> str:
        """Return detailed representation of the subscription."""
        return f"<PushSubscription(id={self.id}, user={self.user_id})>"
