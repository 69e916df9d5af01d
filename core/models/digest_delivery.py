"""Digest delivery marker model.

Records that a daily digest went out to a user for a given local date so
repeated scheduler ticks inside the same send window do not send it twice.
"""

from typing import ClassVar

from django.db import models


class DigestDelivery(models.Model):
    """Per-user, per-local-date record of a sent daily digest."""

    id = models.AutoField(primary_key=True)
    user = models.ForeignKey(
        "core.User",
        on_delete=models.CASCADE,
        related_name="digest_deliveries",
        db_column="user_id",
    )
    digest_date = models.DateField(help_text="Local calendar date of the digest")
    event_count = models.IntegerField(default=0)
    sent_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Django model metadata."""

        db_table = "digest_deliveries"
        managed = False
        unique_together: ClassVar[list[list[str]]] = [["user", "digest_date"]]
        ordering: ClassVar[list[str]] = ["-digest_date"]

    def __str__(self) -> str:
        """Return string representation of the marker."""
        return f"Digest for user {self.user_id} on {self.digest_date}"
