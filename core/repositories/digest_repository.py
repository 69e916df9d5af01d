"""Repository for daily digest delivery markers."""

from datetime import date

from django.db import IntegrityError, transaction

from core.models import DigestDelivery


class DigestRepository:
    """Repository for the per-user per-date digest sent markers."""

    @staticmethod
    def was_sent(user_id: int, digest_date: date) -> bool:
        """Return True if a digest was already recorded for the date."""
        return DigestDelivery.objects.filter(
            user_id=user_id, digest_date=digest_date
        ).exists()

    @staticmethod
    def mark_sent(user_id: int, digest_date: date, event_count: int) -> bool:
        """Record a sent digest.

        Returns:
            False if another tick recorded the same digest first
        """
        try:
            with transaction.atomic():
                DigestDelivery.objects.create(
                    user_id=user_id,
                    digest_date=digest_date,
                    event_count=event_count,
                )
        except IntegrityError:
            return False
        return True
