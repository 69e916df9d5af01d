"""Unit tests for core.models module."""

import unittest
from datetime import UTC, date, datetime

from django.test import TestCase

from core.enums import JobStatus
from core.models import (
    DigestDelivery,
    Event,
    JobLog,
    NotificationPreferences,
    PushSubscription,
    User,
)


class TestModelMeta(unittest.TestCase):
    """Tests for table names shared with the web application."""

    def test_table_names(self):
        """Test that every model maps to the shared schema table."""
        self.assertEqual(User._meta.db_table, "users")
        self.assertEqual(Event._meta.db_table, "events")
        self.assertEqual(NotificationPreferences._meta.db_table, "notification_preferences")
        self.assertEqual(PushSubscription._meta.db_table, "push_subscriptions")
        self.assertEqual(DigestDelivery._meta.db_table, "digest_deliveries")
        self.assertEqual(JobLog._meta.db_table, "job_logs")

    def test_preference_column_defaults(self):
        """Test the defaults of a fresh preferences row."""
        prefs = NotificationPreferences()

        self.assertTrue(prefs.tides_enabled)
        self.assertFalse(prefs.agriculture_enabled)
        self.assertEqual(prefs.tides_frequency, "immediate")
        self.assertEqual(prefs.cultural_frequency, "weekly")
        self.assertEqual(prefs.preferred_notification_time, "09:00")
        self.assertEqual(prefs.quiet_hours_start, "22:00")
        self.assertEqual(prefs.quiet_hours_end, "08:00")

    def test_endpoint_is_unique(self):
        """Test the natural key of subscriptions."""
        self.assertTrue(PushSubscription._meta.get_field("endpoint").unique)

    def test_event_str_and_repr(self):
        """Test Event string representations."""
        event = Event(
            id=5,
            type="tide",
            title="Maré Alta em Faro",
            start_at=datetime(2025, 1, 1, 6, 0, tzinfo=UTC),
        )

        self.assertEqual(str(event), "tide: Maré Alta em Faro")
        self.assertIn("2025-01-01T06:00:00+00:00", repr(event))

    def test_user_str(self):
        """Test User string representation."""
        self.assertEqual(str(User(id=1, email="ana@example.pt")), "ana@example.pt")

    def test_digest_str(self):
        """Test DigestDelivery string representation."""
        marker = DigestDelivery(user_id=3, digest_date=date(2025, 1, 2))

        self.assertEqual(str(marker), "Digest for user 3 on 2025-01-02")


class TestJobLog(TestCase):
    """Tests for the JobLog lifecycle helpers."""

    def test_start_and_complete(self):
        """Test a completed run."""
        log = JobLog.start("daily_digest")
        self.assertEqual(log.status, JobStatus.STARTED.value)

        log.mark_completed({"users_notified": 2})
        log.refresh_from_db()

        self.assertEqual(log.status, JobStatus.COMPLETED.value)
        self.assertEqual(log.details, {"users_notified": 2})
        self.assertGreaterEqual(log.duration_ms, 0)

    def test_mark_failed_keeps_details_when_none_given(self):
        """Test a failed run."""
        log = JobLog.start("tide-import", {"attempt": 1})

        log.mark_failed("boom")
        log.refresh_from_db()

        self.assertEqual(log.status, JobStatus.FAILED.value)
        self.assertEqual(log.error_message, "boom")
        self.assertEqual(log.details, {"attempt": 1})
        self.assertEqual(str(log), "tide-import - failed")
