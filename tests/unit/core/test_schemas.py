"""Unit tests for the pydantic schemas."""

import unittest

from pydantic import ValidationError

from core.enums import NotificationCategory, NotificationFrequency
from core.schemas.notification import (
    CategorySetting,
    NotificationPreferencesData,
    NotificationPreferencesUpdate,
    TickSummary,
)
from core.schemas.push import PushSubscriptionRequest, SubscriptionInfo


class TestNotificationPreferencesData(unittest.TestCase):
    """Tests for NotificationPreferencesData."""

    def test_defaults(self):
        """Test the defaults match the stored column defaults."""
        prefs = NotificationPreferencesData()

        self.assertEqual(prefs.tides_frequency, "immediate")
        self.assertEqual(prefs.preferred_notification_time, "09:00")
        self.assertEqual(
            prefs.active_categories(),
            [
                NotificationCategory.TIDES,
                NotificationCategory.SPORTS,
                NotificationCategory.ASTRONOMY,
                NotificationCategory.CULTURAL,
                NotificationCategory.HOLIDAYS,
            ],
        )

    def test_camel_case_round_trip(self):
        """Test the API shape uses camelCase keys."""
        prefs = NotificationPreferencesData.model_validate(
            {"tidesEnabled": False, "quietHoursStart": "23:15"}
        )

        dumped = prefs.model_dump(by_alias=True)

        self.assertFalse(dumped["tidesEnabled"])
        self.assertEqual(dumped["quietHoursStart"], "23:15")
        self.assertIn("preferredNotificationTime", dumped)

    def test_blank_times_fall_back_to_defaults(self):
        """Test empty stored times behave like the defaults."""
        prefs = NotificationPreferencesData(quiet_hours_start="", quiet_hours_end=None)

        self.assertEqual(prefs.quiet_hours_start, "22:00")
        self.assertEqual(prefs.quiet_hours_end, "08:00")

    def test_invalid_time_rejected(self):
        """Test malformed time strings."""
        with self.assertRaises(ValidationError):
            NotificationPreferencesData(preferred_notification_time="9am")

    def test_invalid_frequency_rejected(self):
        """Test unknown frequency tiers."""
        with self.assertRaises(ValidationError):
            NotificationPreferencesData(sports_frequency="hourly")

    def test_setting_for(self):
        """Test the per-category pair."""
        prefs = NotificationPreferencesData(astronomy_frequency="never")

        setting = prefs.setting_for(NotificationCategory.ASTRONOMY)

        self.assertTrue(setting.enabled)
        self.assertFalse(setting.is_active)
        self.assertNotIn(NotificationCategory.ASTRONOMY, prefs.active_categories())


class TestCategorySetting(unittest.TestCase):
    """Tests for CategorySetting."""

    def test_flags(self):
        """Test is_active and is_immediate combinations."""
        cases = [
            (True, NotificationFrequency.IMMEDIATE, True, True),
            (True, NotificationFrequency.DAILY, True, False),
            (True, NotificationFrequency.NEVER, False, False),
            (False, NotificationFrequency.IMMEDIATE, False, False),
        ]
        for enabled, frequency, active, immediate in cases:
            with self.subTest(enabled=enabled, frequency=frequency):
                setting = CategorySetting(enabled=enabled, frequency=frequency)
                self.assertEqual(setting.is_active, active)
                self.assertEqual(setting.is_immediate, immediate)


class TestNotificationPreferencesUpdate(unittest.TestCase):
    """Tests for NotificationPreferencesUpdate."""

    def test_changed_fields_only_includes_supplied(self):
        """Test partial updates."""
        update = NotificationPreferencesUpdate.model_validate(
            {"sportsEnabled": False, "tidesFrequency": "daily"}
        )

        self.assertEqual(
            update.changed_fields(),
            {"sports_enabled": False, "tides_frequency": "daily"},
        )

    def test_invalid_quiet_hours_rejected(self):
        """Test time validation on update."""
        with self.assertRaises(ValidationError):
            NotificationPreferencesUpdate.model_validate({"quietHoursEnd": "24:30"})


class TestPushSchemas(unittest.TestCase):
    """Tests for the push subscription schemas."""

    def test_subscription_request_requires_keys(self):
        """Test the browser payload must include both keys."""
        with self.assertRaises(ValidationError):
            PushSubscriptionRequest.model_validate(
                {"endpoint": "https://push/1", "keys": {"p256dh": "x"}}
            )

    def test_subscription_request_accepts_browser_shape(self):
        """Test the camelCase userAgent field."""
        request = PushSubscriptionRequest.model_validate(
            {
                "endpoint": "https://push/1",
                "keys": {"p256dh": "x", "auth": "y"},
                "userAgent": "Safari",
            }
        )

        self.assertEqual(request.user_agent, "Safari")

    def test_subscription_info_requires_both_keys(self):
        """Test a key pair missing auth is rejected."""
        with self.assertRaises(ValidationError):
            SubscriptionInfo(endpoint="https://push/1", keys={"p256dh": "x"})


class TestTickSummary(unittest.TestCase):
    """Tests for TickSummary."""

    def test_as_details_drops_job_name(self):
        """Test the job log payload."""
        details = TickSummary(job_name="daily_digest", users_notified=1).as_details()

        self.assertNotIn("job_name", details)
        self.assertEqual(details["users_notified"], 1)
        self.assertFalse(details["timed_out"])
