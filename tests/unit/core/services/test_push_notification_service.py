"""Tests for the web push delivery channel."""

import json
from unittest.mock import Mock, patch

from django.test import TestCase

from pywebpush import WebPushException

from core.enums import DeliveryOutcome, NotificationCategory
from core.exceptions import PushNotConfiguredError
from core.models import PushSubscription
from core.schemas.notification import NotificationPayload
from core.services.push_notification_service import PushNotificationService
from tests.factories import create_preferences, create_subscription, create_user


def _push_error(status_code: int) -> WebPushException:
    response = Mock()
    response.status_code = status_code
    return WebPushException(f"Push failed: {status_code}", response=response)


class PushServiceTestCase(TestCase):
    """Common setup for push channel tests."""

    def setUp(self):
        """Set up a configured channel and a sample payload."""
        self.service = PushNotificationService(
            public_key="public-key",
            private_key="private-key",
            subject="mailto:test@example.com",
            timeout=5,
        )
        self.payload = NotificationPayload(title="Olá", body="Teste", tag="t")


class TestConfiguration(PushServiceTestCase):
    """Tests for the enabled flag."""

    def test_enabled_with_both_keys(self):
        """Test enabled when both VAPID keys are set."""
        self.assertTrue(self.service.enabled)

    def test_disabled_without_private_key(self):
        """Test a missing key disables the channel."""
        service = PushNotificationService(public_key="pub", private_key="")

        self.assertFalse(service.enabled)
        with self.assertRaises(PushNotConfiguredError):
            service.require_enabled()

    def test_send_refuses_when_disabled(self):
        """Test that sending without keys raises."""
        service = PushNotificationService(public_key="", private_key="")

        with self.assertRaises(PushNotConfiguredError):
            service.send_to_user(1, self.payload)

    def test_defaults_come_from_settings(self):
        """Test keys fall back to Django settings."""
        service = PushNotificationService()

        self.assertEqual(service.public_key, "test-vapid-public-key")
        self.assertEqual(service.private_key, "test-vapid-private-key")
        self.assertEqual(service.timeout, 10)


@patch("core.services.push_notification_service.webpush")
class TestDeliver(PushServiceTestCase):
    """Tests for single-device delivery outcomes."""

    keys = {"p256dh": "client-key", "auth": "client-auth"}

    def test_success(self, mock_webpush):
        """Test a delivered message and the pywebpush call."""
        outcome = self.service.deliver("https://push.example/1", self.keys, '{"a":1}')

        self.assertEqual(outcome, DeliveryOutcome.DELIVERED)
        mock_webpush.assert_called_once_with(
            subscription_info={"endpoint": "https://push.example/1", "keys": self.keys},
            data='{"a":1}',
            vapid_private_key="private-key",
            vapid_claims={"sub": "mailto:test@example.com"},
            timeout=5,
        )

    def test_gone_endpoints_are_expired(self, mock_webpush):
        """Test 404 and 410 map to EXPIRED."""
        for status_code in (404, 410):
            mock_webpush.side_effect = _push_error(status_code)
            with self.subTest(status_code=status_code):
                self.assertEqual(
                    self.service.deliver("https://push.example/1", self.keys, "{}"),
                    DeliveryOutcome.EXPIRED,
                )

    def test_other_failures_are_transient(self, mock_webpush):
        """Test server errors and network errors map to TRANSIENT_ERROR."""
        for error in (_push_error(500), _push_error(429), ConnectionError("reset")):
            mock_webpush.side_effect = error
            with self.subTest(error=repr(error)):
                self.assertEqual(
                    self.service.deliver("https://push.example/1", self.keys, "{}"),
                    DeliveryOutcome.TRANSIENT_ERROR,
                )

    def test_exception_without_response_is_transient(self, mock_webpush):
        """Test a push error carrying no response."""
        mock_webpush.side_effect = WebPushException("no response")

        self.assertEqual(
            self.service.deliver("https://push.example/1", self.keys, "{}"),
            DeliveryOutcome.TRANSIENT_ERROR,
        )


@patch("core.services.push_notification_service.webpush")
class TestSendToUser(PushServiceTestCase):
    """Tests for fan-out to a user's devices."""

    def setUp(self):
        """Set up a user with three devices."""
        super().setUp()
        self.user = create_user()
        self.devices = [create_subscription(self.user) for _ in range(3)]

    def test_sends_to_every_device(self, mock_webpush):
        """Test each registration receives the serialized payload."""
        report = self.service.send_to_user(self.user.id, self.payload)

        self.assertEqual(report.attempted, 3)
        self.assertEqual(report.delivered, 3)
        self.assertEqual(mock_webpush.call_count, 3)
        sent = json.loads(mock_webpush.call_args.kwargs["data"])
        self.assertEqual(sent, {"title": "Olá", "body": "Teste", "tag": "t"})

    def test_expired_device_is_pruned_and_others_delivered(self, mock_webpush):
        """Test a gone registration is deleted without affecting the others."""
        gone = self.devices[1].endpoint

        def fake_webpush(subscription_info, **_kwargs):
            if subscription_info["endpoint"] == gone:
                raise _push_error(410)

        mock_webpush.side_effect = fake_webpush

        report = self.service.send_to_user(self.user.id, self.payload)

        self.assertEqual(report.delivered, 2)
        self.assertEqual(report.expired, 1)
        self.assertEqual(report.expired_endpoints, [gone])
        self.assertFalse(PushSubscription.objects.filter(endpoint=gone).exists())
        self.assertEqual(PushSubscription.objects.filter(user=self.user).count(), 2)

    def test_transient_failure_keeps_registration(self, mock_webpush):
        """Test a server error leaves the device registered."""
        mock_webpush.side_effect = _push_error(503)

        report = self.service.send_to_user(self.user.id, self.payload)

        self.assertEqual(report.failed, 3)
        self.assertEqual(report.delivered, 0)
        self.assertEqual(PushSubscription.objects.filter(user=self.user).count(), 3)

    def test_malformed_registration_is_skipped(self, mock_webpush):
        """Test a stored registration without keys does not block the others."""
        broken = create_subscription(self.user, keys={"p256dh": "x"})

        report = self.service.send_to_user(self.user.id, self.payload)

        self.assertEqual(report.attempted, 3)
        self.assertEqual(report.delivered, 3)
        endpoints = {
            c.kwargs["subscription_info"]["endpoint"]
            for c in mock_webpush.call_args_list
        }
        self.assertNotIn(broken.endpoint, endpoints)

    def test_user_without_devices(self, mock_webpush):

        """Test an empty report when nothing is registered."""
        report = self.service.send_to_user(create_user().id, self.payload)

        self.assertEqual(report.attempted, 0)
        mock_webpush.assert_not_called()


@patch("core.services.push_notification_service.webpush")
class TestSendWithPreferences(PushServiceTestCase):
    """Tests for preference-gated sending."""

    def setUp(self):
        """Set up a user with one device."""
        super().setUp()
        self.user = create_user()
        create_subscription(self.user)

    def test_defaults_allow_immediate_tides(self, mock_webpush):
        """Test users without a stored row get the immediate tides default."""
        report = self.service.send_with_preferences(
            self.user.id, NotificationCategory.TIDES, self.payload
        )

        self.assertEqual(report.delivered, 1)

    def test_non_immediate_category_is_suppressed(self, mock_webpush):
        """Test daily categories are not sent immediately."""
        create_preferences(self.user, sports_frequency="daily")

        report = self.service.send_with_preferences(
            self.user.id, NotificationCategory.SPORTS, self.payload
        )

        self.assertIsNone(report)
        mock_webpush.assert_not_called()

    def test_disabled_category_is_suppressed(self, mock_webpush):
        """Test a disabled category is not sent."""
        create_preferences(self.user, tides_enabled=False)

        self.assertIsNone(
            self.service.send_with_preferences(
                self.user.id, NotificationCategory.TIDES, self.payload
            )
        )
