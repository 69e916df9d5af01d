"""Tests for HealthService."""

from unittest.mock import Mock, patch

from django.db.utils import OperationalError
from django.test import TestCase

from core.enums import HealthStatus
from core.services.health_service import HealthService


class TestHealthService(TestCase):
    """Test suite for HealthService."""

    def setUp(self):
        """Set up a service with caching disabled."""
        self.service = HealthService(cache_ttl_seconds=0)
        self.service.set_push_check(lambda: True)

    def test_liveness_is_alive(self):
        """Test liveness."""
        self.assertEqual(self.service.get_liveness_status().status, "alive")

    def test_ready_when_all_dependencies_healthy(self):
        """Test the happy path readiness."""
        readiness = self.service.get_readiness_status()

        self.assertTrue(readiness.ready)
        self.assertEqual(readiness.status, "ready")
        self.assertFalse(readiness.degraded)
        self.assertEqual(set(readiness.dependencies), {"database", "redis", "push"})

    def test_missing_push_keys_degrade(self):
        """Test the push channel reports degraded without VAPID keys."""
        self.service.set_push_check(lambda: False)

        readiness = self.service.get_readiness_status()

        self.assertEqual(readiness.status, "degraded")
        self.assertEqual(readiness.dependencies["push"].status, HealthStatus.DEGRADED)

    def test_push_unknown_without_check(self):
        """Test a service with no push check wired is degraded."""
        self.assertFalse(HealthService().check_push_health().healthy)

    @patch("core.services.health_service.connection")
    def test_database_failure_starts_monitor(self, mock_connection):
        """Test the monitor starts on the transition to unhealthy."""
        monitor = Mock()
        self.service.set_database_monitor(monitor)
        mock_connection.ensure_connection.side_effect = OperationalError("down")

        health = self.service.check_database_health()

        self.assertFalse(health.healthy)
        self.assertEqual(health.status, HealthStatus.UNHEALTHY)
        monitor.start_monitoring.assert_called_once()

    @patch("core.services.health_service.connection")
    def test_database_recovery_stops_monitor(self, mock_connection):
        """Test the monitor stops on the transition back to healthy."""
        monitor = Mock()
        self.service.set_database_monitor(monitor)
        mock_connection.ensure_connection.side_effect = OperationalError("down")
        self.service.check_database_health()

        mock_connection.ensure_connection.side_effect = None
        health = self.service.check_database_health()

        self.assertTrue(health.healthy)
        monitor.stop_monitoring.assert_called_once()

    @patch("core.services.health_service.cache")
    def test_redis_failure_is_error(self, mock_cache):
        """Test a cache exception."""
        mock_cache.set.side_effect = ConnectionError("refused")

        health = self.service.check_redis_health()

        self.assertFalse(health.healthy)
        self.assertEqual(health.status, HealthStatus.ERROR)

    @patch("core.services.health_service.connection")
    def test_results_are_cached(self, mock_connection):
        """Test that checks inside the TTL reuse the previous result."""
        service = HealthService(cache_ttl_seconds=60)

        service.check_database_health()
        service.check_database_health()

        mock_connection.ensure_connection.assert_called_once()
