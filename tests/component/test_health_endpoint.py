"""Component tests for health check endpoints.

Exercises the probes through the full Django request/response cycle,
including URL routing and middleware.
"""

from unittest.mock import patch

from django.db.utils import OperationalError
from django.test import Client, TestCase

from core.services import health_service

API = "/api/v1/almanaque"


class TestHealthCheckEndpointIntegration(TestCase):
    """Component tests for health check endpoints through HTTP."""

    def setUp(self):
        """Set up test fixtures."""
        self.client = Client()
        health_service._cached.clear()

    def tearDown(self):
        """Drop results cached by the test."""
        health_service._cached.clear()

    def test_liveness_endpoint(self):
        """Test GET /health/live returns alive without auth."""
        response = self.client.get(f"{API}/health/live")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "alive"})

    def test_readiness_endpoint_when_healthy(self):
        """Test GET /health/ready reports every dependency."""
        response = self.client.get(f"{API}/health/ready")

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["status"], "ready")
        self.assertTrue(data["ready"])
        self.assertEqual(data["dependencies"]["database"]["status"], "healthy")
        self.assertTrue(data["dependencies"]["push"]["healthy"])

    @patch("core.services.health_service.connection.ensure_connection")
    def test_readiness_degraded_when_database_down(self, mock_ensure_connection):
        """Test a database outage keeps 200 but reports degraded."""
        mock_ensure_connection.side_effect = OperationalError("refused")

        with patch.object(health_service, "_database_monitor", None):
            response = self.client.get(f"{API}/health/ready")

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["status"], "degraded")
        self.assertTrue(data["degraded"])
        self.assertFalse(data["dependencies"]["database"]["healthy"])

    def test_probe_responses_carry_middleware_headers(self):
        """Test request id, timing and security headers."""
        response = self.client.get(f"{API}/health/live")

        self.assertIn("X-Request-ID", response)
        self.assertIn("X-Process-Time", response)
        self.assertEqual(response["X-Frame-Options"], "DENY")
