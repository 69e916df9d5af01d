"""Tests for WorldTidesClient."""

from django.test import TestCase

import requests
import responses

from core.exceptions import DownstreamServiceError, DownstreamServiceUnavailableError
from core.services.downstream import WorldTidesClient

BASE_URL = "https://worldtides.test/api/v3"


class TestWorldTidesClient(TestCase):
    """Test suite for WorldTidesClient."""

    def setUp(self):
        """Set up test fixtures."""
        self.client = WorldTidesClient(api_key="secret", base_url=BASE_URL)

    @responses.activate
    def test_get_extremes_success(self):
        """Test the request parameters and the decoded body."""
        body = {
            "status": 200,
            "extremes": [{"dt": 1736935200, "height": 1.2, "type": "High"}],
            "datum": "LAT",
        }
        responses.add(responses.GET, BASE_URL, json=body, status=200)

        data = self.client.get_extremes(38.7223, -9.1393, 7)

        self.assertEqual(data, body)
        request = responses.calls[0].request
        self.assertIn("extremes=true", request.url)
        self.assertIn("lat=38.7223", request.url)
        self.assertIn("lon=-9.1393", request.url)
        self.assertIn("days=7", request.url)
        self.assertIn("key=secret", request.url)

    @responses.activate
    def test_error_in_body_raises(self):
        """Test that an API-reported error becomes DownstreamServiceError."""
        responses.add(
            responses.GET,
            BASE_URL,
            json={"status": 400, "error": "Invalid key"},
            status=200,
        )

        with self.assertRaises(DownstreamServiceError) as ctx:
            self.client.get_extremes(38.7, -9.1, 7)
        self.assertIn("Invalid key", str(ctx.exception))
        self.assertEqual(ctx.exception.status_code, 400)

    def test_missing_key_raises_without_request(self):
        """Test that no call is made without an API key."""
        client = WorldTidesClient(api_key="", base_url=BASE_URL)

        with self.assertRaises(DownstreamServiceError):
            client.get_extremes(38.7, -9.1, 7)

    @responses.activate
    def test_server_error_raises_unavailable(self):
        """Test 5xx mapping."""
        responses.add(responses.GET, BASE_URL, status=503)

        with self.assertRaises(DownstreamServiceUnavailableError) as ctx:
            self.client.get_extremes(38.7, -9.1, 7)
        self.assertEqual(ctx.exception.status_code, 503)

    @responses.activate
    def test_client_error_raises(self):
        """Test 4xx mapping."""
        responses.add(responses.GET, BASE_URL, status=401, body="Unauthorized")

        with self.assertRaises(DownstreamServiceError) as ctx:
            self.client.get_extremes(38.7, -9.1, 7)
        self.assertEqual(ctx.exception.status_code, 401)

    @responses.activate
    def test_timeout_is_wrapped(self):
        """Test that a timeout surfaces as DownstreamServiceError."""
        responses.add(responses.GET, BASE_URL, body=requests.Timeout("slow"))

        with self.assertRaises(DownstreamServiceError) as ctx:
            self.client.get_extremes(38.7, -9.1, 7)
        self.assertIn("timed out", str(ctx.exception))

    @responses.activate
    def test_connection_error_is_wrapped(self):
        """Test that a connection failure surfaces as DownstreamServiceError."""
        responses.add(
            responses.GET, BASE_URL, body=requests.ConnectionError("refused")
        )

        with self.assertRaises(DownstreamServiceError):
            self.client.get_extremes(38.7, -9.1, 7)

    def test_uses_configured_timeout(self):
        """Test the default per-request timeout."""
        self.assertEqual(self.client.timeout, 10)
