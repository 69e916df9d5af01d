"""Unit tests for SecurityHeadersMiddleware."""

import unittest

from django.http import HttpResponse
from django.test import RequestFactory

from core.constants import SECURITY_HEADERS
from core.middleware.security_headers import SecurityHeadersMiddleware


class TestSecurityHeadersMiddleware(unittest.TestCase):
    """Test cases for SecurityHeadersMiddleware."""

    def test_adds_all_headers(self):
        """Test every security header is present."""
        middleware = SecurityHeadersMiddleware(lambda request: HttpResponse("OK"))

        response = middleware(RequestFactory().get("/"))

        for header, value in SECURITY_HEADERS.items():
            self.assertEqual(response[header], value)

    def test_keeps_view_headers(self):
        """Test headers set by the view win."""

        def view(request):
            response = HttpResponse("OK")
            response["X-Frame-Options"] = "SAMEORIGIN"
            return response

        response = SecurityHeadersMiddleware(view)(RequestFactory().get("/"))

        self.assertEqual(response["X-Frame-Options"], "SAMEORIGIN")
