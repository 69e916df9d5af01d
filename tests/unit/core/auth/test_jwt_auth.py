"""Tests for JWT bearer authentication."""

from datetime import timedelta

from django.test import RequestFactory, TestCase
from django.utils import timezone

import jwt
from rest_framework.exceptions import AuthenticationFailed

from core.auth.jwt_auth import AuthenticatedUser, JWTAuthentication
from tests.factories import make_token


class TestJWTAuthentication(TestCase):
    """Test suite for JWTAuthentication."""

    def setUp(self):
        """Set up test fixtures."""
        self.auth = JWTAuthentication()
        self.factory = RequestFactory()

    def _request(self, header: str | None):
        extra = {"HTTP_AUTHORIZATION": header} if header is not None else {}
        return self.factory.get("/api/v1/almanaque/push/subscription-status", **extra)

    def test_no_header_returns_none(self):
        """Test anonymous requests are left to the permission classes."""
        self.assertIsNone(self.auth.authenticate(self._request(None)))

    def test_valid_token(self):
        """Test the user id is read from the userId claim."""
        token = make_token(42)

        user, raw = self.auth.authenticate(self._request(f"Bearer {token}"))

        self.assertIsInstance(user, AuthenticatedUser)
        self.assertEqual(user.user_id, 42)
        self.assertTrue(user.is_authenticated)
        self.assertEqual(raw, token)

    def test_alternative_user_id_claims(self):
        """Test the user_id and sub claims."""
        for claim in ("user_id", "sub"):
            with self.subTest(claim=claim):
                payload = {claim: "7", "exp": timezone.now() + timedelta(hours=1)}
                token = jwt.encode(payload, "test-jwt-secret", algorithm="HS256")

                user, _ = self.auth.authenticate(self._request(f"Bearer {token}"))

                self.assertEqual(user.user_id, 7)

    def test_expired_token(self):
        """Test expiry is enforced."""
        token = make_token(1, exp=timezone.now() - timedelta(minutes=1))

        with self.assertRaisesMessage(AuthenticationFailed, "Token has expired"):
            self.auth.authenticate(self._request(f"Bearer {token}"))

    def test_wrong_secret(self):
        """Test signature verification."""
        token = jwt.encode({"userId": 1}, "another-secret", algorithm="HS256")

        with self.assertRaisesMessage(AuthenticationFailed, "Invalid token"):
            self.auth.authenticate(self._request(f"Bearer {token}"))

    def test_malformed_header(self):
        """Test non-bearer schemes."""
        with self.assertRaises(AuthenticationFailed):
            self.auth.authenticate(self._request("Basic abc"))

    def test_token_without_user_id(self):
        """Test a token carrying no usable id."""
        token = jwt.encode({"role": "USER"}, "test-jwt-secret", algorithm="HS256")

        with self.assertRaisesMessage(AuthenticationFailed, "no valid user id"):
            self.auth.authenticate(self._request(f"Bearer {token}"))

    def test_authenticate_header(self):
        """Test the WWW-Authenticate value."""
        self.assertEqual(self.auth.authenticate_header(None), "Bearer")
