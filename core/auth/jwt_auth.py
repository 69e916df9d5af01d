"""JWT bearer authentication for Django REST Framework.

Tokens are issued by the calendar web application and signed with the
shared ``JWT_SECRET``. The user id is read from the ``userId`` claim, with
``user_id`` and ``sub`` accepted as well.
"""

from typing import Any

from django.conf import settings

import jwt
import structlog
from rest_framework import authentication, exceptions

logger = structlog.get_logger(__name__)

USER_ID_CLAIMS = ("userId", "user_id", "sub")


class AuthenticatedUser:
    """Container for the claims of a verified token.

    This is not a Django User model.
    """

    def __init__(self, user_id: int, claims: dict[str, Any]):
        """Initialize the user.

        Args:
            user_id: Id of the calendar user the token was issued to
            claims: Decoded token payload
        """
        self.id = user_id
        self.user_id = user_id
        self.claims = claims
        self.is_authenticated = True

    def __str__(self):
        """String representation."""
        return f"AuthenticatedUser(user_id={self.user_id})"


def _user_id_from(payload: dict[str, Any]) -> int:
    for claim in USER_ID_CLAIMS:
        value = payload.get(claim)
        if value is None:
            continue
        try:
            return int(value)
        except (TypeError, ValueError):
            break
    raise exceptions.AuthenticationFailed("Token has no valid user id")


class JWTAuthentication(authentication.BaseAuthentication):
    """HS256 bearer token authentication."""

    def authenticate(self, request):
        """Authenticate the request from its Authorization header.

        Args:
            request: Django request object

        Returns:
            Tuple of (user, token) or None if no token was sent

        Raises:
            AuthenticationFailed: If the token is malformed, expired or invalid
        """
        auth_header = request.headers.get("authorization")
        if not auth_header:
            return None

        parts = auth_header.split()
        if len(parts) != 2 or parts[0].lower() != "bearer":
            raise exceptions.AuthenticationFailed("Invalid authorization header format")

        token = parts[1]
        payload = self._decode(token)
        return (AuthenticatedUser(_user_id_from(payload), payload), token)

    def _decode(self, token: str) -> dict[str, Any]:
        if not settings.JWT_SECRET:
            logger.error("jwt_secret_not_configured")
            raise exceptions.AuthenticationFailed("JWT validation not configured")

        try:
            return jwt.decode(
                token,
                settings.JWT_SECRET,
                algorithms=["HS256"],
                options={"verify_signature": True, "verify_exp": True},
            )
        except jwt.ExpiredSignatureError as e:
            logger.info("jwt_expired")
            raise exceptions.AuthenticationFailed("Token has expired") from e
        except jwt.InvalidTokenError as e:
            logger.warning("jwt_invalid", error=str(e))
            raise exceptions.AuthenticationFailed("Invalid token") from e

    def authenticate_header(self, _request):
        """Return WWW-Authenticate header value for 401 responses."""
        return "Bearer"
