"""Pytest configuration and shared fixtures."""

from django.core.cache import cache
from django.test import Client

import pytest


@pytest.fixture(autouse=True)
def _clear_cache():
    """Start every test with empty rate-limit buckets and tide cache."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api_client():
    """Provide Django test client."""
    return Client()


@pytest.fixture
def auth_headers():
    """Return a factory of Authorization headers for a user id."""
    from tests.factories import make_token  # noqa: PLC0415

    def _headers(user_id: int) -> dict[str, str]:
        return {"HTTP_AUTHORIZATION": f"Bearer {make_token(user_id)}"}

    return _headers
