"""Rate limiting middleware using a cache-backed token bucket."""

import logging
import time
from collections.abc import Callable

from django.conf import settings
from django.core.cache import cache
from django.http import HttpRequest, HttpResponse, JsonResponse

from core.constants import (
    DEFAULT_RATE_LIMIT_REQUESTS,
    DEFAULT_RATE_LIMIT_STRICT_REQUESTS,
    DEFAULT_RATE_LIMIT_WINDOW,
    RATE_LIMIT_MESSAGE,
    RATE_LIMIT_STRICT_MESSAGE,
    STRICT_RATE_LIMIT_PATH_SUFFIXES,
)

logger = logging.getLogger(__name__)


class RateLimitMiddleware:
    """Per client IP token bucket rate limiting with two tiers.

    Requests to the strict paths (test notification) draw from a small
    separate bucket; every other request draws from the general bucket.
    Health probes are never limited.

    If the cache is unavailable the request is let through.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        """Initialize the middleware.

        Args:
            get_response: The next middleware or view in the chain.
        """
        self.get_response = get_response
        self.max_requests = getattr(
            settings, "RATE_LIMIT_REQUESTS", DEFAULT_RATE_LIMIT_REQUESTS
        )
        self.strict_max_requests = getattr(
            settings, "RATE_LIMIT_STRICT_REQUESTS", DEFAULT_RATE_LIMIT_STRICT_REQUESTS
        )
        self.window = getattr(settings, "RATE_LIMIT_WINDOW", DEFAULT_RATE_LIMIT_WINDOW)

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """Process the request and enforce rate limiting.

        Args:
            request: The incoming HTTP request.

        Returns:
            The HTTP response, or a 429 response if the bucket is empty.
        """
        path = request.path.rstrip("/")
        if "/health/" in request.path:
            return self.get_response(request)

        strict = path.endswith(STRICT_RATE_LIMIT_PATH_SUFFIXES)
        tier = "strict" if strict else "general"
        limit = self.strict_max_requests if strict else self.max_requests
        client_ip = self._get_client_ip(request)

        allowed, retry_after = self._check_rate_limit(
            f"rate_limit:{tier}:{client_ip}", limit
        )

        if not allowed:
            logger.warning(f"Rate limit ({tier}) exceeded for IP: {client_ip}")
            return JsonResponse(
                {
                    "status": 429,
                    "message": RATE_LIMIT_STRICT_MESSAGE if strict else RATE_LIMIT_MESSAGE,
                    "request_id": getattr(request, "request_id", None),
                    "retry_after": retry_after,
                },
                status=429,
                headers={"Retry-After": str(retry_after)},
            )

        return self.get_response(request)

    def _get_client_ip(self, request: HttpRequest) -> str:
        """Return the originating client IP, honoring X-Forwarded-For."""
        x_forwarded_for = request.headers.get("x-forwarded-for")
        if x_forwarded_for:
            return x_forwarded_for.split(",")[0].strip()
        return str(request.META.get("REMOTE_ADDR", "unknown"))

    def _check_rate_limit(self, cache_key: str, limit: int) -> tuple[bool, int]:
        """Take one token from a bucket.

        Buckets hold ``limit`` tokens and refill at ``limit`` per window.

        Args:
            cache_key: Bucket key (tier and client IP).
            limit: Bucket capacity.

        Returns:
            Tuple of (allowed, retry_after_seconds).
        """
        try:
            current_time = time.time()
            bucket = cache.get(cache_key)

            if bucket is None:
                tokens = float(limit)
            else:
                tokens, last_refill = bucket
                elapsed = current_time - last_refill
                tokens = min(float(limit), tokens + (elapsed / self.window) * limit)

            if tokens < 1:
                retry_after = int(((1 - tokens) / limit) * self.window)
                cache.set(cache_key, (tokens, current_time), timeout=self.window * 2)
                return False, max(1, retry_after)

            cache.set(cache_key, (tokens - 1, current_time), timeout=self.window * 2)
            return True, 0

        except Exception as e:
            logger.error(f"Rate limit check failed for {cache_key}: {e}")
            return True, 0
