"""Middleware components for the calendar service."""

from core.middleware.process_time import ProcessTimeMiddleware
from core.middleware.rate_limit import RateLimitMiddleware
from core.middleware.request_id import RequestIDMiddleware
from core.middleware.security_headers import SecurityHeadersMiddleware

__all__ = [
    "ProcessTimeMiddleware",
    "RateLimitMiddleware",
    "RequestIDMiddleware",
    "SecurityHeadersMiddleware",
]
