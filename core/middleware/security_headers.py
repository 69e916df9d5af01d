"""Security headers middleware."""

from collections.abc import Callable

from django.http import HttpRequest, HttpResponse

from core.constants import SECURITY_HEADERS


class SecurityHeadersMiddleware:
    """Add the standard security headers to every response.

    Headers already set by a view are left untouched.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        """Initialize the middleware.

        Args:
            get_response: The next middleware or view in the chain.
        """
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """Process the request and add security headers to the response."""
        response = self.get_response(request)
        for header, value in SECURITY_HEADERS.items():
            response.setdefault(header, value)
        return response
