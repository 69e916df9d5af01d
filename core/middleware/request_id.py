"""Request ID middleware for log correlation."""

import re
import uuid
from collections.abc import Callable

from django.http import HttpRequest, HttpResponse

from core.constants import REQUEST_ID_HEADER
from core.logging.context import clear_request_id, set_request_id

# Accepted client-supplied ids; anything else is replaced
_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9._-]{1,128}$")


class RequestIDMiddleware:
    """Attach a request id to the thread, the request and the response.

    A well-formed incoming ``X-Request-ID`` is reused; otherwise a UUID is
    generated. The id is cleared from the thread once the response is
    built so worker threads never leak it into scheduler logs.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        """Initialize the middleware.

        Args:
            get_response: The next middleware or view in the chain.
        """
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """Process the request with a request id in context."""
        request_id = request.headers.get(REQUEST_ID_HEADER, "")
        if not _VALID_REQUEST_ID.match(request_id):
            request_id = str(uuid.uuid4())

        set_request_id(request_id)
        request.request_id = request_id  # type: ignore[attr-defined]

        try:
            response = self.get_response(request)
            response[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            clear_request_id()
