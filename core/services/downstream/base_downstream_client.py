"""Base client for third-party HTTP data providers."""

from typing import Any

import requests
import structlog

from core.exceptions import DownstreamServiceError, DownstreamServiceUnavailableError

logger = structlog.get_logger(__name__)


class BaseDownstreamClient:
    """Base class for third-party API HTTP clients."""

    def __init__(self, service_name: str, base_url: str, timeout: float = 10):
        """Initialize base downstream client.

        Args:
            service_name: Name of the provider (for logging/errors)
            base_url: Base URL for the provider
            timeout: Per-request timeout in seconds
        """
        self.service_name = service_name
        self.base_url = base_url
        self.timeout = timeout

    def _get_headers(self) -> dict[str, str]:
        """Get common HTTP headers for requests."""
        return {"Accept": "application/json"}

    def _make_request(
        self,
        method: str,
        url: str,
        params: dict[str, Any] | None = None,
        **kwargs,
    ) -> requests.Response:
        """Make HTTP request with error handling.

        Args:
            method: HTTP method (GET, POST, etc.)
            url: Full URL for the request
            params: Query parameters
            **kwargs: Additional arguments to pass to requests

        Returns:
            Response object

        Raises:
            DownstreamServiceError: For client errors and network failures
            DownstreamServiceUnavailableError: For server errors (5xx)
        """
        headers = self._get_headers()
        if "headers" in kwargs:
            headers.update(kwargs.pop("headers"))
        kwargs.setdefault("timeout", self.timeout)

        # Query strings of provider APIs carry the API key
        logger.info(
            "downstream_request",
            service=self.service_name,
            method=method,
            url=url,
        )

        try:
            response = requests.request(
                method=method,
                url=url,
                headers=headers,
                params=params,
                **kwargs,
            )
        except requests.Timeout as e:
            logger.error(
                "downstream_request_timed_out",
                service=self.service_name,
                url=url,
                timeout=kwargs["timeout"],
            )
            raise DownstreamServiceError(
                message=f"{self.service_name} request timed out",
                service_name=self.service_name,
            ) from e
        except requests.ConnectionError as e:
            logger.error(
                "downstream_connection_failed",
                service=self.service_name,
                url=url,
                error=str(e),
            )
            raise DownstreamServiceError(
                message=f"Failed to connect to {self.service_name}: {e}",
                service_name=self.service_name,
            ) from e

        logger.info(
            "downstream_response",
            service=self.service_name,
            status_code=response.status_code,
        )

        if response.status_code >= 500:
            logger.error(
                "downstream_server_error",
                service=self.service_name,
                status_code=response.status_code,
                response_text=response.text,
            )
            raise DownstreamServiceUnavailableError(
                service_name=self.service_name,
                status_code=response.status_code,
            )

        if response.status_code >= 400:
            logger.error(
                "downstream_client_error",
                service=self.service_name,
                status_code=response.status_code,
                response_text=response.text,
            )
            raise DownstreamServiceError(
                message=(
                    f"{self.service_name} returned "
                    f"{response.status_code}: {response.text}"
                ),
                service_name=self.service_name,
                status_code=response.status_code,
            )

        return response
