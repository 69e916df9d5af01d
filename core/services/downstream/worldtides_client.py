"""Client for the WorldTides v3 API."""

from django.conf import settings

import structlog

from core.exceptions import DownstreamServiceError
from core.services.downstream.base_downstream_client import BaseDownstreamClient

logger = structlog.get_logger(__name__)


class WorldTidesClient(BaseDownstreamClient):
    """Fetches high/low water predictions from WorldTides."""

    def __init__(self, api_key: str | None = None, base_url: str | None = None):
        """Initialize the client.

        Args:
            api_key: WorldTides API key; read from settings when omitted
            base_url: API base URL; read from settings when omitted
        """
        super().__init__(
            service_name="worldtides",
            base_url=base_url or settings.WORLDTIDES_API_BASE_URL,
            timeout=settings.NOTIFICATION_EXTERNAL_CALL_TIMEOUT_SECONDS,
        )
        self.api_key = api_key if api_key is not None else settings.WORLDTIDES_API_KEY

    def get_extremes(self, lat: float, lon: float, days: int) -> dict:
        """Return the raw extremes response for a coordinate.

        Args:
            lat: Latitude
            lon: Longitude
            days: Number of days of predictions

        Returns:
            Decoded JSON body with ``extremes``, ``datum`` and ``copyright``

        Raises:
            DownstreamServiceError: If the key is missing or the API reports an error
        """
        if not self.api_key:
            raise DownstreamServiceError(
                message="WORLDTIDES_API_KEY not configured",
                service_name=self.service_name,
            )

        response = self._make_request(
            "GET",
            self.base_url,
            params={
                "extremes": "true",
                "lat": lat,
                "lon": lon,
                "days": days,
                "key": self.api_key,
            },
        )
        data = response.json()

        if data.get("error"):
            logger.error("worldtides_api_error", error=data["error"])
            raise DownstreamServiceError(
                message=f"WorldTides API error: {data['error']}",
                service_name=self.service_name,
                status_code=data.get("status"),
            )

        return data
