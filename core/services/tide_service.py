"""Tide predictions for the Portuguese coast."""

from datetime import UTC, datetime

from django.conf import settings

import structlog

from core.constants.tides import (
    DEFAULT_TIDE_DAYS,
    LOCATION_MATCH_TOLERANCE,
    NEXT_TIDES_DAYS,
    PORTUGUESE_LOCATIONS,
    TIDE_CACHE_PREFIX,
)
from core.exceptions import TideLocationNotFoundError
from core.schemas.tide import NextTidesResponse, TideData, TideExtreme, TideLocation
from core.services.cache_store import CacheStore
from core.services.clock import Clock, system_clock
from core.services.downstream import WorldTidesClient

logger = structlog.get_logger(__name__)


class TideService:
    """Fetches and caches WorldTides extremes for coastal locations."""

    def __init__(
        self,
        client: WorldTidesClient | None = None,
        cache: CacheStore | None = None,
        clock: Clock | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            client: WorldTides API client
            cache: Store for fetched predictions
            clock: Source of the current instant
        """
        self.client = client or WorldTidesClient()
        self.cache = cache or CacheStore(
            TIDE_CACHE_PREFIX, settings.TIDE_CACHE_TTL_SECONDS
        )
        self.clock = clock or system_clock

    def get_tide_predictions(
        self, lat: float, lon: float, days: int = DEFAULT_TIDE_DAYS
    ) -> TideData:
        """Return high/low water predictions for a coordinate.

        Results are cached per coordinate and day count.

        Raises:
            DownstreamServiceError: If the provider call fails
        """
        cache_key = f"{lat},{lon},{days}"
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.debug("tide_cache_hit", lat=lat, lon=lon, days=days)
            return TideData.model_validate(cached)

        data = self.client.get_extremes(lat, lon, days)
        extremes = [
            TideExtreme(
                dt=extreme["dt"],
                date=datetime.fromtimestamp(extreme["dt"], tz=UTC),
                height=extreme["height"],
                type=extreme["type"],
            )
            for extreme in data.get("extremes") or []
        ]
        tide_data = TideData(
            location=self._location_name(lat, lon),
            lat=lat,
            lon=lon,
            extremes=extremes,
            datum=data.get("datum") or "LAT",
            copyright=data.get("copyright") or "WorldTides",
        )

        self.cache.put(cache_key, tide_data.model_dump())
        logger.info(
            "tide_predictions_fetched",
            location=tide_data.location,
            extremes=len(extremes),
        )
        return tide_data

    def find_location(self, name: str) -> TideLocation:
        """Return a known location by case-insensitive name.

        Raises:
            TideLocationNotFoundError: If the name is unknown
        """
        wanted = name.strip().lower()
        for location in PORTUGUESE_LOCATIONS:
            if location.name.lower() == wanted:
                return location
        raise TideLocationNotFoundError(
            name, [location.name for location in PORTUGUESE_LOCATIONS]
        )

    def get_tides_by_location(
        self, location_name: str, days: int = DEFAULT_TIDE_DAYS
    ) -> TideData:
        """Return predictions for a named coastal location."""
        location = self.find_location(location_name)
        return self.get_tide_predictions(location.lat, location.lon, days)

    def get_next_tides(self, lat: float, lon: float) -> NextTidesResponse:
        """Return the next high and the next low water after now."""
        tide_data = self.get_tide_predictions(lat, lon, NEXT_TIDES_DAYS)
        now_ts = self.clock.now().timestamp()
        upcoming = [extreme for extreme in tide_data.extremes if extreme.dt > now_ts]

        return NextTidesResponse(
            location=tide_data.location,
            next_high=next((t for t in upcoming if t.type == "High"), None),
            next_low=next((t for t in upcoming if t.type == "Low"), None),
        )

    def get_locations(self) -> list[TideLocation]:
        """Return every supported coastal location."""
        return list(PORTUGUESE_LOCATIONS)

    def clear_cache(self) -> None:
        """Drop all cached predictions."""
        self.cache.clear()
        logger.info("tide_cache_cleared")

    def _location_name(self, lat: float, lon: float) -> str:
        for location in PORTUGUESE_LOCATIONS:
            if (
                abs(location.lat - lat) < LOCATION_MATCH_TOLERANCE
                and abs(location.lon - lon) < LOCATION_MATCH_TOLERANCE
            ):
                return location.name
        return f"{lat:.4f}, {lon:.4f}"


tide_service = TideService()
