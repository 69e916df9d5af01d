"""Background job importing tide predictions as calendar events."""

from datetime import timedelta

from django.conf import settings

import structlog

from core.constants.notifications import TIDE_IMPORT_JOB_NAME
from core.constants.tides import PORTUGUESE_LOCATIONS
from core.enums import EventType
from core.models import JobLog
from core.repositories import EventRepository
from core.schemas.tide import TideData, TideExtreme, TideLocation
from core.services.tide_service import TideService

logger = structlog.get_logger(__name__)

DUPLICATE_TOLERANCE = timedelta(minutes=5)
TIDE_EVENT_SOURCE = "worldtides-api"

_TIDE_WORDS = {"High": "Alta", "Low": "Baixa"}


def build_tide_event(
    location: TideLocation, extreme: TideExtreme, tide_data: TideData
) -> dict:
    """Return the event fields for one tide extreme."""
    word = _TIDE_WORDS[extreme.type]
    return {
        "type": EventType.TIDE.value,
        "title": f"Maré {word} em {location.name}",
        "description": f"Maré {word.lower()} de {extreme.height:.2f}m",
        "start_at": extreme.date,
        "location": location.display_name,
        "visibility": "PT",
        "tags": ["maré", location.name.lower(), location.region.lower()],
        "meta": {
            "tideType": extreme.type,
            "height": extreme.height,
            "datum": tide_data.datum,
            "lat": location.lat,
            "lon": location.lon,
        },
        "source": TIDE_EVENT_SOURCE,
    }


def _import_location(service: TideService, location: TideLocation, days: int) -> int:
    tide_data = service.get_tide_predictions(location.lat, location.lon, days)
    imported = 0

    for extreme in tide_data.extremes:
        if EventRepository.find_tide_near(
            location.display_name, extreme.date, DUPLICATE_TOLERANCE
        ):
            continue
        EventRepository.create_event(**build_tide_event(location, extreme, tide_data))
        imported += 1

    logger.info(
        "tide_location_imported",
        location=location.name,
        extremes=len(tide_data.extremes),
        imported=imported,
    )
    return imported


def import_tide_events_job(service: TideService | None = None) -> dict:
    """Import the coming days of tide extremes for every coastal location.

    Extremes within five minutes of an existing tide event at the same
    location are skipped. A failure for one location is recorded and the
    remaining locations are still imported.

    Args:
        service: Tide service to fetch with; a default one is built when omitted

    Returns:
        The details stored on the job log
    """
    service = service or TideService()
    days = settings.TIDE_IMPORT_DAYS
    job_log = JobLog.start(TIDE_IMPORT_JOB_NAME)

    imported = 0
    errors: list[str] = []
    for location in PORTUGUESE_LOCATIONS:
        try:
            imported += _import_location(service, location, days)
        except Exception as e:
            errors.append(f"Failed to import tides for {location.name}: {e}")
            logger.error(
                "tide_location_import_failed",
                location=location.name,
                error=str(e),
            )

    details: dict = {"imported": imported, "locations": len(PORTUGUESE_LOCATIONS)}
    if errors:
        details["errors"] = errors

    if errors and len(errors) == len(PORTUGUESE_LOCATIONS):
        job_log.mark_failed(errors[0], details)
        logger.error("tide_import_failed_all_locations", errors=len(errors))
    else:
        job_log.mark_completed(details)
        logger.info("tide_import_completed", **details)
    return details
