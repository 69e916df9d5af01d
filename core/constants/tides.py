"""Portuguese coastal locations covered by tide predictions."""

from core.schemas.tide import TideLocation

PORTUGUESE_LOCATIONS: tuple[TideLocation, ...] = (
    TideLocation(name="Lisboa", lat=38.7223, lon=-9.1393, region="Lisboa"),
    TideLocation(name="Porto (Leixões)", lat=41.1833, lon=-8.7056, region="Porto"),
    TideLocation(name="Faro", lat=37.0194, lon=-7.9322, region="Algarve"),
    TideLocation(name="Cascais", lat=38.6979, lon=-9.4214, region="Lisboa"),
    TideLocation(name="Setúbal", lat=38.5244, lon=-8.8882, region="Setúbal"),
    TideLocation(name="Peniche", lat=39.3558, lon=-9.3811, region="Leiria"),
    TideLocation(name="Lagos", lat=37.1028, lon=-8.6731, region="Algarve"),
    TideLocation(
        name="Viana do Castelo", lat=41.6938, lon=-8.8360, region="Viana do Castelo"
    ),
    TideLocation(name="Albufeira", lat=37.0887, lon=-8.2503, region="Algarve"),
    TideLocation(name="Nazaré", lat=39.6014, lon=-9.0706, region="Leiria"),
)

# Coordinates closer than this (in degrees) resolve to a named location
LOCATION_MATCH_TOLERANCE = 0.01

DEFAULT_TIDE_DAYS = 7
MAX_TIDE_DAYS = 30
NEXT_TIDES_DAYS = 2
TIDE_CACHE_PREFIX = "tides"
