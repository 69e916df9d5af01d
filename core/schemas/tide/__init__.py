"""Tide schemas."""

from core.schemas.tide.tide_data import NextTidesResponse, TideData, TideExtreme
from core.schemas.tide.tide_location import TideLocation

__all__ = ["NextTidesResponse", "TideData", "TideExtreme", "TideLocation"]
