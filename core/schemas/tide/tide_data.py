"""Tide prediction schemas."""

from datetime import datetime
from typing import Literal

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel


class TideExtreme(BaseSchemaModel):
    """A single high or low water prediction."""

    dt: int = Field(..., description="Unix timestamp of the extreme")
    date: datetime = Field(..., description="Instant of the extreme (UTC)")
    height: float = Field(..., description="Height in meters relative to datum")
    type: Literal["High", "Low"]


class TideData(BaseSchemaModel):
    """Tide extremes for a location as returned by the tide provider."""

    location: str
    lat: float
    lon: float
    extremes: list[TideExtreme] = Field(default_factory=list)
    datum: str = "LAT"
    copyright: str = "WorldTides"


class NextTidesResponse(BaseSchemaModel):
    """Next high and low water for a location."""

    location: str
    next_high: TideExtreme | None = None
    next_low: TideExtreme | None = None
