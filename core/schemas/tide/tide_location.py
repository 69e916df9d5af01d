"""Coastal tide location schema."""

from core.schemas.base_schema_model import BaseSchemaModel


class TideLocation(BaseSchemaModel):
    """A named Portuguese coastal location with coordinates."""

    name: str
    lat: float
    lon: float
    region: str

    @property
    def display_name(self) -> str:
        """Return ``"{name}, {region}"`` as stored on tide events."""
        return f"{self.name}, {self.region}"
