"""Third-party data provider clients package."""

from core.services.downstream.worldtides_client import WorldTidesClient

__all__ = ["WorldTidesClient"]
