"""Tests for TideService."""

from datetime import UTC, datetime
from unittest.mock import Mock

from django.core.cache import cache
from django.test import TestCase

from core.exceptions import TideLocationNotFoundError
from core.services.cache_store import CacheStore
from core.services.clock import FixedClock
from core.services.tide_service import TideService

NOW = datetime(2025, 1, 15, 12, 0, tzinfo=UTC)
NOW_TS = int(NOW.timestamp())


def _extreme(offset_minutes: int, kind: str, height: float = 1.0) -> dict:
    return {"dt": NOW_TS + offset_minutes * 60, "height": height, "type": kind}


class TideServiceTestCase(TestCase):
    """Common setup with a mocked WorldTides client."""

    def setUp(self):
        """Set up a service over a fresh cache."""
        cache.clear()
        self.client = Mock()
        self.client.get_extremes.return_value = {
            "extremes": [
                _extreme(-60, "Low", 0.5),
                _extreme(120, "High", 3.1),
                _extreme(480, "Low", 0.7),
                _extreme(840, "High", 3.0),
            ],
            "datum": "LAT",
            "copyright": "WorldTides test",
        }
        self.service = TideService(
            client=self.client,
            cache=CacheStore("tides-test", 60),
            clock=FixedClock(NOW),
        )


class TestPredictions(TideServiceTestCase):
    """Tests for get_tide_predictions."""

    def test_builds_tide_data(self):
        """Test conversion of the raw response."""
        data = self.service.get_tide_predictions(38.7223, -9.1393, 7)

        self.assertEqual(data.location, "Lisboa")
        self.assertEqual(len(data.extremes), 4)
        self.assertEqual(data.extremes[1].type, "High")
        self.assertEqual(data.extremes[1].date, datetime(2025, 1, 15, 14, 0, tzinfo=UTC))
        self.assertEqual(data.copyright, "WorldTides test")
        self.client.get_extremes.assert_called_once_with(38.7223, -9.1393, 7)

    def test_results_are_cached_per_coordinate_and_days(self):
        """Test the second lookup is served from cache."""
        self.service.get_tide_predictions(38.7223, -9.1393, 7)
        self.service.get_tide_predictions(38.7223, -9.1393, 7)
        self.service.get_tide_predictions(38.7223, -9.1393, 2)

        self.assertEqual(self.client.get_extremes.call_count, 2)

    def test_clear_cache_forces_refetch(self):
        """Test clear_cache."""
        self.service.get_tide_predictions(38.7223, -9.1393, 7)
        self.service.clear_cache()
        self.service.get_tide_predictions(38.7223, -9.1393, 7)

        self.assertEqual(self.client.get_extremes.call_count, 2)

    def test_unknown_coordinates_use_formatted_name(self):
        """Test coordinates away from known locations."""
        data = self.service.get_tide_predictions(40.0, -10.0, 7)

        self.assertEqual(data.location, "40.0000, -10.0000")

    def test_missing_extremes_yield_empty_list(self):
        """Test a response without extremes."""
        self.client.get_extremes.return_value = {}

        data = self.service.get_tide_predictions(37.0194, -7.9322)

        self.assertEqual(data.extremes, [])
        self.assertEqual(data.datum, "LAT")


class TestLocations(TideServiceTestCase):
    """Tests for location lookups."""

    def test_find_location_is_case_insensitive(self):
        """Test name matching."""
        self.assertEqual(self.service.find_location("  faro ").name, "Faro")

    def test_unknown_location_raises(self):
        """Test the error lists the available names."""
        with self.assertRaises(TideLocationNotFoundError) as ctx:
            self.service.find_location("Madrid")
        self.assertIn("Lisboa", ctx.exception.available)

    def test_get_locations_lists_all(self):
        """Test the location catalogue."""
        names = [location.name for location in self.service.get_locations()]

        self.assertEqual(len(names), 10)
        self.assertIn("Nazaré", names)

    def test_get_tides_by_location(self):
        """Test named lookups use the location coordinates."""
        self.service.get_tides_by_location("Faro", days=3)

        self.client.get_extremes.assert_called_once_with(37.0194, -7.9322, 3)


class TestNextTides(TideServiceTestCase):
    """Tests for get_next_tides."""

    def test_next_tides_skip_past_extremes(self):
        """Test the next high and low after now."""
        result = self.service.get_next_tides(38.7223, -9.1393)

        self.assertEqual(result.location, "Lisboa")
        self.assertEqual(result.next_high.dt, NOW_TS + 120 * 60)
        self.assertEqual(result.next_low.dt, NOW_TS + 480 * 60)

    def test_next_tides_without_future_extremes(self):
        """Test None when nothing is ahead."""
        self.client.get_extremes.return_value = {"extremes": [_extreme(-30, "High")]}

        result = self.service.get_next_tides(38.7223, -9.1393)

        self.assertIsNone(result.next_high)
        self.assertIsNone(result.next_low)
