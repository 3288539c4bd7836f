"""Tests for the coordinate fixer."""

import copy
import json
from pathlib import Path
from unittest.mock import patch

import pytest

from stationgeo.tools.fix_coordinates import (
    default_output_path,
    fix_station_coordinates,
    main,
)
from stationgeo.utils.geocoding import StationGeocoder

KNOWN_PLACES = {
    "United States, Texas, Austin": (30.2711286, -97.7436995),
    "Philippines, Northern Samar, Catarman": (12.4994, 124.6377),
}


def fake_lookup(query):
    return KNOWN_PLACES.get(query)


@pytest.fixture
def stations():
    return [
        {"name": "KXAN", "city": "Austin", "state": "Texas", "country": "United States",
         "geo_lat": 40, "geo_long": -98},
        {"name": "Radio France", "city": "Paris", "country": "France",
         "geo_lat": 48.8566, "geo_long": 2.3522},
        {"name": "KUT", "city": "Austin", "state": "Texas", "country": "United States",
         "geo_lat": "unknown", "geo_long": ""},
        {"name": "Nowhere FM", "city": "Unknown", "country": "Unknown"},
        {"name": "DZRH Samar", "city": "Catarman", "state": "Northern Samar", "country": "Philippines",
         "geo_lat": 12.4989994, "geo_long": 124.6746741},
    ]


class TestFixStationCoordinates:
    """Test geocoding of flagged stations."""

    def test_fixes_flagged_stations(self, stations):
        fixed, summary = fix_station_coordinates(stations, StationGeocoder(geocode=fake_lookup))

        assert (fixed[0]["geo_lat"], fixed[0]["geo_long"]) == (30.2711286, -97.7436995)
        assert (fixed[2]["geo_lat"], fixed[2]["geo_long"]) == (30.2711286, -97.7436995)
        assert (fixed[4]["geo_lat"], fixed[4]["geo_long"]) == (12.4994, 124.6377)
        assert "geo_lat" not in fixed[3]
        assert fixed[1] == stations[1]

    def test_summary(self, stations):
        _, summary = fix_station_coordinates(stations, StationGeocoder(geocode=fake_lookup))
        assert summary.attempted == 4
        assert summary.geocoded == 3
        assert summary.cached == 1
        assert summary.skipped == 1
        assert summary.still_flagged == 0

    def test_input_untouched(self, stations):
        before = copy.deepcopy(stations)
        fixed, _ = fix_station_coordinates(stations, StationGeocoder(geocode=fake_lookup))
        assert stations == before
        assert fixed is not stations
        assert fixed[0] is not stations[0]

    def test_limit(self, stations):
        fixed, summary = fix_station_coordinates(stations, StationGeocoder(geocode=fake_lookup), limit=1)
        assert summary.attempted == 1
        assert fixed[2] == stations[2]

    def test_still_flagged(self):
        """A geocoded position that is itself a placeholder is reported."""
        stations = [{"name": "Gulf FM", "city": "Somewhere", "geo_lat": 0, "geo_long": 0}]
        _, summary = fix_station_coordinates(stations, StationGeocoder(geocode=lambda q: (1.0, 1.0)))
        assert summary.geocoded == 1
        assert summary.still_flagged == 1

    def test_writes_the_alias_the_station_uses(self):
        """A station keyed by latitude/longitude is fixed in place, no geo_* added."""
        stations = [{"name": "KXAN", "city": "Austin", "state": "Texas", "country": "United States",
                     "latitude": 0, "longitude": 0}]
        fixed, summary = fix_station_coordinates(stations, StationGeocoder(geocode=fake_lookup))
        assert (fixed[0]["latitude"], fixed[0]["longitude"]) == (30.2711286, -97.7436995)
        assert "geo_lat" not in fixed[0]
        assert "geo_long" not in fixed[0]
        assert summary.still_flagged == 0

    def test_overwrites_every_alias_present(self):
        """No stale fallback coordinates survive next to the fixed ones."""
        stations = [{"name": "KXAN", "city": "Austin", "state": "Texas", "country": "United States",
                     "geo_lat": None, "geo_long": None, "latitude": 40, "longitude": -98}]
        fixed, _ = fix_station_coordinates(stations, StationGeocoder(geocode=fake_lookup))
        assert (fixed[0]["geo_lat"], fixed[0]["geo_long"]) == (30.2711286, -97.7436995)
        assert (fixed[0]["latitude"], fixed[0]["longitude"]) == (30.2711286, -97.7436995)

    def test_nothing_flagged(self):
        stations = [{"name": "Radio France", "geo_lat": 48.8566, "geo_long": 2.3522}]
        fixed, summary = fix_station_coordinates(stations, StationGeocoder(geocode=fake_lookup))
        assert fixed == stations
        assert summary.attempted == 0


class TestMain:
    """Test the command-line entry point."""

    def test_default_output_path(self):
        assert default_output_path(Path("data/radioStations.json")) == Path("data/radioStations.fixed.json")

    @patch("stationgeo.tools.fix_coordinates.StationGeocoder")
    def test_writes_fixed_copy(self, mock_geocoder, stations, tmp_path, capsys):
        mock_geocoder.return_value = StationGeocoder(geocode=fake_lookup)
        source = tmp_path / "tv.json"
        source.write_text(json.dumps(stations))

        assert main([str(source)]) == 0

        output = tmp_path / "tv.fixed.json"
        assert json.loads(output.read_text())[0]["geo_lat"] == 30.2711286
        assert json.loads(source.read_text()) == stations
        assert "Successfully geocoded:      3" in capsys.readouterr().out

    @patch("stationgeo.tools.fix_coordinates.StationGeocoder")
    def test_dry_run(self, mock_geocoder, stations, tmp_path):
        mock_geocoder.return_value = StationGeocoder(geocode=fake_lookup)
        source = tmp_path / "tv.json"
        source.write_text(json.dumps(stations))
        output = tmp_path / "out.json"

        assert main([str(source), "-o", str(output), "--dry-run"]) == 0
        assert not output.exists()

    def test_missing_input(self, tmp_path):
        assert main([str(tmp_path / "missing.json")]) == 1
