"""Tests for console and CSV rendering of coordinate reports."""

import pandas as pd
import pytest

from stationgeo import validate
from stationgeo.reporting.station_qc_report import (
    COLUMNS,
    country_breakdown,
    export_report_csv,
    format_report,
    report_to_dataframe,
)


@pytest.fixture
def stations():
    return [
        {"name": "WNYC", "geo_lat": 40.7128, "geo_long": -74.006, "country": "US"},
        {"name": "KXAN", "geo_lat": 40, "geo_long": -98, "country": "The United States Of America"},
        {"name": "SWR3", "geo_lat": 48.78, "geo_long": 9.18, "country": "Germany"},
        {"name": "Lost FM", "country": "Atlantis"},
    ]


@pytest.fixture
def report(stations):
    return validate(stations)


class TestFormatReport:
    """Test console rendering."""

    def test_summary_lines(self, report):
        text = format_report(report, title="radioStations.json")
        assert "STATION COORDINATE REPORT: radioStations.json" in text
        assert "Total stations:       4" in text
        assert "Valid stations:       2" in text
        assert "Invalid stations:     1" in text
        assert "Placeholder stations: 1" in text

    def test_flagged_lines(self, report):
        text = format_report(report)
        assert "PLACEHOLDER (sentinel): index 1 - KXAN (40.0, -98.0)" in text
        assert "INVALID_NUMERIC: index 3 - Lost FM (None, None)" in text
        assert "WNYC" not in text

    def test_limit(self, report):
        text = format_report(report, limit=1)
        assert "KXAN" in text
        assert "Lost FM" not in text
        assert "... and 1 more" in text

    def test_empty(self):
        text = format_report(validate([]))
        assert "Total stations:       0" in text


class TestDataFrame:
    """Test pandas export."""

    def test_columns_and_rows(self, report, stations):
        df = report_to_dataframe(report, stations)
        assert list(df.columns) == COLUMNS
        assert len(df) == 4
        assert df["country_iso3"].tolist() == ["USA", "USA", "DEU", "???"]
        assert df["status"].tolist() == ["valid", "placeholder", "valid", "invalid_numeric"]
        assert df.loc[1, "placeholder_reason"] == "sentinel"

    def test_country_breakdown(self, report, stations):
        table = country_breakdown(report_to_dataframe(report, stations))
        assert table.index[0] == "USA"
        assert table.loc["USA", "total"] == 2
        assert table.loc["USA", "placeholder"] == 1
        assert table.loc["DEU", "valid"] == 1
        assert table.loc["???", "invalid_numeric"] == 1
        assert table.loc["DEU", "out_of_range"] == 0

    def test_country_breakdown_empty(self):
        table = country_breakdown(report_to_dataframe(validate([]), []))
        assert table.empty
        assert "total" in table.columns

    def test_export_csv(self, report, stations, tmp_path):
        path = export_report_csv(report, stations, tmp_path / "reports" / "coords.csv")
        df = pd.read_csv(path)
        assert len(df) == 4
        assert df["name"].tolist() == ["WNYC", "KXAN", "SWR3", "Lost FM"]
