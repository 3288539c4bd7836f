"""Tests for country normalization."""

import pytest

from stationgeo.utils.country_utils import country_label, normalize_country_to_iso3


class TestNormalizeCountry:
    """Test ISO3 normalization of free-text countries."""

    @pytest.mark.parametrize("value,expected", [
        ("US", "USA"),
        ("us", "USA"),
        ("USA", "USA"),
        ("deu", "DEU"),
        ("Germany", "DEU"),
        ("philippines", "PHL"),
        ("The United States Of America", "USA"),
        ("  France ", "FRA"),
    ])
    def test_resolves(self, value, expected):
        assert normalize_country_to_iso3(value) == expected

    @pytest.mark.parametrize("value", ["", "   "])
    def test_empty(self, value):
        with pytest.raises(ValueError, match="cannot be empty"):
            normalize_country_to_iso3(value)

    def test_unknown(self):
        with pytest.raises(ValueError, match="Could not resolve"):
            normalize_country_to_iso3("Atlantis")


class TestCountryLabel:
    """Test the reporting label."""

    def test_known(self):
        assert country_label("Japan") == "JPN"

    @pytest.mark.parametrize("value", [None, "", "Atlantis", 44])
    def test_unknown(self, value):
        assert country_label(value) == "???"
