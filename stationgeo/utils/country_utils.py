"""Country normalization for station records.

Station datasets carry free-text countries ("The United States Of America",
"Philippines", "US"). Reports group by ISO3 code.
"""

import logging
from functools import lru_cache
from typing import Optional

import pycountry

logger = logging.getLogger(__name__)

UNKNOWN_COUNTRY = "???"


@lru_cache(maxsize=1024)
def normalize_country_to_iso3(country_input: str) -> str:
    """Normalize any country input to ISO3 code.

    Accepts:
        - Country names: "Algeria", "The United States Of America"
        - ISO2 codes: "DZ", "US"
        - ISO3 codes: "DZA", "USA"

    Args:
        country_input: Country name, ISO2, or ISO3 code

    Returns:
        ISO3 country code (e.g., "DZA", "USA", "PHL")

    Raises:
        ValueError: If country cannot be resolved

    Example:
        >>> normalize_country_to_iso3("Algeria")
        'DZA'
        >>> normalize_country_to_iso3("us")
        'USA'
    """
    if not country_input or not country_input.strip():
        raise ValueError("Country input cannot be empty")

    country_input = country_input.strip()
    if country_input.lower().startswith("the "):
        country_input = country_input[4:].strip()

    if len(country_input) == 2:
        country = pycountry.countries.get(alpha_2=country_input.upper())
        if country:
            return country.alpha_3
    elif len(country_input) == 3:
        country = pycountry.countries.get(alpha_3=country_input.upper())
        if country:
            return country.alpha_3

    try:
        return pycountry.countries.lookup(country_input).alpha_3
    except LookupError:
        pass

    # "The United States Of America" and similar long forms
    try:
        matches = pycountry.countries.search_fuzzy(country_input)
    except LookupError:
        matches = []
    if matches:
        logger.debug(f"Fuzzy-resolved '{country_input}' → {matches[0].alpha_3}")
        return matches[0].alpha_3

    raise ValueError(f"Could not resolve country: {country_input}")


def country_label(country_input: Optional[str]) -> str:
    """ISO3 code for reporting, or '???' when the country is missing or unknown."""
    if not isinstance(country_input, str):
        return UNKNOWN_COUNTRY
    try:
        return normalize_country_to_iso3(country_input)
    except ValueError:
        return UNKNOWN_COUNTRY
