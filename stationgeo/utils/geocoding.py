# stationgeo/utils/geocoding.py
"""
Forward geocoding of station locations via Nominatim (OSM).

Stations only carry city/state/country text, so the best we can do for a
station with placeholder coordinates is a town-level fix. Lookups are cached
per (city, state, country) because large datasets repeat the same towns
hundreds of times, and Nominatim allows one request per second.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, Mapping, Optional, Tuple

import requests

from .. import config

logger = logging.getLogger(__name__)

USER_AGENT = "stationgeo/0.1"
UNKNOWN = "unknown"

Coordinates = Tuple[float, float]


def nominatim_headers() -> Dict[str, str]:
    """OSM-compliant headers with contact email."""
    return {"User-Agent": f"{USER_AGENT} ({config.OSM_CONTACT_EMAIL})"}


def _usable(part) -> bool:
    return isinstance(part, str) and bool(part.strip()) and part.strip().lower() != UNKNOWN


def build_location_query(city=None, state=None, country=None) -> Optional[str]:
    """
    Join the usable location parts, broadest first.

    Examples:
        >>> build_location_query("Austin", "Texas", "United States")
        'United States, Texas, Austin'
        >>> build_location_query("Unknown", None, "") is None
        True
    """
    parts = [p.strip() for p in (country, state, city) if _usable(p)]
    return ", ".join(parts) if parts else None


def geocode_via_nominatim(
    query: str,
    delay_s: Optional[float] = None,
    timeout: Optional[float] = None
) -> Optional[Coordinates]:
    """
    Forward geocode a free-text query via Nominatim.

    Args:
        query: Free-text search query (e.g., "Philippines, Northern Samar")
        delay_s: Pause after the request (default: $NOMINATIM_DELAY_S)
        timeout: Request timeout in seconds (default: $NOMINATIM_TIMEOUT_S)

    Returns:
        (lat, lon) or None on no result / failure
    """
    if not query or not query.strip():
        return None

    delay_s = config.NOMINATIM_DELAY_S if delay_s is None else delay_s
    timeout = config.NOMINATIM_TIMEOUT_S if timeout is None else timeout
    params = {
        "q": query.strip(),
        "format": "json",
        "limit": 1,
    }

    try:
        resp = requests.get(config.NOMINATIM_URL, params=params,
                            headers=nominatim_headers(), timeout=timeout)
        resp.raise_for_status()
        items = resp.json() or []
    except requests.exceptions.Timeout:
        logger.warning(f"Nominatim timeout for query: {query}")
        return None
    except requests.exceptions.RequestException as e:
        logger.warning(f"Nominatim request failed for '{query}': {e}")
        return None
    except ValueError as e:
        logger.warning(f"Nominatim returned invalid JSON for '{query}': {e}")
        return None
    finally:
        if delay_s:
            time.sleep(delay_s)  # OSM policy compliance

    if not items:
        logger.debug(f"Nominatim: No results for '{query}'")
        return None

    try:
        top = items[0]
        coords = (float(top["lat"]), float(top["lon"]))
    except (KeyError, TypeError, ValueError, IndexError):
        logger.warning(f"Nominatim: Unexpected result shape for '{query}'")
        return None

    logger.debug(f"Nominatim: Found {coords[0]}, {coords[1]} for '{query}'")
    return coords


@dataclass
class _Stats:
    hits: int = 0
    misses: int = 0
    requests: int = 0


@dataclass(frozen=True)
class GeocodeOutcome:
    coords: Optional[Coordinates]
    cached: bool


class StationGeocoder:
    """Geocode stations from city/state/country with an in-memory cache.

    Negative results are cached too, so an unresolvable town costs one
    request per run, not one per station.
    """

    def __init__(self, geocode: Callable[[str], Optional[Coordinates]] = geocode_via_nominatim):
        self._geocode = geocode
        self._cache: Dict[str, Optional[Coordinates]] = {}
        self.stats = _Stats()

    @staticmethod
    def cache_key(station: Mapping) -> str:
        return "|".join(str(station.get(k) or "") for k in ("city", "state", "country"))

    def _query(self, query: Optional[str]) -> Optional[Coordinates]:
        if not query:
            return None
        self.stats.requests += 1
        return self._geocode(query)

    def locate(self, station: Mapping) -> GeocodeOutcome:
        """Find coordinates for a station, falling back to its country alone."""
        key = self.cache_key(station)
        if key in self._cache:
            self.stats.hits += 1
            return GeocodeOutcome(self._cache[key], cached=True)

        self.stats.misses += 1
        country = station.get("country")
        query = build_location_query(station.get("city"), station.get("state"), country)
        coords = self._query(query)

        if coords is None and _usable(country):
            country_query = build_location_query(country=country)
            if country_query != query:
                logger.info(f"Trying with just country: {country_query}")
                coords = self._query(country_query)

        self._cache[key] = coords
        return GeocodeOutcome(coords, cached=False)
