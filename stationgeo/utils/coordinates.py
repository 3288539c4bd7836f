# stationgeo/utils/coordinates.py
"""Coordinate parsing and placeholder heuristics for station records."""

from __future__ import annotations

import math
from typing import Any, Iterable, Mapping, Optional, Sequence, Tuple

SENTINEL = "sentinel"
PROXIMITY = "proximity"

# Whole-degree grid used by bulk-generated North American station data
GRID_LAT_RANGE = (20.0, 70.0)
GRID_LON_RANGE = (-130.0, -60.0)
GRID_SNAP_DEGREES = 0.1


def is_absent(value: Any) -> bool:
    """True for a missing field: None or a blank string."""
    return value is None or (isinstance(value, str) and not value.strip())


def first_present(record: Mapping, aliases: Sequence[str]) -> Any:
    """Return the value of the first alias present in record, else None.

    A later alias is only consulted when the earlier ones are absent, so a
    present-but-garbage ``geo_lat`` is not rescued by ``latitude``.
    """
    for alias in aliases:
        value = record.get(alias)
        if not is_absent(value):
            return value
    return None


def parse_coordinate(value: Any) -> Optional[float]:
    """
    Coerce a coordinate value to float.

    Accepts ints, floats and numeric strings ("40.7128", " -74 ").
    Returns None for absent, boolean, non-numeric and NaN values.
    Infinity parses and is left for the range check to reject; so do
    integers too large for a float, which become signed infinity.

    Examples:
        >>> parse_coordinate("40.7128")
        40.7128
        >>> parse_coordinate("north") is None
        True
    """
    if is_absent(value) or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    except OverflowError:
        return math.inf if value > 0 else -math.inf
    if math.isnan(number):
        return None
    return number


def is_valid_coord(lat: float, lon: float) -> bool:
    """Validate that coordinates are within valid Earth bounds."""
    return -90 <= lat <= 90 and -180 <= lon <= 180


def matches_sentinel(
    lat: float,
    lon: float,
    sentinels: Iterable[Tuple[float, float]],
    tolerance: float = 0.0
) -> bool:
    """Check (lat, lon) against known sentinel pairs.

    With tolerance 0 the comparison is exact float equality, so 12.4989994
    matches but 12.498999 does not.
    """
    if not tolerance:
        return any(lat == s_lat and lon == s_lon for s_lat, s_lon in sentinels)
    return any(
        abs(lat - s_lat) <= tolerance and abs(lon - s_lon) <= tolerance
        for s_lat, s_lon in sentinels
    )


def is_near_origin(lat: float, lon: float, radius: float) -> bool:
    """Both coordinates strictly within radius degrees of (0, 0)."""
    return abs(lat) < radius and abs(lon) < radius


def placeholder_reason(
    lat: float,
    lon: float,
    sentinels: Iterable[Tuple[float, float]],
    proximity_degrees: float,
    tolerance: float = 0.0
) -> Optional[str]:
    """
    Classify a parsed pair as a placeholder.

    Returns:
        "sentinel" for a known sentinel pair, "proximity" for a pair near
        (0, 0), None otherwise. Sentinel wins when both apply.
    """
    if matches_sentinel(lat, lon, sentinels, tolerance):
        return SENTINEL
    if is_near_origin(lat, lon, proximity_degrees):
        return PROXIMITY
    return None


def is_grid_pattern(lat: float, lon: float) -> bool:
    """Whole-degree pair inside the North American grid box."""
    if not (math.isfinite(lat) and math.isfinite(lon)):
        return False
    snapped = (abs(lat - round(lat)) < GRID_SNAP_DEGREES and
               abs(lon - round(lon)) < GRID_SNAP_DEGREES)
    return (snapped and
            GRID_LAT_RANGE[0] <= lat <= GRID_LAT_RANGE[1] and
            GRID_LON_RANGE[0] <= lon <= GRID_LON_RANGE[1])
