"""Utilities for station datasets.

This package provides utility functions for:
- Loading and saving station JSON files
- Coordinate parsing and placeholder heuristics
- Stream URL auditing (offline)
- Country normalization
- Geocoding via Nominatim
"""

from .coordinates import (
    first_present,
    is_grid_pattern,
    is_near_origin,
    is_valid_coord,
    parse_coordinate,
    placeholder_reason,
)
from .station_loader import StationDataError, load_stations, save_stations

__all__ = [
    'StationDataError',
    'first_present',
    'is_grid_pattern',
    'is_near_origin',
    'is_valid_coord',
    'load_stations',
    'parse_coordinate',
    'placeholder_reason',
    'save_stations',
]
