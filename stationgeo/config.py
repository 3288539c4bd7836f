"""
Station Coordinate QC Configuration

Field-name aliases, placeholder sentinels and geocoding settings. Sentinels
and aliases live here as data so a new dataset or a new placeholder value is
a configuration change, not a new script.

Overrides:
    - Environment variables (or a .env file in the project root)
    - A JSON file named by STATIONGEO_CONFIG, or passed to
      load_validator_config(path)

Example override file:
    {
        "latitude_fields": ["geo_lat", "latitude", "lat"],
        "sentinels": [[0, 0], [40, -100]],
        "proximity_degrees": 2.5
    }
"""

import json
import math
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv

# Load environment variables from a .env file if present (project root or parents)
load_dotenv()

# Logging Configuration
LOG_LEVEL = os.getenv("STATIONGEO_LOG_LEVEL", "INFO").upper()   # DEBUG, INFO, WARNING, ERROR

# Nominatim (OpenStreetMap) geocoding, used by the coordinate fixer only
NOMINATIM_URL = os.getenv("NOMINATIM_URL", "https://nominatim.openstreetmap.org/search")
NOMINATIM_DELAY_S = float(os.getenv("NOMINATIM_DELAY_S", "1.0"))    # OSM policy: 1 req/sec
NOMINATIM_TIMEOUT_S = float(os.getenv("NOMINATIM_TIMEOUT_S", "5"))
OSM_CONTACT_EMAIL = os.getenv("OSM_CONTACT_EMAIL", "ops@example.com")

# Coordinate pairs known to be stand-ins for "location unknown"
DEFAULT_SENTINELS: Tuple[Tuple[float, float], ...] = (
    (0.0, 0.0),                       # Null Island
    (40.0, -100.0),                   # Continental US centroid (approx.)
    (42.0, -100.0),
    (12.4989994, 124.6746741),        # Geocoder fallback (Philippines)
    (40.0, -98.0),                    # Generated US grid column
    (42.0, -98.0),
    (44.0, -98.0),
    (46.0, -98.0),
    (48.0, -98.0),
    (50.0, -98.0),
    (52.0, -98.0),
    (54.0, -98.0),
    (56.0, -98.0),
    (58.0, -98.0),
)

DEFAULT_LATITUDE_FIELDS = ("geo_lat", "latitude")
DEFAULT_LONGITUDE_FIELDS = ("geo_long", "longitude")
DEFAULT_PROXIMITY_DEGREES = 5.0


class ConfigError(ValueError):
    """Raised when a configuration override is malformed."""


@dataclass(frozen=True)
class ValidatorConfig:
    """Data-driven settings for StationRecordValidator."""
    latitude_fields: Tuple[str, ...] = DEFAULT_LATITUDE_FIELDS
    longitude_fields: Tuple[str, ...] = DEFAULT_LONGITUDE_FIELDS
    sentinels: Tuple[Tuple[float, float], ...] = field(default=DEFAULT_SENTINELS)
    proximity_degrees: float = DEFAULT_PROXIMITY_DEGREES
    # 0.0 means exact float equality against the sentinel list
    sentinel_tolerance: float = 0.0


def _field_names(key: str, value) -> Tuple[str, ...]:
    if isinstance(value, str) or not isinstance(value, (list, tuple)) or not value:
        raise ConfigError(f"{key} must be a non-empty list of field names")
    if not all(isinstance(v, str) and v for v in value):
        raise ConfigError(f"{key} must contain only non-empty strings")
    return tuple(value)


def _sentinel_pairs(value) -> Tuple[Tuple[float, float], ...]:
    if not isinstance(value, (list, tuple)):
        raise ConfigError("sentinels must be a list of [lat, lon] pairs")
    pairs = []
    for pair in value:
        if not isinstance(pair, (list, tuple)) or len(pair) != 2:
            raise ConfigError(f"Invalid sentinel pair: {pair!r}")
        try:
            pairs.append((float(pair[0]), float(pair[1])))
        except (TypeError, ValueError, OverflowError):
            raise ConfigError(f"Sentinel pair is not numeric: {pair!r}")
    return tuple(pairs)


def _non_negative(key: str, value) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{key} must be a number")
    try:
        number = float(value)
    except OverflowError:
        raise ConfigError(f"{key} must be finite")
    if not math.isfinite(number):
        raise ConfigError(f"{key} must be finite")
    if number < 0:
        raise ConfigError(f"{key} must not be negative")
    return number


def config_from_dict(overrides: dict, base: Optional[ValidatorConfig] = None) -> ValidatorConfig:
    """Apply a dict of overrides on top of base (defaults when omitted).

    Raises:
        ConfigError: Unknown key or malformed value
    """
    base = base or ValidatorConfig()
    if not isinstance(overrides, dict):
        raise ConfigError("Configuration must be a JSON object")

    changes = {}
    for key, value in overrides.items():
        if key in ("latitude_fields", "longitude_fields"):
            changes[key] = _field_names(key, value)
        elif key == "sentinels":
            changes[key] = _sentinel_pairs(value)
        elif key in ("proximity_degrees", "sentinel_tolerance"):
            changes[key] = _non_negative(key, value)
        else:
            raise ConfigError(f"Unknown configuration key: {key}")

    return replace(base, **changes)


def load_validator_config(path: Optional[Path] = None) -> ValidatorConfig:
    """Build a ValidatorConfig from defaults plus an optional JSON override file.

    Args:
        path: Override file; falls back to $STATIONGEO_CONFIG

    Returns:
        ValidatorConfig
    """
    path = path or os.getenv("STATIONGEO_CONFIG")
    if not path:
        return ValidatorConfig()

    try:
        with open(path, 'r', encoding='utf-8') as f:
            overrides = json.load(f)
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}")
    except json.JSONDecodeError as e:
        raise ConfigError(f"Config file {path} is not valid JSON: {e}")

    return config_from_dict(overrides)
