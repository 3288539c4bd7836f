"""
Centralized station loading utilities.

Station datasets are JSON arrays of station objects. Loading is the one place
in the pipeline allowed to fail hard: a missing file or a malformed document
raises StationDataError, and nothing downstream runs.

Usage:
    from stationgeo.utils.station_loader import load_stations, save_stations

    stations = load_stations("data/radioStations.json")
    save_stations(stations, "data/radioStations.fixed.json")
"""

import json
import logging
from pathlib import Path
from typing import Dict, Iterator, List, Union

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class StationDataError(Exception):
    """Station file missing, unreadable, or not a JSON array of objects."""


def load_stations(path: PathLike) -> List[Dict]:
    """Load a station JSON file.

    Args:
        path: Path to a JSON array of station objects

    Returns:
        List of station dictionaries, in file order

    Raises:
        StationDataError: File missing/unreadable, invalid JSON, or wrong shape
    """
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError:
        raise StationDataError(f"Station file not found: {path}")
    except json.JSONDecodeError as e:
        raise StationDataError(f"JSON parse error in {path}: {e}")
    except (OSError, UnicodeDecodeError) as e:
        raise StationDataError(f"Error reading {path}: {e}")

    if not isinstance(data, list):
        raise StationDataError(
            f"{path}: expected a JSON array of stations, got {type(data).__name__}"
        )

    for index, station in enumerate(data):
        if not isinstance(station, dict):
            raise StationDataError(
                f"{path}: station at index {index} is {type(station).__name__}, not an object"
            )

    logger.debug(f"Loaded {len(data)} stations from {path}")
    return data


def save_stations(
    stations: List[Dict],
    path: PathLike,
    dry_run: bool = False,
    indent: int = 2
) -> bool:
    """Write stations as a JSON array.

    Args:
        stations: Station dictionaries
        path: Output file (parent directories are created)
        dry_run: If True, don't actually write (default: False)
        indent: JSON indentation (default: 2)

    Returns:
        True if written, False for a dry run
    """
    path = Path(path)
    if dry_run:
        logger.info(f"Dry run: would save {len(stations)} stations to {path}")
        return False

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(stations, f, indent=indent, ensure_ascii=False)

    logger.info(f"Saved {len(stations)} stations to {path}")
    return True


def iter_station_files(directory: PathLike) -> Iterator[Path]:
    """Iterate over *.json files in a directory, sorted by name."""
    for station_file in sorted(Path(directory).glob("*.json")):
        if station_file.is_file() and not station_file.name.startswith('.'):
            yield station_file
