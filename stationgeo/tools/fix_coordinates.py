#!/usr/bin/env python3
"""
Fix station coordinates by geocoding city/state/country.

Every station that is not Valid (non-numeric, out of range, or placeholder)
is geocoded through Nominatim, falling back to the country alone. The fixed
dataset is written to a new file; the input file is never modified.

Usage:
    # Preview
    stationgeo-fix src/data/radioStations.json --dry-run

    # Write src/data/radioStations.fixed.json
    stationgeo-fix src/data/radioStations.json

    # First 50 flagged stations, custom output
    stationgeo-fix src/data/tvStationsWithUrls.json --limit 50 -o out/tv.json

Requirements:
    export OSM_CONTACT_EMAIL="you@example.org"   # Nominatim usage policy
"""

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from .. import config
from ..config import ConfigError, load_validator_config
from ..utils.geocoding import StationGeocoder
from ..utils.station_loader import StationDataError, load_stations, save_stations
from ..validate_coordinates import StationRecordValidator, Status

logger = logging.getLogger(__name__)


@dataclass
class FixSummary:
    attempted: int = 0
    geocoded: int = 0
    cached: int = 0
    skipped: int = 0
    still_flagged: int = 0


def _set_coordinate(station: Dict, aliases: Sequence[str], value: float):
    """Overwrite every alias the station carries, or the primary one if none."""
    present = [alias for alias in aliases if alias in station]
    for alias in present or aliases[:1]:
        station[alias] = value


def fix_station_coordinates(
    stations: Sequence[Dict],
    geocoder: StationGeocoder,
    validator: Optional[StationRecordValidator] = None,
    limit: Optional[int] = None
) -> Tuple[List[Dict], FixSummary]:
    """
    Geocode every flagged station.

    Args:
        stations: Station records (left untouched)
        geocoder: StationGeocoder used for lookups
        validator: Classifier deciding which stations need fixing
        limit: Fix at most this many flagged stations

    Returns:
        (fixed copies of all stations, FixSummary)
    """
    validator = validator or StationRecordValidator()
    lat_fields = validator.config.latitude_fields
    lon_fields = validator.config.longitude_fields

    fixed = [dict(station) for station in stations]
    summary = FixSummary()

    flagged = validator.validate(stations).issues
    if limit is not None:
        flagged = flagged[:limit]

    for i, result in enumerate(flagged, 1):
        station = stations[result.index]
        summary.attempted += 1
        logger.info(f"Processing station {i}/{len(flagged)}: {station.get('name')} "
                    f"({result.status.value})")

        outcome = geocoder.locate(station)
        if outcome.coords is None:
            summary.skipped += 1
            logger.info(f"  Failed to geocode {station.get('name')}")
            continue

        lat, lon = outcome.coords
        _set_coordinate(fixed[result.index], lat_fields, lat)
        _set_coordinate(fixed[result.index], lon_fields, lon)
        summary.geocoded += 1
        if outcome.cached:
            summary.cached += 1
        logger.info(f"  {'Cached' if outcome.cached else 'Geocoded'}: {lat}, {lon}")

        if validator.classify(fixed[result.index], result.index).status is not Status.VALID:
            summary.still_flagged += 1
            logger.warning(f"  Geocoded position for {station.get('name')} is still flagged")

    return fixed, summary


def default_output_path(input_path: Path) -> Path:
    return input_path.with_name(f"{input_path.stem}.fixed{input_path.suffix or '.json'}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Geocode stations with bad coordinates")
    parser.add_argument('input', type=Path, help='Station JSON file')
    parser.add_argument('--output', '-o', type=Path, help='Output file (default: <input>.fixed.json)')
    parser.add_argument('--config', type=Path, help='JSON file overriding aliases/sentinels')
    parser.add_argument('--limit', type=int, help='Fix at most N flagged stations')
    parser.add_argument('--dry-run', action='store_true', help="Don't write the output file")
    args = parser.parse_args(argv)

    logging.basicConfig(level=config.LOG_LEVEL, format='%(message)s')

    try:
        validator = StationRecordValidator(load_validator_config(args.config))
        stations = load_stations(args.input)
    except (ConfigError, StationDataError) as e:
        logger.error(f"ERROR: {e}")
        return 1

    logger.info(f"Loaded {len(stations)} stations from {args.input}")

    geocoder = StationGeocoder()
    fixed, summary = fix_station_coordinates(stations, geocoder, validator, args.limit)

    print(f"\n{'=' * 60}")
    print("FIX SUMMARY")
    print(f"{'=' * 60}")
    print(f"Flagged stations processed: {summary.attempted:,}")
    print(f"Successfully geocoded:      {summary.geocoded:,} ({summary.cached:,} from cache)")
    print(f"Skipped stations:           {summary.skipped:,}")
    print(f"Still flagged after fix:    {summary.still_flagged:,}")
    print(f"Nominatim requests:         {geocoder.stats.requests:,}")

    output = args.output or default_output_path(args.input)
    if summary.geocoded and save_stations(fixed, output, dry_run=args.dry_run):
        print(f"Fixed stations saved to {output}")
    elif not summary.geocoded:
        print("Nothing to write.")

    return 0


if __name__ == "__main__":
    sys.exit(main())
