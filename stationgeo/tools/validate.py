#!/usr/bin/env python3
"""
Station coordinate validation tool.

Subcommands:
    check          Classify every station (valid / invalid / placeholder)
    placeholders   List stations sitting on sentinel or near-(0,0) coordinates
    grid           List stations on the whole-degree North American grid
    urls           Audit stream URLs offline (missing, malformed, sample hosts)

Usage:
    stationgeo-validate check src/data/tvStationsWithUrls.json src/data/radioStations.json
    stationgeo-validate check src/data/ --by-country --export-csv reports/coords.csv
    stationgeo-validate check src/data/radioStations.json --strict     # exit 1 on invalid
    stationgeo-validate placeholders src/data/radioStations.json
    stationgeo-validate grid src/data/tvStationsWithUrls.json --limit 20
    stationgeo-validate urls src/data/tvStationsWithUrls.json
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from .. import config
from ..config import ConfigError, load_validator_config
from ..reporting.station_qc_report import (
    country_breakdown,
    export_report_csv,
    format_report,
    report_to_dataframe,
)
from ..utils.station_loader import StationDataError, iter_station_files, load_stations
from ..utils.stream_urls import OK, check_stream_urls, summarize_url_checks
from ..validate_coordinates import (
    StationRecordValidator,
    find_grid_stations,
    find_near_origin_stations,
    find_placeholder_stations,
)

logger = logging.getLogger(__name__)


def _expand_paths(paths: List[Path]) -> Iterator[Path]:
    for path in paths:
        if path.is_dir():
            yield from iter_station_files(path)
        else:
            yield path


def _load_all(paths: List[Path]) -> Tuple[List[Tuple[Path, list]], bool]:
    """Load every file; returns (loaded, had_errors)."""
    loaded = []
    had_errors = False
    for path in _expand_paths(paths):
        try:
            loaded.append((path, load_stations(path)))
        except StationDataError as e:
            logger.error(f"ERROR: {e}")
            had_errors = True
    return loaded, had_errors


def _csv_path(base: Path, source: Path, multiple: bool) -> Path:
    if not multiple:
        return base
    return base.with_name(f"{base.stem}_{source.stem}{base.suffix or '.csv'}")


def _print_matches(title: str, matches, limit: Optional[int]):
    print(f"\n{title}: {len(matches)}")
    shown = matches if limit is None else matches[:limit]
    for m in shown:
        print(f"  {m.index}. {m.name or 'Unnamed'} ({m.latitude}, {m.longitude}) - "
              f"{m.city or '?'}, {m.state or '?'}, {m.country or '?'}"
              f"{' [' + m.reason + ']' if m.reason else ''}")
    if len(shown) < len(matches):
        print(f"  ... and {len(matches) - len(shown)} more")


def cmd_check(args, validator_config) -> int:
    loaded, had_errors = _load_all(args.files)
    validator = StationRecordValidator(validator_config)
    any_invalid = False

    for path, stations in loaded:
        report = validator.validate(stations)
        print(format_report(report, title=str(path), limit=args.limit))

        if args.by_country:
            breakdown = country_breakdown(report_to_dataframe(report, stations))
            print("\nBy country:")
            print(breakdown.to_string() if not breakdown.empty else "  (no stations)")

        if args.export_csv:
            out = export_report_csv(report, stations,
                                    _csv_path(args.export_csv, path, len(loaded) > 1))
            print(f"\nExported diagnostics to {out}")

        print()
        any_invalid = any_invalid or report.invalid_count > 0

    if had_errors:
        return 1
    if args.strict and any_invalid:
        logger.error("Found stations with invalid coordinates.")
        return 1
    return 0


def cmd_placeholders(args, validator_config) -> int:
    loaded, had_errors = _load_all(args.files)
    for path, stations in loaded:
        print(f"Checking {len(stations)} stations in {path}")
        matches = find_placeholder_stations(stations, validator_config)
        _print_matches("Stations with placeholder coordinates", matches, args.limit)
        print("---")
    return 1 if had_errors else 0


def cmd_grid(args, validator_config) -> int:
    loaded, had_errors = _load_all(args.files)
    for path, stations in loaded:
        print(f"Checking for grid pattern stations in {path}")
        _print_matches("Grid pattern stations found",
                       find_grid_stations(stations, validator_config), args.limit)
        _print_matches("Stations near (0, 0) found",
                       find_near_origin_stations(stations, args.radius, validator_config),
                       args.limit)
        print("---")
    return 1 if had_errors else 0


def cmd_urls(args, validator_config) -> int:
    loaded, had_errors = _load_all(args.files)
    for path, stations in loaded:
        checks = check_stream_urls(stations)
        summary = summarize_url_checks(checks)
        print(f"Stream URLs in {path}:")
        for status, count in summary.items():
            print(f"  {status:<12} {count:,}")

        flagged = [c for c in checks if c.status != OK]
        shown = flagged if args.limit is None else flagged[:args.limit]
        for c in shown:
            print(f"  {c.status.upper()}: index {c.index} - {c.name or 'Unnamed'} ({c.url})")
        if len(shown) < len(flagged):
            print(f"  ... and {len(flagged) - len(shown)} more")
        print("---")
    return 1 if had_errors else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Station coordinate validation")
    parser.add_argument('--config', type=Path, help='JSON file overriding aliases/sentinels')
    parser.add_argument('--verbose', '-v', action='store_true')
    subparsers = parser.add_subparsers(dest='command', help='Validation type')

    check = subparsers.add_parser('check', help='Classify station coordinates')
    check.add_argument('files', nargs='+', type=Path, help='Station JSON files or directories')
    check.add_argument('--export-csv', type=Path, help='Write diagnostics to CSV')
    check.add_argument('--by-country', action='store_true', help='Print per-country breakdown')
    check.add_argument('--strict', action='store_true', help='Exit 1 if any station is invalid')
    check.add_argument('--limit', type=int, default=50, help='Flagged stations to print per file')

    placeholders = subparsers.add_parser('placeholders', help='List placeholder coordinates')
    placeholders.add_argument('files', nargs='+', type=Path)
    placeholders.add_argument('--limit', type=int)

    grid = subparsers.add_parser('grid', help='List grid-pattern and near-(0,0) stations')
    grid.add_argument('files', nargs='+', type=Path)
    grid.add_argument('--radius', type=float, default=10.0, help='Degrees around (0, 0)')
    grid.add_argument('--limit', type=int, default=20)

    urls = subparsers.add_parser('urls', help='Audit stream URLs (offline)')
    urls.add_argument('files', nargs='+', type=Path)
    urls.add_argument('--limit', type=int, default=20)

    return parser


COMMANDS = {
    'check': cmd_check,
    'placeholders': cmd_placeholders,
    'grid': cmd_grid,
    'urls': cmd_urls,
}


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else config.LOG_LEVEL,
                        format='%(message)s')

    command = COMMANDS.get(args.command)
    if command is None:
        parser.print_help()
        return 1

    try:
        validator_config = load_validator_config(args.config)
    except ConfigError as e:
        logger.error(f"ERROR: {e}")
        return 1

    return command(args, validator_config)


if __name__ == "__main__":
    sys.exit(main())
