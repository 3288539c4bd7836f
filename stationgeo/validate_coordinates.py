"""
Station Coordinate Validation

Classifies station records by the quality of their coordinates:
- Valid: numeric, in range, not a placeholder
- InvalidNumeric: latitude/longitude absent or not a number
- OutOfRange: numeric but outside [-90, 90] / [-180, 180]
- Placeholder: a known sentinel pair (Null Island, US centroid, the -98
  longitude grid...) or anything within a few degrees of (0, 0)

Placeholder detection runs independently of the numeric/range checks, and a
placeholder record is not counted as invalid. The Report keeps the two
counts apart.

Usage:
    from stationgeo.validate_coordinates import StationRecordValidator

    report = StationRecordValidator().validate(stations)
    for result in report.issues:
        print(result.index, result.status.value)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from .config import ValidatorConfig
from .utils.coordinates import (
    first_present,
    is_grid_pattern,
    is_near_origin,
    is_valid_coord,
    parse_coordinate,
    placeholder_reason,
)


class Status(str, Enum):
    VALID = "valid"
    INVALID_NUMERIC = "invalid_numeric"
    OUT_OF_RANGE = "out_of_range"
    PLACEHOLDER = "placeholder"


@dataclass(frozen=True)
class ValidationResult:
    """Classification of one station record."""
    index: int
    status: Status
    latitude: Optional[float]
    longitude: Optional[float]
    placeholder_reason: Optional[str] = None  # 'sentinel', 'proximity'
    name: Optional[str] = None


@dataclass
class Report:
    """Aggregate outcome of one validate() call.

    invalid_count covers InvalidNumeric and OutOfRange only; placeholder
    records are counted in placeholder_count.
    """
    valid_count: int = 0
    invalid_count: int = 0
    placeholder_count: int = 0
    diagnostics: List[ValidationResult] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.diagnostics)

    @property
    def issues(self) -> List[ValidationResult]:
        """Diagnostics for every record that is not Valid, in input order."""
        return [d for d in self.diagnostics if d.status is not Status.VALID]

    def status_counts(self) -> Dict[Status, int]:
        counts = {status: 0 for status in Status}
        for d in self.diagnostics:
            counts[d.status] += 1
        return counts


@dataclass(frozen=True)
class StationMatch:
    """A station surfaced by one of the diagnostic queries."""
    index: int
    name: Optional[str]
    country: Optional[str]
    state: Optional[str]
    city: Optional[str]
    latitude: float
    longitude: float
    reason: Optional[str] = None


class StationRecordValidator:
    """Stateless coordinate classifier driven by a ValidatorConfig."""

    def __init__(self, config: Optional[ValidatorConfig] = None):
        self.config = config or ValidatorConfig()

    def parse(self, record: Mapping) -> Tuple[Optional[float], Optional[float]]:
        """Parse (lat, lon) using the configured field aliases."""
        lat = parse_coordinate(first_present(record, self.config.latitude_fields))
        lon = parse_coordinate(first_present(record, self.config.longitude_fields))
        return lat, lon

    def placeholder_reason(self, lat: float, lon: float) -> Optional[str]:
        return placeholder_reason(
            lat, lon,
            self.config.sentinels,
            self.config.proximity_degrees,
            self.config.sentinel_tolerance,
        )

    def is_placeholder(self, lat: float, lon: float) -> bool:
        """Check if a parsed pair is a sentinel or near (0, 0)."""
        return self.placeholder_reason(lat, lon) is not None

    def classify(self, record: Mapping, index: int = 0) -> ValidationResult:
        """Classify a single record. Never raises for bad coordinate data."""
        lat, lon = self.parse(record)
        name = record.get("name")

        if lat is None or lon is None:
            return ValidationResult(index, Status.INVALID_NUMERIC, lat, lon, name=name)

        reason = self.placeholder_reason(lat, lon)

        if not is_valid_coord(lat, lon):
            status = Status.OUT_OF_RANGE
        elif reason:
            status = Status.PLACEHOLDER
        else:
            status = Status.VALID

        return ValidationResult(index, status, lat, lon, placeholder_reason=reason, name=name)

    def validate(self, records: Sequence[Mapping]) -> Report:
        """
        Classify every record, preserving input order.

        Args:
            records: Station records (mappings); may be empty

        Returns:
            Report with counts and one ValidationResult per record
        """
        report = Report()

        for index, record in enumerate(records):
            result = self.classify(record, index)
            report.diagnostics.append(result)

            if result.status is Status.VALID:
                report.valid_count += 1
            elif result.status is Status.PLACEHOLDER:
                report.placeholder_count += 1
            else:
                report.invalid_count += 1

        return report


def validate(records: Sequence[Mapping], config: Optional[ValidatorConfig] = None) -> Report:
    """Classify records with a fresh validator (see StationRecordValidator.validate)."""
    return StationRecordValidator(config).validate(records)


def _match(index: int, record: Mapping, lat: float, lon: float,
           reason: Optional[str] = None) -> StationMatch:
    return StationMatch(
        index=index,
        name=record.get("name"),
        country=record.get("country"),
        state=record.get("state"),
        city=record.get("city"),
        latitude=lat,
        longitude=lon,
        reason=reason,
    )


def _parsed(records: Sequence[Mapping], validator: StationRecordValidator):
    for index, record in enumerate(records):
        lat, lon = validator.parse(record)
        if lat is not None and lon is not None:
            yield index, record, lat, lon


def find_placeholder_stations(
    records: Sequence[Mapping],
    config: Optional[ValidatorConfig] = None
) -> List[StationMatch]:
    """Stations whose coordinates are placeholders, regardless of range."""
    validator = StationRecordValidator(config)
    matches = []
    for index, record, lat, lon in _parsed(records, validator):
        reason = validator.placeholder_reason(lat, lon)
        if reason:
            matches.append(_match(index, record, lat, lon, reason))
    return matches


def find_grid_stations(
    records: Sequence[Mapping],
    config: Optional[ValidatorConfig] = None
) -> List[StationMatch]:
    """Stations sitting on the whole-degree North American grid."""
    validator = StationRecordValidator(config)
    return [
        _match(index, record, lat, lon, "grid")
        for index, record, lat, lon in _parsed(records, validator)
        if is_grid_pattern(lat, lon)
    ]


def find_near_origin_stations(
    records: Sequence[Mapping],
    radius: float = 10.0,
    config: Optional[ValidatorConfig] = None
) -> List[StationMatch]:
    """Stations within radius degrees of (0, 0), i.e. in the Gulf of Guinea."""
    validator = StationRecordValidator(config)
    return [
        _match(index, record, lat, lon, "near_origin")
        for index, record, lat, lon in _parsed(records, validator)
        if is_near_origin(lat, lon, radius)
    ]
