"""Coordinate quality control for broadcast station datasets.

Usage:
    from stationgeo import validate

    report = validate(stations)
    print(report.valid_count, report.invalid_count, report.placeholder_count)
"""

from .validate_coordinates import (
    Report,
    StationRecordValidator,
    Status,
    ValidationResult,
    validate,
)

__all__ = [
    'Report',
    'StationRecordValidator',
    'Status',
    'ValidationResult',
    'validate',
]

__version__ = "0.1.0"
