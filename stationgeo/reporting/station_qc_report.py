"""
Station QC Report

Renders a validation Report for people and spreadsheets:
- Console summary (valid / invalid / placeholder counts)
- One line per flagged station
- Per-country breakdown
- CSV export of every diagnostic
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Mapping, Optional, Sequence

import pandas as pd

from ..utils.country_utils import country_label
from ..validate_coordinates import Report, Status

WIDTH = 80

COLUMNS = [
    "index", "name", "country", "country_iso3", "status",
    "placeholder_reason", "latitude", "longitude",
]


def format_report(report: Report, title: Optional[str] = None, limit: Optional[int] = None) -> str:
    """Summary block followed by the flagged stations (first `limit` of them)."""
    lines = ["=" * WIDTH]
    lines.append(f"STATION COORDINATE REPORT{': ' + title if title else ''}")
    lines.append("=" * WIDTH)
    lines.append(f"Total stations:       {report.total:,}")
    lines.append(f"Valid stations:       {report.valid_count:,}")
    lines.append(f"Invalid stations:     {report.invalid_count:,}")
    lines.append(f"Placeholder stations: {report.placeholder_count:,}")
    lines.append("=" * WIDTH)

    issues = report.issues
    shown = issues if limit is None else issues[:limit]
    for result in shown:
        label = result.status.value.upper()
        if result.placeholder_reason and result.status is Status.PLACEHOLDER:
            label = f"{label} ({result.placeholder_reason})"
        lines.append(
            f"{label}: index {result.index} - {result.name or 'Unnamed'} "
            f"({result.latitude}, {result.longitude})"
        )
    if len(shown) < len(issues):
        lines.append(f"  ... and {len(issues) - len(shown)} more")

    return "\n".join(lines)


def report_to_dataframe(report: Report, stations: Sequence[Mapping]) -> pd.DataFrame:
    """One row per station with its classification and normalized country."""
    rows = []
    for result in report.diagnostics:
        station = stations[result.index]
        rows.append({
            "index": result.index,
            "name": station.get("name"),
            "country": station.get("country"),
            "country_iso3": country_label(station.get("country")),
            "status": result.status.value,
            "placeholder_reason": result.placeholder_reason,
            "latitude": result.latitude,
            "longitude": result.longitude,
        })
    return pd.DataFrame(rows, columns=COLUMNS)


def country_breakdown(df: pd.DataFrame) -> pd.DataFrame:
    """Count stations per country and status, busiest countries first."""
    statuses: List[str] = [s.value for s in Status]
    if df.empty:
        return pd.DataFrame(columns=statuses + ["total"])

    table = pd.crosstab(df["country_iso3"], df["status"])
    table = table.reindex(columns=statuses, fill_value=0)
    table["total"] = table.sum(axis=1)
    table = table.sort_values("total", ascending=False, kind="mergesort")
    table.columns.name = None
    return table


def export_report_csv(report: Report, stations: Sequence[Mapping], path) -> Path:
    """Write every diagnostic to CSV and return the path."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    report_to_dataframe(report, stations).to_csv(path, index=False)
    return path
