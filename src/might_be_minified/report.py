"""Run reports for batch scans."""

from __future__ import annotations

import importlib.metadata
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from might_be_minified import __version__

from .analysis import (
    MINIFIED_THRESHOLD,
    WEIGHT_LINE,
    WEIGHT_NAME,
    WEIGHT_SHAPE,
    WEIGHT_SPACE,
    Analysis,
)
from .length import LENGTH_METHOD, length_distribution

# Column order of the tabular export
TABLE_COLUMNS = [
    "path",
    "minified_probability",
    "is_likely_minified",
    "space_to_code_ratio",
    "median_ident_length",
    "longest_line",
    "shape",
    "p75_width",
    "line_count",
    "identifier_count",
]


# ---------------------------------------------------------------------------
# Timestamp utility
# ---------------------------------------------------------------------------


def utc_now() -> datetime:
    """Return current UTC datetime (single source for consistency)."""
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Library version detection
# ---------------------------------------------------------------------------


def get_library_version(package_name: str) -> str:
    """Get installed version of a package via importlib.metadata."""
    try:
        return importlib.metadata.version(package_name)
    except importlib.metadata.PackageNotFoundError:
        return "unknown"


# ---------------------------------------------------------------------------
# Records and report
# ---------------------------------------------------------------------------


def build_file_record(path: str | Path, analysis: Analysis) -> Dict[str, Any]:
    """Flatten one analysis into a JSON-serialisable record."""
    record: Dict[str, Any] = {"path": str(path)}
    record.update(analysis.to_dict())
    ident_dist = length_distribution(analysis.identifier_lengths)
    width_dist = length_distribution(analysis.line_widths)
    record["identifier_length_distribution"] = ident_dist.to_dict() if ident_dist else None
    record["line_width_distribution"] = width_dist.to_dict() if width_dist else None
    return record


def build_report(
    records: List[Dict[str, Any]],
    *,
    timestamp: Optional[datetime] = None,
    errors: Optional[List[Dict[str, str]]] = None,
) -> Dict[str, Any]:
    """Build a complete scan report dict.

    ``errors`` lists ``{path, error}`` entries for sources that could not be
    read; they are reported but excluded from the summary.
    """
    ts = timestamp or utc_now()
    minified = [r["path"] for r in records if r["is_likely_minified"]]
    probabilities = [r["minified_probability"] for r in records]

    report: Dict[str, Any] = {
        "might_be_minified_version": __version__,
        "timestamp_utc": ts.isoformat(),
        "scoring": {
            "threshold": MINIFIED_THRESHOLD,
            "weights": {
                "space": WEIGHT_SPACE,
                "name": WEIGHT_NAME,
                "shape": WEIGHT_SHAPE,
                "line": WEIGHT_LINE,
            },
            "length_method": LENGTH_METHOD,
        },
        "libraries": [
            {"name": "pandas", "version": get_library_version("pandas")},
        ],
        "files": records,
        "summary": {
            "file_count": len(records),
            "minified_count": len(minified),
            "minified_files": minified,
            "max_probability": max(probabilities) if probabilities else None,
        },
    }
    if errors:
        report["errors"] = errors
    return report


# ---------------------------------------------------------------------------
# Report validation (for tests)
# ---------------------------------------------------------------------------

_REQUIRED_KEYS = {
    "might_be_minified_version",
    "timestamp_utc",
    "scoring",
    "files",
    "summary",
}
_REQUIRED_RECORD_KEYS = {"path", "minified_probability", "is_likely_minified"}


def validate_report(report: Dict[str, Any]) -> None:
    """Raise ``ValueError`` if the report is structurally invalid."""
    missing = _REQUIRED_KEYS - set(report.keys())
    if missing:
        raise ValueError(f"Missing top-level keys: {missing}")

    if not isinstance(report["files"], list):
        raise ValueError("files must be a list")

    for i, record in enumerate(report["files"]):
        missing_record = _REQUIRED_RECORD_KEYS - set(record.keys())
        if missing_record:
            raise ValueError(f"Missing keys in files[{i}]: {missing_record}")

    if report["summary"].get("file_count") != len(report["files"]):
        raise ValueError("summary.file_count does not match files")


def records_to_dataframe(records: List[Dict[str, Any]]) -> pd.DataFrame:
    """One row per file, metrics only (nested distributions dropped)."""
    rows = [{col: r.get(col) for col in TABLE_COLUMNS} for r in records]
    return pd.DataFrame(rows, columns=TABLE_COLUMNS)
