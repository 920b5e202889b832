"""Report assembly: counts, the rented-units input and the CSV sink."""

import json
import logging
from collections.abc import Callable, Sequence
from pathlib import Path

import pandas as pd

from .schemas import ReportStats, UnitSummary

logger = logging.getLogger(__name__)

REPORT_COLUMNS = [
    "unit",
    "floor",
    "line",
    "beds",
    "baths",
    "date",
    "amount",
    "isLLC",
    "rented",
    "buyers",
]


def load_rented_units(path: str | Path) -> frozenset[str]:
    """Read a JSON array of unit identifiers, e.g. ["17B", "22F"]."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON array of unit identifiers")
    return frozenset(str(unit).strip().upper() for unit in data if str(unit).strip())


def _csv_bool(value: bool) -> str:
    return "true" if value else "false"


def summarize_report(rows: Sequence[UnitSummary]) -> ReportStats:
    return ReportStats(
        units_sold=len(rows),
        llcs=sum(1 for row in rows if row.is_llc),
    )


def report_frame(rows: Sequence[UnitSummary]) -> pd.DataFrame:
    """Rows as a DataFrame in report column order."""
    records = [
        {
            "unit": row.unit,
            "floor": row.floor,
            "line": row.line,
            "beds": row.beds,
            "baths": row.baths,
            "date": row.date,
            "amount": str(row.amount) if row.amount is not None else None,
            "isLLC": _csv_bool(row.is_llc),
            "rented": _csv_bool(row.rented),
            "buyers": json.dumps(row.buyers),
        }
        for row in rows
    ]
    return pd.DataFrame(records, columns=REPORT_COLUMNS)


def write_report_csv(rows: Sequence[UnitSummary], path: str | Path) -> Path:
    """Write the report CSV. I/O errors propagate."""
    path = Path(path)
    report_frame(rows).to_csv(path, index=False)
    logger.info("Wrote %d rows to %s", len(rows), path)
    return path


def assemble_report(
    rows: Sequence[UnitSummary],
    sink: Callable[[Sequence[UnitSummary]], object],
) -> ReportStats:
    """Count the rows and hand them to the sink unchanged."""
    stats = summarize_report(rows)
    logger.info("Units sold: %d, LLC buyers: %d", stats.units_sold, stats.llcs)
    sink(rows)
    return stats
