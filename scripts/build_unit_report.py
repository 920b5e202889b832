"""Build the per-unit sales report for one building.

Joins ACRIS legals, parties and masters for a block/lot and writes one row
per unit: floor, line, bed/bath layout, first sale amount, earliest recording
date, buyers, LLC flag and rented flag.

Usage:
    uv run python scripts/build_unit_report.py                       # block 149 lot 1102
    uv run python scripts/build_unit_report.py --block 149 --lot 1102 --output report.csv
    uv run python scripts/build_unit_report.py --rented units_rented.json --print
    uv run python scripts/build_unit_report.py --data-dir data     # import CSVs first, then report
"""

import argparse
import logging
import os
import sys
from functools import partial
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import logfire
from sqlalchemy.orm import Session

from unit_report.database import engine, init_db
from unit_report.ingest import import_data_dir
from unit_report.record_store import RecordStore
from unit_report.report import assemble_report, load_rented_units, write_report_csv
from unit_report.transformations import EXCLUDED_BUYER_NAME, summarize_units

logger = logging.getLogger("build_unit_report")

DEFAULT_BLOCK = int(os.getenv("REPORT_BLOCK", "149"))
DEFAULT_LOT = int(os.getenv("REPORT_LOT", "1102"))
DEFAULT_RENTED_PATH = os.getenv("RENTED_UNITS_PATH", "units_rented.json")


def resolve_rented_units(path: Path | None) -> frozenset[str]:
    """Explicit paths must exist; a missing default file means nothing is rented."""
    if path is not None:
        return load_rented_units(path)
    default = Path(DEFAULT_RENTED_PATH)
    if not default.exists():
        logger.warning("%s not found, treating all units as not rented", default)
        return frozenset()
    return load_rented_units(default)


def configure_logging():
    if os.getenv("LOGFIRE_TOKEN"):
        logfire.configure()
        logfire.instrument_sqlalchemy(engine=engine)
        logging.basicConfig(level=logging.INFO, handlers=[logfire.LogfireLoggingHandler()])
    else:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")


def main():
    parser = argparse.ArgumentParser(description="Build the per-unit sales report")
    parser.add_argument("--block", type=int, default=DEFAULT_BLOCK, help=f"Tax block (default: {DEFAULT_BLOCK})")
    parser.add_argument("--lot", type=int, default=DEFAULT_LOT, help=f"Tax lot (default: {DEFAULT_LOT})")
    parser.add_argument("--rented", type=Path, help=f"JSON list of rented units (default: {DEFAULT_RENTED_PATH})")
    parser.add_argument("--output", type=Path, default=Path("report.csv"), help="CSV output path")
    parser.add_argument("--excluded-name", default=EXCLUDED_BUYER_NAME, help="Sponsor name to drop from buyers")
    parser.add_argument("--data-dir", type=Path, help="Import the three ACRIS exports from this directory first")
    parser.add_argument("--print", dest="print_rows", action="store_true", help="Print each row")
    args = parser.parse_args()

    configure_logging()
    init_db()

    rented_units = resolve_rented_units(args.rented)

    with Session(engine) as session:
        if args.data_dir:
            print(f"=== Importing ACRIS exports from {args.data_dir} ===")
            for stats in import_data_dir(session, args.data_dir).values():
                print(stats.summary())

        store = RecordStore.from_session(session, args.block, args.lot)

    rows = summarize_units(store, rented_units, args.excluded_name)

    if args.print_rows:
        for row in rows:
            print(row.model_dump_json())

    stats = assemble_report(rows, partial(write_report_csv, path=args.output))

    print(f"\n=== Block {args.block} lot {args.lot} ===")
    print(f"Units sold: {stats.units_sold}")
    print(f"LLC buyers: {stats.llcs} ({stats.llc_rate * 100:.1f}%)")
    print(f"Report written to {args.output}")


if __name__ == "__main__":
    main()
