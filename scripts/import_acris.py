"""Import ACRIS Real Property CSV exports into the bronze tables.

Loads the three NYC ACRIS datasets that the unit report joins on DOCUMENT ID:
1. Real Property Legals  → bronze_real_property_legals
2. Real Property Parties → bronze_real_property_parties
3. Real Property Master  → bronze_real_property_masters

Usage:
    uv run python scripts/import_acris.py --legals data/real_property_legals.csv
    uv run python scripts/import_acris.py --data-dir data      # all three by default names
    uv run python scripts/import_acris.py --stats
"""

import argparse
import logging
import sys
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from unit_report.database import engine, init_db
from unit_report.ingest import DATASETS, DEFAULT_FILE_NAMES, ImportStats, import_dataset
from unit_report.models import (
    BronzeRealPropertyLegal,
    BronzeRealPropertyMaster,
    BronzeRealPropertyParty,
)


def print_import_stats(stats: ImportStats):
    print(stats.summary())
    if stats.validation_errors:
        print(f"Errors ({len(stats.validation_errors)}):")
        for err in stats.validation_errors[:5]:
            print(f"  - {err}")


def print_stats(session: Session):
    """Print row counts for the bronze tables."""
    print("\n=== Bronze Layer ===")
    for label, model in (
        ("legals", BronzeRealPropertyLegal),
        ("parties", BronzeRealPropertyParty),
        ("masters", BronzeRealPropertyMaster),
    ):
        count = session.scalar(select(func.count(model.id)))
        print(f"  {label:<8} {count:>10,}")

    buildings = session.execute(
        select(
            BronzeRealPropertyLegal.block,
            BronzeRealPropertyLegal.lot,
            func.count(func.distinct(BronzeRealPropertyLegal.unit)).label("units"),
        )
        .group_by(BronzeRealPropertyLegal.block, BronzeRealPropertyLegal.lot)
        .order_by(func.count(func.distinct(BronzeRealPropertyLegal.unit)).desc())
        .limit(10)
    )
    print("\n=== Top block/lots by unit count ===")
    for row in buildings:
        print(f"  block {row.block} lot {row.lot}: {row.units} units")


def main():
    parser = argparse.ArgumentParser(description="Import ACRIS CSV exports")
    parser.add_argument("--legals", type=Path, help="Real Property Legals CSV")
    parser.add_argument("--parties", type=Path, help="Real Property Parties CSV")
    parser.add_argument("--masters", type=Path, help="Real Property Master CSV")
    parser.add_argument("--data-dir", type=Path, help="Directory holding all three exports")
    parser.add_argument("--stats", action="store_true", help="Show statistics")
    args = parser.parse_args()

    paths = {name: getattr(args, name) for name in DATASETS}
    if args.data_dir:
        for name, file_name in DEFAULT_FILE_NAMES.items():
            paths[name] = paths[name] or args.data_dir / file_name

    if not (any(paths.values()) or args.stats):
        parser.print_help()
        return

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print("Creating tables if needed...")
    init_db()

    with Session(engine) as session:
        for name, path in paths.items():
            if not path:
                continue
            print(f"\n=== Importing {name} from {path} ===")
            print_import_stats(import_dataset(session, path, name))

        if args.stats:
            print_stats(session)


if __name__ == "__main__":
    main()
