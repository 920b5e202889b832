"""Load ACRIS CSV exports into the bronze tables.

Each dataset keeps a fixed set of columns; anything else in the export is
ignored. Headers are matched after upper-casing and collapsing whitespace,
so "Document ID" and "DOCUMENT  ID" both map to document_id.
"""

import logging
from pathlib import Path

import pandas as pd
from pydantic import BaseModel, Field, ValidationError
from sqlalchemy.orm import Session

from .models import BronzeRealPropertyLegal, BronzeRealPropertyMaster, BronzeRealPropertyParty
from .schemas import LegalRecord, MasterRecord, PartyRecord

logger = logging.getLogger(__name__)


# =============================================================================
# Column maps: ACRIS header → bronze column
# =============================================================================

LEGAL_COLUMNS = {
    "DOCUMENT ID": "document_id",
    "BLOCK": "block",
    "LOT": "lot",
    "UNIT": "unit",
    "STREET NUMBER": "street_number",
    "STREET NAME": "street_name",
}

PARTY_COLUMNS = {
    "DOCUMENT ID": "document_id",
    "RECORD TYPE": "record_type",
    "PARTY TYPE": "party_type",
    "NAME": "name",
}

MASTER_COLUMNS = {
    "DOCUMENT ID": "document_id",
    "RECORDED / FILED": "recorded_date",
    "DOC. AMOUNT": "amount",
}

# Columns a file must have; the rest are filled with blanks when absent
REQUIRED_COLUMNS = {
    "legals": {"DOCUMENT ID", "BLOCK", "LOT", "UNIT"},
    "parties": {"DOCUMENT ID", "NAME"},
    "masters": {"DOCUMENT ID", "RECORDED / FILED", "DOC. AMOUNT"},
}

DATASETS = {
    "legals": (LEGAL_COLUMNS, LegalRecord, BronzeRealPropertyLegal),
    "parties": (PARTY_COLUMNS, PartyRecord, BronzeRealPropertyParty),
    "masters": (MASTER_COLUMNS, MasterRecord, BronzeRealPropertyMaster),
}

# File names looked up inside a data directory
DEFAULT_FILE_NAMES = {
    "legals": "real_property_legals.csv",
    "parties": "real_property_parties.csv",
    "masters": "real_property_master.csv",
}


class MissingColumnsError(ValueError):
    """A CSV export is missing columns the dataset needs."""

    def __init__(self, path: Path, missing: set[str]):
        self.path = path
        self.missing = missing
        super().__init__(f"{path}: missing columns {', '.join(sorted(missing))}")


class ImportStats(BaseModel):
    """Statistics from one CSV → bronze import."""

    source: str = Field(description="Dataset name: legals, parties or masters")
    rows_read: int = 0
    rows_imported: int = 0
    rows_skipped: int = 0
    validation_errors: list[str] = Field(default_factory=list)

    @property
    def success_rate(self) -> float:
        if self.rows_read == 0:
            return 0.0
        return self.rows_imported / self.rows_read

    def summary(self) -> str:
        return (
            f"{self.source}: {self.rows_imported:,}/{self.rows_read:,} imported "
            f"({self.success_rate * 100:.1f}%), {self.rows_skipped:,} skipped"
        )


def normalize_header(header: str) -> str:
    return " ".join(str(header).split()).upper()


def read_acris_csv(path: str | Path, dataset: str) -> list[dict]:
    """Read an export and return rows keyed by bronze column name."""
    path = Path(path)
    columns, _, _ = DATASETS[dataset]

    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    df.columns = [normalize_header(c) for c in df.columns]

    missing = REQUIRED_COLUMNS[dataset] - set(df.columns)
    if missing:
        raise MissingColumnsError(path, missing)

    for header in columns:
        if header not in df.columns:
            df[header] = ""

    df = df[list(columns)].rename(columns=columns)
    return df.to_dict(orient="records")


def import_dataset(session: Session, path: str | Path, dataset: str) -> ImportStats:
    """Validate each row of an export and insert it into its bronze table."""
    _, schema, model = DATASETS[dataset]
    stats = ImportStats(source=dataset)

    rows = read_acris_csv(path, dataset)
    for line_number, row in enumerate(rows, start=2):
        stats.rows_read += 1

        if not str(row.get("document_id", "")).strip():
            stats.rows_skipped += 1
            continue

        try:
            record = schema.model_validate(row)
        except ValidationError as e:
            stats.validation_errors.append(f"{Path(path).name}:{line_number}: {e.errors()[0]['msg']}")
            stats.rows_skipped += 1
            continue

        session.add(model(**record.model_dump()))
        stats.rows_imported += 1

    session.commit()
    logger.info(
        "Imported %d/%d %s rows from %s",
        stats.rows_imported, stats.rows_read, dataset, path,
    )
    return stats


def import_data_dir(session: Session, data_dir: str | Path) -> dict[str, ImportStats]:
    """Import all three exports from a directory, using DEFAULT_FILE_NAMES."""
    data_dir = Path(data_dir)
    return {
        dataset: import_dataset(session, data_dir / DEFAULT_FILE_NAMES[dataset], dataset)
        for dataset in DATASETS
    }
