"""Pydantic schemas for ACRIS records and the derived unit report.

These models are the contract between the bronze tables (raw, as exported)
and the unit report:
- LegalRecord / PartyRecord / MasterRecord: one cleaned row per raw row,
  validators normalize the messy CSV values (blank cells, "$1,234" amounts,
  MM/DD/YYYY dates)
- UnitSummary: one row of the final report
- ReportStats: counts printed at the end of a run
"""

import math
import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Date layouts seen in ACRIS exports, tried in order
RECORDED_DATE_FORMATS = (
    "%m/%d/%Y",
    "%m/%d/%Y %I:%M:%S %p",
    "%Y-%m-%d",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d %H:%M:%S",
)


def _blank_to_none(v):
    """Treat empty strings and NaN as missing."""
    if v is None:
        return None
    if isinstance(v, float) and math.isnan(v):
        return None
    if isinstance(v, str) and not v.strip():
        return None
    return v


def parse_amount(raw) -> Decimal | None:
    """Parse a document amount like "1,234,500" or "$1234500.00"."""
    raw = _blank_to_none(raw)
    if raw is None:
        return None
    if isinstance(raw, Decimal):
        return raw
    if isinstance(raw, (int, float)):
        return Decimal(str(raw))
    clean = re.sub(r"[$,\s]", "", str(raw))
    try:
        return Decimal(clean)
    except InvalidOperation:
        raise ValueError(f"Unparseable amount: {raw!r}")


def parse_recorded_date(raw) -> date | None:
    """Parse a recording date into a date, dropping any time component."""
    raw = _blank_to_none(raw)
    if raw is None:
        return None
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    text = str(raw).strip()
    for fmt in RECORDED_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"Unparseable recorded date: {raw!r}")


# =============================================================================
# Input records
# =============================================================================


class LegalRecord(BaseModel):
    """A legal description: links a document to a block, lot and unit."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    document_id: int = Field(description="Shared key across legals, parties and masters")
    block: int
    lot: int
    unit: str = Field(
        default="",
        description="Unit identifier, floor prefix + line letter (e.g. '15A')"
    )
    street_number: str | None = None
    street_name: str | None = None

    @field_validator("unit", mode="before")
    @classmethod
    def clean_unit(cls, v):
        v = _blank_to_none(v)
        return "" if v is None else str(v).strip().upper()

    @field_validator("street_number", "street_name", mode="before")
    @classmethod
    def clean_street(cls, v):
        v = _blank_to_none(v)
        return None if v is None else str(v).strip()


class PartyRecord(BaseModel):
    """A party on a filing. Types are kept but not used for filtering."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    document_id: int
    record_type: str | None = None
    party_type: int | None = None
    name: str = Field(default="", description="Party name as recorded, whitespace-trimmed")

    @field_validator("name", mode="before")
    @classmethod
    def clean_name(cls, v):
        v = _blank_to_none(v)
        return "" if v is None else " ".join(str(v).split())

    @field_validator("record_type", "party_type", mode="before")
    @classmethod
    def blank_types(cls, v):
        return _blank_to_none(v)


class MasterRecord(BaseModel):
    """Master deed/mortgage record: when and for how much."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    document_id: int
    recorded_date: date | None = Field(default=None, description="RECORDED / FILED")
    amount: Decimal | None = Field(
        default=None,
        description="DOC. AMOUNT in raw source units, absent for many filings"
    )

    @field_validator("recorded_date", mode="before")
    @classmethod
    def parse_date(cls, v):
        return parse_recorded_date(v)

    @field_validator("amount", mode="before")
    @classmethod
    def parse_doc_amount(cls, v):
        return parse_amount(v)


# =============================================================================
# Report output
# =============================================================================


class UnitSummary(BaseModel):
    """One row of the unit report."""

    unit: str
    floor: str | None = Field(default=None, description="First two characters of unit")
    line: str | None = Field(default=None, description="Last character of unit")
    beds: str | None = None
    baths: str | None = None
    date: str | None = Field(default=None, description="Earliest recording date, MM/DD/YY")
    amount: Decimal | None = Field(
        default=None,
        description="First non-empty amount / 100,000, rounded half-up to 2 places"
    )
    is_llc: bool = Field(default=False, description="Any buyer name contains LLC, LTD or TRUST")
    rented: bool = False
    buyers: list[str] = Field(default_factory=list)


class ReportStats(BaseModel):
    """Dataset-level counts for a report run."""

    units_sold: int = 0
    llcs: int = 0

    @property
    def llc_rate(self) -> float:
        if self.units_sold == 0:
            return 0.0
        return self.llcs / self.units_sold
