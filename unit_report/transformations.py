"""Bronze → report: per-unit join and derivation.

For every distinct unit in a block/lot this module joins the unit's
documents to their master and party records and derives one UnitSummary:

- amount: first non-empty DOC. AMOUNT in join order, scaled
- date: earliest RECORDED / FILED date
- buyers: party names minus the sponsor, de-duplicated in first-seen order
- is_llc: any buyer looks like an entity (LLC, LTD, TRUST)
- floor/line/beds/baths: from the unit identifier and the classification table
- rented: membership in the rented-units set

Missing joins never fail a unit; they just leave fields empty.
"""

import logging
from collections.abc import Collection, Iterable
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from .classification import classify_unit
from .record_store import RecordStore
from .schemas import MasterRecord, PartyRecord, UnitSummary

logger = logging.getLogger(__name__)

# The sponsor sells every unit, so it shows up as a party on each deed
EXCLUDED_BUYER_NAME = "138 WILLOUGHBY LLC"

ENTITY_MARKERS = ("LLC", "LTD", "TRUST")

# Raw DOC. AMOUNT → report units (1,234,500 → 12.35)
AMOUNT_DIVISOR = Decimal(100_000)
AMOUNT_QUANTUM = Decimal("0.01")

REPORT_DATE_FORMAT = "%m/%d/%y"

# Shortest unit that still has a two-character floor and a line letter
MIN_UNIT_LENGTH = 3


# =============================================================================
# Amount and date
# =============================================================================


def scale_amount(raw: Decimal | None) -> Decimal | None:
    """Scale a raw amount, rounding half-up to cents. None stays None."""
    if raw is None:
        return None
    return (Decimal(raw) / AMOUNT_DIVISOR).quantize(AMOUNT_QUANTUM, rounding=ROUND_HALF_UP)


def resolve_amount(masters: Iterable[MasterRecord]) -> Decimal | None:
    """First non-empty amount in join order.

    Zero counts as empty: ACRIS records $0 on most non-sale filings.
    """
    for master in masters:
        if master.amount:
            return master.amount
    return None


def resolve_recorded_date(masters: Iterable[MasterRecord]) -> date | None:
    """Earliest recording date, or None if no master has one."""
    dates = sorted(m.recorded_date for m in masters if m.recorded_date is not None)
    return dates[0] if dates else None


def format_recorded_date(value: date | None) -> str | None:
    if value is None:
        return None
    return value.strftime(REPORT_DATE_FORMAT)


# =============================================================================
# Buyers
# =============================================================================


def filter_buyers(
    parties: Iterable[PartyRecord],
    excluded_name: str = EXCLUDED_BUYER_NAME,
) -> list[str]:
    """Party names in join order, minus the excluded name, de-duplicated."""
    buyers: list[str] = []
    seen: set[str] = set()
    for party in parties:
        name = party.name
        if not name or name == excluded_name or name in seen:
            continue
        seen.add(name)
        buyers.append(name)
    return buyers


def is_entity_buyer(name: str) -> bool:
    """Case-sensitive substring match against ENTITY_MARKERS."""
    return any(marker in name for marker in ENTITY_MARKERS)


# =============================================================================
# Units
# =============================================================================


def split_unit(unit: str) -> tuple[str | None, str | None]:
    """Split '15A' into ('15', 'A').

    Units shorter than three characters can't be split reliably; both parts
    come back as None and the row is still reported.
    """
    if len(unit) < MIN_UNIT_LENGTH:
        return None, None
    return unit[:2], unit[-1]


def build_unit_summary(
    unit: str,
    store: RecordStore,
    rented_units: Collection[str] = frozenset(),
    excluded_name: str = EXCLUDED_BUYER_NAME,
) -> UnitSummary:
    """Join and derive the report row for one unit."""
    document_ids = store.document_ids_for_unit(unit)

    masters = [m for doc_id in document_ids for m in store.masters_for_document(doc_id)]
    parties = [p for doc_id in document_ids for p in store.parties_for_document(doc_id)]

    buyers = filter_buyers(parties, excluded_name)

    floor, line = split_unit(unit)
    if floor is None:
        logger.warning("Malformed unit identifier %r, floor/line left empty", unit)
    unit_type = classify_unit(floor, line)

    return UnitSummary(
        unit=unit,
        floor=floor,
        line=line,
        beds=unit_type.beds if unit_type else None,
        baths=unit_type.baths if unit_type else None,
        date=format_recorded_date(resolve_recorded_date(masters)),
        amount=scale_amount(resolve_amount(masters)),
        is_llc=any(is_entity_buyer(b) for b in buyers),
        rented=unit in rented_units,
        buyers=buyers,
    )


def summarize_units(
    store: RecordStore,
    rented_units: Collection[str] = frozenset(),
    excluded_name: str = EXCLUDED_BUYER_NAME,
) -> list[UnitSummary]:
    """One UnitSummary per distinct unit, in ascending unit order."""
    rows = [
        build_unit_summary(unit, store, rented_units, excluded_name)
        for unit in store.units()
    ]
    missing_amount = sum(1 for r in rows if r.amount is None)
    unclassified = sum(1 for r in rows if r.beds is None)
    logger.info(
        "Summarized %d units (%d without amount, %d unclassified)",
        len(rows), missing_amount, unclassified,
    )
    return rows
