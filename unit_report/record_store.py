"""In-memory store for one (block, lot) slice of ACRIS records.

Everything for a building fits in memory, so the store loads the three
collections once and answers grouped lookups from dicts. Lookups on an
unknown key return an empty tuple.
"""

import logging
from collections import defaultdict
from collections.abc import Callable, Hashable, Iterable
from typing import TypeVar

from sqlalchemy import select
from sqlalchemy.orm import Session

from .models import BronzeRealPropertyLegal, BronzeRealPropertyMaster, BronzeRealPropertyParty
from .schemas import LegalRecord, MasterRecord, PartyRecord

logger = logging.getLogger(__name__)

T = TypeVar("T")


def group_by(records: Iterable[T], key: Callable[[T], Hashable]) -> dict[Hashable, tuple[T, ...]]:
    """Group records by key, keeping input order within each group."""
    groups: dict[Hashable, list[T]] = defaultdict(list)
    for record in records:
        groups[key(record)].append(record)
    return {k: tuple(v) for k, v in groups.items()}


class RecordStore:
    """Legals, parties and masters for a single block/lot."""

    def __init__(
        self,
        legals: Iterable[LegalRecord],
        parties: Iterable[PartyRecord],
        masters: Iterable[MasterRecord],
    ):
        self.legals = tuple(legals)
        self.parties = tuple(parties)
        self.masters = tuple(masters)

        self._legals_by_unit = group_by(self.legals, lambda r: r.unit)
        self._parties_by_document = group_by(self.parties, lambda r: r.document_id)
        self._masters_by_document = group_by(self.masters, lambda r: r.document_id)

    @classmethod
    def from_records(
        cls,
        legals: Iterable[LegalRecord],
        parties: Iterable[PartyRecord],
        masters: Iterable[MasterRecord],
        block: int,
        lot: int,
    ) -> "RecordStore":
        """Filter raw collections down to one block/lot and its documents."""
        matched = [r for r in legals if r.block == block and r.lot == lot]
        document_ids = {r.document_id for r in matched}
        return cls(
            matched,
            [p for p in parties if p.document_id in document_ids],
            [m for m in masters if m.document_id in document_ids],
        )

    @classmethod
    def from_session(cls, session: Session, block: int, lot: int) -> "RecordStore":
        """Load one block/lot from the bronze tables."""
        legal_rows = session.execute(
            select(BronzeRealPropertyLegal)
            .where(BronzeRealPropertyLegal.block == block, BronzeRealPropertyLegal.lot == lot)
            .order_by(BronzeRealPropertyLegal.id)
        ).scalars().all()
        legals = [LegalRecord.model_validate(row) for row in legal_rows]

        document_ids = sorted({r.document_id for r in legals})
        parties: list[PartyRecord] = []
        masters: list[MasterRecord] = []
        if document_ids:
            party_rows = session.execute(
                select(BronzeRealPropertyParty)
                .where(BronzeRealPropertyParty.document_id.in_(document_ids))
                .order_by(BronzeRealPropertyParty.id)
            ).scalars().all()
            parties = [PartyRecord.model_validate(row) for row in party_rows]

            master_rows = session.execute(
                select(BronzeRealPropertyMaster)
                .where(BronzeRealPropertyMaster.document_id.in_(document_ids))
                .order_by(BronzeRealPropertyMaster.id)
            ).scalars().all()
            masters = [MasterRecord.model_validate(row) for row in master_rows]

        logger.info(
            "Loaded block %s lot %s: %d legals, %d parties, %d masters",
            block, lot, len(legals), len(parties), len(masters),
        )
        return cls(legals, parties, masters)

    def units(self) -> list[str]:
        """Distinct units, ascending."""
        return sorted(self._legals_by_unit)

    def legals_for_unit(self, unit: str) -> tuple[LegalRecord, ...]:
        return self._legals_by_unit.get(unit, ())

    def parties_for_document(self, document_id: int) -> tuple[PartyRecord, ...]:
        return self._parties_by_document.get(document_id, ())

    def masters_for_document(self, document_id: int) -> tuple[MasterRecord, ...]:
        return self._masters_by_document.get(document_id, ())

    def document_ids_for_unit(self, unit: str) -> list[int]:
        return [r.document_id for r in self.legals_for_unit(unit)]
