"""SQLAlchemy models for raw ACRIS real property data.

Bronze layer only: each table holds rows exactly as they came out of the
ACRIS CSV exports (Real Property Legals, Parties and Master). Cleaning and
joining happen in the pydantic models, see schemas.py and
transformations.py.

All three datasets share DOCUMENT ID as the join key:
- legals: which block/lot/unit a filing touches
- parties: who is on the filing (buyers, sellers, lenders)
- master: when it was recorded and for how much
"""

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import BigInteger, Date, DateTime, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .database import Base


class BronzeRealPropertyLegal(Base):
    """Raw legal description row: one (document, block, lot, unit) link."""

    __tablename__ = "bronze_real_property_legals"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    document_id: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    block: Mapped[int | None] = mapped_column(Integer)
    lot: Mapped[int | None] = mapped_column(Integer)
    unit: Mapped[str | None] = mapped_column(String(20))
    street_number: Mapped[str | None] = mapped_column(String(20))
    street_name: Mapped[str | None] = mapped_column(Text)
    fetched_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    __table_args__ = (Index("ix_bronze_legals_block_lot", "block", "lot"),)

    def __repr__(self) -> str:
        return f"<BronzeRealPropertyLegal {self.document_id}: {self.block}/{self.lot} {self.unit}>"


class BronzeRealPropertyParty(Base):
    """Raw party row. Party type 1 is usually the grantor, 2 the grantee."""

    __tablename__ = "bronze_real_property_parties"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    document_id: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    record_type: Mapped[str | None] = mapped_column(String(10))
    party_type: Mapped[int | None] = mapped_column(Integer)
    name: Mapped[str | None] = mapped_column(Text)
    fetched_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    def __repr__(self) -> str:
        return f"<BronzeRealPropertyParty {self.document_id}: {self.name}>"


class BronzeRealPropertyMaster(Base):
    """Raw master row: recording date and document amount."""

    __tablename__ = "bronze_real_property_masters"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    document_id: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    recorded_date: Mapped[date | None] = mapped_column(Date)
    amount: Mapped[Decimal | None] = mapped_column(Numeric(16, 2))
    fetched_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    def __repr__(self) -> str:
        return f"<BronzeRealPropertyMaster {self.document_id}: {self.recorded_date} {self.amount}>"
