import os
from datetime import date
from decimal import Decimal

# Never touch a real database from tests
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from unit_report.database import init_db
from unit_report.record_store import RecordStore
from unit_report.schemas import LegalRecord, MasterRecord, PartyRecord

BLOCK = 149
LOT = 1102
SPONSOR = "138 WILLOUGHBY LLC"


@pytest.fixture
def legals():
    return [
        LegalRecord(document_id=1, block=BLOCK, lot=LOT, unit="15A"),
        LegalRecord(document_id=2, block=BLOCK, lot=LOT, unit="42E"),
        LegalRecord(document_id=3, block=BLOCK, lot=LOT, unit="42D"),
        LegalRecord(document_id=4, block=BLOCK, lot=LOT, unit="42D"),
        LegalRecord(document_id=5, block=BLOCK, lot=LOT, unit="17B"),
        LegalRecord(document_id=7, block=BLOCK, lot=LOT, unit="39A"),
        # Another building, must never leak into the report
        LegalRecord(document_id=6, block=150, lot=1, unit="99Z"),
    ]


@pytest.fixture
def parties():
    return [
        PartyRecord(document_id=1, record_type="P", party_type=1, name=SPONSOR),
        PartyRecord(document_id=1, record_type="P", party_type=2, name="JOHN SMITH"),
        PartyRecord(document_id=2, record_type="P", party_type=1, name=SPONSOR),
        PartyRecord(document_id=2, record_type="P", party_type=2, name="JANE DOE"),
        PartyRecord(document_id=3, record_type="P", party_type=2, name="ACME TRUST"),
        PartyRecord(document_id=4, record_type="P", party_type=2, name="ACME TRUST"),
        PartyRecord(document_id=4, record_type="P", party_type=2, name="MARY ROE"),
        PartyRecord(document_id=5, record_type="P", party_type=2, name="BOB ROE"),
        PartyRecord(document_id=6, record_type="P", party_type=2, name="OTHER BUILDING LLC"),
    ]


@pytest.fixture
def masters():
    return [
        MasterRecord(document_id=1, recorded_date=date(2020, 3, 1), amount=Decimal("1234500")),
        MasterRecord(document_id=2, recorded_date=date(2021, 5, 10), amount=Decimal("2000000")),
        MasterRecord(document_id=3, recorded_date=date(2021, 7, 1), amount=None),
        MasterRecord(document_id=4, recorded_date=date(2021, 6, 1), amount=Decimal("3500000")),
        MasterRecord(document_id=7, recorded_date=date(2019, 1, 15), amount=Decimal("0")),
        MasterRecord(document_id=6, recorded_date=date(2018, 1, 1), amount=Decimal("900000")),
    ]


@pytest.fixture
def store(legals, parties, masters):
    return RecordStore.from_records(legals, parties, masters, block=BLOCK, lot=LOT)


@pytest.fixture
def db_session():
    engine = create_engine("sqlite://")
    init_db(bind=engine)
    with Session(engine) as session:
        yield session
    engine.dispose()
