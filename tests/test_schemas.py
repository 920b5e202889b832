from datetime import date, datetime
from decimal import Decimal

import pytest
from pydantic import ValidationError

from unit_report.schemas import LegalRecord, MasterRecord, PartyRecord, ReportStats, parse_amount


def test_legal_record_normalizes_unit():
    record = LegalRecord(document_id="2020031000123001", block="149", lot="1102", unit=" 15a ")
    assert record.document_id == 2020031000123001
    assert record.block == 149
    assert record.unit == "15A"


def test_legal_record_blank_unit():
    assert LegalRecord(document_id=1, block=1, lot=1, unit=None).unit == ""


def test_party_record_blank_fields():
    record = PartyRecord(document_id=1, record_type="", party_type="", name="  JANE   DOE ")
    assert record.record_type is None
    assert record.party_type is None
    assert record.name == "JANE DOE"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("03/01/2020", date(2020, 3, 1)),
        ("03/01/2020 12:00:00 AM", date(2020, 3, 1)),
        ("2020-03-01", date(2020, 3, 1)),
        (datetime(2020, 3, 1, 15, 30), date(2020, 3, 1)),
        ("", None),
        (None, None),
    ],
)
def test_master_record_dates(raw, expected):
    assert MasterRecord(document_id=1, recorded_date=raw).recorded_date == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("1,234,500", Decimal("1234500")),
        ("$1234500.00", Decimal("1234500.00")),
        (1234500, Decimal("1234500")),
        ("", None),
        (float("nan"), None),
    ],
)
def test_parse_amount(raw, expected):
    assert parse_amount(raw) == expected


def test_master_record_rejects_garbage():
    with pytest.raises(ValidationError):
        MasterRecord(document_id=1, amount="lots")
    with pytest.raises(ValidationError):
        MasterRecord(document_id=1, recorded_date="yesterday")


def test_report_stats_llc_rate():
    assert ReportStats().llc_rate == 0.0
    assert ReportStats(units_sold=4, llcs=1).llc_rate == 0.25
