import json
from decimal import Decimal

import pandas as pd
import pytest

from unit_report.report import (
    REPORT_COLUMNS,
    assemble_report,
    load_rented_units,
    report_frame,
    summarize_report,
    write_report_csv,
)
from unit_report.schemas import UnitSummary
from unit_report.transformations import summarize_units


@pytest.fixture
def rows():
    return [
        UnitSummary(unit="15A", floor="15", line="A", beds="2", baths="2", date="03/01/20",
                    amount=Decimal("12.35"), is_llc=False, rented=False, buyers=["JOHN SMITH"]),
        UnitSummary(unit="42D", floor="42", line="D", beds="3", baths="3", date="06/01/21",
                    amount=Decimal("35.00"), is_llc=True, rented=True, buyers=["ACME TRUST", "MARY ROE"]),
        UnitSummary(unit="17B", floor="17", line="B", beds="1", baths="1"),
    ]


def test_summarize_report(rows):
    stats = summarize_report(rows)
    assert stats.units_sold == 3
    assert stats.llcs == 1


def test_assemble_report_passes_rows_through(rows):
    received = []
    stats = assemble_report(rows, received.append)
    assert received == [rows]
    assert received[0] is rows
    assert stats.units_sold == 3


def test_assemble_report_from_store(store):
    received = []
    stats = assemble_report(summarize_units(store), received.append)
    assert stats.units_sold == 5
    assert stats.llcs == 1
    assert [r.unit for r in received[0]] == ["15A", "17B", "39A", "42D", "42E"]


def test_report_frame_columns(rows):
    df = report_frame(rows)
    assert list(df.columns) == REPORT_COLUMNS
    assert df.loc[1, "buyers"] == '["ACME TRUST", "MARY ROE"]'
    assert df.loc[1, "isLLC"] == "true"
    assert df.loc[0, "isLLC"] == "false"
    assert list(df["rented"]) == ["false", "true", "false"]


def test_write_report_csv(rows, tmp_path):
    path = write_report_csv(rows, tmp_path / "report.csv")

    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    assert list(df.columns) == REPORT_COLUMNS
    assert list(df["unit"]) == ["15A", "42D", "17B"]
    assert df.loc[0, "amount"] == "12.35"
    assert df.loc[0, "date"] == "03/01/20"
    assert json.loads(df.loc[1, "buyers"]) == ["ACME TRUST", "MARY ROE"]
    # Absent values are empty cells
    assert df.loc[2, "amount"] == ""
    assert df.loc[2, "date"] == ""
    assert json.loads(df.loc[2, "buyers"]) == []
    assert list(df["isLLC"]) == ["false", "true", "false"]
    assert list(df["rented"]) == ["false", "true", "false"]


def test_write_report_csv_failure_propagates(rows, tmp_path):
    with pytest.raises(OSError):
        write_report_csv(rows, tmp_path / "missing-dir" / "report.csv")


def test_load_rented_units(tmp_path):
    path = tmp_path / "units_rented.json"
    path.write_text(json.dumps(["17B", " 22f ", ""]))
    assert load_rented_units(path) == frozenset({"17B", "22F"})


def test_load_rented_units_rejects_non_list(tmp_path):
    path = tmp_path / "units_rented.json"
    path.write_text(json.dumps({"17B": True}))
    with pytest.raises(ValueError):
        load_rented_units(path)


def test_load_rented_units_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_rented_units(tmp_path / "nope.json")
