from __future__ import annotations
from pathlib import Path

import pytest

from field_service_report.excel.reader import DecodeError, read_workbook, read_workbooks
from helpers import make_excel, make_row


def test_read_workbook_rows_keyed_by_column_letter(temp_workdir: Path):
    excel = make_excel(
        temp_workdir, "march.xlsx",
        {
            "March": [
                make_row(A=1, B=True, E="Alice", J=2.5),
                make_row(A="x", C="TRUE", E="Bob", M=10),
            ]
        },
    )
    wb = read_workbook(excel)
    assert wb.name == "march.xlsx"
    assert list(wb.sheets) == ["March"]
    rows = wb.sheets["March"]
    assert len(rows) == 2
    assert rows[0]["A"] == 1
    assert rows[0]["B"] is True
    assert rows[0]["E"] == "Alice"
    assert rows[0]["J"] == 2.5
    # 範囲内の空セルは ""
    assert rows[0]["C"] == ""
    assert rows[1]["C"] == "TRUE"
    assert rows[1]["M"] == 10


def test_read_workbook_values_are_plain_python_types(temp_workdir: Path):
    excel = make_excel(temp_workdir, "t.xlsx", {"Data": [make_row(A=3, E="Carol", H=2)]})
    row = read_workbook(excel).sheets["Data"][0]
    assert type(row["A"]) is int
    assert type(row["H"]) is int
    assert type(row["E"]) is str


def test_read_workbook_skips_blank_rows_and_keeps_sheet_order(temp_workdir: Path):
    excel = make_excel(
        temp_workdir, "multi.xlsx",
        {
            "Notes": [["note"]],
            "Data": [
                make_row(E="Alice"),
                make_row(),
                make_row(E="Bob"),
            ],
        },
    )
    wb = read_workbook(excel)
    assert list(wb.sheets) == ["Notes", "Data"]
    assert [r["E"] for r in wb.sheets["Data"]] == ["Alice", "Bob"]


def test_read_workbook_keeps_na_like_strings(temp_workdir: Path):
    excel = make_excel(temp_workdir, "na.xlsx", {"Data": [make_row(E="NA", H="N/A")]})
    row = read_workbook(excel).sheets["Data"][0]
    assert row["E"] == "NA"
    assert row["H"] == "N/A"


def test_read_workbook_invalid_file_raises_decode_error(temp_workdir: Path):
    bad = temp_workdir / "broken.xlsx"
    bad.write_bytes(b"not an excel file")
    with pytest.raises(DecodeError) as e:
        read_workbook(bad)
    assert "Failed to parse file broken.xlsx" in str(e.value)
    assert e.value.file_name == "broken.xlsx"


def test_read_workbook_missing_file(temp_workdir: Path):
    with pytest.raises(DecodeError, match="missing.xlsx"):
        read_workbook(temp_workdir / "missing.xlsx")


def test_read_workbooks_preserves_input_order(temp_workdir: Path):
    paths = [
        make_excel(temp_workdir, f"f{i}.xlsx", {"Data": [make_row(E=f"P{i}")]})
        for i in range(5)
    ]
    books = read_workbooks(list(reversed(paths)), max_workers=3)
    assert [b.name for b in books] == [f"f{i}.xlsx" for i in reversed(range(5))]


def test_read_workbooks_all_or_nothing(temp_workdir: Path):
    good = make_excel(temp_workdir, "good.xlsx", {"Data": [make_row(E="Alice")]})
    bad = temp_workdir / "bad.xlsx"
    bad.write_bytes(b"garbage")
    with pytest.raises(DecodeError) as e:
        read_workbooks([good, bad], max_workers=2)
    assert e.value.file_name == "bad.xlsx"


def test_read_workbooks_empty_batch():
    assert read_workbooks([]) == []
