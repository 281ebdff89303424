"""Test helpers shared across unit / integration tests."""
from __future__ import annotations
from pathlib import Path
from typing import Any

import pandas as pd

from field_service_report.models.publisher_record import PublisherRecord

COLUMNS = "ABCDEFGHIJKLMN"


def make_row(**cells: Any) -> list[Any]:
    """Row as a list of 14 cells (A..N); unspecified cells stay blank."""
    return [cells.get(c) for c in COLUMNS]


def make_excel(directory: Path, name: str, sheets: dict[str, list[list[Any]]]) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    p = directory / name
    with pd.ExcelWriter(p, engine="openpyxl") as writer:
        for sheet, rows in sheets.items():
            df = pd.DataFrame(rows)
            df.to_excel(writer, sheet_name=sheet, header=False, index=False)
    return p


def make_record(name: str = "Alice", source_file: str = "a.xlsx", row_index: int = 1, **fields: Any) -> PublisherRecord:
    return PublisherRecord(source_file=source_file, row_index=row_index, name=name, **fields)
