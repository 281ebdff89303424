from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

import pandas as pd

from ..excel.coercion import TRUTHY_STRINGS
from ..models.processing_result import RawColumnTable, SummaryStats
from ..models.publisher_record import PublisherRecord

"""Plain-text rendering of per-person tables and the summary panel.

This is the only place where typed records are joined back with their raw
cells (via the raw column side table).
"""

__all__ = [
    "TABLE_HEADERS",
    "format_cell_value",
    "build_table_rows",
    "render_publisher_table",
    "summary_items",
    "render_summary_panel",
]

CHECK = "✓"
BLANK = "-"

# (record attribute, column label)
TABLE_HEADERS: tuple[tuple[str, str], ...] = (
    ("source_file", "Source File"),
    ("name", "Publisher Name"),
    ("auxiliary_pioneer", "Aux Pioneer"),
    ("regular_pioneer", "Reg Pioneer"),
    ("is_publisher", "Publisher"),
    ("shared_in_ministry", "Pub: Shared Ministry"),
    ("bible_studies", "Pub: Bible Studies"),
    ("aux_shared_in_ministry", "Aux: Shared Ministry"),
    ("aux_hours", "Aux: Hours"),
    ("aux_bible_studies", "Aux: Bible Studies"),
    ("reg_shared_in_ministry", "Reg: Shared Ministry"),
    ("reg_hours", "Reg: Hours"),
    ("reg_bible_studies", "Reg: Bible Studies"),
)

_FLAG_MARKERS = ("pioneer", "ministry", "publisher")
_FALSY_STRINGS = frozenset({"false", "0", "no", ""})


def format_cell_value(value: Any, key: str) -> str:
    """Format one cell for display.

    Checkbox-like values render as a check mark (or nothing), numbers as
    text, and missing values as "-".
    """
    if isinstance(value, bool):
        return CHECK if value else ""
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in TRUTHY_STRINGS:
            return CHECK
        if lowered in _FALSY_STRINGS:
            return ""
        return value
    if isinstance(value, (int, float)):
        if any(marker in key.lower() for marker in _FLAG_MARKERS):
            return CHECK if value == 1 else ""
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value)
    if value is None:
        return BLANK
    return str(value)


def build_table_rows(
    records: Sequence[PublisherRecord],
    raw_columns: RawColumnTable | None = None,
    extra_columns: Sequence[str] = (),
) -> list[dict[str, str]]:
    """One display row per record; ``extra_columns`` are raw column letters."""
    rows: list[dict[str, str]] = []
    for record in records:
        row = {label: format_cell_value(getattr(record, attr), attr) for attr, label in TABLE_HEADERS}
        raw: Mapping[str, Any] = (raw_columns or {}).get(record.key, {})
        for letter in extra_columns:
            value = raw.get(letter)
            row[f"Col {letter}"] = BLANK if value is None or value == "" else str(value)
        rows.append(row)
    return rows


def render_publisher_table(
    name: str,
    records: Sequence[PublisherRecord],
    raw_columns: RawColumnTable | None = None,
    extra_columns: Sequence[str] = (),
) -> str:
    plural = "" if len(records) == 1 else "s"
    heading = f"{name} ({len(records)} record{plural})"
    rows = build_table_rows(records, raw_columns, extra_columns)
    if not rows:
        return heading
    df = pd.DataFrame(rows)
    return heading + "\n" + df.to_string(index=False)


def summary_items(summary: SummaryStats) -> list[tuple[str, float]]:
    return [
        ("Total Publishers", summary.total_publishers),
        ("Total Records", summary.total_records),
        ("Files Processed", summary.total_files),
        ("Bible Studies (All)", summary.total_bible_studies),
        ("Auxiliary Pioneers", summary.total_auxiliary_pioneers),
        ("Regular Pioneers", summary.total_regular_pioneers),
        ("Aux Pioneer Hours", summary.total_aux_hours),
        ("Reg Pioneer Hours", summary.total_reg_hours),
    ]


def render_summary_panel(summary: SummaryStats, search_term: str = "") -> str:
    lines = []
    if search_term:
        lines.append(f'Showing filtered results for "{search_term}"')
    for label, value in summary_items(summary):
        lines.append(f"{label}: {format_cell_value(value, 'total')}")
    return "\n".join(lines)
