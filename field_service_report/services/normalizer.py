from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from ..excel.coercion import coerce_boolean, coerce_number
from ..models.publisher_record import PublisherRecord

"""Record normalizer: one raw row -> one PublisherRecord (or skip).

The skip decision is taken once, on the raw name cell (column E). Every other
field is coerced and never fails: garbled cells degrade to False / 0.
"""

__all__ = [
    "NAME_COLUMN",
    "BOOLEAN_COLUMNS",
    "NUMBER_COLUMNS",
    "name_key",
    "normalize_row",
    "raw_columns",
]

NAME_COLUMN = "E"
INDEX_COLUMN = "A"

# field name -> column letter
BOOLEAN_COLUMNS: dict[str, str] = {
    "auxiliary_pioneer": "B",
    "regular_pioneer": "C",
    "is_publisher": "D",
    "shared_in_ministry": "G",
    "aux_shared_in_ministry": "I",
    "reg_shared_in_ministry": "L",
}

NUMBER_COLUMNS: dict[str, str] = {
    "bible_studies": "H",
    "aux_hours": "J",
    "aux_bible_studies": "K",
    "reg_hours": "M",
    "reg_bible_studies": "N",
}


def name_key(row: Mapping[str, Any]) -> str:
    """Grouping key for a row: column E as text, untrimmed ("" when absent)."""
    raw = row.get(NAME_COLUMN, "")
    if raw is None:
        return ""
    return str(raw)


def normalize_row(row: Mapping[str, Any], row_index: int, source_file: str) -> PublisherRecord | None:
    """Build the typed record for ``row``; ``None`` when the name cell is blank."""
    key = name_key(row)
    if key.strip() == "":
        return None

    index = row.get(INDEX_COLUMN, "")
    if isinstance(index, bool) or not isinstance(index, (str, int, float)):
        index = ""

    fields: dict[str, Any] = {}
    for field_name, column in BOOLEAN_COLUMNS.items():
        fields[field_name] = coerce_boolean(row.get(column, ""))
    for field_name, column in NUMBER_COLUMNS.items():
        fields[field_name] = coerce_number(row.get(column, ""))

    return PublisherRecord(
        source_file=source_file,
        row_index=row_index,
        name=key.strip(),
        index=index,
        **fields,
    )


def raw_columns(row: Mapping[str, Any]) -> Mapping[str, Any]:
    """Read-only copy of the raw cells, kept for display only."""
    return MappingProxyType(dict(row))
