from __future__ import annotations

import math
import re
from typing import Any

"""Cell value coercion for loosely-typed spreadsheet cells.

Checkbox columns arrive as ``True``, ``"TRUE"``, ``1`` or ``"1"`` depending on
how the workbook was exported, and numeric columns may carry blanks or stray
text. Both helpers are total: a value they cannot interpret degrades to the
neutral value (``False`` / ``0``) instead of raising.
"""

__all__ = [
    "TRUTHY_STRINGS",
    "coerce_boolean",
    "coerce_number",
]

TRUTHY_STRINGS = frozenset({"true", "1", "yes"})

# 先頭の数値リテラルのみ採用 ("7 hrs" -> 7.0)
_LEADING_FLOAT = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def coerce_boolean(raw: Any) -> bool:
    """Convert a raw cell value to ``bool`` (default ``False``)."""
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        return raw.strip().lower() in TRUTHY_STRINGS
    if isinstance(raw, (int, float)):
        return raw == 1
    return False


def coerce_number(raw: Any) -> float | int:
    """Convert a raw cell value to a number (default ``0``).

    Numbers pass through unchanged, booleans become ``1.0`` / ``0.0`` and
    strings are parsed from their leading floating-point literal.
    """
    if isinstance(raw, bool):
        return 1.0 if raw else 0.0
    if isinstance(raw, (int, float)):
        if isinstance(raw, float) and math.isnan(raw):
            return 0
        return raw
    if isinstance(raw, str):
        match = _LEADING_FLOAT.match(raw.strip())
        if match is None:
            return 0
        return float(match.group(0))
    return 0
