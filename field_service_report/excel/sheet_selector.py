from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence
from typing import Any

"""Main data sheet selection.

Monthly exports are usually named after a month or a date, but not
consistently. The rules below are tried in order; the first rule that matches
any sheet name wins and the earliest matching sheet (workbook order) is used.
"""

__all__ = [
    "DEFAULT_SHEET_PATTERNS",
    "compile_sheet_patterns",
    "find_main_data_sheet",
    "select_sheet_name",
]

logger = logging.getLogger(__name__)

DEFAULT_SHEET_PATTERNS: tuple[str, ...] = (
    r"(?i)january|february|march|april|may|june|july|august|september|october|november|december",
    r"\d{1,2}[/\-]\d{1,2}",  # "1/25", "01-25"
    r"\d{1,2}\s+\d{1,2}",  # "1 25"
    r"(?i)data|main|sheet1",
)


def compile_sheet_patterns(patterns: Sequence[str] | None = None) -> list[re.Pattern[str]]:
    """Compile sheet name rules (``None`` -> default rule list)."""
    source = DEFAULT_SHEET_PATTERNS if patterns is None else patterns
    return [re.compile(p) for p in source]


def select_sheet_name(
    sheet_names: Sequence[str], patterns: Sequence[re.Pattern[str]] | None = None
) -> str | None:
    """Return the name of the sheet holding the activity data, or ``None``."""
    if not sheet_names:
        return None
    rules = compile_sheet_patterns() if patterns is None else patterns
    for rule in rules:
        for name in sheet_names:
            if rule.search(name):
                return name
    # どのルールにも一致しない場合は先頭シート
    return sheet_names[0]


def find_main_data_sheet(
    sheets: Mapping[str, Sequence[Mapping[str, Any]]],
    patterns: Sequence[re.Pattern[str]] | None = None,
) -> Sequence[Mapping[str, Any]]:
    """Pick the rows of the main data sheet from a decoded workbook.

    Parameters
    ----------
    sheets: sheet name -> rows, in workbook order
    patterns: compiled priority rules (default rules when omitted)

    Returns an empty list when the workbook has no sheets.
    """
    name = select_sheet_name(list(sheets.keys()), patterns)
    if name is None:
        return []
    logger.debug(f"selected sheet '{name}' from {list(sheets.keys())}")
    return sheets[name]
