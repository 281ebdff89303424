from __future__ import annotations

import datetime as dt
import logging
from collections.abc import Sequence
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Union

import numpy as np
import pandas as pd
from openpyxl.utils import get_column_letter

"""Workbook decoding (pandas + openpyxl).

Each sheet is read without a header row; every row becomes a mapping from
column letter ("A", "B", ...) to a plain Python value (str / int / float /
bool). Empty cells inside the used range are "" rather than NaN, and fully
blank rows are dropped.

A batch of files is decoded concurrently. The batch is all-or-nothing: the
first file that fails to decode aborts the whole batch.
"""

__all__ = [
    "CellValue",
    "Row",
    "DecodeError",
    "WorkbookData",
    "read_workbook",
    "read_workbooks",
]

logger = logging.getLogger(__name__)

CellValue = Union[str, int, float, bool]
Row = dict[str, CellValue]


class DecodeError(Exception):
    """Raised when a file cannot be decoded into sheets/rows at all."""

    def __init__(self, file_name: str, cause: BaseException | str) -> None:
        self.file_name = file_name
        self.cause = cause
        super().__init__(f"Failed to parse file {file_name}: {cause}")


@dataclass(frozen=True)
class WorkbookData:
    name: str  # ファイル名 (パスではない)
    sheets: dict[str, list[Row]]  # シート名 -> 行 (ワークブック順)


def _to_cell_value(val: Any) -> CellValue:
    if val is None or val is pd.NaT:
        return ""
    if isinstance(val, np.generic):
        val = val.item()
    if isinstance(val, (bool, int, str)):
        return val
    if isinstance(val, float):
        return "" if pd.isna(val) else val
    if isinstance(val, (dt.datetime, dt.date, dt.time, pd.Timestamp)):
        return val.isoformat()
    if pd.isna(val):
        return ""
    return str(val)


def _frame_to_rows(df: pd.DataFrame) -> list[Row]:
    letters = [get_column_letter(i + 1) for i in range(df.shape[1])]
    rows: list[Row] = []
    for raw in df.itertuples(index=False, name=None):
        row = {col: _to_cell_value(v) for col, v in zip(letters, raw, strict=False)}
        # 全セル空の行はスキップ
        if all(v == "" for v in row.values()):
            continue
        rows.append(row)
    return rows


def read_workbook(path: Path) -> WorkbookData:
    """Decode one Excel file into ``WorkbookData``.

    Raises
    ------
    DecodeError: the file is missing or cannot be parsed as a workbook
    """
    if not path.exists():
        raise DecodeError(path.name, "file not found")
    try:
        sheets: dict[str, list[Row]] = {}
        with pd.ExcelFile(path) as xls:
            for name in xls.sheet_names:
                # dtype=object で型推論を抑止、"NA" 等の文字列は NaN 化しない
                df = xls.parse(name, header=None, dtype=object, keep_default_na=False, na_values=[])
                sheets[str(name)] = _frame_to_rows(df)
    except Exception as e:
        raise DecodeError(path.name, e) from e
    logger.debug(f"decoded {path.name}: sheets={list(sheets.keys())}")
    return WorkbookData(name=path.name, sheets=sheets)


def read_workbooks(paths: Sequence[Path], max_workers: int = 4) -> list[WorkbookData]:
    """Decode several files concurrently, preserving input order.

    The first failure cancels tasks that have not started yet and is
    re-raised as ``DecodeError``; results of sibling files are discarded.
    """
    if not paths:
        return []
    workers = max(1, min(max_workers, len(paths)))
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="decode") as pool:
        futures = [pool.submit(read_workbook, p) for p in paths]
        done, pending = wait(futures, return_when=FIRST_EXCEPTION)
        failed = [f for f in futures if f in done and f.exception() is not None]
        if failed:
            for f in pending:
                f.cancel()
            exc = failed[0].exception()
            if isinstance(exc, DecodeError):
                raise exc
            raise DecodeError(paths[futures.index(failed[0])].name, exc) from exc
        return [f.result() for f in futures]
