from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path
from types import MappingProxyType

from ..excel.reader import DecodeError, read_workbooks
from ..excel.sheet_selector import compile_sheet_patterns, find_main_data_sheet, select_sheet_name
from ..logging.error_log import ErrorLogBuffer
from ..models.config_models import ReportConfig
from ..models.error_record import DECODE_ERROR, ErrorRecord
from ..models.processing_result import ReportResult
from .aggregator import FileRows, organize_publishers, unique_file_names
from .progress import ProgressTracker
from .summary import generate_summary_stats

"""Service orchestration for one report batch.

Pipeline:
1. Decode every file concurrently (all-or-nothing)
2. Select the main data sheet of each workbook
3. Fold all rows into per-person buckets
4. Compute summary totals
"""

__all__ = [
    "ProcessingError",
    "scan_excel_files",
    "process_files",
    "source_names",
]

logger = logging.getLogger(__name__)


class ProcessingError(Exception):
    """Base exception for processing errors."""
    pass


def scan_excel_files(directory: Path, pattern: str = "*.xlsx") -> list[Path]:
    """Scan directory for Excel files (non-recursive), sorted by name.

    Raises:
        ProcessingError: If directory doesn't exist or can't be read
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")

    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")

    try:
        # "~$xxx.xlsx" は Excel のロックファイル
        return sorted(p for p in directory.glob(pattern) if p.is_file() and not p.name.startswith("~$"))
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e


def source_names(paths: Sequence[Path]) -> list[str]:
    """Provenance name per path, distinct within the batch.

    A repeated base name is qualified with its parent directory
    (`jan/report.xlsx`); anything still colliding gets a `#<n>` suffix.
    """
    counts = Counter(p.name for p in paths)
    names = [f"{p.parent.name}/{p.name}" if counts[p.name] > 1 and p.parent.name else p.name for p in paths]
    return unique_file_names(names)


def _flush_error_log(error_log: ErrorLogBuffer) -> Path | None:
    try:
        return error_log.flush()
    except OSError as e:
        logger.warning(f"failed to write error log ({len(error_log)} record(s)): {e}")
        return None


def process_files(
    paths: Sequence[Path],
    config: ReportConfig,
    error_log: ErrorLogBuffer | None = None,
) -> ReportResult:
    """Run one batch over ``paths``.

    Raises:
        DecodeError: any file could not be decoded; nothing from the batch is kept
    """
    start_time = datetime.now(UTC)
    if error_log is None:
        error_log = ErrorLogBuffer(config.error_log_path)

    logger.info(f"Decoding {len(paths)} file(s)")
    try:
        workbooks = read_workbooks(paths, max_workers=config.max_workers)
    except DecodeError as e:
        error_log.append(ErrorRecord.create(e.file_name, "<FILE_LEVEL>", -1, DECODE_ERROR, str(e.cause)))
        _flush_error_log(error_log)
        raise

    patterns = compile_sheet_patterns(config.sheet_patterns)
    files: list[FileRows] = []
    selected: dict[str, str | None] = {}
    with ProgressTracker(len(workbooks), description="Processing files") as progress:
        for name, wb in zip(source_names(paths), workbooks):
            progress.start_file(name)
            rows = find_main_data_sheet(wb.sheets, patterns)
            sheet_name = select_sheet_name(list(wb.sheets.keys()), patterns)
            selected[name] = sheet_name
            logger.info(f"{name}: sheet={sheet_name!r} rows={len(rows)}")
            progress.set_postfix(rows=len(rows))
            files.append((name, rows))
            progress.finish_file()

    data = organize_publishers(files, error_log)
    summary = generate_summary_stats(data)
    log_path = _flush_error_log(error_log)
    if log_path is not None:
        logger.info(f"error log written: {log_path}")

    end_time = datetime.now(UTC)
    return ReportResult(
        data=data,
        summary=summary,
        selected_sheets=MappingProxyType(selected),
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        error_log_path=log_path,
    )
