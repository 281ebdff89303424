from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

"""Config dataclass for the field service report aggregator.

This module defines the typed configuration model. Loading and validation of
the YAML file live in field_service_report/config/loader.py.
"""

DEFAULT_FILE_PATTERN = "*.xlsx"
DEFAULT_MAX_WORKERS = 4
DEFAULT_ERROR_LOG_DIR = "logs"


@dataclass(frozen=True)
class ReportConfig:
    """Root configuration object for a report run."""
    source_directory: str  # Directory scanned when no files are given on the command line
    file_pattern: str = DEFAULT_FILE_PATTERN  # glob パターン (非再帰)
    max_workers: int = DEFAULT_MAX_WORKERS  # 同時デコード数
    sheet_patterns: tuple[str, ...] | None = None  # None -> 既定の優先ルール
    error_log_dir: str = DEFAULT_ERROR_LOG_DIR

    @property
    def error_log_path(self) -> Path:
        return Path(self.error_log_dir)
