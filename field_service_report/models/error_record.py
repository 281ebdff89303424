from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ErrorRecord model for error logging.

This module defines the ErrorRecord dataclass used for structured logging of
problems found while ingesting field service exports. It supports row=-1 as a
sentinel value for file-level problems (decode failures, unusable sheets)
where no specific row applies.
"""

__all__ = [
    "ErrorRecord",
    "DECODE_ERROR",
    "EMPTY_SHEET",
    "UNUSABLE_SHEET",
]

DECODE_ERROR = "DECODE_ERROR"
EMPTY_SHEET = "EMPTY_SHEET"
UNUSABLE_SHEET = "UNUSABLE_SHEET"


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: Excel filename being processed
        sheet: Sheet name within the file ("<FILE_LEVEL>" when unknown)
        row: Row number (1-based). Use -1 for file-level problems
        error_type: Error classification in UPPER_SNAKE_CASE format
        message: Human readable description
    """
    timestamp: str  # ISO8601 UTC
    file: str
    sheet: str
    row: int  # 行番号。不明な場合 -1 許容
    error_type: str  # UPPER_SNAKE
    message: str

    @staticmethod
    def create(file: str, sheet: str, row: int, error_type: str, message: str) -> ErrorRecord:
        """Create a new ErrorRecord with current UTC timestamp."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            file=file,
            sheet=sheet,
            row=row,
            error_type=error_type,
            message=message,
        )

    def to_json_line(self) -> str:
        """Serialize ErrorRecord to JSON Lines format (no extra keys)."""
        return json.dumps(asdict(self), ensure_ascii=False)
