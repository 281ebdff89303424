from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass, field
from datetime import datetime
from pathlib import Path
from types import MappingProxyType
from typing import Any

from .publisher_record import PublisherRecord, RecordKey

"""Processing result models for the field service report aggregator.

- ProcessingStats: counters over one ingestion batch
- SummaryStats: category-exclusive totals over a (possibly filtered) view
- OrganizedPublisherData: grouped records + raw column side table + counters
- ReportResult: everything one batch run produced
- FilteredView: filtered grouped records and the totals recomputed over them
"""

GroupedData = Mapping[str, tuple[PublisherRecord, ...]]
RawColumnTable = Mapping[RecordKey, Mapping[str, Any]]

_EMPTY: Mapping[Any, Any] = MappingProxyType({})


@dataclass(frozen=True)
class ProcessingStats:
    """Counters over a whole batch.

    total_rows counts every row seen (skipped ones included), publisher_rows
    only rows that produced a record.
    """
    total_files: int = 0
    total_rows: int = 0
    publisher_rows: int = 0
    unique_publishers: int = 0


@dataclass(frozen=True)
class SummaryStats:
    """Totals shown in the summary panel.

    total_special_pioneers / total_missionaries are reserved: no export
    column carries them yet, so they stay 0.
    """
    total_publishers: int  # 人数 (キー数)
    total_records: int
    total_files: int  # 出現した source_file の種類数
    total_bible_studies: float
    total_auxiliary_pioneers: int  # 人単位 (レコード単位ではない)
    total_regular_pioneers: int
    total_special_pioneers: int
    total_missionaries: int
    total_aux_hours: float
    total_reg_hours: float
    # ProcessingStats から引き継ぎ (再計算しない)
    total_rows: int = 0
    publisher_rows: int = 0
    unique_publishers: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class OrganizedPublisherData:
    """Output of the publisher aggregator; read-only once built."""
    publishers: GroupedData = field(default_factory=lambda: _EMPTY)
    stats: ProcessingStats = field(default_factory=ProcessingStats)
    raw_columns: RawColumnTable = field(default_factory=lambda: _EMPTY)


@dataclass(frozen=True)
class ReportResult:
    """Outcome of one batch run (orchestrator output)."""
    data: OrganizedPublisherData
    summary: SummaryStats
    selected_sheets: Mapping[str, str | None]  # ファイル名 -> 採用シート名
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    error_log_path: Path | None = None


@dataclass(frozen=True)
class FilteredView:
    """Filtered grouped records plus totals recomputed over exactly them."""
    search_term: str
    publishers: GroupedData
    summary: SummaryStats
