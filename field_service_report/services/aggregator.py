from __future__ import annotations

import logging
import time
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace
from functools import reduce
from types import MappingProxyType
from typing import Any

from ..logging.error_log import ErrorLogBuffer
from ..models.error_record import EMPTY_SHEET, UNUSABLE_SHEET, ErrorRecord
from ..models.processing_result import OrganizedPublisherData, ProcessingStats
from ..models.publisher_record import PublisherRecord, RecordKey
from .normalizer import name_key, normalize_row, raw_columns

"""Publisher aggregator: fold all rows of all files into per-person buckets.

The fold is pure: each file step returns a new accumulator, and the final
result is frozen (read-only mappings, tuples). Buckets are sorted by
(source_file, row_index) at the end so the output does not depend on the
order the files were submitted in.
"""

__all__ = [
    "FileRows",
    "organize_publishers",
    "resolve_file_name",
    "unique_file_names",
]

logger = logging.getLogger(__name__)

# (file name, rows of the selected sheet)
FileRows = tuple[str, Any]


@dataclass(frozen=True)
class _Accumulator:
    publishers: dict[str, tuple[PublisherRecord, ...]] = field(default_factory=dict)
    raw: dict[RecordKey, Mapping[str, Any]] = field(default_factory=dict)
    total_rows: int = 0
    publisher_rows: int = 0
    unique_publishers: int = 0


def resolve_file_name(name: str | None, position: int) -> str:
    """File identifier used as provenance; synthesized when the name is empty."""
    if name:
        return name
    return f"file_{int(time.time() * 1000)}_{position}"


def unique_file_names(names: Sequence[str]) -> list[str]:
    """Make every name of a batch distinct; repeats get a `#<n>` suffix.

    The first occurrence keeps its name, so a batch without repeats is
    returned unchanged.
    """
    used: set[str] = set()
    result: list[str] = []
    for name in names:
        candidate = name
        n = 2
        while candidate in used:
            candidate = f"{name}#{n}"
            n += 1
        used.add(candidate)
        result.append(candidate)
    return result


def _accumulate_file(
    acc: _Accumulator,
    item: FileRows,
    error_log: ErrorLogBuffer | None,
) -> _Accumulator:
    source_file, rows = item

    if not isinstance(rows, (list, tuple)):
        logger.warning(f"No valid data sheet found in file: {source_file}")
        if error_log is not None:
            error_log.append(
                ErrorRecord.create(source_file, "<FILE_LEVEL>", -1, UNUSABLE_SHEET, "no usable row sequence")
            )
        return acc
    if not rows:
        logger.warning(f"Data sheet is empty in file: {source_file}")
        if error_log is not None:
            error_log.append(ErrorRecord.create(source_file, "<FILE_LEVEL>", -1, EMPTY_SHEET, "no rows"))
        return acc

    publishers = dict(acc.publishers)
    raw = dict(acc.raw)
    publisher_rows = acc.publisher_rows
    unique_publishers = acc.unique_publishers

    for row_index, row in enumerate(rows, start=1):
        record = normalize_row(row, row_index, source_file)
        if record is None:
            continue
        publisher_rows += 1
        key = name_key(row)
        if key not in publishers:
            publishers[key] = ()
            unique_publishers += 1
        publishers[key] = publishers[key] + (record,)
        raw[record.key] = raw_columns(row)

    logger.debug(f"{source_file}: rows={len(rows)} records={publisher_rows - acc.publisher_rows}")
    return replace(
        acc,
        publishers=publishers,
        raw=raw,
        total_rows=acc.total_rows + len(rows),
        publisher_rows=publisher_rows,
        unique_publishers=unique_publishers,
    )


def organize_publishers(
    files: Sequence[FileRows], error_log: ErrorLogBuffer | None = None
) -> OrganizedPublisherData:
    """Group the rows of every file by person.

    Parameters
    ----------
    files: (file name, selected sheet rows) per file, in any order
    error_log: optional buffer receiving records for skipped files

    Returns OrganizedPublisherData with read-only buckets sorted by
    (source_file, row_index) and the batch ProcessingStats.
    """
    names = unique_file_names([resolve_file_name(name, i) for i, (name, _) in enumerate(files)])
    acc = reduce(
        lambda a, item: _accumulate_file(a, item, error_log),
        zip(names, (rows for _, rows in files)),
        _Accumulator(),
    )
    # キー順も投入順に依存させない
    publishers = {
        name: tuple(sorted(acc.publishers[name], key=lambda r: (r.source_file, r.row_index)))
        for name in sorted(acc.publishers)
    }
    stats = ProcessingStats(
        total_files=len(files),
        total_rows=acc.total_rows,
        publisher_rows=acc.publisher_rows,
        unique_publishers=acc.unique_publishers,
    )
    return OrganizedPublisherData(
        publishers=MappingProxyType(publishers),
        stats=stats,
        raw_columns=MappingProxyType(acc.raw),
    )
