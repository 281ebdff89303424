from __future__ import annotations

import math
from collections.abc import Mapping

from ..models.processing_result import GroupedData, OrganizedPublisherData, ProcessingStats, SummaryStats

"""Summary statistics and SUMMARY line rendering.

Counting rules differ by category:

- pioneers are counted per person: someone flagged on any of their records
  counts once
- bible studies use exactly one column per record, chosen by precedence
  auxiliary pioneer > regular pioneer > publisher
- pioneer hours are only summed on records flagged for that category; hours
  left on unflagged rows are stale and ignored
"""

__all__ = [
    "generate_summary_stats",
    "render_summary_line",
]


def generate_summary_stats(
    data: OrganizedPublisherData | GroupedData,
    stats: ProcessingStats | None = None,
) -> SummaryStats:
    """Compute SummaryStats over grouped publisher records.

    Args:
        data: OrganizedPublisherData, or bare grouped records (e.g. a filtered view)
        stats: processing counters to carry through; taken from ``data``
            when it is OrganizedPublisherData and ``stats`` is omitted

    Returns:
        SummaryStats; always a full recomputation, never a patch of earlier totals
    """
    if isinstance(data, OrganizedPublisherData):
        publishers: Mapping = data.publishers
        if stats is None:
            stats = data.stats
    else:
        publishers = data
    if stats is None:
        stats = ProcessingStats()

    total_records = 0
    source_files: set[str] = set()
    aux_pioneers: set[str] = set()
    reg_pioneers: set[str] = set()
    bible_studies = 0.0
    aux_hours = 0.0
    reg_hours = 0.0

    for name, records in publishers.items():
        total_records += len(records)
        for record in records:
            source_files.add(record.source_file)
            if record.auxiliary_pioneer:
                aux_pioneers.add(name)
                aux_hours += record.aux_hours
            if record.regular_pioneer:
                reg_pioneers.add(name)
                reg_hours += record.reg_hours
            bible_studies += record.effective_bible_studies()

    return SummaryStats(
        total_publishers=len(publishers),
        total_records=total_records,
        total_files=len(source_files),
        total_bible_studies=bible_studies,
        total_auxiliary_pioneers=len(aux_pioneers),
        total_regular_pioneers=len(reg_pioneers),
        total_special_pioneers=0,
        total_missionaries=0,
        total_aux_hours=aux_hours,
        total_reg_hours=reg_hours,
        total_rows=stats.total_rows,
        publisher_rows=stats.publisher_rows,
        unique_publishers=stats.unique_publishers,
    )


def _format_number(value: float | int) -> str:
    # 整数値は小数点なしで出力 (5.0 -> "5")
    if math.isfinite(value) and value == int(value):
        return str(int(value))
    if not math.isfinite(value):
        return str(value)
    return f"{value:.2f}".rstrip("0").rstrip(".")


def render_summary_line(summary: SummaryStats) -> str:
    """Render the SUMMARY line for a SummaryStats.

    Format:
    SUMMARY publishers={n} records={n} files={n} bible_studies={x}
    aux_pioneers={n} reg_pioneers={n} special_pioneers={n} missionaries={n}
    aux_hours={x} reg_hours={x} rows={n} publisher_rows={n} unique_publishers={n}

    Examples:
        >>> s = SummaryStats(
        ...     total_publishers=1, total_records=2, total_files=2, total_bible_studies=0,
        ...     total_auxiliary_pioneers=1, total_regular_pioneers=1, total_special_pioneers=0,
        ...     total_missionaries=0, total_aux_hours=5.0, total_reg_hours=3.0,
        ... )
        >>> render_summary_line(s)  # doctest: +ELLIPSIS
        'SUMMARY publishers=1 records=2 files=2 bible_studies=0 aux_pioneers=1 ...'
    """
    return (
        f"SUMMARY publishers={summary.total_publishers} "
        f"records={summary.total_records} "
        f"files={summary.total_files} "
        f"bible_studies={_format_number(summary.total_bible_studies)} "
        f"aux_pioneers={summary.total_auxiliary_pioneers} "
        f"reg_pioneers={summary.total_regular_pioneers} "
        f"special_pioneers={summary.total_special_pioneers} "
        f"missionaries={summary.total_missionaries} "
        f"aux_hours={_format_number(summary.total_aux_hours)} "
        f"reg_hours={_format_number(summary.total_reg_hours)} "
        f"rows={summary.total_rows} "
        f"publisher_rows={summary.publisher_rows} "
        f"unique_publishers={summary.unique_publishers}"
    )
