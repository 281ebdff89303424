from __future__ import annotations

from types import MappingProxyType

from ..models.processing_result import FilteredView, GroupedData, OrganizedPublisherData
from ..models.publisher_record import PublisherRecord
from .summary import generate_summary_stats

"""Search filtering and recomputation of the summary over the filtered view.

Filtering never mutates the grouped data; it returns a new read-only mapping.
Totals for a filtered view are a full rerun of the summary over exactly that
view.
"""

__all__ = [
    "filter_publishers",
    "sort_publishers",
    "build_filtered_view",
]


def filter_publishers(publishers: GroupedData, search_term: str | None) -> GroupedData:
    """Keep people whose name contains ``search_term`` (case-insensitive).

    A blank term returns ``publishers`` itself.
    """
    term = (search_term or "").strip().lower()
    if not term:
        return publishers
    return MappingProxyType({name: records for name, records in publishers.items() if term in name.lower()})


def _name_sort_key(name: str) -> tuple[str, str]:
    # 大文字小文字を無視して並べ、同値は元の文字列で確定
    return (name.casefold(), name)


def sort_publishers(publishers: GroupedData) -> list[tuple[str, tuple[PublisherRecord, ...]]]:
    """``(name, records)`` pairs sorted by name for display."""
    return sorted(publishers.items(), key=lambda item: _name_sort_key(item[0]))


def build_filtered_view(data: OrganizedPublisherData, search_term: str | None) -> FilteredView:
    """Filter ``data`` by ``search_term`` and recompute its summary."""
    filtered = filter_publishers(data.publishers, search_term)
    return FilteredView(
        search_term=(search_term or "").strip(),
        publishers=filtered,
        summary=generate_summary_stats(filtered, data.stats),
    )
