from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from ..excel.reader import DecodeError
from ..models.config_models import ReportConfig
from ..models.processing_result import (
    FilteredView,
    OrganizedPublisherData,
    ProcessingStats,
    SummaryStats,
)
from ..models.publisher_record import PublisherRecord
from .filtering import build_filtered_view, sort_publishers
from .orchestrator import process_files

"""Session state consumed by a presentation layer.

A PublisherSession holds the corpus of the last successful batch, the live
search term, a loading flag spanning a batch and the error message of the last
failed batch. A new batch replaces the corpus; a failed batch leaves it as it
was.
"""

__all__ = [
    "PublisherSession",
]

logger = logging.getLogger(__name__)


class PublisherSession:
    def __init__(self, config: ReportConfig) -> None:
        self.config = config
        self.data: OrganizedPublisherData | None = None
        self.is_loading = False
        self.error: str | None = None
        self.search_term = ""
        self._view: FilteredView | None = None

    def load_files(self, paths: Sequence[Path]) -> bool:
        """Process a batch. Returns False when the batch failed (see ``error``)."""
        if not paths:
            return False
        self.is_loading = True
        self.error = None
        try:
            result = process_files(paths, self.config)
        except DecodeError as e:
            self.error = f"Error processing files: {e}"
            logger.error(self.error)
            return False
        except Exception as e:
            self.error = f"Error processing files: {e}"
            logger.exception(self.error)
            return False
        finally:
            self.is_loading = False
        self.data = result.data
        self._view = None
        return True

    def set_search_term(self, term: str) -> None:
        self.search_term = term
        self._view = None

    def clear_search(self) -> None:
        self.set_search_term("")

    @property
    def view(self) -> FilteredView | None:
        if self.data is None:
            return None
        if self._view is None:
            self._view = build_filtered_view(self.data, self.search_term)
        return self._view

    @property
    def publishers(self):
        """Unfiltered grouped records (empty before the first batch)."""
        return self.data.publishers if self.data is not None else {}

    @property
    def processing_stats(self) -> ProcessingStats | None:
        return self.data.stats if self.data is not None else None

    @property
    def summary_stats(self) -> SummaryStats | None:
        """Totals over the current (possibly filtered) view."""
        view = self.view
        return view.summary if view is not None else None

    @property
    def sorted_publishers(self) -> list[tuple[str, tuple[PublisherRecord, ...]]]:
        view = self.view
        return sort_publishers(view.publishers) if view is not None else []

    @property
    def total_publishers(self) -> int:
        return len(self.publishers)

    @property
    def filtered_publishers_count(self) -> int:
        view = self.view
        return len(view.publishers) if view is not None else 0

    @property
    def has_data(self) -> bool:
        return self.filtered_publishers_count > 0

    @property
    def has_publishers(self) -> bool:
        return self.total_publishers > 0
