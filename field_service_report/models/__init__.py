"""Domain models for the field service report aggregator.

This package contains the typed records and result containers passed between
the decoding, aggregation and summary stages.
"""

from .config_models import ReportConfig
from .error_record import ErrorRecord
from .processing_result import (
    FilteredView,
    OrganizedPublisherData,
    ProcessingStats,
    ReportResult,
    SummaryStats,
)
from .publisher_record import PublisherRecord, RecordKey

__all__ = [
    # Configuration models
    "ReportConfig",
    # Records
    "PublisherRecord",
    "RecordKey",
    "ErrorRecord",
    # Results
    "ProcessingStats",
    "SummaryStats",
    "OrganizedPublisherData",
    "ReportResult",
    "FilteredView",
]
