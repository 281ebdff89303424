from __future__ import annotations

from dataclasses import dataclass
from typing import Union

"""PublisherRecord model for the field service report aggregator.

One PublisherRecord is the canonical, typed form of a single spreadsheet row
that carries a person's name. Raw column values are intentionally not kept
here; they live in the raw column side table on OrganizedPublisherData and are
joined back only for display.
"""

__all__ = [
    "PublisherRecord",
    "RecordKey",
]

RecordKey = tuple[str, int]  # (source_file, row_index)


@dataclass(frozen=True)
class PublisherRecord:
    """Typed activity of one person on one row of one monthly export.

    Column mapping of the export:
        A index, B auxiliary pioneer, C regular pioneer, D publisher, E name,
        G/H publisher activity, I/J/K auxiliary pioneer activity,
        L/M/N regular pioneer activity.
    """
    source_file: str  # 出典ファイル名
    row_index: int  # シート内の行位置 (1 始まり)
    name: str
    index: Union[str, int, float] = ""

    # Category flags (independent, not mutually exclusive)
    is_publisher: bool = False  # D
    auxiliary_pioneer: bool = False  # B
    regular_pioneer: bool = False  # C

    shared_in_ministry: bool = False  # G
    bible_studies: float = 0  # H

    aux_shared_in_ministry: bool = False  # I
    aux_hours: float = 0  # J
    aux_bible_studies: float = 0  # K

    reg_shared_in_ministry: bool = False  # L
    reg_hours: float = 0  # M
    reg_bible_studies: float = 0  # N

    @property
    def key(self) -> RecordKey:
        """Provenance key, unique per record within a batch."""
        return (self.source_file, self.row_index)

    def effective_bible_studies(self) -> float:
        """Bible studies counted for this record under category precedence.

        auxiliary pioneer > regular pioneer > publisher; only one of the three
        columns is ever used for a record.
        """
        if self.auxiliary_pioneer:
            return self.aux_bible_studies
        if self.regular_pioneer:
            return self.reg_bible_studies
        if self.is_publisher:
            return self.bible_studies
        return 0
