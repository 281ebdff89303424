from __future__ import annotations

from types import MappingProxyType

from field_service_report.models.processing_result import OrganizedPublisherData, ProcessingStats
from field_service_report.services.aggregator import organize_publishers
from field_service_report.services.summary import generate_summary_stats
from helpers import make_record

"""Category-exclusive counting rules of the summary."""


def test_bible_studies_use_one_column_by_precedence():
    grouped = {
        "A": (make_record("A", auxiliary_pioneer=True, regular_pioneer=True, is_publisher=True,
                          aux_bible_studies=2, reg_bible_studies=5, bible_studies=7),),
        "B": (make_record("B", regular_pioneer=True, is_publisher=True,
                          reg_bible_studies=3, bible_studies=11),),
        "C": (make_record("C", is_publisher=True, bible_studies=4, aux_bible_studies=9),),
        "D": (make_record("D", bible_studies=6, aux_bible_studies=6, reg_bible_studies=6),),
    }
    summary = generate_summary_stats(grouped)
    assert summary.total_bible_studies == 2 + 3 + 4


def test_pioneers_counted_per_person_not_per_record():
    grouped = {
        "Alice": tuple(make_record("Alice", row_index=i, auxiliary_pioneer=True) for i in range(1, 4)),
        "Bob": (
            make_record("Bob", row_index=1),
            make_record("Bob", row_index=2, regular_pioneer=True),
        ),
    }
    summary = generate_summary_stats(grouped)
    assert summary.total_auxiliary_pioneers == 1
    assert summary.total_regular_pioneers == 1
    assert summary.total_records == 5
    assert summary.total_publishers == 2


def test_hours_only_summed_on_flagged_records():
    grouped = {
        "A": (
            make_record("A", row_index=1, auxiliary_pioneer=True, aux_hours=30, reg_hours=99),
            make_record("A", row_index=2, aux_hours=50),
        ),
        "B": (make_record("B", regular_pioneer=True, reg_hours=70, aux_hours=12),),
    }
    summary = generate_summary_stats(grouped)
    assert summary.total_aux_hours == 30
    assert summary.total_reg_hours == 70


def test_total_files_is_distinct_source_files():
    grouped = {
        "A": (make_record("A", source_file="x.xlsx"), make_record("A", source_file="y.xlsx")),
        "B": (make_record("B", source_file="x.xlsx", row_index=2),),
    }
    assert generate_summary_stats(grouped).total_files == 2


def test_reserved_totals_are_zero():
    grouped = {"A": (make_record("A", auxiliary_pioneer=True, regular_pioneer=True),)}
    summary = generate_summary_stats(grouped)
    assert summary.total_special_pioneers == 0
    assert summary.total_missionaries == 0


def test_processing_counters_carried_through():
    data = OrganizedPublisherData(
        publishers=MappingProxyType({"A": (make_record("A"),)}),
        stats=ProcessingStats(total_files=3, total_rows=10, publisher_rows=4, unique_publishers=2),
    )
    summary = generate_summary_stats(data)
    assert summary.total_rows == 10
    assert summary.publisher_rows == 4
    assert summary.unique_publishers == 2
    # total_files は出現したファイル数 (処理ファイル数ではない)
    assert summary.total_files == 1


def test_empty_grouped_data():
    summary = generate_summary_stats({})
    assert summary.total_publishers == 0
    assert summary.total_records == 0
    assert summary.total_files == 0
    assert summary.total_bible_studies == 0
    assert summary.total_aux_hours == 0


def test_two_file_scenario():
    data = organize_publishers([
        ("A.xlsx", [{"E": "Alice", "B": 1, "D": 1, "J": 5}]),
        ("B.xlsx", [{"E": "Alice", "C": "TRUE", "M": 3}]),
    ])
    assert [r.source_file for r in data.publishers["Alice"]] == ["A.xlsx", "B.xlsx"]
    summary = generate_summary_stats(data)
    assert summary.total_auxiliary_pioneers == 1
    assert summary.total_regular_pioneers == 1
    assert summary.total_aux_hours == 5
    assert summary.total_reg_hours == 3
    assert summary.total_publishers == 1
    assert summary.total_records == 2
    assert summary.total_files == 2
