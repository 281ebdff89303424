from __future__ import annotations

import math

import pytest

from field_service_report.excel.coercion import coerce_boolean, coerce_number


@pytest.mark.parametrize("raw", ["true", "TRUE", "1", "yes", "YES", " True ", "\tyes\n"])
def test_coerce_boolean_truthy_strings(raw):
    assert coerce_boolean(raw) is True


@pytest.mark.parametrize("raw", ["false", "0", "no", "", "   ", "y", "checked", "2"])
def test_coerce_boolean_other_strings_are_false(raw):
    assert coerce_boolean(raw) is False


def test_coerce_boolean_raw_booleans_pass_through():
    assert coerce_boolean(True) is True
    assert coerce_boolean(False) is False


def test_coerce_boolean_numbers_only_one_is_true():
    assert coerce_boolean(1) is True
    assert coerce_boolean(1.0) is True
    assert coerce_boolean(0) is False
    assert coerce_boolean(2) is False
    assert coerce_boolean(-1) is False
    assert coerce_boolean(0.5) is False


def test_coerce_boolean_unknown_types_default_false():
    assert coerce_boolean(None) is False
    assert coerce_boolean([1]) is False


def test_coerce_number_numbers_unchanged():
    assert coerce_number(5) == 5
    assert coerce_number(2.5) == 2.5
    assert coerce_number(-3) == -3


def test_coerce_number_booleans():
    assert coerce_number(True) == 1.0
    assert coerce_number(False) == 0.0


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("12", 12.0),
        (" 12.5 ", 12.5),
        ("-4", -4.0),
        (".5", 0.5),
        ("1e2", 100.0),
        ("7 hrs", 7.0),
    ],
)
def test_coerce_number_numeric_strings(raw, expected):
    assert coerce_number(raw) == expected


@pytest.mark.parametrize("raw", ["", "   ", "abc", "hrs 7", "-", "N/A", "nan"])
def test_coerce_number_non_numeric_strings_are_zero(raw):
    assert coerce_number(raw) == 0


def test_coerce_number_nan_and_unknown_types_are_zero():
    assert coerce_number(float("nan")) == 0
    assert not math.isnan(coerce_number(float("nan")))
    assert coerce_number(None) == 0
