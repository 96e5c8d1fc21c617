# Boom Deployment Planner - Field Coercion Tests
# SPDX-License-Identifier: Apache-2.0

import math

import pytest

from boom_report.coercion import parse_interval, segment_length, to_float, to_int, to_text


class TestParseInterval:
    """Anchor interval arrives as a number, "N+", or "N per <unit>" """

    @pytest.mark.parametrize("value, expected", [
        ("200+", 200),
        ("1 per 100 ft", 1),
        ("150", 150),
        (" 75 ", 75),
        ("3 per segment", 3),
        (150, 150),
        (150.7, 150),
    ])
    def test_leading_number(self, value, expected):
        assert parse_interval(value) == expected

    @pytest.mark.parametrize("value", [None, "", "every 100 ft", "+", True, ["150"]])
    def test_non_numeric_is_none(self, value):
        assert parse_interval(value) is None


class TestToFloat:

    @pytest.mark.parametrize("value, expected", [
        ("2.5", 2.5),
        (" 300 ", 300.0),
        ("350 ft", 350.0),
        (".5", 0.5),
        (-1.25, -1.25),
        (40, 40.0),
        ("1e3", 1000.0),
    ])
    def test_numeric(self, value, expected):
        assert to_float(value) == pytest.approx(expected)

    @pytest.mark.parametrize("value", [None, "", "n/a", "abc12", False, {}, math.nan, math.inf])
    def test_not_numeric(self, value):
        assert to_float(value) is None

    def test_integer_too_large_for_float(self):
        assert to_float(10**400) is None
        assert to_float(-(10**400)) is None
        assert to_int(10**400) is None
        assert parse_interval(10**400) is None

    def test_to_int_truncates(self):
        assert to_int("2") == 2
        assert to_int("4.9") == 4
        assert to_int("seven") is None


class TestToText:

    def test_strips(self):
        assert to_text("  45 ") == "45"

    def test_whole_float_has_no_decimal(self):
        assert to_text(45.0) == "45"
        assert to_text(12.4) == "12.4"

    def test_empty_is_none(self):
        assert to_text("   ") is None
        assert to_text(None) is None


class TestSegmentLength:

    def test_cascade_divides(self):
        assert segment_length(350.0, 2, True) == pytest.approx(175.0)

    def test_single_boom_is_whole_length(self):
        assert segment_length(210.0, 1, False) == 210.0

    def test_unusable_segment_count(self):
        assert segment_length(350.0, 0, True) is None
        assert segment_length(350.0, None, True) is None

    def test_missing_length(self):
        assert segment_length(None, 2, True) is None
