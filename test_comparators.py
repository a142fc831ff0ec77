"""Tests for leaf value equality."""

import re
from datetime import date, datetime, timedelta, timezone

from deepcompare import MISSING
from deepcompare.comparators import patterns_equal, temporal_equal, values_equal


class TestStrictEquality:
    """Test equality without coercion."""

    def test_identical_values(self):
        """Test that identical values are equal."""
        assert values_equal("a", "a") is True
        assert values_equal(None, None) is True

    def test_numbers_compare_by_value(self):
        """Test int and float with the same value are equal."""
        assert values_equal(1, 1.0) is True

    def test_bool_is_not_int(self):
        """Test booleans only equal booleans in strict mode."""
        assert values_equal(True, 1) is False
        assert values_equal(0, False) is False

    def test_no_string_coercion(self):
        """Test strings do not equal numbers in strict mode."""
        assert values_equal("42", 42) is False

    def test_absence_markers_differ(self):
        """Test None and MISSING are distinct in strict mode."""
        assert values_equal(None, MISSING) is False

    def test_nan_equals_nan(self):
        """Test NaN equals NaN regardless of strictness."""
        assert values_equal(float("nan"), float("nan")) is True
        assert values_equal(float("nan"), float("nan"), strict=False) is True


class TestLooseEquality:
    """Test equality with coercion."""

    def test_absence_markers_interchangeable(self):
        """Test None and MISSING are equal in loose mode."""
        assert values_equal(None, MISSING, strict=False) is True

    def test_numeric_string_coercion(self):
        """Test numeric strings equal numbers."""
        assert values_equal("42", 42, strict=False) is True
        assert values_equal(3.5, "3.5", strict=False) is True
        assert values_equal("", 0, strict=False) is True
        assert values_equal("abc", 0, strict=False) is False

    def test_numeric_string_grammar(self):
        """Test only decimal, exponent, radix and Infinity spellings coerce."""
        assert values_equal("1e3", 1000, strict=False) is True
        assert values_equal(" .5 ", 0.5, strict=False) is True
        assert values_equal("0x1A", 26, strict=False) is True
        assert values_equal("-Infinity", float("-inf"), strict=False) is True
        assert values_equal("1_000", 1000, strict=False) is False
        assert values_equal("inf", float("inf"), strict=False) is False
        assert values_equal("infinity", float("inf"), strict=False) is False
        assert values_equal("nan", float("nan"), strict=False) is False
        assert values_equal("-0x1A", -26, strict=False) is False

    def test_boolean_coercion(self):
        """Test booleans compare by truthiness."""
        assert values_equal(True, "1", strict=False) is True
        assert values_equal(False, 0, strict=False) is True

    def test_falsy_against_truthy(self):
        """Test a falsy value never equals a truthy one."""
        assert values_equal(0, "x", strict=False) is False
        assert values_equal(None, 0, strict=False) is False

    def test_unrelated_strings(self):
        """Test distinct strings stay distinct."""
        assert values_equal("a", "b", strict=False) is False


class TestSpecialValues:
    """Test temporal and pattern values."""

    def test_same_instant_different_zones(self):
        """Test datetimes denoting the same instant are equal."""
        utc = datetime(2024, 1, 1, 12, tzinfo=timezone.utc)
        plus_one = datetime(2024, 1, 1, 13, tzinfo=timezone(timedelta(hours=1)))
        assert temporal_equal(utc, plus_one) is True
        assert values_equal(utc, plus_one) is True

    def test_date_is_not_datetime(self):
        """Test a date never equals a datetime."""
        assert temporal_equal(date(2024, 1, 1), datetime(2024, 1, 1)) is False

    def test_patterns(self):
        """Test patterns compare by source and flags."""
        assert patterns_equal(re.compile("a+"), re.compile("a+")) is True
        assert patterns_equal(re.compile("a+"), re.compile("a+", re.I)) is False
        assert values_equal(re.compile("b"), re.compile("c")) is False
