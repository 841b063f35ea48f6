"""Tests for builtin functions, operators and value formatting."""

import math

import pytest

from linebasic.runtime.builtins import apply_operator, format_value, lookup_function
from linebasic.runtime.errors import UnknownFunction


class TestFunctions:
    """Tests for the builtin function table."""

    @pytest.mark.parametrize("name,arg,expected", [
        ("ABS", -4.0, 4.0),
        ("SQR", 9.0, 3.0),
        ("EXP", 0.0, 1.0),
        ("SIN", 0.0, 0.0),
        ("COS", 0.0, 1.0),
        ("ROUND", 2.5, 3.0),
        ("ROUND", -2.5, -2.0),
        ("ROUND", 4.49, 4.0),
        ("ROUND", 0.49999999999999994, 0.0),
        ("ROUND", 4503599627370497.0, 4503599627370497.0),
        ("ROUND", -0.4, 0.0),
        ("SGN", -4.0, -1.0),
        ("SGN", 0.0, 0.0),
        ("SGN", 7.5, 1.0),
        ("CEIL", 4.01, 5.0),
        ("CEIL", -4.5, -4.0),
    ])
    def test_values(self, name, arg, expected):
        assert lookup_function(name)(arg) == expected

    def test_names_are_case_insensitive(self):
        assert lookup_function("sqr")(16.0) == 4.0

    def test_unknown_function(self):
        with pytest.raises(UnknownFunction) as excinfo:
            lookup_function("LOG")
        assert excinfo.value.name == "LOG"

    @pytest.mark.parametrize("name,arg", [
        ("SQR", -1.0), ("SIN", math.inf), ("COS", -math.inf), ("SGN", math.nan),
    ])
    def test_domain_errors_give_nan(self, name, arg):
        assert math.isnan(lookup_function(name)(arg))

    def test_exp_overflow(self):
        assert lookup_function("EXP")(1000.0) == math.inf

    def test_ceil_keeps_negative_zero(self):
        result = lookup_function("CEIL")(-0.5)
        assert result == 0.0
        assert math.copysign(1.0, result) == -1.0
        assert format_value(result) == "-0.0"


class TestOperators:
    """Tests for binary operators."""

    def test_arithmetic(self):
        assert apply_operator("+", 2.0, 3.0) == 5.0
        assert apply_operator("-", 2.0, 3.0) == -1.0
        assert apply_operator("*", 2.0, 3.0) == 6.0
        assert apply_operator("/", 3.0, 2.0) == 1.5
        assert apply_operator("^", 2.0, 3.0) == 8.0

    def test_comparisons_give_one_or_zero(self):
        assert apply_operator("=", 2.0, 2.0) == 1.0
        assert apply_operator("<", 3.0, 2.0) == 0.0
        assert apply_operator("<=", 2.0, 2.0) == 1.0
        assert apply_operator(">", 3.0, 2.0) == 1.0
        assert apply_operator(">=", 1.0, 2.0) == 0.0

    def test_division_by_zero(self):
        assert apply_operator("/", 1.0, 0.0) == math.inf
        assert apply_operator("/", -1.0, 0.0) == -math.inf
        assert apply_operator("/", 1.0, -0.0) == -math.inf
        assert math.isnan(apply_operator("/", 0.0, 0.0))

    def test_power_edge_cases(self):
        assert apply_operator("^", 0.0, -1.0) == math.inf
        assert apply_operator("^", 10.0, 400.0) == math.inf
        assert apply_operator("^", -10.0, 401.0) == -math.inf
        assert math.isnan(apply_operator("^", -8.0, 1.0 / 3.0))


class TestFormatValue:
    """Tests for PRINT formatting."""

    @pytest.mark.parametrize("value,text", [
        (3.14, "3.14"),
        (2.0, "2.0"),
        (-1.0, "-1.0"),
        (0.0, "0.0"),
        (-0.0, "-0.0"),
        (0.001, "0.001"),
        (1234567.5, "1234567.5"),
        (1e7, "1.0E7"),
        (12345678.0, "1.2345678E7"),
        (1.5e-5, "1.5E-5"),
        (-2.5e20, "-2.5E20"),
        (math.inf, "Infinity"),
        (-math.inf, "-Infinity"),
        (math.nan, "NaN"),
    ])
    def test_format(self, value, text):
        assert format_value(value) == text
