"""Tests for the scalar leaf validators in isolation."""

import math

import pytest

from shapeguard.validation import (
    BoolNode,
    Failure,
    FloatNode,
    IntNode,
    StringNode,
    validate_bool,
    validate_float,
    validate_int,
    validate_string,
)


class WrappedStr(str):
    pass


class WrappedInt(int):
    pass


class WrappedFloat(float):
    pass


class TestString:

    @pytest.mark.parametrize("value", [None, 0, True, [], ["Bob"], {}, b"Bob", WrappedStr("Bob")])
    def test_not_a_string(self, value):
        assert validate_string(StringNode(), value).failure is Failure.NOT_A_STRING

    def test_valid_value_returned_unchanged(self):
        result = validate_string(StringNode(), "Bob")
        assert result.is_valid and result.value == "Bob"

    @pytest.mark.parametrize("value,failure", [
        ("Bob", None),
        ("B", Failure.STRING_TOO_SHORT),
        ("Robert", Failure.STRING_TOO_LONG),
        ("\u30b1", Failure.STRING_TOO_SHORT),
        ("Bob-\u30b1", None),
        ("\U0001f603\U0001f603", None),
        ("Bob-\U0001f603", None),
        ("Bobby\U0001f603", Failure.STRING_TOO_LONG),
        ("a\u0301", None),
    ])
    def test_length_counts_code_points(self, value, failure):
        assert validate_string(StringNode(min_len=2, max_len=5), value).failure is failure

    def test_single_astral_character_is_one_unit(self):
        node = StringNode(max_len=1)
        assert validate_string(node, "\U0001f603").is_valid
        assert validate_string(node, "a\u0301").failure is Failure.STRING_TOO_LONG

    def test_membership_is_exact(self):
        node = StringNode(one_of=("Bob", "Robert", "\u00e1"))
        assert validate_string(node, "\u00e1").is_valid
        assert validate_string(node, "a\u0301").failure is Failure.STRING_NOT_IN_VALID_SET
        assert validate_string(node, "Roberto").failure is Failure.STRING_NOT_IN_VALID_SET

    def test_membership_checked_before_length(self):
        node = StringNode(one_of=("toolong",), max_len=3)
        assert validate_string(node, "nope-nope").failure is Failure.STRING_NOT_IN_VALID_SET
        assert validate_string(node, "toolong").failure is Failure.STRING_TOO_LONG


class TestInt:

    @pytest.mark.parametrize("value", [
        None, 1.5, -1.5, math.inf, -math.inf, math.nan, False, True, "0", [], [0], {},
        WrappedInt(0), WrappedFloat(0.0),
    ])
    def test_not_an_integer(self, value):
        assert validate_int(IntNode(), value).failure is Failure.NOT_AN_INTEGER

    @pytest.mark.parametrize("value", [0, -0.0, 1, -1, 2.0, 10**30])
    def test_integral_values(self, value):
        result = validate_int(IntNode(), value)
        assert result.is_valid and result.value == value

    def test_negative_zero_keeps_its_sign(self):
        assert math.copysign(1.0, validate_int(IntNode(), -0.0).value) == -1.0

    @pytest.mark.parametrize("value,failure", [
        (4, Failure.INTEGER_TOO_SMALL), (5, None), (10, None), (11, Failure.INTEGER_TOO_BIG),
    ])
    def test_inclusive_bounds(self, value, failure):
        assert validate_int(IntNode(minimum=5, maximum=10), value).failure is failure

    @pytest.mark.parametrize("value,failure", [
        (4, Failure.INTEGER_TOO_SMALL), (5, Failure.INTEGER_TOO_SMALL), (6, None),
        (9, None), (10, Failure.INTEGER_TOO_BIG), (11, Failure.INTEGER_TOO_BIG),
    ])
    def test_exclusive_bounds(self, value, failure):
        assert validate_int(IntNode(exclusive_minimum=5, exclusive_maximum=10), value).failure is failure

    def test_upper_bounds_checked_first(self):
        node = IntNode(maximum=0, minimum=10)
        assert validate_int(node, 5).failure is Failure.INTEGER_TOO_BIG


class TestFloat:

    @pytest.mark.parametrize("value", [None, False, True, "0", [], [0], {}, WrappedFloat(0.5), WrappedInt(1)])
    def test_not_a_float(self, value):
        assert validate_float(FloatNode(), value).failure is Failure.NOT_A_FLOAT

    @pytest.mark.parametrize("value", [0, -0.0, 1, -1, 1.5, -1.5])
    def test_numbers(self, value):
        assert validate_float(FloatNode(), value).value == value

    @pytest.mark.parametrize("value", [math.inf, -math.inf])
    def test_infinity_rejected_by_default(self, value):
        assert validate_float(FloatNode(), value).failure is Failure.NOT_A_FINITE_FLOAT

    def test_nan_rejected_by_default(self):
        assert validate_float(FloatNode(), math.nan).failure is Failure.NOT_A_NUMERIC_FLOAT

    def test_accepted_nan_skips_range_checks(self):
        result = validate_float(FloatNode(accept_nan=True, minimum=5, maximum=10), math.nan)
        assert result.is_valid and math.isnan(result.value)

    def test_accept_nan_does_not_accept_infinity(self):
        node = FloatNode(accept_nan=True, minimum=5, maximum=10)
        assert validate_float(node, math.inf).failure is Failure.NOT_A_FINITE_FLOAT
        assert validate_float(node, 4).failure is Failure.FLOAT_TOO_SMALL
        assert validate_float(node, 11).failure is Failure.FLOAT_TOO_BIG

    def test_accept_infinity_does_not_accept_nan(self):
        node = FloatNode(accept_infinity=True)
        assert validate_float(node, math.inf).value == math.inf
        assert validate_float(node, -math.inf).value == -math.inf
        assert validate_float(node, math.nan).failure is Failure.NOT_A_NUMERIC_FLOAT

    def test_accepted_infinity_still_range_checked(self):
        node = FloatNode(accept_infinity=True, minimum=5)
        assert validate_float(node, math.inf).is_valid
        assert validate_float(node, -math.inf).failure is Failure.FLOAT_TOO_SMALL

    @pytest.mark.parametrize("value,failure", [
        (4, Failure.FLOAT_TOO_SMALL), (5, Failure.FLOAT_TOO_SMALL), (5.000001, None),
        (9.999999, None), (10, Failure.FLOAT_TOO_BIG), (11, Failure.FLOAT_TOO_BIG),
    ])
    def test_exclusive_bounds(self, value, failure):
        assert validate_float(FloatNode(exclusive_minimum=5, exclusive_maximum=10), value).failure is failure


class TestBool:

    @pytest.mark.parametrize("value", [False, True])
    def test_booleans(self, value):
        assert validate_bool(BoolNode(), value).value is value

    @pytest.mark.parametrize("value", [None, 0, 1, "0", [], [False], {}])
    def test_not_a_boolean(self, value):
        assert validate_bool(BoolNode(), value).failure is Failure.NOT_A_BOOLEAN
