"""Scalar Leaf Validators

Each validator checks one non-null, non-missing value against the
constraints of one leaf node and reports at most one failure: the primary
type check first, then the constraint checks in a fixed order, stopping
at the first that fails. Validators never touch the error list; the
engine records the failure at the right path.

Scalar types are matched exactly. Subclasses of str/int/float/bool are
"wrapped" values and fail the type check like any other foreign type, and
bool never counts as a number.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from .errors import Failure
from .schema import BoolNode, FloatNode, IntNode, StringNode


@dataclass(frozen=True, slots=True)
class LeafResult:
    """Outcome of a leaf check: the accepted value or one failure."""
    is_valid: bool
    value: Any = None
    failure: Failure | None = None

    @classmethod
    def valid(cls, value: Any) -> LeafResult: return cls(is_valid=True, value=value)

    @classmethod
    def invalid(cls, failure: Failure) -> LeafResult: return cls(is_valid=False, failure=failure)


def is_number(value: Any) -> bool:
    return type(value) is int or type(value) is float


# ============================================================================
# String
# ============================================================================

def validate_string(node: StringNode, value: Any) -> LeafResult:
    """Length is counted in code points, so an astral character counts once
    and a base letter plus combining mark counts twice."""
    if type(value) is not str:
        return LeafResult.invalid(Failure.NOT_A_STRING)

    if node.one_of is not None and value not in node.one_of:
        return LeafResult.invalid(Failure.STRING_NOT_IN_VALID_SET)

    if node.max_len is not None and len(value) > node.max_len:
        return LeafResult.invalid(Failure.STRING_TOO_LONG)

    if node.min_len is not None and len(value) < node.min_len:
        return LeafResult.invalid(Failure.STRING_TOO_SHORT)

    return LeafResult.valid(value)


# ============================================================================
# Numeric
# ============================================================================

def _check_range(node: IntNode | FloatNode, value: int | float, too_big: Failure, too_small: Failure) -> LeafResult:
    if node.maximum is not None and value > node.maximum:
        return LeafResult.invalid(too_big)
    if node.exclusive_maximum is not None and value >= node.exclusive_maximum:
        return LeafResult.invalid(too_big)
    if node.minimum is not None and value < node.minimum:
        return LeafResult.invalid(too_small)
    if node.exclusive_minimum is not None and value <= node.exclusive_minimum:
        return LeafResult.invalid(too_small)
    return LeafResult.valid(value)


def validate_int(node: IntNode, value: Any) -> LeafResult:
    """Accepts int, and float values that are finite with no fractional part (including -0.0)."""
    if not is_number(value):
        return LeafResult.invalid(Failure.NOT_AN_INTEGER)
    if type(value) is float and (not math.isfinite(value) or not value.is_integer()):
        return LeafResult.invalid(Failure.NOT_AN_INTEGER)

    return _check_range(node, value, Failure.INTEGER_TOO_BIG, Failure.INTEGER_TOO_SMALL)


def validate_float(node: FloatNode, value: Any) -> LeafResult:
    """NaN, when accepted, skips range checks; accepted infinities do not."""
    if not is_number(value):
        return LeafResult.invalid(Failure.NOT_A_FLOAT)

    if type(value) is float and not math.isfinite(value):
        if math.isnan(value):
            if not node.accept_nan:
                return LeafResult.invalid(Failure.NOT_A_NUMERIC_FLOAT)
            return LeafResult.valid(value)
        if not node.accept_infinity:
            return LeafResult.invalid(Failure.NOT_A_FINITE_FLOAT)

    return _check_range(node, value, Failure.FLOAT_TOO_BIG, Failure.FLOAT_TOO_SMALL)


# ============================================================================
# Bool
# ============================================================================

def validate_bool(node: BoolNode, value: Any) -> LeafResult:
    if type(value) is not bool:
        return LeafResult.invalid(Failure.NOT_A_BOOLEAN)
    return LeafResult.valid(value)
