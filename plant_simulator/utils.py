"""
Integer Arithmetic Helpers for the Plant Step Functions

All plant state is integral. These helpers pin down exactly how a
fractional intermediate becomes an integer, so every component rounds the
same way.
"""

import math
import numbers
from typing import Any, Union

Number = Union[int, float]


def round_half_up(value: Number) -> int:
    """
    Round to the nearest integer, halves towards positive infinity.

    Python's built-in round() uses banker's rounding (round(0.5) == 0);
    the plant model needs 0.5 -> 1 and -0.5 -> 0.

    Args:
        value: Value to round

    Returns:
        Rounded integer
    """
    return int(math.floor(value + 0.5))


def ceil_int(value: Number) -> int:
    """Smallest integer not less than value."""
    return int(math.ceil(value))


def truncating_div(numerator: int, denominator: int) -> int:
    """
    Integer division rounding towards zero.

    Python's // floors, so -1 // 2 == -1; this returns 0.

    Args:
        numerator: Dividend
        denominator: Divisor (non-zero)

    Returns:
        Quotient truncated towards zero
    """
    if denominator == 0:
        raise ZeroDivisionError("truncating_div: denominator is zero")
    quotient = abs(numerator) // abs(denominator)
    if (numerator < 0) != (denominator < 0):
        return -quotient
    return quotient


def percentage_to_fraction(percentage: int) -> float:
    """
    Convert a percentage to a fraction.

    Assumes the input is a valid percentage (i.e. in [0, 100]).
    """
    return percentage / 100.0


def is_whole_number(value: Any) -> bool:
    """True for integers (including numpy integers), False for bools and floats."""
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def clamp(value: int, lower: int, upper: int) -> int:
    """Clamp value into [lower, upper]."""
    return max(lower, min(value, upper))
