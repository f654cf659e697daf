"""
numeric.py — Exact numeric engine used by every monetary type

================================================================================
REPRESENTATION
================================================================================

- Integers:  Python int (arbitrary precision).
- Rationals: fractions.Fraction (always reduced, denominator > 0).
- Decimals:  an (unscaled: int, scale: int) pair internally; decimal.Decimal is
             only produced at the public boundary, built from a digit tuple so
             that no decimal context precision can ever round it.

Floats never take part in a computation. A float handed in by a caller is
read through its shortest repr ("0.1" stays 0.1, not 0.1000000000000000055...).

================================================================================
ROUNDING
================================================================================

Rounding a rational q to an integer starts from floor(q) and the remainder
r = q - floor(q), with 0 <= r < 1. If r == 0 every mode returns floor(q);
otherwise each mode picks floor(q) or floor(q) + 1.
"""

from __future__ import annotations

import math
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from functools import reduce
from typing import Callable, Iterable, Union

from .errors import NumberFormatError, RoundingNecessaryError


Number = Union[int, str, Decimal, Fraction, float]


# ==============================================================================
# ROUNDING MODES
# ==============================================================================

class RoundingMode(Enum):
    """
    Rounding strategies, named after what they do to the discarded fraction.

    - UNNECESSARY: asserts the result is exact, raises otherwise
    - UP / DOWN: away from / toward zero
    - CEILING / FLOOR: toward +infinity / -infinity
    - HALF_*: to the nearest neighbour, ties resolved as the suffix says
    - HALF_EVEN: banker's rounding
    """
    UNNECESSARY = "unnecessary"
    UP = "up"
    DOWN = "down"
    CEILING = "ceiling"
    FLOOR = "floor"
    HALF_UP = "half_up"
    HALF_DOWN = "half_down"
    HALF_CEILING = "half_ceiling"
    HALF_FLOOR = "half_floor"
    HALF_EVEN = "half_even"


# A strategy receives floor(q), the numerator of the remainder and the
# denominator of q. It is only called when the remainder is non-zero.
_Strategy = Callable[[int, int, int], int]


def _unnecessary(floor: int, rem: int, den: int) -> int:
    raise RoundingNecessaryError()


def _up(floor: int, rem: int, den: int) -> int:
    return floor if floor < 0 else floor + 1


def _down(floor: int, rem: int, den: int) -> int:
    return floor + 1 if floor < 0 else floor


def _ceiling(floor: int, rem: int, den: int) -> int:
    return floor + 1


def _floor(floor: int, rem: int, den: int) -> int:
    return floor


def _half(on_tie: _Strategy) -> _Strategy:
    def strategy(floor: int, rem: int, den: int) -> int:
        twice = 2 * rem
        if twice < den:
            return floor
        if twice > den:
            return floor + 1
        return on_tie(floor, rem, den)
    return strategy


def _even(floor: int, rem: int, den: int) -> int:
    return floor if floor % 2 == 0 else floor + 1


_STRATEGIES: dict[RoundingMode, _Strategy] = {
    RoundingMode.UNNECESSARY: _unnecessary,
    RoundingMode.UP: _up,
    RoundingMode.DOWN: _down,
    RoundingMode.CEILING: _ceiling,
    RoundingMode.FLOOR: _floor,
    RoundingMode.HALF_UP: _half(_up),
    RoundingMode.HALF_DOWN: _half(_down),
    RoundingMode.HALF_CEILING: _half(_ceiling),
    RoundingMode.HALF_FLOOR: _half(_floor),
    RoundingMode.HALF_EVEN: _half(_even),
}


def round_to_integer(value: Fraction, mode: RoundingMode) -> int:
    """Round an exact rational to an integer under the given mode."""
    strategy = _STRATEGIES.get(mode)
    if strategy is None:
        raise ValueError(f"Unknown rounding mode: {mode}")

    floor, rem = divmod(value.numerator, value.denominator)
    if rem == 0:
        return floor
    return strategy(floor, rem, value.denominator)


def round_to_scale(value: Fraction, scale: int, mode: RoundingMode) -> int:
    """
    Round `value` to `scale` decimal places.

    Returns the unscaled integer: round_to_scale(Fraction(1, 3), 2, DOWN) == 33.
    """
    return round_to_integer(value * 10 ** scale, mode)


# ==============================================================================
# COERCION
# ==============================================================================

def to_fraction(value: Number) -> Fraction:
    """
    Convert any accepted number to an exact Fraction.

    Accepts int, Fraction, Decimal, float and strings such as "1.23", "-1e3"
    or "3/7". Booleans, non-finite values and malformed strings raise
    NumberFormatError.
    """
    if isinstance(value, bool):
        raise NumberFormatError(value)
    if isinstance(value, int):
        return Fraction(value)
    if isinstance(value, Fraction):
        return value
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise NumberFormatError(value)
        return Fraction(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise NumberFormatError(value)
        return Fraction(repr(value))
    if isinstance(value, str):
        text = value.strip()
        if not text or "_" in text:
            raise NumberFormatError(value)
        try:
            return Fraction(text)
        except (ValueError, ZeroDivisionError):
            raise NumberFormatError(value) from None
    raise NumberFormatError(value)


def to_integer(value: Number) -> int:
    """Convert to int, raising RoundingNecessaryError for non-integral values."""
    fraction = to_fraction(value)
    if fraction.denominator != 1:
        raise RoundingNecessaryError(f"The value {value} is not an integer.")
    return fraction.numerator


def to_exact_scale(value: Fraction) -> tuple[int, int]:
    """
    Smallest (unscaled, scale) pair representing `value` exactly.

    Raises RoundingNecessaryError when the denominator has a prime factor other
    than 2 or 5 (1/3 has no finite decimal expansion).
    """
    den = value.denominator
    twos = fives = 0
    while den % 2 == 0:
        den //= 2
        twos += 1
    while den % 5 == 0:
        den //= 5
        fives += 1
    if den != 1:
        raise RoundingNecessaryError(
            f"The rational number {value} cannot be represented as a decimal number."
        )
    scale = max(twos, fives)
    return value.numerator * 10 ** scale // value.denominator, scale


def strip_trailing_zeros(unscaled: int, scale: int) -> tuple[int, int]:
    """Drop trailing zeros of the fractional part only; 100 stays 100."""
    while scale > 0 and unscaled % 10 == 0:
        unscaled //= 10
        scale -= 1
    return unscaled, scale


def to_decimal(unscaled: int, scale: int) -> Decimal:
    """Build the Decimal unscaled * 10**-scale without any context rounding."""
    digits = tuple(int(c) for c in str(abs(unscaled)))
    return Decimal((1 if unscaled < 0 else 0, digits, -scale))


def to_rational(unscaled: int, scale: int) -> Fraction:
    return Fraction(unscaled, 10 ** scale)


def decimal_string(unscaled: int, scale: int) -> str:
    """Plain notation, never scientific: decimal_string(-5, 3) == "-0.005"."""
    return format(to_decimal(unscaled, scale), "f")


# ==============================================================================
# INTEGER HELPERS
# ==============================================================================

def divide_toward_zero(dividend: int, divisor: int) -> tuple[int, int]:
    """
    Truncating integer division.

    The remainder has the sign of the dividend, so that
    quotient * divisor + remainder == dividend.
    """
    if divisor == 0:
        raise ZeroDivisionError("Division by zero")
    quotient = abs(dividend) // abs(divisor)
    if (dividend < 0) != (divisor < 0):
        quotient = -quotient
    return quotient, dividend - quotient * divisor


def gcd_of(values: Iterable[int]) -> int:
    return reduce(math.gcd, values, 0)
