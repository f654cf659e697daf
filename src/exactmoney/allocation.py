"""
allocation.py — Proportional allocation with exact totals

================================================================================
ALGORITHMS
================================================================================

All computations happen on step counts: the unscaled amount divided by the
context step. A step is the smallest amount a Money may change by (USD: 0.01,
CHF cash with step 5: 0.05).

allocate(money, ratios)
    1. part_i = trunc(steps * ratio_i / total) steps, truncated toward zero.
    2. Each truncation loses less than one step, so the shortfall k is a whole
       number of steps with |k| < len(ratios).
    3. One step (signed like the money) is added to parts 0, 1, ... k-1.
       Earlier ratios always receive the surplus first.
    4. In the auto context every part has its trailing zeros stripped, like
       any other auto result.

allocate_with_remainder(money, ratios)
    1. Ratios are divided by their GCD, which keeps the remainder minimal.
    2. remainder = money quotient_and_remainder sum(ratios), remainder part.
    3. What is left divides exactly: part_i = (money - remainder) * r_i / total.
    4. The remainder is appended as the last element.

INVARIANT (both): sum(result) == money, with currency and context kept.
================================================================================
"""

from __future__ import annotations

import operator
from typing import TYPE_CHECKING, Sequence

from .errors import (
    EmptyAllocationRatiosError,
    InvalidSplitPartsError,
    NegativeAllocationRatioError,
    ZeroAllocationRatiosError,
)
from .numeric import divide_toward_zero, gcd_of

if TYPE_CHECKING:
    from .money import Money


def _check_ratios(ratios: Sequence[int], method: str) -> list[int]:
    ratios = [operator.index(ratio) for ratio in ratios]
    if not ratios:
        raise EmptyAllocationRatiosError(method)
    if any(ratio < 0 for ratio in ratios):
        raise NegativeAllocationRatioError(method)
    if sum(ratios) == 0:
        raise ZeroAllocationRatiosError(method)
    return ratios


def _check_parts(parts: int, method: str) -> int:
    parts = operator.index(parts)
    if parts < 1:
        raise InvalidSplitPartsError(method)
    return parts


def allocate(money: Money, ratios: Sequence[int]) -> list[Money]:
    """
    Raises:
        EmptyAllocationRatiosError: no ratios.
        NegativeAllocationRatioError: a ratio is below zero.
        ZeroAllocationRatiosError: all ratios are zero.
    """
    ratios = _check_ratios(ratios, "allocate")
    total = sum(ratios)

    step = money.context.step
    steps = money.unscaled_amount // step
    counts = [divide_toward_zero(steps * ratio, total)[0] for ratio in ratios]
    parts = [money._with_unscaled(count * step) for count in counts]
    if not money.context.is_fixed_scale():
        # auto parts must not keep the trailing zeros of the original scale
        parts = [part.to(money.context) for part in parts]

    shortfall = steps - sum(counts)
    unit = money._with_unscaled(step if shortfall > 0 else -step)
    for index in range(abs(shortfall)):
        parts[index] = parts[index].plus(unit)

    return parts


def allocate_with_remainder(money: Money, ratios: Sequence[int]) -> list[Money]:
    """
    Same preconditions as allocate(), reported as allocate_with_remainder().
    """
    ratios = _check_ratios(ratios, "allocate_with_remainder")
    divisor = gcd_of(ratios)
    ratios = [ratio // divisor for ratio in ratios]
    total = sum(ratios)

    remainder = money.quotient_and_remainder(total)[1]
    to_allocate = money.minus(remainder)

    parts = [to_allocate.multiplied_by(ratio).divided_by(total) for ratio in ratios]
    parts.append(remainder)
    return parts


def split(money: Money, parts: int) -> list[Money]:
    """allocate() with `parts` equal ratios."""
    parts = _check_parts(parts, "split")
    return allocate(money, [1] * parts)


def split_with_remainder(money: Money, parts: int) -> list[Money]:
    parts = _check_parts(parts, "split_with_remainder")
    return allocate_with_remainder(money, [1] * parts)
