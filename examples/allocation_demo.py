#!/usr/bin/env python3
"""
allocation_demo.py — Splitting money without losing a cent

================================================================================
THE PROBLEM
================================================================================

    >>> 100 / 3 * 3
    100.0          (lucky)
    >>> round(100 / 3, 2) * 3
    99.99          (a cent is gone)

Rounding each share independently creates or destroys money. allocate()
truncates every share to a whole step and hands the leftover steps out one by
one, starting with the first share, so the parts always add up.

================================================================================
"""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from exactmoney import (
    Context,
    ContextMismatchError,
    Money,
    MoneyBag,
    RoundingMode,
    RoundingNecessaryError,
)


def demonstrate_allocation():
    """Proportional split of a bill among four partners."""
    print("=" * 60)
    print("ALLOCATE")
    print("=" * 60)
    print()

    bill = Money.of(100, "USD")
    ratios = [30, 20, 40, 40]
    parts = bill.allocate(*ratios)

    print(f"{bill} allocated by {ratios}:")
    for ratio, part in zip(ratios, parts):
        print(f"  {ratio:3d} -> {part}")
    print(f"  sum   = {Money.total(*parts)}")
    print()

    *shares, remainder = bill.allocate_with_remainder(*ratios)
    print("With an explicit remainder:")
    for ratio, share in zip(ratios, shares):
        print(f"  {ratio:3d} -> {share}")
    print(f"  left  = {remainder}")
    print()


def demonstrate_cash():
    """Swiss cash rounds to 5 centimes."""
    print("=" * 60)
    print("CASH CONTEXT")
    print("=" * 60)
    print()

    cash = Money.of(100, "CHF", Context.cash(5))
    print(f"{cash} split 3 ways: {[str(p) for p in cash.split(3)]}")

    price = Money.of("9.99", "CHF")
    print(f"Card price {price} paid in cash: "
          f"{price.to(Context.cash(5), RoundingMode.HALF_UP)}")
    print()


def demonstrate_safety():
    """Nothing is rounded or mixed silently."""
    print("=" * 60)
    print("SAFETY")
    print("=" * 60)
    print()

    price = Money.of("10.00", "EUR")

    print(">>> price.divided_by(3)")
    try:
        price.divided_by(3)
    except RoundingNecessaryError as e:
        print(f"RoundingNecessaryError: {e}")
    print(f">>> price.divided_by(3, RoundingMode.HALF_EVEN) -> {price.divided_by(3, RoundingMode.HALF_EVEN)}")
    print()

    coins = Money.of("0.05", "EUR", Context.cash(5))
    print(">>> price.plus(coins)")
    try:
        price.plus(coins)
    except ContextMismatchError as e:
        print(f"ContextMismatchError: {e}")
    print(f">>> price.plus(coins.to_rational()) -> {price.plus(coins.to_rational())}")
    print()


def demonstrate_bag():
    """Exact accumulation across currencies."""
    print("=" * 60)
    print("MONEY BAG")
    print("=" * 60)
    print()

    bag = MoneyBag()
    for _ in range(3):
        bag.add(Money.of(10, "EUR").to_rational().divided_by(3))
    bag.add(Money.of(500, "JPY"))

    for money in bag.get_monies():
        print(f"  {money}")
    print(f"  EUR as Money: {bag.get_money('EUR').to(Context.default())}")
    print()


def main():
    demonstrate_allocation()
    demonstrate_cash()
    demonstrate_safety()
    demonstrate_bag()


if __name__ == "__main__":
    main()
