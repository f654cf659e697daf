"""
test_allocation.py — Test suite for allocate / split

================================================================================
INVARIANTS UNDER TEST
================================================================================

1. sum(m.allocate(*r)) == m, for every money and valid ratio list.
2. sum(m.allocate_with_remainder(*r)) == m, the remainder being last.
3. split(n) / split_with_remainder(n) behave as n ratios of 1.
4. Every part keeps the currency and the context of the original.
5. The rounding surplus goes to the first parts (front-loaded tie-break).

================================================================================
"""

from fractions import Fraction

import pytest
from hypothesis import given, settings, HealthCheck
from hypothesis import strategies as st

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from exactmoney import (
    AllocationError,
    Context,
    EmptyAllocationRatiosError,
    InvalidSplitPartsError,
    Money,
    NegativeAllocationRatioError,
    ZeroAllocationRatiosError,
    allocate,
)


# ==============================================================================
# TEST HELPERS
# ==============================================================================

def amounts(monies):
    return [str(m.amount) for m in monies]


def total_of(monies):
    return sum(m.to_rational().amount for m in monies)


@st.composite
def context_money_strategy(draw):
    """Random Money in one of several contexts, respecting its step."""
    currency, context, scale, step = draw(st.sampled_from([
        ("USD", Context.default(), 2, 1),
        ("JPY", Context.default(), 0, 1),
        ("CHF", Context.cash(5), 2, 5),
        ("CZK", Context.cash(100), 2, 100),
        ("EUR", Context.custom(4, 25), 4, 25),
        ("EUR", Context.auto(), 3, 1),
    ]))
    steps = draw(st.integers(min_value=-1_000_000, max_value=1_000_000))
    return Money.of(Fraction(steps * step, 10 ** scale), currency, context)


ratios_strategy = st.lists(st.integers(min_value=0, max_value=1_000), min_size=1, max_size=20).filter(
    lambda r: sum(r) > 0
)


# ==============================================================================
# UNIT TESTS: allocate
# ==============================================================================

class TestAllocate:

    @pytest.mark.parametrize("amount, currency, context, ratios, expected", [
        ("100", "USD", None, [30, 20, 40, 40], ["23.08", "15.39", "30.77", "30.76"]),
        ("100", "USD", None, [30, 20, 40], ["33.34", "22.22", "44.44"]),
        ("99.99", "USD", None, [100, 100], ["50.00", "49.99"]),
        ("100", "CHF", Context.cash(5), [1, 2, 3, 7], ["7.70", "15.40", "23.10", "53.80"]),
        ("100.123", "EUR", Context.auto(), [2, 3, 1, 1], ["28.607", "42.91", "14.303", "14.303"]),
        ("2.5", "EUR", Context.auto(), [4, 1], ["2", "0.5"]),
        ("0.02", "EUR", None, [1, 1, 3, 1], ["0.01", "0.00", "0.01", "0.00"]),
        ("-100", "USD", None, [30, 20, 40, 40], ["-23.08", "-15.39", "-30.77", "-30.76"]),
        ("0.03", "GBP", None, [75, 25], ["0.03", "0.00"]),
        ("0", "USD", None, [1, 2], ["0.00", "0.00"]),
        ("1", "USD", None, [0, 1], ["0.00", "1.00"]),
    ])
    def test_allocate(self, amount, currency, context, ratios, expected):
        money = Money.of(amount, currency, context)
        parts = money.allocate(*ratios)
        assert amounts(parts) == expected
        assert total_of(parts) == money.to_rational().amount

    @pytest.mark.parametrize("amount, ratios", [
        ("2.5", [4, 1]),
        ("100.123", [2, 3, 1, 1]),
        ("0.10", [1, 1]),
        ("-7.50", [3, 1, 1]),
    ])
    def test_auto_parts_strip_trailing_zeros(self, amount, ratios):
        parts = Money.of(amount, "EUR", Context.auto()).allocate(*ratios)
        for part in parts:
            assert str(part) == str(Money.of(part.amount, "EUR", Context.auto()))
            assert part.to_dict() == Money.of(part.amount, "EUR", Context.auto()).to_dict()

    def test_parts_keep_context(self):
        parts = Money.of(100, "CHF", Context.cash(5)).allocate(1, 2)
        assert all(p.context == Context.cash(5) for p in parts)
        assert all(p.currency.code == "CHF" for p in parts)

    def test_surplus_goes_to_first_parts(self):
        parts = Money.of("0.05", "USD").allocate(1, 1, 1, 1, 1, 1, 1)
        assert amounts(parts) == ["0.01"] * 5 + ["0.00"] * 2

    def test_module_function(self):
        assert amounts(allocate(Money.of(1, "USD"), [1, 1, 1])) == ["0.34", "0.33", "0.33"]

    def test_empty_ratios(self):
        with pytest.raises(EmptyAllocationRatiosError) as e:
            Money.of(1, "USD").allocate()
        assert str(e.value) == "Cannot allocate() an empty list of ratios."

    def test_negative_ratio(self):
        with pytest.raises(NegativeAllocationRatioError) as e:
            Money.of(1, "USD").allocate(1, -1)
        assert str(e.value) == "Cannot allocate() negative ratios."

    def test_zero_ratios(self):
        with pytest.raises(ZeroAllocationRatiosError) as e:
            Money.of(1, "USD").allocate(0, 0)
        assert str(e.value) == "Cannot allocate() to zero ratios only."

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            Money.of(1, "USD").allocate(0)


# ==============================================================================
# UNIT TESTS: allocate_with_remainder
# ==============================================================================

class TestAllocateWithRemainder:

    @pytest.mark.parametrize("amount, currency, context, ratios, expected", [
        ("100", "USD", None, [30, 20, 40, 40], ["23.07", "15.38", "30.76", "30.76", "0.03"]),
        ("100", "USD", None, [30, 20, 40], ["33.33", "22.22", "44.44", "0.01"]),
        ("100", "CHF", Context.cash(5), [1, 2, 3, 7], ["7.65", "15.30", "22.95", "53.55", "0.55"]),
        ("100.123", "EUR", Context.auto(), [2, 3, 1, 1], ["28.606", "42.909", "14.303", "14.303", "0.002"]),
        ("0.03", "GBP", None, [75, 25], ["0.00", "0.00", "0.03"]),
        ("-100", "USD", None, [30, 20, 40, 40], ["-23.07", "-15.38", "-30.76", "-30.76", "-0.03"]),
    ])
    def test_allocate_with_remainder(self, amount, currency, context, ratios, expected):
        money = Money.of(amount, currency, context)
        parts = money.allocate_with_remainder(*ratios)
        assert amounts(parts) == expected
        assert total_of(parts) == money.to_rational().amount

    def test_ratios_are_reduced(self):
        a = Money.of(100, "USD").allocate_with_remainder(30, 20, 40, 40)
        b = Money.of(100, "USD").allocate_with_remainder(3, 2, 4, 4)
        assert amounts(a) == amounts(b)

    @pytest.mark.parametrize("ratios, error, message", [
        ([], EmptyAllocationRatiosError, "Cannot allocate_with_remainder() an empty list of ratios."),
        ([1, -1], NegativeAllocationRatioError, "Cannot allocate_with_remainder() negative ratios."),
        ([0], ZeroAllocationRatiosError, "Cannot allocate_with_remainder() to zero ratios only."),
    ])
    def test_preconditions(self, ratios, error, message):
        with pytest.raises(error) as e:
            Money.of(1, "USD").allocate_with_remainder(*ratios)
        assert str(e.value) == message


# ==============================================================================
# UNIT TESTS: split
# ==============================================================================

class TestSplit:

    @pytest.mark.parametrize("amount, currency, context, parts, expected", [
        ("99.99", "USD", None, 4, ["25.00", "25.00", "25.00", "24.99"]),
        ("100", "CHF", Context.cash(5), 3, ["33.35", "33.35", "33.30"]),
        ("100.123", "EUR", Context.auto(), 4, ["25.031", "25.031", "25.031", "25.03"]),
        ("1", "JPY", None, 3, ["1", "0", "0"]),
    ])
    def test_split(self, amount, currency, context, parts, expected):
        assert amounts(Money.of(amount, currency, context).split(parts)) == expected

    @pytest.mark.parametrize("amount, currency, context, parts, expected", [
        ("99.99", "USD", None, 4, ["24.99", "24.99", "24.99", "24.99", "0.03"]),
        ("100", "CHF", Context.cash(5), 3, ["33.30", "33.30", "33.30", "0.10"]),
        ("100.123", "EUR", Context.auto(), 4, ["25.03", "25.03", "25.03", "25.03", "0.003"]),
    ])
    def test_split_with_remainder(self, amount, currency, context, parts, expected):
        assert amounts(Money.of(amount, currency, context).split_with_remainder(parts)) == expected

    @pytest.mark.parametrize("parts", [0, -1])
    def test_invalid_parts(self, parts):
        with pytest.raises(InvalidSplitPartsError) as e:
            Money.of(1, "USD").split(parts)
        assert str(e.value) == "Cannot split() into less than 1 part."
        with pytest.raises(InvalidSplitPartsError):
            Money.of(1, "USD").split_with_remainder(parts)

    def test_split_one_is_identity(self):
        money = Money.of("12.34", "USD")
        assert money.split(1) == [money]


# ==============================================================================
# PROPERTY-BASED TESTS
# ==============================================================================

class TestAllocationProperties:
    """
    The totals must be exact for ANY money and ANY valid ratio list, in
    every context, auto included.
    """

    @given(money=context_money_strategy(), ratios=ratios_strategy)
    @settings(max_examples=500, suppress_health_check=[HealthCheck.too_slow])
    def test_allocate_sum_equals_original(self, money: Money, ratios: list[int]):
        parts = money.allocate(*ratios)
        assert len(parts) == len(ratios)
        assert Money.total(*parts) == money
        assert all(p.context == money.context for p in parts)
        # Re-applying the context changes nothing: no stray trailing zeros in auto
        assert [str(p) for p in parts] == [str(p.to(p.context)) for p in parts]

    @given(money=context_money_strategy(), ratios=ratios_strategy)
    @settings(max_examples=500, suppress_health_check=[HealthCheck.too_slow])
    def test_allocate_with_remainder_sum_equals_original(self, money: Money, ratios: list[int]):
        parts = money.allocate_with_remainder(*ratios)
        assert len(parts) == len(ratios) + 1
        assert Money.total(*parts) == money

    @given(money=context_money_strategy(), ratios=ratios_strategy)
    @settings(max_examples=300)
    def test_allocate_parts_within_one_step_of_exact_share(self, money: Money, ratios: list[int]):
        step = Fraction(money.context.step, 10 ** money.scale)
        total = sum(ratios)
        value = money.to_rational().amount
        for part, ratio in zip(money.allocate(*ratios), ratios):
            assert abs(part.to_rational().amount - value * ratio / total) <= step

    @given(money=context_money_strategy(), n=st.integers(min_value=1, max_value=100))
    @settings(max_examples=300)
    def test_split_is_allocate_with_equal_ratios(self, money: Money, n: int):
        assert money.split(n) == money.allocate(*([1] * n))
        assert money.split_with_remainder(n) == money.allocate_with_remainder(*([1] * n))


def test_allocation_errors_share_a_base():
    for error in (EmptyAllocationRatiosError, NegativeAllocationRatioError,
                  ZeroAllocationRatiosError, InvalidSplitPartsError):
        assert issubclass(error, AllocationError)


if __name__ == "__main__":
    pytest.main([__file__, "-v", "--tb=short"])
