"""
test_context.py — Test suite for Context and the rounding engine
"""

from decimal import Decimal
from fractions import Fraction

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from exactmoney import (
    Context,
    ContextKind,
    Currency,
    InvalidStepError,
    RoundingMode,
    RoundingNecessaryError,
    UnsupportedRoundingModeError,
)
from exactmoney.numeric import round_to_integer


USD = Currency.of("USD")
CHF = Currency.of("CHF")
JPY = Currency.of("JPY")


# ==============================================================================
# TEST HELPERS
# ==============================================================================

context_strategy = st.one_of(
    st.just(Context.default()),
    st.just(Context.auto()),
    st.sampled_from([1, 2, 5, 10, 20, 25, 50, 100]).map(Context.cash),
    st.sampled_from([(2, 1), (2, 5), (2, 50), (4, 16), (0, 1), (0, 1000)]).map(
        lambda p: Context.custom(*p)
    ),
)


# ==============================================================================
# UNIT TESTS: Rounding modes
# ==============================================================================

class TestRoundingModes:
    """Reference table: each mode applied to the same ten values."""

    VALUES = ["5.5", "2.5", "1.6", "1.1", "1.0", "-1.0", "-1.1", "-1.6", "-2.5", "-5.5"]

    @pytest.mark.parametrize("mode, expected", [
        (RoundingMode.UP, [6, 3, 2, 2, 1, -1, -2, -2, -3, -6]),
        (RoundingMode.DOWN, [5, 2, 1, 1, 1, -1, -1, -1, -2, -5]),
        (RoundingMode.CEILING, [6, 3, 2, 2, 1, -1, -1, -1, -2, -5]),
        (RoundingMode.FLOOR, [5, 2, 1, 1, 1, -1, -2, -2, -3, -6]),
        (RoundingMode.HALF_UP, [6, 3, 2, 1, 1, -1, -1, -2, -3, -6]),
        (RoundingMode.HALF_DOWN, [5, 2, 2, 1, 1, -1, -1, -2, -2, -5]),
        (RoundingMode.HALF_CEILING, [6, 3, 2, 1, 1, -1, -1, -2, -2, -5]),
        (RoundingMode.HALF_FLOOR, [5, 2, 2, 1, 1, -1, -1, -2, -3, -6]),
        (RoundingMode.HALF_EVEN, [6, 2, 2, 1, 1, -1, -1, -2, -2, -6]),
    ])
    def test_round_to_integer(self, mode, expected):
        assert [round_to_integer(Fraction(v), mode) for v in self.VALUES] == expected

    def test_unnecessary(self):
        assert round_to_integer(Fraction("-1.0"), RoundingMode.UNNECESSARY) == -1
        with pytest.raises(RoundingNecessaryError):
            round_to_integer(Fraction("1.1"), RoundingMode.UNNECESSARY)

    def test_rounding_necessary_is_arithmetic_error(self):
        with pytest.raises(ArithmeticError):
            round_to_integer(Fraction(1, 3), RoundingMode.UNNECESSARY)


# ==============================================================================
# UNIT TESTS: apply_to
# ==============================================================================

class TestApplyTo:

    @pytest.mark.parametrize("context, currency, amount, mode, expected", [
        (Context.default(), USD, "1", RoundingMode.UNNECESSARY, "1.00"),
        (Context.default(), USD, "1.234", RoundingMode.HALF_UP, "1.23"),
        (Context.default(), JPY, "1.5", RoundingMode.HALF_EVEN, "2"),
        (Context.cash(5), CHF, "1.02", RoundingMode.HALF_UP, "1.00"),
        (Context.cash(5), CHF, "1.03", RoundingMode.HALF_UP, "1.05"),
        (Context.cash(5), CHF, "1.025", RoundingMode.HALF_DOWN, "1.00"),
        (Context.cash(100), CHF, "1.5", RoundingMode.HALF_EVEN, "2.00"),
        (Context.custom(2, 5), CHF, "1.075", RoundingMode.HALF_DOWN, "1.05"),
        (Context.custom(2, 5), CHF, "1.075", RoundingMode.HALF_UP, "1.10"),
        (Context.custom(4, 10000), USD, "-1.5", RoundingMode.UP, "-2.0000"),
        (Context.custom(4, 10000), USD, "-1.5", RoundingMode.DOWN, "-1.0000"),
        (Context.custom(0, 1000), USD, "1499", RoundingMode.HALF_UP, "1000"),
        (Context.custom(8), USD, "3/8", RoundingMode.UNNECESSARY, "0.37500000"),
        (Context.auto(), USD, "1.500", RoundingMode.UNNECESSARY, "1.5"),
        (Context.auto(), USD, "100", RoundingMode.UNNECESSARY, "100"),
        (Context.auto(), USD, "1/8", RoundingMode.UNNECESSARY, "0.125"),
    ])
    def test_apply_to(self, context, currency, amount, mode, expected):
        result = context.apply_to(amount, currency, mode)
        assert isinstance(result, Decimal)
        assert str(result) == expected

    def test_rounding_necessary(self):
        with pytest.raises(RoundingNecessaryError):
            Context.cash(5).apply_to("1.02", CHF)

    def test_auto_rejects_non_terminating_decimal(self):
        with pytest.raises(RoundingNecessaryError):
            Context.auto().apply_to("1/3", USD)

    @pytest.mark.parametrize("mode", [m for m in RoundingMode if m is not RoundingMode.UNNECESSARY])
    def test_auto_rejects_rounding_modes(self, mode):
        with pytest.raises(UnsupportedRoundingModeError):
            Context.auto().apply_to("1", USD, mode)


# ==============================================================================
# UNIT TESTS: Steps
# ==============================================================================

class TestSteps:

    @pytest.mark.parametrize("step", [1, 2, 4, 5, 10, 20, 25, 50, 100, 1000, 1024])
    def test_valid_cash_step(self, step):
        assert Context.cash(step).step == step

    @pytest.mark.parametrize("step", [0, -5, 3, 6, 14, 15])
    def test_invalid_cash_step(self, step):
        with pytest.raises(InvalidStepError) as e:
            Context.cash(step)
        assert e.value.step == step
        assert str(e.value) == f"Invalid step: {step}."

    @pytest.mark.parametrize("scale, step", [
        (2, 1), (2, 2), (2, 5), (2, 50), (2, 100), (2, 200), (4, 16), (4, 10000), (0, 1000),
    ])
    def test_valid_custom_step(self, scale, step):
        context = Context.custom(scale, step)
        assert (context.scale, context.step) == (scale, step)

    @pytest.mark.parametrize("scale, step", [
        (2, 0), (2, -1), (2, 3), (2, 75), (2, 150), (3, 16), (1, 3),
    ])
    def test_invalid_custom_step(self, scale, step):
        with pytest.raises(InvalidStepError):
            Context.custom(scale, step)

    def test_invalid_step_is_value_error(self):
        with pytest.raises(ValueError):
            Context.custom(2, 75)

    @pytest.mark.parametrize("make", [
        lambda: Context.custom(2, 5.0),
        lambda: Context.custom(2.0),
        lambda: Context.cash(5.0),
        lambda: Context.cash("5"),
        lambda: Context(ContextKind.CUSTOM, scale=Decimal("2")),
    ])
    def test_non_integer_step_or_scale(self, make):
        with pytest.raises(TypeError):
            make()

    def test_raw_construction_is_validated(self):
        with pytest.raises(ValueError):
            Context(ContextKind.DEFAULT, step=5)
        with pytest.raises(ValueError):
            Context(ContextKind.CUSTOM)


# ==============================================================================
# UNIT TESTS: Equivalence and serialization
# ==============================================================================

class TestEquivalence:

    @pytest.mark.parametrize("a, b, expected", [
        (Context.default(), Context.default(), True),
        (Context.auto(), Context.auto(), True),
        (Context.cash(5), Context.cash(5), True),
        (Context.cash(5), Context.cash(10), False),
        (Context.custom(2), Context.custom(2, 1), True),
        (Context.custom(2, 5), Context.custom(2, 5), True),
        (Context.custom(2, 5), Context.custom(3, 5), False),
        (Context.custom(2, 5), Context.cash(5), False),
        (Context.default(), Context.custom(2), False),
        (Context.default(), Context.cash(1), False),
        (Context.default(), Context.auto(), False),
    ])
    def test_is_equivalent_to(self, a, b, expected):
        assert a.is_equivalent_to(b) is expected
        assert b.is_equivalent_to(a) is expected

    @pytest.mark.parametrize("context, fixed", [
        (Context.default(), True),
        (Context.cash(5), True),
        (Context.custom(3), True),
        (Context.auto(), False),
    ])
    def test_is_fixed_scale(self, context, fixed):
        assert context.is_fixed_scale() is fixed

    @given(a=context_strategy, b=context_strategy)
    @settings(max_examples=200)
    def test_equivalence_is_reflexive_and_symmetric(self, a, b):
        assert a.is_equivalent_to(a)
        assert a.is_equivalent_to(b) == b.is_equivalent_to(a)


class TestSerialization:

    @pytest.mark.parametrize("context, data", [
        (Context.default(), {"type": "default"}),
        (Context.cash(5), {"type": "cash", "step": 5}),
        (Context.custom(8), {"type": "custom", "scale": 8, "step": 1}),
        (Context.auto(), {"type": "auto"}),
    ])
    def test_to_dict(self, context, data):
        assert context.to_dict() == data
        assert Context.from_dict(data) == context

    def test_from_dict_invalid(self):
        with pytest.raises(ValueError):
            Context.from_dict({"type": "weird"})
        with pytest.raises(InvalidStepError):
            Context.from_dict({"type": "cash", "step": 3})

    def test_repr(self):
        assert repr(Context.custom(2, 5)) == "Context.custom(2, 5)"
        assert repr(Context.auto()) == "Context.auto()"


if __name__ == "__main__":
    pytest.main([__file__, "-v", "--tb=short"])
