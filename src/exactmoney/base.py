"""
base.py — Behaviour shared by Money and RationalMoney

Subclasses expose `currency` and `_exact()`, the amount as an exact Fraction.
Everything here (sign tests, comparisons, conversion to another context) is
derived from those two.
"""

from __future__ import annotations

from fractions import Fraction
from typing import TYPE_CHECKING, Union

from .currency import Currency
from .errors import CurrencyMismatchError
from .numeric import Number, RoundingMode, to_fraction

if TYPE_CHECKING:
    from .context import Context
    from .money import Money


def resolve_currency(currency: Union[Currency, str, int]) -> Currency:
    """Accept a Currency, an ISO alphabetic code or an ISO numeric code."""
    if isinstance(currency, Currency):
        return currency
    if isinstance(currency, int) and not isinstance(currency, bool):
        return Currency.of_numeric_code(currency)
    return Currency.of(currency)


class AbstractMoney:
    __slots__ = ()

    currency: Currency

    def _exact(self) -> Fraction:
        raise NotImplementedError

    def to(self, context: Context, rounding_mode: RoundingMode = RoundingMode.UNNECESSARY) -> Money:
        """Convert to a Money in the given context."""
        from .money import Money

        return Money.create(self._exact(), self.currency, context, rounding_mode)

    def get_monies(self) -> list[AbstractMoney]:
        return [self]

    # -------------------------------------------------------------------------
    # Sign
    # -------------------------------------------------------------------------

    @property
    def sign(self) -> int:
        amount = self._exact()
        return (amount > 0) - (amount < 0)

    def is_zero(self) -> bool:
        return self.sign == 0

    def is_positive(self) -> bool:
        return self.sign > 0

    def is_positive_or_zero(self) -> bool:
        return self.sign >= 0

    def is_negative(self) -> bool:
        return self.sign < 0

    def is_negative_or_zero(self) -> bool:
        return self.sign <= 0

    # -------------------------------------------------------------------------
    # Comparison
    # -------------------------------------------------------------------------

    def _check_currency(self, that: AbstractMoney) -> None:
        if not self.currency.is_equal_to(that.currency):
            raise CurrencyMismatchError(self.currency, that.currency)

    def _amount_of(self, that: Union[AbstractMoney, Number]) -> Fraction:
        """Exact amount of an operand, checking the currency of monies."""
        if isinstance(that, AbstractMoney):
            self._check_currency(that)
            return that._exact()
        return to_fraction(that)

    def compare_to(self, that: Union[AbstractMoney, Number]) -> int:
        """-1, 0 or 1. Contexts are irrelevant, only exact values count."""
        mine, theirs = self._exact(), self._amount_of(that)
        return (mine > theirs) - (mine < theirs)

    def is_equal_to(self, that: Union[AbstractMoney, Number]) -> bool:
        return self.compare_to(that) == 0

    def is_less_than(self, that: Union[AbstractMoney, Number]) -> bool:
        return self.compare_to(that) < 0

    def is_less_than_or_equal_to(self, that: Union[AbstractMoney, Number]) -> bool:
        return self.compare_to(that) <= 0

    def is_greater_than(self, that: Union[AbstractMoney, Number]) -> bool:
        return self.compare_to(that) > 0

    def is_greater_than_or_equal_to(self, that: Union[AbstractMoney, Number]) -> bool:
        return self.compare_to(that) >= 0

    def is_amount_and_currency_equal_to(self, that: AbstractMoney) -> bool:
        """Like is_equal_to(), but a currency mismatch yields False."""
        return self.currency.is_equal_to(that.currency) and self._exact() == that._exact()

    # Python protocol. == never raises; ordering does on currency mismatch.

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AbstractMoney):
            return NotImplemented
        return self.is_amount_and_currency_equal_to(other)

    def __hash__(self) -> int:
        return hash((self.currency.code, self._exact()))

    def __lt__(self, other):
        return self.is_less_than(other)

    def __le__(self, other):
        return self.is_less_than_or_equal_to(other)

    def __gt__(self, other):
        return self.is_greater_than(other)

    def __ge__(self, other):
        return self.is_greater_than_or_equal_to(other)
