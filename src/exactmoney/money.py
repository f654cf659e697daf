"""
money.py — Money: a decimal amount in a currency, under a context

================================================================================
INVARIANTS
================================================================================

1. The amount is held as an exact (unscaled int, scale) pair. No float and no
   decimal context precision is ever involved.
2. In a fixed-scale context the scale equals the context scale for the
   currency, and the unscaled amount is a multiple of the context step.
3. Every result goes through Context.apply(), so 2. holds for every Money
   that can exist. Nothing is rounded unless the caller passes a rounding
   mode; the default RoundingMode.UNNECESSARY raises instead.
4. Two monies combine only with the same currency and equivalent contexts.
   Anything else must go through to_rational() explicitly.

================================================================================
USAGE
================================================================================

    >>> price = Money.of("19.99", "EUR")
    >>> price.multiplied_by(3)
    Money('EUR 59.97')
    >>> price.divided_by(3, RoundingMode.HALF_EVEN)
    Money('EUR 6.66')
    >>> [str(m) for m in Money.of(100, "USD").allocate(1, 1, 1)]
    ['USD 33.34', 'USD 33.33', 'USD 33.33']

================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from fractions import Fraction
from typing import TYPE_CHECKING, Any, Optional, Union

from . import allocation
from .base import AbstractMoney, resolve_currency
from .context import Context
from .currency import Currency
from .errors import ContextMismatchError
from .numeric import (
    Number,
    RoundingMode,
    decimal_string,
    divide_toward_zero,
    to_decimal,
    to_fraction,
    to_integer,
)

if TYPE_CHECKING:
    from .rational import RationalMoney


@dataclass(frozen=True, slots=True, eq=False)
class Money(AbstractMoney):
    """
    Immutable monetary amount.

    Build instances with of(), of_minor(), zero() or create(); the raw
    constructor does not validate the scale/step invariant.
    """
    _unscaled: int
    _scale: int
    _currency: Currency
    _context: Context

    # -------------------------------------------------------------------------
    # Constructors
    # -------------------------------------------------------------------------

    @classmethod
    def create(
        cls,
        amount: Number,
        currency: Currency,
        context: Context,
        rounding_mode: RoundingMode = RoundingMode.UNNECESSARY,
    ) -> Money:
        """
        Single validating factory: applies the context to an exact value.

        Raises:
            NumberFormatError: the amount is not a number.
        """
        unscaled, scale = context.apply(to_fraction(amount), currency, rounding_mode)
        return cls(unscaled, scale, currency, context)

    @classmethod
    def of(
        cls,
        amount: Number,
        currency: Union[Currency, str, int],
        context: Optional[Context] = None,
        rounding_mode: RoundingMode = RoundingMode.UNNECESSARY,
    ) -> Money:
        """
        Money from a number in major units.

        Args:
            amount: int, str ("1.23", "3/7"), Decimal, Fraction or float.
            currency: Currency, ISO code or ISO numeric code.
            context: defaults to Context.default().
            rounding_mode: used when the amount does not fit the context.

        Raises:
            RoundingNecessaryError: rounding needed under UNNECESSARY.
            NumberFormatError: the amount is not a number.
            UnknownCurrencyError: the currency code is unknown.
        """
        return cls.create(
            to_fraction(amount),
            resolve_currency(currency),
            context if context is not None else Context.default(),
            rounding_mode,
        )

    @classmethod
    def of_minor(
        cls,
        minor_amount: Number,
        currency: Union[Currency, str, int],
        context: Optional[Context] = None,
        rounding_mode: RoundingMode = RoundingMode.UNNECESSARY,
    ) -> Money:
        """Money from an amount in minor units: of_minor(1234, "USD") is USD 12.34."""
        currency = resolve_currency(currency)
        amount = to_fraction(minor_amount) / 10 ** currency.fraction_digits
        return cls.create(
            amount,
            currency,
            context if context is not None else Context.default(),
            rounding_mode,
        )

    @classmethod
    def zero(cls, currency: Union[Currency, str, int], context: Optional[Context] = None) -> Money:
        return cls.of(0, currency, context)

    def _with_unscaled(self, unscaled: int) -> Money:
        # Same scale and context; callers guarantee the step invariant.
        return Money(unscaled, self._scale, self._currency, self._context)

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def amount(self) -> Decimal:
        return to_decimal(self._unscaled, self._scale)

    @property
    def currency(self) -> Currency:
        return self._currency

    @property
    def context(self) -> Context:
        return self._context

    @property
    def scale(self) -> int:
        return self._scale

    @property
    def unscaled_amount(self) -> int:
        """The amount without its decimal point: 123.45 -> 12345."""
        return self._unscaled

    @property
    def minor_amount(self) -> Decimal:
        """The amount in minor units of the currency: USD 1.2345 -> 123.45."""
        scale = self._scale - self._currency.fraction_digits
        if scale < 0:
            return to_decimal(self._unscaled * 10 ** -scale, 0)
        return to_decimal(self._unscaled, scale)

    def _exact(self) -> Fraction:
        return Fraction(self._unscaled, 10 ** self._scale)

    def to_rational(self) -> RationalMoney:
        from .rational import RationalMoney

        return RationalMoney(self._exact(), self._currency)

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def _check_context(self, that: AbstractMoney, method: str) -> None:
        if isinstance(that, Money) and not that._context.is_equivalent_to(self._context):
            raise ContextMismatchError(method)

    def plus(
        self,
        that: Union[AbstractMoney, Number],
        rounding_mode: RoundingMode = RoundingMode.UNNECESSARY,
    ) -> Money:
        """
        Add a number or a money of the same currency.

        Between two monies of equivalent fixed-scale contexts the unscaled
        amounts are added directly: a sum of step multiples is a step
        multiple, so no rounding can occur.

        Raises:
            CurrencyMismatchError: different currencies.
            ContextMismatchError: two Money with non-equivalent contexts.
            RoundingNecessaryError: rounding needed under UNNECESSARY.
        """
        if isinstance(that, Money):
            self._check_currency(that)
            self._check_context(that, "plus")
            if self._context.is_fixed_scale():
                return self._with_unscaled(self._unscaled + that._unscaled)
        amount = self._exact() + self._amount_of(that)
        return Money.create(amount, self._currency, self._context, rounding_mode)

    def minus(
        self,
        that: Union[AbstractMoney, Number],
        rounding_mode: RoundingMode = RoundingMode.UNNECESSARY,
    ) -> Money:
        """Counterpart of plus()."""
        if isinstance(that, Money):
            self._check_currency(that)
            self._check_context(that, "minus")
            if self._context.is_fixed_scale():
                return self._with_unscaled(self._unscaled - that._unscaled)
        amount = self._exact() - self._amount_of(that)
        return Money.create(amount, self._currency, self._context, rounding_mode)

    def multiplied_by(self, that: Number, rounding_mode: RoundingMode = RoundingMode.UNNECESSARY) -> Money:
        amount = self._exact() * to_fraction(that)
        return Money.create(amount, self._currency, self._context, rounding_mode)

    def divided_by(self, that: Number, rounding_mode: RoundingMode = RoundingMode.UNNECESSARY) -> Money:
        """
        Raises:
            ZeroDivisionError: the divisor is zero.
        """
        divisor = to_fraction(that)
        if divisor == 0:
            raise ZeroDivisionError("Division by zero")
        amount = self._exact() / divisor
        return Money.create(amount, self._currency, self._context, rounding_mode)

    def quotient(self, divisor: Number) -> Money:
        """
        Integer division at step granularity, truncated toward zero.

        USD 10.00 quotient 3 is USD 3.33. The scale and context are kept.

        Raises:
            RoundingNecessaryError: the divisor is not an integer.
            ZeroDivisionError: the divisor is zero.
        """
        return self.quotient_and_remainder(divisor)[0]

    def quotient_and_remainder(self, divisor: Number) -> tuple[Money, Money]:
        """
        Integer division returning (quotient, remainder) with
        quotient * divisor + remainder == self exactly. The remainder has
        the sign of self.
        """
        divisor = to_integer(divisor)
        step = self._context.step
        quotient, remainder = divide_toward_zero(self._unscaled // step, divisor)
        return self._with_unscaled(quotient * step), self._with_unscaled(remainder * step)

    def abs(self) -> Money:
        return self._with_unscaled(abs(self._unscaled))

    def negated(self) -> Money:
        return self._with_unscaled(-self._unscaled)

    # -------------------------------------------------------------------------
    # Allocation
    # -------------------------------------------------------------------------

    def allocate(self, *ratios: int) -> list[Money]:
        """
        Split according to integer ratios; the parts add up to self exactly.

        Money.of(100, "USD").allocate(30, 20, 40, 40)
        -> [23.08, 15.39, 30.77, 30.76]
        """
        return allocation.allocate(self, ratios)

    def allocate_with_remainder(self, *ratios: int) -> list[Money]:
        """Exact proportional parts, with the leftover appended as last element."""
        return allocation.allocate_with_remainder(self, ratios)

    def split(self, parts: int) -> list[Money]:
        return allocation.split(self, parts)

    def split_with_remainder(self, parts: int) -> list[Money]:
        return allocation.split_with_remainder(self, parts)

    # -------------------------------------------------------------------------
    # Aggregates
    # -------------------------------------------------------------------------

    @staticmethod
    def min(money: Money, *monies: Money) -> Money:
        """The smallest money; the first one wins ties."""
        result = money
        for candidate in monies:
            if candidate.is_less_than(result):
                result = candidate
        return result

    @staticmethod
    def max(money: Money, *monies: Money) -> Money:
        """The largest money; the first one wins ties."""
        result = money
        for candidate in monies:
            if candidate.is_greater_than(result):
                result = candidate
        return result

    @staticmethod
    def total(money: Money, *monies: Money) -> Money:
        """Sum through plus(): currencies and contexts must all match."""
        result = money
        for other in monies:
            result = result.plus(other)
        return result

    # -------------------------------------------------------------------------
    # Formatting and serialization
    # -------------------------------------------------------------------------

    def format_to_locale(self, locale: str, allow_whole_number: bool = False) -> str:
        """Locale-aware rendering, e.g. "$1.23" for en_US."""
        from .formatting import MoneyLocaleFormatter

        return MoneyLocaleFormatter(locale, allow_whole_number).format(self)

    def format_exact(self, separator: str = " ") -> str:
        from .formatting import MoneyExactFormatter

        return MoneyExactFormatter(separator).format(self)

    def to_dict(self) -> dict[str, Any]:
        """
        {"amount": "3.50", "currency": "EUR", "context": {"type": "default"}}

        The amount is a string: never serialize money as a float.
        """
        return {
            "amount": decimal_string(self._unscaled, self._scale),
            "currency": self._currency.code,
            "context": self._context.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Money:
        context = Context.from_dict(data.get("context", {"type": "default"}))
        return cls.of(data["amount"], data["currency"], context)

    def __str__(self) -> str:
        return f"{self._currency.code} {decimal_string(self._unscaled, self._scale)}"

    def __repr__(self) -> str:
        return f"Money({str(self)!r})"

    # -------------------------------------------------------------------------
    # Operators
    # -------------------------------------------------------------------------

    def __add__(self, other):
        if not isinstance(other, (AbstractMoney, int, str, Decimal, Fraction, float)):
            return NotImplemented
        return self.plus(other)

    def __radd__(self, other):
        # sum() starts from 0
        if isinstance(other, int) and other == 0:
            return self
        return self.__add__(other)

    def __sub__(self, other):
        if not isinstance(other, (AbstractMoney, int, str, Decimal, Fraction, float)):
            return NotImplemented
        return self.minus(other)

    def __mul__(self, other):
        if not isinstance(other, (int, Decimal, Fraction, float)):
            return NotImplemented
        return self.multiplied_by(other)

    __rmul__ = __mul__

    def __truediv__(self, other):
        if not isinstance(other, (int, Decimal, Fraction, float)):
            return NotImplemented
        return self.divided_by(other)

    def __neg__(self) -> Money:
        return self.negated()

    def __abs__(self) -> Money:
        return self.abs()
