"""
rational.py — RationalMoney, the lossless intermediate form

A RationalMoney is an exact fraction in a currency. Its arithmetic never
rounds and never involves a Context; to() is the only way back to Money.

    >>> total = Money.of("10.00", "EUR").to_rational().divided_by(3)
    >>> str(total)
    'EUR 10/3'
    >>> str(total.multiplied_by(3).to(Context.default()))
    'EUR 10.00'
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from fractions import Fraction
from typing import Any, Union

from .base import AbstractMoney, resolve_currency
from .currency import Currency
from .numeric import Number, to_fraction


@dataclass(frozen=True, slots=True, eq=False)
class RationalMoney(AbstractMoney):
    _amount: Fraction
    _currency: Currency

    @classmethod
    def of(cls, amount: Number, currency: Union[Currency, str, int]) -> RationalMoney:
        return cls(to_fraction(amount), resolve_currency(currency))

    @property
    def amount(self) -> Fraction:
        return self._amount

    @property
    def currency(self) -> Currency:
        return self._currency

    def _exact(self) -> Fraction:
        return self._amount

    def to_rational(self) -> RationalMoney:
        return self

    def plus(self, that: Union[AbstractMoney, Number]) -> RationalMoney:
        """
        Raises:
            CurrencyMismatchError: `that` is a money in another currency.
        """
        return RationalMoney(self._amount + self._amount_of(that), self._currency)

    def minus(self, that: Union[AbstractMoney, Number]) -> RationalMoney:
        return RationalMoney(self._amount - self._amount_of(that), self._currency)

    def multiplied_by(self, that: Number) -> RationalMoney:
        return RationalMoney(self._amount * to_fraction(that), self._currency)

    def divided_by(self, that: Number) -> RationalMoney:
        divisor = to_fraction(that)
        if divisor == 0:
            raise ZeroDivisionError("Division by zero")
        return RationalMoney(self._amount / divisor, self._currency)

    def simplified(self) -> RationalMoney:
        # Fraction keeps itself in lowest terms already.
        return self

    def abs(self) -> RationalMoney:
        return RationalMoney(abs(self._amount), self._currency)

    def negated(self) -> RationalMoney:
        return RationalMoney(-self._amount, self._currency)

    def to_dict(self) -> dict[str, Any]:
        return {"amount": str(self._amount), "currency": self._currency.code}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RationalMoney:
        return cls.of(data["amount"], data["currency"])

    def __str__(self) -> str:
        return f"{self._currency.code} {self._amount}"

    def __repr__(self) -> str:
        return f"RationalMoney({str(self)!r})"

    def __add__(self, other):
        if not isinstance(other, (AbstractMoney, int, str, Decimal, Fraction, float)):
            return NotImplemented
        return self.plus(other)

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

    def __neg__(self) -> RationalMoney:
        return self.negated()
