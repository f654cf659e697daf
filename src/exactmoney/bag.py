"""
bag.py — MoneyBag, a mutable multi-currency accumulator

Holds one exact RationalMoney per currency code and never rounds. It is the
only mutable type of the package and does no locking: share it between
threads only behind your own lock.

    >>> bag = MoneyBag()
    >>> _ = bag.add(Money.of("12.34", "EUR")).add(Money.of(1, "JPY"))
    >>> str(bag.get_money("EUR"))
    'EUR 617/50'
"""

from __future__ import annotations

from typing import Protocol, Union

from .base import AbstractMoney, resolve_currency
from .currency import Currency
from .rational import RationalMoney


class Monetary(Protocol):
    """Anything made of monies: Money, RationalMoney, MoneyBag."""

    def get_monies(self) -> list[AbstractMoney]: ...


class MoneyBag:
    def __init__(self):
        self._monies: dict[str, RationalMoney] = {}

    def get_money(self, currency: Union[Currency, str]) -> RationalMoney:
        """The amount held in `currency`, exact zero when there is none."""
        code = currency.code if isinstance(currency, Currency) else currency
        money = self._monies.get(code)
        if money is None:
            return RationalMoney.of(0, resolve_currency(currency))
        return money

    def get_monies(self) -> list[RationalMoney]:
        return list(self._monies.values())

    def add(self, monetary: Monetary) -> MoneyBag:
        for money in monetary.get_monies():
            self._monies[money.currency.code] = self.get_money(money.currency).plus(money)
        return self

    def subtract(self, monetary: Monetary) -> MoneyBag:
        for money in monetary.get_monies():
            self._monies[money.currency.code] = self.get_money(money.currency).minus(money)
        return self

    def __len__(self) -> int:
        return len(self._monies)

    def __repr__(self) -> str:
        return f"MoneyBag({', '.join(str(m) for m in self._monies.values())})"
