"""
test_money_bag.py — Test suite for MoneyBag
"""

from fractions import Fraction

import pytest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from exactmoney import Context, Currency, Money, MoneyBag, RationalMoney


def contents(bag):
    return {m.currency.code: m.amount for m in bag.get_monies()}


class TestMoneyBag:

    def test_empty_bag(self):
        bag = MoneyBag()
        assert contents(bag) == {}
        for code in ["USD", "EUR", "GBP", "JPY"]:
            money = bag.get_money(code)
            assert isinstance(money, RationalMoney)
            assert money.is_zero()

    def test_add_subtract(self):
        bag = MoneyBag()

        bag.add(Money.of("123", "EUR"))
        assert contents(bag) == {"EUR": Fraction("123")}

        bag.add(Money.of("234.99", "EUR"))
        assert contents(bag) == {"EUR": Fraction("357.99")}

        bag.add(Money.of(3, "JPY"))
        assert contents(bag) == {"EUR": Fraction("357.99"), "JPY": Fraction(3)}

        bag.add(Money.of("1.1234", "JPY", Context.auto()))
        assert contents(bag) == {"EUR": Fraction("357.99"), "JPY": Fraction("4.1234")}

        bag.subtract(Money.of("3.589950", "EUR", Context.auto()))
        assert contents(bag) == {"EUR": Fraction("354.40005"), "JPY": Fraction("4.1234")}

        bag.add(RationalMoney.of("1/3", "EUR"))
        assert contents(bag) == {"EUR": Fraction(21284003, 60000), "JPY": Fraction("4.1234")}
        assert str(bag.get_money("EUR")) == "EUR 21284003/60000"

        btc = Currency("BTC", 0, "Bitcoin", 8)
        bag.add(Money.of("0.1234", btc))
        assert contents(bag)["BTC"] == Fraction("0.1234")
        assert bag.get_money(btc).currency is btc

    def test_add_returns_bag(self):
        bag = MoneyBag()
        assert bag.add(Money.of(1, "USD")).subtract(Money.of(2, "USD")) is bag
        assert str(bag.get_money(Currency.of("USD"))) == "USD -1"

    def test_add_bag(self):
        a = MoneyBag().add(Money.of(1, "USD")).add(Money.of(2, "EUR"))
        b = MoneyBag().add(Money.of(3, "USD"))
        b.add(a)
        assert contents(b) == {"USD": Fraction(4), "EUR": Fraction(2)}
        b.subtract(a)
        assert contents(b) == {"USD": Fraction(3), "EUR": Fraction(0)}

    def test_never_rounds(self):
        bag = MoneyBag()
        for _ in range(3):
            bag.add(RationalMoney.of("1/3", "USD"))
        assert bag.get_money("USD").to(Context.default()) == Money.of(1, "USD")

    def test_len(self):
        bag = MoneyBag().add(Money.of(1, "USD")).add(Money.of(1, "EUR")).add(Money.of(1, "USD"))
        assert len(bag) == 2


if __name__ == "__main__":
    pytest.main([__file__, "-v", "--tb=short"])
