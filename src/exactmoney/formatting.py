"""
formatting.py — String renderings of Money

Formatters never approximate: when an exact rendering is impossible they
raise a FormattingError instead.
"""

from __future__ import annotations

import copy
import decimal
from typing import TYPE_CHECKING, Protocol

from babel import Locale, UnknownLocaleError

from .errors import LocaleFormattingError
from .numeric import decimal_string

if TYPE_CHECKING:
    from .money import Money


class MoneyFormatter(Protocol):
    def format(self, money: Money) -> str: ...


class MoneyExactFormatter:
    """Currency code, separator, every digit of the amount: "USD 1.23"."""

    def __init__(self, separator: str = " "):
        self.separator = separator

    def format(self, money: Money) -> str:
        return f"{money.currency.code}{self.separator}{decimal_string(money.unscaled_amount, money.scale)}"


class MoneyLocaleFormatter:
    """
    CLDR currency pattern of a locale, through Babel.

    The number of fraction digits is pinned to the scale of the amount, so
    EUR 1.234 in a Custom(3) context prints as "1,234 €" in fr_FR. With
    allow_whole_number, integral amounts drop their fraction: "£234".
    """

    def __init__(self, locale: str, allow_whole_number: bool = False):
        try:
            self.locale = Locale.parse(locale)
        except (UnknownLocaleError, ValueError, TypeError) as e:
            raise LocaleFormattingError(f"Unknown locale: {locale}") from e
        self.allow_whole_number = allow_whole_number

    def format(self, money: Money) -> str:
        amount = money.amount
        if self.allow_whole_number and money.unscaled_amount % 10 ** money.scale == 0:
            scale = 0
        else:
            scale = money.scale

        digits = len(amount.as_tuple().digits)
        if digits > decimal.getcontext().prec:
            raise LocaleFormattingError(
                f"Cannot format {money} exactly: {digits} digits exceed the decimal precision."
            )

        pattern = copy.copy(self.locale.currency_formats["standard"])
        pattern.frac_prec = (scale, scale)
        return pattern.apply(
            amount,
            self.locale,
            currency=money.currency.code,
            currency_digits=False,
        )
