"""
exactmoney — Exact monetary arithmetic

Money amounts without floating-point error, explicit rounding policies, and
allocation that never loses or creates a fraction of a cent.

================================================================================
QUICK START
================================================================================

Basic usage:

    from exactmoney import Money, RoundingMode

    price = Money.of("19.99", "EUR")
    price.plus("0.01")                            # EUR 20.00
    price.divided_by(3)                           # RoundingNecessaryError
    price.divided_by(3, RoundingMode.HALF_EVEN)   # EUR 6.66

Allocation (sum ALWAYS equals the original):

    Money.of(100, "USD").allocate(30, 20, 40, 40)
    # [USD 23.08, USD 15.39, USD 30.77, USD 30.76]

    Money.of(100, "USD").allocate_with_remainder(30, 20, 40, 40)
    # [USD 23.07, USD 15.38, USD 30.76, USD 30.76, USD 0.03]

Contexts:

    from exactmoney import Context

    Money.of(100, "CHF", Context.cash(5)).split(3)
    # [CHF 33.35, CHF 33.35, CHF 33.30]

    Money.of("1.2345", "USD", Context.auto())     # USD 1.2345

Crossing contexts goes through exact rationals:

    a = Money.of("1.10", "EUR")
    b = Money.of("0.05", "EUR", Context.cash(5))
    a.plus(b)                                     # ContextMismatchError
    a.to_rational().plus(b).to(Context.default()) # EUR 1.15

================================================================================
"""

import logging

from .allocation import allocate, allocate_with_remainder, split, split_with_remainder
from .bag import Monetary, MoneyBag
from .base import AbstractMoney
from .context import Context, ContextKind
from .currency import Currency, CurrencyType, ISOCurrencyProvider
from .errors import (
    AllocationError,
    ContextMismatchError,
    CurrencyMismatchError,
    EmptyAllocationRatiosError,
    FormattingError,
    InvalidSplitPartsError,
    InvalidStepError,
    LocaleFormattingError,
    MoneyError,
    MoneyMismatchError,
    NegativeAllocationRatioError,
    NegativeFractionDigitsError,
    NoCurrencyForCountryError,
    NoSingleCurrencyForCountryError,
    NumberFormatError,
    RoundingNecessaryError,
    UnknownCurrencyCodeError,
    UnknownCurrencyError,
    UnsupportedRoundingModeError,
    ZeroAllocationRatiosError,
)
from .formatting import MoneyExactFormatter, MoneyFormatter, MoneyLocaleFormatter
from .money import Money
from .numeric import RoundingMode
from .rational import RationalMoney

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "1.0.0"
__license__ = "MIT"

__all__ = [
    # Core
    "Money",
    "RationalMoney",
    "MoneyBag",
    "Monetary",
    "AbstractMoney",
    "Currency",
    "CurrencyType",
    "ISOCurrencyProvider",
    "Context",
    "ContextKind",
    "RoundingMode",
    # Allocation
    "allocate",
    "allocate_with_remainder",
    "split",
    "split_with_remainder",
    # Formatting
    "MoneyFormatter",
    "MoneyExactFormatter",
    "MoneyLocaleFormatter",
    # Errors
    "MoneyError",
    "RoundingNecessaryError",
    "NumberFormatError",
    "MoneyMismatchError",
    "CurrencyMismatchError",
    "ContextMismatchError",
    "InvalidStepError",
    "UnsupportedRoundingModeError",
    "NegativeFractionDigitsError",
    "UnknownCurrencyError",
    "UnknownCurrencyCodeError",
    "NoCurrencyForCountryError",
    "NoSingleCurrencyForCountryError",
    "AllocationError",
    "EmptyAllocationRatiosError",
    "NegativeAllocationRatioError",
    "ZeroAllocationRatiosError",
    "InvalidSplitPartsError",
    "FormattingError",
    "LocaleFormattingError",
]
