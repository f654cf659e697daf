"""
currency.py — Currency value type and the ISO 4217 provider

================================================================================
IDENTITY
================================================================================

A currency is identified by its alphabetic code only. Numeric codes are
carried as data but never take part in equality: ISO reuses them across
currency changes (532 was ANG and is now XCG).

ISO currencies are obtained through ISOCurrencyProvider, a process-wide
read-only singleton built on first use, so Currency.of("EUR") always returns
the very same object. Application-defined currencies are created directly:

    btc = Currency("BTC", 0, "Bitcoin", 8)

================================================================================
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from . import _iso_data
from .errors import (
    NegativeFractionDigitsError,
    NoCurrencyForCountryError,
    NoSingleCurrencyForCountryError,
    UnknownCurrencyCodeError,
)


logger = logging.getLogger(__name__)


class CurrencyType(Enum):
    ISO_CURRENT = "iso_current"        # in circulation
    ISO_HISTORICAL = "iso_historical"  # withdrawn
    CUSTOM = "custom"                  # defined by the application


@dataclass(frozen=True, eq=False)
class Currency:
    """
    Immutable currency description.

    Attributes:
        code: alphabetic code, "EUR". Must be unique within an application.
        numeric_code: ISO numeric code without leading zeros, 0 if none.
        name: English name.
        fraction_digits: default scale of amounts in this currency (EUR=2, JPY=0).
        currency_type: provenance of the definition.
    """
    code: str
    numeric_code: int
    name: str
    fraction_digits: int
    currency_type: CurrencyType = CurrencyType.CUSTOM

    def __post_init__(self):
        if self.fraction_digits < 0:
            raise NegativeFractionDigitsError()

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    @classmethod
    def of(cls, code: str) -> Currency:
        """ISO currency for a 3-letter code."""
        return ISOCurrencyProvider.get_instance().get_currency(code)

    @classmethod
    def of_numeric_code(cls, numeric_code: int) -> Currency:
        """Current ISO currency for a numeric code."""
        return ISOCurrencyProvider.get_instance().get_currency_by_numeric_code(numeric_code)

    @classmethod
    def of_country(cls, country_code: str) -> Currency:
        """The single current currency of a 2-letter ISO 3166-1 country."""
        return ISOCurrencyProvider.get_instance().get_currency_for_country(country_code)

    # -------------------------------------------------------------------------
    # Equality
    # -------------------------------------------------------------------------

    def is_equal_to(self, currency: Currency | str) -> bool:
        code = currency.code if isinstance(currency, Currency) else currency
        return code == self.code

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Currency):
            return NotImplemented
        return self.code == other.code

    def __hash__(self) -> int:
        return hash(self.code)

    def __str__(self) -> str:
        return self.code

    def __repr__(self) -> str:
        return f"Currency({self.code!r})"


# ==============================================================================
# ISO 4217 PROVIDER
# ==============================================================================

class ISOCurrencyProvider:
    """
    Lazily built, read-only registry of ISO 4217 currencies.

    Obtain it with get_instance(); there is no registration API. Currency
    objects are created on first request and cached, so lookups of the same
    code return the same instance.
    """

    _instance: Optional[ISOCurrencyProvider] = None
    _instance_lock = threading.Lock()

    def __init__(self):
        self._data: dict[str, tuple[int, str, int, CurrencyType]] = {}
        for code, (numeric, name, digits) in _iso_data.CURRENT.items():
            self._data[code] = (numeric, name, digits, CurrencyType.ISO_CURRENT)
        for code, (numeric, name, digits) in _iso_data.HISTORICAL.items():
            self._data[code] = (numeric, name, digits, CurrencyType.ISO_HISTORICAL)

        self._currencies: dict[str, Currency] = {}
        self._lock = threading.Lock()
        self._numeric_to_code: Optional[dict[int, str]] = None
        self._complete = False

        logger.debug("Loaded %d ISO 4217 currency definitions", len(self._data))

    @classmethod
    def get_instance(cls) -> ISOCurrencyProvider:
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    def get_currency(self, code: str) -> Currency:
        """
        Raises:
            UnknownCurrencyCodeError: if the code is not an ISO currency.
        """
        currency = self._currencies.get(code)
        if currency is not None:
            return currency

        data = self._data.get(code)
        if data is None:
            raise UnknownCurrencyCodeError(code)

        numeric, name, digits, currency_type = data
        with self._lock:
            return self._currencies.setdefault(
                code, Currency(code, numeric, name, digits, currency_type)
            )

    def get_currency_by_numeric_code(self, numeric_code: int) -> Currency:
        """
        Only current currencies are reachable by numeric code, since
        withdrawn ones may share it with their successor.
        """
        if self._numeric_to_code is None:
            self._numeric_to_code = {
                numeric: code for code, (numeric, _, _) in _iso_data.CURRENT.items()
            }
        code = self._numeric_to_code.get(numeric_code)
        if code is None:
            raise UnknownCurrencyCodeError(numeric_code)
        return self.get_currency(code)

    def get_available_currencies(self) -> dict[str, Currency]:
        """Every known currency, current and historical, sorted by code."""
        if not self._complete:
            for code in self._data:
                self.get_currency(code)
            self._complete = True
        with self._lock:
            return dict(sorted(self._currencies.items()))

    def get_currency_for_country(self, country_code: str) -> Currency:
        """
        Raises:
            NoCurrencyForCountryError: unknown country, or no current currency.
            NoSingleCurrencyForCountryError: more than one current currency.
        """
        currencies = self.get_currencies_for_country(country_code)
        if len(currencies) == 1:
            return currencies[0]
        if not currencies:
            raise NoCurrencyForCountryError(country_code)
        raise NoSingleCurrencyForCountryError(country_code, [c.code for c in currencies])

    def get_currencies_for_country(self, country_code: str) -> list[Currency]:
        return [self.get_currency(code) for code in _iso_data.COUNTRIES.get(country_code, [])]

    def get_historical_currencies_for_country(self, country_code: str) -> list[Currency]:
        return [
            self.get_currency(code)
            for code in _iso_data.HISTORICAL_COUNTRIES.get(country_code, [])
        ]
