"""
errors.py — Exception hierarchy for exactmoney

Every failure raised by the library derives from MoneyError, and also from the
builtin that best matches its nature, so callers may catch either:

    MoneyError
    ├── RoundingNecessaryError        (ArithmeticError)
    ├── NumberFormatError             (ValueError)
    ├── MoneyMismatchError            (TypeError)
    │   ├── CurrencyMismatchError
    │   └── ContextMismatchError
    ├── InvalidStepError              (ValueError)
    ├── UnsupportedRoundingModeError  (ValueError)
    ├── NegativeFractionDigitsError   (ValueError)
    ├── UnknownCurrencyError          (LookupError)
    │   ├── UnknownCurrencyCodeError
    │   ├── NoCurrencyForCountryError
    │   └── NoSingleCurrencyForCountryError
    ├── AllocationError               (ValueError)
    │   ├── EmptyAllocationRatiosError
    │   ├── NegativeAllocationRatioError
    │   ├── ZeroAllocationRatiosError
    │   └── InvalidSplitPartsError
    └── FormattingError
        └── LocaleFormattingError

No operation leaves its operands modified when it raises.
"""

from __future__ import annotations


class MoneyError(Exception):
    """Base class for every error raised by exactmoney."""


# ==============================================================================
# NUMERIC
# ==============================================================================

class RoundingNecessaryError(MoneyError, ArithmeticError):
    """A conversion under RoundingMode.UNNECESSARY would lose information."""

    def __init__(self, message: str = "Rounding is necessary to represent the result of the operation at this scale."):
        super().__init__(message)


class NumberFormatError(MoneyError, ValueError):
    """An input could not be parsed as an exact number."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"The given value {value!r} does not represent a valid number.")


# ==============================================================================
# MISMATCHES
# ==============================================================================

class MoneyMismatchError(MoneyError, TypeError):
    """Two monies cannot be combined."""


class CurrencyMismatchError(MoneyMismatchError):
    def __init__(self, expected: object, actual: object):
        self.expected = str(expected)
        self.actual = str(actual)
        super().__init__(
            f"The monies do not share the same currency: expected {self.expected}, got {self.actual}."
        )


class ContextMismatchError(MoneyMismatchError):
    def __init__(self, method: str):
        self.method = method
        super().__init__(
            "The monies do not share the same context. "
            f"If this is intended, use {method}(money.to_rational()) instead of {method}(money)."
        )


# ==============================================================================
# CONTEXT
# ==============================================================================

class InvalidStepError(MoneyError, ValueError):
    def __init__(self, step: int):
        self.step = step
        super().__init__(f"Invalid step: {step}.")


class UnsupportedRoundingModeError(MoneyError, ValueError):
    def __init__(self, message: str = "The auto context only supports RoundingMode.UNNECESSARY"):
        super().__init__(message)


# ==============================================================================
# CURRENCY
# ==============================================================================

class NegativeFractionDigitsError(MoneyError, ValueError):
    def __init__(self):
        super().__init__("The default fraction digits cannot be less than zero.")


class UnknownCurrencyError(MoneyError, LookupError):
    """A currency lookup returned nothing usable."""


class UnknownCurrencyCodeError(UnknownCurrencyError):
    def __init__(self, code: object):
        self.code = code
        super().__init__(f"Unknown currency code: {code}")


class NoCurrencyForCountryError(UnknownCurrencyError):
    def __init__(self, country_code: str):
        self.country_code = country_code
        super().__init__(f"No currency found for country {country_code}")


class NoSingleCurrencyForCountryError(UnknownCurrencyError):
    def __init__(self, country_code: str, currency_codes: list[str]):
        self.country_code = country_code
        self.currency_codes = list(currency_codes)
        super().__init__(
            f"No single currency for country {country_code}: {', '.join(currency_codes)}"
        )


# ==============================================================================
# ALLOCATION
# ==============================================================================

class AllocationError(MoneyError, ValueError):
    """Precondition failure of an allocate/split operation."""


class EmptyAllocationRatiosError(AllocationError):
    def __init__(self, method: str = "allocate"):
        super().__init__(f"Cannot {method}() an empty list of ratios.")


class NegativeAllocationRatioError(AllocationError):
    def __init__(self, method: str = "allocate"):
        super().__init__(f"Cannot {method}() negative ratios.")


class ZeroAllocationRatiosError(AllocationError):
    def __init__(self, method: str = "allocate"):
        super().__init__(f"Cannot {method}() to zero ratios only.")


class InvalidSplitPartsError(AllocationError):
    def __init__(self, method: str = "split"):
        super().__init__(f"Cannot {method}() into less than 1 part.")


# ==============================================================================
# FORMATTING
# ==============================================================================

class FormattingError(MoneyError):
    """A formatter refused to produce an approximate representation."""


class LocaleFormattingError(FormattingError):
    pass
