"""
context.py — Scale and step policies applied to every Money result

================================================================================
VARIANTS
================================================================================

    Context.default()          scale = currency fraction digits, step 1
    Context.cash(step)         scale = currency fraction digits, step in minor
                               units (CHF cash: step 5 -> multiples of 0.05)
    Context.custom(scale, s)   explicit scale, optional step
    Context.auto()             no fixed scale: the exact decimal value,
                               trailing fractional zeros stripped

The variants form a closed set tagged by ContextKind; every policy method
matches on the tag.

================================================================================
STEP RULES
================================================================================

- cash:   step >= 1 and step == 2**a * 5**b
- custom: step >= 1 and (10**scale % step == 0 or step % 10**scale == 0)

Both guarantee that multiples of the step stay representable at the scale.
"""

from __future__ import annotations

import operator
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Any, Optional

from .currency import Currency
from .errors import InvalidStepError, UnsupportedRoundingModeError
from .numeric import (
    Number,
    RoundingMode,
    round_to_scale,
    strip_trailing_zeros,
    to_decimal,
    to_exact_scale,
    to_fraction,
)


class ContextKind(Enum):
    DEFAULT = "default"
    CASH = "cash"
    CUSTOM = "custom"
    AUTO = "auto"


def _is_valid_cash_step(step: int) -> bool:
    if step < 1:
        return False
    while step % 2 == 0:
        step //= 2
    while step % 5 == 0:
        step //= 5
    return step == 1


def _is_valid_custom_step(scale: int, step: int) -> bool:
    if step < 1:
        return False
    power = 10 ** scale
    return power % step == 0 or step % power == 0


@dataclass(frozen=True)
class Context:
    """
    Immutable rounding policy.

    Use the classmethod constructors rather than the raw fields. Two contexts
    may be combined in Money arithmetic only if is_equivalent_to() holds.
    """
    kind: ContextKind
    scale: Optional[int] = None
    step: int = 1

    def __post_init__(self):
        # steps and scales are integers; Context.custom(2, 5.0) fails here
        object.__setattr__(self, "step", operator.index(self.step))
        if self.scale is not None:
            object.__setattr__(self, "scale", operator.index(self.scale))

        match self.kind:
            case ContextKind.DEFAULT | ContextKind.AUTO:
                if self.scale is not None or self.step != 1:
                    raise ValueError(f"The {self.kind.value} context takes neither scale nor step")
            case ContextKind.CASH:
                if self.scale is not None:
                    raise ValueError("The cash context uses the currency scale")
                if not _is_valid_cash_step(self.step):
                    raise InvalidStepError(self.step)
            case ContextKind.CUSTOM:
                if self.scale is None or self.scale < 0:
                    raise ValueError(f"Invalid scale for a custom context: {self.scale}")
                if not _is_valid_custom_step(self.scale, self.step):
                    raise InvalidStepError(self.step)

    # -------------------------------------------------------------------------
    # Constructors
    # -------------------------------------------------------------------------

    @classmethod
    def default(cls) -> Context:
        return cls(ContextKind.DEFAULT)

    @classmethod
    def cash(cls, step: int) -> Context:
        return cls(ContextKind.CASH, step=step)

    @classmethod
    def custom(cls, scale: int, step: int = 1) -> Context:
        return cls(ContextKind.CUSTOM, scale=scale, step=step)

    @classmethod
    def auto(cls) -> Context:
        return cls(ContextKind.AUTO)

    # -------------------------------------------------------------------------
    # Policy
    # -------------------------------------------------------------------------

    def scale_for(self, currency: Currency) -> Optional[int]:
        """Scale of amounts in this context, None when it is not fixed."""
        match self.kind:
            case ContextKind.DEFAULT | ContextKind.CASH:
                return currency.fraction_digits
            case ContextKind.CUSTOM:
                return self.scale
            case ContextKind.AUTO:
                return None

    def apply(self, value: Fraction, currency: Currency,
              rounding_mode: RoundingMode = RoundingMode.UNNECESSARY) -> tuple[int, int]:
        """
        Apply the policy to an exact value.

        Returns:
            (unscaled, scale) of the resulting decimal.

        Raises:
            RoundingNecessaryError: the value needs rounding under UNNECESSARY.
            UnsupportedRoundingModeError: auto context with a rounding mode.
        """
        match self.kind:
            case ContextKind.AUTO:
                if rounding_mode is not RoundingMode.UNNECESSARY:
                    raise UnsupportedRoundingModeError()
                return strip_trailing_zeros(*to_exact_scale(value))
            case _:
                scale = self.scale_for(currency)
                if self.step == 1:
                    return round_to_scale(value, scale, rounding_mode), scale
                steps = round_to_scale(value / self.step, scale, rounding_mode)
                return steps * self.step, scale

    def apply_to(self, amount: Number, currency: Currency,
                 rounding_mode: RoundingMode = RoundingMode.UNNECESSARY) -> Decimal:
        """Public form of apply(): accepts any number, returns a Decimal."""
        return to_decimal(*self.apply(to_fraction(amount), currency, rounding_mode))

    def is_fixed_scale(self) -> bool:
        match self.kind:
            case ContextKind.AUTO:
                return False
            case _:
                return True

    def is_equivalent_to(self, other: Context) -> bool:
        """Same variant and same parameters."""
        if not isinstance(other, Context):
            return False
        match self.kind:
            case ContextKind.DEFAULT | ContextKind.AUTO:
                return other.kind is self.kind
            case ContextKind.CASH:
                return other.kind is ContextKind.CASH and other.step == self.step
            case ContextKind.CUSTOM:
                return (
                    other.kind is ContextKind.CUSTOM
                    and other.scale == self.scale
                    and other.step == self.step
                )

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        match self.kind:
            case ContextKind.CASH:
                return {"type": "cash", "step": self.step}
            case ContextKind.CUSTOM:
                return {"type": "custom", "scale": self.scale, "step": self.step}
            case _:
                return {"type": self.kind.value}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Context:
        try:
            kind = ContextKind(data["type"])
        except (KeyError, ValueError):
            raise ValueError(f"Invalid context data: {data!r}") from None

        match kind:
            case ContextKind.CASH:
                return cls.cash(int(data["step"]))
            case ContextKind.CUSTOM:
                return cls.custom(int(data["scale"]), int(data.get("step", 1)))
            case _:
                return cls(kind)

    def __repr__(self) -> str:
        match self.kind:
            case ContextKind.CASH:
                return f"Context.cash({self.step})"
            case ContextKind.CUSTOM:
                return f"Context.custom({self.scale}, {self.step})"
            case _:
                return f"Context.{self.kind.value}()"
