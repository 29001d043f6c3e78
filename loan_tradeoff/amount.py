"""
Fixed-Precision Amount Module

Represents monetary values and rates as a scaled integer with FIXED_PRECISION
fractional digits. NEVER uses float for intermediate math: thousands of daily
compounding steps must produce the same result on every run.
"""

from decimal import Decimal, InvalidOperation, ROUND_DOWN, localcontext
from dataclasses import dataclass
from enum import Enum
from functools import total_ordering
from typing import Mapping, Optional, Type, Union
import math

from .constants import CENTS_PLACES
from .exceptions import (
    TradeoffError, InvalidValueError, TypeMismatchError, DivisionByZeroError,
    InvalidExponentError, NegativeRadicandError, InvalidRoundingModeError
)

FIXED_PRECISION = 20
SCALE = 10 ** FIXED_PRECISION

# Largest supported magnitude is just under 10**MAX_INTEGER_DIGITS. Keeps every
# scaled value far below the interpreter limit on int<->str conversion.
MAX_INTEGER_DIGITS = 1000
MAX_SCALED = 10 ** (MAX_INTEGER_DIGITS + FIXED_PRECISION)


class RoundingMode(Enum):
    """Rounding conventions accepted by Amount arithmetic"""
    NONE = "none"                  # Keep full internal scale
    BANKERS = "bankers"            # Round half to even
    CONVENTIONAL = "conventional"  # Round half away from zero


@dataclass(frozen=True)
class Rounding:
    """Explicit rounding directive passed to a single arithmetic call"""
    mode: RoundingMode = RoundingMode.NONE
    decimal_places: int = 2

    def __post_init__(self):
        mode = self.mode
        if not isinstance(mode, RoundingMode):
            if not isinstance(mode, str):
                raise InvalidRoundingModeError(f"Unknown rounding mode: {mode!r}")
            try:
                mode = RoundingMode(mode.strip().lower())
            except ValueError:
                raise InvalidRoundingModeError(f"Unknown rounding mode: {mode!r}") from None
            object.__setattr__(self, 'mode', mode)

        places = self.decimal_places
        if isinstance(places, bool) or not isinstance(places, int) or not 0 <= places <= FIXED_PRECISION:
            raise InvalidRoundingModeError(
                f"Decimal places must be an integer between 0 and {FIXED_PRECISION}"
            )


BANKERS_CENTS = Rounding(RoundingMode.BANKERS, CENTS_PLACES)
CONVENTIONAL_CENTS = Rounding(RoundingMode.CONVENTIONAL, CENTS_PLACES)

RoundingLike = Union[Rounding, Mapping, None]


def _coerce_rounding(rounding: RoundingLike) -> Optional[Rounding]:
    if rounding is None or isinstance(rounding, Rounding):
        return rounding
    if isinstance(rounding, Mapping):
        unknown = set(rounding) - {"mode", "decimal_places"}
        if unknown:
            raise InvalidRoundingModeError(f"Unknown rounding options: {sorted(unknown)}")
        return Rounding(
            mode=rounding.get("mode", RoundingMode.NONE),
            decimal_places=rounding.get("decimal_places", 2)
        )
    raise InvalidRoundingModeError(f"Unsupported rounding directive: {rounding!r}")


def _truncating_divide(numerator: int, denominator: int) -> int:
    """Integer division rounding toward zero"""
    quotient = abs(numerator) // abs(denominator)
    return -quotient if (numerator < 0) != (denominator < 0) else quotient


def _round_scaled(value: int, rounding: Rounding) -> int:
    if rounding.mode is RoundingMode.NONE or rounding.decimal_places == FIXED_PRECISION:
        return value

    step = 10 ** (FIXED_PRECISION - rounding.decimal_places)
    quotient, remainder = divmod(abs(value), step)
    twice_remainder = remainder * 2

    if twice_remainder > step:
        quotient += 1
    elif twice_remainder == step:
        if rounding.mode is RoundingMode.CONVENTIONAL or quotient % 2 == 1:
            quotient += 1

    result = quotient * step
    return -result if value < 0 else result


def _check_magnitude(scaled: int) -> int:
    if abs(scaled) >= MAX_SCALED:
        raise InvalidValueError(
            f"Value exceeds the supported magnitude of 10**{MAX_INTEGER_DIGITS}"
        )
    return scaled


def _decimal_to_scaled(value: Decimal) -> int:
    if not value.is_finite():
        raise InvalidValueError("Value must be a finite number")
    if value.is_zero():
        return 0
    if value.adjusted() >= MAX_INTEGER_DIGITS:
        raise InvalidValueError(
            f"Value exceeds the supported magnitude of 10**{MAX_INTEGER_DIGITS}"
        )

    # Digits beyond the fixed scale are truncated
    with localcontext() as ctx:
        ctx.prec = MAX_INTEGER_DIGITS + FIXED_PRECISION
        ctx.rounding = ROUND_DOWN
        return int(value.scaleb(FIXED_PRECISION).to_integral_value())


def _to_scaled(value) -> int:
    if isinstance(value, Amount):
        return value.scaled_value
    if isinstance(value, bool):
        raise TypeMismatchError("Cannot create an Amount from a bool")
    if isinstance(value, int):
        return _check_magnitude(value * SCALE)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise InvalidValueError("Value must be a finite number")
        # repr() is the shortest string that round-trips, so 0.1 stays 0.1
        return _decimal_to_scaled(Decimal(repr(value)))
    if isinstance(value, Decimal):
        return _decimal_to_scaled(value)
    if isinstance(value, str):
        try:
            parsed = Decimal(value.strip())
        except InvalidOperation:
            raise InvalidValueError(f"Cannot convert '{value}' to an Amount") from None
        return _decimal_to_scaled(parsed)
    raise TypeMismatchError(f"Cannot create an Amount from {type(value).__name__}")


def _require_amount(candidate) -> None:
    if not isinstance(candidate, Amount):
        raise TypeMismatchError(
            f"Operand must be an Amount, got {type(candidate).__name__}"
        )


def _integer_root(radicand: int, degree: int, estimate: int) -> int:
    """Floor of the real degree-th root of radicand, corrected from an estimate"""
    root = max(estimate, 0)
    while root > 0 and root ** degree > radicand:
        root -= 1
    while (root + 1) ** degree <= radicand:
        root += 1
    return root


@total_ordering
class Amount:
    """
    Immutable fixed-precision number.

    Every operation returns a new Amount; the receiver and operand are never
    modified, so Amounts can be cached and shared freely. Arithmetic keeps
    FIXED_PRECISION fractional digits (truncating toward zero) unless a
    rounding directive is supplied.
    """

    __slots__ = ("_scaled",)

    def __init__(self, value: Union["Amount", int, float, Decimal, str] = 0):
        object.__setattr__(self, "_scaled", _to_scaled(value))

    @classmethod
    def from_scaled(cls, scaled: int) -> "Amount":
        """Build an Amount directly from its internal scaled integer"""
        if isinstance(scaled, bool) or not isinstance(scaled, int):
            raise TypeMismatchError("Scaled value must be an integer")
        amount = cls.__new__(cls)
        object.__setattr__(amount, "_scaled", _check_magnitude(scaled))
        return amount

    def __setattr__(self, name, value):
        raise AttributeError("Amount is immutable")

    def __reduce__(self):
        return (Amount, (self.to_precise_string(),))

    @property
    def scaled_value(self) -> int:
        return self._scaled

    @property
    def precision(self) -> int:
        return FIXED_PRECISION

    def _result(self, scaled: int, rounding: RoundingLike) -> "Amount":
        directive = _coerce_rounding(rounding)
        if directive is not None:
            scaled = _round_scaled(scaled, directive)
        return Amount.from_scaled(scaled)

    # Arithmetic

    def add(self, other: "Amount", rounding: RoundingLike = None) -> "Amount":
        _require_amount(other)
        return self._result(self._scaled + other._scaled, rounding)

    def subtract(self, other: "Amount", rounding: RoundingLike = None) -> "Amount":
        _require_amount(other)
        return self._result(self._scaled - other._scaled, rounding)

    def multiply(self, other: "Amount", rounding: RoundingLike = None) -> "Amount":
        _require_amount(other)
        product = _truncating_divide(self._scaled * other._scaled, SCALE)
        return self._result(product, rounding)

    def divide(self, other: "Amount", rounding: RoundingLike = None) -> "Amount":
        _require_amount(other)
        if other._scaled == 0:
            raise DivisionByZeroError("Cannot divide by zero")
        quotient = _truncating_divide(self._scaled * SCALE, other._scaled)
        return self._result(quotient, rounding)

    def power(self, exponent: int, rounding: RoundingLike = None) -> "Amount":
        """Raise to a non-negative integer power by repeated multiplication"""
        if isinstance(exponent, bool) or not isinstance(exponent, int) or exponent < 0:
            raise InvalidExponentError("Exponent must be a non-negative integer")

        result = SCALE
        for _ in range(exponent):
            result = _truncating_divide(result * self._scaled, SCALE)
            _check_magnitude(result)
        return self._result(result, rounding)

    def nth_root(self, degree: int, rounding: RoundingLike = None) -> "Amount":
        """
        Return the degree-th root, truncated to the fixed scale.

        The root is exact to the last internal digit: a high precision decimal
        estimate is corrected against the integer radicand.

        Raises:
            InvalidExponentError: If degree is not a positive integer
            NegativeRadicandError: If this Amount is negative
        """
        if isinstance(degree, bool) or not isinstance(degree, int) or degree <= 0:
            raise InvalidExponentError("Root degree must be a positive integer")
        if self._scaled < 0:
            raise NegativeRadicandError("Cannot take the root of a negative value")
        if degree == 1 or self._scaled == 0:
            return self._result(self._scaled, rounding)

        radicand = self._scaled * SCALE ** (degree - 1)
        with localcontext() as ctx:
            # Decimal digits in the scaled value, from its bit length
            ctx.prec = self._scaled.bit_length() * 30103 // 100000 + FIXED_PRECISION + 12
            estimate = self.as_decimal() ** (Decimal(1) / Decimal(degree))
            seed = int(estimate.scaleb(FIXED_PRECISION))

        return self._result(_integer_root(radicand, degree, seed), rounding)

    def round(self, rounding: RoundingLike) -> "Amount":
        """Apply a rounding directive on its own"""
        return self._result(self._scaled, rounding)

    def round_down_to_cents(self) -> "Amount":
        """Floor to whole cents (toward negative infinity)"""
        step = 10 ** (FIXED_PRECISION - CENTS_PLACES)
        return Amount.from_scaled((self._scaled // step) * step)

    # Comparison

    def equals(self, other: "Amount") -> bool:
        _require_amount(other)
        return self._scaled == other._scaled

    def less_than(self, other: "Amount") -> bool:
        _require_amount(other)
        return self._scaled < other._scaled

    def is_zero(self) -> bool:
        return self._scaled == 0

    def is_positive(self) -> bool:
        return self._scaled > 0

    def is_negative(self) -> bool:
        return self._scaled < 0

    def __eq__(self, other) -> bool:
        if not isinstance(other, Amount):
            return NotImplemented
        return self._scaled == other._scaled

    def __lt__(self, other: "Amount") -> bool:
        return self.less_than(other)

    def __hash__(self) -> int:
        return hash(self._scaled)

    # Operators

    def __add__(self, other: "Amount") -> "Amount":
        return self.add(other)

    def __sub__(self, other: "Amount") -> "Amount":
        return self.subtract(other)

    def __mul__(self, other: "Amount") -> "Amount":
        return self.multiply(other)

    def __truediv__(self, other: "Amount") -> "Amount":
        return self.divide(other)

    def __pow__(self, exponent: int) -> "Amount":
        return self.power(exponent)

    def __neg__(self) -> "Amount":
        return Amount.from_scaled(-self._scaled)

    def __abs__(self) -> "Amount":
        return Amount.from_scaled(abs(self._scaled))

    def __bool__(self) -> bool:
        return self._scaled != 0

    # Conversion

    def to_float(self) -> float:
        """Best-effort float approximation, for display and tolerance checks only"""
        return self._scaled / SCALE

    def __float__(self) -> float:
        return self.to_float()

    def to_precise_string(self) -> str:
        """Exact fixed-point string at full internal scale"""
        sign = "-" if self._scaled < 0 else ""
        whole, fraction = divmod(abs(self._scaled), SCALE)
        return f"{sign}{whole}.{fraction:0{FIXED_PRECISION}d}"

    def as_decimal(self) -> Decimal:
        """Exact decimal.Decimal copy of this Amount"""
        return Decimal(self.to_precise_string())

    def __str__(self) -> str:
        return self.to_precise_string()

    def __repr__(self) -> str:
        return f"Amount('{self.to_precise_string()}')"


ZERO = Amount(0)
ONE = Amount(1)


def coerce_amount(value, error_cls: Optional[Type[TradeoffError]] = None,
                  message: Optional[str] = None) -> Amount:
    """
    Return value as an Amount.

    Args:
        value: Amount or a native number accepted by the Amount constructor
        error_cls: Error to raise instead of the Amount construction error
        message: Message for error_cls (defaults to the original message)
    """
    if isinstance(value, Amount):
        return value
    try:
        return Amount(value)
    except (InvalidValueError, TypeMismatchError) as e:
        if error_cls is None:
            raise
        raise error_cls(message or str(e)) from e
