"""
Real values - the floating point fallback.

A TimeReal is a linear float times a power of the time unit. It shows up
wherever exactness cannot be kept: irrational powers, logarithms between
unrelated bases, sums involving real corrections, and literals of the
real flavor. It answers the same questions as an exact value.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from fractions import Fraction
from functools import total_ordering
from typing import TYPE_CHECKING, Any, Union

from chuk_tuning.config import get_settings
from chuk_tuning.constants import Domain, ErrorMessages
from chuk_tuning.core.primes import cents_to_value, value_to_cents
from chuk_tuning.errors import NotRepresentable, NumericOverflow, UnsupportedOperation

if TYPE_CHECKING:
    from chuk_tuning.core.monzo import TimeMonzo

    Value = Union[TimeMonzo, "TimeReal"]


def format_real(value: float) -> str:
    """Render a float, with sentinels for NaN and infinities."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


def time_unit_suffix(time_exponent: Fraction) -> str:
    """Unit suffix for a power of the time unit: '', ' Hz', ' s', ' Hz^2'..."""
    if not time_exponent:
        return ""
    if time_exponent < 0:
        return " Hz" if time_exponent == -1 else f" Hz^{-time_exponent}"
    return " s" if time_exponent == 1 else f" s^{time_exponent}"


def _divide(a: float, b: float) -> float:
    if b:
        return a / b
    if a == 0 or math.isnan(a):
        return math.nan
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


def _ln(x: float) -> float:
    return -math.inf if x == 0 else math.log(x)


def _as_real(other: Any) -> TimeReal:
    if isinstance(other, TimeReal):
        return other
    if isinstance(other, (int, float, Fraction)):
        return TimeReal.from_value(float(other))
    return other.to_real()


@total_ordering
@dataclass(frozen=True, eq=False)
class TimeReal:
    """
    Floating point value with a time dimension.

    Attributes:
        time_exponent: Power of the time unit (-1 for frequencies)
        value: Linear magnitude, may be NaN or infinite
    """

    time_exponent: Fraction
    value: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "time_exponent", Fraction(self.time_exponent))
        object.__setattr__(self, "value", float(self.value))

    @classmethod
    def from_value(cls, value: float) -> TimeReal:
        """Create a dimensionless real."""
        return cls(Fraction(0), value)

    @classmethod
    def from_cents(cls, cents: float) -> TimeReal:
        """Create a dimensionless real from a size in cents."""
        return cls(Fraction(0), cents_to_value(cents))

    @classmethod
    def from_frequency(cls, frequency: float) -> TimeReal:
        """Create a frequency in Hz."""
        return cls(Fraction(-1), frequency)

    # Queries

    def is_scalar(self) -> bool:
        return self.time_exponent == 0

    def is_fractional(self) -> bool:
        return False

    def is_integral(self) -> bool:
        return False

    def is_decimal(self) -> bool:
        return False

    def is_equal_temperament(self) -> bool:
        return False

    def is_power_of_two(self) -> bool:
        return False

    def is_finite(self) -> bool:
        return math.isfinite(self.value)

    def total_cents(self) -> float:
        """Size of |value| in cents, ignoring time units."""
        if self.value == 0:
            return -math.inf
        return value_to_cents(abs(self.value))

    def to_cents(self) -> float:
        if not self.is_scalar():
            raise UnsupportedOperation(ErrorMessages.NOT_SCALAR.format(value=self))
        return self.total_cents()

    def value_of(self) -> float:
        return self.value

    def to_real(self) -> TimeReal:
        return self

    def to_fraction(self) -> Fraction:
        raise NotRepresentable(ErrorMessages.IRRATIONAL_FRACTION)

    def to_integer(self) -> int:
        raise NotRepresentable(ErrorMessages.NOT_AN_INTEGER.format(value=self))

    # Arithmetic

    def neg(self) -> TimeReal:
        return TimeReal(self.time_exponent, -self.value)

    def inverse(self) -> TimeReal:
        return TimeReal(-self.time_exponent, _divide(1.0, self.value))

    def abs(self) -> TimeReal:
        return TimeReal(self.time_exponent, abs(self.value))

    def pitch_abs(self) -> TimeReal:
        result = self.abs()
        return result.inverse() if result.value < 1 else result

    def add(self, other: Value) -> TimeReal:
        other = _as_real(other)
        if self.time_exponent != other.time_exponent:
            raise UnsupportedOperation(ErrorMessages.DISPARATE_UNITS.format(operation="add"))
        return TimeReal(self.time_exponent, self.value + other.value)

    def sub(self, other: Value) -> TimeReal:
        other = _as_real(other)
        if self.time_exponent != other.time_exponent:
            raise UnsupportedOperation(ErrorMessages.DISPARATE_UNITS.format(operation="subtract"))
        return TimeReal(self.time_exponent, self.value - other.value)

    def mul(self, other: Value) -> TimeReal:
        other = _as_real(other)
        return TimeReal(self.time_exponent + other.time_exponent, self.value * other.value)

    def div(self, other: Value) -> TimeReal:
        other = _as_real(other)
        return TimeReal(
            self.time_exponent - other.time_exponent, _divide(self.value, other.value)
        )

    def pow(self, other: Value | Fraction | float | int) -> TimeReal:
        """
        Raise to a scalar power.

        Raises:
            UnsupportedOperation: If the exponent has time units, or an
                irrational exponent is applied to time units
            NumericOverflow: If the result does not fit in a float
        """
        if isinstance(other, (int, float, Fraction)):
            exponent = float(other)
        else:
            if not other.is_scalar():
                raise UnsupportedOperation(ErrorMessages.NON_SCALAR_POWER)
            exponent = other.value_of()

        time_exponent = Fraction(0)
        if self.time_exponent:
            rational = Fraction(exponent).limit_denominator(get_settings().max_pow_denominator)
            if float(rational) != exponent:
                raise UnsupportedOperation(ErrorMessages.IRRATIONAL_TIME_POWER)
            time_exponent = self.time_exponent * rational

        if self.value < 0 and not exponent.is_integer():
            return TimeReal(time_exponent, math.nan)
        try:
            result = math.pow(self.value, exponent)
        except OverflowError as exc:
            raise NumericOverflow(ErrorMessages.ABSURD_MAGNITUDE) from exc
        except ValueError:
            # Zero to a negative power
            result = math.inf
        return TimeReal(time_exponent, result)

    def log(self, other: Value) -> TimeReal:
        """Logarithm of this value in the given base."""
        other = _as_real(other)
        if self.time_exponent or other.time_exponent:
            raise UnsupportedOperation(ErrorMessages.TIME_LOGARITHM)
        a, b = self.value, other.value
        if a < 0 and b < 0:
            a, b = -a, -b
        elif a < 0 or b < 0:
            return TimeReal.from_value(math.nan)
        return TimeReal.from_value(_divide(_ln(a), _ln(b)))

    def dot(self, other: Value) -> Fraction:
        raise UnsupportedOperation(ErrorMessages.REAL_DOT)

    def geometric_inverse(self) -> TimeReal:
        raise UnsupportedOperation(ErrorMessages.NO_GEOMETRIC_INVERSE.format(value=self))

    def mmod(self, other: Value, ceiling: bool = False) -> TimeReal:
        """Modulo with the sign of the divisor."""
        other = _as_real(other)
        if self.time_exponent != other.time_exponent:
            raise UnsupportedOperation(ErrorMessages.DISPARATE_UNITS.format(operation="reduce"))
        if other.value == 0:
            return TimeReal(self.time_exponent, math.nan)
        result = self.value % other.value
        if ceiling and result == 0:
            result = other.value
        return TimeReal(self.time_exponent, result)

    def reduce(self, other: Value, ceiling: bool = False) -> TimeReal:
        """Reduce by a period in pitch space, e.g. octave reduction."""
        other = _as_real(other)
        period = other.total_cents()
        if period == 0 or not math.isfinite(period):
            raise UnsupportedOperation(ErrorMessages.UNISON_REDUCTION)
        ratio = self.total_cents() / period
        if not math.isfinite(ratio):
            return TimeReal(self.time_exponent, math.nan)
        multiplier = math.ceil(ratio) - 1 if ceiling else math.floor(ratio)
        return self.div(other.pow(multiplier))

    def project(self, base: Value) -> Value:
        """Raise base to the number of octaves this value spans."""
        return base.pow(TimeReal.from_value(self.total_cents() / 1200))

    def lens_add(self, other: Value) -> TimeReal:
        return self.inverse().add(_as_real(other).inverse()).inverse()

    def lens_sub(self, other: Value) -> TimeReal:
        return self.inverse().sub(_as_real(other).inverse()).inverse()

    def round_to(self, other: Value) -> TimeReal:
        """Round to the nearest multiple of other."""
        other = _as_real(other)
        if self.time_exponent != other.time_exponent:
            raise UnsupportedOperation(ErrorMessages.DISPARATE_UNITS.format(operation="round"))
        ratio = _divide(self.value, other.value)
        if not math.isfinite(ratio):
            return TimeReal(self.time_exponent, math.nan)
        return TimeReal(other.time_exponent, other.value * math.floor(ratio + 0.5))

    def pitch_round_to(self, other: Value) -> TimeReal:
        """Round to the nearest power of other."""
        other = _as_real(other)
        ratio = self.log(other).value
        if not math.isfinite(ratio):
            return TimeReal(self.time_exponent, math.nan)
        return other.pow(math.floor(ratio + 0.5))

    def gcd(self, other: Value) -> TimeReal:
        raise UnsupportedOperation(ErrorMessages.REAL_DIVISORS.format(operation="gcd"))

    def lcm(self, other: Value) -> TimeReal:
        raise UnsupportedOperation(ErrorMessages.REAL_DIVISORS.format(operation="lcm"))

    # Comparison

    def strict_equals(self, other: Any) -> bool:
        if not isinstance(other, TimeReal):
            return False
        if self.time_exponent != other.time_exponent:
            return False
        if math.isnan(self.value):
            return math.isnan(other.value)
        return self.value == other.value

    def equals(self, other: Value) -> bool:
        return self.time_exponent == other.time_exponent and self.value == other.value_of()

    def compare(self, other: Value) -> int:
        x, y = self.value, other.value_of()
        return (x > y) - (x < y)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TimeReal) or hasattr(other, "to_real"):
            return self.equals(other)  # type: ignore[arg-type]
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if isinstance(other, TimeReal) or hasattr(other, "to_real"):
            return self.compare(other) < 0  # type: ignore[arg-type]
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.time_exponent, self.value))

    # Operators

    def __neg__(self) -> TimeReal:
        return self.neg()

    def __abs__(self) -> TimeReal:
        return self.abs()

    def __add__(self, other: Value) -> TimeReal:
        return self.add(other)

    def __sub__(self, other: Value) -> TimeReal:
        return self.sub(other)

    def __mul__(self, other: Value) -> TimeReal:
        return self.mul(other)

    def __truediv__(self, other: Value) -> TimeReal:
        return self.div(other)

    def __pow__(self, other: Value | Fraction | float | int) -> TimeReal:
        return self.pow(other)

    def __float__(self) -> float:
        return self.value

    # Display

    def to_string(self, domain: Domain = Domain.LINEAR) -> str:
        """Canonical rendering in the given domain."""
        if domain is Domain.LINEAR:
            if not math.isfinite(self.value):
                return format_real(self.value)
            return f"{format_real(self.value)}r{time_unit_suffix(self.time_exponent)}"
        cents = self.total_cents()
        if not math.isfinite(cents):
            return format_real(cents)
        if domain is Domain.LOGARITHMIC:
            return f"{format_real(cents)}rc"
        return f"<{format_real(cents)}rc]"

    def __str__(self) -> str:
        return self.to_string()
