"""
Exact values - the TimeMonzo.

A TimeMonzo is a product of prime powers with rational exponents:

    s^time_exponent * 2^e[0] * 3^e[1] * 5^e[2] * ... * residual * 2^(cents/1200)

The residual is a rational holding prime content beyond the tracked basis
(and the sign), so any fraction is held exactly no matter how large its
primes are. The cents term is a real correction, non-zero only once
something irrational has been folded in; from then on the value no longer
converts to a fraction.

Multiplication is vector addition, which is what composes intervals.
Operations that cannot stay exact return a TimeReal.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass, replace
from fractions import Fraction
from functools import total_ordering
from typing import Any, Union

from chuk_tuning.config import get_settings
from chuk_tuning.constants import Domain, ErrorMessages
from chuk_tuning.core.primes import (
    PRIME_CENTS,
    PRIMES,
    cents_to_value,
    decimal_string,
    fraction_pow,
    is_decimal_fraction,
    log2_fraction,
    prime_limit,
    to_monzo_and_residual,
)
from chuk_tuning.core.real import TimeReal, format_real, time_unit_suffix
from chuk_tuning.errors import NotRepresentable, NumericOverflow, UnsupportedOperation

logger = logging.getLogger(__name__)

ZERO = Fraction(0)
ONE = Fraction(1)

# Equaves beyond this size display as monzos instead of steps
MAX_EQUAVE_BITS = 64

Rational = Union[int, Fraction]
Value = Union["TimeMonzo", TimeReal]


def _default_components(number_of_components: int | None) -> int:
    if number_of_components is None:
        return get_settings().number_of_components
    return number_of_components


def _check_absurdity(
    prime_exponents: tuple[Fraction, ...], residual: Fraction, cents: float
) -> None:
    bound = get_settings().absurd_exponent
    for i, exponent in enumerate(prime_exponents):
        if exponent and abs(exponent) * PRIME_CENTS[i] > bound * 1200:
            raise NumericOverflow(
                ErrorMessages.ABSURD_EXPONENT.format(prime=PRIMES[i], exponent=exponent)
            )
    if max(abs(residual.numerator).bit_length(), residual.denominator.bit_length()) > bound:
        raise NumericOverflow(ErrorMessages.ABSURD_RESIDUAL)
    if abs(cents) > bound * 1200:
        raise NumericOverflow(ErrorMessages.ABSURD_MAGNITUDE)


def _nearest_integer(value: Value) -> int | None:
    if value.is_fractional():
        return math.floor(value.to_fraction() + Fraction(1, 2))
    approximate = value.value_of()
    if not math.isfinite(approximate):
        return None
    return math.floor(approximate + 0.5)


def _format_components(components: Sequence[Fraction]) -> str:
    components = list(components)
    while components and not components[-1]:
        components.pop()
    return " ".join(str(c) for c in components)


@total_ordering
@dataclass(frozen=True, eq=False)
class TimeMonzo:
    """
    Exact value as an exponent vector over the primes.

    Attributes:
        time_exponent: Power of the time unit (-1 for frequencies)
        prime_exponents: Exponents of 2, 3, 5, ... in order
        residual: Rational factor for primes outside the vector, and the sign
        cents: Real correction for irrational leftovers
    """

    time_exponent: Fraction
    prime_exponents: tuple[Fraction, ...]
    residual: Fraction = ONE
    cents: float = 0.0

    def __post_init__(self) -> None:
        """Normalize components and enforce the absurdity bound."""
        if math.isnan(self.cents):
            raise ValueError(f"Invalid cents value: {self.cents}")
        object.__setattr__(self, "time_exponent", Fraction(self.time_exponent))
        object.__setattr__(
            self, "prime_exponents", tuple(Fraction(e) for e in self.prime_exponents)
        )
        object.__setattr__(self, "residual", Fraction(self.residual))
        object.__setattr__(self, "cents", float(self.cents))
        _check_absurdity(self.prime_exponents, self.residual, self.cents)

    # Construction

    @classmethod
    def unity(cls, number_of_components: int | None = None) -> TimeMonzo:
        """The multiplicative identity."""
        return cls(ZERO, [ZERO] * _default_components(number_of_components))

    @classmethod
    def from_fraction(
        cls, value: Rational | str, number_of_components: int | None = None
    ) -> TimeMonzo:
        """
        Create from a rational number.

        Args:
            value: Integer, Fraction or fraction string like "3/2"
            number_of_components: Size of the prime basis (default from settings)

        Returns:
            Exact value with primes beyond the basis kept in the residual
        """
        vector, residual = to_monzo_and_residual(
            Fraction(value), _default_components(number_of_components)
        )
        return cls(ZERO, vector, residual)

    @classmethod
    def from_cents(cls, cents: float, number_of_components: int | None = None) -> TimeMonzo:
        """Create a scalar consisting only of a real correction."""
        return cls(ZERO, [ZERO] * _default_components(number_of_components), ONE, cents)

    @classmethod
    def from_equal_temperament(
        cls,
        fraction_of_equave: Rational | str,
        equave: Rational | str = 2,
        number_of_components: int | None = None,
    ) -> TimeMonzo:
        """
        Create a step of an equal division, e.g. 7\\12 is 2^(7/12).

        Args:
            fraction_of_equave: Exponent of the equave
            equave: Interval being divided (default octave)
            number_of_components: Size of the prime basis
        """
        fraction = Fraction(fraction_of_equave)
        base = cls.from_fraction(equave, number_of_components)
        residual = fraction_pow(base.residual, fraction)
        cents = 0.0
        if residual is None:
            cents = 1200 * log2_fraction(base.residual) * float(fraction)
            residual = ONE
        return cls(ZERO, [e * fraction for e in base.prime_exponents], residual, cents)

    @classmethod
    def from_fractional_frequency(
        cls, frequency: Rational | str, number_of_components: int | None = None
    ) -> TimeMonzo:
        """Create a frequency in Hz."""
        base = cls.from_fraction(frequency, number_of_components)
        return cls(Fraction(-1), base.prime_exponents, base.residual)

    @classmethod
    def from_subgroup(
        cls,
        components: Sequence[Rational],
        basis: Sequence[Rational],
        number_of_components: int | None = None,
    ) -> Value:
        """
        Create from exponents over an explicit subgroup basis like 2.3.7.

        Args:
            components: Exponent of each basis element
            basis: Subgroup basis elements (any positive rationals)
            number_of_components: Size of the prime basis

        Returns:
            The product of basis elements raised to their exponents
        """
        result: Value = cls.unity(number_of_components)
        for component, element in zip(components, basis):
            factor = cls.from_fraction(element, number_of_components).pow(Fraction(component))
            result = result.mul(factor)
        return result

    # Basis

    @property
    def number_of_components(self) -> int:
        return len(self.prime_exponents)

    def with_number_of_components(self, number_of_components: int) -> TimeMonzo:
        """
        Resize the prime basis.

        Shrinking moves integral exponents into the residual and fractional
        ones into the real correction. Growing factors the residual.
        """
        exponents = list(self.prime_exponents)
        residual = self.residual
        cents = self.cents
        while len(exponents) > number_of_components:
            index = len(exponents) - 1
            exponent = exponents.pop()
            if exponent.denominator == 1:
                residual *= Fraction(PRIMES[index]) ** exponent.numerator
            else:
                cents += PRIME_CENTS[index] * float(exponent)
        if len(exponents) < number_of_components:
            vector, residual = to_monzo_and_residual(residual, number_of_components)
            exponents = [
                (exponents[i] if i < len(exponents) else ZERO) + vector[i]
                for i in range(number_of_components)
            ]
        return TimeMonzo(self.time_exponent, exponents, residual, cents)

    def _aligned(self, other: TimeMonzo) -> tuple[TimeMonzo, TimeMonzo]:
        size = max(self.number_of_components, other.number_of_components)
        a = self if self.number_of_components == size else self.with_number_of_components(size)
        b = other if other.number_of_components == size else other.with_number_of_components(size)
        return a, b

    def _folded(self) -> TimeMonzo:
        """Move the residual into the vector, or fail if it can't be done."""
        if self.residual == 1:
            return self
        try:
            limit = prime_limit(self.residual)
        except ValueError as exc:
            raise UnsupportedOperation(ErrorMessages.RESIDUAL_DOT) from exc
        result = self.with_number_of_components(max(limit, self.number_of_components))
        if result.residual != 1:
            raise UnsupportedOperation(ErrorMessages.RESIDUAL_DOT)
        return result

    def exponent_of(self, prime: int) -> Fraction:
        """Exponent of a specific prime, looking into the residual if needed."""
        index = PRIMES.index(prime)
        if index < self.number_of_components:
            return self.prime_exponents[index]
        vector, _ = to_monzo_and_residual(self.residual, index + 1)
        return Fraction(vector[index])

    @property
    def octaves(self) -> Fraction:
        """Exponent of two."""
        return self.exponent_of(2)

    @property
    def tritaves(self) -> Fraction:
        """Exponent of three."""
        return self.exponent_of(3)

    # Queries

    def is_scalar(self) -> bool:
        return self.time_exponent == 0

    def is_fractional(self) -> bool:
        return self.cents == 0 and all(e.denominator == 1 for e in self.prime_exponents)

    def is_integral(self) -> bool:
        if not self.is_fractional() or self.residual.denominator != 1:
            return False
        return all(e >= 0 for e in self.prime_exponents)

    def is_decimal(self) -> bool:
        """True if the value has a terminating decimal expansion."""
        if not self.is_fractional() or not is_decimal_fraction(self.residual):
            return False
        for i, exponent in enumerate(self.prime_exponents):
            if exponent < 0 and PRIMES[i] not in (2, 5):
                return False
        return True

    def is_equal_temperament(self) -> bool:
        """True if this is a rational power of a fraction."""
        return self.is_scalar() and self.cents == 0 and self.residual == 1

    def is_power_of_two(self) -> bool:
        if not self.is_equal_temperament():
            return False
        return not any(self.prime_exponents[1:])

    def is_unity(self) -> bool:
        return self.is_equal_temperament() and not any(self.prime_exponents)

    # Conversion

    def to_fraction(self) -> Fraction:
        """
        Convert to a fraction, ignoring time units.

        Raises:
            NotRepresentable: If the value is irrational
        """
        if not self.is_fractional():
            raise NotRepresentable(ErrorMessages.IRRATIONAL_FRACTION)
        result = self.residual
        for i, exponent in enumerate(self.prime_exponents):
            if exponent:
                result *= Fraction(PRIMES[i]) ** exponent.numerator
        return result

    def to_integer(self) -> int:
        fraction = self.to_fraction()
        if fraction.denominator != 1:
            raise NotRepresentable(ErrorMessages.NOT_AN_INTEGER.format(value=fraction))
        return fraction.numerator

    def to_integer_monzo(self) -> list[int]:
        """Exponent vector of a fully factored fraction."""
        if not self.is_fractional() or self.residual != 1:
            raise NotRepresentable(ErrorMessages.IRRATIONAL_FRACTION)
        return [e.numerator for e in self.prime_exponents]

    def to_equal_temperament(self) -> tuple[Fraction, Fraction]:
        """
        Split into a fraction of an equave and the equave.

        >>> TimeMonzo(0, [3, Fraction(-3, 2)]).to_equal_temperament()
        (Fraction(3, 2), Fraction(4, 3))
        """
        if not self.is_equal_temperament():
            raise NotRepresentable(ErrorMessages.IRRATIONAL_FRACTION)
        if not any(self.prime_exponents):
            return ZERO, ONE
        denominator = math.lcm(*(e.denominator for e in self.prime_exponents))
        scaled = [(e * denominator).numerator for e in self.prime_exponents]
        divisor = math.gcd(*scaled)
        equave = ONE
        for i, component in enumerate(scaled):
            if component:
                equave *= Fraction(PRIMES[i]) ** (component // divisor)
        fraction = Fraction(divisor, denominator)
        if equave < 1:
            equave, fraction = 1 / equave, -fraction
        return fraction, equave

    def to_subgroup(self, basis: Sequence[int]) -> list[Fraction]:
        """
        Project onto a prime subgroup like 2.3.7.

        Raises:
            NotRepresentable: If the value has content outside the subgroup
        """
        for element in basis:
            if element not in PRIMES:
                raise NotRepresentable(ErrorMessages.NON_PRIME_BASIS.format(element=element))
        limit = max((PRIMES.index(p) + 1 for p in basis), default=0)
        monzo = self.with_number_of_components(max(limit, self.number_of_components))
        if monzo.residual != 1 or monzo.cents:
            raise NotRepresentable(ErrorMessages.IRRATIONAL_FRACTION)
        for i, exponent in enumerate(monzo.prime_exponents):
            if exponent and PRIMES[i] not in basis:
                raise NotRepresentable(ErrorMessages.IRRATIONAL_FRACTION)
        return [monzo.exponent_of(p) for p in basis]

    def total_cents(self) -> float:
        """Size of |value| in cents, ignoring time units."""
        if self.residual == 0:
            return -math.inf
        total = self.cents
        for i, exponent in enumerate(self.prime_exponents):
            if exponent:
                total += float(exponent) * PRIME_CENTS[i]
        if abs(self.residual) != 1:
            total += 1200 * log2_fraction(self.residual)
        return total

    def to_cents(self) -> float:
        if not self.is_scalar():
            raise UnsupportedOperation(ErrorMessages.NOT_SCALAR.format(value=self))
        return self.total_cents()

    def value_of(self) -> float:
        """Best-effort float, ignoring time units."""
        if self.residual == 0:
            return 0.0
        if self.is_fractional():
            try:
                return float(self.to_fraction())
            except OverflowError:
                pass
        magnitude = cents_to_value(self.total_cents())
        return -magnitude if self.residual < 0 else magnitude

    def to_real(self) -> TimeReal:
        return TimeReal(self.time_exponent, self.value_of())

    # Arithmetic

    def neg(self) -> TimeMonzo:
        return replace(self, residual=-self.residual)

    def inverse(self) -> Value:
        if self.residual == 0:
            return TimeReal(-self.time_exponent, math.inf)
        return TimeMonzo(
            -self.time_exponent,
            [-e for e in self.prime_exponents],
            1 / self.residual,
            -self.cents,
        )

    def abs(self) -> TimeMonzo:
        return replace(self, residual=abs(self.residual))

    def pitch_abs(self) -> Value:
        """Absolute value that is also at least unity."""
        result = self.abs()
        return result.inverse() if result.total_cents() < 0 else result

    def add(self, other: Value) -> Value:
        """
        Numeric sum.

        Exact when both operands are fractions, otherwise a TimeReal.

        Raises:
            UnsupportedOperation: If time units differ
        """
        if isinstance(other, TimeReal):
            return self.to_real().add(other)
        if self.time_exponent != other.time_exponent:
            raise UnsupportedOperation(ErrorMessages.DISPARATE_UNITS.format(operation="add"))
        if self.is_fractional() and other.is_fractional():
            return self._fraction_result(self.to_fraction() + other.to_fraction(), other)
        logger.debug("Inexact addition of %s and %s", self, other)
        return self.to_real().add(other.to_real())

    def sub(self, other: Value) -> Value:
        """Numeric difference, see add."""
        if isinstance(other, TimeReal):
            return self.to_real().sub(other)
        if self.time_exponent != other.time_exponent:
            raise UnsupportedOperation(ErrorMessages.DISPARATE_UNITS.format(operation="subtract"))
        if self.is_fractional() and other.is_fractional():
            return self._fraction_result(self.to_fraction() - other.to_fraction(), other)
        logger.debug("Inexact subtraction of %s and %s", self, other)
        return self.to_real().sub(other.to_real())

    def _fraction_result(self, value: Fraction, other: TimeMonzo) -> TimeMonzo:
        size = max(self.number_of_components, other.number_of_components)
        result = TimeMonzo.from_fraction(value, size)
        return replace(result, time_exponent=self.time_exponent)

    def mul(self, other: Value) -> Value:
        """Product: adds exponent vectors."""
        if isinstance(other, TimeReal):
            return self.to_real().mul(other)
        a, b = self._aligned(other)
        return TimeMonzo(
            a.time_exponent + b.time_exponent,
            [x + y for x, y in zip(a.prime_exponents, b.prime_exponents)],
            a.residual * b.residual,
            a.cents + b.cents,
        )

    def div(self, other: Value) -> Value:
        """Quotient: subtracts exponent vectors."""
        if isinstance(other, TimeReal) or other.residual == 0:
            return self.to_real().div(other.to_real())
        a, b = self._aligned(other)
        return TimeMonzo(
            a.time_exponent - b.time_exponent,
            [x - y for x, y in zip(a.prime_exponents, b.prime_exponents)],
            a.residual / b.residual,
            a.cents - b.cents,
        )

    def pow(self, other: Value | Rational | float) -> Value:
        """
        Raise to a scalar power.

        Rational exponents keep the value exact; irrational ones (or rational
        ones with huge denominators) produce a TimeReal.

        Raises:
            UnsupportedOperation: If the exponent has time units, or an
                irrational exponent is applied to time units
            NumericOverflow: If the result exceeds the absurdity bound
        """
        if isinstance(other, (TimeMonzo, TimeReal)):
            if not other.is_scalar():
                raise UnsupportedOperation(ErrorMessages.NON_SCALAR_POWER)
            if not other.is_fractional():
                return self._irrational_pow(other.value_of())
            other = other.to_fraction()
        elif isinstance(other, float):
            if not math.isfinite(other):
                return self._irrational_pow(other)
        scalar = Fraction(other)
        settings = get_settings()
        if scalar.denominator >= settings.max_pow_denominator:
            return self._irrational_pow(float(scalar))

        if self.residual not in (0, 1, -1):
            residual = self.residual
            bits = max(abs(residual.numerator).bit_length(), residual.denominator.bit_length())
            if bits * abs(scalar) > settings.absurd_exponent:
                raise NumericOverflow(ErrorMessages.ABSURD_RESIDUAL)

        residual = fraction_pow(self.residual, scalar)
        cents = self.cents
        if residual is None:
            if self.residual <= 0:
                return self._irrational_pow(float(scalar))
            cents += 1200 * log2_fraction(self.residual)
            residual = ONE
        return TimeMonzo(
            self.time_exponent * scalar,
            [e * scalar for e in self.prime_exponents],
            residual,
            cents * float(scalar),
        )

    def _irrational_pow(self, exponent: float) -> TimeReal:
        if self.time_exponent:
            raise UnsupportedOperation(ErrorMessages.IRRATIONAL_TIME_POWER)
        logger.debug("Irrational power %s of %s", exponent, self)
        return self.to_real().pow(exponent)

    def log(self, other: Value) -> Value:
        """
        Generalized logarithm: x such that self == other^x.

        Exact when both are powers of a common base. A negative value in a
        negative base gives the same result as the magnitudes, so that
        (-8) /_ (-2) is 3.

        Raises:
            UnsupportedOperation: If time units make the logarithm undefined
        """
        if isinstance(other, TimeReal) or self.cents or other.cents:
            return self.to_real().log(other)
        if self.time_exponent or other.time_exponent:
            if not other.time_exponent:
                raise UnsupportedOperation(ErrorMessages.TIME_LOGARITHM)
            solution = self.time_exponent / other.time_exponent
            if other.pow(solution).strict_equals(self):
                return TimeMonzo.from_fraction(solution)
            raise UnsupportedOperation(ErrorMessages.NO_LOGARITHM.format(left=self, right=other))

        a, b = self, other
        if a.residual < 0 and b.residual < 0:
            a, b = a.neg(), b.neg()
        elif a.residual <= 0 or b.residual <= 0:
            return self.to_real().log(other)

        if abs(a.residual) != 1 or abs(b.residual) != 1:
            try:
                size = max(prime_limit(a.residual), prime_limit(b.residual))
            except ValueError:
                size = 0
            if size > max(a.number_of_components, b.number_of_components):
                a = a.with_number_of_components(size)
        a, b = a._aligned(b)

        solution: Fraction | None = None
        for x, y in zip(a.prime_exponents, b.prime_exponents):
            if y:
                candidate = x / y
                if solution is None:
                    solution = candidate
                elif solution != candidate:
                    return self._real_log(other)
            elif x:
                return self._real_log(other)
        if solution is None:
            return self._real_log(other)
        if fraction_pow(b.residual, solution) != a.residual:
            return self._real_log(other)
        return TimeMonzo.from_fraction(solution)

    def _real_log(self, other: TimeMonzo) -> TimeReal:
        logger.debug("No common base between %s and %s", self, other)
        return self.to_real().log(other.to_real())

    def dot(self, other: Value) -> Fraction:
        """
        Pair an exponent vector with a dual vector (a val).

        Components missing from the shorter vector count as zero. Real
        corrections pair with each other, which is how vals count ups.

        Raises:
            UnsupportedOperation: If a residual can't be factored or the
                other operand is real
        """
        if isinstance(other, TimeReal):
            raise UnsupportedOperation(ErrorMessages.REAL_DOT)
        a, b = self._folded(), other._folded()
        result = a.time_exponent * b.time_exponent
        for x, y in zip(a.prime_exponents, b.prime_exponents):
            result += x * y
        if a.cents and b.cents:
            result += Fraction(a.cents * b.cents).limit_denominator(10**8)
        return result

    def geometric_inverse(self) -> TimeMonzo:
        """The vector g in the same direction with self.dot(g) == 1."""
        magnitude = self.dot(self)
        if magnitude == 0:
            raise UnsupportedOperation(ErrorMessages.NO_GEOMETRIC_INVERSE.format(value=self))
        folded = self._folded()
        scale = 1 / magnitude
        return TimeMonzo(
            folded.time_exponent * scale,
            [e * scale for e in folded.prime_exponents],
            ONE,
            folded.cents * float(scale),
        )

    def mmod(self, other: Value, ceiling: bool = False) -> Value:
        """Modulo with the sign of the divisor, exact for fractions."""
        if isinstance(other, TimeReal) or not (self.is_fractional() and other.is_fractional()):
            return self.to_real().mmod(other.to_real(), ceiling)
        if self.time_exponent != other.time_exponent:
            raise UnsupportedOperation(ErrorMessages.DISPARATE_UNITS.format(operation="reduce"))
        divisor = other.to_fraction()
        if divisor == 0:
            return self.to_real().mmod(other.to_real(), ceiling)
        result = self.to_fraction() % divisor
        if ceiling and result == 0:
            result = divisor
        return self._fraction_result(result, other)

    def reduce(self, other: Value, ceiling: bool = False) -> Value:
        """
        Reduce by a period in pitch space, e.g. octave reduction.

        Args:
            other: The period (equave)
            ceiling: Map to (1, period] instead of [1, period)
        """
        if isinstance(other, TimeReal):
            return self.to_real().reduce(other, ceiling)
        period = other.total_cents()
        if period == 0 or not math.isfinite(period):
            raise UnsupportedOperation(ErrorMessages.UNISON_REDUCTION)
        ratio: Value | None = None
        if self.is_scalar() and other.is_scalar():
            ratio = self.abs().log(other.abs())
        if isinstance(ratio, TimeMonzo):
            exact = ratio.to_fraction()
            multiplier = math.ceil(exact) - 1 if ceiling else math.floor(exact)
        else:
            approximate = self.total_cents() / period
            if not math.isfinite(approximate):
                return self.to_real().reduce(other.to_real(), ceiling)
            multiplier = math.ceil(approximate) - 1 if ceiling else math.floor(approximate)
        return self.div(other.pow(multiplier))

    def project(self, base: Value) -> Value:
        """
        Raise base to the number of octaves this value spans.

        The octave count of 3\\13 is 3/13, so projecting it onto 3 gives 3^(3/13).
        """
        if self.is_power_of_two():
            octaves = self.prime_exponents[0] if self.prime_exponents else ZERO
            return base.pow(octaves)
        return base.pow(TimeReal.from_value(self.total_cents() / 1200))

    def lens_add(self, other: Value) -> Value:
        """Harmonic sum 1 / (1/self + 1/other), as of parallel resistors."""
        if isinstance(other, TimeReal):
            return self.to_real().lens_add(other)
        return self.inverse().add(other.inverse()).inverse()

    def lens_sub(self, other: Value) -> Value:
        """Inverse of lens_add: 1 / (1/self - 1/other)."""
        if isinstance(other, TimeReal):
            return self.to_real().lens_sub(other)
        return self.inverse().sub(other.inverse()).inverse()

    def round_to(self, other: Value) -> Value:
        """
        Round to the nearest multiple of other, halves rounding up.

        Raises:
            UnsupportedOperation: If time units differ
        """
        if isinstance(other, TimeReal):
            return self.to_real().round_to(other)
        if self.time_exponent != other.time_exponent:
            raise UnsupportedOperation(ErrorMessages.DISPARATE_UNITS.format(operation="round"))
        multiplier = _nearest_integer(self.div(other))
        if multiplier is None:
            return TimeReal(self.time_exponent, math.nan)
        return other.mul(TimeMonzo.from_fraction(multiplier))

    def pitch_round_to(self, other: Value) -> Value:
        """Round to the nearest power of other, halves rounding up."""
        if isinstance(other, TimeReal):
            return self.to_real().pitch_round_to(other)
        multiplier = _nearest_integer(self.log(other))
        if multiplier is None:
            return TimeReal(self.time_exponent, math.nan)
        return other.pow(multiplier)

    def gcd(self, other: Value) -> TimeMonzo:
        """
        Largest value dividing both: componentwise minimum of exponents.

        >>> TimeMonzo.from_fraction(12).gcd(TimeMonzo.from_fraction(18)).to_fraction()
        Fraction(6, 1)
        """
        if isinstance(other, TimeReal):
            raise UnsupportedOperation(ErrorMessages.REAL_DIVISORS.format(operation="gcd"))
        a, b = self._aligned(other)
        x, y = a.residual, b.residual
        return TimeMonzo(
            min(a.time_exponent, b.time_exponent),
            [min(p, q) for p, q in zip(a.prime_exponents, b.prime_exponents)],
            Fraction(math.gcd(x.numerator, y.numerator), math.lcm(x.denominator, y.denominator)),
            min(a.cents, b.cents),
        )

    def lcm(self, other: Value) -> TimeMonzo:
        """Smallest value both divide: componentwise maximum of exponents."""
        if isinstance(other, TimeReal):
            raise UnsupportedOperation(ErrorMessages.REAL_DIVISORS.format(operation="lcm"))
        a, b = self._aligned(other)
        x, y = a.residual, b.residual
        return TimeMonzo(
            max(a.time_exponent, b.time_exponent),
            [max(p, q) for p, q in zip(a.prime_exponents, b.prime_exponents)],
            Fraction(math.lcm(x.numerator, y.numerator), math.gcd(x.denominator, y.denominator)),
            max(a.cents, b.cents),
        )

    # Comparison

    def strict_equals(self, other: Any) -> bool:
        """Identical representation, not just the same number."""
        if not isinstance(other, TimeMonzo):
            return False
        a, b = self._aligned(other)
        return (
            a.time_exponent == b.time_exponent
            and a.prime_exponents == b.prime_exponents
            and a.residual == b.residual
            and a.cents == b.cents
        )

    def equals(self, other: Value) -> bool:
        """Numeric equality, tolerant of exact and real representations."""
        if self.time_exponent != other.time_exponent:
            return False
        if isinstance(other, TimeMonzo) and self.is_fractional() and other.is_fractional():
            return self.to_fraction() == other.to_fraction()
        return self.value_of() == other.value_of()

    def compare(self, other: Value) -> int:
        """Three-way comparison: -1, 0 or 1."""
        if self.strict_equals(other):
            return 0
        if (
            isinstance(other, TimeMonzo)
            and self.is_fractional()
            and other.is_fractional()
        ):
            x: float | Fraction = self.to_fraction()
            y: float | Fraction = other.to_fraction()
        else:
            x, y = self.value_of(), other.value_of()
        return (x > y) - (x < y)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (TimeMonzo, TimeReal)):
            return self.equals(other)
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if isinstance(other, (TimeMonzo, TimeReal)):
            return self.compare(other) < 0
        return NotImplemented

    def __hash__(self) -> int:
        if self.is_fractional():
            return hash((self.time_exponent, self.to_fraction()))
        return hash((self.time_exponent, self.value_of()))

    # Operators

    def __neg__(self) -> TimeMonzo:
        return self.neg()

    def __abs__(self) -> TimeMonzo:
        return self.abs()

    def __add__(self, other: Value) -> Value:
        return self.add(other)

    def __sub__(self, other: Value) -> Value:
        return self.sub(other)

    def __mul__(self, other: Value) -> Value:
        return self.mul(other)

    def __truediv__(self, other: Value) -> Value:
        return self.div(other)

    def __pow__(self, other: Value | Rational | float) -> Value:
        return self.pow(other)

    def __float__(self) -> float:
        return self.value_of()

    # Display

    def to_string(self, domain: Domain = Domain.LINEAR) -> str:
        """
        Canonical rendering in the given domain.

        Linear values render as integers, fractions, decimals (for
        frequencies) or radicals; logarithmic ones as equal temperament
        steps or monzos; cologarithmic ones as vals.
        """
        if domain is Domain.LOGARITHMIC:
            return self._logarithmic_string()
        if domain is Domain.COLOGARITHMIC:
            return self._cologarithmic_string()
        return self._linear_string()

    def _linear_string(self) -> str:
        suffix = time_unit_suffix(self.time_exponent)
        if self.is_fractional():
            fraction = self.to_fraction()
            if self.time_exponent and is_decimal_fraction(fraction):
                return f"{decimal_string(fraction)}{suffix}"
            return f"{fraction}{suffix}"
        if self.is_equal_temperament():
            fraction, equave = self.to_equal_temperament()
            return f"{equave}^({fraction})"
        if self.cents == 0 and self.residual == 1:
            factors = []
            for i, exponent in enumerate(self.prime_exponents):
                if exponent:
                    factors.append(f"{PRIMES[i]}^({exponent})")
            return "*".join(factors) + suffix
        return f"{format_real(self.value_of())}r{suffix}"

    def _logarithmic_string(self) -> str:
        if self.residual <= 0:
            return format_real(-math.inf if self.residual == 0 else math.nan)
        vector = self.prime_exponents
        if self.is_equal_temperament():
            if not any(vector):
                return "0\\1"
            if self.is_power_of_two() or any(e.denominator != 1 for e in vector):
                fraction, equave = self.to_equal_temperament()
                bits = max(equave.numerator.bit_length(), equave.denominator.bit_length())
                if bits <= MAX_EQUAVE_BITS:
                    steps = f"{fraction.numerator}\\{fraction.denominator}"
                    return steps if equave == 2 else f"{steps}<{equave}>"
            return f"[{_format_components(vector)}>"
        terms = []
        if any(vector):
            terms.append(f"[{_format_components(vector)}>")
        if self.residual != 1:
            terms.append(f"{format_real(1200 * log2_fraction(self.residual))}rc")
        if self.cents or not terms:
            terms.append(f"{format_real(self.cents)}rc")
        return " + ".join(terms)

    def _cologarithmic_string(self) -> str:
        text = f"<{_format_components(self.prime_exponents)}]"
        if self.cents:
            text = f"{text} + <{format_real(self.cents)}rc]"
        return text

    def __str__(self) -> str:
        return self.to_string()
