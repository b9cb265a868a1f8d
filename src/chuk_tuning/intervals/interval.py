"""
Intervals - values with a domain.

An Interval pairs a Value with a domain that decides what the operators
mean. In the linear domain `+` adds ratios; in the logarithmic domain it
composes intervals, which multiplies the underlying ratios. Multiplication
and division accept one linear operand acting as a scalar on the other.

Every operation also:
- runs the paired node function so the result can keep its written form
- merges color, label and tracking identifiers with infect()
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, replace
from fractions import Fraction
from functools import total_ordering
from typing import TYPE_CHECKING, Optional, Union

from chuk_tuning.constants import DecimalFlavor, Domain, ErrorMessages
from chuk_tuning.core.monzo import TimeMonzo
from chuk_tuning.core.value import Value, coerce_pair
from chuk_tuning.errors import DomainMismatch, UnsupportedOperation
from chuk_tuning.intervals.metadata import Color, IntervalMetadata, infect
from chuk_tuning.intervals.realization import GaveUp, Realization, realize
from chuk_tuning.literals.algebra import (
    abs_node,
    add_nodes,
    div_nodes,
    gcd_nodes,
    infer_flavor,
    invert_node,
    lcm_nodes,
    lens_add_nodes,
    lens_sub_nodes,
    log_nodes,
    mod_nodes,
    mul_nodes,
    neg_node,
    pitch_round_to_nodes,
    pow_nodes,
    project_nodes,
    rational_literal,
    reduce_nodes,
    round_to_nodes,
    sub_nodes,
    value_as,
)
from chuk_tuning.literals.formatting import literal_to_string
from chuk_tuning.literals.nodes import (
    FJS,
    AbsoluteFJS,
    AspiringAbsoluteFJS,
    AspiringFJS,
    DecimalLiteral,
    IntegerLiteral,
    IntervalLiteral,
    MonzoLiteral,
    NedjiLiteral,
    natural_domain,
)

if TYPE_CHECKING:
    from chuk_tuning.intervals.registry import FragileRegistry
    from chuk_tuning.intervals.val import Val
    from chuk_tuning.models.context import FormattingContext

logger = logging.getLogger(__name__)

# Literals that carry ups and lifts
_INFLECTABLE = (FJS, AbsoluteFJS, MonzoLiteral)


def _check_domains(left: Interval, right: Union[Interval, Val], operation: str) -> None:
    if left.domain is not right.domain:
        raise DomainMismatch(
            ErrorMessages.DOMAIN_MISMATCH.format(
                operation=operation, left=left.domain.value, right=right.domain.value
            )
        )


def _check_linear(left: Interval, right: Interval, operation: str) -> None:
    if left.domain is not Domain.LINEAR or right.domain is not Domain.LINEAR:
        raise UnsupportedOperation(f"{operation.capitalize()} is only defined for linear quantities")


def _is_relative_fjs(node: Optional[IntervalLiteral]) -> bool:
    return isinstance(node, (FJS, AspiringFJS))


def _dot_result(product: Fraction, metadata: IntervalMetadata) -> Interval:
    return Interval.from_metadata(
        TimeMonzo.from_fraction(product), Domain.LINEAR, rational_literal(product), metadata
    )


@total_ordering
@dataclass(frozen=True, eq=False)
class Interval:
    """
    A musical interval: a value, its domain and an optional literal.

    Attributes:
        value: The numeric truth
        domain: Linear or logarithmic
        node: Literal used for display; dropped if it belongs to another domain
        color: Optional CSS color
        label: Optional note label
        tracking_ids: Provenance tags merged through arithmetic
    """

    value: Value
    domain: Domain
    node: Optional[IntervalLiteral] = None
    color: Optional[Color] = None
    label: str = ""
    tracking_ids: frozenset[int] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        object.__setattr__(self, "domain", Domain(self.domain))
        object.__setattr__(self, "tracking_ids", frozenset(self.tracking_ids))
        if self.domain is Domain.COLOGARITHMIC:
            raise DomainMismatch("Cologarithmic quantities are vals, not intervals")
        if self.node is not None and natural_domain(self.node) is not self.domain:
            object.__setattr__(self, "node", None)

    @classmethod
    def from_metadata(
        cls,
        value: Value,
        domain: Domain,
        node: Optional[IntervalLiteral],
        metadata: IntervalMetadata,
    ) -> Interval:
        """Create an interval carrying merged metadata."""
        return cls(value, domain, node, metadata.color, metadata.label, metadata.tracking_ids)

    @classmethod
    def from_integer(cls, value: int) -> Interval:
        """A linear integer like 5."""
        return cls(TimeMonzo.from_fraction(value), Domain.LINEAR, IntegerLiteral(value))

    @classmethod
    def from_fraction(cls, value: Union[Fraction, str]) -> Interval:
        """A linear ratio like 3/2, in lowest terms."""
        monzo = TimeMonzo.from_fraction(value)
        return cls(monzo, Domain.LINEAR, rational_literal(monzo.to_fraction()))

    @property
    def metadata(self) -> IntervalMetadata:
        return IntervalMetadata(self.color, self.label, self.tracking_ids)

    def _derive(self, value: Value, node: Optional[IntervalLiteral]) -> Interval:
        """Same domain and metadata, new value and node."""
        return Interval.from_metadata(value, self.domain, node, self.metadata)

    # Queries

    def is_relative(self) -> bool:
        return self.value.is_scalar()

    def is_absolute(self) -> bool:
        return not self.value.is_scalar()

    def to_integer(self) -> int:
        return self.value.to_integer()

    def to_fraction(self) -> Fraction:
        return self.value.to_fraction()

    def total_cents(self) -> float:
        return self.value.total_cents()

    def value_of(self) -> Union[int, float]:
        """Best-effort number: an int for integers, otherwise a float."""
        if isinstance(self.value, TimeMonzo) and self.value.is_integral():
            return self.value.to_integer()
        return self.value.value_of()

    def __float__(self) -> float:
        return float(self.value.value_of())

    # Unary operations

    def neg(self) -> Interval:
        """Negate a linear value, or reverse a logarithmic interval."""
        node = neg_node(self.node)
        if self.domain is Domain.LINEAR:
            return self._derive(self.value.neg(), node)
        return self._derive(self.value.inverse(), node)

    def inverse(self) -> Union[Interval, Val]:
        """
        Reciprocal of a linear value.

        A logarithmic interval inverts into the val that maps it to one step.
        """
        node = invert_node(self.node)
        if self.domain is Domain.LINEAR:
            return self._derive(self.value.inverse(), node)
        from chuk_tuning.intervals.val import Val

        return Val(self.value.geometric_inverse(), self.value, node)

    def abs(self) -> Interval:
        """Absolute value, or distance to unison for logarithmic intervals."""
        node = abs_node(self.node)
        if self.domain is Domain.LINEAR:
            return self._derive(self.value.abs(), node)
        return self._derive(self.value.pitch_abs(), node)

    def as_domain(self, domain: Domain) -> Interval:
        """The same value reinterpreted in another domain."""
        return Interval.from_metadata(self.value, Domain(domain), self.node, self.metadata)

    # Binary operations

    def project(self, base: Interval) -> Interval:
        """
        Move steps of the octave onto another equave.

        Returns:
            base raised to the number of octaves in this interval
        """
        node = project_nodes(self.node, base.node)
        return Interval.from_metadata(
            self.value.project(base.value), Domain.LOGARITHMIC, node, infect(self, base)
        )

    def add(self, other: Interval) -> Interval:
        """Add linear values or compose logarithmic intervals."""
        _check_domains(self, other, "addition")
        node = add_nodes(self.node, other.node)
        if self.domain is Domain.LINEAR:
            value = self.value.add(other.value)
        else:
            value = self.value.mul(other.value)
        if node is None and type(self.node) is type(other.node):
            node = value_as(value, self.node, simplify=True)
        return Interval.from_metadata(value, self.domain, node, infect(self, other))

    def sub(self, other: Interval) -> Interval:
        """Subtract linear values or take the difference of logarithmic intervals."""
        _check_domains(self, other, "subtraction")
        node = sub_nodes(self.node, other.node)
        if self.domain is Domain.LINEAR:
            value = self.value.sub(other.value)
        else:
            value = self.value.div(other.value)
        if node is None and type(self.node) is type(other.node):
            node = value_as(value, self.node, simplify=True)
        return Interval.from_metadata(value, self.domain, node, infect(self, other))

    def lsub(self, other: Interval) -> Interval:
        """Subtract from the left: other - self, keeping this interval's color and label."""
        result = other.sub(self)
        return replace(result, color=self.color or other.color, label=self.label or other.label)

    def lens_add(self, other: Interval) -> Interval:
        """
        Harmonic sum: 1 / (1/a + 1/b) for linear values.

        Logarithmic intervals combine their geometric inverses instead, so
        7\\12 lens 4\\12 is 7\\33.
        """
        _check_domains(self, other, "harmonic addition")
        node = lens_add_nodes(self.node, other.node)
        if self.domain is Domain.LINEAR:
            value = self.value.lens_add(other.value)
        else:
            value = _lens_value(self.value, other.value, 1)
        return Interval.from_metadata(value, self.domain, node, infect(self, other))

    def lens_sub(self, other: Interval) -> Interval:
        """Harmonic difference, the inverse of lens_add."""
        _check_domains(self, other, "harmonic subtraction")
        node = lens_sub_nodes(self.node, other.node)
        if self.domain is Domain.LINEAR:
            value = self.value.lens_sub(other.value)
        else:
            value = _lens_value(self.value, other.value, -1)
        return Interval.from_metadata(value, self.domain, node, infect(self, other))

    def mul(self, other: Union[Interval, Val]) -> Union[Interval, Val]:
        """
        Multiply linear values, or scale an interval or val by a linear scalar.

        Scaling a logarithmic interval raises its value to the scalar power.
        """
        if self.domain is not Domain.LINEAR and other.domain is not Domain.LINEAR:
            raise DomainMismatch(ErrorMessages.LINEAR_REQUIRED.format(operation="multiplication"))
        if other.domain is Domain.COLOGARITHMIC:
            return other.mul(self)  # type: ignore[union-attr]
        node = mul_nodes(self.node, other.node)
        metadata = infect(self, other)  # type: ignore[arg-type]
        if other.domain is Domain.LOGARITHMIC:
            return _log_lin_mul(other, self, node, metadata)  # type: ignore[arg-type]
        if self.domain is Domain.LOGARITHMIC:
            return _log_lin_mul(self, other, node, metadata)  # type: ignore[arg-type]
        return Interval.from_metadata(
            self.value.mul(other.value), self.domain, node, metadata
        )

    def div(self, other: Interval) -> Interval:
        """
        Divide linear values, take a root of a logarithmic interval, or
        measure one logarithmic interval in units of another.
        """
        if other.domain is Domain.COLOGARITHMIC:
            raise DomainMismatch(ErrorMessages.LINEAR_REQUIRED.format(operation="division"))
        node = div_nodes(self.node, other.node)
        metadata = infect(self, other)
        if other.domain is Domain.LOGARITHMIC:
            _check_domains(self, other, "non-scalar division")
            return Interval.from_metadata(
                self.value.log(other.value), Domain.LINEAR, node, metadata
            )
        if self.domain is Domain.LOGARITHMIC:
            value = self.value.pow(other.value.inverse())
            if _is_relative_fjs(self.node):
                node = AspiringFJS(infer_flavor(self.node))
            return Interval.from_metadata(value, self.domain, node, metadata)
        return Interval.from_metadata(self.value.div(other.value), self.domain, node, metadata)

    def ldiv(self, other: Interval) -> Interval:
        """Divide from the left: other / self, keeping this interval's color and label."""
        result = other.div(self)
        return replace(result, color=self.color or other.color, label=self.label or other.label)

    def dot(self, other: Union[Interval, Val]) -> Interval:
        """
        Pair prime exponents with a val (a step count) or another interval.

        Real corrections pair with a val's up count plus one, so that each
        up on the interval counts as one more step.
        """
        if other.domain is Domain.COLOGARITHMIC:
            val = other.value
            if isinstance(val, TimeMonzo):
                val = replace(val, cents=val.cents + 1)
            return _dot_result(self.value.dot(val), self.metadata)
        return _dot_result(self.value.dot(other.value), infect(self, other))  # type: ignore[arg-type]

    def pow(self, other: Interval) -> Interval:
        """Raise a linear value to a scalar power."""
        if self.domain is not Domain.LINEAR or other.domain is not Domain.LINEAR:
            raise UnsupportedOperation(ErrorMessages.INTERVAL_POWER)
        if not other.value.is_scalar():
            raise UnsupportedOperation(ErrorMessages.NON_SCALAR_POWER)
        node = pow_nodes(self.node, other.node)
        return Interval.from_metadata(
            self.value.pow(other.value), self.domain, node, infect(self, other)
        )

    def ipow(self, other: Interval) -> Interval:
        """Take the root of a linear value: 8 ipow 3 is 2."""
        if self.domain is not Domain.LINEAR or other.domain is not Domain.LINEAR:
            raise UnsupportedOperation(ErrorMessages.INTERVAL_POWER)
        if not other.value.is_scalar():
            raise UnsupportedOperation(ErrorMessages.NON_SCALAR_POWER)
        node = pow_nodes(self.node, invert_node(other.node))
        return Interval.from_metadata(
            self.value.pow(other.value.inverse()), self.domain, node, infect(self, other)
        )

    def log(self, other: Interval) -> Interval:
        """Logarithm of a linear value in the base of another."""
        _check_linear(self, other, "logarithm")
        node = log_nodes(self.node, other.node)
        return Interval.from_metadata(
            self.value.log(other.value), self.domain, node, infect(self, other)
        )

    def reduce(self, other: Interval, ceiling: bool = False) -> Interval:
        """Divide a linear value by an equave until it lies between unison and the equave."""
        _check_linear(self, other, "reduction")
        node = reduce_nodes(self.node, other.node, ceiling)
        return Interval.from_metadata(
            self.value.reduce(other.value, ceiling), self.domain, node, infect(self, other)
        )

    def mmod(self, other: Interval, ceiling: bool = False) -> Interval:
        """
        Modulo for linear values, equave reduction for logarithmic intervals.

        Args:
            other: The modulus
            ceiling: Map exact multiples to the modulus instead of zero (unison)
        """
        _check_domains(self, other, "modulo")
        node = mod_nodes(self.node, other.node, ceiling)
        if self.domain is Domain.LINEAR:
            value = self.value.mmod(other.value, ceiling)
        else:
            value = self.value.reduce(other.value, ceiling)
        return Interval.from_metadata(value, self.domain, node, infect(self, other))

    def round_to(self, other: Interval) -> Interval:
        """
        Round a linear value to a multiple of another, or a logarithmic
        interval to a whole number of steps of another.
        """
        _check_domains(self, other, "rounding")
        node = round_to_nodes(self.node, other.node)
        if self.domain is Domain.LINEAR:
            value = self.value.round_to(other.value)
        else:
            value = self.value.pitch_round_to(other.value)
        return Interval.from_metadata(value, self.domain, node, infect(self, other))

    def pitch_round_to(self, other: Interval) -> Interval:
        """Round a linear value to the nearest power of another."""
        _check_linear(self, other, "exponential rounding")
        if not other.value.is_scalar():
            raise UnsupportedOperation("Only scalar exponential rounding is implemented")
        node = pitch_round_to_nodes(self.node, other.node)
        return Interval.from_metadata(
            self.value.pitch_round_to(other.value), self.domain, node, infect(self, other)
        )

    def gcd(self, other: Interval) -> Interval:
        """Greatest common divisor of linear values, e.g. gcd(12, 18) is 6."""
        _check_linear(self, other, "gcd")
        node = gcd_nodes(self.node, other.node)
        return Interval.from_metadata(
            self.value.gcd(other.value), self.domain, node, infect(self, other)
        )

    def lcm(self, other: Interval) -> Interval:
        """Least common multiple of linear values."""
        _check_linear(self, other, "lcm")
        node = lcm_nodes(self.node, other.node)
        return Interval.from_metadata(
            self.value.lcm(other.value), self.domain, node, infect(self, other)
        )

    def backslash(self, other: Interval) -> Interval:
        """Steps of an equal division of the octave: 7 backslash 12 is 7\\12."""
        if not self.value.is_scalar() or not other.value.is_scalar():
            raise UnsupportedOperation("Only scalars can be backslashed")
        _check_linear(self, other, "backslashing")
        value = TimeMonzo.from_fraction(2).pow(self.value.div(other.value))
        node = None
        if (
            isinstance(self.value, TimeMonzo)
            and isinstance(other.value, TimeMonzo)
            and self.value.is_integral()
            and other.value.is_integral()
        ):
            node = NedjiLiteral(self.to_integer(), other.to_integer())
        return Interval.from_metadata(value, Domain.LOGARITHMIC, node, infect(self, other))

    # Comparison

    def compare(self, other: Interval) -> int:
        left, right = coerce_pair(self.value, other.value)
        return left.compare(right)

    def equals(self, other: Interval) -> bool:
        """Same size, regardless of representation or domain."""
        return self.value.equals(other.value)

    def strict_equals(self, other: Interval) -> bool:
        """Same domain and identical representation."""
        return self.domain is other.domain and self.value.strict_equals(other.value)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Interval):
            return self.equals(other)
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if isinstance(other, Interval):
            return self.compare(other) < 0
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.value)

    # Operators

    def __neg__(self) -> Interval:
        return self.neg()

    def __abs__(self) -> Interval:
        return self.abs()

    def __add__(self, other: Interval) -> Interval:
        return self.add(other)

    def __sub__(self, other: Interval) -> Interval:
        return self.sub(other)

    def __mul__(self, other: Union[Interval, Val]) -> Union[Interval, Val]:
        return self.mul(other)

    def __truediv__(self, other: Interval) -> Interval:
        return self.div(other)

    def __pow__(self, other: Interval) -> Interval:
        return self.pow(other)

    # Ups and lifts

    def _inflect(
        self,
        value: Value,
        ups: int,
        lifts: int,
        registry: Optional[FragileRegistry],
    ) -> Interval:
        if not isinstance(self.node, _INFLECTABLE):
            return self._derive(value, None)
        node = replace(self.node, ups=self.node.ups + ups, lifts=self.node.lifts + lifts)
        result = self._derive(value, node)
        if registry is not None:
            registry.track(result)
        return result

    def up(self, context: FormattingContext, registry: Optional[FragileRegistry] = None) -> Interval:
        """Raise by one up (^) of the context."""
        return self._inflect(self.value.mul(context.up_value), 1, 0, registry)

    def down(
        self, context: FormattingContext, registry: Optional[FragileRegistry] = None
    ) -> Interval:
        """Lower by one up (v) of the context."""
        return self._inflect(self.value.div(context.up_value), -1, 0, registry)

    def lift(
        self, context: FormattingContext, registry: Optional[FragileRegistry] = None
    ) -> Interval:
        """Raise by one lift (/) of the context."""
        return self._inflect(self.value.mul(context.lift_value), 0, 1, registry)

    def drop(
        self, context: FormattingContext, registry: Optional[FragileRegistry] = None
    ) -> Interval:
        """Lower by one lift (\\) of the context."""
        return self._inflect(self.value.div(context.lift_value), 0, -1, registry)

    def broken(self) -> Interval:
        """
        A copy without context-dependent spelling.

        Named intervals become aspiring again so they are re-spelled against
        the next context; monzos with ups or lifts lose their literal.
        """
        node = self.node
        if isinstance(node, FJS):
            node = AspiringFJS()
        elif isinstance(node, AbsoluteFJS):
            node = AspiringAbsoluteFJS()
        elif isinstance(node, MonzoLiteral):
            node = None
        return self._derive(self.value, node)

    # Display

    def realize_node(self, context: Optional[FormattingContext] = None) -> Realization:
        """Resolve the literal against a formatting context."""
        return realize(self.value, self.node, context)

    def str(self, context: Optional[FormattingContext] = None) -> str:
        """
        The interval as it would be written, ignoring color and label.

        Prefers the literal; falls back to the numeric rendering of the value
        when there is none or it cannot be spelled in the context.
        """
        realization = self.realize_node(context)
        if isinstance(realization, GaveUp):
            if self.node is not None:
                logger.debug("Falling back to numeric display: %s", realization.reason)
            return self.value.to_string(self.domain)
        return literal_to_string(realization.node)

    def to_string(self, context: Optional[FormattingContext] = None) -> str:
        """The interval with its color and label, if any."""
        base = self.str(context)
        if self.color is None and not self.label:
            return base
        parts = [base]
        if self.color is not None:
            parts.append(str(self.color))
        if self.label:
            parts.append(json.dumps(self.label))
        return f"({' '.join(parts)})"

    def __str__(self) -> str:
        return self.to_string()


def _lens_value(a: Value, b: Value, sign: int) -> Value:
    """Harmonic combination of logarithmic values through their geometric inverses."""
    if not a.dot(a):
        return a
    if not b.dot(b):
        return b
    if sign > 0:
        return a.geometric_inverse().mul(b.geometric_inverse()).geometric_inverse()
    return a.geometric_inverse().div(b.geometric_inverse()).geometric_inverse()


def _log_lin_mul(
    logarithmic: Interval,
    linear: Interval,
    node: Optional[IntervalLiteral],
    metadata: IntervalMetadata,
) -> Interval:
    """Scale a logarithmic interval by a linear scalar."""
    if isinstance(linear.node, DecimalLiteral) and linear.node.flavor is DecimalFlavor.REAL:
        # Real decimals scale the size in cents instead of exponentiating
        value: Value = TimeMonzo.from_cents(logarithmic.total_cents() * linear.value.value_of())
    else:
        value = logarithmic.value.pow(linear.value)
    if _is_relative_fjs(logarithmic.node):
        node = AspiringFJS(infer_flavor(logarithmic.node))
    return Interval.from_metadata(value, logarithmic.domain, node, metadata)
