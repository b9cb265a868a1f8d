"""
Vals - tuning maps in the cologarithmic domain.

A val maps an interval to a number of steps through the dot product. It is
measured against an equave; the val's step count for the equave is its
number of divisions.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from fractions import Fraction
from typing import TYPE_CHECKING, Optional, Union

from chuk_tuning.constants import DecimalFlavor, Domain, ErrorMessages
from chuk_tuning.core.monzo import TimeMonzo
from chuk_tuning.core.value import Value
from chuk_tuning.errors import DomainMismatch, UnsupportedOperation
from chuk_tuning.intervals.interval import Interval
from chuk_tuning.literals.algebra import add_nodes, mul_nodes, neg_node, rational_literal, sub_nodes
from chuk_tuning.literals.formatting import literal_to_string
from chuk_tuning.literals.nodes import DecimalLiteral, IntervalLiteral, ValLiteral, natural_domain

if TYPE_CHECKING:
    from chuk_tuning.intervals.registry import FragileRegistry
    from chuk_tuning.models.context import FormattingContext


@dataclass(frozen=True, eq=False)
class Val:
    """
    A tuning map.

    Attributes:
        value: The map as a value whose prime exponents are step counts
        equave: Interval of equivalence the map is measured against
        node: Literal used for display; only val literals are kept
    """

    value: Value
    equave: Value
    node: Optional[IntervalLiteral] = None

    def __post_init__(self) -> None:
        if not self.value.is_scalar() or not self.equave.is_scalar():
            raise UnsupportedOperation(ErrorMessages.TIME_VAL.format(value=self.value))
        if self.node is not None and natural_domain(self.node) is not Domain.COLOGARITHMIC:
            object.__setattr__(self, "node", None)

    @property
    def domain(self) -> Domain:
        return Domain.COLOGARITHMIC

    @property
    def divisions(self) -> Fraction:
        """Steps per equave; an integer for well-formed vals."""
        return self.value.dot(self.equave)

    def _check_equave(self, other: Val, operation: str) -> None:
        if not self.equave.strict_equals(other.equave):
            raise DomainMismatch(ErrorMessages.EQUAVE_MISMATCH.format(operation=operation))

    @staticmethod
    def _check_scalar(other: Interval) -> None:
        if other.domain is not Domain.LINEAR or not other.value.is_scalar():
            raise UnsupportedOperation(ErrorMessages.VAL_SCALAR)

    # Unary operations

    def neg(self) -> Val:
        return Val(self.value.inverse(), self.equave, neg_node(self.node))

    def inverse(self) -> Interval:
        """The logarithmic interval this val maps to one step."""
        return Interval(self.value.geometric_inverse(), Domain.LOGARITHMIC)

    def abs(self) -> Val:
        return Val(self.value.pitch_abs(), self.equave)

    # Binary operations

    def add(self, other: Val) -> Val:
        """Sum of maps over the same equave."""
        self._check_equave(other, "addition")
        return Val(self.value.mul(other.value), self.equave, add_nodes(self.node, other.node))

    def sub(self, other: Val) -> Val:
        """Difference of maps over the same equave."""
        self._check_equave(other, "subtraction")
        return Val(self.value.div(other.value), self.equave, sub_nodes(self.node, other.node))

    def mul(self, other: Interval) -> Val:
        """
        Scale by a linear scalar.

        A real-flavored decimal scalar like 1.5r scales the size of the map
        in cents rather than raising it to a power.
        """
        self._check_scalar(other)
        if isinstance(other.node, DecimalLiteral) and other.node.flavor is DecimalFlavor.REAL:
            size = self.value.total_cents() * 1200**-2
            return Val(TimeMonzo.from_cents(size * other.value.value_of()), self.equave)
        return Val(self.value.pow(other.value), self.equave, mul_nodes(self.node, other.node))

    def div(self, other: Interval) -> Val:
        """Scale by the reciprocal of a linear scalar."""
        self._check_scalar(other)
        return Val(self.value.pow(other.value.inverse()), self.equave)

    def dot(self, other: Union[Interval, Val]) -> Interval:
        """Map an interval to steps, or pair two vals."""
        if isinstance(other, Interval):
            return other.dot(self)
        product = self.value.dot(other.value)
        return Interval(TimeMonzo.from_fraction(product), Domain.LINEAR, rational_literal(product))

    # Comparison

    def equals(self, other: Val) -> bool:
        return self.value.equals(other.value) and self.equave.equals(other.equave)

    def strict_equals(self, other: Val) -> bool:
        return self.value.strict_equals(other.value) and self.equave.strict_equals(other.equave)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Val):
            return self.equals(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.value, self.equave))

    # Operators

    def __neg__(self) -> Val:
        return self.neg()

    def __abs__(self) -> Val:
        return self.abs()

    def __add__(self, other: Val) -> Val:
        return self.add(other)

    def __sub__(self, other: Val) -> Val:
        return self.sub(other)

    def __mul__(self, other: Interval) -> Val:
        return self.mul(other)

    def __truediv__(self, other: Interval) -> Val:
        return self.div(other)

    # Ups and lifts

    def _inflect(
        self, value: Value, ups: int, lifts: int, registry: Optional[FragileRegistry]
    ) -> Val:
        if not isinstance(self.node, ValLiteral):
            return Val(value, self.equave)
        node = replace(self.node, ups=self.node.ups + ups, lifts=self.node.lifts + lifts)
        result = Val(value, self.equave, node)
        if registry is not None:
            registry.track(result)
        return result

    def up(self, context: FormattingContext, registry: Optional[FragileRegistry] = None) -> Val:
        """Map up arrows on intervals more aggressively."""
        return self._inflect(self.value.mul(context.up_value), 1, 0, registry)

    def down(self, context: FormattingContext, registry: Optional[FragileRegistry] = None) -> Val:
        return self._inflect(self.value.div(context.up_value), -1, 0, registry)

    def lift(self, context: FormattingContext, registry: Optional[FragileRegistry] = None) -> Val:
        """Map lifts on intervals more aggressively."""
        return self._inflect(self.value.mul(context.lift_value), 0, 1, registry)

    def drop(self, context: FormattingContext, registry: Optional[FragileRegistry] = None) -> Val:
        return self._inflect(self.value.div(context.lift_value), 0, -1, registry)

    def broken(self) -> Val:
        """A copy without its literal."""
        return Val(self.value, self.equave)

    # Display

    def to_string(self) -> str:
        if self.node is not None:
            return literal_to_string(self.node)
        result = self.value.to_string(Domain.COLOGARITHMIC)
        if not self.equave.equals(TimeMonzo.from_fraction(2)):
            return f"withEquave({result}, {self.equave.to_string()})"
        return result

    def __str__(self) -> str:
        return self.to_string()
