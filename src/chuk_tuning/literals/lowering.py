"""
Lowering - turning literal nodes into intervals.

Each concrete literal lowers to exactly one Interval (or Val) that keeps
the literal for display. Invalid components raise MalformedLiteral; so do
literals too large for the absurdity bound, and aspiring placeholders,
which only ever result from arithmetic.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from fractions import Fraction
from typing import Any, Optional, Union

from chuk_tuning.config import get_settings
from chuk_tuning.constants import BINARY_PREFIXES, METRIC_PREFIXES, DecimalFlavor, Domain, ErrorMessages
from chuk_tuning.core.monzo import TimeMonzo
from chuk_tuning.core.primes import PRIMES
from chuk_tuning.core.real import TimeReal
from chuk_tuning.core.value import Value
from chuk_tuning.errors import MalformedLiteral, NumericOverflow
from chuk_tuning.intervals import FragileRegistry, Interval, Val
from chuk_tuning.literals.formatting import literal_to_string
from chuk_tuning.literals.nodes import (
    FJS,
    AbsoluteFJS,
    AspiringAbsoluteFJS,
    AspiringFJS,
    CentLiteral,
    CentsLiteral,
    DecimalLiteral,
    FractionLiteral,
    HertzLiteral,
    IntegerLiteral,
    IntervalLiteral,
    MonzoLiteral,
    NedjiLiteral,
    RadicalLiteral,
    SecondLiteral,
    SquareSuperparticular,
    ValLiteral,
)
from chuk_tuning.models.context import FormattingContext
from chuk_tuning.notation import absolute_monzo, inflect, pythagorean_monzo

logger = logging.getLogger(__name__)

Lowered = Union[Interval, Val]


def _malformed(template: str, node: Any, **kwargs: Any) -> MalformedLiteral:
    return MalformedLiteral(template.format(literal=node, **kwargs))


def _with_inflections(value: Value, ups: int, lifts: int, context: FormattingContext) -> Value:
    if ups:
        value = value.mul(context.up_value.pow(ups))
    if lifts:
        value = value.mul(context.lift_value.pow(lifts))
    return value


def _unit_scale(prefix: str, node: Any) -> Fraction:
    if prefix in METRIC_PREFIXES:
        return Fraction(10) ** METRIC_PREFIXES[prefix]
    if prefix in BINARY_PREFIXES:
        return Fraction(1024) ** BINARY_PREFIXES[prefix]
    raise MalformedLiteral(ErrorMessages.UNKNOWN_PREFIX.format(prefix=prefix))


def _vector(components: Sequence[Fraction]) -> TimeMonzo:
    size = max(len(components), get_settings().number_of_components)
    padded = list(components) + [Fraction(0)] * (size - len(components))
    return TimeMonzo(Fraction(0), padded)


# Linear literals


def _lower_integer(node: IntegerLiteral, context: FormattingContext) -> Lowered:
    return Interval(TimeMonzo.from_fraction(node.value), Domain.LINEAR, node)


def _lower_fraction(node: FractionLiteral, context: FormattingContext) -> Lowered:
    if not node.denominator:
        raise _malformed(ErrorMessages.ZERO_DENOMINATOR, literal_to_string(node))
    value = TimeMonzo.from_fraction(Fraction(node.numerator, node.denominator))
    return Interval(value, Domain.LINEAR, node)


def _lower_decimal(node: DecimalLiteral, context: FormattingContext) -> Lowered:
    fraction = node.to_fraction()
    value: Value
    if node.flavor is DecimalFlavor.REAL:
        value = TimeReal.from_value(float(fraction))
    elif node.flavor is DecimalFlavor.FREQUENCY:
        value = TimeMonzo.from_fractional_frequency(fraction)
    else:
        value = TimeMonzo.from_fraction(fraction)
    return Interval(value, Domain.LINEAR, node)


def _lower_hertz(node: HertzLiteral, context: FormattingContext) -> Lowered:
    value = TimeMonzo.from_fractional_frequency(_unit_scale(node.prefix, node))
    return Interval(value, Domain.LINEAR, node)


def _lower_second(node: SecondLiteral, context: FormattingContext) -> Lowered:
    scale = TimeMonzo.from_fraction(_unit_scale(node.prefix, node))
    value = TimeMonzo(Fraction(1), scale.prime_exponents, scale.residual)
    return Interval(value, Domain.LINEAR, node)


def _lower_radical(node: RadicalLiteral, context: FormattingContext) -> Lowered:
    if node.argument <= 0:
        raise _malformed(ErrorMessages.INVALID_EQUAVE, literal_to_string(node))
    value = TimeMonzo.from_equal_temperament(node.exponent, node.argument)
    return Interval(value, Domain.LINEAR, node)


# Logarithmic literals


def _lower_cents(node: CentsLiteral, context: FormattingContext) -> Lowered:
    cents = node.to_fraction()
    if node.real:
        return Interval(TimeMonzo.from_cents(float(cents)), Domain.LOGARITHMIC, node)
    value = TimeMonzo.from_equal_temperament(cents / 1200)
    return Interval(value, Domain.LOGARITHMIC, node)


def _lower_cent(node: CentLiteral, context: FormattingContext) -> Lowered:
    if node.real:
        return Interval(TimeMonzo.from_cents(1.0), Domain.LOGARITHMIC, node)
    value = TimeMonzo.from_equal_temperament(Fraction(1, 1200))
    return Interval(value, Domain.LOGARITHMIC, node)


def _lower_nedji(node: NedjiLiteral, context: FormattingContext) -> Lowered:
    if not node.denominator or node.equave_denominator == 0:
        raise _malformed(ErrorMessages.ZERO_DENOMINATOR, literal_to_string(node))
    equave = node.equave if node.equave is not None else Fraction(2)
    if equave <= 0:
        raise _malformed(ErrorMessages.INVALID_EQUAVE, literal_to_string(node))
    value = TimeMonzo.from_equal_temperament(Fraction(node.numerator, node.denominator), equave)
    return Interval(value, Domain.LOGARITHMIC, node)


def _lower_fjs(node: FJS, context: FormattingContext) -> Lowered:
    value = inflect(pythagorean_monzo(node.pythagorean), node.superscripts, node.subscripts)
    value = _with_inflections(value, node.ups, node.lifts, context)
    return Interval(value, Domain.LOGARITHMIC, node)


def _lower_absolute_fjs(node: AbsoluteFJS, context: FormattingContext) -> Lowered:
    relative = inflect(absolute_monzo(node.pitch), node.superscripts, node.subscripts)
    value = _with_inflections(context.c4.mul(relative), node.ups, node.lifts, context)
    return Interval(value, Domain.LOGARITHMIC, node)


def _lower_monzo(node: MonzoLiteral, context: FormattingContext) -> Lowered:
    if node.basis:
        if len(node.components) > len(node.basis):
            raise MalformedLiteral(
                ErrorMessages.SUBGROUP_LENGTH.format(
                    count=len(node.components), basis=len(node.basis)
                )
            )
        if any(element <= 0 for element in node.basis):
            raise _malformed(ErrorMessages.INVALID_EQUAVE, literal_to_string(node))
        value: Value = TimeMonzo.from_subgroup(node.components, node.basis)
    else:
        value = _vector(node.components)
    value = _with_inflections(value, node.ups, node.lifts, context)
    return Interval(value, Domain.LOGARITHMIC, node)


def _lower_square_superparticular(node: SquareSuperparticular, context: FormattingContext) -> Lowered:
    start = node.start
    if node.end is None:
        ratio = Fraction(start * start, start * start - 1)
    else:
        # The product telescopes
        ratio = Fraction(start * node.end, (start - 1) * (node.end + 1))
    return Interval(TimeMonzo.from_fraction(ratio), Domain.LOGARITHMIC, node)


# Cologarithmic literals


def _lower_val(node: ValLiteral, context: FormattingContext) -> Lowered:
    if node.basis:
        if len(node.components) != len(node.basis):
            raise MalformedLiteral(
                ErrorMessages.SUBGROUP_MISMATCH.format(
                    count=len(node.components), basis=len(node.basis)
                )
            )
        indices = []
        for element in node.basis:
            if element.denominator != 1 or element.numerator not in PRIMES:
                raise MalformedLiteral(ErrorMessages.NON_PRIME_BASIS.format(element=element))
            indices.append(PRIMES.index(element.numerator))
        components = [Fraction(0)] * (max(indices) + 1)
        for index, component in zip(indices, node.components):
            components[index] = Fraction(component)
        equave = TimeMonzo.from_fraction(node.basis[0])
    else:
        components = list(node.components)
        equave = TimeMonzo.from_fraction(2)
    value = _with_inflections(_vector(components), node.ups, node.lifts, context)
    return Val(value, equave, node)


def _lower_aspiring(node: Union[AspiringFJS, AspiringAbsoluteFJS], context: FormattingContext) -> Lowered:
    raise MalformedLiteral(ErrorMessages.ASPIRING_NODE)


_LOWERERS: dict[type, Callable[[Any, FormattingContext], Lowered]] = {
    IntegerLiteral: _lower_integer,
    FractionLiteral: _lower_fraction,
    DecimalLiteral: _lower_decimal,
    HertzLiteral: _lower_hertz,
    SecondLiteral: _lower_second,
    RadicalLiteral: _lower_radical,
    CentsLiteral: _lower_cents,
    CentLiteral: _lower_cent,
    NedjiLiteral: _lower_nedji,
    FJS: _lower_fjs,
    AbsoluteFJS: _lower_absolute_fjs,
    MonzoLiteral: _lower_monzo,
    SquareSuperparticular: _lower_square_superparticular,
    ValLiteral: _lower_val,
    AspiringFJS: _lower_aspiring,
    AspiringAbsoluteFJS: _lower_aspiring,
}


def lower(
    node: IntervalLiteral,
    context: Optional[FormattingContext] = None,
    registry: Optional[FragileRegistry] = None,
) -> Lowered:
    """
    Lower a literal node into an interval or val.

    Args:
        node: A concrete literal
        context: Inflection sizes and C4 for named and inflected literals
            (default: a context with default sizes and C4 at unity)
        registry: Tracks results spelled with ups or lifts

    Returns:
        An Interval, or a Val for val literals, carrying the node

    Raises:
        MalformedLiteral: If the node has invalid components, overflows,
            or is an aspiring placeholder
    """
    lowerer = _LOWERERS.get(type(node))
    if lowerer is None:
        raise MalformedLiteral(f"Unknown literal: {node!r}")
    context = context if context is not None else FormattingContext()
    try:
        result = lowerer(node, context)
    except NumericOverflow as exc:
        raise MalformedLiteral(ErrorMessages.OVERFLOWING_LITERAL.format(literal=node)) from exc

    ups = getattr(node, "ups", 0)
    lifts = getattr(node, "lifts", 0)
    if registry is not None and (ups or lifts):
        registry.track(result)
    logger.debug("Lowered %s to %s", type(node).__name__, result.value)
    return result
