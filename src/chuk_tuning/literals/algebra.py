"""
Node algebra - keeping the written form through arithmetic.

Every interval operator has a node function that looks at the literals of
its operands and tries to produce a literal for the result. The functions
never raise. They return None ("no preserved form") whenever an operand has
no literal or the combination has no safe spelling; the result is then
displayed from its numeric value instead.

A returned literal must lower to the same value as the numeric result.
Named intervals whose spelling depends on a formatting context come back
as aspiring placeholders.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Sequence
from dataclasses import replace
from fractions import Fraction
from typing import Optional

from chuk_tuning.config import get_settings
from chuk_tuning.constants import DecimalFlavor
from chuk_tuning.core.monzo import TimeMonzo
from chuk_tuning.core.primes import decimal_string, is_decimal_fraction
from chuk_tuning.core.value import Value
from chuk_tuning.errors import TuningError
from chuk_tuning.literals.nodes import (
    FJS,
    AbsoluteFJS,
    AspiringAbsoluteFJS,
    AspiringFJS,
    CentsLiteral,
    DecimalLiteral,
    FractionLiteral,
    IntegerLiteral,
    IntervalLiteral,
    MonzoLiteral,
    NedjiLiteral,
    RadicalLiteral,
    ValLiteral,
)

logger = logging.getLogger(__name__)

Node = Optional[IntervalLiteral]

_RELATIVE = (FJS, AspiringFJS)
_ABSOLUTE = (AbsoluteFJS, AspiringAbsoluteFJS)


# Flavors


def _flavors(node: IntervalLiteral) -> set[str]:
    if isinstance(node, (AspiringFJS, AspiringAbsoluteFJS)):
        return {node.flavor}
    if isinstance(node, (FJS, AbsoluteFJS)):
        return {flavor for _, flavor in node.superscripts + node.subscripts}
    return set()


def infer_flavor(a: Node, b: Node = None) -> str:
    """
    The comma flavor shared by the named operands.

    Falls back to the default flavor when the operands disagree or carry
    no inflections at all.
    """
    flavors: set[str] = set()
    for node in (a, b):
        if node is not None:
            flavors |= _flavors(node)
    if len(flavors) == 1:
        return flavors.pop()
    return ""


# Exact literal views


def _exact(node: IntervalLiteral) -> Fraction | None:
    if isinstance(node, IntegerLiteral):
        return Fraction(node.value)
    if isinstance(node, FractionLiteral) and node.denominator:
        return Fraction(node.numerator, node.denominator)
    return None


def _cents(node: IntervalLiteral) -> Fraction | None:
    if isinstance(node, CentsLiteral) and not node.real:
        return node.to_fraction()
    return None


def _steps(node: NedjiLiteral) -> Fraction | None:
    if not node.denominator or node.equave_denominator == 0:
        return None
    return Fraction(node.numerator, node.denominator)


def _split_decimal(value: Fraction) -> tuple[bool, int, str]:
    text = decimal_string(value)
    negative = text.startswith("-")
    whole, _, fractional = text.lstrip("-").partition(".")
    return negative, int(whole), fractional


def decimal_literal(
    value: Fraction, flavor: DecimalFlavor = DecimalFlavor.PLAIN
) -> DecimalLiteral | None:
    """A decimal literal for a terminating fraction."""
    if flavor is DecimalFlavor.REAL or not is_decimal_fraction(value):
        return None
    negative, whole, fractional = _split_decimal(value)
    return DecimalLiteral(whole, fractional, None, flavor, negative)


def cents_literal(cents: Fraction) -> CentsLiteral | None:
    """A cents literal for a terminating number of cents."""
    if not is_decimal_fraction(cents):
        return None
    negative, whole, fractional = _split_decimal(cents)
    return CentsLiteral(whole, fractional or "0", None, False, negative)


def rational_literal(value: Fraction) -> IntegerLiteral | FractionLiteral:
    """An integer literal if possible, otherwise a reduced fraction literal."""
    if value.denominator == 1:
        return IntegerLiteral(value.numerator)
    return FractionLiteral(value.numerator, value.denominator)


def _same_equave(a: NedjiLiteral, b: NedjiLiteral) -> bool:
    return a.equave == b.equave


def _combine_nedji(
    a: NedjiLiteral, b: NedjiLiteral, op: Callable[[int, int], int]
) -> NedjiLiteral | None:
    if not _same_equave(a, b) or _steps(a) is None or _steps(b) is None:
        return None
    denominator = math.lcm(a.denominator, b.denominator)
    numerator = op(
        a.numerator * (denominator // a.denominator),
        b.numerator * (denominator // b.denominator),
    )
    return replace(a, numerator=numerator, denominator=denominator)


def _combine_vectors(
    a: Sequence[Fraction], b: Sequence[Fraction], op: Callable[[Fraction, Fraction], Fraction]
) -> tuple[Fraction, ...]:
    size = max(len(a), len(b))
    a = list(a) + [Fraction(0)] * (size - len(a))
    b = list(b) + [Fraction(0)] * (size - len(b))
    return tuple(op(x, y) for x, y in zip(a, b))


def _combine_monzos(
    a: MonzoLiteral | ValLiteral, b: MonzoLiteral | ValLiteral, sign: int
) -> MonzoLiteral | ValLiteral | None:
    if type(a) is not type(b) or a.basis != b.basis:
        return None
    if a.basis and len(a.components) != len(b.components):
        return None
    components = _combine_vectors(a.components, b.components, lambda x, y: x + sign * y)
    return replace(
        a,
        components=components,
        ups=a.ups + sign * b.ups,
        lifts=a.lifts + sign * b.lifts,
    )


def _scale_node(node: IntervalLiteral, factor: int) -> Node:
    """The node of a logarithmic value raised to an integer power."""
    if isinstance(node, CentsLiteral) and not node.real:
        return cents_literal(node.to_fraction() * factor)
    if isinstance(node, NedjiLiteral):
        return replace(node, numerator=node.numerator * factor)
    if isinstance(node, (MonzoLiteral, ValLiteral)):
        return replace(
            node,
            components=tuple(c * factor for c in node.components),
            ups=node.ups * factor,
            lifts=node.lifts * factor,
        )
    if isinstance(node, _RELATIVE):
        return AspiringFJS(infer_flavor(node))
    return None


# Node functions


def add_nodes(a: Node, b: Node) -> Node:
    """
    Literal for a sum.

    >>> add_nodes(NedjiLiteral(4, 12), NedjiLiteral(2, 12))
    NedjiLiteral(numerator=6, denominator=12, equave_numerator=None, equave_denominator=None)
    """
    if a is None or b is None:
        return None
    if isinstance(a, IntegerLiteral) and isinstance(b, IntegerLiteral):
        return IntegerLiteral(a.value + b.value)
    if isinstance(a, FractionLiteral) and isinstance(b, FractionLiteral):
        if a.denominator == b.denominator:
            return FractionLiteral(a.numerator + b.numerator, a.denominator)
        return FractionLiteral(
            a.numerator * b.denominator + b.numerator * a.denominator,
            a.denominator * b.denominator,
        )
    if isinstance(a, DecimalLiteral) and isinstance(b, DecimalLiteral):
        if a.flavor is not b.flavor:
            return None
        return decimal_literal(a.to_fraction() + b.to_fraction(), a.flavor)
    if _cents(a) is not None and _cents(b) is not None:
        return cents_literal(_cents(a) + _cents(b))
    if isinstance(a, NedjiLiteral) and isinstance(b, NedjiLiteral):
        return _combine_nedji(a, b, lambda x, y: x + y)
    if isinstance(a, (MonzoLiteral, ValLiteral)) and isinstance(b, (MonzoLiteral, ValLiteral)):
        return _combine_monzos(a, b, 1)
    if isinstance(a, _RELATIVE) and isinstance(b, _RELATIVE):
        return AspiringFJS(infer_flavor(a, b))
    if isinstance(a, _ABSOLUTE) and isinstance(b, _RELATIVE):
        return AspiringAbsoluteFJS(infer_flavor(a, b))
    if isinstance(a, _RELATIVE) and isinstance(b, _ABSOLUTE):
        return AspiringAbsoluteFJS(infer_flavor(a, b))
    return None


def sub_nodes(a: Node, b: Node) -> Node:
    """Literal for a difference."""
    if a is None or b is None:
        return None
    if isinstance(a, IntegerLiteral) and isinstance(b, IntegerLiteral):
        return IntegerLiteral(a.value - b.value)
    if isinstance(a, FractionLiteral) and isinstance(b, FractionLiteral):
        if a.denominator == b.denominator:
            return FractionLiteral(a.numerator - b.numerator, a.denominator)
        return FractionLiteral(
            a.numerator * b.denominator - b.numerator * a.denominator,
            a.denominator * b.denominator,
        )
    if isinstance(a, DecimalLiteral) and isinstance(b, DecimalLiteral):
        if a.flavor is not b.flavor:
            return None
        return decimal_literal(a.to_fraction() - b.to_fraction(), a.flavor)
    if _cents(a) is not None and _cents(b) is not None:
        return cents_literal(_cents(a) - _cents(b))
    if isinstance(a, NedjiLiteral) and isinstance(b, NedjiLiteral):
        return _combine_nedji(a, b, lambda x, y: x - y)
    if isinstance(a, (MonzoLiteral, ValLiteral)) and isinstance(b, (MonzoLiteral, ValLiteral)):
        return _combine_monzos(a, b, -1)
    if isinstance(a, _RELATIVE) and isinstance(b, _RELATIVE):
        return AspiringFJS(infer_flavor(a, b))
    if isinstance(a, _ABSOLUTE) and isinstance(b, _RELATIVE):
        return AspiringAbsoluteFJS(infer_flavor(a, b))
    if isinstance(a, _ABSOLUTE) and isinstance(b, _ABSOLUTE):
        # The distance between two pitches is a relative interval
        return AspiringFJS(infer_flavor(a, b))
    return None


def mul_nodes(a: Node, b: Node) -> Node:
    """Literal for a product, or for a logarithmic literal scaled by an integer."""
    if a is None or b is None:
        return None
    x, y = _exact(a), _exact(b)
    if x is not None and y is not None:
        if isinstance(a, IntegerLiteral) and isinstance(b, IntegerLiteral):
            return IntegerLiteral(a.value * b.value)
        # Keep the written denominators: 1/2 * 2/3 is 2/6
        numerator = (a.numerator if isinstance(a, FractionLiteral) else a.value) * (
            b.numerator if isinstance(b, FractionLiteral) else b.value
        )
        denominator = (a.denominator if isinstance(a, FractionLiteral) else 1) * (
            b.denominator if isinstance(b, FractionLiteral) else 1
        )
        return FractionLiteral(numerator, denominator)
    if isinstance(a, IntegerLiteral):
        return _scale_node(b, a.value)
    if isinstance(b, IntegerLiteral):
        return _scale_node(a, b.value)
    if isinstance(a, _RELATIVE) or isinstance(b, _RELATIVE):
        if isinstance(a, _ABSOLUTE) or isinstance(b, _ABSOLUTE):
            return None
        return AspiringFJS(infer_flavor(a, b))
    return None


def div_nodes(a: Node, b: Node) -> Node:
    """Literal for a quotient, a root of a logarithmic literal, or a ratio of steps."""
    if a is None or b is None:
        return None
    x, y = _exact(a), _exact(b)
    if x is not None and y is not None:
        if not y:
            return None
        if isinstance(a, IntegerLiteral) and isinstance(b, IntegerLiteral):
            if b.value < 0:
                return FractionLiteral(-a.value, -b.value)
            return FractionLiteral(a.value, b.value)
        return rational_literal(x / y)
    if isinstance(a, NedjiLiteral) and isinstance(b, NedjiLiteral):
        if not _same_equave(a, b):
            return None
        numerator, denominator = _steps(a), _steps(b)
        if numerator is None or not denominator:
            return None
        return rational_literal(numerator / denominator)
    if _cents(a) is not None and _cents(b):
        return rational_literal(_cents(a) / _cents(b))
    if isinstance(a, NedjiLiteral) and isinstance(b, IntegerLiteral) and b.value:
        sign = 1 if b.value > 0 else -1
        return replace(a, numerator=sign * a.numerator, denominator=a.denominator * abs(b.value))
    if isinstance(a, _RELATIVE) and x is None and y is not None:
        return AspiringFJS(infer_flavor(a))
    return None


def neg_node(node: Node) -> Node:
    """Literal for a negated (linear) or reversed (logarithmic) value."""
    if node is None:
        return None
    if isinstance(node, IntegerLiteral):
        return IntegerLiteral(-node.value)
    if isinstance(node, FractionLiteral):
        return FractionLiteral(-node.numerator, node.denominator)
    if isinstance(node, (DecimalLiteral, CentsLiteral)):
        if isinstance(node, CentsLiteral) and node.real:
            return None
        return replace(node, negative=not node.negative)
    if isinstance(node, NedjiLiteral):
        return replace(node, numerator=-node.numerator)
    if isinstance(node, (MonzoLiteral, ValLiteral)):
        return _scale_node(node, -1)
    if isinstance(node, _RELATIVE):
        # M3 reversed is spelled m-3, so the name has to be rebuilt
        return AspiringFJS(infer_flavor(node))
    return None


def invert_node(node: Node) -> Node:
    """Literal for a reciprocal."""
    if isinstance(node, IntegerLiteral) and node.value:
        if node.value < 0:
            return FractionLiteral(-1, -node.value)
        return FractionLiteral(1, node.value)
    if isinstance(node, FractionLiteral) and node.numerator:
        if node.numerator < 0:
            return FractionLiteral(-node.denominator, -node.numerator)
        return FractionLiteral(node.denominator, node.numerator)
    return None


def abs_node(node: Node) -> Node:
    """Literal for an absolute value (linear) or a distance to unison (logarithmic)."""
    if node is None:
        return None
    if isinstance(node, IntegerLiteral):
        return IntegerLiteral(abs(node.value))
    if isinstance(node, FractionLiteral):
        return FractionLiteral(abs(node.numerator), abs(node.denominator))
    if isinstance(node, DecimalLiteral):
        return replace(node, negative=False)
    if isinstance(node, CentsLiteral) and not node.real:
        return replace(node, negative=False)
    if isinstance(node, NedjiLiteral):
        equave = node.equave
        if _steps(node) is None or (equave is not None and equave <= 1):
            return None
        return replace(node, numerator=abs(node.numerator), denominator=abs(node.denominator))
    if isinstance(node, _RELATIVE):
        return AspiringFJS(infer_flavor(node))
    return None


def project_nodes(a: Node, base: Node) -> Node:
    """Literal for steps of the octave moved onto a new equave: 5\\12 onto 3 is 5\\12<3>."""
    if not isinstance(a, NedjiLiteral) or a.equave is not None or base is None:
        return None
    equave = _exact(base)
    if equave is None or equave <= 0:
        return None
    return replace(
        a,
        equave_numerator=equave.numerator,
        equave_denominator=None if equave.denominator == 1 else equave.denominator,
    )


def pow_nodes(a: Node, b: Node) -> Node:
    """Literal for a linear power."""
    if a is None or b is None:
        return None
    base, exponent = _exact(a), _exact(b)
    if base is None or exponent is None:
        return None
    if exponent.denominator == 1:
        bits = max(base.numerator.bit_length(), base.denominator.bit_length())
        if bits * abs(exponent) > get_settings().absurd_exponent:
            return None
        if not base and exponent < 0:
            return None
        result = base**exponent.numerator
        if isinstance(a, IntegerLiteral) and exponent >= 0:
            return IntegerLiteral(result.numerator)
        return FractionLiteral(result.numerator, result.denominator)
    if base <= 0:
        return None
    return RadicalLiteral(base, exponent)


def _through_values(
    a: Node, b: Node, op: Callable[[TimeMonzo, TimeMonzo], Value]
) -> Node:
    x, y = (_exact(n) if n is not None else None for n in (a, b))
    if x is None or y is None:
        return None
    try:
        result = op(TimeMonzo.from_fraction(x), TimeMonzo.from_fraction(y))
        if not isinstance(result, TimeMonzo) or not result.is_fractional():
            return None
        return rational_literal(result.to_fraction())
    except (TuningError, ArithmeticError, ValueError) as exc:
        logger.debug("No literal for %s and %s: %s", a, b, exc)
        return None


def log_nodes(a: Node, b: Node) -> Node:
    """Literal for a logarithm, when it is rational."""
    return _through_values(a, b, lambda x, y: x.log(y))


def mod_nodes(a: Node, b: Node, ceiling: bool = False) -> Node:
    """Literal for a modulo (linear) or an equave reduction of steps (logarithmic)."""
    if a is None or b is None:
        return None
    if isinstance(a, NedjiLiteral) and isinstance(b, NedjiLiteral):
        if not _same_equave(a, b) or _steps(a) is None or not _steps(b):
            return None
        denominator = math.lcm(a.denominator, b.denominator)
        x = a.numerator * (denominator // a.denominator)
        y = b.numerator * (denominator // b.denominator)
        remainder = x % y
        if ceiling and remainder == 0:
            remainder = y
        return replace(a, numerator=remainder, denominator=denominator)
    x, y = _cents(a), _cents(b)
    if x is not None and y:
        remainder = x % y
        if ceiling and remainder == 0:
            remainder = y
        return cents_literal(remainder)
    return _through_values(a, b, lambda p, q: p.mmod(q, ceiling))


def reduce_nodes(a: Node, b: Node, ceiling: bool = False) -> Node:
    """Literal for an equave reduced ratio."""
    return _through_values(a, b, lambda p, q: p.reduce(q, ceiling))


def _lens_steps(
    a: Node, b: Node, op: Callable[[Fraction, Fraction], Fraction]
) -> Node:
    """Harmonic combination of steps or cents: 1 / op(1/x, 1/y)."""
    if isinstance(a, NedjiLiteral) and isinstance(b, NedjiLiteral):
        if not _same_equave(a, b):
            return None
        x, y = _steps(a), _steps(b)
        if x is None or y is None:
            return None
    else:
        x, y = _cents(a), _cents(b)
        if x is None or y is None:
            return None
    # A unison absorbs the other operand
    if not x:
        return a
    if not y:
        return b
    denominator = op(1 / x, 1 / y)
    if not denominator:
        return None
    steps = 1 / denominator
    if isinstance(a, NedjiLiteral):
        return replace(a, numerator=steps.numerator, denominator=steps.denominator)
    return cents_literal(steps)


def lens_add_nodes(a: Node, b: Node) -> Node:
    """
    Literal for a harmonic sum.

    >>> lens_add_nodes(IntegerLiteral(2), IntegerLiteral(3))
    FractionLiteral(numerator=6, denominator=5)
    """
    if a is None or b is None:
        return None
    if _exact(a) is not None:
        return _through_values(a, b, lambda p, q: p.lens_add(q))
    return _lens_steps(a, b, lambda x, y: x + y)


def lens_sub_nodes(a: Node, b: Node) -> Node:
    """Literal for a harmonic difference."""
    if a is None or b is None:
        return None
    if _exact(a) is not None:
        return _through_values(a, b, lambda p, q: p.lens_sub(q))
    return _lens_steps(a, b, lambda x, y: x - y)


def round_to_nodes(a: Node, b: Node) -> Node:
    """Literal for a value rounded to a multiple (linear) or a number of steps (logarithmic)."""
    if a is None or b is None:
        return None
    if isinstance(a, NedjiLiteral) and isinstance(b, NedjiLiteral):
        if not _same_equave(a, b):
            return None
        x, y = _steps(a), _steps(b)
        if x is None or not y:
            return None
        return replace(b, numerator=math.floor(x / y + Fraction(1, 2)) * b.numerator)
    x, y = _cents(a), _cents(b)
    if x is not None and y:
        return cents_literal(math.floor(x / y + Fraction(1, 2)) * y)
    return _through_values(a, b, lambda p, q: p.round_to(q))


def pitch_round_to_nodes(a: Node, b: Node) -> Node:
    """Literal for a value rounded to a power of another."""
    return _through_values(a, b, lambda p, q: p.pitch_round_to(q))


def gcd_nodes(a: Node, b: Node) -> Node:
    return _through_values(a, b, lambda p, q: p.gcd(q))


def lcm_nodes(a: Node, b: Node) -> Node:
    return _through_values(a, b, lambda p, q: p.lcm(q))


# Values as literals


def as_integer_literal(value: Value) -> IntegerLiteral | None:
    if isinstance(value, TimeMonzo) and value.is_scalar() and value.is_integral():
        return IntegerLiteral(value.to_integer())
    return None


def as_fraction_literal(value: Value, node: FractionLiteral | None = None) -> FractionLiteral | None:
    """
    A fraction literal, keeping the common factor of a reference literal.

    With 6/4 as the reference, 4/3 is spelled 8/6. With 1/6 it is also 8/6,
    because the reference denominator is a multiple of 3.
    """
    if not isinstance(value, TimeMonzo) or not value.is_scalar() or not value.is_fractional():
        return None
    fraction = value.to_fraction()
    if node is None or not node.denominator:
        return FractionLiteral(fraction.numerator, fraction.denominator)
    factor = math.gcd(node.numerator, node.denominator)
    if factor == 1 and node.denominator % fraction.denominator == 0:
        factor = abs(node.denominator // fraction.denominator)
    return FractionLiteral(fraction.numerator * factor, fraction.denominator * factor)


def as_decimal_literal(
    value: Value, flavor: DecimalFlavor = DecimalFlavor.PLAIN
) -> DecimalLiteral | None:
    if not isinstance(value, TimeMonzo) or not value.is_decimal():
        return None
    expected = -1 if flavor is DecimalFlavor.FREQUENCY else 0
    if value.time_exponent != expected:
        return None
    return decimal_literal(value.to_fraction(), flavor)


def as_nedji_literal(value: Value, node: NedjiLiteral | None = None) -> NedjiLiteral | None:
    """
    Steps of an equal division, keeping the division of a reference literal.

    With 4\\12 as the reference, 1\\2 is spelled 6\\12.
    """
    if not isinstance(value, TimeMonzo) or not value.is_equal_temperament():
        return None
    fraction, equave = value.to_equal_temperament()
    if node is None:
        if equave not in (1, 2):
            return None
        return NedjiLiteral(fraction.numerator, fraction.denominator)
    if equave != 1 and equave != (node.equave or 2):
        return None
    if node.denominator and math.lcm(fraction.denominator, node.denominator) == abs(node.denominator):
        numerator = fraction.numerator * (node.denominator // fraction.denominator)
        return replace(node, numerator=numerator)
    return replace(node, numerator=fraction.numerator, denominator=fraction.denominator)


def as_cents_literal(value: Value) -> CentsLiteral | None:
    if not isinstance(value, TimeMonzo) or not value.is_power_of_two():
        return None
    octaves = value.prime_exponents[0] if value.prime_exponents else Fraction(0)
    return cents_literal(octaves * 1200)


def as_monzo_literal(value: Value) -> MonzoLiteral | None:
    if not isinstance(value, TimeMonzo) or not value.is_equal_temperament():
        return None
    components = list(value.prime_exponents)
    while components and not components[-1]:
        components.pop()
    return MonzoLiteral(tuple(components))


def as_radical_literal(value: Value) -> RadicalLiteral | None:
    if not isinstance(value, TimeMonzo) or not value.is_equal_temperament():
        return None
    fraction, equave = value.to_equal_temperament()
    return RadicalLiteral(equave, fraction)


def value_as(value: Value, node: Node, simplify: bool = False) -> Node:
    """
    Spell a value in the same kind of literal as a reference node.

    Args:
        value: The value to spell
        node: Reference literal deciding the kind
        simplify: Ignore the formatting details of the reference

    Returns:
        A literal of the reference kind, an aspiring placeholder for named
        intervals, or None
    """
    if node is None:
        return None
    if isinstance(node, IntegerLiteral):
        return as_integer_literal(value)
    if isinstance(node, FractionLiteral):
        return as_fraction_literal(value, None if simplify else node)
    if isinstance(node, DecimalLiteral):
        return as_decimal_literal(value, node.flavor)
    if isinstance(node, NedjiLiteral):
        return as_nedji_literal(value, None if simplify and node.equave is None else node)
    if isinstance(node, CentsLiteral) and not node.real:
        return as_cents_literal(value)
    if isinstance(node, MonzoLiteral) and not node.basis:
        return as_monzo_literal(value)
    if isinstance(node, RadicalLiteral):
        return as_radical_literal(value)
    if isinstance(node, _RELATIVE):
        return AspiringFJS(infer_flavor(node))
    if isinstance(node, _ABSOLUTE):
        return AspiringAbsoluteFJS(infer_flavor(node))
    return None
