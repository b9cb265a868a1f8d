"""
Text rendering of literal nodes.
"""

from __future__ import annotations

from collections.abc import Sequence
from fractions import Fraction

from chuk_tuning.constants import ErrorMessages
from chuk_tuning.errors import MalformedLiteral
from chuk_tuning.literals.nodes import (
    FJS,
    AbsoluteFJS,
    AbsolutePitch,
    AspiringAbsoluteFJS,
    AspiringFJS,
    CentLiteral,
    CentsLiteral,
    DecimalLiteral,
    FractionLiteral,
    HertzLiteral,
    Inflection,
    IntegerLiteral,
    IntervalLiteral,
    MonzoLiteral,
    NedjiLiteral,
    Pythagorean,
    RadicalLiteral,
    SecondLiteral,
    SquareSuperparticular,
    ValLiteral,
)


def inflection_prefix(ups: int, lifts: int) -> str:
    """
    Arrows for ups and lifts, lifts first.

    >>> inflection_prefix(2, -1)
    '\\\\^^'
    """
    prefix = "/" * lifts if lifts >= 0 else "\\" * -lifts
    return prefix + ("^" * ups if ups >= 0 else "v" * -ups)


def _decimal_digits(whole: int, fractional: str, exponent: int | None) -> str:
    text = f"{whole}.{fractional}" if fractional else str(whole)
    if exponent is not None:
        text += f"e{exponent}"
    return text


def _inflections(inflections: Sequence[Inflection], mark: str) -> str:
    if not inflections:
        return ""
    return mark + ",".join(f"{prime}{flavor}" for prime, flavor in inflections)


def _components(components: Sequence[Fraction]) -> str:
    return " ".join(str(c) for c in components)


def _basis(basis: Sequence[Fraction]) -> str:
    if not basis:
        return ""
    return "@" + ".".join(str(b) for b in basis)


def pythagorean_to_string(node: Pythagorean) -> str:
    return f"{node.quality}{node.degree}"


def pitch_to_string(pitch: AbsolutePitch) -> str:
    return f"{pitch.nominal}{''.join(pitch.accidentals)}{pitch.octave}"


def literal_to_string(node: IntervalLiteral) -> str:
    """
    Render a concrete literal node.

    Args:
        node: Any concrete literal

    Returns:
        The node as it would be written

    Raises:
        MalformedLiteral: For aspiring nodes, which must be realized first
    """
    if isinstance(node, IntegerLiteral):
        return str(node.value)
    if isinstance(node, FractionLiteral):
        return f"{node.numerator}/{node.denominator}"
    if isinstance(node, DecimalLiteral):
        sign = "-" if node.negative else ""
        return f"{sign}{_decimal_digits(node.whole, node.fractional, node.exponent)}{node.flavor.value}"
    if isinstance(node, CentsLiteral):
        sign = "-" if node.negative else ""
        text = f"{node.whole}.{node.fractional}"
        if node.exponent is not None:
            text += f"e{node.exponent}"
        return f"{sign}{text}{'rc' if node.real else ''}"
    if isinstance(node, CentLiteral):
        return "rc" if node.real else "c"
    if isinstance(node, NedjiLiteral):
        text = f"{node.numerator}\\{node.denominator}"
        if node.equave is not None:
            text += f"<{node.equave}>"
        return text
    if isinstance(node, FJS):
        return (
            inflection_prefix(node.ups, node.lifts)
            + pythagorean_to_string(node.pythagorean)
            + _inflections(node.superscripts, "^")
            + _inflections(node.subscripts, "_")
        )
    if isinstance(node, AbsoluteFJS):
        return (
            inflection_prefix(node.ups, node.lifts)
            + pitch_to_string(node.pitch)
            + _inflections(node.superscripts, "^")
            + _inflections(node.subscripts, "_")
        )
    if isinstance(node, MonzoLiteral):
        prefix = inflection_prefix(node.ups, node.lifts)
        return f"{prefix}[{_components(node.components)}>{_basis(node.basis)}"
    if isinstance(node, ValLiteral):
        prefix = inflection_prefix(node.ups, node.lifts)
        return f"{prefix}<{_components(node.components)}]{_basis(node.basis)}"
    if isinstance(node, HertzLiteral):
        return f"{node.prefix}Hz"
    if isinstance(node, SecondLiteral):
        return f"{node.prefix}s"
    if isinstance(node, SquareSuperparticular):
        if node.end is None:
            return f"S{node.start}"
        return f"S{node.start}..{node.end}"
    if isinstance(node, RadicalLiteral):
        return f"{node.argument}^({node.exponent})"
    if isinstance(node, (AspiringFJS, AspiringAbsoluteFJS)):
        raise MalformedLiteral(ErrorMessages.ASPIRING_NODE)
    raise MalformedLiteral(f"Unknown literal: {node!r}")
