"""
Interval literals - how values were written.

This module provides:
- Literal node dataclasses and their classification
- literal_to_string: canonical text of a node
- Node algebra: combining literals alongside value arithmetic
- Literal views: re-expressing a value in the syntax of a node
- lower: turning a literal into an Interval or Val
"""

from chuk_tuning.literals.algebra import (
    abs_node,
    add_nodes,
    as_cents_literal,
    as_decimal_literal,
    as_fraction_literal,
    as_integer_literal,
    as_monzo_literal,
    as_nedji_literal,
    as_radical_literal,
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
    AbsolutePitch,
    AspiringAbsoluteFJS,
    AspiringFJS,
    CentLiteral,
    CentsLiteral,
    ConcreteLiteral,
    DecimalLiteral,
    FractionLiteral,
    HertzLiteral,
    IntegerLiteral,
    IntervalLiteral,
    MonzoLiteral,
    NedjiLiteral,
    Pythagorean,
    RadicalLiteral,
    SecondLiteral,
    SquareSuperparticular,
    ValLiteral,
    natural_domain,
    node_state,
)


def __getattr__(name: str):
    """Lazy import for lowering to avoid circular dependencies."""
    if name == "lower":
        from chuk_tuning.literals.lowering import lower

        return lower
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    # Nodes
    "IntegerLiteral",
    "FractionLiteral",
    "DecimalLiteral",
    "CentsLiteral",
    "CentLiteral",
    "NedjiLiteral",
    "Pythagorean",
    "AbsolutePitch",
    "FJS",
    "AbsoluteFJS",
    "MonzoLiteral",
    "ValLiteral",
    "HertzLiteral",
    "SecondLiteral",
    "SquareSuperparticular",
    "RadicalLiteral",
    "AspiringFJS",
    "AspiringAbsoluteFJS",
    "ConcreteLiteral",
    "IntervalLiteral",
    "node_state",
    "natural_domain",
    # Formatting
    "literal_to_string",
    # Node algebra
    "add_nodes",
    "sub_nodes",
    "mul_nodes",
    "div_nodes",
    "neg_node",
    "invert_node",
    "abs_node",
    "project_nodes",
    "pow_nodes",
    "log_nodes",
    "mod_nodes",
    "reduce_nodes",
    "lens_add_nodes",
    "lens_sub_nodes",
    "round_to_nodes",
    "pitch_round_to_nodes",
    "gcd_nodes",
    "lcm_nodes",
    "infer_flavor",
    "rational_literal",
    # Literal views
    "as_integer_literal",
    "as_fraction_literal",
    "as_decimal_literal",
    "as_nedji_literal",
    "as_cents_literal",
    "as_monzo_literal",
    "as_radical_literal",
    "value_as",
    # Lowering (lazy loaded)
    "lower",
]
