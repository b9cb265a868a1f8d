"""
Realization - spelling aspiring nodes against a formatting context.

A node is concrete, aspiring or absent. Realization maps all three onto one
of two outcomes: a concrete literal, or a reason for giving up. Giving up
is not an error; the caller displays the numeric value instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Optional, Union

from chuk_tuning.constants import NodeState
from chuk_tuning.core.monzo import TimeMonzo
from chuk_tuning.core.value import Value
from chuk_tuning.literals.nodes import (
    AspiringAbsoluteFJS,
    ConcreteLiteral,
    IntervalLiteral,
    node_state,
)
from chuk_tuning.notation import as_absolute_fjs, as_fjs, count_ups_and_lifts

if TYPE_CHECKING:
    from chuk_tuning.models.context import FormattingContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Realized:
    """A concrete literal ready for display."""

    node: ConcreteLiteral


@dataclass(frozen=True)
class GaveUp:
    """No literal fits; display the numeric value."""

    reason: str


Realization = Union[Realized, GaveUp]


def _strip_inflections(
    value: TimeMonzo, context: FormattingContext
) -> tuple[TimeMonzo, int, int] | GaveUp:
    counts = count_ups_and_lifts(value.cents, context.up, context.lift)
    if not counts.is_exact:
        return GaveUp(f"{value.cents} cents are not a whole number of ups and lifts")
    return replace(value, cents=0.0), counts.ups, counts.lifts


def realize(
    value: Value,
    node: Optional[IntervalLiteral],
    context: Optional[FormattingContext] = None,
) -> Realization:
    """
    Resolve the literal of a value.

    Args:
        value: The numeric truth
        node: The attached literal, if any
        context: Inflection sizes and C4; required for absolute pitches and
            for relative intervals carrying a real correction

    Returns:
        Realized with a concrete literal, or GaveUp with a reason
    """
    state = node_state(node)
    if state is NodeState.UNRESOLVED:
        return GaveUp("no literal")
    if state is NodeState.CONCRETE:
        return Realized(node)  # type: ignore[arg-type]

    if isinstance(node, AspiringAbsoluteFJS):
        if context is None:
            return GaveUp("absolute pitches need a context")
        relative = value.div(context.c4)
        if not isinstance(relative, TimeMonzo):
            return GaveUp("pitch is not exact relative to C4")
        stripped = _strip_inflections(relative, context)
        if isinstance(stripped, GaveUp):
            return stripped
        relative, ups, lifts = stripped
        spelled = as_absolute_fjs(relative, node.flavor)
        if spelled is None:
            logger.debug("No absolute FJS spelling for %s", relative)
            return GaveUp("no absolute FJS spelling")
        return Realized(replace(spelled, ups=ups, lifts=lifts))

    if not isinstance(value, TimeMonzo):
        return GaveUp("real values have no FJS spelling")
    ups = lifts = 0
    if value.cents:
        if context is None:
            return GaveUp("real corrections need a context")
        stripped = _strip_inflections(value, context)
        if isinstance(stripped, GaveUp):
            return stripped
        value, ups, lifts = stripped
    spelled = as_fjs(value, node.flavor)  # type: ignore[union-attr]
    if spelled is None:
        logger.debug("No FJS spelling for %s", value)
        return GaveUp("no FJS spelling")
    return Realized(replace(spelled, ups=ups, lifts=lifts))
