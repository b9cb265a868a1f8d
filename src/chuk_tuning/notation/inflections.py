"""
Ups and lifts - splitting a real correction into notational inflections.

The up (^) and lift (/) are context-defined real-cents offsets. Whatever
cannot be expressed as a whole number of them is reported back as leftover
steps and a residue.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


def _round(x: float) -> int:
    # Halves round up, matching the inflection grammar
    return math.floor(x + 0.5)


@dataclass(frozen=True)
class UpsAndLifts:
    """Result of counting inflections in a cents offset."""

    ups: int
    lifts: int
    steps: int
    residue: float

    @property
    def is_exact(self) -> bool:
        """True if nothing was left over."""
        return self.steps == 0 and self.residue == 0


def count_ups_and_lifts(total: float, up: float, lift: float) -> UpsAndLifts:
    """
    Count how many ups and lifts make up a cents offset.

    The larger inflection is counted first. Non-positive inflection sizes
    count nothing.

    Args:
        total: Real cents to account for
        up: Size of the up inflection in cents
        lift: Size of the lift inflection in cents

    Returns:
        Counts and leftovers
    """
    if up <= 0 or lift <= 0:
        ups = lifts = 0
    elif lift > up:
        lifts = _round(total / lift)
        total -= lifts * lift
        ups = _round(total / up)
        total -= ups * up
    else:
        ups = _round(total / up)
        total -= ups * up
        lifts = _round(total / lift)
        total -= lifts * lift

    steps = _round(total)
    return UpsAndLifts(ups, lifts, steps, total - steps)
