"""
The Value union - exact or real.

Everything above the core works with a Value and never needs to know which
kind it holds: mixed operations coerce to real inside the exact type, so
the union presents one arithmetic interface.
"""

from __future__ import annotations

from fractions import Fraction
from typing import Union

from chuk_tuning.core.monzo import TimeMonzo
from chuk_tuning.core.real import TimeReal

Value = Union[TimeMonzo, TimeReal]


def is_exact(value: Value) -> bool:
    """True for exact values."""
    return isinstance(value, TimeMonzo)


def as_value(value: Value | int | Fraction | float | str) -> Value:
    """
    Coerce a plain number to a Value.

    Integers, fractions and fraction strings become exact; floats become real.
    """
    if isinstance(value, (TimeMonzo, TimeReal)):
        return value
    if isinstance(value, float):
        return TimeReal.from_value(value)
    return TimeMonzo.from_fraction(value)


def coerce_pair(left: Value, right: Value) -> tuple[Value, Value]:
    """Bring two values to a common kind: real if either one is."""
    if isinstance(left, TimeReal) or isinstance(right, TimeReal):
        return left.to_real(), right.to_real()
    return left, right
