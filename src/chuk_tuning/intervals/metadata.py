"""
Interval metadata - color, label and tracking identifiers.

Metadata rides along with arithmetic. Every binary operator merges the
metadata of its operands with infect().
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Protocol


@dataclass(frozen=True)
class Color:
    """A CSS color attached to an interval."""

    value: str

    def __str__(self) -> str:
        # Percent signs are not part of the notation
        return self.value.replace("%", "")


class HasMetadata(Protocol):
    color: Optional[Color]
    label: str
    tracking_ids: frozenset[int]


@dataclass(frozen=True)
class IntervalMetadata:
    """Merged color, label and tracking identifiers."""

    color: Optional[Color] = None
    label: str = ""
    tracking_ids: frozenset[int] = field(default_factory=frozenset)


def infect(left: HasMetadata, right: HasMetadata) -> IntervalMetadata:
    """
    Combine the metadata of two operands.

    The left operand is the preferred source: its color wins unless it has
    none, its label wins unless it is empty. Tracking identifiers are merged.

    Args:
        left: Preferred operand
        right: Secondary operand

    Returns:
        Metadata for the result
    """
    return IntervalMetadata(
        color=left.color if left.color is not None else right.color,
        label=left.label or right.label,
        tracking_ids=left.tracking_ids | right.tracking_ids,
    )
