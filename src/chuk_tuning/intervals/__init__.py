"""
Domain algebra on top of values.

This module provides:
- Interval: a value in the linear or logarithmic domain with its literal
- Val: a tuning map in the cologarithmic domain
- Color, IntervalMetadata, infect: metadata merged through arithmetic
- Realized, GaveUp, realize: spelling aspiring literals in a context
- FragileRegistry: tracking of context-dependent spellings
"""

from chuk_tuning.intervals.interval import Interval
from chuk_tuning.intervals.metadata import Color, IntervalMetadata, infect
from chuk_tuning.intervals.realization import GaveUp, Realization, Realized, realize
from chuk_tuning.intervals.registry import FragileRegistry
from chuk_tuning.intervals.val import Val

__all__ = [
    # Domain algebra
    "Interval",
    "Val",
    # Metadata
    "Color",
    "IntervalMetadata",
    "infect",
    # Realization
    "Realized",
    "GaveUp",
    "Realization",
    "realize",
    # Bookkeeping
    "FragileRegistry",
]
