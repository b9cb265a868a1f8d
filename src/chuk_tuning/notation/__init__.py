"""
Notation codecs for named intervals.

This module provides:
- Pythagorean names and note names over the 2.3 basis
- FJS comma inflections in the formal and neutral flavors
- Ups and lifts counting against a formatting context
"""

from chuk_tuning.notation.fjs import (
    as_absolute_fjs,
    as_fjs,
    comma,
    inflect,
    uninflect,
)
from chuk_tuning.notation.inflections import UpsAndLifts, count_ups_and_lifts
from chuk_tuning.notation.pythagorean import (
    absolute_monzo,
    monzo_to_absolute,
    monzo_to_pythagorean,
    pythagorean_monzo,
)

__all__ = [
    # Pythagorean
    "pythagorean_monzo",
    "monzo_to_pythagorean",
    "absolute_monzo",
    "monzo_to_absolute",
    # FJS
    "comma",
    "inflect",
    "uninflect",
    "as_fjs",
    "as_absolute_fjs",
    # Ups and lifts
    "UpsAndLifts",
    "count_ups_and_lifts",
]
