"""
Numeric core - exact and real values.

This module provides:
- TimeMonzo: exact prime exponent vectors with a residual and time units
- TimeReal: the floating point fallback
- Value: the union of the two
- Prime tables and exact number helpers
"""

from chuk_tuning.core.monzo import TimeMonzo
from chuk_tuning.core.primes import (
    PRIME_CENTS,
    PRIMES,
    cents_to_value,
    prime_limit,
    to_monzo,
    to_monzo_and_residual,
    value_to_cents,
)
from chuk_tuning.core.real import TimeReal
from chuk_tuning.core.value import Value, as_value, coerce_pair, is_exact

__all__ = [
    # Values
    "TimeMonzo",
    "TimeReal",
    "Value",
    "as_value",
    "coerce_pair",
    "is_exact",
    # Primes
    "PRIMES",
    "PRIME_CENTS",
    "cents_to_value",
    "prime_limit",
    "to_monzo",
    "to_monzo_and_residual",
    "value_to_cents",
]
