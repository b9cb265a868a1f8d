"""
Exception types raised by the tuning engine.

Every failure is local and synchronous: an operation either returns a new
value or raises one of these, leaving its operands untouched. Each class also
derives from the closest builtin so callers can catch either family.
"""


class TuningError(Exception):
    """Base class for tuning engine errors."""


class DomainMismatch(TuningError, TypeError):
    """Raised when an operator is applied across incompatible domains."""


class NumericOverflow(TuningError, OverflowError):
    """Raised when an exponent or magnitude exceeds the absurdity bound."""


class MalformedLiteral(TuningError, ValueError):
    """Raised when a literal node has invalid components."""


class NotRepresentable(MalformedLiteral):
    """
    Raised at conversion boundaries.

    Computations silently degrade to real values; asking such a value for
    an exact fraction or integer is where the failure surfaces.
    """


class UnsupportedOperation(TuningError, TypeError):
    """Raised when an operation is not defined for the given operands."""
