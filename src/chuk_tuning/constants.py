"""
Constants and enums for the tuning engine.

No magic strings - use enums and Literal types for constrained values.
"""

from enum import Enum
from typing import Literal


class Domain(str, Enum):
    """
    The algebraic domain an interval lives in.

    The domain decides what operators mean: in the linear domain `+` adds
    ratios, in the logarithmic domain it composes intervals (multiplies
    ratios). Cologarithmic quantities are tuning maps (vals).
    """

    LINEAR = "linear"
    LOGARITHMIC = "logarithmic"
    COLOGARITHMIC = "cologarithmic"


class DecimalFlavor(str, Enum):
    """Flavors of decimal literals."""

    PLAIN = ""  # 1.25
    EXACT = "e"  # 1.25e
    REAL = "r"  # 1.25r - floating point, also "real cents per unit" scaling
    FREQUENCY = "z"  # 440z - a frequency in Hz


class NodeState(str, Enum):
    """
    Lifecycle of a literal node attached to a value.

    Concrete nodes are fully spelled. Aspiring nodes know their
    inflection flavor but wait for a formatting context to be spelled.
    Unresolved means there is no preserved form at all.
    """

    CONCRETE = "concrete"
    ASPIRING = "aspiring"
    UNRESOLVED = "unresolved"


# Comma flavors understood by the built-in FJS codec
FJSFlavor = Literal["", "n"]
FJS_FLAVORS: tuple[str, ...] = ("", "n")

# Primes 2..23 tracked by default
DEFAULT_NUMBER_OF_COMPONENTS = 9

# Largest sane exponent of two; other primes are scaled by their size
ABSURD_EXPONENT = 3322

# Rational powers with larger denominators are treated as irrational
MAX_POW_DENOMINATOR = 10000

# Default sizes of the up (^) and lift (/) inflections in cents
DEFAULT_UP_CENTS = 1.0
DEFAULT_LIFT_CENTS = 5.0

# SI prefixes (powers of ten)
METRIC_PREFIXES: dict[str, int] = {
    "Q": 30,
    "R": 27,
    "Y": 24,
    "Z": 21,
    "E": 18,
    "P": 15,
    "T": 12,
    "G": 9,
    "M": 6,
    "k": 3,
    "h": 2,
    "da": 1,
    "": 0,
    "d": -1,
    "c": -2,
    "m": -3,
    "µ": -6,
    "u": -6,  # ASCII stand-in for micro
    "n": -9,
    "p": -12,
    "f": -15,
    "a": -18,
    "z": -21,
    "y": -24,
    "r": -27,
    "q": -30,
}

# IEC prefixes (powers of 1024)
BINARY_PREFIXES: dict[str, int] = {
    "Ki": 1,
    "Mi": 2,
    "Gi": 3,
    "Ti": 4,
    "Pi": 5,
    "Ei": 6,
    "Zi": 7,
    "Yi": 8,
    "Ri": 9,
    "Qi": 10,
}


class ErrorMessages:
    """Message templates for raised errors."""

    DOMAIN_MISMATCH = "Domains must match in {operation}: {left} vs {right}"
    LINEAR_REQUIRED = "At least one domain must be linear in {operation}"
    DISPARATE_UNITS = "Cannot {operation} values with disparate units"
    NON_SCALAR_POWER = "Can only raise to a scalar power"
    IRRATIONAL_TIME_POWER = "Cannot raise time units to an irrational power"
    TIME_LOGARITHM = "Cannot take a scalar logarithm of a value with time units"
    NO_LOGARITHM = "No logarithm exists between {left} and {right}"
    RESIDUAL_DOT = "Residuals prevent calculating the dot product"
    REAL_DOT = "Real values have no prime vector to pair"
    REAL_DIVISORS = "Real values have no prime vector to take the {operation} of"
    NO_GEOMETRIC_INVERSE = "No geometric inverse exists for {value}"
    UNISON_REDUCTION = "Cannot reduce by a unison"
    ABSURD_EXPONENT = "Exponent of {prime} exceeds the absurdity bound: {exponent}"
    ABSURD_RESIDUAL = "Residual exceeds the absurdity bound"
    ABSURD_MAGNITUDE = "Magnitude exceeds the absurdity bound"
    IRRATIONAL_FRACTION = "Unable to convert irrational number to fraction"
    NOT_AN_INTEGER = "Value is not an integer: {value}"
    NOT_SCALAR = "Value has time units: {value}"
    ZERO_DENOMINATOR = "Zero denominator in {literal}"
    INVALID_EQUAVE = "Invalid equave in {literal}"
    SUBGROUP_LENGTH = "Too many components for the given subgroup: {count} > {basis}"
    SUBGROUP_MISMATCH = "Val components must match the subgroup: {count} != {basis}"
    NON_PRIME_BASIS = "Subgroup basis element {element} is not a prime"
    UNKNOWN_PREFIX = "Unknown unit prefix: {prefix!r}"
    ASPIRING_NODE = "Aspiring nodes must be realized before use"
    OVERFLOWING_LITERAL = "Literal out of range: {literal}"
    TIME_VAL = "Only relative vals implemented: {value}"
    EQUAVE_MISMATCH = "Val equaves must match in {operation}"
    VAL_SCALAR = "Vals can only be scaled by linear scalars"
    INTERVAL_POWER = "Exponentiation is only defined for linear quantities"
    INVALID_NUMBER_OF_COMPONENTS = "Number of components must be between 1 and {limit}: {value}"
