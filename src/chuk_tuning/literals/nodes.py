"""
Literal nodes - the syntax a value was written in.

A node never owns the numeric truth; it is a hint for redisplaying a value
the way a person would have written it. Every variant is an immutable
dataclass. Two placeholder variants stand for named intervals whose
spelling has to wait for a formatting context.
"""

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from typing import Optional, Union

from chuk_tuning.constants import FJS_FLAVORS, DecimalFlavor, Domain, NodeState
from chuk_tuning.errors import MalformedLiteral

# A comma inflection: the prime it is for and the comma flavor
Inflection = tuple[int, str]

NOMINALS = "FCGDAEB"
PERFECT_BASES = frozenset({1, 4, 5})

# Accidentals by offset in apotomes (sharps)
ACCIDENTALS: dict[str, Fraction] = {
    "#": Fraction(1),
    "b": Fraction(-1),
    "x": Fraction(2),
    "t": Fraction(1, 2),  # semisharp
    "d": Fraction(-1, 2),  # semiflat
}


def _decimal_fraction(whole: int, fractional: str, exponent: int | None) -> Fraction:
    value = Fraction(int(f"{whole}{fractional}"), 10 ** len(fractional))
    if exponent:
        value *= Fraction(10) ** exponent
    return value


@dataclass(frozen=True)
class IntegerLiteral:
    """Integer like 5."""

    value: int


@dataclass(frozen=True)
class FractionLiteral:
    """Fraction like 3/2. Not reduced: 6/4 stays 6/4."""

    numerator: int
    denominator: int


@dataclass(frozen=True)
class DecimalLiteral:
    """
    Decimal number like 1.25e, 6.28r or 440z.

    The fractional digits are kept as text so that leading and trailing
    zeros survive redisplay.
    """

    whole: int
    fractional: str = ""
    exponent: Optional[int] = None
    flavor: DecimalFlavor = DecimalFlavor.PLAIN
    negative: bool = False

    def __post_init__(self) -> None:
        if self.whole < 0:
            raise MalformedLiteral(f"Use the negative flag for signs: {self.whole}")
        if self.fractional and not self.fractional.isdigit():
            raise MalformedLiteral(f"Invalid fractional digits: {self.fractional!r}")

    def to_fraction(self) -> Fraction:
        value = _decimal_fraction(self.whole, self.fractional, self.exponent)
        return -value if self.negative else value


@dataclass(frozen=True)
class CentsLiteral:
    """Size in cents like 701.955, or real cents like 1.5rc."""

    whole: int
    fractional: str = ""
    exponent: Optional[int] = None
    real: bool = False
    negative: bool = False

    def __post_init__(self) -> None:
        if self.whole < 0:
            raise MalformedLiteral(f"Use the negative flag for signs: {self.whole}")
        if self.fractional and not self.fractional.isdigit():
            raise MalformedLiteral(f"Invalid fractional digits: {self.fractional!r}")

    def to_fraction(self) -> Fraction:
        value = _decimal_fraction(self.whole, self.fractional, self.exponent)
        return -value if self.negative else value


@dataclass(frozen=True)
class CentLiteral:
    """The unit cent, written c (1c is one cent)."""

    real: bool = False


@dataclass(frozen=True)
class NedjiLiteral:
    """Steps of an equal division like 7\\12 or 13\\15<3>."""

    numerator: int
    denominator: int
    equave_numerator: Optional[int] = None
    equave_denominator: Optional[int] = None

    @property
    def equave(self) -> Fraction | None:
        """The divided interval, None for the octave."""
        if self.equave_numerator is None:
            return None
        return Fraction(self.equave_numerator, self.equave_denominator or 1)


@dataclass(frozen=True)
class Pythagorean:
    """
    A Pythagorean interval name like M3, P5, aa4 or m-3.

    Attributes:
        quality: P, M, m, n (neutral), or repeated a / d
        degree: Interval number, negative for descending intervals
    """

    quality: str
    degree: int

    def __post_init__(self) -> None:
        if self.degree == 0:
            raise MalformedLiteral("Interval degree cannot be zero")
        perfect = self.base in PERFECT_BASES
        valid = self.quality in ("P",) if perfect else self.quality in ("M", "m", "n")
        augmented = self.quality and set(self.quality) in ({"a"}, {"d"})
        if not (valid or augmented):
            raise MalformedLiteral(f"Invalid quality {self.quality!r} for degree {self.degree}")

    @property
    def base(self) -> int:
        """Degree within the octave, 1 to 7."""
        return (abs(self.degree) - 1) % 7 + 1

    @property
    def octaves(self) -> int:
        return (abs(self.degree) - 1) // 7


@dataclass(frozen=True)
class AbsolutePitch:
    """A note name like Eb4 or F#3."""

    nominal: str
    accidentals: tuple[str, ...] = ()
    octave: int = 4

    def __post_init__(self) -> None:
        if self.nominal not in NOMINALS:
            raise MalformedLiteral(f"Unknown nominal: {self.nominal!r}")
        for accidental in self.accidentals:
            if accidental not in ACCIDENTALS:
                raise MalformedLiteral(f"Unknown accidental: {accidental!r}")


def _check_inflections(inflections: tuple[Inflection, ...]) -> None:
    for prime, flavor in inflections:
        if flavor not in FJS_FLAVORS:
            raise MalformedLiteral(f"Unknown comma flavor: {flavor!r}")
        if prime < 5:
            raise MalformedLiteral(f"Cannot inflect by prime {prime}")


@dataclass(frozen=True)
class FJS:
    """
    Named relative interval like M3^5 or ^P5.

    Superscripts raise by the comma of each prime, subscripts lower by it.
    """

    pythagorean: Pythagorean
    superscripts: tuple[Inflection, ...] = ()
    subscripts: tuple[Inflection, ...] = ()
    ups: int = 0
    lifts: int = 0

    def __post_init__(self) -> None:
        _check_inflections(self.superscripts)
        _check_inflections(self.subscripts)


@dataclass(frozen=True)
class AbsoluteFJS:
    """Named absolute pitch like Eb4_5, relative to C4 of the context."""

    pitch: AbsolutePitch
    superscripts: tuple[Inflection, ...] = ()
    subscripts: tuple[Inflection, ...] = ()
    ups: int = 0
    lifts: int = 0

    def __post_init__(self) -> None:
        _check_inflections(self.superscripts)
        _check_inflections(self.subscripts)


@dataclass(frozen=True)
class MonzoLiteral:
    """Prime exponent vector like [-2 0 1> or [0 1 -1>@2.3.7."""

    components: tuple[Fraction, ...]
    basis: tuple[Fraction, ...] = ()
    ups: int = 0
    lifts: int = 0


@dataclass(frozen=True)
class ValLiteral:
    """Tuning map like <12 19 28] or <12 19 34]@2.3.7."""

    components: tuple[Fraction, ...]
    basis: tuple[Fraction, ...] = ()
    ups: int = 0
    lifts: int = 0


@dataclass(frozen=True)
class HertzLiteral:
    """The frequency unit with an optional prefix: Hz, kHz, mHz..."""

    prefix: str = ""


@dataclass(frozen=True)
class SecondLiteral:
    """The time unit with an optional prefix: s, ms, µs..."""

    prefix: str = ""


@dataclass(frozen=True)
class SquareSuperparticular:
    """
    Square superparticular shorthand.

    S9 is 81/80; S5..8 is the product S5*S6*S7*S8.
    """

    start: int
    end: Optional[int] = None

    def __post_init__(self) -> None:
        if self.start < 2:
            raise MalformedLiteral(f"Square superparticular must start at 2 or more: {self.start}")
        if self.end is not None and self.end < self.start:
            raise MalformedLiteral(f"Empty square superparticular range: {self.start}..{self.end}")


@dataclass(frozen=True)
class RadicalLiteral:
    """A rational power of a fraction, like 2^(1/3)."""

    argument: Fraction
    exponent: Fraction


@dataclass(frozen=True)
class AspiringFJS:
    """A relative named interval waiting to be spelled."""

    flavor: str = ""


@dataclass(frozen=True)
class AspiringAbsoluteFJS:
    """An absolute named pitch waiting to be spelled."""

    flavor: str = ""


ConcreteLiteral = Union[
    IntegerLiteral,
    FractionLiteral,
    DecimalLiteral,
    CentsLiteral,
    CentLiteral,
    NedjiLiteral,
    FJS,
    AbsoluteFJS,
    MonzoLiteral,
    ValLiteral,
    HertzLiteral,
    SecondLiteral,
    SquareSuperparticular,
    RadicalLiteral,
]

IntervalLiteral = Union[ConcreteLiteral, AspiringFJS, AspiringAbsoluteFJS]

_LINEAR_NODES = (
    IntegerLiteral,
    FractionLiteral,
    DecimalLiteral,
    HertzLiteral,
    SecondLiteral,
    RadicalLiteral,
)
_LOGARITHMIC_NODES = (
    CentsLiteral,
    CentLiteral,
    NedjiLiteral,
    FJS,
    AbsoluteFJS,
    MonzoLiteral,
    SquareSuperparticular,
    AspiringFJS,
    AspiringAbsoluteFJS,
)


def node_state(node: IntervalLiteral | None) -> NodeState:
    """Where a node is in its lifecycle."""
    if node is None:
        return NodeState.UNRESOLVED
    if isinstance(node, (AspiringFJS, AspiringAbsoluteFJS)):
        return NodeState.ASPIRING
    return NodeState.CONCRETE


def natural_domain(node: IntervalLiteral) -> Domain:
    """The domain a node lowers into."""
    if isinstance(node, _LINEAR_NODES):
        return Domain.LINEAR
    if isinstance(node, _LOGARITHMIC_NODES):
        return Domain.LOGARITHMIC
    return Domain.COLOGARITHMIC
