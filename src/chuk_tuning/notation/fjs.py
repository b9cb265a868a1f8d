"""
FJS comma inflections.

Every prime from 5 up gets a comma that moves a Pythagorean interval onto
the nearest interval containing that prime. Two conventions are built in:

- flavor "": the formal comma of the master algorithm (radius of
  tolerance 65/63)
- flavor "n": the neutral comma, which may use half-integer powers of three
"""

from __future__ import annotations

from collections.abc import Iterable
from fractions import Fraction
from functools import lru_cache

from chuk_tuning.core.monzo import TimeMonzo
from chuk_tuning.core.primes import PRIME_CENTS, PRIMES, to_monzo, value_to_cents
from chuk_tuning.literals.nodes import FJS, AbsoluteFJS, Inflection
from chuk_tuning.notation.pythagorean import monzo_to_absolute, monzo_to_pythagorean

RADIUS_OF_TOLERANCE = value_to_cents(65 / 63)
NFJS_RADIUS = 13.5 * PRIME_CENTS[0] - 8.5 * PRIME_CENTS[1]
FIFTH = PRIME_CENTS[1] - PRIME_CENTS[0]


def circle_distance(a: float, b: float, equave: float = 1200.0) -> float:
    """Distance between two pitches modulo the equave."""
    return abs((a - b + equave / 2) % equave - equave / 2)


def _formal_master(prime_cents: float) -> Fraction:
    if circle_distance(prime_cents, 0) < RADIUS_OF_TOLERANCE:
        return Fraction(0)
    pythagoras = 0.0
    k = 0
    while True:
        pythagoras += FIFTH
        k += 1
        if circle_distance(prime_cents, pythagoras) < RADIUS_OF_TOLERANCE:
            return Fraction(k)
        if circle_distance(prime_cents, -pythagoras) < RADIUS_OF_TOLERANCE:
            return Fraction(-k)


def _neutral_master(prime_cents: float) -> Fraction:
    if circle_distance(prime_cents, 0) < NFJS_RADIUS:
        return Fraction(0)
    pythagoras = 0.0
    for k in range(1, 7):
        pythagoras += FIFTH
        if circle_distance(prime_cents, pythagoras) < NFJS_RADIUS:
            return Fraction(k)
        if circle_distance(prime_cents, -pythagoras) < NFJS_RADIUS:
            return Fraction(-k)
    pythagoras = 0.5 * FIFTH
    for k in range(1, 7):
        if circle_distance(prime_cents, pythagoras) < NFJS_RADIUS:
            return Fraction(2 * k - 1, 2)
        if circle_distance(prime_cents, -pythagoras) < NFJS_RADIUS:
            return Fraction(1 - 2 * k, 2)
        pythagoras += FIFTH
    raise ValueError("Unable to locate NFJS region")


@lru_cache(maxsize=None)
def comma(prime: int, flavor: str = "") -> TimeMonzo:
    """
    The comma that introduces a prime.

    >>> comma(5).to_fraction()
    Fraction(80, 81)
    """
    index = PRIMES.index(prime)
    if index < 2:
        return TimeMonzo.unity(2)
    master = _neutral_master if flavor == "n" else _formal_master
    threes = -master(PRIME_CENTS[index])
    twos = threes
    comma_cents = PRIME_CENTS[index] + float(twos) * PRIME_CENTS[0] + float(threes) * PRIME_CENTS[1]
    while comma_cents > 600:
        comma_cents -= PRIME_CENTS[0]
        twos -= 1
    while comma_cents < -600:
        comma_cents += PRIME_CENTS[0]
        twos += 1
    pythagorean = TimeMonzo(Fraction(0), [twos, threes])
    return pythagorean.mul(TimeMonzo.from_fraction(prime, index + 1))


def inflection(
    superscripts: Iterable[Inflection], subscripts: Iterable[Inflection]
) -> TimeMonzo:
    """Product of the commas of the superscripts over those of the subscripts."""
    result = TimeMonzo.unity(2)
    for number, flavor in superscripts:
        for i, exponent in enumerate(to_monzo(number)):
            if exponent:
                result = result.mul(comma(PRIMES[i], flavor).pow(exponent))
    for number, flavor in subscripts:
        for i, exponent in enumerate(to_monzo(number)):
            if exponent:
                result = result.div(comma(PRIMES[i], flavor).pow(exponent))
    return result


def inflect(
    pythagorean: TimeMonzo,
    superscripts: Iterable[Inflection],
    subscripts: Iterable[Inflection],
) -> TimeMonzo:
    """Apply comma inflections to a Pythagorean interval."""
    return pythagorean.mul(inflection(superscripts, subscripts))


def uninflect(
    monzo: TimeMonzo, flavor: str = ""
) -> tuple[TimeMonzo, list[Inflection], list[Inflection]]:
    """
    Split a value into a Pythagorean interval and comma inflections.

    Raises:
        ValueError: If the value has primes beyond the prime table
    """
    superscripts: list[Inflection] = []
    subscripts: list[Inflection] = []
    vector = monzo._folded().prime_exponents
    for i in range(2, len(vector)):
        count = vector[i].numerator
        if count > 0:
            superscripts.extend([(PRIMES[i], flavor)] * count)
        else:
            subscripts.extend([(PRIMES[i], flavor)] * -count)
    pythagorean = monzo.div(inflection(superscripts, subscripts))
    return pythagorean, superscripts, subscripts


def _uninflected(monzo: TimeMonzo, flavor: str) -> tuple[TimeMonzo, list, list] | None:
    if monzo.cents or not monzo.is_scalar() or monzo.residual <= 0:
        return None
    if any(e.denominator != 1 for e in monzo.prime_exponents[2:]):
        return None
    try:
        pythagorean, superscripts, subscripts = uninflect(monzo, flavor)
    except (ValueError, ArithmeticError):
        return None
    if any(pythagorean.prime_exponents[2:]) or pythagorean.residual != 1:
        return None
    return pythagorean, superscripts, subscripts


def as_fjs(monzo: TimeMonzo, flavor: str = "") -> FJS | None:
    """
    Spell a value as a relative FJS interval.

    Returns:
        The FJS node, or None if the value has no FJS spelling
    """
    parts = _uninflected(monzo, flavor)
    if parts is None:
        return None
    pythagorean, superscripts, subscripts = parts
    name = monzo_to_pythagorean(pythagorean)
    if name is None:
        return None
    return FJS(name, tuple(superscripts), tuple(subscripts))


def as_absolute_fjs(monzo: TimeMonzo, flavor: str = "") -> AbsoluteFJS | None:
    """
    Spell a value relative to C4 as an absolute FJS pitch.

    Returns:
        The AbsoluteFJS node, or None if the value has no FJS spelling
    """
    parts = _uninflected(monzo, flavor)
    if parts is None:
        return None
    pythagorean, superscripts, subscripts = parts
    pitch = monzo_to_absolute(pythagorean)
    if pitch is None:
        return None
    return AbsoluteFJS(pitch, tuple(superscripts), tuple(subscripts))
