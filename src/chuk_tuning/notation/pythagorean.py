"""
Pythagorean names - the 3-limit skeleton of FJS.

Interval names (P5, M3, aa4, n3) and note names (C4, Eb3, F#5) map onto
vectors of twos and threes. Only whole stepspans are named here; anything
else reports "no name" so the caller can fall back to a numeric form.
"""

from __future__ import annotations

import math
from fractions import Fraction

from chuk_tuning.core.monzo import TimeMonzo
from chuk_tuning.literals.nodes import ACCIDENTALS, PERFECT_BASES, AbsolutePitch, Pythagorean

F = Fraction
Vector = tuple[Fraction, Fraction]

# (twos, threes) of the central interval of each degree
PYTH_VECTORS: tuple[Vector, ...] = (
    (F(0), F(0)),
    (F(5, 2), F(-3, 2)),
    (F(-1, 2), F(1, 2)),
    (F(2), F(-1)),
    (F(-1), F(1)),
    (F(3, 2), F(-1, 2)),
    (F(-3, 2), F(3, 2)),
)

# Apotome, and the half apotomes separating major and minor from neutral
AUGMENTED: Vector = (F(-11), F(7))
MAJOR: Vector = (F(-11, 2), F(7, 2))

NOMINAL_VECTORS: dict[str, Vector] = {
    "F": (F(2), F(-1)),
    "C": (F(0), F(0)),
    "G": (F(-1), F(1)),
    "D": (F(-3), F(2)),
    "A": (F(-4), F(3)),
    "E": (F(-6), F(4)),
    "B": (F(-7), F(5)),
}

# Nominals by stepspan from C
PURE_NOMINALS = "CDEFGAB"

IMPERFECT_BY_OFFSET: dict[Fraction, str] = {
    F(3, 2): "a",
    F(1, 2): "M",
    F(0): "n",
    F(-1, 2): "m",
    F(-3, 2): "d",
}

ACCIDENTALS_BY_OFFSET: dict[Fraction, str] = {
    apotomes: symbol for symbol, apotomes in ACCIDENTALS.items()
}

PERFECT_BY_OFFSET: dict[Fraction, str] = {
    F(1): "a",
    F(0): "P",
    F(-1): "d",
}

# Largest offset from the center worth naming
MAX_OFFSET = F(100)


def _twos_and_threes(monzo: TimeMonzo) -> Vector:
    return monzo.exponent_of(2), monzo.exponent_of(3)


def pythagorean_monzo(node: Pythagorean) -> TimeMonzo:
    """
    Value of a Pythagorean interval name.

    >>> pythagorean_monzo(Pythagorean("M", 3)).to_fraction()
    Fraction(81, 64)
    """
    twos, threes = PYTH_VECTORS[node.base - 1]
    imperfect = node.base not in PERFECT_BASES
    quality = node.quality

    if imperfect and quality[0] in "ad":
        # Augmented and diminished imperfects sit half an apotome past major/minor
        sign = 1 if quality[0] == "a" else -1
        twos -= sign * F(11, 2)
        threes += sign * F(7, 2)

    twos += node.octaves

    if quality[0] in "ad":
        sign = 1 if quality[0] == "a" else -1
        twos += sign * len(quality) * AUGMENTED[0]
        threes += sign * len(quality) * AUGMENTED[1]
    elif quality == "M":
        twos += MAJOR[0]
        threes += MAJOR[1]
    elif quality == "m":
        twos -= MAJOR[0]
        threes -= MAJOR[1]

    result = TimeMonzo(F(0), [twos, threes])
    if node.degree < 0:
        return result.inverse()
    return result


def monzo_to_pythagorean(monzo: TimeMonzo) -> Pythagorean | None:
    """
    Name the 3-limit part of a value.

    Returns:
        The interval name, or None if the value has no plain name
    """
    twos, threes = _twos_and_threes(monzo)
    stepspan = twos * 7 + threes * 11
    if stepspan.denominator != 1:
        return None
    negative = stepspan < 0
    if negative:
        stepspan, twos, threes = -stepspan, -twos, -threes
    steps = stepspan.numerator
    base = steps % 7 + 1
    octaves = steps // 7
    off_center = (threes - PYTH_VECTORS[base - 1][1]) / 7
    if abs(off_center) > MAX_OFFSET:
        return None

    augmentations = ""
    if base in PERFECT_BASES:
        limit, table = F(1), PERFECT_BY_OFFSET
    else:
        limit, table = F(3, 2), IMPERFECT_BY_OFFSET
    while off_center < -limit:
        augmentations += "d"
        off_center += 1
    while off_center > limit:
        augmentations += "a"
        off_center -= 1
    quality = table.get(off_center)
    if quality is None:
        return None
    if augmentations:
        if quality != augmentations[0]:
            return None
        quality = augmentations + quality

    degree = base + 7 * octaves
    return Pythagorean(quality, -degree if negative else degree)


def absolute_monzo(pitch: AbsolutePitch) -> TimeMonzo:
    """
    Value of a note name relative to C4.

    >>> absolute_monzo(AbsolutePitch("G", (), 4)).to_fraction()
    Fraction(3, 2)
    """
    twos, threes = NOMINAL_VECTORS[pitch.nominal]
    for accidental in pitch.accidentals:
        apotomes = ACCIDENTALS[accidental]
        twos += AUGMENTED[0] * apotomes
        threes += AUGMENTED[1] * apotomes
    twos += pitch.octave - 4
    return TimeMonzo(F(0), [twos, threes])


def monzo_to_absolute(monzo: TimeMonzo) -> AbsolutePitch | None:
    """
    Name the 3-limit part of a value as a note relative to C4.

    Returns:
        The note name, or None if the value has no plain name
    """
    twos, threes = _twos_and_threes(monzo)
    stepspan = twos * 7 + threes * 11
    if stepspan.denominator != 1:
        return None
    steps = stepspan.numerator
    nominal = PURE_NOMINALS[steps % 7]
    octave = math.floor(steps / 7) + 4
    off_center = (threes - NOMINAL_VECTORS[nominal][1]) / 7
    if abs(off_center) > MAX_OFFSET:
        return None

    accidentals: list[str] = []
    while off_center < -2:
        accidentals.extend("bb")
        off_center += 2
    while off_center > 2:
        accidentals.append("x")
        off_center -= 2
    if off_center < -1:
        accidentals.insert(0, "b")
        off_center += 1
    elif off_center > 1:
        accidentals.insert(0, "#")
        off_center -= 1
    if off_center:
        symbol = ACCIDENTALS_BY_OFFSET.get(off_center)
        if symbol is None:
            return None
        accidentals.insert(0, symbol)
    return AbsolutePitch(nominal, tuple(accidentals), octave)
