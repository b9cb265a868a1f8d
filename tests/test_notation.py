"""
Tests for notation codecs.

Tests cover:
- Pythagorean interval names and note names (pythagorean.py)
- FJS commas, inflection and spelling (fjs.py)
- Counting ups and lifts (inflections.py)
"""

from fractions import Fraction

import pytest

from chuk_tuning.core import TimeMonzo
from chuk_tuning.core.primes import value_to_cents
from chuk_tuning.literals import AbsolutePitch, Pythagorean, literal_to_string
from chuk_tuning.notation import (
    absolute_monzo,
    as_absolute_fjs,
    as_fjs,
    comma,
    count_ups_and_lifts,
    inflect,
    monzo_to_absolute,
    monzo_to_pythagorean,
    pythagorean_monzo,
    uninflect,
)


def fraction(value: Fraction) -> TimeMonzo:
    return TimeMonzo.from_fraction(value)


class TestPythagorean:
    """Tests for Pythagorean names."""

    def test_major_third(self) -> None:
        assert pythagorean_monzo(Pythagorean("M", 3)).to_fraction() == Fraction(81, 64)

    def test_descending_minor_third(self) -> None:
        assert pythagorean_monzo(Pythagorean("m", -3)).to_fraction() == Fraction(27, 32)

    def test_octave(self) -> None:
        assert pythagorean_monzo(Pythagorean("P", 8)).to_fraction() == 2

    def test_neutral_third(self) -> None:
        """Neutral intervals use half-integer exponents."""
        monzo = pythagorean_monzo(Pythagorean("n", 3))
        assert monzo.prime_exponents[:2] == (Fraction(-1, 2), Fraction(1, 2))

    def test_doubly_augmented_fourth(self) -> None:
        monzo = pythagorean_monzo(Pythagorean("aa", 4))
        assert monzo.prime_exponents[:2] == (-20, 13)
        assert monzo_to_pythagorean(monzo) == Pythagorean("aa", 4)

    def test_name_fifth(self) -> None:
        assert monzo_to_pythagorean(fraction(Fraction(3, 2))) == Pythagorean("P", 5)

    def test_name_descending(self) -> None:
        assert monzo_to_pythagorean(fraction(Fraction(32, 81))) == Pythagorean("M", -10)

    def test_unnamed(self) -> None:
        """Half an octave has no whole stepspan."""
        root = TimeMonzo.from_equal_temperament(Fraction(1, 2))
        assert monzo_to_pythagorean(root) is None


class TestAbsolutePitch:
    """Tests for note names relative to C4."""

    def test_fifth_above(self) -> None:
        assert absolute_monzo(AbsolutePitch("G")).to_fraction() == Fraction(3, 2)

    def test_flat(self) -> None:
        assert absolute_monzo(AbsolutePitch("E", ("b",))).to_fraction() == Fraction(32, 27)

    def test_octave(self) -> None:
        assert absolute_monzo(AbsolutePitch("C", (), 5)).to_fraction() == 2

    def test_name(self) -> None:
        assert monzo_to_absolute(fraction(Fraction(3, 2))) == AbsolutePitch("G", (), 4)
        assert monzo_to_absolute(fraction(Fraction(32, 27))) == AbsolutePitch("E", ("b",), 4)
        assert monzo_to_absolute(fraction(Fraction(1, 2))) == AbsolutePitch("C", (), 3)


class TestCommas:
    """Tests for FJS commas."""

    def test_syntonic_comma(self) -> None:
        assert comma(5).to_fraction() == Fraction(80, 81)

    def test_septimal_comma(self) -> None:
        assert comma(7).to_fraction() == Fraction(63, 64)

    def test_no_comma_for_three(self) -> None:
        assert comma(3).is_unity()

    def test_neutral_comma(self) -> None:
        """The neutral comma of 11 is the square root of 242/243."""
        neutral = comma(11, "n")
        assert neutral.prime_exponents[:2] == (Fraction(1, 2), Fraction(-5, 2))
        assert neutral.total_cents() == pytest.approx(value_to_cents(242 / 243) / 2)

    def test_inflect(self) -> None:
        major = pythagorean_monzo(Pythagorean("M", 3))
        assert inflect(major, [(5, "")], []).to_fraction() == Fraction(5, 4)
        assert inflect(major, [], [(5, "")]).to_fraction() == Fraction(6561, 5120)

    def test_composite_inflection(self) -> None:
        """A superscript 25 applies the comma of 5 twice."""
        unison = TimeMonzo.unity()
        assert inflect(unison, [(25, "")], []).to_fraction() == Fraction(6400, 6561)

    def test_uninflect(self) -> None:
        pythagorean, superscripts, subscripts = uninflect(fraction(Fraction(5, 4)))
        assert pythagorean.to_fraction() == Fraction(81, 64)
        assert superscripts == [(5, "")]
        assert subscripts == []


class TestSpelling:
    """Tests for spelling values as FJS."""

    def test_major_third(self) -> None:
        assert literal_to_string(as_fjs(fraction(Fraction(5, 4)))) == "M3^5"

    def test_harmonic_seventh(self) -> None:
        assert literal_to_string(as_fjs(fraction(Fraction(7, 4)))) == "m7^7"

    def test_descending(self) -> None:
        assert literal_to_string(as_fjs(fraction(Fraction(4, 5)))) == "M-3_5"

    def test_pythagorean(self) -> None:
        assert literal_to_string(as_fjs(fraction(Fraction(3, 2)))) == "P5"

    def test_absolute(self) -> None:
        assert literal_to_string(as_absolute_fjs(fraction(Fraction(5, 4)))) == "E4^5"

    def test_no_spelling(self) -> None:
        """Irrational and negative values have no FJS spelling."""
        assert as_fjs(TimeMonzo.from_equal_temperament(Fraction(1, 2))) is None
        assert as_fjs(fraction(Fraction(-5, 4))) is None
        assert as_fjs(TimeMonzo.from_cents(1.0)) is None


class TestUpsAndLifts:
    """Tests for counting inflections."""

    def test_exact(self) -> None:
        """Lifts (the larger inflection) are counted first."""
        counts = count_ups_and_lifts(7.0, 1.0, 5.0)
        assert (counts.ups, counts.lifts) == (2, 1)
        assert counts.is_exact

    def test_leftover(self) -> None:
        counts = count_ups_and_lifts(0.5, 1.0, 5.0)
        assert counts.ups == 1
        assert counts.residue == -0.5
        assert not counts.is_exact

    def test_negative(self) -> None:
        counts = count_ups_and_lifts(-2.0, 1.0, 5.0)
        assert (counts.ups, counts.lifts) == (-2, 0)
        assert counts.is_exact

    def test_degenerate_sizes(self) -> None:
        """Non-positive inflection sizes count nothing."""
        counts = count_ups_and_lifts(3.0, 0.0, 5.0)
        assert (counts.ups, counts.lifts, counts.steps) == (0, 0, 3)
        assert not counts.is_exact
