"""
Tests for lowering literals into intervals (literals/lowering.py).

Tests cover:
- Linear literals: integers, fractions, decimals, units, radicals
- Logarithmic literals: cents, equal divisions, FJS, monzos, square superparticulars
- Vals and their subgroups
- Malformed and overflowing literals
- Tracking of inflected literals
"""

from fractions import Fraction

import pytest

from chuk_tuning.constants import DecimalFlavor, Domain
from chuk_tuning.core import TimeMonzo, TimeReal
from chuk_tuning.errors import MalformedLiteral
from chuk_tuning.intervals import Interval, Val
from chuk_tuning.literals import (
    FJS,
    AbsoluteFJS,
    AbsolutePitch,
    AspiringFJS,
    CentLiteral,
    CentsLiteral,
    DecimalLiteral,
    FractionLiteral,
    HertzLiteral,
    IntegerLiteral,
    MonzoLiteral,
    NedjiLiteral,
    Pythagorean,
    RadicalLiteral,
    SecondLiteral,
    SquareSuperparticular,
    ValLiteral,
    lower,
)
from chuk_tuning.models import FormattingContext

F = Fraction
M3_5 = FJS(Pythagorean("M", 3), ((5, ""),))


def components(*values: int) -> tuple[Fraction, ...]:
    return tuple(F(v) for v in values)


class TestLinearLiterals:
    """Tests for literals that lower into the linear domain."""

    def test_integer(self) -> None:
        interval = lower(IntegerLiteral(5))
        assert isinstance(interval, Interval)
        assert interval.domain is Domain.LINEAR
        assert interval.to_integer() == 5
        assert str(interval) == "5"

    def test_fraction_keeps_spelling(self) -> None:
        """6/4 is 3/2 but displays as written."""
        interval = lower(FractionLiteral(6, 4))
        assert interval.to_fraction() == F(3, 2)
        assert str(interval) == "6/4"

    def test_zero_denominator(self) -> None:
        with pytest.raises(MalformedLiteral):
            lower(FractionLiteral(1, 0))

    def test_decimal(self) -> None:
        assert lower(DecimalLiteral(1, "25")).to_fraction() == F(5, 4)

    def test_real_decimal(self) -> None:
        interval = lower(DecimalLiteral(1, "25", flavor=DecimalFlavor.REAL))
        assert isinstance(interval.value, TimeReal)
        assert interval.value.value == 1.25

    def test_frequency_decimal(self) -> None:
        interval = lower(DecimalLiteral(440, flavor=DecimalFlavor.FREQUENCY))
        assert interval.value.time_exponent == -1
        assert interval.to_fraction() == 440

    def test_hertz(self) -> None:
        kilohertz = lower(HertzLiteral("k"))
        assert kilohertz.value.time_exponent == -1
        assert kilohertz.to_fraction() == 1000
        assert lower(HertzLiteral("Ki")).to_fraction() == 1024

    def test_seconds(self) -> None:
        millisecond = lower(SecondLiteral("m"))
        assert millisecond.value.time_exponent == 1
        assert millisecond.to_fraction() == F(1, 1000)

    def test_unknown_prefix(self) -> None:
        with pytest.raises(MalformedLiteral):
            lower(HertzLiteral("X"))

    def test_radical(self) -> None:
        interval = lower(RadicalLiteral(F(2), F(1, 3)))
        assert interval.domain is Domain.LINEAR
        assert interval.value.prime_exponents[0] == F(1, 3)
        assert str(interval) == "2^(1/3)"

    def test_radical_of_negative(self) -> None:
        with pytest.raises(MalformedLiteral):
            lower(RadicalLiteral(F(-2), F(1, 2)))


class TestLogarithmicLiterals:
    """Tests for literals that lower into the logarithmic domain."""

    def test_cents(self) -> None:
        interval = lower(CentsLiteral(701, "955"))
        assert interval.domain is Domain.LOGARITHMIC
        assert interval.value.prime_exponents[0] == F(701955, 1200000)
        assert interval.total_cents() == pytest.approx(701.955)
        assert str(interval) == "701.955"

    def test_real_cents(self) -> None:
        """Real cents become a real correction of an exact value."""
        interval = lower(CentsLiteral(1, "5", real=True))
        assert isinstance(interval.value, TimeMonzo)
        assert interval.value.cents == 1.5

    def test_cent(self) -> None:
        assert lower(CentLiteral()).value.prime_exponents[0] == F(1, 1200)

    def test_nedji(self) -> None:
        interval = lower(NedjiLiteral(7, 12))
        assert interval.value.prime_exponents[0] == F(7, 12)
        assert interval.total_cents() == pytest.approx(700.0)
        assert str(interval) == "7\\12"

    def test_nedji_with_equave(self) -> None:
        interval = lower(NedjiLiteral(1, 13, 3))
        assert interval.value.prime_exponents[:2] == (0, F(1, 13))

    def test_nedji_zero_denominator(self) -> None:
        with pytest.raises(MalformedLiteral):
            lower(NedjiLiteral(1, 0))
        with pytest.raises(MalformedLiteral):
            lower(NedjiLiteral(1, 2, 3, 0))

    def test_nedji_invalid_equave(self) -> None:
        with pytest.raises(MalformedLiteral):
            lower(NedjiLiteral(1, 2, -3))

    def test_fjs(self) -> None:
        interval = lower(M3_5)
        assert interval.to_fraction() == F(5, 4)
        assert str(interval) == "M3^5"

    def test_fjs_with_up(self, context: FormattingContext) -> None:
        """An up adds the context's up size as a real correction."""
        interval = lower(FJS(Pythagorean("M", 3), ((5, ""),), ups=1), context)
        assert interval.value.cents == context.up
        assert str(interval) == "^M3^5"

    def test_absolute_fjs(self) -> None:
        """Absolute pitches are relative to C4 of the context."""
        context = FormattingContext(c4="261.6 Hz")
        interval = lower(AbsoluteFJS(AbsolutePitch("E"), ((5, ""),)), context)
        assert interval.value.time_exponent == -1
        assert interval.to_fraction() == 327

    def test_absolute_fjs_default_context(self) -> None:
        interval = lower(AbsoluteFJS(AbsolutePitch("G")))
        assert interval.to_fraction() == F(3, 2)

    def test_monzo(self) -> None:
        assert lower(MonzoLiteral(components(-2, 0, 1))).to_fraction() == F(5, 4)

    def test_monzo_subgroup(self) -> None:
        interval = lower(MonzoLiteral(components(0, 1), components(2, 7)))
        assert interval.to_fraction() == 7

    def test_monzo_composite_basis(self) -> None:
        """Monzo bases need not be prime."""
        assert lower(MonzoLiteral(components(1), components(9))).to_fraction() == 9

    def test_monzo_too_many_components(self) -> None:
        with pytest.raises(MalformedLiteral):
            lower(MonzoLiteral(components(1, 2, 3), components(2, 3)))

    def test_square_superparticular(self) -> None:
        assert lower(SquareSuperparticular(9)).to_fraction() == F(81, 80)

    def test_square_superparticular_range(self) -> None:
        """S5..8 is S5*S6*S7*S8."""
        product = F(25, 24) * F(36, 35) * F(49, 48) * F(64, 63)
        assert lower(SquareSuperparticular(5, 8)).to_fraction() == product
        assert lower(SquareSuperparticular(2, 4)).to_fraction() == F(8, 5)


class TestValLiterals:
    """Tests for lowering vals."""

    def test_val(self) -> None:
        val = lower(ValLiteral(components(12, 19, 28)))
        assert isinstance(val, Val)
        assert val.divisions == 12
        assert val.equave.to_fraction() == 2
        assert str(val) == "<12 19 28]"

    def test_subgroup(self) -> None:
        """Subgroup components are placed at their primes."""
        val = lower(ValLiteral(components(12, 19, 34), components(2, 3, 7)))
        assert val.value.dot(TimeMonzo.from_fraction(F(7, 4))) == 10

    def test_subgroup_equave(self) -> None:
        """The first basis element is the equave."""
        val = lower(ValLiteral(components(13, 19, 23), components(3, 5, 7)))
        assert val.equave.to_fraction() == 3
        assert val.divisions == 13

    def test_non_prime_basis(self) -> None:
        with pytest.raises(MalformedLiteral):
            lower(ValLiteral(components(12, 38), components(2, 9)))

    def test_component_count(self) -> None:
        with pytest.raises(MalformedLiteral):
            lower(ValLiteral(components(12, 19), components(2, 3, 5)))


class TestMalformed:
    """Tests for literals that cannot be lowered."""

    def test_aspiring(self) -> None:
        with pytest.raises(MalformedLiteral):
            lower(AspiringFJS())

    def test_overflow(self) -> None:
        """Literals beyond the absurdity bound are malformed."""
        with pytest.raises(MalformedLiteral):
            lower(MonzoLiteral(components(5000)))


class TestTracking:
    """Tests for the fragile registry during lowering."""

    def test_inflected_literal_tracked(self, context, registry) -> None:
        lower(FJS(Pythagorean("P", 5), ups=1), context, registry)
        lower(FJS(Pythagorean("P", 5)), context, registry)
        assert len(registry) == 1
