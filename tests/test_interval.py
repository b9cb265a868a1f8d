"""
Tests for the interval domain algebra (intervals/interval.py).

Tests cover:
- Construction and domain checks
- Operators in the linear and logarithmic domains
- Literal preservation through arithmetic
- Metadata merging
- Ups, lifts and fragile tracking
- Realization of aspiring literals
- Harmonic operations and left-handed operators
- Group laws of the logarithmic domain
"""

from fractions import Fraction

import pytest

from chuk_tuning.constants import DecimalFlavor, Domain
from chuk_tuning.core import TimeMonzo
from chuk_tuning.errors import DomainMismatch, UnsupportedOperation
from chuk_tuning.intervals import Color, GaveUp, Interval, Realized, Val, realize
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
    NedjiLiteral,
    Pythagorean,
    ValLiteral,
    lower,
)
from chuk_tuning.models import FormattingContext

F = Fraction


def integer(value: int) -> Interval:
    return lower(IntegerLiteral(value))


def ratio(numerator: int, denominator: int) -> Interval:
    return lower(FractionLiteral(numerator, denominator))


def steps(numerator: int, denominator: int) -> Interval:
    return lower(NedjiLiteral(numerator, denominator))


def major_third() -> Interval:
    return lower(FJS(Pythagorean("M", 3), ((5, ""),)))


class TestConstruction:
    """Tests for building intervals."""

    def test_cologarithmic_refused(self) -> None:
        """Vals are their own type."""
        with pytest.raises(DomainMismatch):
            Interval(TimeMonzo.from_fraction(2), Domain.COLOGARITHMIC)

    def test_foreign_node_dropped(self) -> None:
        """A node from another domain is not kept."""
        interval = Interval(TimeMonzo.from_fraction(F(3, 2)), Domain.LOGARITHMIC, FractionLiteral(3, 2))
        assert interval.node is None

    def test_domain_string(self) -> None:
        interval = Interval(TimeMonzo.from_fraction(2), "linear")
        assert interval.domain is Domain.LINEAR

    def test_from_fraction(self) -> None:
        interval = Interval.from_fraction("6/4")
        assert str(interval) == "3/2"

    def test_relative_and_absolute(self) -> None:
        assert integer(3).is_relative()
        assert lower(HertzLiteral()).is_absolute()

    def test_value_of(self) -> None:
        assert integer(3).value_of() == 3
        assert ratio(3, 2).value_of() == 1.5
        assert float(ratio(3, 2)) == 1.5


class TestLinearArithmetic:
    """Tests for the linear domain."""

    def test_add_fractions(self) -> None:
        result = ratio(1, 4) + ratio(2, 4)
        assert result.to_fraction() == F(3, 4)
        assert str(result) == "3/4"

    def test_sub(self) -> None:
        assert str(integer(2) - integer(5)) == "-3"

    def test_mul(self) -> None:
        assert str(integer(2) * integer(3)) == "6"

    def test_div(self) -> None:
        result = integer(3) / integer(2)
        assert result.to_fraction() == F(3, 2)
        assert str(result) == "3/2"

    def test_neg(self) -> None:
        assert str(-ratio(3, 2)) == "-3/2"

    def test_inverse(self) -> None:
        assert str(ratio(3, 2).inverse()) == "2/3"

    def test_pow(self) -> None:
        assert str(integer(2) ** integer(3)) == "8"

    def test_fractional_pow(self) -> None:
        result = integer(2) ** ratio(1, 3)
        assert result.value.prime_exponents[0] == F(1, 3)
        assert str(result) == "2^(1/3)"

    def test_ipow(self) -> None:
        """8 ipow 3 is the cube root of 8."""
        result = integer(8).ipow(integer(3))
        assert result.to_fraction() == 2

    def test_log(self) -> None:
        assert str(integer(8).log(integer(2))) == "3"

    def test_reduce(self) -> None:
        assert str(integer(3).reduce(integer(2))) == "3/2"

    def test_mmod(self) -> None:
        assert str(integer(7).mmod(integer(3))) == "1"

    def test_frequencies(self) -> None:
        """69 mHz + 420 Hz + 9 kHz keeps exact decimals."""
        millihertz = integer(69) * lower(HertzLiteral("m"))
        hertz = integer(420) * lower(HertzLiteral())
        kilohertz = integer(9) * lower(HertzLiteral("k"))
        total = millihertz + hertz + kilohertz
        assert total.to_fraction() == F(9420069, 1000)
        assert str(total) == "9420.069 Hz"

    def test_backslash(self) -> None:
        result = integer(7).backslash(integer(12))
        assert result.domain is Domain.LOGARITHMIC
        assert str(result) == "7\\12"


class TestLogarithmicArithmetic:
    """Tests for the logarithmic domain."""

    def test_add_composes(self) -> None:
        """4\\12 + 2\\12 is 6\\12."""
        result = steps(4, 12) + steps(2, 12)
        assert result.value.prime_exponents[0] == F(1, 2)
        assert str(result) == "6\\12"

    def test_sub(self) -> None:
        assert str(steps(7, 12) - steps(12, 12)) == "-5\\12"

    def test_mixed_domains(self) -> None:
        with pytest.raises(DomainMismatch):
            ratio(3, 2) + steps(7, 12)

    def test_scale_by_integer(self) -> None:
        assert str(steps(7, 12) * integer(2)) == "14\\12"
        assert str(integer(2) * steps(7, 12)) == "14\\12"

    def test_log_times_log(self) -> None:
        with pytest.raises(DomainMismatch):
            steps(7, 12) * steps(1, 12)

    def test_scale_by_real_decimal(self) -> None:
        """Real decimals scale the size in cents."""
        result = steps(1, 1) * lower(DecimalLiteral(1, "5", flavor=DecimalFlavor.REAL))
        assert result.total_cents() == pytest.approx(1800.0)
        assert result.node is None

    def test_divide_log_by_log(self) -> None:
        """Measuring 7\\12 in units of 1\\12 gives a linear 7."""
        result = steps(7, 12) / steps(1, 12)
        assert result.domain is Domain.LINEAR
        assert str(result) == "7"

    def test_divide_log_by_linear(self) -> None:
        result = steps(7, 12) / integer(7)
        assert result.value.prime_exponents[0] == F(1, 12)
        assert str(result) == "7\\84"

    def test_neg_reverses(self) -> None:
        result = -steps(7, 12)
        assert result.value.prime_exponents[0] == F(-7, 12)
        assert str(result) == "-7\\12"

    def test_abs(self) -> None:
        result = abs(-major_third())
        assert result.to_fraction() == F(5, 4)

    def test_project(self) -> None:
        """5\\12 projected onto 3 is 5\\12<3>."""
        result = steps(5, 12).project(integer(3))
        assert result.value.prime_exponents[:2] == (0, F(5, 12))
        assert str(result) == "5\\12<3>"

    def test_mmod_reduces(self) -> None:
        result = steps(14, 12).mmod(steps(12, 12))
        assert result.value.prime_exponents[0] == F(1, 6)
        assert str(result) == "2\\12"

    def test_pow_refused(self) -> None:
        with pytest.raises(UnsupportedOperation):
            steps(7, 12) ** integer(2)

    def test_cents_minus_cent(self) -> None:
        """Mismatched literal kinds fall back to the value."""
        result = lower(CentsLiteral(1, "955")) - lower(CentLiteral())
        assert result.node is None
        assert result.total_cents() == pytest.approx(0.955)

    def test_as_domain(self) -> None:
        interval = ratio(3, 2).as_domain(Domain.LOGARITHMIC)
        assert interval.domain is Domain.LOGARITHMIC
        assert interval.node is None

    def test_mmod_absolute_pitch(self) -> None:
        """A5 above a C4 of 261 Hz reduces by octaves to 7047/4096 Hz."""
        a5 = lower(AbsoluteFJS(AbsolutePitch("A", (), 5)), FormattingContext(c4="261 Hz"))
        octave = ratio(2, 1).as_domain(Domain.LOGARITHMIC)
        result = a5.mmod(octave)
        assert result.value.time_exponent == -1
        assert result.to_fraction() == F(7047, 4096)

    def test_project_onto_zero(self) -> None:
        """Steps projected onto zero have no pitch, and say so."""
        result = steps(5, 12).project(integer(0))
        assert result.node is None
        assert str(result) == "-Infinity"

    def test_negative_value_display(self) -> None:
        interval = Interval(TimeMonzo.from_fraction(-2), Domain.LOGARITHMIC)
        assert str(interval) == "NaN"

    def test_fractional_exponents_display(self) -> None:
        """A fifth plus half a cent is shown as a monzo, not steps of a huge equave."""
        fifth = lower(FJS(Pythagorean("P", 5)))
        result = fifth + lower(CentsLiteral(0, "5"))
        assert result.node is None
        assert str(result) == "[-2399/2400 1>"


class TestHarmonicOperations:
    """Tests for lens sums, rounding, gcd, lcm and left-handed operators."""

    def test_lens_add_linear(self) -> None:
        assert str(integer(2).lens_add(integer(3))) == "6/5"

    def test_lens_sub_linear(self) -> None:
        result = ratio(6, 5).lens_sub(integer(3))
        assert result.to_fraction() == 2
        assert str(result) == "2"

    def test_lens_add_steps(self) -> None:
        """7\\12 lens 4\\12 is 1 / (12/7 + 12/4) octaves."""
        result = steps(7, 12).lens_add(steps(4, 12))
        assert result.value.prime_exponents[0] == F(7, 33)
        assert str(result) == "7\\33"

    def test_lens_sub_steps(self) -> None:
        result = steps(7, 12).lens_sub(steps(4, 12))
        assert result.value.prime_exponents[0] == F(-7, 9)
        assert str(result) == "-7\\9"

    def test_lens_add_cents(self) -> None:
        result = lower(CentsLiteral(100)).lens_add(lower(CentsLiteral(100)))
        assert result.total_cents() == pytest.approx(50.0)
        assert str(result) == "50.0"

    def test_lens_with_unison(self) -> None:
        """Unison absorbs the other operand."""
        result = steps(0, 12).lens_add(steps(7, 12))
        assert result.value.is_unity()
        assert str(result) == "0\\12"

    def test_lens_mixed_domains(self) -> None:
        with pytest.raises(DomainMismatch):
            integer(2).lens_add(steps(7, 12))

    def test_lens_sub_of_itself(self) -> None:
        """Harmonic difference of equal intervals has no finite size."""
        with pytest.raises(UnsupportedOperation):
            steps(7, 12).lens_sub(steps(7, 12))

    def test_round_to_linear(self) -> None:
        assert str(integer(7).round_to(integer(3))) == "6"
        assert str(integer(7).round_to(integer(2))) == "8"

    def test_round_to_steps(self) -> None:
        """7\\12 rounded to whole steps of 4\\12 is 8\\12."""
        result = steps(7, 12).round_to(steps(4, 12))
        assert result.value.prime_exponents[0] == F(2, 3)
        assert str(result) == "8\\12"

    def test_round_to_cents(self) -> None:
        result = lower(CentsLiteral(701, "955")).round_to(lower(CentsLiteral(100)))
        assert result.total_cents() == pytest.approx(700.0)
        assert str(result) == "700.0"

    def test_pitch_round_to(self) -> None:
        """10 is nearest to 2^3 in pitch."""
        result = integer(10).pitch_round_to(integer(2))
        assert result.to_fraction() == 8
        assert str(result) == "8"

    def test_pitch_round_to_logarithmic(self) -> None:
        with pytest.raises(UnsupportedOperation):
            steps(7, 12).pitch_round_to(steps(1, 12))

    def test_gcd_lcm(self) -> None:
        assert str(integer(12).gcd(integer(18))) == "6"
        assert str(integer(12).lcm(integer(18))) == "36"
        assert ratio(3, 4).gcd(ratio(5, 6)).to_fraction() == F(1, 12)

    def test_gcd_logarithmic(self) -> None:
        with pytest.raises(UnsupportedOperation):
            steps(7, 12).gcd(steps(1, 12))

    def test_ldiv_keeps_left_metadata(self) -> None:
        """2 ldiv 6 is 6 / 2, colored like the 2."""
        left = Interval(TimeMonzo.from_fraction(2), Domain.LINEAR, color=Color("red"))
        right = Interval(
            TimeMonzo.from_fraction(6), Domain.LINEAR, color=Color("blue"), label="six"
        )
        result = left.ldiv(right)
        assert result.to_fraction() == 3
        assert result.color == Color("red")
        assert result.label == "six"

    def test_lsub_keeps_left_metadata(self) -> None:
        left = Interval(TimeMonzo.from_fraction(2), Domain.LINEAR, label="two")
        right = Interval(TimeMonzo.from_fraction(6), Domain.LINEAR, color=Color("blue"))
        result = left.lsub(right)
        assert result.to_fraction() == 4
        assert result.color == Color("blue")
        assert result.label == "two"

    def test_lens_infects_metadata(self) -> None:
        left = Interval(TimeMonzo.from_fraction(2), Domain.LINEAR, tracking_ids={1})
        right = Interval(TimeMonzo.from_fraction(3), Domain.LINEAR, tracking_ids={2})
        assert left.lens_add(right).tracking_ids == frozenset({1, 2})


class TestGroupLaws:
    """Logarithmic intervals form a group under +, consistent with linear *."""

    def operands(self) -> tuple[Interval, Interval, Interval]:
        return major_third(), steps(7, 12), lower(CentsLiteral(100))

    def test_associative(self) -> None:
        a, b, c = self.operands()
        assert ((a + b) + c).value.strict_equals((a + (b + c)).value)

    def test_commutative(self) -> None:
        a, b, c = self.operands()
        assert (a + b).value.strict_equals((b + a).value)
        assert (b + c).value.strict_equals((c + b).value)

    def test_inverse(self) -> None:
        for interval in self.operands():
            assert (interval + (-interval)).total_cents() == pytest.approx(0.0)
            assert (interval - interval).value.is_unity()

    def test_linear_consistency(self) -> None:
        """Composing logarithmic intervals multiplies their linear values."""
        a, b, c = self.operands()
        for x, y in [(a, b), (b, c), (a, c)]:
            composed = (x + y).as_domain(Domain.LINEAR)
            product = x.as_domain(Domain.LINEAR) * y.as_domain(Domain.LINEAR)
            assert composed.value.strict_equals(product.value)
            assert composed == product


class TestNamedIntervals:
    """Tests for FJS literals through arithmetic."""

    def test_sum_respelled(self) -> None:
        """M3^5 + m3_5 is P5."""
        minor = lower(FJS(Pythagorean("m", 3), (), ((5, ""),)))
        result = major_third() + minor
        assert isinstance(result.node, AspiringFJS)
        assert result.to_fraction() == F(3, 2)
        assert str(result) == "P5"

    def test_scaled(self) -> None:
        """Doubling M3^5 gives 25/16, an augmented fifth."""
        assert str(major_third() * integer(2)) == "a5^5,5"

    def test_reversed(self) -> None:
        assert str(-major_third()) == "M-3_5"

    def test_absolute_plus_relative(self, context: FormattingContext) -> None:
        result = lower(AbsoluteFJS(AbsolutePitch("C"))) + major_third()
        assert result.str(context) == "E4^5"

    def test_absolute_needs_context(self) -> None:
        """Without a context the pitch falls back to its value."""
        result = lower(AbsoluteFJS(AbsolutePitch("C"))) + major_third()
        assert str(result) == "[-2 0 1>"

    def test_no_spelling(self) -> None:
        """A named interval divided into irrational parts has no name."""
        result = lower(FJS(Pythagorean("P", 8))) / integer(2)
        assert isinstance(result.node, AspiringFJS)
        assert str(result) == "1\\2"


class TestDot:
    """Tests for dot products."""

    def test_dot_with_val(self) -> None:
        val = lower(ValLiteral((F(12), F(19), F(28))))
        result = major_third().dot(val)
        assert result.domain is Domain.LINEAR
        assert str(result) == "4"

    def test_up_counts_one_step(self, context: FormattingContext) -> None:
        """Each up on the interval maps to one more step."""
        val = lower(ValLiteral((F(12), F(19), F(28))))
        assert str(major_third().up(context).dot(val)) == "5"

    def test_dot_intervals(self) -> None:
        assert str(ratio(3, 2).dot(ratio(3, 2))) == "2"

    def test_inverse_is_val(self) -> None:
        """A logarithmic interval inverts into a val that maps it to one step."""
        val = steps(1, 12).inverse()
        assert isinstance(val, Val)
        assert val.value.dot(TimeMonzo.from_fraction(2)) == 12
        assert val.value.dot(steps(1, 12).value) == 1


class TestComparison:
    """Tests for equality and ordering."""

    def test_equals_across_domains(self) -> None:
        linear = ratio(3, 2)
        logarithmic = Interval(TimeMonzo.from_fraction(F(3, 2)), Domain.LOGARITHMIC)
        assert linear == logarithmic
        assert not linear.strict_equals(logarithmic)

    def test_equals_ignores_spelling(self) -> None:
        assert ratio(6, 4) == ratio(3, 2)
        assert hash(ratio(6, 4)) == hash(ratio(3, 2))

    def test_ordering(self) -> None:
        intervals = [ratio(5, 3), ratio(3, 2), integer(2)]
        assert [str(i) for i in sorted(intervals)] == ["3/2", "5/3", "2"]

    def test_exact_and_real(self) -> None:
        real = lower(DecimalLiteral(1, "5", flavor=DecimalFlavor.REAL))
        assert real.compare(ratio(3, 2)) == 0
        assert real < integer(2)


class TestMetadata:
    """Tests for colors, labels and tracking identifiers."""

    def test_display(self) -> None:
        interval = Interval(
            TimeMonzo.from_fraction(F(3, 2)), Domain.LINEAR, FractionLiteral(3, 2),
            color=Color("#f00"), label="fifth",
        )
        assert interval.to_string() == '(3/2 #f00 "fifth")'

    def test_color_percent_stripped(self) -> None:
        assert str(Color("hsl(0, 50%, 50%)")) == "hsl(0, 50, 50)"

    def test_left_operand_wins(self) -> None:
        left = Interval(TimeMonzo.from_fraction(2), Domain.LINEAR, color=Color("red"))
        right = Interval(
            TimeMonzo.from_fraction(3), Domain.LINEAR, color=Color("blue"), label="three"
        )
        result = left + right
        assert result.color == Color("red")
        assert result.label == "three"

    def test_tracking_ids_merged(self) -> None:
        left = Interval(TimeMonzo.from_fraction(2), Domain.LINEAR, tracking_ids={1})
        right = Interval(TimeMonzo.from_fraction(3), Domain.LINEAR, tracking_ids={2})
        assert (left * right).tracking_ids == frozenset({1, 2})

    def test_unary_keeps_metadata(self) -> None:
        interval = Interval(TimeMonzo.from_fraction(2), Domain.LINEAR, label="two")
        assert (-interval).label == "two"


class TestInflections:
    """Tests for ups, lifts and fragile values."""

    def test_up(self, context: FormattingContext) -> None:
        result = major_third().up(context)
        assert result.value.cents == context.up
        assert str(result) == "^M3^5"

    def test_down_and_lift(self, context: FormattingContext) -> None:
        assert str(major_third().down(context)) == "vM3^5"
        assert str(major_third().lift(context)) == "/M3^5"
        assert str(major_third().drop(context)) == "\\M3^5"

    def test_up_drops_other_literals(self, context: FormattingContext) -> None:
        result = steps(7, 12).up(context)
        assert result.node is None
        assert result.total_cents() == pytest.approx(701.0)

    def test_registry(self, context, registry) -> None:
        """Broken copies are re-spelled against the next context."""
        major_third().up(context, registry)
        assert len(registry) == 1
        (broken,) = registry.broken()
        assert isinstance(broken.node, AspiringFJS)
        assert len(registry) == 0
        assert broken.str(context) == "^M3^5"

    def test_broken_without_context(self, context: FormattingContext) -> None:
        """Real corrections cannot be spelled without inflection sizes."""
        broken = major_third().up(context).broken()
        assert str(broken) == "[-2 0 1> + 1rc"

    def test_broken_with_other_context(self) -> None:
        """Against different inflection sizes the up becomes a lift."""
        broken = major_third().up(FormattingContext(up=5.0)).broken()
        assert broken.str(FormattingContext(up=1.0, lift=5.0)) == "/M3^5"


class TestRealization:
    """Tests for realize()."""

    def test_no_literal(self) -> None:
        assert isinstance(realize(TimeMonzo.from_fraction(2), None), GaveUp)

    def test_concrete(self) -> None:
        node = IntegerLiteral(2)
        assert realize(TimeMonzo.from_fraction(2), node) == Realized(node)

    def test_aspiring(self) -> None:
        realization = realize(TimeMonzo.from_fraction(F(5, 4)), AspiringFJS())
        assert isinstance(realization, Realized)
        assert realization.node == FJS(Pythagorean("M", 3), ((5, ""),))

    def test_inexact_inflection(self, context: FormattingContext) -> None:
        """Half an up cannot be written."""
        value = TimeMonzo.from_fraction(F(5, 4)).mul(TimeMonzo.from_cents(0.5))
        assert isinstance(realize(value, AspiringFJS(), context), GaveUp)
