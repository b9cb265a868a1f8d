"""
End-to-end tests: literals lowered, combined and displayed.

Tests cover:
- Literal preserving arithmetic across kinds
- Dimensioned quantities
- Generalized logarithms
- Mapping with vals and its bilinearity
- Overflow and exactness boundaries
"""

from fractions import Fraction

import pytest

from chuk_tuning.constants import DecimalFlavor, Domain
from chuk_tuning.core import TimeMonzo, TimeReal
from chuk_tuning.errors import NumericOverflow
from chuk_tuning.literals import (
    CentLiteral,
    CentsLiteral,
    DecimalLiteral,
    FractionLiteral,
    HertzLiteral,
    IntegerLiteral,
    NedjiLiteral,
    ValLiteral,
    lower,
)

F = Fraction


def patent_12():
    return lower(ValLiteral((F(12), F(19), F(28))))


class TestDisplayedResults:
    """Arithmetic that keeps the written form."""

    def test_equal_divisions(self) -> None:
        result = lower(NedjiLiteral(4, 12)) + lower(NedjiLiteral(2, 12))
        assert str(result) == "6\\12"

    def test_metric_prefixes(self) -> None:
        terms = [
            lower(IntegerLiteral(69)) * lower(HertzLiteral("m")),
            lower(IntegerLiteral(420)) * lower(HertzLiteral()),
            lower(IntegerLiteral(9)) * lower(HertzLiteral("k")),
        ]
        total = terms[0] + terms[1] + terms[2]
        assert str(total) == "9420.069 Hz"

    def test_cents_minus_cent(self) -> None:
        result = lower(CentsLiteral(1, "955")) - lower(CentLiteral())
        assert result.total_cents() == pytest.approx(0.955)

    def test_cents_sum(self) -> None:
        result = lower(CentsLiteral(701, "955")) + lower(CentsLiteral(498, "045"))
        assert str(result) == "1200.0"
        assert result.to_fraction() == 2

    def test_decimals(self) -> None:
        result = lower(DecimalLiteral(1, "25")) + lower(DecimalLiteral(0, "5"))
        assert str(result) == "1.75"


class TestLogarithms:
    """Generalized logarithms."""

    def test_negative_base(self) -> None:
        """(-8) /_ (-2) is exactly 3."""
        result = lower(IntegerLiteral(-8)).log(lower(IntegerLiteral(-2)))
        assert result.to_fraction() == 3
        assert str(result) == "3"

    def test_irrational(self) -> None:
        result = lower(IntegerLiteral(3)).log(lower(IntegerLiteral(2)))
        assert isinstance(result.value, TimeReal)
        assert result.node is None


class TestMapping:
    """Step counts from vals."""

    def test_septimal(self) -> None:
        interval = lower(FractionLiteral(7, 5)).as_domain(Domain.LOGARITHMIC)
        steps = patent_12().dot(interval)
        assert steps.to_fraction() == -28

    def test_octave_is_divisions(self) -> None:
        octave = lower(FractionLiteral(2, 1)).as_domain(Domain.LOGARITHMIC)
        assert patent_12().dot(octave).to_fraction() == patent_12().divisions

    def test_bilinear(self) -> None:
        a = lower(FractionLiteral(5, 4)).as_domain(Domain.LOGARITHMIC)
        b = lower(NedjiLiteral(7, 12))
        val = patent_12()
        assert val.dot(a + b) == val.dot(a) + val.dot(b)
        assert str(val.dot(a + b)) == "11"


class TestBoundaries:
    """Overflow and exactness."""

    def test_overflow(self) -> None:
        fifth = lower(FractionLiteral(3, 2)).as_domain(Domain.LOGARITHMIC)
        with pytest.raises(NumericOverflow):
            fifth * lower(IntegerLiteral(10000))

    def test_exact_stays_exact(self) -> None:
        result = (lower(FractionLiteral(3, 2)) * lower(IntegerLiteral(4))).inverse()
        assert isinstance(result.value, TimeMonzo)
        assert result.to_fraction() == F(1, 6)

    def test_real_is_contagious(self) -> None:
        real = lower(DecimalLiteral(1, "5", flavor=DecimalFlavor.REAL))
        result = (lower(FractionLiteral(3, 2)) + real) * lower(IntegerLiteral(2))
        assert isinstance(result.value, TimeReal)
        assert result.value_of() == pytest.approx(6.0)
