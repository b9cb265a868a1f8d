#!/usr/bin/env python3
"""
Example: Exploring Exact Intervals.

This walks through the interval engine the way a tuning theorist would
use it: build intervals from literals, combine them, and read the results
back in the notation they were written in.

Usage:
    python examples/explore_intervals.py

This example shows:
1. Equal divisions and cents keeping their written form through arithmetic
2. Just intervals spelled in Functional Just System (FJS) notation
3. Absolute pitches against a reference frequency loaded from YAML
4. Mapping intervals to steps of an equal temperament with a val
5. Ups and lifts, and re-spelling them when the context changes

Values stay exact wherever possible:
    literal → Interval (exact monzo + literal) → display
"""

from fractions import Fraction
from pathlib import Path

from chuk_tuning.config import load_context
from chuk_tuning.constants import Domain
from chuk_tuning.intervals import FragileRegistry
from chuk_tuning.literals import (
    FJS,
    AbsoluteFJS,
    AbsolutePitch,
    CentsLiteral,
    FractionLiteral,
    IntegerLiteral,
    NedjiLiteral,
    Pythagorean,
    ValLiteral,
    lower,
)
from chuk_tuning.models import FormattingContext


def main() -> None:
    """Demonstrate the interval engine."""
    examples_dir = Path(__file__).parent
    context = load_context(examples_dir / "lab.context.yaml")

    print("CHUK Tuning Interval Demo")
    print("=" * 50)
    print()

    # Equal divisions
    print("1. Equal divisions keep their notation...")
    fourth_step = lower(NedjiLiteral(4, 12))
    second_step = lower(NedjiLiteral(2, 12))
    tritone = fourth_step + second_step
    print(f"   {fourth_step} + {second_step} = {tritone}")
    print(f"   Size: {tritone.total_cents():.1f} cents")
    fifth_cents = lower(CentsLiteral(701, "955"))
    fourth_cents = lower(CentsLiteral(498, "045"))
    print(f"   {fifth_cents} + {fourth_cents} = {fifth_cents + fourth_cents}")
    print()

    # FJS
    print("2. Just intervals in FJS...")
    major_third = lower(FJS(Pythagorean("M", 3), ((5, ""),)))
    minor_third = lower(FJS(Pythagorean("m", 3), (), ((5, ""),)))
    fifth = major_third + minor_third
    print(f"   {major_third} ({major_third.to_fraction()}) + {minor_third} = {fifth}")
    print(f"   Reversed: {-major_third}")
    print(f"   Doubled: {major_third * lower(IntegerLiteral(2))}")
    print()

    # Absolute pitches
    print("3. Absolute pitches...")
    print(f"   Context: {context.title or 'untitled'}, C4 = {context.c4}")
    e4 = lower(AbsoluteFJS(AbsolutePitch("E"), ((5, ""),)), context)
    print(f"   E4^5 = {e4.value} (linear frequency)")
    g4 = lower(AbsoluteFJS(AbsolutePitch("C"))) + lower(FJS(Pythagorean("P", 5)))
    print(f"   C4 + P5 = {g4.str(FormattingContext())}")
    print()

    # Vals
    print("4. Mapping with the 12-tone patent val...")
    val = lower(ValLiteral((Fraction(12), Fraction(19), Fraction(28))))
    print(f"   Val: {val} ({val.divisions} divisions)")
    for numerator, denominator in [(3, 2), (5, 4), (6, 5), (7, 5)]:
        interval = lower(FractionLiteral(numerator, denominator)).as_domain(Domain.LOGARITHMIC)
        steps = val.dot(interval)
        print(f"   {numerator}/{denominator} -> {steps} steps")
    print()

    # Ups and lifts
    print("5. Ups, lifts and changing contexts...")
    registry = FragileRegistry()
    raised = major_third.up(context, registry)
    print(f"   Raised: {raised.str(context)} ({raised.total_cents():.3f} cents)")
    wider = FormattingContext(up=context.up / 2, lift=context.lift)
    for broken in registry.broken():
        print(f"   Re-spelled with ups of {wider.up} cents: {broken.str(wider)}")
    print()
    print("Done!")


if __name__ == "__main__":
    main()
