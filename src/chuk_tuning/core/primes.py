"""
Prime tables and exact number helpers.

Exponent vectors index their components by position in PRIMES, and
logarithmic sizes are measured against PRIME_CENTS.
"""

from __future__ import annotations

import math
from fractions import Fraction


def _sieve(limit: int) -> list[int]:
    flags = bytearray([1]) * (limit + 1)
    flags[0] = flags[1] = 0
    for n in range(2, math.isqrt(limit) + 1):
        if flags[n]:
            flags[n * n :: n] = bytearray(len(range(n * n, limit + 1, n)))
    return [n for n, flag in enumerate(flags) if flag]


# The first 1000 primes
PRIMES: tuple[int, ...] = tuple(_sieve(7919))
PRIME_CENTS: tuple[float, ...] = tuple(1200 * math.log2(p) for p in PRIMES)


def value_to_cents(value: float) -> float:
    """Convert a frequency ratio to cents."""
    return 1200 * math.log2(value)


def cents_to_value(cents: float) -> float:
    """Convert cents to a frequency ratio, saturating to infinity."""
    try:
        return 2.0 ** (cents / 1200)
    except OverflowError:
        return math.inf


def log2_fraction(value: Fraction) -> float:
    """Binary logarithm of |value| that survives huge numerators."""
    return math.log2(abs(value.numerator)) - math.log2(value.denominator)


def _strip_prime(n: int, p: int) -> tuple[int, int]:
    if p == 2:
        count = (n & -n).bit_length() - 1
        return n >> count, count
    count = 0
    while n % p == 0:
        n //= p
        count += 1
    return n, count


def to_monzo_and_residual(
    value: int | Fraction, number_of_components: int
) -> tuple[list[int], Fraction]:
    """
    Split a rational into exponents of the first primes and a residual.

    Args:
        value: Rational number to factor
        number_of_components: How many primes to factor out

    Returns:
        Exponent vector and the leftover rational (0 for zero input)
    """
    if number_of_components > len(PRIMES):
        raise ValueError(f"Prime table only has {len(PRIMES)} primes")
    value = Fraction(value)
    vector = [0] * number_of_components
    if value == 0:
        return vector, Fraction(0)
    numerator = abs(value.numerator)
    denominator = value.denominator
    for i in range(number_of_components):
        numerator, up = _strip_prime(numerator, PRIMES[i])
        denominator, down = _strip_prime(denominator, PRIMES[i])
        vector[i] = up - down
        if numerator == 1 and denominator == 1:
            break
    sign = -1 if value < 0 else 1
    return vector, Fraction(sign * numerator, denominator)


def prime_limit(value: int | Fraction) -> int:
    """
    Number of vector components needed to factor a rational completely.

    Raises ValueError if a prime factor is beyond the prime table.
    """
    value = abs(Fraction(value))
    if value == 0:
        raise ValueError("Zero has no prime factorization")
    numerator, denominator = value.numerator, value.denominator
    limit = 0
    for i, p in enumerate(PRIMES):
        if numerator == 1 and denominator == 1:
            return limit
        numerator, up = _strip_prime(numerator, p)
        denominator, down = _strip_prime(denominator, p)
        if up or down:
            limit = i + 1
    if numerator == 1 and denominator == 1:
        return limit
    raise ValueError(f"{value} has prime factors beyond the prime table")


def to_monzo(value: int | Fraction) -> list[int]:
    """Full exponent vector of a positive rational."""
    vector, residual = to_monzo_and_residual(value, prime_limit(value))
    if residual != 1:
        raise ValueError(f"Cannot factor {value} into primes")
    return vector


def integer_root(n: int, k: int) -> int | None:
    """Exact k-th root of an integer, or None if there isn't one."""
    if n < 0:
        if k % 2 == 0:
            return None
        root = integer_root(-n, k)
        return None if root is None else -root
    if n < 2 or k == 1:
        return n
    x = 1 << ((n.bit_length() + k - 1) // k)
    while True:
        y = ((k - 1) * x + n // x ** (k - 1)) // k
        if y >= x:
            break
        x = y
    return x if x**k == n else None


def fraction_pow(base: Fraction, exponent: Fraction) -> Fraction | None:
    """Exact rational power, or None if the result is irrational or undefined."""
    if exponent.denominator == 1:
        if base == 0 and exponent < 0:
            return None
        return base**exponent.numerator
    numerator = integer_root(base.numerator, exponent.denominator)
    denominator = integer_root(base.denominator, exponent.denominator)
    if numerator is None or denominator is None:
        return None
    if numerator == 0 and exponent < 0:
        return None
    return Fraction(numerator, denominator) ** exponent.numerator


def is_decimal_fraction(value: Fraction) -> bool:
    """True if the fraction has a terminating decimal expansion."""
    denominator, _ = _strip_prime(value.denominator, 2)
    denominator, _ = _strip_prime(denominator, 5)
    return denominator == 1


def decimal_string(value: Fraction) -> str:
    """
    Exact decimal rendering of a terminating fraction.

    >>> decimal_string(Fraction(9420069, 1000))
    '9420.069'
    """
    if not is_decimal_fraction(value):
        raise ValueError(f"{value} has no terminating decimal expansion")
    _, twos = _strip_prime(value.denominator, 2)
    _, fives = _strip_prime(value.denominator, 5)
    places = max(twos, fives)
    scaled = abs(value.numerator) * 10**places // value.denominator
    sign = "-" if value < 0 else ""
    if not places:
        return f"{sign}{scaled}"
    digits = str(scaled).rjust(places + 1, "0")
    return f"{sign}{digits[:-places]}.{digits[-places:]}"
