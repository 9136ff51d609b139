"""Value-selection strategies.

Each strategy is a generator of raw bit patterns, in a fixed enumeration
order so a failing value can be reproduced from the same random seed.
"""

from __future__ import annotations

import random
from fractions import Fraction
from typing import Iterator, Optional

from .constants import pow2
from .formats import BinaryFormat
from .vectors import ANOMALIES, NAN_PATTERNS, PAXSON

Z = 1_024
FRACTION_Z = 10
FRACTION_LIMIT = 10_000
SHORT_DECIMAL_LIMIT = 10_000


def around(fmt: BinaryFormat, bits: int, z: int) -> Iterator[int]:
    """bits - z .. bits + z; any pattern is valid input, so no range checks at the extremes."""
    for i in range(-z, z + 1):
        yield (bits + i) & fmt.bits_mask


def extreme_values(fmt: BinaryFormat, z: int = Z) -> Iterator[int]:
    k = fmt.constants
    max_bits = fmt.round_fraction(k.max_value)
    min_normal_bits = fmt.round_fraction(k.min_normal)
    min_bits = fmt.round_fraction(k.min_value)

    yield fmt.sign_mask | fmt.infinity_bits
    yield from around(fmt, fmt.negate(max_bits), z)
    yield from around(fmt, fmt.negate(min_normal_bits), z)
    yield from around(fmt, fmt.negate(min_bits), z)
    yield fmt.sign_mask
    yield 0
    yield from around(fmt, min_bits, z)
    yield from around(fmt, min_normal_bits, z)
    yield from around(fmt, max_bits, z)
    yield fmt.infinity_bits
    yield fmt.nan_bits
    yield from NAN_PATTERNS.get(fmt.name, ())

    # every multiple of MIN_VALUE on the tiny-value path
    for c in range(1, k.c_tiny):
        yield fmt.round_fraction(c * k.min_value)


def powers_of_10(fmt: BinaryFormat, z: int = Z) -> Iterator[int]:
    k = fmt.constants
    for e in range(k.e_min, k.e_max + 1):
        yield from around(fmt, fmt.parse(f"1e{e}"), z)


def powers_of_2(fmt: BinaryFormat, z: int = Z) -> Iterator[int]:
    k = fmt.constants
    v = k.min_value
    while v <= k.max_value:
        yield from around(fmt, fmt.round_fraction(v), z)
        v *= 2


def anomalies(fmt: BinaryFormat) -> Iterator[int]:
    for literal in ANOMALIES.get(fmt.name, ()):
        yield fmt.parse(literal)


def paxson(fmt: BinaryFormat) -> Iterator[int]:
    for significand, exponent in PAXSON.get(fmt.name, ()):
        yield fmt.round_fraction(significand * pow2(exponent))


def ints(fmt: BinaryFormat, limit: Optional[int] = None) -> Iterator[int]:
    """Positive integers below 2^(P-1), all exact."""
    stop = 1 << (fmt.constants.p - 1)
    if limit is not None:
        stop = min(stop, limit)
    for i in range(1, stop):
        yield fmt.round_fraction(Fraction(i))


def decimal_fractions(
    fmt: BinaryFormat,
    denominator: int,
    z: int = FRACTION_Z,
    limit: int = FRACTION_LIMIT,
) -> Iterator[int]:
    for i in range(1, limit):
        yield from around(fmt, fmt.round_fraction(Fraction(i, denominator)), z)


def deci(fmt: BinaryFormat, z: int = FRACTION_Z, limit: int = FRACTION_LIMIT) -> Iterator[int]:
    """0.1, 0.2, ..., 999.9 and around."""
    return decimal_fractions(fmt, 10, z, limit)


def centi(fmt: BinaryFormat, z: int = FRACTION_Z, limit: int = FRACTION_LIMIT) -> Iterator[int]:
    """0.01, 0.02, ..., 99.99 and around."""
    return decimal_fractions(fmt, 100, z, limit)


def milli(fmt: BinaryFormat, z: int = FRACTION_Z, limit: int = FRACTION_LIMIT) -> Iterator[int]:
    """0.001, 0.002, ..., 9.999 and around."""
    return decimal_fractions(fmt, 1_000, z, limit)


def random_short_decimals(fmt: BinaryFormat, rng: random.Random, z: int = Z) -> Iterator[int]:
    """Short decimals at one random exponent: 1-digit, 2-digit, ... integers times 10^e."""
    k = fmt.constants
    e = rng.randrange(k.e_max - k.e_min + 1) + k.e_min
    pow10 = 1
    while pow10 < SHORT_DECIMAL_LIMIT:
        digits = rng.randrange(9 * pow10) + pow10
        yield from around(fmt, fmt.parse(f"{digits}e{e}"), z)
        pow10 *= 10


def random_bits(fmt: BinaryFormat, count: int, rng: random.Random) -> Iterator[int]:
    for _ in range(count):
        yield rng.getrandbits(fmt.total_bits)


def bit_range(fmt: BinaryFormat, start: int, stop: int) -> Iterator[int]:
    if not 0 <= start <= stop <= fmt.bits_mask + 1:
        raise ValueError(f"invalid {fmt.name} bit range: [{start:#x}, {stop:#x})")
    return iter(range(start, stop))


def all_bits(fmt: BinaryFormat) -> Iterator[int]:
    """Every pattern, negative patterns first, in signed integer order."""
    yield from range(fmt.sign_mask, fmt.bits_mask + 1)
    yield from range(0, fmt.sign_mask)


def positive_bits(fmt: BinaryFormat) -> Iterator[int]:
    return bit_range(fmt, 0, fmt.sign_mask)
