from fractions import Fraction

import pytest

from todecimal_checker.constants import (
    PUBLISHED_FIELDS,
    decimal_exponent,
    derive_constants,
    flog10pow2,
    pow10,
    pow2,
)
from todecimal_checker.converters import JDK_PUBLISHED


def test_binary32_constants():
    k = derive_constants(24, 8)
    assert (k.p, k.w, k.q_min, k.q_max) == (24, 8, -149, 104)
    assert (k.c_min, k.c_max) == (1 << 23, (1 << 24) - 1)
    assert (k.k_min, k.k_max, k.h) == (-45, 31, 9)
    assert (k.e_min, k.e_max, k.c_tiny) == (-44, 39, 8)
    assert k.min_value == Fraction(1, 2**149)
    assert k.min_normal == Fraction(1, 2**126)
    assert k.max_value == ((1 << 24) - 1) * 2**104
    assert k.total_bits == 32


def test_binary64_constants():
    k = derive_constants(53, 11)
    assert (k.p, k.w, k.q_min, k.q_max) == (53, 11, -1074, 971)
    assert (k.k_min, k.k_max, k.h) == (-324, 292, 17)
    assert (k.e_min, k.e_max, k.c_tiny) == (-323, 309, 3)
    assert k.min_normal == Fraction(1, 2**1022)


@pytest.mark.parametrize("name,args", [("binary32", (24, 8)), ("binary64", (53, 11))])
def test_published_constants_match_jdk(name, args):
    assert derive_constants(*args).published() == JDK_PUBLISHED[name]
    assert list(derive_constants(*args).published()) == PUBLISHED_FIELDS


def test_derive_constants_is_pure():
    first = derive_constants(24, 8)
    derive_constants.cache_clear()
    second = derive_constants(24, 8)
    assert first == second
    assert first is not second


def test_flog10pow2_matches_exact_floor():
    for q in range(-2_000, 2_001):
        f = flog10pow2(q)
        assert pow10(f) <= pow2(q) < pow10(f + 1), q


def test_flog10pow2_rejects_out_of_range():
    with pytest.raises(ValueError):
        flog10pow2(6_000_000)


@pytest.mark.parametrize(
    "value,expected",
    [
        (Fraction(1), 1),
        (Fraction(99, 100), 0),
        (Fraction(1, 1000), -2),
        (Fraction(10**7), 8),
        (Fraction(9_999_999), 7),
    ],
)
def test_decimal_exponent(value, expected):
    assert decimal_exponent(value) == expected


def test_decimal_exponent_rejects_zero():
    with pytest.raises(ValueError):
        decimal_exponent(Fraction(0))
