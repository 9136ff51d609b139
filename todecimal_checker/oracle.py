"""Per-value property checks of a decimal rendering.

Properties, checked in order; the first violation is the verdict:
- special: NaN/infinity/zero use their single canonical spelling
- shape: decimal grammar, matching sign, canonical plain/scientific layout
- length: at most max_string_length() characters
- exponent: decimal exponent in [E_MIN, E_MAX]
- round_trip: parsing the rendering gives back the exact bit pattern
- length: at most H significant digits
- closest: nearest decimal of its length (at least 2) that round-trips, ties to even
- shortest: no decimal with one digit less round-trips
"""

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from typing import List, Optional, Tuple

from .constants import decimal_exponent, pow10
from .failures import Failure, FailureLog
from .formats import BinaryFormat
from .layout import (
    MINUS_ZERO,
    NAN,
    NEGATIVE_INFINITY,
    PLUS_ZERO,
    POSITIVE_INFINITY,
    parse_rendering,
    parts_from_significand,
    render,
)

PROPERTIES = ["special", "shape", "length", "exponent", "round_trip", "closest", "shortest"]


@dataclass(frozen=True)
class PropertyVerdict:
    prop: str
    detail: str


def enclosing(x: Fraction, length: int) -> Tuple[int, int, int]:
    """Neighbours of x > 0 with `length` significant digits.

    Returns (lo, hi, scale) with lo * 10^scale <= x < hi * 10^scale and
    hi == lo + 1; lo * 10^scale == x when x itself fits.
    """
    scale = decimal_exponent(x) - length
    scaled = x / pow10(scale)
    lo = scaled.numerator // scaled.denominator
    return lo, lo + 1, scale


def closest_recovering(fmt: BinaryFormat, bits: int, x: Fraction, length: int) -> Optional[Tuple[int, int]]:
    """Closest decimal of `length` digits rounding to bits, as (c, scale); ties to even c."""
    lo, hi, scale = enclosing(x, length)
    unit = pow10(scale)
    candidates: List[int] = [lo] if lo * unit == x else [lo, hi]
    recovering = [c for c in candidates if fmt.recovers(c * unit, bits)]
    if not recovering:
        return None
    best = min(recovering, key=lambda c: (abs(c * unit - x), c & 1))
    return best, scale


def _expect(s: str, expected: str) -> Optional[PropertyVerdict]:
    if s == expected:
        return None
    return PropertyVerdict("special", f"expected {expected!r}")


def check_rendering(fmt: BinaryFormat, bits: int, s: str) -> Optional[PropertyVerdict]:
    if not isinstance(s, str):
        return PropertyVerdict("shape", f"rendering is {type(s).__name__}, not str")

    if fmt.is_nan(bits):
        return _expect(s, NAN)
    if fmt.is_positive_infinity(bits):
        return _expect(s, POSITIVE_INFINITY)
    if fmt.is_negative_infinity(bits):
        return _expect(s, NEGATIVE_INFINITY)
    if fmt.is_plus_zero(bits):
        return _expect(s, PLUS_ZERO)
    if fmt.is_minus_zero(bits):
        return _expect(s, MINUS_ZERO)

    parts = parse_rendering(s)
    if parts is None:
        return PropertyVerdict("shape", "not a decimal rendering")
    if parts.negative != fmt.is_negative(bits):
        return PropertyVerdict("shape", "sign does not match value")
    canonical = render(parts)
    if canonical != s:
        return PropertyVerdict("shape", f"non-canonical layout, expected {canonical!r}")

    if len(s) > fmt.max_string_length():
        return PropertyVerdict("length", f"{len(s)} chars > {fmt.max_string_length()}")

    # before any exact arithmetic: "1.0E99999999" is short but 10^99999999 is not
    if not fmt.min_exp() <= parts.exponent <= fmt.max_exp():
        return PropertyVerdict("exponent", f"exponent {parts.exponent} outside [{fmt.min_exp()}, {fmt.max_exp()}]")

    if not fmt.recovers(s, bits):
        return PropertyVerdict("round_trip", f"parses to {fmt.bits_string(fmt.parse(s))}")

    n = parts.length
    if n > fmt.h():
        return PropertyVerdict("length", f"{n} digits > H={fmt.h()}")

    x = abs(fmt.exact(bits))
    d = parts.magnitude()
    length = max(n, 2)
    best = closest_recovering(fmt, bits, x, length)
    if best is None:
        return PropertyVerdict("closest", f"no {length}-digit neighbour rounds to the value")
    c, scale = best
    if d != c * pow10(scale):
        expected = render(parts_from_significand(parts.negative, c, scale))
        return PropertyVerdict("closest", f"closest {length}-digit decimal is {expected!r}")

    if n >= 3:
        lo, hi, scale = enclosing(x, n - 1)
        for shorter in (lo, hi):
            if fmt.recovers(shorter * pow10(scale), bits):
                expected = render(parts_from_significand(parts.negative, shorter, scale))
                return PropertyVerdict("shortest", f"{expected!r} also rounds to the value")
    return None


def check_value(fmt: BinaryFormat, bits: int, s: str, log: FailureLog) -> bool:
    verdict = check_rendering(fmt, bits, s)
    if verdict is None:
        return True
    log.add(
        Failure(
            bits=fmt.bits_string(bits),
            hex_string=fmt.hex_string(bits),
            rendering=s if isinstance(s, str) else repr(s),
            prop=verdict.prop,
            detail=verdict.detail,
        )
    )
    return False
