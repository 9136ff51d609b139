"""Format-derived constants for shortest decimal rendering checks.

Every boundary is computed from the precision and the exponent width alone:
- P, W: significand bits (implicit bit included) and exponent field width
- Q_MIN/Q_MAX, C_MIN/C_MAX: value = c * 2^q with integer c
- K_MIN/K_MAX: floor(log10(2^q)) at the binary exponent extremes
- H: max significant digits a shortest rendering can need
- E_MIN/E_MAX: decimal exponent e of MIN_VALUE/MAX_VALUE, 10^(e-1) <= v < 10^e
- C_TINY: multiples of MIN_VALUE below it need the tiny-value path
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from fractions import Fraction
from functools import lru_cache
from typing import Dict

# floor(q * log10(2)) == (q * FLOG10_POW2_MUL) >> FLOG10_POW2_SHIFT for |q| <= FLOG10_POW2_RANGE
FLOG10_POW2_MUL = 661_971_961_083
FLOG10_POW2_SHIFT = 41
FLOG10_POW2_RANGE = 5_456_721

PUBLISHED_FIELDS = [
    "P",
    "Q_MIN",
    "Q_MAX",
    "C_MIN",
    "C_MAX",
    "K_MIN",
    "K_MAX",
    "H",
    "E_MIN",
    "E_MAX",
    "C_TINY",
]


@dataclass(frozen=True)
class FormatConstants:
    p: int
    w: int
    q_min: int
    q_max: int
    c_min: int
    c_max: int
    k_min: int
    k_max: int
    h: int
    e_min: int
    e_max: int
    c_tiny: int
    min_value: Fraction
    min_normal: Fraction
    max_value: Fraction

    @property
    def total_bits(self) -> int:
        return self.p + self.w

    def published(self) -> Dict[str, int]:
        """Integer constants keyed the way converters publish them."""
        values = asdict(self)
        return {name: values[name.lower()] for name in PUBLISHED_FIELDS}


def flog10pow2(q: int) -> int:
    if not -FLOG10_POW2_RANGE <= q <= FLOG10_POW2_RANGE:
        raise ValueError(f"binary exponent out of range for flog10pow2: {q}")
    return (q * FLOG10_POW2_MUL) >> FLOG10_POW2_SHIFT


def pow10(k: int) -> Fraction:
    if k >= 0:
        return Fraction(10**k)
    return Fraction(1, 10**-k)


def pow2(q: int) -> Fraction:
    if q >= 0:
        return Fraction(1 << q)
    return Fraction(1, 1 << -q)


def decimal_exponent(x: Fraction) -> int:
    """Return e such that 10^(e-1) <= x < 10^e, for x > 0."""
    if x <= 0:
        raise ValueError(f"decimal exponent of non-positive value: {x}")
    e = len(str(x.numerator)) - len(str(x.denominator))
    while x >= pow10(e):
        e += 1
    while x < pow10(e - 1):
        e -= 1
    return e


def c_tiny(q_min: int, k_min: int) -> int:
    q, r = divmod(1 << -q_min, 10 ** -(k_min + 1))
    return q + 1 if r > 0 else q


@lru_cache(maxsize=None)
def derive_constants(precision_bits: int, exponent_width: int) -> FormatConstants:
    p = precision_bits
    total_bits = precision_bits + exponent_width
    w = (total_bits - 1) - (p - 1)
    q_min = (-1 << (w - 1)) - p + 3
    q_max = (1 << (w - 1)) - p
    c_min = 1 << (p - 1)
    c_max = (1 << p) - 1

    k_min = flog10pow2(q_min)
    k_max = flog10pow2(q_max)
    h = flog10pow2(p) + 2

    min_value = pow2(q_min)
    min_normal = c_min * pow2(q_min)
    max_value = c_max * pow2(q_max)

    return FormatConstants(
        p=p,
        w=w,
        q_min=q_min,
        q_max=q_max,
        c_min=c_min,
        c_max=c_max,
        k_min=k_min,
        k_max=k_max,
        h=h,
        e_min=decimal_exponent(min_value),
        e_max=decimal_exponent(max_value),
        c_tiny=c_tiny(q_min, k_min),
        min_value=min_value,
        min_normal=min_normal,
        max_value=max_value,
    )
