"""Canonical textual layout of decimal renderings.

Finite values: plain notation for 10^-3 <= |d| < 10^7 ("100.0", "0.001"),
computerized scientific notation otherwise ("1.4E-45", "1.0E7"). Both forms
carry at least one fraction digit and no superfluous zeros.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from fractions import Fraction
from typing import Optional

from .constants import pow10

NAN = "NaN"
POSITIVE_INFINITY = "Infinity"
NEGATIVE_INFINITY = "-Infinity"
PLUS_ZERO = "0.0"
MINUS_ZERO = "-0.0"

PLAIN_MIN_EXP = -2
PLAIN_MAX_EXP = 7

RENDERING_RE = re.compile(r"(-)?([0-9]+)\.([0-9]+)(?:E(-?[0-9]+))?")


@dataclass(frozen=True)
class DecimalParts:
    """value == (-1)^negative * 0.digits * 10^exponent"""

    negative: bool
    digits: str
    exponent: int

    @property
    def length(self) -> int:
        return len(self.digits)

    @property
    def is_zero(self) -> bool:
        return not self.digits

    def magnitude(self) -> Fraction:
        if not self.digits:
            return Fraction(0)
        return int(self.digits) * pow10(self.exponent - len(self.digits))

    def value(self) -> Fraction:
        return -self.magnitude() if self.negative else self.magnitude()


def normalized(negative: bool, digits: str, exponent: int) -> DecimalParts:
    stripped = digits.lstrip("0")
    exponent -= len(digits) - len(stripped)
    stripped = stripped.rstrip("0")
    if not stripped:
        return DecimalParts(negative, "", 0)
    return DecimalParts(negative, stripped, exponent)


def parts_from_significand(negative: bool, c: int, exponent: int) -> DecimalParts:
    """Parts for (-1)^negative * c * 10^exponent."""
    digits = str(c)
    return normalized(negative, digits, exponent + len(digits))


def parse_rendering(text: str) -> Optional[DecimalParts]:
    """Lexical parse of a finite rendering, None if it does not match the grammar."""
    match = RENDERING_RE.fullmatch(text)
    if match is None:
        return None
    sign, int_part, frac_part, exp_part = match.groups()
    exponent = len(int_part) + (int(exp_part) if exp_part is not None else 0)
    return normalized(sign is not None, int_part + frac_part, exponent)


def parts_from_literal(text: str) -> DecimalParts:
    """Parts of any literal decimal.Decimal accepts (e.g. repr() output)."""
    try:
        dec = Decimal(text)
    except InvalidOperation as exc:
        raise ValueError(f"cannot parse decimal literal: {text!r}") from exc
    if not dec.is_finite():
        raise ValueError(f"literal is not finite: {text!r}")
    sign, digit_tuple, exp = dec.as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    return normalized(bool(sign), digits, exp + len(digits))


def render(parts: DecimalParts) -> str:
    if parts.is_zero:
        return MINUS_ZERO if parts.negative else PLUS_ZERO
    sign = "-" if parts.negative else ""
    digits = parts.digits
    e = parts.exponent
    if PLAIN_MIN_EXP <= e <= PLAIN_MAX_EXP:
        if e <= 0:
            return f"{sign}0.{'0' * -e}{digits}"
        integer = digits[:e].ljust(e, "0")
        return f"{sign}{integer}.{digits[e:] or '0'}"
    return f"{sign}{digits[0]}.{digits[1:] or '0'}E{e - 1}"
