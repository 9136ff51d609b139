"""Binary interchange format adapters (binary32, binary64).

A value is always carried as its raw unsigned bit pattern, so every pattern
(NaN payloads, signaling NaNs, signed zeros) survives untouched. Exact values
go through fractions.Fraction; the platform encoding is only used to
cross-check the derived constants.
"""

from __future__ import annotations

import struct
from decimal import Decimal, InvalidOperation
from fractions import Fraction
from typing import Dict, Tuple, Union

from .constants import FormatConstants, derive_constants, pow2


class BinaryFormat:
    def __init__(
        self,
        name: str,
        precision_bits: int,
        exponent_width: int,
        struct_code: str,
        bits_code: str,
        max_string_overhead: int,
        hex_suffix: str,
    ) -> None:
        self.name = name
        self.constants: FormatConstants = derive_constants(precision_bits, exponent_width)
        self.total_bits = precision_bits + exponent_width
        self.bits_mask = (1 << self.total_bits) - 1
        self.sign_mask = 1 << (self.total_bits - 1)
        self.mantissa_bits = precision_bits - 1
        self.mantissa_mask = (1 << self.mantissa_bits) - 1
        self.max_biased_exponent = (1 << exponent_width) - 1
        self.bias = (1 << (exponent_width - 1)) - 1
        self.infinity_bits = self.max_biased_exponent << self.mantissa_bits
        self.quiet_bit = 1 << (self.mantissa_bits - 1)
        self.nan_bits = self.infinity_bits | self.quiet_bit
        self.struct_code = struct_code
        self.bits_code = bits_code
        self.max_string_overhead = max_string_overhead
        self.hex_suffix = hex_suffix

    def __repr__(self) -> str:
        return f"BinaryFormat({self.name!r})"

    # platform encoding

    def float_of(self, bits: int) -> float:
        return struct.unpack(f">{self.struct_code}", struct.pack(f">{self.bits_code}", bits & self.bits_mask))[0]

    def bits_of(self, value: float) -> int:
        return struct.unpack(f">{self.bits_code}", struct.pack(f">{self.struct_code}", value))[0]

    # bit decomposition

    def fields(self, bits: int) -> Tuple[int, int, int]:
        bits &= self.bits_mask
        sign = bits >> (self.total_bits - 1)
        biased = (bits >> self.mantissa_bits) & self.max_biased_exponent
        return sign, biased, bits & self.mantissa_mask

    def from_fields(self, sign: int, biased: int, mantissa: int) -> int:
        return (
            ((sign & 1) << (self.total_bits - 1))
            | ((biased & self.max_biased_exponent) << self.mantissa_bits)
            | (mantissa & self.mantissa_mask)
        )

    def negate(self, bits: int) -> int:
        return (bits ^ self.sign_mask) & self.bits_mask

    # classification

    def is_nan(self, bits: int) -> bool:
        _, biased, mantissa = self.fields(bits)
        return biased == self.max_biased_exponent and mantissa != 0

    def is_infinite(self, bits: int) -> bool:
        return bits & ~self.sign_mask & self.bits_mask == self.infinity_bits

    def is_positive_infinity(self, bits: int) -> bool:
        return bits & self.bits_mask == self.infinity_bits

    def is_negative_infinity(self, bits: int) -> bool:
        return bits & self.bits_mask == self.sign_mask | self.infinity_bits

    def is_plus_zero(self, bits: int) -> bool:
        return bits & self.bits_mask == 0

    def is_minus_zero(self, bits: int) -> bool:
        return bits & self.bits_mask == self.sign_mask

    def is_zero(self, bits: int) -> bool:
        return bits & ~self.sign_mask & self.bits_mask == 0

    def is_finite(self, bits: int) -> bool:
        return self.fields(bits)[1] != self.max_biased_exponent

    def is_negative(self, bits: int) -> bool:
        return bool(bits & self.sign_mask)

    # exact arithmetic

    def significand_exponent(self, bits: int) -> Tuple[int, int]:
        """Return (c, q) with |value| == c * 2^q for a finite pattern."""
        _, biased, mantissa = self.fields(bits)
        if biased == self.max_biased_exponent:
            raise ValueError(f"{self.name} pattern 0x{bits:X} is not finite")
        k = self.constants
        if biased == 0:
            return mantissa, k.q_min
        return mantissa | k.c_min, k.q_min + biased - 1

    def exact(self, bits: int) -> Fraction:
        c, q = self.significand_exponent(bits)
        value = c * pow2(q)
        return -value if self.is_negative(bits) else value

    def round_fraction(self, x: Fraction, negative: bool = False) -> int:
        """Round x to the nearest pattern, ties to even, overflowing to infinity."""
        if x < 0:
            negative = True
            x = -x
        sign = self.sign_mask if negative else 0
        if x == 0:
            return sign
        k = self.constants
        q = x.numerator.bit_length() - x.denominator.bit_length() - k.p
        if x >= (1 << k.p) * pow2(q):
            q += 1
        q = max(q, k.q_min)
        scaled = x / pow2(q)
        c, r = divmod(scaled.numerator, scaled.denominator)
        if 2 * r > scaled.denominator or (2 * r == scaled.denominator and c & 1):
            c += 1
        if c > k.c_max:
            c >>= 1
            q += 1
        if q > k.q_max:
            return sign | self.infinity_bits
        if c < k.c_min:
            return sign | c
        return sign | ((q - k.q_min + 1) << self.mantissa_bits) | (c - k.c_min)

    def parse(self, text: str) -> int:
        """Correctly rounded decimal literal to bit pattern."""
        try:
            dec = Decimal(text.strip())
        except InvalidOperation as exc:
            raise ValueError(f"cannot parse {self.name} literal: {text!r}") from exc
        if dec.is_nan():
            return self.nan_bits
        sign = self.sign_mask if dec.is_signed() else 0
        if dec.is_infinite():
            return sign | self.infinity_bits
        # |dec| >= 10^(E_MAX+1) overflows and |dec| < 10^(E_MIN-2) is below
        # MIN_VALUE/2, decided without expanding the exponent into a Fraction
        k = self.constants
        if not dec.is_zero():
            if dec.adjusted() > k.e_max:
                return sign | self.infinity_bits
            if dec.adjusted() < k.e_min - 2:
                return sign
        return self.round_fraction(Fraction(dec), negative=dec.is_signed())

    def recovers(self, rendering: Union[str, Fraction], bits: int) -> bool:
        if isinstance(rendering, str):
            return self.parse(rendering) == bits & self.bits_mask
        return self.round_fraction(rendering, negative=self.is_negative(bits)) == bits & self.bits_mask

    # rendering helpers

    def hex_string(self, bits: int) -> str:
        if self.is_nan(bits):
            return "NaN"
        if self.is_infinite(bits):
            return "-Infinity" if self.is_negative(bits) else "Infinity"
        sign = "-" if self.is_negative(bits) else ""
        if self.is_zero(bits):
            return f"{sign}0x0.0p0{self.hex_suffix}"
        _, biased, mantissa = self.fields(bits)
        pad = -self.mantissa_bits % 4
        digits = format(mantissa << pad, f"0{(self.mantissa_bits + pad) // 4}x").rstrip("0") or "0"
        if biased == 0:
            return f"{sign}0x0.{digits}p{1 - self.bias}{self.hex_suffix}"
        return f"{sign}0x1.{digits}p{biased - self.bias}{self.hex_suffix}"

    def bits_string(self, bits: int) -> str:
        return f"0x{bits & self.bits_mask:0{self.total_bits // 4}X}"

    # constants consumed by the oracle

    def h(self) -> int:
        return self.constants.h

    def max_string_length(self) -> int:
        return self.constants.h + self.max_string_overhead

    def min_exp(self) -> int:
        return self.constants.e_min

    def max_exp(self) -> int:
        return self.constants.e_max


BINARY32 = BinaryFormat("binary32", 24, 8, "f", "I", 6, "F")
BINARY64 = BinaryFormat("binary64", 53, 11, "d", "Q", 7, "D")

FORMATS: Dict[str, BinaryFormat] = {
    BINARY32.name: BINARY32,
    BINARY64.name: BINARY64,
}


def format_by_name(name: str) -> BinaryFormat:
    try:
        return FORMATS[name]
    except KeyError:
        raise ValueError(f"unknown binary format: {name} (known: {','.join(FORMATS)})") from None


def precision_from_layout(fmt: BinaryFormat) -> int:
    """Rediscover P from the platform encoding of 3.0 (binary 1.1 x 2^1)."""
    bits = fmt.bits_of(3.0)
    return (bits & -bits).bit_length() - 1 + 2
