"""Converters that can be put under test.

- reference: exact rational shortest rendering (slow, correct by construction)
- platform: numpy's shortest digits (Dragon4, unique mode) in the same layout
- repr: Python's float repr digits, binary64 only
- module:attr: any importable callable taking a bit pattern, returning a str
"""

from __future__ import annotations

import importlib
import sys
from typing import Callable, Dict, Optional

import numpy as np

from .constants import pow10
from .formats import BinaryFormat
from .layout import (
    MINUS_ZERO,
    NAN,
    NEGATIVE_INFINITY,
    PLUS_ZERO,
    POSITIVE_INFINITY,
    parts_from_literal,
    parts_from_significand,
    render,
)
from .oracle import closest_recovering, enclosing

# Constants published by the JDK FloatToDecimal/DoubleToDecimal converters.
JDK_PUBLISHED: Dict[str, Dict[str, int]] = {
    "binary32": {
        "P": 24,
        "Q_MIN": -149,
        "Q_MAX": 104,
        "C_MIN": 1 << 23,
        "C_MAX": (1 << 24) - 1,
        "K_MIN": -45,
        "K_MAX": 31,
        "H": 9,
        "E_MIN": -44,
        "E_MAX": 39,
        "C_TINY": 8,
    },
    "binary64": {
        "P": 53,
        "Q_MIN": -1074,
        "Q_MAX": 971,
        "C_MIN": 1 << 52,
        "C_MAX": (1 << 53) - 1,
        "K_MIN": -324,
        "K_MAX": 292,
        "H": 17,
        "E_MIN": -323,
        "E_MAX": 309,
        "C_TINY": 3,
    },
}


class UnknownConverter(ValueError):
    pass


def layout_constants(precision: int, min_exp: int, max_exp: int) -> Dict[str, int]:
    """Integer constants implied by a platform's float description.

    min_exp is the exponent of MIN_NORMAL as 1.f x 2^min_exp, max_exp the
    exponent with 2^max_exp just above MAX_VALUE (numpy.finfo conventions).
    """
    return {
        "P": precision,
        "Q_MIN": min_exp - precision + 1,
        "Q_MAX": max_exp - precision,
        "C_MIN": 1 << (precision - 1),
        "C_MAX": (1 << precision) - 1,
    }


def render_special(fmt: BinaryFormat, bits: int) -> Optional[str]:
    if fmt.is_nan(bits):
        return NAN
    if fmt.is_positive_infinity(bits):
        return POSITIVE_INFINITY
    if fmt.is_negative_infinity(bits):
        return NEGATIVE_INFINITY
    if fmt.is_plus_zero(bits):
        return PLUS_ZERO
    if fmt.is_minus_zero(bits):
        return MINUS_ZERO
    return None


class Converter:
    name = "abstract"

    def __init__(self, fmt: BinaryFormat) -> None:
        self.fmt = fmt

    def to_string(self, bits: int) -> str:
        special = render_special(self.fmt, bits)
        if special is not None:
            return special
        return self.render_finite(bits)

    def render_finite(self, bits: int) -> str:
        raise NotImplementedError

    def published_constants(self) -> Optional[Dict[str, int]]:
        return None


class ReferenceConverter(Converter):
    """Shortest length m; when m == 1 the closest of length 1 or 2; ties to even."""

    name = "reference"

    def render_finite(self, bits: int) -> str:
        fmt = self.fmt
        x = abs(fmt.exact(bits))
        n = 1
        while n < fmt.h():
            lo, hi, scale = enclosing(x, n)
            unit = pow10(scale)
            if fmt.recovers(lo * unit, bits) or fmt.recovers(hi * unit, bits):
                break
            n += 1
        best = closest_recovering(fmt, bits, x, max(n, 2))
        if best is None:
            raise RuntimeError(f"no decimal rounds to {fmt.hex_string(bits)}")
        c, scale = best
        return render(parts_from_significand(fmt.is_negative(bits), c, scale))

    def published_constants(self) -> Optional[Dict[str, int]]:
        published = JDK_PUBLISHED.get(self.fmt.name)
        return dict(published) if published is not None else None


class NumpyConverter(Converter):
    name = "platform"

    FLOAT_TYPES = {"binary32": (np.uint32, np.float32), "binary64": (np.uint64, np.float64)}

    def __init__(self, fmt: BinaryFormat) -> None:
        super().__init__(fmt)
        if fmt.name not in self.FLOAT_TYPES:
            raise UnknownConverter(f"numpy has no shortest rendering for {fmt.name}")
        self.bits_type, self.float_type = self.FLOAT_TYPES[fmt.name]

    def render_finite(self, bits: int) -> str:
        value = np.array(bits, dtype=self.bits_type).view(self.float_type)[()]
        text = np.format_float_scientific(value, unique=True, trim="-")
        return render(parts_from_literal(text))

    def published_constants(self) -> Optional[Dict[str, int]]:
        info = np.finfo(self.float_type)
        return layout_constants(int(info.nmant) + 1, int(info.minexp), int(info.maxexp))


class ReprConverter(Converter):
    name = "repr"

    def __init__(self, fmt: BinaryFormat) -> None:
        super().__init__(fmt)
        if fmt.name != "binary64":
            raise UnknownConverter(f"repr() renders binary64 only, not {fmt.name}")

    def render_finite(self, bits: int) -> str:
        return render(parts_from_literal(repr(self.fmt.float_of(bits))))

    def published_constants(self) -> Optional[Dict[str, int]]:
        return layout_constants(sys.float_info.mant_dig, sys.float_info.min_exp - 1, sys.float_info.max_exp)


class CallableConverter(Converter):
    def __init__(self, fmt: BinaryFormat, name: str, func: Callable[[int], str]) -> None:
        super().__init__(fmt)
        self.name = name
        self.func = func

    def to_string(self, bits: int) -> str:
        return self.func(bits)


CONVERTERS = {
    ReferenceConverter.name: ReferenceConverter,
    NumpyConverter.name: NumpyConverter,
    ReprConverter.name: ReprConverter,
}


def build_converter(name: str, fmt: BinaryFormat) -> Converter:
    """Resolve a converter by registry name or `package.module:callable`."""
    if name in CONVERTERS:
        return CONVERTERS[name](fmt)
    module_name, sep, attr = name.partition(":")
    if not sep or not module_name or not attr:
        raise UnknownConverter(f"unknown converter: {name} (known: {','.join(CONVERTERS)} or module:callable)")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise UnknownConverter(f"cannot import converter module: {module_name}") from exc
    func = getattr(module, attr, None)
    if not callable(func):
        raise UnknownConverter(f"{name} is not a callable")
    return CallableConverter(fmt, name, func)
