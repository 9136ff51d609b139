"""Static test vectors, keyed by format name."""

from __future__ import annotations

from typing import Dict, Tuple

# Renderings that older converters got wrong: longer than needed,
# or round-tripping but not the closest decimal.
ANOMALIES: Dict[str, Tuple[str, ...]] = {
    "binary32": (
        # longer than needed
        "1.1754944E-38",
        "2.2E-44",
        "1.0E16",
        "2.0E16",
        "3.0E16",
        "5.0E16",
        "3.0E17",
        "3.2E18",
        "3.7E18",
        "3.7E16",
        "3.72E17",
        "2.432902E18",
        # not the closest
        "9.9E-44",
    ),
    "binary64": (
        # longer than needed
        "2.0E-3",
        "1.0E23",
        "8.41E21",
        "5.1E21",
        "2.2250738585072014E-308",
        # not the closest
        "4.9E-324",
        "9.9E-324",
    ),
}

# Paxson V, "A Program for Testing IEEE Decimal-Binary Conversion":
# (significand, binary exponent) pairs that are hard to render.
PAXSON: Dict[str, Tuple[Tuple[int, int], ...]] = {
    "binary32": (
        (12_676_506, -102),
        (15_445_013, -103),
        (13_734_123, 86),
        (12_428_269, -138),
        (12_676_506, -130),
        (15_334_037, -146),
        (11_518_287, -41),
        (12_584_953, -145),
        (15_961_084, -125),
        (14_915_817, -146),
        (10_845_484, -102),
        (16_431_059, -61),
        (16_093_626, 69),
        (9_983_778, 25),
        (12_745_034, 104),
        (12_706_553, 72),
        (11_005_028, 45),
        (15_059_547, 71),
        (16_015_691, -99),
        (8_667_859, 56),
        (14_855_922, -82),
        (14_855_922, -83),
        (10_144_164, -110),
        (13_248_074, 95),
    ),
    "binary64": (
        (8_511_030_020_275_656, -342),
        (5_201_988_407_066_741, -824),
        (6_406_892_948_269_899, 237),
        (8_431_154_198_732_492, 72),
        (6_475_049_196_144_587, 99),
        (8_274_307_542_972_842, 726),
        (5_381_065_484_265_332, -456),
        (6_761_728_585_499_734, -1057),
        (7_976_538_478_610_756, 376),
        (5_982_403_858_958_067, 377),
        (5_536_995_190_630_837, 93),
        (7_225_450_889_282_194, 710),
        (7_225_450_889_282_194, 709),
        (8_703_372_741_147_379, 117),
        (8_944_262_675_275_217, -1001),
        (7_459_803_696_087_692, -707),
        (6_080_469_016_670_379, -381),
        (8_385_515_147_034_757, 721),
        (7_514_216_811_389_786, -828),
        (8_397_297_803_260_511, -345),
        (6_733_459_239_310_543, 202),
        (8_091_450_587_292_794, -473),
    ),
}

# Quiet NaNs have the top mantissa bit set, signaling NaNs have it clear.
# One payload bit keeps the signaling patterns from being infinities.
NAN_PATTERNS: Dict[str, Tuple[int, ...]] = {
    "binary32": (0x7FC0_0001, 0x7F80_0001, 0xFFC0_0001, 0xFF80_0001),
    "binary64": (
        0x7FF8_0000_0000_0001,
        0x7FF0_0000_0000_0001,
        0xFFF8_0000_0000_0001,
        0xFFF0_0000_0000_0001,
    ),
}
