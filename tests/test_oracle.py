from fractions import Fraction

import pytest

from todecimal_checker.failures import FailureLog
from todecimal_checker.formats import BINARY32, BINARY64
from todecimal_checker.oracle import PROPERTIES, check_rendering, check_value, closest_recovering, enclosing

ONE_F = 0x3F800000
POINT_ONE_F = 0x3DCCCCCD
NINE_POINT_NINE_E_MINUS_44 = 71  # 71 * MIN_VALUE


@pytest.mark.parametrize(
    "bits,rendering",
    [
        (1, "1.4E-45"),
        (0x42C80000, "100.0"),
        (0x80000000, "-0.0"),
        (0, "0.0"),
        (0x7F800000, "Infinity"),
        (0xFF800000, "-Infinity"),
        (0x7FC00001, "NaN"),
        (0x7F800001, "NaN"),
        (0xFFC00001, "NaN"),
        (0xFF800001, "NaN"),
        (ONE_F, "1.0"),
        (POINT_ONE_F, "0.1"),
        (0x7F7FFFFF, "3.4028235E38"),
        (0x00800000, "1.1754944E-38"),
        (NINE_POINT_NINE_E_MINUS_44, "9.9E-44"),
    ],
)
def test_accepts_correct_renderings(bits, rendering):
    assert check_rendering(BINARY32, bits, rendering) is None


def test_accepts_1e16_float():
    assert check_rendering(BINARY32, BINARY32.parse("1.0E16"), "1.0E16") is None


def test_accepts_binary64_min_value():
    assert check_rendering(BINARY64, 1, "4.9E-324") is None


@pytest.mark.parametrize(
    "bits,rendering,prop",
    [
        (0x7FC00000, "nan", "special"),
        (0x7FC00000, "NaN ", "special"),
        (0, "0", "special"),
        (0x80000000, "0.0", "special"),
        (0xFF800000, "-Inf", "special"),
        (1, "1.4e-45", "shape"),
        (ONE_F, "-1.0", "shape"),
        (ONE_F, "1.00", "shape"),
        (0x42C80000, "1.0E2", "shape"),
        (ONE_F, 1.0, "shape"),
        (BINARY32.parse("1.2345678901E-30"), "1.2345678901E-30", "length"),
        (POINT_ONE_F, "0.1000000015", "length"),
        (ONE_F, "1.1", "round_trip"),
        (NINE_POINT_NINE_E_MINUS_44, "1.0E-43", "closest"),
        (1, "1.0E-45", "closest"),
        (POINT_ONE_F, "0.100000001", "shortest"),
        (1, "1.40129846E-45", "shortest"),
    ],
)
def test_rejects_with_first_violated_property(bits, rendering, prop):
    verdict = check_rendering(BINARY32, bits, rendering)
    assert verdict is not None
    assert verdict.prop == prop
    assert prop in PROPERTIES


def test_binary64_rejects_five_e_minus_324():
    verdict = check_rendering(BINARY64, 1, "5.0E-324")
    assert verdict is not None
    assert verdict.prop == "closest"
    assert "4.9E-324" in verdict.detail


def test_ties_go_to_even_digit(mini8):
    # 1.25 sits exactly between 1.2 and 1.3, and both round back to it
    bits = mini8.round_fraction(Fraction(5, 4))
    assert mini8.recovers("1.2", bits)
    assert mini8.recovers("1.3", bits)
    assert check_rendering(mini8, bits, "1.2") is None
    verdict = check_rendering(mini8, bits, "1.3")
    assert verdict is not None
    assert verdict.prop == "closest"


def test_enclosing():
    assert enclosing(Fraction(1), 2) == (10, 11, -1)
    lo, hi, scale = enclosing(BINARY32.exact(1), 2)
    assert (lo, hi, scale) == (14, 15, -46)


def test_closest_recovering_exact_value():
    assert closest_recovering(BINARY32, ONE_F, Fraction(1), 2) == (10, -1)


def test_check_value_logs_failure():
    log = FailureLog()
    assert check_value(BINARY32, ONE_F, "1.0", log)
    assert len(log) == 0
    assert not check_value(BINARY32, ONE_F, "1.1", log)
    assert len(log) == 1
    failure = log.failures[0]
    assert failure.bits == "0x3F800000"
    assert failure.hex_string == "0x1.0p0F"
    assert failure.rendering == "1.1"
    assert failure.prop == "round_trip"


@pytest.mark.parametrize("rendering", ["1.0E99999999", "1.0E-99999999", "1.0E9999999", "1.0E-999999"])
def test_huge_exponent_is_logged_not_evaluated(rendering):
    log = FailureLog()
    assert not check_value(BINARY32, ONE_F, rendering, log)
    assert [failure.prop for failure in log.failures] == ["exponent"]


def test_exponent_checked_before_round_trip():
    # 1.0E40 neither fits binary32 nor parses back to 1.0
    verdict = check_rendering(BINARY32, ONE_F, "1.0E40")
    assert verdict is not None
    assert verdict.prop == "exponent"
