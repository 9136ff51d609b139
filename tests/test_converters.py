import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from todecimal_checker.converters import (
    CallableConverter,
    NumpyConverter,
    ReferenceConverter,
    ReprConverter,
    UnknownConverter,
    build_converter,
    layout_constants,
)
from todecimal_checker.formats import BINARY32, BINARY64
from todecimal_checker.oracle import check_rendering

REFERENCE32 = ReferenceConverter(BINARY32)
REFERENCE64 = ReferenceConverter(BINARY64)


@pytest.mark.parametrize(
    "literal,expected",
    [
        ("1.4E-45", "1.4E-45"),
        ("100", "100.0"),
        ("0.1", "0.1"),
        ("1.0E16", "1.0E16"),
        ("1e7", "1.0E7"),
        ("1234567", "1234567.0"),
        ("0.001", "0.001"),
        ("1e-4", "1.0E-4"),
        ("-2.5", "-2.5"),
        ("9.9E-44", "9.9E-44"),
        ("3.4028235E38", "3.4028235E38"),
        ("1.17549435E-38", "1.1754944E-38"),
        ("NaN", "NaN"),
        ("-Infinity", "-Infinity"),
        ("-0.0", "-0.0"),
    ],
)
def test_reference_binary32(literal, expected):
    assert REFERENCE32.to_string(BINARY32.parse(literal)) == expected


@pytest.mark.parametrize(
    "literal,expected",
    [
        ("4.9E-324", "4.9E-324"),
        ("1e23", "1.0E23"),
        ("0.1", "0.1"),
        ("2.0E-3", "0.002"),
        ("1.7976931348623157E308", "1.7976931348623157E308"),
    ],
)
def test_reference_binary64(literal, expected):
    assert REFERENCE64.to_string(BINARY64.parse(literal)) == expected


def test_reference_publishes_jdk_constants():
    assert REFERENCE32.published_constants()["H"] == 9
    assert REFERENCE64.published_constants()["E_MIN"] == -323


def test_reference_passes_on_toy_format(mini8):
    converter = ReferenceConverter(mini8)
    assert converter.published_constants() is None
    assert converter.to_string(mini8.parse("1.25")) == "1.2"


@settings(max_examples=200)
@given(st.integers(min_value=0, max_value=2**32 - 1))
def test_reference_binary32_satisfies_oracle(bits):
    assert check_rendering(BINARY32, bits, REFERENCE32.to_string(bits)) is None


@settings(max_examples=50)
@given(st.integers(min_value=0, max_value=2**64 - 1))
def test_reference_binary64_satisfies_oracle(bits):
    assert check_rendering(BINARY64, bits, REFERENCE64.to_string(bits)) is None


@given(st.floats(allow_nan=False, allow_infinity=False))
def test_repr_digits_round_trip(x):
    bits = BINARY64.bits_of(x)
    rendering = ReprConverter(BINARY64).to_string(bits)
    assert BINARY64.parse(rendering) == bits


def test_numpy_converter_layout():
    converter = NumpyConverter(BINARY32)
    assert converter.to_string(0x3F800000) == "1.0"
    assert converter.to_string(0x42C80000) == "100.0"
    assert converter.to_string(0x7FC00000) == "NaN"


def test_numpy_shortest_digits_miss_the_two_digit_rule():
    rendering = NumpyConverter(BINARY32).to_string(1)
    assert rendering == "1.0E-45"
    verdict = check_rendering(BINARY32, 1, rendering)
    assert verdict is not None and verdict.prop == "closest"


def test_repr_converter_binary64_only():
    with pytest.raises(UnknownConverter):
        ReprConverter(BINARY32)
    assert ReprConverter(BINARY64).to_string(1) == "5.0E-324"


def test_callable_converter_bypasses_special_handling():
    converter = CallableConverter(BINARY32, "lower", lambda bits: REFERENCE32.to_string(bits).lower())
    assert converter.to_string(0x7FC00000) == "nan"
    assert converter.published_constants() is None


def test_build_converter():
    assert isinstance(build_converter("reference", BINARY32), ReferenceConverter)
    assert isinstance(build_converter("platform", BINARY64), NumpyConverter)
    converter = build_converter("builtins:hex", BINARY32)
    assert converter.name == "builtins:hex"
    assert converter.to_string(1) == "0x1"


@pytest.mark.parametrize("name", ["nope", "no_such_module_xyz:func", "builtins:no_such_attr", ":hex", "builtins:"])
def test_build_converter_rejects_unknown(name):
    with pytest.raises(UnknownConverter):
        build_converter(name, BINARY32)


@pytest.mark.parametrize(
    "converter",
    [NumpyConverter(BINARY32), NumpyConverter(BINARY64), ReprConverter(BINARY64)],
    ids=["platform-binary32", "platform-binary64", "repr-binary64"],
)
def test_platform_converters_publish_layout_constants(converter):
    published = converter.published_constants()
    assert set(published) == {"P", "Q_MIN", "Q_MAX", "C_MIN", "C_MAX"}
    derived = converter.fmt.constants.published()
    assert published == {name: derived[name] for name in published}


def test_layout_constants_binary32():
    assert layout_constants(24, -126, 128) == {
        "P": 24,
        "Q_MIN": -149,
        "Q_MAX": 104,
        "C_MIN": 1 << 23,
        "C_MAX": (1 << 24) - 1,
    }
