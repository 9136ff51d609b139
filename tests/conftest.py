"""Shared fixtures and hypothesis profiles for the checker test suite."""

from __future__ import annotations

import os

import pytest
from hypothesis import HealthCheck, settings

from todecimal_checker.formats import BinaryFormat

settings.register_profile(
    "default",
    max_examples=100,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.register_profile(
    "ci",
    max_examples=500,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.register_profile("dev", max_examples=25, deadline=None)
settings.load_profile(os.environ.get("HYPOTHESIS_PROFILE", "default"))

# 8-bit toy format: 3 significand bits, 5 exponent bits. Small enough to scan
# every pattern and coarse enough to produce exact decimal ties.
MINI8 = BinaryFormat("mini8", 3, 5, "e", "H", 6, "M")


@pytest.fixture
def mini8() -> BinaryFormat:
    return MINI8
