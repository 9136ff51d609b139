"""Correctness oracle for shortest decimal renderings of binary floats.

This package keeps each concern in a separate file:
- constants: format boundaries derived from precision and exponent width
- formats: binary32/binary64 bit layouts, exact values and parsing
- layout: canonical textual layout of renderings
- oracle: per-value property checks
- failures: failure log and campaign errors
- strategies, vectors: value-selection generators and static test vectors
- converters: converters that can be put under test
- campaign: strategy orchestration
- cli: argument parsing + result files
"""

from .campaign import STANDARD_ORDER, Campaign
from .constants import FormatConstants, derive_constants
from .converters import build_converter
from .failures import CampaignFailed, ConstantsMismatch, Failure, FailureLog
from .formats import BINARY32, BINARY64, BinaryFormat, format_by_name
from .oracle import PropertyVerdict, check_rendering, check_value

__all__ = [
    "BINARY32",
    "BINARY64",
    "STANDARD_ORDER",
    "BinaryFormat",
    "Campaign",
    "CampaignFailed",
    "ConstantsMismatch",
    "Failure",
    "FailureLog",
    "FormatConstants",
    "PropertyVerdict",
    "build_converter",
    "check_rendering",
    "check_value",
    "derive_constants",
    "format_by_name",
]
