"""Data models for rendering campaigns."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .strategies import FRACTION_LIMIT, FRACTION_Z, Z


@dataclass
class CampaignConfig:
    format_name: str = "binary32"
    converter: str = "reference"
    z: int = Z
    fraction_z: int = FRACTION_Z
    fraction_limit: int = FRACTION_LIMIT
    # None keeps the full [1, 2^(P-1)) integer range
    ints_limit: Optional[int] = None
    random_count: int = 10_000
    random_seed: int = 0
    failure_preview: int = 96


@dataclass
class StrategyRow:
    strategy: str
    values: int
    failures: int
    elapsed_sec: float

    @property
    def pass_check(self) -> bool:
        return self.failures == 0
