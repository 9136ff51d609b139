"""Failure accumulation for rendering campaigns."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Dict, List


class ConstantsMismatch(RuntimeError):
    """Derived format constants disagree with the converter or the platform."""

    def __init__(self, campaign: str, fields: List[str]) -> None:
        self.campaign = campaign
        self.fields = list(fields)
        super().__init__(f"{campaign}: constants mismatch: {', '.join(self.fields)}")


@dataclass(frozen=True)
class Failure:
    bits: str
    hex_string: str
    rendering: str
    prop: str
    detail: str

    def label(self) -> str:
        return f"{self.prop}: value={self.hex_string} bits={self.bits} string={self.rendering!r} ({self.detail})"

    def as_dict(self) -> Dict[str, str]:
        return asdict(self)


class CampaignFailed(RuntimeError):
    """Raised once at campaign end when any value failed a property."""

    def __init__(self, campaign: str, failures: List[Failure]) -> None:
        self.campaign = campaign
        self.failures = list(failures)
        lines = [f"{campaign}: {len(self.failures)} failure(s)"]
        lines.extend(f"  {failure.label()}" for failure in self.failures)
        super().__init__("\n".join(lines))


@dataclass
class FailureLog:
    failures: List[Failure] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.failures)

    def __bool__(self) -> bool:
        return bool(self.failures)

    def add(self, failure: Failure) -> None:
        self.failures.append(failure)

    def count_by_property(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for failure in self.failures:
            counts[failure.prop] = counts.get(failure.prop, 0) + 1
        return counts

    def preview(self, limit: int) -> List[Dict[str, str]]:
        return [failure.as_dict() for failure in self.failures[:limit]]

    def raise_on_errors(self, campaign: str) -> None:
        if self.failures:
            raise CampaignFailed(campaign, self.failures)
