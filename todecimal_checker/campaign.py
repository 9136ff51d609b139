"""Campaign driver: strategies -> converter -> oracle -> failure log."""

from __future__ import annotations

import random
import time
from typing import Callable, Iterable, Iterator, List, Optional

from . import strategies
from .converters import Converter
from .failures import ConstantsMismatch, FailureLog
from .formats import BinaryFormat, precision_from_layout
from .models import CampaignConfig, StrategyRow
from .oracle import check_value

STANDARD_ORDER = [
    "extreme_values",
    "anomalies",
    "powers_of_2",
    "powers_of_10",
    "paxson",
    "ints",
    "deci",
    "centi",
    "milli",
    "random_short_decimals",
    "random",
]

Report = Callable[[StrategyRow], None]


class Campaign:
    def __init__(self, fmt: BinaryFormat, converter: Converter, config: Optional[CampaignConfig] = None) -> None:
        self.fmt = fmt
        self.converter = converter
        self.config = config or CampaignConfig(format_name=fmt.name, converter=converter.name)
        self.name = f"{fmt.name}/{converter.name}"
        self.log = FailureLog()
        self.rows: List[StrategyRow] = []

    def _reset(self) -> None:
        self.log = FailureLog()
        self.rows = []

    def test_dec(self, bits: int) -> bool:
        return check_value(self.fmt, bits, self.converter.to_string(bits), self.log)

    def test_values(self, strategy: str, values: Iterable[int], report: Optional[Report] = None) -> StrategyRow:
        before = len(self.log)
        count = 0
        t0 = time.perf_counter()
        for bits in values:
            self.test_dec(bits)
            count += 1
        row = StrategyRow(
            strategy=strategy,
            values=count,
            failures=len(self.log) - before,
            elapsed_sec=time.perf_counter() - t0,
        )
        self.rows.append(row)
        if report is not None:
            report(row)
        return row

    def check_constants(self) -> None:
        """Cross-check derived constants against the platform and the converter."""
        fmt = self.fmt
        k = fmt.constants
        mismatched: List[str] = []

        def expect(ok: bool, name: str) -> None:
            if not ok and name not in mismatched:
                mismatched.append(name)

        expect(precision_from_layout(fmt) == k.p, "P")
        expect(fmt.float_of(fmt.bits_of(float(k.c_min))) == k.c_min, "C_MIN")
        expect(fmt.float_of(fmt.bits_of(float(k.c_max))) == k.c_max, "C_MAX")
        expect(fmt.float_of(1) == float(k.min_value), "MIN_VALUE")
        expect(fmt.float_of(1 << fmt.mantissa_bits) == float(k.min_normal), "MIN_NORMAL")
        expect(fmt.float_of(fmt.infinity_bits - 1) == float(k.max_value), "MAX_VALUE")

        published = self.converter.published_constants()
        if published:
            for name, value in k.published().items():
                if name in published:
                    expect(published[name] == value, name)

        if mismatched:
            raise ConstantsMismatch(self.name, mismatched)

    def strategy_values(self, name: str, random_count: int, rng: random.Random) -> Iterator[int]:
        fmt = self.fmt
        cfg = self.config
        if name == "extreme_values":
            return strategies.extreme_values(fmt, cfg.z)
        if name == "anomalies":
            return strategies.anomalies(fmt)
        if name == "powers_of_2":
            return strategies.powers_of_2(fmt, cfg.z)
        if name == "powers_of_10":
            return strategies.powers_of_10(fmt, cfg.z)
        if name == "paxson":
            return strategies.paxson(fmt)
        if name == "ints":
            return strategies.ints(fmt, cfg.ints_limit)
        if name == "deci":
            return strategies.deci(fmt, cfg.fraction_z, cfg.fraction_limit)
        if name == "centi":
            return strategies.centi(fmt, cfg.fraction_z, cfg.fraction_limit)
        if name == "milli":
            return strategies.milli(fmt, cfg.fraction_z, cfg.fraction_limit)
        if name == "random_short_decimals":
            return strategies.random_short_decimals(fmt, rng, cfg.z)
        if name == "random":
            return strategies.random_bits(fmt, random_count, rng)
        raise ValueError(f"unknown strategy: {name}")

    def run(
        self,
        names: Iterable[str],
        random_count: int = 0,
        rng: Optional[random.Random] = None,
        report: Optional[Report] = None,
    ) -> FailureLog:
        """Constants check, then the selected strategies in standard order."""
        selected = set(names)
        unknown = sorted(selected - set(STANDARD_ORDER))
        if unknown:
            raise ValueError(f"unknown strategies: {','.join(unknown)}")
        if rng is None:
            rng = random.Random(self.config.random_seed)

        self._reset()
        self.check_constants()
        for name in STANDARD_ORDER:
            if name in selected:
                self.test_values(name, self.strategy_values(name, random_count, rng), report)
        self.log.raise_on_errors(self.name)
        return self.log

    def test(self, random_count: int, rng: random.Random, report: Optional[Report] = None) -> FailureLog:
        return self.run(STANDARD_ORDER, random_count, rng, report)

    def _scan(self, strategy: str, values: Iterable[int], report: Optional[Report]) -> FailureLog:
        self._reset()
        self.test_values(strategy, values, report)
        self.log.raise_on_errors(self.name)
        return self.log

    def test_all(self, report: Optional[Report] = None) -> FailureLog:
        """Every bit pattern of the format. Hours for binary32, not feasible beyond."""
        return self._scan("all", strategies.all_bits(self.fmt), report)

    def test_positive(self, report: Optional[Report] = None) -> FailureLog:
        return self._scan("positive", strategies.positive_bits(self.fmt), report)

    def test_range(self, start: int, stop: int, report: Optional[Report] = None) -> FailureLog:
        return self._scan(f"range[{start:#x},{stop:#x})", strategies.bit_range(self.fmt, start, stop), report)
