"""CLI controller for shortest decimal rendering campaigns."""

from __future__ import annotations

import argparse
import pathlib
import random
from dataclasses import asdict
from typing import List, Optional

from .campaign import STANDARD_ORDER, Campaign
from .converters import CONVERTERS, UnknownConverter, build_converter
from .failures import CampaignFailed, ConstantsMismatch
from .formats import FORMATS, format_by_name
from .io_utils import RESULT_DIR, parse_bits_range, parse_filter, write_result_files
from .models import CampaignConfig, StrategyRow
from .strategies import FRACTION_LIMIT, FRACTION_Z, Z


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Check shortest decimal renderings of binary floating-point values")
    parser.add_argument("--format", choices=sorted(FORMATS), default="binary32")
    parser.add_argument(
        "--converter",
        default="reference",
        help=f"converter under test: {','.join(CONVERTERS)} or package.module:callable",
    )
    parser.add_argument("--random-count", type=int, default=10_000)
    parser.add_argument("--random-seed", type=int, default=None)
    parser.add_argument("--randomize-seed", action="store_true")
    parser.add_argument("--only", type=str, default="", help="comma-separated strategies to run")
    parser.add_argument("--skip", type=str, default="", help="comma-separated strategies to leave out")
    parser.add_argument("--z", type=int, default=Z, help="neighbourhood half-width around boundary values")
    parser.add_argument("--fraction-z", type=int, default=FRACTION_Z)
    parser.add_argument("--fraction-limit", type=int, default=FRACTION_LIMIT)
    parser.add_argument("--ints-limit", type=int, default=None)
    parser.add_argument(
        "--exhaustive",
        choices=["all", "positive"],
        default=None,
        help="scan every bit pattern (or every pattern with the sign bit clear) instead of the standard campaign",
    )
    parser.add_argument(
        "--bits-range",
        type=str,
        default="",
        help="scan the bit patterns START:STOP (ints or 0x-prefixed) instead of the standard campaign",
    )
    parser.add_argument("--failure-preview", type=int, default=96)
    parser.add_argument("--out-dir", type=pathlib.Path, default=RESULT_DIR)
    parser.add_argument("--out-prefix", type=str, default="todecimal_campaign")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    seed = args.random_seed
    if seed is None:
        seed = random.SystemRandom().randrange(1, 2**31) if args.randomize_seed else 0
    print(f"random_seed={seed}")

    config = CampaignConfig(
        format_name=args.format,
        converter=args.converter,
        z=args.z,
        fraction_z=args.fraction_z,
        fraction_limit=args.fraction_limit,
        ints_limit=args.ints_limit,
        random_count=args.random_count,
        random_seed=seed,
        failure_preview=args.failure_preview,
    )
    fmt = format_by_name(config.format_name)
    try:
        converter = build_converter(config.converter, fmt)
    except UnknownConverter as exc:
        raise SystemExit(str(exc)) from exc
    campaign = Campaign(fmt, converter, config)

    def report(row: StrategyRow) -> None:
        print(
            f"{campaign.name} strategy={row.strategy:<22} values={row.values} "
            f"failures={row.failures} elapsed_sec={row.elapsed_sec:.3f}",
            flush=True,
        )

    status = "passed"
    exit_code = 0
    mismatched: List[str] = []
    try:
        if args.exhaustive == "all":
            campaign.test_all(report)
        elif args.exhaustive == "positive":
            campaign.test_positive(report)
        elif args.bits_range:
            start, stop = parse_bits_range(args.bits_range)
            campaign.test_range(start, stop, report)
        else:
            skipped = set(parse_filter(args.skip, STANDARD_ORDER)) if args.skip else set()
            names = [name for name in parse_filter(args.only, STANDARD_ORDER) if name not in skipped]
            campaign.run(names, config.random_count, random.Random(seed), report)
    except ConstantsMismatch as exc:
        mismatched = exc.fields
        status = "constants_mismatch"
        exit_code = 2
        print(f"constants_mismatch: {','.join(mismatched)}")
    except CampaignFailed as exc:
        status = "failed"
        exit_code = 1
        print(f"campaign_failed: {exc.campaign} failures={len(exc.failures)}")

    rows = [{**asdict(row), "pass_check": row.pass_check} for row in campaign.rows]
    payload = {
        "campaign": campaign.name,
        "status": status,
        "config": asdict(config),
        "constants": fmt.constants.published(),
        "constants_mismatch": mismatched,
        "failures": len(campaign.log),
        "failures_by_property": campaign.log.count_by_property(),
        "rows": rows,
        "failure_preview": campaign.log.preview(config.failure_preview),
    }
    json_path, csv_path = write_result_files(args.out_dir, args.out_prefix, payload, rows)
    print(f"result_json: {json_path}")
    print(f"result_csv: {csv_path}")
    return exit_code


if __name__ == "__main__":
    raise SystemExit(main())
