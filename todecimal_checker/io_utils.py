"""Result I/O helpers for rendering campaigns."""

from __future__ import annotations

import csv
import json
import pathlib
from typing import Dict, Iterable, List

# relative to the working directory, not the install location
RESULT_DIR = pathlib.Path("results") / "todecimal"


def parse_filter(raw: str, allowed: Iterable[str]) -> List[str]:
    allowed = list(allowed)
    if not raw:
        return allowed
    selected = [part.strip() for part in raw.split(",") if part.strip()]
    unknown = [part for part in selected if part not in allowed]
    if unknown:
        raise SystemExit(f"unknown filter values: {','.join(unknown)}")
    return selected


def parse_bits_range(raw: str) -> tuple[int, int]:
    start, sep, stop = raw.partition(":")
    if not sep:
        raise SystemExit(f"bits range must be START:STOP, got {raw!r}")
    try:
        return int(start, 0), int(stop, 0)
    except ValueError:
        raise SystemExit(f"bits range bounds must be integers, got {raw!r}") from None


def write_csv(path: pathlib.Path, rows: List[Dict[str, object]]) -> None:
    if not rows:
        path.write_text("", encoding="utf-8")
        return
    fieldnames = list(rows[0].keys())
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=fieldnames)
        writer.writeheader()
        writer.writerows(rows)


def write_result_files(
    out_dir: pathlib.Path,
    prefix: str,
    payload: Dict[str, object],
    rows: List[Dict[str, object]],
) -> tuple[pathlib.Path, pathlib.Path]:
    out_dir.mkdir(parents=True, exist_ok=True)
    json_path = out_dir / f"{prefix}.json"
    csv_path = out_dir / f"{prefix}.csv"
    json_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    write_csv(csv_path, rows)
    return json_path, csv_path
