#!/usr/bin/env python3
"""Thin CLI entrypoint for shortest decimal rendering campaigns."""

from __future__ import annotations

from todecimal_checker.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
