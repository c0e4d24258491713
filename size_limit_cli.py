#!/usr/bin/env python3
"""
Size Limit: fail the build when a JavaScript bundle outgrows its budget.

Modes:
  1) config - read "size-limit" from package.json (or .size-limit) and check
              every entry against its limit
  2) files  - measure the given files directly (legacy)

Usage:
  size-limit
  size-limit --why
  size-limit index.js
  size-limit --no-webpack --no-gzip dist/app.js

Exit status: 0 ok, 3 a size limit was exceeded, 1 any other error.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping, Optional, Sequence

from dotenv import load_dotenv

from budget.ci import ci_job_number
from cli.args.base import options_from_args, parse_args
from cli.dispatch import dispatch
from cli.ui import console, err_console
from measure import BundlerMeasurer

ENV_FILE = ".env"


def configure_logging(env: Mapping[str, str]) -> None:
    name = str(env.get("SIZE_LIMIT_LOG_LEVEL") or "WARNING").upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main(argv: Optional[Sequence[str]] = None) -> int:
    cwd = Path.cwd()

    # Load .env from the project so terminal and CI runs behave the same.
    load_dotenv(cwd / ENV_FILE)
    env = dict(os.environ)
    configure_logging(env)

    if ci_job_number(env) != 1:
        console.print("[yellow]Size Limits run only on first CI job, to save CI resources[/yellow]")
        return 0

    args = parse_args(argv)
    options = options_from_args(args, cwd=cwd, env=env)
    return dispatch(
        options,
        BundlerMeasurer(cwd, err_console=err_console),
        console=console,
        err_console=err_console,
    )


if __name__ == "__main__":
    raise SystemExit(main())
