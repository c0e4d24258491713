from __future__ import annotations

import asyncio
import logging
from typing import List

from rich.console import Console

from budget.concurrency import gather_all
from budget.config_resolver import read_manifest, resolve_config
from budget.evaluator import evaluate, explain_all
from budget.legacy_args import build_legacy_requests
from budget.models import MeasurementRequest, RunOptions
from budget.reporter import EXIT_ERROR, EXIT_OK, exit_status, render_footer, render_results
from budget.request_builder import build_requests
from cli.ui import print_error, warn
from measure import Measurer

logger = logging.getLogger(__name__)


async def collect_requests(options: RunOptions, *, err_console: Console) -> List[MeasurementRequest]:
    """Requests from positional files (legacy mode) or from configuration."""
    if options.files:
        return build_legacy_requests(options, warn=lambda messages: warn(messages, out=err_console))

    resolved, manifest = await gather_all(
        [resolve_config(options.cwd), read_manifest(options.cwd)]
    )
    return await build_requests(resolved, manifest)


async def run(
    options: RunOptions,
    measurer: Measurer,
    *,
    console: Console,
    err_console: Console,
) -> int:
    requests = await collect_requests(options, err_console=err_console)
    results = await evaluate(requests, options, measurer)

    console.print(render_results(results), end="")
    console.print(render_footer(options), end="")

    # --why is informational: it never fails the run on a budget.
    if options.why:
        if len(results) > 1:
            await explain_all(results, options, measurer)
        return EXIT_OK

    return exit_status(results)


def dispatch(
    options: RunOptions,
    measurer: Measurer,
    *,
    console: Console,
    err_console: Console,
) -> int:
    """Run the whole check and map any failure to exit status 1."""
    try:
        return asyncio.run(run(options, measurer, console=console, err_console=err_console))
    except Exception as exc:
        logger.debug("Size Limit failed", exc_info=exc)
        print_error(exc, out=err_console)
        return EXIT_ERROR
