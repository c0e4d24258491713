"""budget.evaluator

Run the measurer once per request and attach the measured size.

The size is the gzip count when the measurer reports one, otherwise the raw
(parsed) count. Requests are measured concurrently; the first failure cancels
the rest and propagates, so either every request gets a result or none does.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from budget.concurrency import gather_all
from budget.errors import SizeLimitConfigError
from budget.models import MeasurementRequest, MeasurementResult, RunOptions
from measure import MeasureOptions, Measurer

logger = logging.getLogger(__name__)

WHY_WITHOUT_WEBPACK = (
    '`--why` does not work with `"webpack": false`. '
    "Add Webpack Bundle Analyzer to your Webpack config."
)


def measure_options(
    request: MeasurementRequest,
    options: RunOptions,
    *,
    total: int,
) -> MeasureOptions:
    """Measurer options for one request out of ``total``."""
    return MeasureOptions(
        webpack=request.webpack,
        gzip=request.gzip,
        bundle=request.bundle,
        config=request.config or options.config,
        ignore=tuple(sorted(request.ignore)) if request.ignore is not None else (),
        analyzer=options.analyzer_mode if options.why and total == 1 else None,
    )


async def measure_one(
    request: MeasurementRequest,
    opts: MeasureOptions,
    measurer: Measurer,
) -> MeasurementResult:
    report = await measurer.measure(list(request.full), opts)
    size = report.gzip if isinstance(report.gzip, int) else report.parsed
    return MeasurementResult(request=request, size=size)


async def evaluate(
    requests: Sequence[MeasurementRequest],
    options: RunOptions,
    measurer: Measurer,
) -> List[MeasurementResult]:
    """Measure every request; results keep the order of ``requests``."""
    if options.why and any(not r.webpack for r in requests):
        raise SizeLimitConfigError(WHY_WITHOUT_WEBPACK)

    total = len(requests)
    planned = [(r, measure_options(r, options, total=total)) for r in requests]
    for r, opts in planned:
        logger.debug("Measuring %s with %s", r.name or ", ".join(r.full), opts)

    return await gather_all(measure_one(r, opts, measurer) for r, opts in planned)


async def explain_all(
    results: Sequence[MeasurementResult],
    options: RunOptions,
    measurer: Measurer,
) -> None:
    """One combined analyzer run over every result's files (``--why`` only)."""
    full: List[str] = []
    for result in results:
        full.extend(result.request.full)
    opts = MeasureOptions(
        analyzer=options.analyzer_mode,
        bundle=results[0].request.bundle if results else None,
    )
    await measurer.measure(full, opts)
