"""budget.reporter

Render measurement results and decide the exit status.

Rendering is pure: it returns rich console markup and never writes anything
itself. Each result becomes a block of rows indented by two spaces:

* unlimited: ``Package size``
* passed:    ``Package size`` + ``Size limit``
* failed:    an overflow line + ``Package size`` + ``Size limit``

When several results are shown, each block starts with the result's name.
When rounding makes a failed size and its limit look identical (``"1 KB"``
vs ``"1 KB"``), both are shown as exact byte counts instead.
"""

from __future__ import annotations

from typing import List, Sequence

from rich.markup import escape

from budget.models import MeasurementResult, RunOptions
from budget.units import format_bytes

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_LIMIT_EXCEEDED = 3


def render_rows(result: MeasurementResult, *, total: int) -> List[str]:
    rows: List[str] = []

    if total > 1 and result.name:
        rows.append(escape(result.name))

    size_text = format_bytes(result.size)

    if result.unlimited:
        rows.append(f"Package size: [bold]{size_text}[/bold]")
        return rows

    limit = result.limit if result.limit is not None else 0
    limit_text = format_bytes(limit)

    if result.passed:
        rows.append(f"Package size: [bold green]{size_text}[/bold green]")
        rows.append(f"Size limit:   [bold]{limit_text}[/bold]")
        return rows

    if limit_text == size_text:
        limit_text = f"{limit} B"
        size_text = f"{result.size} B"
    diff = format_bytes(result.size - limit)
    rows.append(f"[red]Package size limit has exceeded by {diff}[/red]")
    rows.append(f"Package size: [bold red]{size_text}[/bold red]")
    rows.append(f"Size limit:   [bold]{limit_text}[/bold]")
    return rows


def render_result(result: MeasurementResult, *, total: int) -> str:
    return "".join(f"  {row}\n" for row in render_rows(result, total=total))


def render_results(results: Sequence[MeasurementResult]) -> str:
    """The full results section, including its leading blank line."""
    total = len(results)
    body = "\n".join(render_result(r, total=total) for r in results)
    return "\n" + body + ("\n" if total > 1 else "")


def render_footer(options: RunOptions) -> str:
    if options.config:
        message = "  With given webpack configuration\n\n"
    else:
        message = "  With all dependencies, minified and gzipped\n\n"
    return f"[bright_black]{message}[/bright_black]"


def exit_status(results: Sequence[MeasurementResult]) -> int:
    """``3`` when any budget is exceeded, else ``0``."""
    if any(r.failed for r in results):
        return EXIT_LIMIT_EXCEEDED
    return EXIT_OK
