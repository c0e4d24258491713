from __future__ import annotations

import re
import traceback
from typing import List, Optional

from rich.console import Console
from rich.markup import escape

from budget.errors import SizeLimitConfigError, is_recognized

_TICKS_RE = re.compile(r"`([^`]*)`")
_MODULE_NOT_FOUND_RE = re.compile(r"Module not found:[^\n]*")
_RESOLVE_IN_RE = re.compile(r"resolve '(.*)' in '(.*)'")
_ESBUILD_RESOLVE_RE = re.compile(r'Could not resolve "([^"]*)"')

ERROR_INDENT = "\n        "
WARN_INDENT = "       "


def make_console(*, stderr: bool = False) -> Console:
    # soft_wrap keeps long paths on one line; highlight=False keeps numbers plain.
    return Console(stderr=stderr, highlight=False, soft_wrap=True)


console = make_console()
err_console = make_console(stderr=True)


def highlight_ticks(text: str) -> str:
    """Escape ``text`` for rich and render `backtick` spans in bold."""
    return _TICKS_RE.sub(r"[bold]\1[/bold]", escape(text))


def warn(messages: List[str], *, out: Optional[Console] = None) -> None:
    """Print a WARN badge with one message per line."""
    out = out or err_console
    lines = []
    for index, message in enumerate(messages):
        line = f"[yellow]{highlight_ticks(message)}[/yellow]\n"
        lines.append(line if index == 0 else WARN_INDENT + line)
    out.print("[black on yellow] WARN [/black on yellow] " + "".join(lines), end="")


def format_error(exc: BaseException) -> str:
    """Rich markup for an error, by kind.

    Recognized errors are split into one sentence per line. Bundler resolution
    failures are reduced to the module and the directory it was resolved from.
    Everything else shows its traceback.
    """
    if is_recognized(exc):
        message = exc.message if isinstance(exc, SizeLimitConfigError) else str(exc)
        return ("." + ERROR_INDENT).join(highlight_ticks(part) for part in message.split(". "))

    text = str(exc)
    m = _MODULE_NOT_FOUND_RE.search(text)
    if m:
        first = m.group(0).replace("Module not found: Error: C", "")
        msg = escape(f"Size Limit c{first}")
        return _RESOLVE_IN_RE.sub(
            rf"resolve{ERROR_INDENT}[bold]\1[/bold]{ERROR_INDENT}in [bold]\2[/bold]", msg
        )

    m = _ESBUILD_RESOLVE_RE.search(text)
    if m:
        return f"Size Limit can not resolve{ERROR_INDENT}[bold]{escape(m.group(1))}[/bold]"

    return escape("".join(traceback.format_exception(exc)).rstrip())


def print_error(exc: BaseException, *, out: Optional[Console] = None) -> None:
    out = out or err_console
    out.print(f"[on red] ERROR [/on red] [red]{format_error(exc)}[/red]")
