"""budget.errors

Error kinds surfaced to the user.

A run can fail in two ways:

* a **recognized** configuration problem (missing config, bad syntax, wrong
  shape, bad CLI arguments). These render as short, example-annotated
  messages without a traceback.
* anything else, which is **unexpected** and renders with full detail.

Only :class:`SizeLimitConfigError` is recognized. Every other exception keeps
its own type as it propagates, so the distinction survives ``asyncio`` joins
and re-raises unchanged.
"""

from __future__ import annotations


class SizeLimitConfigError(Exception):
    """A user-actionable configuration or argument error."""

    recognized = True

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def is_recognized(exc: BaseException) -> bool:
    return bool(getattr(exc, "recognized", False))
