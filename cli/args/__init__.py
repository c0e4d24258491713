"""CLI argument builder modules.

The top-level :mod:`size_limit_cli` is intentionally kept thin. Flags are
registered by small "arg builder" functions housed here:

- :func:`cli.args.base.add_base_args`

:func:`cli.args.base.options_from_args` turns the parsed namespace into the
:class:`budget.models.RunOptions` value threaded through the pipeline.
"""

from __future__ import annotations

__all__ = [
    "base",
]
