"""budget

Core package for Size Limit: configuration resolution, request building,
evaluation and reporting.

Why this exists
---------------
The CLI (``size_limit_cli`` + ``cli/``) is a thin composition root. Everything
that has real invariants (which config wins, how a limit is parsed, when a
result counts as failed) lives here so it can be tested without a terminal,
without ``sys.argv`` and without a real bundler.

The measurement collaborator lives in the separate ``measure`` package and is
consumed through :class:`measure.Measurer`.
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
