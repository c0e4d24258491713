from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, Sequence, Tuple


@dataclass(frozen=True)
class MeasureOptions:
    """How one file set should be measured."""

    webpack: bool = True
    gzip: bool = True

    # Package name of the project itself; never counted in its own bundle.
    bundle: Optional[str] = None

    # Custom bundler configuration file.
    config: Optional[str] = None

    # Package names treated as provided by the host (peer dependencies).
    ignore: Tuple[str, ...] = ()

    # "server" (interactive report) or "static" (report written to disk).
    analyzer: Optional[str] = None


@dataclass(frozen=True)
class SizeReport:
    parsed: int
    gzip: Optional[int] = None


class MeasureError(RuntimeError):
    """The bundler failed; ``str(err)`` carries its diagnostic output."""


class Measurer(Protocol):
    async def measure(self, files: Sequence[str], options: MeasureOptions) -> SizeReport:
        ...
