"""budget.models

Lightweight data structures used across the budget pipeline.

Why this exists
---------------
The original CLI read its flags and the working directory from process-global
state at every step. That made each stage hard to test in isolation.

These dataclasses provide a small, explicit vocabulary for:
- how the process was invoked (RunOptions)
- what should be measured (MeasurementRequest)
- what was measured (MeasurementResult)

RunOptions is built once by the CLI and threaded through every stage.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Literal, Mapping, Optional, Tuple

ResultStatus = Literal["passed", "failed", "unlimited"]


@dataclass(frozen=True)
class RunOptions:
    """Everything a run needs to know about its invocation."""

    cwd: Path
    why: bool = False
    webpack: bool = True
    gzip: bool = True
    config: Optional[str] = None

    # Positional CLI tokens. Non-empty selects the legacy direct-file mode.
    files: Tuple[str, ...] = ()

    env: Mapping[str, str] = field(default_factory=dict)

    @property
    def analyzer_mode(self) -> str:
        """Rendering mode requested from the measurer when ``--why`` is set."""
        return "static" if self.env.get("SIZE_LIMIT_ENV") == "test" else "server"


@dataclass(frozen=True)
class ResolvedConfig:
    """A configuration document and the file it was read from."""

    config: Any
    filepath: Path


@dataclass(frozen=True)
class ProjectManifest:
    """The parts of the nearest ``package.json`` that requests inherit."""

    name: Optional[str] = None
    peer_dependencies: Optional[Dict[str, str]] = None

    @staticmethod
    def from_dict(raw: Mapping[str, Any]) -> "ProjectManifest":
        name = raw.get("name")
        peers = raw.get("peerDependencies")
        return ProjectManifest(
            name=str(name) if name else None,
            peer_dependencies=dict(peers) if isinstance(peers, Mapping) else None,
        )


@dataclass(frozen=True)
class MeasurementRequest:
    """One target to measure.

    Notes
    -----
    - ``full`` is always non-empty; paths are absolute.
    - ``limit`` is a byte count; ``None`` means unlimited.
    - ``ignore`` keeps the manifest's peer dependency mapping; only its keys
      are handed to the measurer.
    """

    full: Tuple[str, ...]
    webpack: bool = True
    gzip: bool = True
    limit: Optional[int] = None
    name: Optional[str] = None
    bundle: Optional[str] = None
    ignore: Optional[Dict[str, str]] = None
    config: Optional[str] = None


@dataclass(frozen=True)
class MeasurementResult:
    """A request together with its measured size."""

    request: MeasurementRequest
    size: int

    @property
    def name(self) -> Optional[str]:
        return self.request.name

    @property
    def limit(self) -> Optional[int]:
        return self.request.limit

    @property
    def status(self) -> ResultStatus:
        if self.request.limit is None:
            return "unlimited"
        if self.size <= self.request.limit:
            return "passed"
        return "failed"

    @property
    def passed(self) -> bool:
        return self.status == "passed"

    @property
    def failed(self) -> bool:
        return self.status == "failed"

    @property
    def unlimited(self) -> bool:
        return self.status == "unlimited"
