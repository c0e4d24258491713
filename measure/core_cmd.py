"""measure/core_cmd.py

Command-execution helpers for bundler adapters.

This module deliberately avoids bundler-specific knowledge. It provides:

* :func:`which_or_raise` - resolve executables (PATH, then local node_modules).
* :func:`run_cmd` - run a subprocess asynchronously (no shell) and capture output.
"""

from __future__ import annotations

import asyncio
import logging
import os
import shutil
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class CmdResult:
    exit_code: int
    elapsed_seconds: float
    command_str: str
    stdout: str
    stderr: str

def which_or_raise(bin_name: str, fallbacks: Optional[Sequence[Path]] = None) -> str:
    """Locate an executable and return its absolute path.

    Bundlers are usually installed per project, so callers pass
    ``node_modules/.bin`` candidates as fallbacks.
    """
    found = shutil.which(bin_name)
    if found:
        return found

    for candidate in fallbacks or []:
        p = Path(candidate)
        if p.exists() and os.access(str(p), os.X_OK):
            return str(p)

    raise FileNotFoundError(
        f"Executable '{bin_name}' not found on PATH.\n"
        f"Install it in your project (npm install --save-dev {bin_name}) "
        f"or make it available to this process.\n"
        f"Tried fallbacks: {[str(f) for f in fallbacks or []]}"
    )

async def run_cmd(
    cmd: List[str],
    *,
    cwd: Optional[Path] = None,
    env: Optional[Dict[str, str]] = None,
) -> CmdResult:
    """Run a subprocess and capture stdout/stderr.

    Never raises on non-zero exit codes; only raises on execution errors
    (e.g. binary not found).
    """
    t0 = time.time()

    env2 = None
    if env is not None:
        env2 = os.environ.copy()
        env2.update(env)

    logger.debug("Running %s", " ".join(cmd))
    proc = await asyncio.create_subprocess_exec(
        *cmd,
        cwd=str(cwd) if cwd else None,
        env=env2,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    out, err = await proc.communicate()
    elapsed = time.time() - t0

    stdout = out.decode("utf-8", errors="replace") if out else ""
    stderr = err.decode("utf-8", errors="replace") if err else ""

    return CmdResult(
        exit_code=proc.returncode if proc.returncode is not None else -1,
        elapsed_seconds=elapsed,
        command_str=" ".join(cmd),
        stdout=stdout,
        stderr=stderr,
    )
