"""measure/bundler.py

Default measurer backed by JavaScript bundlers.

Modes
-----
* ``webpack=False``: the files are measured as-is (their bytes concatenated).
* ``webpack=True`` without ``config``: ``esbuild --bundle --minify`` over the
  files. Peer dependencies and the project's own package are marked external.
* ``config`` set: ``webpack --config <config>``; the user's config owns
  entries and externals, every emitted asset is counted.

With ``gzip=True`` the resulting bytes are also gzip-compressed at level 9 and
that count is reported alongside the raw one.

Analyzer
--------
``analyzer="server"`` asks esbuild for its ``--analyze`` breakdown and
forwards it to the terminal. ``analyzer="static"`` writes esbuild's metafile
to ``size-limit-meta.json`` in the project directory instead.
"""

from __future__ import annotations

import asyncio
import gzip
import logging
import tempfile
from pathlib import Path
from typing import List, Optional, Sequence

from rich.console import Console

from measure.core_cmd import run_cmd, which_or_raise
from measure.types import MeasureError, MeasureOptions, SizeReport

logger = logging.getLogger(__name__)

META_FILE_NAME = "size-limit-meta.json"


def gzip_size(data: bytes) -> int:
    return len(gzip.compress(data, compresslevel=9))


def _read_files(files: Sequence[str]) -> bytes:
    chunks: List[bytes] = []
    for f in files:
        p = Path(f)
        if not p.is_file():
            raise MeasureError(f"Can not read {f}: file does not exist")
        chunks.append(p.read_bytes())
    return b"".join(chunks)


def _read_outputs(out_dir: Path) -> bytes:
    assets = sorted(
        p for p in out_dir.rglob("*") if p.is_file() and p.suffix != ".map"
    )
    return b"".join(p.read_bytes() for p in assets)


class BundlerMeasurer:
    """:class:`measure.Measurer` implementation using esbuild / webpack."""

    def __init__(self, project_dir: Path, *, err_console: Optional[Console] = None) -> None:
        self.project_dir = Path(project_dir)
        self.err_console = err_console or Console(stderr=True, highlight=False, soft_wrap=True)

    def _bin(self, name: str) -> str:
        local = self.project_dir / "node_modules" / ".bin" / name
        return which_or_raise(name, fallbacks=[local])

    async def measure(self, files: Sequence[str], options: MeasureOptions) -> SizeReport:
        if not options.webpack:
            data = await asyncio.to_thread(_read_files, files)
        elif options.config:
            data = await self._run_webpack(options.config)
        else:
            data = await self._run_esbuild(files, options)

        parsed = len(data)
        gz: Optional[int] = gzip_size(data) if options.gzip else None
        logger.debug("Measured %d file(s): parsed=%d gzip=%s", len(files), parsed, gz)
        return SizeReport(parsed=parsed, gzip=gz)

    async def _run_esbuild(self, files: Sequence[str], options: MeasureOptions) -> bytes:
        exe = self._bin("esbuild")
        externals = list(options.ignore)
        if options.bundle:
            externals.append(options.bundle)

        with tempfile.TemporaryDirectory(prefix="size-limit-") as tmp:
            out_dir = Path(tmp) / "out"
            cmd = [exe, *files, "--bundle", "--minify", f"--outdir={out_dir}"]
            cmd += [f"--external:{name}" for name in externals]

            forward = False
            if options.analyzer == "server":
                cmd += ["--analyze", "--log-level=info"]
                forward = True
            else:
                cmd.append("--log-level=error")
                if options.analyzer == "static":
                    meta = self.project_dir / META_FILE_NAME
                    cmd.append(f"--metafile={meta}")
                    logger.info("Writing bundle analysis to %s", meta)

            result = await run_cmd(cmd, cwd=self.project_dir)
            if result.exit_code != 0:
                raise MeasureError(
                    result.stderr.strip() or f"{result.command_str} exited with {result.exit_code}"
                )
            if forward and result.stderr:
                # Raw tool output: no markup parsing.
                self.err_console.out(result.stderr, end="", highlight=False)
            return await asyncio.to_thread(_read_outputs, out_dir)

    async def _run_webpack(self, config: str) -> bytes:
        exe = self._bin("webpack")
        with tempfile.TemporaryDirectory(prefix="size-limit-") as tmp:
            out_dir = Path(tmp) / "out"
            cmd = [exe, "--config", config, "--mode", "production", "--output-path", str(out_dir)]
            result = await run_cmd(cmd, cwd=self.project_dir)
            if result.exit_code != 0:
                # webpack reports compilation errors on stdout.
                detail = (result.stdout + "\n" + result.stderr).strip()
                raise MeasureError(detail or f"{result.command_str} exited with {result.exit_code}")
            return await asyncio.to_thread(_read_outputs, out_dir)
