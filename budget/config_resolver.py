"""budget.config_resolver

Locate and parse the user's Size Limit configuration.

Search order
------------
Starting at the working directory and walking up to the filesystem root, the
first directory that yields a config wins. Inside one directory:

1. ``package.json`` with a ``"size-limit"`` key
2. ``.size-limit``, ``.size-limit.json``, ``.size-limit.yaml``, ``.size-limit.yml``

Dotfiles are read with ``yaml.safe_load`` (JSON is valid YAML flow syntax, so
both styles work). Executable configs such as ``.size-limit.js`` are never
loaded.

Error translation
-----------------
Parse failures and a missing config become :class:`SizeLimitConfigError`
with an inline example. Anything else propagates untouched so it is reported
as an unexpected error.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Iterator, Optional

import yaml

from budget.config_errors import FILE_EXAMPLE, PACKAGE_EXAMPLE
from budget.errors import SizeLimitConfigError
from budget.models import ProjectManifest, ResolvedConfig

logger = logging.getLogger(__name__)

CONFIG_KEY = "size-limit"
MANIFEST_NAME = "package.json"
RC_NAMES = (".size-limit", ".size-limit.json", ".size-limit.yaml", ".size-limit.yml")

NOT_FOUND_MESSAGE = (
    "Can not find settings for Size Limit. "
    'Add it to section `"size-limit"` in package.json '
    "according to Size Limit docs."
    f"\n{PACKAGE_EXAMPLE}\n"
)

# json.JSONDecodeError renders as "<reason>: line 3 column 5 (char 20)".
_JSON_REASON_RE = re.compile(r"^(?P<reason>[^\n]+?): line \d+ column \d+")


def _capitalize(text: str) -> str:
    return text[:1].upper() + text[1:]


def _walk_up(start: Path, stop_dir: Optional[Path] = None) -> Iterator[Path]:
    current = start.resolve()
    stop = stop_dir.resolve() if stop_dir is not None else None
    while True:
        yield current
        if current == stop or current.parent == current:
            return
        current = current.parent


def _read_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def _read_rc(path: Path) -> Any:
    # Loading from the open file keeps the path in YAML error marks.
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def find_config(cwd: Path, stop_dir: Optional[Path] = None) -> Optional[ResolvedConfig]:
    """Synchronous search; ``None`` when no directory holds a config."""
    for directory in _walk_up(cwd, stop_dir):
        manifest = directory / MANIFEST_NAME
        if manifest.is_file():
            data = _read_json(manifest)
            if isinstance(data, dict) and CONFIG_KEY in data:
                return ResolvedConfig(config=data[CONFIG_KEY], filepath=manifest)

        for name in RC_NAMES:
            rc = directory / name
            if rc.is_file():
                return ResolvedConfig(config=_read_rc(rc), filepath=rc)
    return None


def find_manifest(cwd: Path, stop_dir: Optional[Path] = None) -> ProjectManifest:
    """Metadata of the nearest ``package.json``; empty when there is none."""
    for directory in _walk_up(cwd, stop_dir):
        manifest = directory / MANIFEST_NAME
        if manifest.is_file():
            data = _read_json(manifest)
            return ProjectManifest.from_dict(data if isinstance(data, dict) else {})
    return ProjectManifest()


def translate_parse_error(err: BaseException, cwd: Path) -> Optional[SizeLimitConfigError]:
    """Map a parser failure to a recognized error, or ``None`` to re-raise."""
    if isinstance(err, json.JSONDecodeError):
        message = str(err)
        m = _JSON_REASON_RE.match(message)
        if m:
            message = m.group("reason")
        return SizeLimitConfigError(
            "Can not parse `package.json`. "
            f"{message}. "
            "Change config according to Size Limit docs.\n"
            f"{PACKAGE_EXAMPLE}\n"
        )

    if isinstance(err, yaml.MarkedYAMLError):
        mark = err.problem_mark
        if err.problem and mark is not None and mark.name:
            file = os.path.relpath(mark.name, cwd)
            position = f"{mark.line}:{mark.column}"
            return SizeLimitConfigError(
                f"Can not parse `{file}` at {position}. "
                f"{_capitalize(err.problem)}. "
                "Change config according to Size Limit docs.\n"
                f"{FILE_EXAMPLE}\n"
            )

    return None


async def resolve_config(cwd: Path, *, stop_dir: Optional[Path] = None) -> ResolvedConfig:
    """Find the configuration for ``cwd`` or raise a recognized error."""
    try:
        result = await asyncio.to_thread(find_config, cwd, stop_dir)
    except (json.JSONDecodeError, yaml.YAMLError) as err:
        translated = translate_parse_error(err, cwd)
        if translated is None:
            raise
        raise translated from err

    if result is None:
        raise SizeLimitConfigError(NOT_FOUND_MESSAGE)

    logger.debug("Using Size Limit config from %s", result.filepath)
    return result


async def read_manifest(cwd: Path, *, stop_dir: Optional[Path] = None) -> ProjectManifest:
    try:
        return await asyncio.to_thread(find_manifest, cwd, stop_dir)
    except json.JSONDecodeError as err:
        translated = translate_parse_error(err, cwd)
        if translated is None:
            raise
        raise translated from err
