"""budget.request_builder

Turn a resolved configuration document into measurement requests.

Each entry is expanded independently and concurrently:

1. glob ``path`` relative to the config file's directory
2. if nothing matches, keep the literal path(s); a config may name an output
   file that has not been built yet, and the measurer reports that better
   than an empty match would
3. apply defaults (webpack and gzip on unless explicitly ``false``) and the
   inherited project metadata (package name, peer dependencies)

The document's shape is checked first with :func:`config_error`; no entry is
expanded unless the whole document is valid, and one failing entry fails the
whole build.
"""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Any, List, Mapping, Optional

from budget import globs
from budget.concurrency import gather_all
from budget.config_errors import config_error, config_error_message
from budget.config_resolver import MANIFEST_NAME
from budget.errors import SizeLimitConfigError
from budget.models import MeasurementRequest, ProjectManifest, ResolvedConfig
from budget.units import parse_bytes

logger = logging.getLogger(__name__)


def _entry_label(entry: Mapping[str, Any]) -> str:
    if entry.get("name"):
        return str(entry["name"])
    path = entry.get("path")
    return path if isinstance(path, str) else ", ".join(path)


def _parse_limit(entry: Mapping[str, Any]) -> Optional[int]:
    raw = entry.get("limit")
    if raw is None:
        return None
    limit = parse_bytes(raw)
    if limit is None or limit < 0:
        raise SizeLimitConfigError(
            f"Can not parse limit `{raw}` of `{_entry_label(entry)}`. "
            'Use a size like `"9 KB"` according to Size Limit docs.'
        )
    return limit


async def build_request(
    entry: Mapping[str, Any],
    *,
    cwd: str,
    manifest: ProjectManifest,
) -> MeasurementRequest:
    """Build the request for one (already validated) config entry."""
    limit = _parse_limit(entry)

    files = await asyncio.to_thread(globs.expand_globs, entry["path"], cwd)
    if not files:
        path = entry["path"]
        files = [path] if isinstance(path, str) else list(path)
        logger.debug("No files matched %r in %s; using it literally", path, cwd)
    else:
        logger.debug("Matched %d file(s) for %r", len(files), entry["path"])

    return MeasurementRequest(
        full=tuple(os.path.normpath(os.path.join(cwd, f)) for f in files),
        webpack=entry.get("webpack") is not False,
        gzip=entry.get("gzip") is not False,
        limit=limit,
        name=str(entry["name"]) if entry.get("name") else ", ".join(files),
        bundle=manifest.name,
        ignore=manifest.peer_dependencies,
        config=entry.get("config") or None,
    )


async def build_requests(
    resolved: ResolvedConfig,
    manifest: ProjectManifest,
) -> List[MeasurementRequest]:
    """Validate ``resolved.config`` and expand every entry into a request."""
    from_package_json = resolved.filepath.name == MANIFEST_NAME
    code = config_error(resolved.config)
    # An empty path list would leave nothing to measure.
    if code == "none" and any(entry["path"] == [] for entry in resolved.config):
        code = "notString"
    if code != "none":
        raise SizeLimitConfigError(
            config_error_message(code, from_package_json=from_package_json)
        )

    cwd = str(resolved.filepath.parent)
    return await gather_all(
        build_request(entry, cwd=cwd, manifest=manifest) for entry in resolved.config
    )
