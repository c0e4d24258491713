"""budget.legacy_args

Direct-file mode: ``size-limit [LIMIT] FILE...``.

When positional arguments are given, configuration files are not read at
all. The positional tokens are the files to measure, optionally preceded by a
deprecated inline limit in one of two forms:

* two tokens: ``size-limit 10 KB index.js``
* one fused token: ``size-limit 10KB index.js`` (a bare number is bytes)

A stripped limit triggers a deprecation warning pointing at the config-based
limit. Files are used as given (no glob expansion) and made absolute against
the working directory.
"""

from __future__ import annotations

import os
import re
from typing import Callable, List, Optional, Sequence, Tuple

from budget.errors import SizeLimitConfigError
from budget.models import MeasurementRequest, RunOptions
from budget.units import parse_bytes

Warn = Callable[[List[str]], None]

_NUMBER_RE = re.compile(r"^\d+(\.\d+)?$")
_UNIT_RE = re.compile(r"^[kKMGT]?B$")
_FUSED_RE = re.compile(r"^\d+(\.\d+)?([kKMGT]B|B)?$")

DEPRECATION_WARNING = [
    "Limit argument in Size Limit CLI was deprecated.",
    "Use `size-limit` section in `package.json` to specify limit.",
]


def split_inline_limit(tokens: Sequence[str]) -> Tuple[Optional[int], List[str]]:
    """Strip a leading inline limit; return ``(limit, remaining_files)``."""
    files = list(tokens)
    if len(files) >= 2 and _NUMBER_RE.match(files[0]) and _UNIT_RE.match(files[1]):
        number, unit = files.pop(0), files.pop(0)
        return parse_bytes(f"{number} {unit}"), files
    if files and _FUSED_RE.match(files[0]):
        return parse_bytes(files.pop(0)), files
    return None, files


def build_legacy_requests(options: RunOptions, *, warn: Warn) -> List[MeasurementRequest]:
    limit, files = split_inline_limit(options.files)

    if limit is not None:
        warn(list(DEPRECATION_WARNING))

    if not files:
        invocation = " ".join(options.files)
        raise SizeLimitConfigError(
            "Specify file for Size Limit. "
            f"For example, `size-limit {invocation} index.js`."
        )

    full = tuple(
        f if os.path.isabs(f) else os.path.normpath(os.path.join(str(options.cwd), f))
        for f in files
    )
    return [
        MeasurementRequest(
            full=full,
            webpack=options.webpack,
            gzip=options.gzip,
            limit=limit,
        )
    ]
