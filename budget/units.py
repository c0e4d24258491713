"""budget.units

Human-readable byte sizes.

Limits are authored as strings like ``"9 KB"`` and results are shown the same
way, so parsing and formatting must agree with each other:

* units are binary (1 KB == 1024 B)
* parsing is case-insensitive and tolerates a missing space (``"10kb"``)
* formatting keeps at most two decimals and drops trailing zeros
  (``1536 -> "1.5 KB"``, ``2048 -> "2 KB"``)
"""

from __future__ import annotations

import math
import re
from typing import Dict, Optional, Union

UNITS: Dict[str, int] = {
    "b": 1,
    "kb": 1 << 10,
    "mb": 1 << 20,
    "gb": 1 << 30,
    "tb": 1 << 40,
    "pb": 1 << 50,
}

_SIZE_RE = re.compile(r"^([-+]?\d+(?:\.\d+)?) *(kb|mb|gb|tb|pb)$", re.IGNORECASE)
_LEADING_INT_RE = re.compile(r"^\s*([-+]?\d+)")
_TRAILING_ZEROS_RE = re.compile(r"(?:\.0*|(\.[^0]+)0+)$")


def parse_bytes(value: Union[str, int, float, None]) -> Optional[int]:
    """Parse a size into a byte count.

    Numbers are taken as bytes. Strings without a recognised unit fall back to
    their leading integer (``"10B"`` and ``"10"`` are both 10 bytes). Returns
    ``None`` when nothing usable is found.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            return None
        return int(math.floor(value))

    m = _SIZE_RE.match(value)
    if m:
        number = float(m.group(1))
        unit = m.group(2).lower()
    else:
        m = _LEADING_INT_RE.match(value)
        if not m:
            return None
        number = float(int(m.group(1)))
        unit = "b"

    return int(math.floor(UNITS[unit] * number))


def format_bytes(size: Union[int, float]) -> str:
    """Format a byte count, e.g. ``format_bytes(9216) == "9 KB"``."""
    magnitude = abs(size)
    if magnitude >= UNITS["pb"]:
        unit = "PB"
    elif magnitude >= UNITS["tb"]:
        unit = "TB"
    elif magnitude >= UNITS["gb"]:
        unit = "GB"
    elif magnitude >= UNITS["mb"]:
        unit = "MB"
    elif magnitude >= UNITS["kb"]:
        unit = "KB"
    else:
        unit = "B"

    text = f"{size / UNITS[unit.lower()]:.2f}"
    text = _TRAILING_ZEROS_RE.sub(lambda m: m.group(1) or "", text)
    return f"{text} {unit}"
