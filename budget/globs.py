"""budget.globs

Expand ``path`` patterns from a config entry.

Patterns are evaluated relative to ``cwd`` (the config file's directory).
A leading ``!`` excludes matches, ``**`` recurses, dotfiles are skipped unless
named explicitly, and only regular files are returned. Results keep pattern
order and are de-duplicated; each pattern's own matches are sorted so output
is stable across filesystems.
"""

from __future__ import annotations

import glob
import os
from typing import List, Sequence, Set, Union


def expand_globs(patterns: Union[str, Sequence[str]], cwd: str) -> List[str]:
    if isinstance(patterns, str):
        patterns = [patterns]

    excluded: Set[str] = set()
    for pattern in patterns:
        if pattern.startswith("!"):
            excluded.update(
                os.path.normpath(p) for p in glob.glob(pattern[1:], root_dir=cwd, recursive=True)
            )

    out: List[str] = []
    seen: Set[str] = set()
    for pattern in patterns:
        if pattern.startswith("!"):
            continue
        for match in sorted(glob.glob(pattern, root_dir=cwd, recursive=True)):
            key = os.path.normpath(match)
            if key in seen or key in excluded:
                continue
            if not os.path.isfile(os.path.join(cwd, match)):
                continue
            seen.add(key)
            out.append(match)
    return out
