"""budget.config_errors

Shape validation for a ``size-limit`` configuration document.

:func:`config_error` is pure and total: it classifies any value without
raising, first matching rule wins. The message tables turn a code into the
diagnostic shown to the user; which table applies depends on whether the
document came from ``package.json`` or from a dedicated ``.size-limit`` file.
"""

from __future__ import annotations

from typing import Any, Dict, Literal, Mapping

ConfigErrorCode = Literal["notArray", "empty", "notObject", "notString", "none"]

PACKAGE_EXAMPLE = (
    "\n"
    '  "size-limit": [\n'
    "    {\n"
    '      "path": "index.js",\n'
    '      "limit": "9 KB"\n'
    "    }\n"
    "  ]"
)

FILE_EXAMPLE = (
    "\n"
    "  [\n"
    "    {\n"
    '      path: "index.js",\n'
    '      limit: "9 KB"\n'
    "    }\n"
    "  ]"
)

PACKAGE_ERRORS: Dict[str, str] = {
    "notArray": 'The `"size-limit"` section of package.json must be `an array`',
    "empty": 'The `"size-limit"` section of package.json must `not be empty`',
    "notObject": 'The `"size-limit"` array in package.json should contain only objects',
    "notString": "The `path` in Size Limit config must be `a string` or `an array of strings`",
}

FILE_ERRORS: Dict[str, str] = {
    "notArray": "Size Limit config must contain `an array`",
    "empty": "Size Limit config must `not be empty`",
    "notObject": "Size Limit config should contain only objects",
    "notString": "The `path` in Size Limit config must be `a string` or `an array of strings`",
}


def _is_strings(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(i, str) for i in value)


def config_error(limits: Any) -> ConfigErrorCode:
    """Classify a configuration document; ``"none"`` means it is usable."""
    if not isinstance(limits, list):
        return "notArray"
    if len(limits) == 0:
        return "empty"
    if not all(isinstance(limit, Mapping) for limit in limits):
        return "notObject"
    for limit in limits:
        path = limit.get("path")
        if not isinstance(path, str) and not _is_strings(path):
            return "notString"
    return "none"


def config_error_message(code: ConfigErrorCode, *, from_package_json: bool) -> str:
    """Full diagnostic for a non-``none`` code, including the inline example."""
    if from_package_json:
        return (
            f"{PACKAGE_ERRORS[code]}. Fix it according to Size Limit docs.\n"
            f"{PACKAGE_EXAMPLE}\n"
        )
    return f"{FILE_ERRORS[code]}. Fix it according to Size Limit docs.\n{FILE_EXAMPLE}\n"
