from __future__ import annotations

import argparse
from pathlib import Path
from typing import Mapping, Optional, Sequence

from budget import __version__
from budget.config_errors import FILE_EXAMPLE, PACKAGE_EXAMPLE
from budget.models import RunOptions

EPILOG = (
    "Usage:\n"
    "  %(prog)s\n"
    "    Read configuration from package.json and check limit.\n"
    "  %(prog)s --why\n"
    "    Show reasons why project have this size.\n"
    "  %(prog)s index.js\n"
    "    Check specific file size with all file dependencies.\n"
    "\n"
    "Size Limit will read size-limit section from package.json:\n"
    f"{PACKAGE_EXAMPLE}\n\n"
    "or from .size-limit config:\n"
    f"{FILE_EXAMPLE}"
)


def add_base_args(parser: argparse.ArgumentParser) -> None:
    """Register every Size Limit flag.

    There are no subcommands: positional files switch to direct-file mode,
    otherwise configuration is read from package.json / .size-limit.
    """
    parser.add_argument(
        "files",
        nargs="*",
        metavar="FILE",
        help="Files to check directly (skips config lookup)",
    )
    parser.add_argument(
        "-w",
        "--why",
        action="store_true",
        help="Show package content",
    )
    parser.add_argument(
        "--no-webpack",
        dest="webpack",
        action="store_false",
        help="Disable webpack",
    )
    parser.add_argument(
        "--no-gzip",
        dest="gzip",
        action="store_false",
        help="Disable gzip",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Custom webpack config",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=__version__,
    )


def build_parser(prog: str = "size-limit") -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=EPILOG,
    )
    add_base_args(parser)
    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def options_from_args(
    args: argparse.Namespace,
    *,
    cwd: Path,
    env: Mapping[str, str],
) -> RunOptions:
    return RunOptions(
        cwd=cwd,
        why=bool(args.why),
        webpack=bool(args.webpack),
        gzip=bool(args.gzip),
        config=args.config or None,
        files=tuple(args.files or ()),
        env=dict(env),
    )
