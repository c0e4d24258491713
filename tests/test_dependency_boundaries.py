import ast
import unittest
from pathlib import Path
from typing import Callable, Iterator, List, Tuple


REPO_ROOT = Path(__file__).resolve().parents[1]

# measure/ is a standalone collaborator; budget/ is the core the CLI drives.
FORBIDDEN_IMPORTS = {
    "measure": ("budget", "cli"),
    "budget": ("cli",),
}

# Process state reaches the core only through RunOptions.
AMBIENT_STATE = ("os.getcwd", "Path.cwd", "sys.argv", "os.environ")

Check = Callable[[ast.AST], List[str]]


def package_trees(package: str) -> Iterator[Tuple[Path, ast.AST]]:
    pkg_dir = REPO_ROOT / package
    if not pkg_dir.is_dir():
        raise AssertionError(f"Missing package directory: {pkg_dir}")
    for py_file in sorted(pkg_dir.rglob("*.py")):
        if "__pycache__" in py_file.parts:
            continue
        src = py_file.read_text(encoding="utf-8")
        yield py_file.relative_to(REPO_ROOT), ast.parse(src, filename=str(py_file))


def scan(package: str, check: Check) -> List[str]:
    problems: List[str] = []
    for rel, tree in package_trees(package):
        for node in ast.walk(tree):
            problems.extend(f"{rel}:{node.lineno}: {hit}" for hit in check(node))
    return problems


def imports_from(roots: Tuple[str, ...]) -> Check:
    def check(node: ast.AST) -> List[str]:
        if isinstance(node, ast.Import):
            names = [alias.name for alias in node.names]
        elif isinstance(node, ast.ImportFrom) and node.level == 0 and node.module:
            names = [node.module]
        else:
            return []
        return [name for name in names if name.split(".", 1)[0] in roots]

    return check


def ambient_state(node: ast.AST) -> List[str]:
    if isinstance(node, ast.Attribute) and isinstance(node.value, ast.Name):
        dotted = f"{node.value.id}.{node.attr}"
        if dotted in AMBIENT_STATE:
            return [dotted]
    return []


class TestDependencyBoundaries(unittest.TestCase):
    def test_dependency_direction_is_enforced(self) -> None:
        for pkg, forbidden in FORBIDDEN_IMPORTS.items():
            with self.subTest(package=pkg):
                self.assertEqual([], scan(pkg, imports_from(forbidden)))

    def test_core_reads_invocation_only_from_run_options(self) -> None:
        self.assertEqual([], scan("budget", ambient_state))

    def test_scanner_reports_forbidden_import(self) -> None:
        tree = ast.parse("from cli.ui import warn\nimport budget.models\nfrom . import x\n")
        hits = [hit for node in ast.walk(tree) for hit in imports_from(("cli",))(node)]
        self.assertEqual(["cli.ui"], hits)


if __name__ == "__main__":
    unittest.main()
