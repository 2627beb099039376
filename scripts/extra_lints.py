#!/usr/bin/env python3
"""Project-specific lint rules that ruff does not cover.

Rules:
1. no-class-tests: tests are module-level functions (Hypothesis state
   machine ``TestCase`` classes excepted)
2. import-in-function: library code imports at module level
3. mutable-default: no list/dict/set default arguments
4. no-print: library code logs instead of printing
5. todo-needs-issue: TODO/FIXME comments carry an issue reference
6. no-global-random: library code draws randomness from an injected
   source, never from the ``random`` module's shared generator

Usage: python scripts/extra_lints.py [DIRECTORY ...]
"""

import ast
import io
import re
import sys
import tokenize
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

DEFAULT_DIRECTORIES = ("src", "tests")

# Constructors of independent generators are fine; everything else on the
# module goes through the hidden process-wide instance.
ALLOWED_RANDOM_ATTRIBUTES = frozenset({"Random", "SystemRandom"})

MUTABLE_FACTORIES = frozenset({"list", "dict", "set"})

TODO_PATTERN = re.compile(r"#\s*(TODO|FIXME)(?!:\s*\w+-\d+)", re.IGNORECASE)


@dataclass(frozen=True)
class LintError:
    file: Path
    line: int
    column: int
    rule: str
    message: str

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}: {self.rule}: {self.message}"


def is_test_file(path: Path) -> bool:
    return path.name.startswith("test_") or path.name == "conftest.py"


class LintVisitor(ast.NodeVisitor):
    """Walks one module and records rule violations."""

    def __init__(self, file: Path) -> None:
        self.file = file
        self.errors: list[LintError] = []
        self._is_test_file = is_test_file(file)
        self._function_depth = 0

    def _report(self, node: ast.AST, rule: str, message: str) -> None:
        self.errors.append(
            LintError(
                self.file,
                getattr(node, "lineno", 0),
                getattr(node, "col_offset", 0),
                rule,
                message,
            )
        )

    def visit_ClassDef(self, node: ast.ClassDef) -> None:
        if self._is_test_file and node.name.startswith("Test"):
            stateful = any(
                isinstance(base, ast.Attribute) and base.attr == "TestCase"
                for base in node.bases
            )
            if not stateful:
                self._report(
                    node,
                    "no-class-tests",
                    f"Class-based test '{node.name}' found. Use functions.",
                )
        self.generic_visit(node)

    def _visit_function(self, node: ast.FunctionDef | ast.AsyncFunctionDef) -> None:
        for default in [*node.args.defaults, *node.args.kw_defaults]:
            if default is not None and is_mutable_default(default):
                self._report(
                    default,
                    "mutable-default",
                    "Mutable default argument. Use None instead.",
                )
        self._function_depth += 1
        self.generic_visit(node)
        self._function_depth -= 1

    visit_FunctionDef = _visit_function
    visit_AsyncFunctionDef = _visit_function

    def _visit_import(self, node: ast.Import | ast.ImportFrom) -> None:
        if self._function_depth > 0 and not self._is_test_file:
            self._report(
                node,
                "import-in-function",
                "Import inside function. Move to module level.",
            )
        self.generic_visit(node)

    visit_Import = _visit_import
    visit_ImportFrom = _visit_import

    def visit_Call(self, node: ast.Call) -> None:
        if not self._is_test_file:
            func = node.func
            if isinstance(func, ast.Name) and func.id == "print":
                self._report(
                    node, "no-print", "Use logging instead of print() in source code."
                )
            elif (
                isinstance(func, ast.Attribute)
                and isinstance(func.value, ast.Name)
                and func.value.id == "random"
                and func.attr not in ALLOWED_RANDOM_ATTRIBUTES
            ):
                self._report(
                    node,
                    "no-global-random",
                    f"random.{func.attr}() uses the shared generator. "
                    "Draw from an injected random source.",
                )
        self.generic_visit(node)


def is_mutable_default(node: ast.expr) -> bool:
    if isinstance(node, (ast.List, ast.Dict, ast.Set)):
        return True
    return (
        isinstance(node, ast.Call)
        and isinstance(node.func, ast.Name)
        and node.func.id in MUTABLE_FACTORIES
    )


def check_todo_comments(file: Path, source: str) -> list[LintError]:
    """Only real comments count; string literals mentioning TODO are ignored."""
    errors: list[LintError] = []
    tokens = tokenize.generate_tokens(io.StringIO(source).readline)
    for token in tokens:
        if token.type != tokenize.COMMENT:
            continue
        match = TODO_PATTERN.search(token.string)
        if match:
            lineno, column = token.start
            errors.append(
                LintError(
                    file,
                    lineno,
                    column + match.start(),
                    "todo-needs-issue",
                    f"{match.group(1)} needs issue reference (e.g., TODO: PROJ-123).",
                )
            )
    return errors


def lint_source(path: Path, source: str) -> list[LintError]:
    """Lint already-read source text attributed to ``path``."""
    try:
        tree = ast.parse(source)
    except SyntaxError as e:
        return [LintError(path, e.lineno or 0, e.offset or 0, "syntax-error", str(e))]
    visitor = LintVisitor(path)
    visitor.visit(tree)
    return visitor.errors + check_todo_comments(path, source)


def lint_file(path: Path) -> list[LintError]:
    return lint_source(path, path.read_text())


def lint_directories(directories: Iterable[str | Path]) -> list[LintError]:
    """Lint every Python file below the given directories, skipping missing ones."""
    errors: list[LintError] = []
    for directory in directories:
        root = Path(directory)
        if not root.exists():
            continue
        for py_file in sorted(root.rglob("*.py")):
            errors.extend(lint_file(py_file))
    return sorted(errors, key=lambda e: (str(e.file), e.line, e.column))


def main(argv: list[str] | None = None) -> int:
    directories = argv if argv else list(DEFAULT_DIRECTORIES)
    errors = lint_directories(directories)

    if errors:
        for error in errors:
            print(error)
        print(f"\nFound {len(errors)} custom lint error(s)")
        return 1

    print("All custom lint checks passed!")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
