"""Tests for the project's custom lint rules in scripts/extra_lints.py."""

import importlib.util
import sys
from pathlib import Path
from types import ModuleType

import pytest

ROOT = Path(__file__).resolve().parent.parent


def load_extra_lints() -> ModuleType:
    spec = importlib.util.spec_from_file_location(
        "extra_lints", ROOT / "scripts" / "extra_lints.py"
    )
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    sys.modules[spec.name] = module
    spec.loader.exec_module(module)
    return module


extra_lints = load_extra_lints()


def rules_for(source: str, filename: str = "module.py") -> list[str]:
    errors = extra_lints.lint_source(Path(filename), source)
    return [error.rule for error in errors]


def test_clean_source_passes() -> None:
    """Ordinary library code raises nothing."""
    source = (
        "import logging\n"
        "import random\n"
        "logger = logging.getLogger(__name__)\n"
        "def make(seed=None):\n"
        "    return random.Random(seed)\n"
    )
    assert rules_for(source) == []


def test_global_random_flagged_in_source() -> None:
    """Module-level random functions share one hidden generator."""
    source = "import random\ndef coin():\n    return random.random() < 0.5\n"
    assert rules_for(source) == ["no-global-random"]


def test_global_random_allowed_in_tests() -> None:
    """Tests may use the shared generator freely."""
    source = "import random\ndef test_x():\n    random.seed(1)\n"
    assert rules_for(source, "test_module.py") == []


def test_system_random_allowed() -> None:
    """Constructing an independent generator is fine anywhere."""
    assert rules_for("import random\nsource = random.SystemRandom()\n") == []


def test_print_flagged_in_source_only() -> None:
    """Library code logs instead of printing."""
    assert rules_for("print('hi')\n") == ["no-print"]
    assert rules_for("print('hi')\n", "test_module.py") == []


def test_import_in_function_flagged() -> None:
    """Library imports belong at module level."""
    source = "def f():\n    import math\n    return math.pi\n"
    assert rules_for(source) == ["import-in-function"]
    assert rules_for(source, "test_module.py") == []


def test_import_in_async_function_flagged() -> None:
    """Async functions are held to the same rule."""
    source = "async def f():\n    from math import pi\n    return pi\n"
    assert rules_for(source) == ["import-in-function"]


@pytest.mark.parametrize("default", ["[]", "{}", "set()", "dict()", "{1}"])
def test_mutable_default_flagged(default: str) -> None:
    """Mutable defaults are shared between calls."""
    assert rules_for(f"def f(x={default}):\n    return x\n") == ["mutable-default"]


def test_keyword_only_mutable_default_flagged() -> None:
    """Keyword-only defaults are checked too."""
    assert rules_for("def f(*, x=[]):\n    return x\n") == ["mutable-default"]


def test_class_based_tests_flagged() -> None:
    """Tests are plain functions."""
    source = "class TestThing:\n    def test_a(self):\n        pass\n"
    assert rules_for(source, "test_module.py") == ["no-class-tests"]


def test_state_machine_test_case_allowed() -> None:
    """Hypothesis state machines expose a TestCase attribute for pytest."""
    source = "class TestMachine(Machine.TestCase):\n    pass\n"
    assert rules_for(source, "test_module.py") == []


def test_todo_needs_issue_reference() -> None:
    """Bare TODOs are flagged; referenced ones pass."""
    assert rules_for("x = 1  # TODO fix this\n") == ["todo-needs-issue"]
    assert rules_for("x = 1  # TODO: FB-12 fix this\n") == []


def test_syntax_error_reported() -> None:
    """Unparseable files produce a single syntax-error entry."""
    assert rules_for("def broken(:\n") == ["syntax-error"]


def test_error_formatting() -> None:
    """Errors print as file:line:column: rule: message."""
    errors = extra_lints.lint_source(Path("pkg/mod.py"), "print(1)\n")
    assert str(errors[0]) == (
        "pkg/mod.py:1:0: no-print: Use logging instead of print() in source code."
    )


def test_project_tree_is_clean() -> None:
    """The package and its tests satisfy every custom rule."""
    errors = extra_lints.lint_directories([ROOT / "src", ROOT / "tests"])
    assert errors == [], "\n".join(str(e) for e in errors)


def test_main_reports_failures(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """main() exits non-zero and lists each violation."""
    (tmp_path / "bad.py").write_text("import random\nx = random.randint(1, 6)\n")
    assert extra_lints.main([str(tmp_path)]) == 1
    out = capsys.readouterr().out
    assert "no-global-random" in out
    assert "Found 1 custom lint error(s)" in out


def test_main_passes_clean_directory(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """main() exits zero when nothing is wrong."""
    (tmp_path / "good.py").write_text("VALUE = 1\n")
    assert extra_lints.main([str(tmp_path)]) == 0
    assert "All custom lint checks passed!" in capsys.readouterr().out
