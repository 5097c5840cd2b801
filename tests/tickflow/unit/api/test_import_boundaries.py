from __future__ import annotations

import ast
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[4]


def _iter_python_files(base: Path) -> list[Path]:
    return [path for path in base.rglob("*.py") if "__pycache__" not in path.parts]


def _top_level_import_targets(path: Path) -> list[str]:
    tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    targets: list[str] = []
    for node in tree.body:
        if isinstance(node, ast.Import):
            targets.extend(alias.name for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and node.module is not None:
            targets.append(node.module)
    return targets


def test_api_imports_implementations_only_lazily() -> None:
    violations: list[str] = []
    for path in _iter_python_files(REPO_ROOT / "tickflow" / "api"):
        for target in _top_level_import_targets(path):
            if target.startswith(("tickflow.runtime", "tickflow.behaviours")):
                violations.append(f"{path.relative_to(REPO_ROOT)} -> {target}")
    assert not violations, "API modules must defer implementation imports:\n" + "\n".join(
        violations
    )


def test_runtime_does_not_import_behaviours() -> None:
    violations: list[str] = []
    for path in _iter_python_files(REPO_ROOT / "tickflow" / "runtime"):
        for target in _top_level_import_targets(path):
            if target.startswith("tickflow.behaviours"):
                violations.append(f"{path.relative_to(REPO_ROOT)} -> {target}")
    assert not violations, "Runtime must not depend on behaviours:\n" + "\n".join(violations)
