#!/usr/bin/env python3
"""Keep environment reads inside the config module."""

from __future__ import annotations

import argparse
import ast
from pathlib import Path

ALLOWED_FILES = {
    "tickflow/runtime/config.py",
}


def _is_env_read(node: ast.AST) -> bool:
    if isinstance(node, ast.Call):
        fn = node.func
        # os.getenv(...)
        if isinstance(fn, ast.Attribute) and fn.attr == "getenv":
            return isinstance(fn.value, ast.Name) and fn.value.id == "os"
        return False
    # os.environ[...] and os.environ.get(...)
    if isinstance(node, ast.Attribute) and node.attr == "environ":
        return isinstance(node.value, ast.Name) and node.value.id == "os"
    return False


def find_violations(root: Path) -> list[str]:
    """Return `path:line` entries for env reads outside allowed modules."""
    violations: list[str] = []
    for path in sorted(root.rglob("*.py")):
        rel = path.as_posix()
        if rel in ALLOWED_FILES:
            continue
        tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
        for node in ast.walk(tree):
            if _is_env_read(node):
                violations.append(f"{rel}:{getattr(node, 'lineno', 0)} env read outside config")
    return violations


def main() -> int:
    parser = argparse.ArgumentParser(description="Check env read placement.")
    parser.add_argument("--root", default="tickflow")
    args = parser.parse_args()

    violations = find_violations(Path(args.root))
    if violations:
        print("Env read placement violations:")
        for line in violations:
            print(f"  {line}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
