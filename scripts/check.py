#!/usr/bin/env python3
"""Composite quality checks for local and CI use."""

from __future__ import annotations

import argparse
import os
import subprocess
import sys
from pathlib import Path


def _run_checked(*, label: str, command: list[str], env: dict[str, str]) -> None:
    print(label, flush=True)
    completed = subprocess.run(command, env=env, check=False)
    if completed.returncode != 0:
        raise SystemExit(f"{label} failed with exit code {completed.returncode}.")


def main() -> int:
    parser = argparse.ArgumentParser(description="Run repository quality checks.")
    parser.add_argument("--skip-typecheck", action="store_true")
    parser.add_argument("--skip-policy", action="store_true")
    parser.add_argument("--skip-tests", action="store_true")
    parser.add_argument("--cov-fail-under", type=int, default=85)
    args = parser.parse_args()

    root = Path(__file__).resolve().parent.parent
    os.chdir(root)

    env = os.environ.copy()
    env["PYTHONPATH"] = "."

    if not args.skip_typecheck:
        _run_checked(
            label="Running mypy...",
            command=[sys.executable, "-m", "mypy", "tickflow"],
            env=env,
        )

    if not args.skip_policy:
        _run_checked(
            label="Checking env read placement...",
            command=[sys.executable, "scripts/check_env_read_placement.py"],
            env=env,
        )

    if not args.skip_tests:
        _run_checked(
            label="Running tickflow tests with coverage gate...",
            command=[
                sys.executable,
                "-m",
                "pytest",
                "tests/tickflow",
                "--cov=tickflow",
                "--cov-report=term-missing",
                f"--cov-fail-under={args.cov_fail_under}",
            ],
            env=env,
        )

    print("All selected checks passed.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
