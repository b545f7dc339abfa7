#!/usr/bin/env python3
"""
Run the zhdict checks locally using the ACTIVE Python environment.

Order:
  1) pip install -e ".[dev]"   (skipped with --no-install)
  2) black --check on zhdict/, tests/ and scripts/
  3) mypy zhdict
  4) pytest tests/ with coverage

Commands run from the repo root (the directory holding pyproject.toml).
"""

import argparse
import subprocess
import sys
from pathlib import Path

LINE_LENGTH = "120"
COVERAGE_FLOOR = "80"


def repo_root() -> Path:
    here = Path(__file__).resolve().parent
    for d in [here] + list(here.parents):
        if (d / "pyproject.toml").exists():
            return d
    return here


REPO = repo_root()


def run(cmd: list[str]) -> None:
    print(">>>", " ".join(cmd))
    subprocess.run(cmd, check=True, cwd=str(REPO))


def python_module(module: str, *args: str) -> list[str]:
    return [sys.executable, "-m", module, *args]


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--no-install", action="store_true", help="skip installing the package and its dev extra")
    args = parser.parse_args()

    if not args.no_install:
        run(python_module("pip", "install", "-e", ".[dev]"))

    run(python_module("black", "zhdict", "tests", "scripts", "--check", "--line-length", LINE_LENGTH))
    run(python_module("mypy", "zhdict", "--ignore-missing-imports"))
    run(
        python_module(
            "pytest",
            "tests/",
            "--cov=zhdict",
            "--cov-report=term-missing",
            f"--cov-fail-under={COVERAGE_FLOOR}",
        )
    )

    print("\nALL CHECKS PASSED")


if __name__ == "__main__":
    try:
        main()
    except subprocess.CalledProcessError as e:
        print(f"\nCommand failed with exit code {e.returncode}", file=sys.stderr)
        sys.exit(e.returncode)
