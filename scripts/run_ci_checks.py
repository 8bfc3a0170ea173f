#!/usr/bin/env python3
# scripts/run_ci_checks.py
# CI gate for dumpmask.
#
#   Stage 1: pytest with coverage floor (>= 90%)
#   Stage 2: CLI smoke run, mask a generated dump and compare it with its source
#
# Exit codes: 0 pass, 1 pytest failed, 2 smoke run failed.

import pathlib
import subprocess
import sys
import tempfile

_REPO_ROOT = pathlib.Path(__file__).parent.parent
_CLI       = [sys.executable, "-m", "dumpmask.run_dumpmask"]


def _stage(cmd: list, label: str) -> int:
    print("== " + label + ": " + " ".join(cmd), flush=True)
    return subprocess.run(cmd, cwd=str(_REPO_ROOT)).returncode


def _smoke() -> int:
    with tempfile.TemporaryDirectory() as tmp:
        source = pathlib.Path(tmp) / "full.bin"
        masked = pathlib.Path(tmp) / "masked.bin"
        source.write_bytes(bytes(i % 251 for i in range(2048)))

        rc = _stage(_CLI + ["mask", str(source), "-o", str(masked)], "smoke mask")
        if rc != 0:
            return rc
        return _stage(_CLI + ["compare", str(masked), str(source)], "smoke compare")


def main() -> int:
    rc = _stage(
        [sys.executable, "-m", "pytest",
         "--cov=dumpmask", "--cov-report=term-missing", "--cov-fail-under=90"],
        "pytest",
    )
    if rc != 0:
        print("CI RESULT: FAIL  [stage=pytest  exit_code=%d]" % rc)
        return 1

    rc = _smoke()
    if rc != 0:
        print("CI RESULT: FAIL  [stage=smoke  exit_code=%d]" % rc)
        return 2

    print("CI RESULT: PASS  [stages=pytest,smoke]")
    return 0


if __name__ == "__main__":
    sys.exit(main())
