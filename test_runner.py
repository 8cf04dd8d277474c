#!/usr/bin/env python3
"""Run the chat-mcp test suite with coverage.

Extra arguments are passed to pytest, e.g. ``python test_runner.py -k dispatcher``.
"""

import subprocess
import sys

COVERAGE_THRESHOLD = 85


def run_tests(extra_args=None):
    """Run pytest over tests/ with coverage of the chat_mcp package."""
    command = [
        sys.executable, "-m", "pytest", "tests",
        "-v",
        "--cov=chat_mcp",
        "--cov-report=term-missing",
        f"--cov-fail-under={COVERAGE_THRESHOLD}",
    ]
    command.extend(extra_args or [])

    print("Running chat-mcp tests...")
    try:
        subprocess.run(command, check=True)
    except subprocess.CalledProcessError as e:
        print(f"Tests failed (exit code {e.returncode})")
        return e.returncode
    except FileNotFoundError:
        print("pytest not found. Install the test extra: pip install -e .[test]")
        return 1

    print("All tests passed.")
    return 0


if __name__ == "__main__":
    sys.exit(run_tests(sys.argv[1:]))
