#!/usr/bin/env python
"""
Simple Test Runner for permtree
===============================

Usage:
    python run_tests.py             # Run the test suite
    python run_tests.py --coverage  # Same, with a coverage report
"""

import subprocess
import sys
import argparse
from pathlib import Path


def run_tests(coverage=False):
    """Run the test suite."""
    cmd = [
        sys.executable, "-m", "pytest",
        "tests",
        "--tb=short",               # Short traceback format
        "--durations=10",           # Show 10 slowest tests
        "-v"                        # Verbose output
    ]

    if coverage:
        cmd.extend(["--cov=permtree", "--cov-report=term-missing"])

    print("Running permtree tests...")
    print("=" * 60)

    result = subprocess.run(cmd, cwd=Path(__file__).parent)
    return result.returncode


def main():
    parser = argparse.ArgumentParser(description="Test runner for permtree")
    parser.add_argument("--coverage", action="store_true", help="Report coverage (needs pytest-cov)")

    args = parser.parse_args()

    return run_tests(coverage=args.coverage)


if __name__ == "__main__":
    sys.exit(main())
