#!/usr/bin/env python3
"""Test runner script for the OCR image viewer.

Wraps the common pytest invocations used during development and in CI.
"""
import os
import sys
import subprocess
import argparse
import time
from pathlib import Path
from typing import List, Optional

PACKAGE = "ocr_viewer"


def run_command(cmd: List[str], cwd: Optional[Path] = None) -> int:
    """Run a command and return the exit code."""
    print(f"Running: {' '.join(cmd)}")
    result = subprocess.run(cmd, cwd=cwd)
    return result.returncode


def _pytest(*args: str, verbose: bool = True) -> List[str]:
    cmd = [sys.executable, "-m", "pytest", *args]
    if verbose:
        cmd.append("-v")
    return cmd


def run_unit_tests(coverage: bool = True, verbose: bool = True) -> int:
    """Run unit tests."""
    cmd = _pytest("tests/unit/", verbose=verbose)
    if coverage:
        cmd.extend([f"--cov={PACKAGE}", "--cov-report=term-missing"])

    print("Running unit tests...")
    return run_command(cmd)


def run_integration_tests(verbose: bool = True) -> int:
    """Run integration tests."""
    print("Running integration tests...")
    return run_command(_pytest("tests/integration/", "-m", "integration", verbose=verbose))


def run_all_tests(coverage: bool = True, verbose: bool = True) -> int:
    """Run all tests."""
    cmd = _pytest(verbose=verbose)
    if coverage:
        cmd.extend([
            f"--cov={PACKAGE}",
            "--cov-report=html:htmlcov",
            "--cov-report=term-missing",
        ])

    print("Running all tests...")
    return run_command(cmd)


def run_quick_tests() -> int:
    """Run the unit tests, stopping on the first failure."""
    print("Running quick test suite...")
    return run_command(_pytest("tests/unit/", "-x", "--tb=short", "-q", verbose=False))


def run_ci_tests() -> int:
    """Run tests suitable for a CI pipeline."""
    print("Running CI test suite...")
    os.environ["CI"] = "true"

    cmd = _pytest(
        f"--cov={PACKAGE}",
        "--cov-report=xml:coverage.xml",
        "--cov-report=term",
        "--junit-xml=test-results.xml",
        "--tb=short",
        verbose=False,
    )
    return run_command(cmd)


def main():
    """Main test runner function."""
    parser = argparse.ArgumentParser(description="Test runner for the OCR image viewer")
    parser.add_argument(
        "test_type",
        choices=["unit", "integration", "all", "quick", "ci"],
        help="Type of tests to run"
    )
    parser.add_argument("--no-coverage", action="store_true", help="Disable coverage reporting")
    parser.add_argument("--quiet", action="store_true", help="Quiet output")
    args = parser.parse_args()

    project_root = Path(__file__).parent
    os.chdir(project_root)

    start_time = time.time()
    try:
        if args.test_type == "unit":
            result = run_unit_tests(coverage=not args.no_coverage, verbose=not args.quiet)
        elif args.test_type == "integration":
            result = run_integration_tests(verbose=not args.quiet)
        elif args.test_type == "all":
            result = run_all_tests(coverage=not args.no_coverage, verbose=not args.quiet)
        elif args.test_type == "quick":
            result = run_quick_tests()
        else:
            result = run_ci_tests()
    except KeyboardInterrupt:
        print("\n\nTest execution interrupted by user")
        return 130

    duration = time.time() - start_time
    print(f"\nTest execution completed in {duration:.2f} seconds")
    print("All tests passed" if result == 0 else "Some tests failed")
    return result


if __name__ == "__main__":
    sys.exit(main())
