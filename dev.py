#!/usr/bin/env python3
"""
Development helper script for the iscsiattach library.

Usage:
    python dev.py test                  # Run all tests
    python dev.py test --file iface     # Run specific test file
    python dev.py test --coverage       # Run with coverage
    python dev.py lint                  # Run linting
    python dev.py check                 # Lint, then run all tests
    python dev.py clean                 # Clean cache files
"""

import argparse
import subprocess
import sys
import shutil
from pathlib import Path

PACKAGE = "iscsiattach"


def run_command(cmd, description=""):
    """Run a command list and report failures."""
    if description:
        print(f"🔄 {description}")

    try:
        subprocess.run(cmd, check=True)
        return True
    except subprocess.CalledProcessError as e:
        print(f"❌ Command failed: {' '.join(cmd)}")
        print(f"   Exit code: {e.returncode}")
        return False


def run_tests(args):
    """Run tests with various options."""
    cmd = [sys.executable, "-m", "pytest"]

    if getattr(args, "file", None):
        cmd.append(f"tests/test_{args.file}.py")

    if getattr(args, "coverage", False):
        cmd += [f"--cov={PACKAGE}", "--cov-report=html", "--cov-report=term"]

    if getattr(args, "verbose", False):
        cmd.append("-v")

    return run_command(cmd, "Running tests")


def run_lint(args):
    """Run linting."""
    cmd = [sys.executable, "-m", "flake8", "--max-line-length=120", PACKAGE, "tests"]
    return run_command(cmd, "Running flake8 linting")


def run_check(args):
    """Lint first, test only if lint passes."""
    return run_lint(args) and run_tests(args)


def clean_cache(args):
    """Clean Python cache files."""
    print("🧹 Cleaning cache files...")

    for pattern in ("__pycache__", ".pytest_cache"):
        for cache_dir in Path(".").rglob(pattern):
            if cache_dir.is_dir():
                shutil.rmtree(cache_dir)
                print(f"   Removed {cache_dir}")

    for pyc in Path(".").rglob("*.pyc"):
        pyc.unlink()
        print(f"   Removed {pyc}")

    for cache_item in ("htmlcov", ".coverage", "build", f"{PACKAGE}.egg-info", "pyiscsiattach.egg-info"):
        cache_path = Path(cache_item)
        if cache_path.exists():
            if cache_path.is_dir():
                shutil.rmtree(cache_path)
            else:
                cache_path.unlink()
            print(f"   Removed {cache_path}")

    print("✅ Cache cleanup complete")
    return True


def main():
    parser = argparse.ArgumentParser(
        description="Development helper for the iscsiattach library"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    test_parser = subparsers.add_parser("test", help="Run tests")
    test_parser.add_argument(
        "--file", help="Run specific test file (e.g., 'iface' for test_iface.py)"
    )
    test_parser.add_argument(
        "--coverage", action="store_true", help="Run with coverage report"
    )
    test_parser.add_argument(
        "--verbose", "-v", action="store_true", help="Verbose output"
    )

    subparsers.add_parser("lint", help="Run linting")
    subparsers.add_parser("check", help="Run linting and tests")
    subparsers.add_parser("clean", help="Clean cache files")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 1

    commands = {
        "test": run_tests,
        "lint": run_lint,
        "check": run_check,
        "clean": clean_cache,
    }

    success = commands[args.command](args)
    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())
