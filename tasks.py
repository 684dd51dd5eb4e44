# Copyright (c) 2025 Soares
#
# SPDX-License-Identifier: Apache-2.0

"""Project task automation with Invoke.

Usage:
    invoke --list                 # List all tasks
    invoke test                   # Run tests with coverage
    invoke test --unit            # Only tests/unit
    invoke lint --fix             # Lint and auto-fix
    invoke check                  # Format check, lint, typecheck and tests
    invoke setup-region nz        # Scaffold config/nz/*.yaml
"""

import sys

from invoke import task

from config.scaffold import scaffold_region_config

# Windows does not support pty
PTY = sys.platform != "win32"


@task
def test(c, coverage=True, verbose=False, unit=False, keyword=None):
    """
    Run the test suite.

    Args:
        c: Invoke context
        coverage: Collect coverage for config, core and data_fetchers (default: True)
        verbose: Verbose output (default: False)
        unit: Only run tests/unit (default: False)
        keyword: pytest -k expression to select tests
    """
    cmd = "pytest tests/unit" if unit else "pytest"

    if coverage:
        cmd += " --cov --cov-report=term-missing"

    cmd += " -v" if verbose else " -q"

    if keyword:
        cmd += f' -k "{keyword}"'

    print(f"Running: {cmd}")
    c.run(cmd, pty=PTY)


@task
def lint(c, fix=False):
    """
    Run linting with ruff.

    Args:
        c: Invoke context
        fix: Auto-fix issues (default: False)
    """
    cmd = "ruff check ."
    if fix:
        cmd += " --fix"

    print(f"Running: {cmd}")
    c.run(cmd)


@task
def fmt(c, check_only=False):
    """
    Format code with ruff.

    Args:
        c: Invoke context
        check_only: Only report files that would be reformatted
    """
    cmd = "ruff format ."
    if check_only:
        cmd += " --check"

    print(f"Running: {cmd}")
    c.run(cmd)


@task
def typecheck(c):
    """Run type checking with mypy over the library packages."""
    cmd = "mypy config core data_fetchers"
    print(f"Running: {cmd}")
    c.run(cmd)


@task
def check(c):
    """Run all checks (format, lint, typecheck, test)."""
    print("\n=== Checking Code Format ===")
    fmt(c, check_only=True)

    print("\n=== Running Linter ===")
    lint(c)

    print("\n=== Type Checking ===")
    typecheck(c)

    print("\n=== Running Tests ===")
    test(c, verbose=True)

    print("\nAll checks passed!")


@task
def setup_region(
    c,  # noqa: ARG001
    region,
    catalog=None,
    run_mode="development",
    overwrite=False,
):
    """
    Scaffold config/<region>/default.yaml and the run-mode file.

    Args:
        c: Invoke context
        region: Region code (e.g. nz)
        catalog: Catalog host (default: data.gov.<region>)
        run_mode: Run mode file to create (default: development)
        overwrite: Replace existing files (default: False)
    """
    created = scaffold_region_config(
        region, catalog=catalog, run_mode=run_mode, overwrite=overwrite
    )

    if not created:
        print("Nothing written; files already exist (use --overwrite to replace them)")
        return

    print("Scaffold files created:")
    for path in created:
        print(f"  - {path}")
    print(f"\nNext step: set fetcher_matcher.query (or export {region.upper()}_QUERY)")


@task
def clean(c, cache=False):
    """
    Clean build and test artefacts.

    Args:
        c: Invoke context
        cache: Also remove tool caches and __pycache__ directories
    """
    patterns = ["dist", "build", "*.egg-info", ".pytest_cache", ".hypothesis", ".coverage"]

    if cache:
        patterns.extend([".mypy_cache", ".ruff_cache", "__pycache__"])

    print("Cleaning build artifacts...")
    for pattern in patterns:
        # Windows-compatible remove
        c.run(
            f'python -c "import shutil, pathlib; '
            f"[shutil.rmtree(p) if p.is_dir() else p.unlink() "
            f"for p in pathlib.Path('.').rglob('{pattern}')]\"",
            warn=True,
        )

    print("Cleanup complete!")
