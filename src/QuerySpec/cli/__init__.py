"""CLI package for QuerySpec command orchestration."""

from __future__ import annotations

__all__ = ["CommandRunner", "main"]

from QuerySpec.cli.runner import CommandRunner
from QuerySpec.cli.ui import cli


def main() -> None:
    """Run QuerySpec CLI.

    Entry point referenced by console script in pyproject.toml.
    """
    cli()
