"""CLI package for pipe-upgrade command orchestration."""

from __future__ import annotations

__all__ = ["CommandRunner", "cli", "main"]

from PipeUpgrade.cli.runner import CommandRunner
from PipeUpgrade.cli.ui import cli


def main() -> None:
    """Run the pipe-upgrade CLI.

    Entry point referenced by console script in pyproject.toml.
    """
    cli()
