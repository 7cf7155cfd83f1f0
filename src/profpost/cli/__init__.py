"""Command-line interface for profpost (Click-based)."""

from __future__ import annotations

import click

# Import to trigger registry decorators
from profpost import resolvers  # noqa: F401

from ._group import OrderedGroup
from .list import list_cmd
from .run import run


@click.group(cls=OrderedGroup, help="Collect pprof profiles and post them to a chat channel")
def cli() -> None:
    """Top-level CLI group."""


cli.add_command(run, "run")
cli.add_command(list_cmd, "list")


def main() -> None:
    """CLI entry point for console scripts."""
    cli()


__all__ = ["cli", "main"]
