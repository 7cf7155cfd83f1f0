"""Run one profiling pass and post the results."""

from __future__ import annotations

import os

import click

from profpost import resolvers  # noqa: F401
from profpost.core.errors import ProfpostError
from profpost.core.registry import ResolverRegistry
from profpost.execution import ProfilingPipeline

from ._console import success
from ._logging import setup_logging


@click.command(help="Profile every target and post the profiles to the configured channel.")
@click.option(
    "--resolver",
    "resolver_id",
    type=click.Choice(list(ResolverRegistry.keys())),
    default="static",
    show_default=True,
    envvar="PROFPOST_RESOLVER",
    help="How targets are discovered",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def run(resolver_id: str, verbose: bool) -> None:
    setup_logging(verbose)
    pipeline = ProfilingPipeline(resolver_id)
    try:
        summary = pipeline.run(os.environ)
    except ProfpostError as exc:
        raise click.ClickException(str(exc)) from exc

    if not summary.groups:
        success("Nothing to profile")
        return
    success(
        f"Posted {len(summary.artifacts)} profile(s) for {summary.target_count} target(s)"
    )


__all__ = ["run"]
