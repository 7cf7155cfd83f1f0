"""List registered components."""

from __future__ import annotations

import click

from profpost.core.registry import ResolverRegistry

from ._console import error, info


@click.group(help="List available components")
def list_cmd() -> None:
    """List available components in the registry."""


@list_cmd.command("resolvers", help="List available target resolvers")
def list_resolvers() -> None:
    items = ResolverRegistry.items()

    if not items:
        error("No resolvers registered")
        return

    info("Resolvers:")
    for resolver_id, resolver_cls in items:
        info(f"  {resolver_id:12} {getattr(resolver_cls, 'resolver_name', '')}")


__all__ = ["list_cmd"]
