"""Helpers to resolve registered components from identifiers."""

from __future__ import annotations

from typing import Any

from .. import resolvers  # noqa: F401  (registers the bundled resolvers)
from ..core.errors import ResolutionError
from ..core.registry import ResolverRegistry
from ..core.resolver import TargetResolver
from ..core.types import RunConfig


def resolve_resolver(resolver_id: str, config: RunConfig, **params: Any) -> TargetResolver:
    """Instantiate the resolver registered as ``resolver_id`` for ``config``."""
    if resolver_id not in ResolverRegistry.keys():
        raise ResolutionError(
            f"Unknown resolver '{resolver_id}', expected one of "
            f"{', '.join(ResolverRegistry.keys())}"
        )

    try:
        return ResolverRegistry.create(resolver_id, config, **params)
    except TypeError as exc:
        raise ResolutionError(
            f"Failed to instantiate resolver '{resolver_id}' with params {params!r}: {exc}"
        ) from exc


__all__ = ["resolve_resolver"]
