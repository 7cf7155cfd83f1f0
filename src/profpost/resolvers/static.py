from __future__ import annotations

from typing import Sequence

from ..core.registry import ResolverRegistry
from ..core.resolver import TargetResolver
from ..core.types import Target, TargetGroup


@ResolverRegistry.register("static")
class StaticTargetResolver(TargetResolver):
    """Targets taken verbatim from the configured host list."""

    resolver_id = "static"
    resolver_name = "Static host list"

    def resolve_groups(self) -> Sequence[TargetGroup]:
        names = self._config.targets
        if not names:
            return []
        targets = tuple(Target(name=name, address=name) for name in names)
        return [TargetGroup(label=",".join(names), targets=targets)]


__all__ = ["StaticTargetResolver"]
