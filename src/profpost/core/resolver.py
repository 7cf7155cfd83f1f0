from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from .types import RunConfig, Target, TargetGroup


class TargetResolver(ABC):
    """Base interface for discovering the targets of a run."""

    resolver_id: str
    resolver_name: str

    def __init__(self, config: RunConfig) -> None:
        self._config = config

    @abstractmethod
    def resolve_groups(self) -> Sequence[TargetGroup]:
        """Return every target group, fully resolved, in publication order."""

    def resolve(self) -> list[Target]:
        return [target for group in self.resolve_groups() for target in group.targets]


__all__ = ["TargetResolver"]
