"""Click group that lists commands in the order they were added."""

from __future__ import annotations

import click


class OrderedGroup(click.Group):
    """Keep ``run`` ahead of ``list`` in help output."""

    def list_commands(self, ctx):  # type: ignore[override]
        return list(self.commands.keys())


__all__ = ["OrderedGroup"]
