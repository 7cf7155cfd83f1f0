"""Target resolver implementations.

Resolvers register themselves with ``profpost.core.ResolverRegistry``.
"""

from .cluster import ClusterTargetResolver
from .static import StaticTargetResolver

__all__ = ["ClusterTargetResolver", "StaticTargetResolver"]
