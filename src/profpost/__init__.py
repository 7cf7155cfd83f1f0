"""
Collect pprof profiles from running services and post them to a chat channel.

This module exposes the primary extension points so downstream packages can
import from a single namespace.
"""

from .config import load_config
from .core.errors import (
    CollectionError,
    ConfigurationError,
    PostError,
    ProfpostError,
    PublishError,
    ResolutionError,
    UploadError,
)
from .core.registry import ResolverRegistry
from .core.resolver import TargetResolver
from .core.types import (
    ProfileArtifact,
    ProfileKind,
    RunConfig,
    RunSummary,
    Target,
    TargetGroup,
    UploadRecord,
    UploadResponse,
)
from .resolvers import ClusterTargetResolver, StaticTargetResolver
from .execution import (
    ArtifactCollector,
    ArtifactPublisher,
    HttpProfileCollector,
    MattermostPublisher,
    ProfilingPipeline,
    RunStage,
)

__all__ = [
    "load_config",
    "CollectionError",
    "ConfigurationError",
    "PostError",
    "ProfpostError",
    "PublishError",
    "ResolutionError",
    "UploadError",
    "ResolverRegistry",
    "TargetResolver",
    "ProfileArtifact",
    "ProfileKind",
    "RunConfig",
    "RunSummary",
    "Target",
    "TargetGroup",
    "UploadRecord",
    "UploadResponse",
    "ClusterTargetResolver",
    "StaticTargetResolver",
    "ArtifactCollector",
    "ArtifactPublisher",
    "HttpProfileCollector",
    "MattermostPublisher",
    "ProfilingPipeline",
    "RunStage",
]
