"""
Core abstractions and shared types for profpost.
"""

from .errors import (
    CollectionError,
    ConfigurationError,
    PostError,
    ProfpostError,
    PublishError,
    ResolutionError,
    UploadError,
)
from .registry import RegistryBase, ResolverRegistry
from .resolver import TargetResolver
from .types import (
    ProfileArtifact,
    ProfileKind,
    RunConfig,
    RunSummary,
    Target,
    TargetGroup,
    UploadRecord,
    UploadResponse,
)

__all__ = [
    "CollectionError",
    "ConfigurationError",
    "PostError",
    "ProfpostError",
    "PublishError",
    "ResolutionError",
    "UploadError",
    "RegistryBase",
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
]
