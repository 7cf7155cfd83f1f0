"""Exceptions raised by the profiling pipeline."""

from __future__ import annotations

from typing import Optional


class ProfpostError(RuntimeError):
    """Base class for every failure that aborts a run."""

    stage: Optional[str] = None


class ConfigurationError(ProfpostError):
    """Raised when a required setting is missing or malformed."""


class ResolutionError(ProfpostError):
    """Raised when targets or a configured component cannot be resolved."""


class CollectionError(ProfpostError):
    """Raised when a profile cannot be fetched or written."""


class PublishError(ProfpostError):
    """Raised when artifacts cannot be published."""


class UploadError(PublishError):
    pass


class PostError(PublishError):
    pass


__all__ = [
    "ProfpostError",
    "ConfigurationError",
    "ResolutionError",
    "CollectionError",
    "PublishError",
    "UploadError",
    "PostError",
]
