"""Execution pipeline components for profpost runs."""

from .collector import ArtifactCollector, HttpProfileCollector
from .publisher import ArtifactPublisher, MattermostPublisher, post_files, upload_file
from .resolution import resolve_resolver
from .runner import ProfilingPipeline, RunStage

__all__ = [
    "ArtifactCollector",
    "HttpProfileCollector",
    "ArtifactPublisher",
    "MattermostPublisher",
    "post_files",
    "upload_file",
    "resolve_resolver",
    "ProfilingPipeline",
    "RunStage",
]
