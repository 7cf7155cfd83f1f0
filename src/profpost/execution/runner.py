"""Pipeline orchestration: configure, resolve, collect, publish."""

from __future__ import annotations

import logging
from datetime import datetime
from enum import Enum
from typing import Callable, Mapping, Optional

import httpx

from ..config import load_config
from ..core.errors import ProfpostError, PublishError
from ..core.resolver import TargetResolver
from ..core.types import RunConfig, RunSummary
from .collector import ArtifactCollector, HttpProfileCollector
from .publisher import ArtifactPublisher, MattermostPublisher
from .resolution import resolve_resolver

logger = logging.getLogger(__name__)


class RunStage(str, Enum):
    CONFIGURING = "configuring"
    RESOLVING = "resolving"
    COLLECTING = "collecting"
    PUBLISHING = "publishing"
    DONE = "done"
    FAILED = "failed"


class ProfilingPipeline:
    """Run the profiling pipeline once, stopping at the first error.

    Collaborators that are not injected are built from the loaded
    configuration; an HTTP client created here is closed when the run ends.
    """

    def __init__(
        self,
        resolver_id: str = "static",
        *,
        http_client: Optional[httpx.Client] = None,
        resolver: Optional[TargetResolver] = None,
        collector: Optional[ArtifactCollector] = None,
        publisher: Optional[ArtifactPublisher] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._resolver_id = resolver_id
        self._http_client = http_client
        self._resolver = resolver
        self._collector = collector
        self._publisher = publisher
        self._clock = clock
        self.stage = RunStage.CONFIGURING

    def run(self, environ: Mapping[str, str]) -> RunSummary:
        owned_client: Optional[httpx.Client] = None
        self.stage = RunStage.CONFIGURING
        try:
            config = load_config(environ, variant=self._resolver_id)

            self.stage = RunStage.RESOLVING
            resolver = self._resolver or resolve_resolver(self._resolver_id, config)
            groups = list(resolver.resolve_groups())
            if not groups:
                logger.warning("No targets configured, nothing to profile")

            client = self._http_client
            if client is None and (self._collector is None or self._publisher is None):
                client = owned_client = httpx.Client(timeout=httpx.Timeout(config.request_timeout))
            collector = self._collector or self._build_collector(client, config)
            publisher = self._publisher or self._build_publisher(client, config)

            summary = RunSummary()
            for group in groups:
                if not group.targets:
                    logger.warning("No targets found for %s, skipping", group.label)
                    continue
                logger.info("Running profiling for %s", group.label)

                self.stage = RunStage.COLLECTING
                artifacts = collector.collect(config.profiling_time, group.targets)

                self.stage = RunStage.PUBLISHING
                file_ids = publisher.publish(group.label, artifacts)
                expected = 2 * len(group.targets)
                if len(file_ids) != expected:
                    raise PublishError(
                        f"Expected {expected} uploaded files for {group.label}, got {len(file_ids)}"
                    )

                summary.groups.append(group)
                summary.artifacts.extend(artifacts)
                summary.file_ids.append((group.label, file_ids))

            self.stage = RunStage.DONE
            return summary
        except ProfpostError as exc:
            failed = self.stage
            exc.stage = failed.value
            self.stage = RunStage.FAILED
            logger.error("%s stage failed: %s", failed.value.capitalize(), exc, exc_info=True)
            raise
        finally:
            if owned_client is not None:
                owned_client.close()

    def _build_collector(self, client: httpx.Client, config: RunConfig) -> ArtifactCollector:
        return HttpProfileCollector(
            client,
            output_dir=config.output_dir,
            port=config.debug_port,
            request_timeout=config.request_timeout,
        )

    def _build_publisher(self, client: httpx.Client, config: RunConfig) -> ArtifactPublisher:
        return MattermostPublisher(
            client,
            upload_url=config.upload_url,
            post_url=config.post_url,
            channel_id=config.channel_id,
            token=config.token,
            clock=self._clock,
        )


__all__ = ["ProfilingPipeline", "RunStage"]
