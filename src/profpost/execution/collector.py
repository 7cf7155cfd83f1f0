"""Fetch pprof profiles from each target's debug endpoint."""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Mapping, Optional, Sequence

import httpx

from ..config import DEFAULT_DEBUG_PORT, DEFAULT_REQUEST_TIMEOUT
from ..core.errors import CollectionError
from ..core.types import ProfileArtifact, ProfileKind, Target

logger = logging.getLogger(__name__)


class ArtifactCollector(ABC):
    """Base interface for producing profile artifacts from targets."""

    @abstractmethod
    def collect(self, duration: str, targets: Sequence[Target]) -> list[ProfileArtifact]:
        """Return two artifacts per target, heap first, in target order."""


def _host(address: str) -> str:
    if ":" in address and not address.startswith("["):
        return f"[{address}]"
    return address


class HttpProfileCollector(ArtifactCollector):
    """Sequential collector writing ``{name}_mem.prof`` and ``{name}_cpu.prof``."""

    def __init__(
        self,
        client: httpx.Client,
        *,
        output_dir: Path | str = ".",
        port: int = DEFAULT_DEBUG_PORT,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
    ) -> None:
        self._client = client
        self._output_dir = Path(output_dir)
        self._port = port
        self._timeout = request_timeout

    def profile_url(self, target: Target, kind: ProfileKind) -> str:
        return f"http://{_host(target.address)}:{self._port}{kind.debug_path}"

    def artifact_path(self, target: Target, kind: ProfileKind) -> Path:
        return self._output_dir / kind.file_name(target.name)

    def collect(self, duration: str, targets: Sequence[Target]) -> list[ProfileArtifact]:
        try:
            self._output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise CollectionError(f"Cannot create output directory {self._output_dir}: {exc}") from exc

        artifacts: list[ProfileArtifact] = []
        for target in targets:
            logger.info("Running memory profiling for %s", target.name)
            artifacts.append(
                self._fetch(target, ProfileKind.HEAP, None, httpx.Timeout(self._timeout))
            )

            logger.info("Running cpu profiling for %s", target.name)
            artifacts.append(
                self._fetch(
                    target,
                    ProfileKind.CPU,
                    {"seconds": duration},
                    self._cpu_timeout(duration),
                )
            )
        return artifacts

    def _cpu_timeout(self, duration: str) -> httpx.Timeout:
        # The endpoint holds the response until sampling is done.
        try:
            seconds = float(duration)
        except ValueError:
            seconds = 0.0
        if not math.isfinite(seconds) or seconds < 0:
            seconds = 0.0
        return httpx.Timeout(self._timeout, read=self._timeout + seconds)

    def _fetch(
        self,
        target: Target,
        kind: ProfileKind,
        params: Optional[Mapping[str, str]],
        timeout: httpx.Timeout,
    ) -> ProfileArtifact:
        url = self.profile_url(target, kind)
        path = self.artifact_path(target, kind)
        try:
            with self._client.stream("GET", url, params=params, timeout=timeout) as response:
                response.raise_for_status()
                with path.open("wb") as handle:
                    for chunk in response.iter_bytes():
                        handle.write(chunk)
        except httpx.HTTPError as exc:
            raise CollectionError(
                f"Failed to fetch {kind.value} profile for {target.name} from {url}: {exc}"
            ) from exc
        except OSError as exc:
            raise CollectionError(f"Failed to write {path} for {target.name}: {exc}") from exc

        logger.debug("Wrote %s", path)
        return ProfileArtifact(target_name=target.name, kind=kind, path=path)


__all__ = ["ArtifactCollector", "HttpProfileCollector"]
