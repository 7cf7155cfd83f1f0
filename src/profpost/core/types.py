from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, Optional


@dataclass(slots=True, frozen=True)
class Target:
    """A profiling subject reachable at ``address``."""

    name: str
    address: str


@dataclass(slots=True, frozen=True)
class TargetGroup:
    """Targets whose profiles are published together in one message."""

    label: str
    targets: tuple[Target, ...] = ()


class ProfileKind(str, Enum):
    HEAP = "heap"
    CPU = "cpu"

    @property
    def file_suffix(self) -> str:
        return "mem" if self is ProfileKind.HEAP else "cpu"

    @property
    def debug_path(self) -> str:
        return "/debug/pprof/heap" if self is ProfileKind.HEAP else "/debug/pprof/profile"

    def file_name(self, target_name: str) -> str:
        return f"{target_name}_{self.file_suffix}.prof"


@dataclass(slots=True, frozen=True)
class ProfileArtifact:
    """A profile written to local disk for one target."""

    target_name: str
    kind: ProfileKind
    path: Path


@dataclass(slots=True, frozen=True)
class UploadRecord:
    """File metadata returned by the upload API."""

    id: str
    user_id: str = ""
    name: str = ""


@dataclass(slots=True, frozen=True)
class UploadResponse:
    file_infos: tuple[UploadRecord, ...] = ()

    @classmethod
    def from_payload(cls, payload: Any) -> "UploadResponse":
        """Build a response from decoded JSON.

        Raises ``ValueError`` when the payload is not shaped like
        ``{"file_infos": [{"id": ..., "user_id": ..., "name": ...}]}``.
        An empty ``file_infos`` list is accepted here; callers decide
        whether it is usable.
        """
        if not isinstance(payload, Mapping):
            raise ValueError(f"expected a JSON object, got {type(payload).__name__}")
        infos = payload.get("file_infos")
        if not isinstance(infos, list):
            raise ValueError("response is missing the 'file_infos' list")

        records: list[UploadRecord] = []
        for index, info in enumerate(infos):
            if not isinstance(info, Mapping):
                raise ValueError(f"file_infos[{index}] is not an object")
            file_id = info.get("id")
            if not isinstance(file_id, str) or not file_id:
                raise ValueError(f"file_infos[{index}] has no 'id'")
            records.append(
                UploadRecord(
                    id=file_id,
                    user_id=str(info.get("user_id") or ""),
                    name=str(info.get("name") or ""),
                )
            )
        return cls(file_infos=tuple(records))


@dataclass(slots=True, frozen=True)
class RunConfig:
    upload_url: str
    post_url: str
    channel_id: str
    token: str
    profiling_time: str
    request_timeout: float
    debug_port: int
    targets: tuple[str, ...] = ()
    namespace: Optional[str] = None
    developer_mode: str = "false"
    output_dir: Path = field(default_factory=Path)


@dataclass(slots=True)
class RunSummary:
    """What a successful run published."""

    groups: list[TargetGroup] = field(default_factory=list)
    artifacts: list[ProfileArtifact] = field(default_factory=list)
    file_ids: list[tuple[str, list[str]]] = field(default_factory=list)

    @property
    def target_count(self) -> int:
        return sum(len(group.targets) for group in self.groups)
