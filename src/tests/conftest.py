from __future__ import annotations

import json
from pathlib import Path
from typing import Callable

import httpx
import pytest


@pytest.fixture
def environ(tmp_path: Path) -> dict[str, str]:
    return {
        "UPLOAD_API_URL": "http://up/api/v4/files",
        "POST_API_URL": "http://post/api/v4/posts",
        "MATTERMOST_PROFILE_TARGETS": "host1",
        "PROFILING_TIME": "30",
        "CHANNEL_ID": "chX",
        "TOKEN": "tY",
        "PROFILING_OUTPUT_DIR": str(tmp_path),
    }


class FakeServers:
    """Serves pprof, upload and post endpoints from one mock transport."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.profile_bytes = {"heap": b"heap-bytes", "profile": b"cpu-bytes"}
        self.failing_paths: set[str] = set()
        self.upload_ids = ["F1"]
        self.upload_status = 200
        self.post_status = 201

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path in self.failing_paths:
            return httpx.Response(500, content=b"boom")
        if path.startswith("/debug/pprof/"):
            kind = path.rsplit("/", 1)[-1]
            return httpx.Response(200, content=self.profile_bytes[kind])
        if request.url.host == "up":
            file_id = self.upload_ids[min(len(self.uploads) - 1, len(self.upload_ids) - 1)]
            body = {"file_infos": [{"id": file_id, "user_id": "u1", "name": "f"}]}
            return httpx.Response(self.upload_status, json=body)
        if request.url.host == "post":
            return httpx.Response(self.post_status, json={"id": "P1"})
        return httpx.Response(404)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))

    def _matching(self, predicate: Callable[[httpx.Request], bool]) -> list[httpx.Request]:
        return [request for request in self.requests if predicate(request)]

    @property
    def profile_fetches(self) -> list[httpx.Request]:
        return self._matching(lambda r: r.url.path.startswith("/debug/pprof/"))

    @property
    def uploads(self) -> list[httpx.Request]:
        return self._matching(lambda r: r.url.host == "up")

    @property
    def posts(self) -> list[httpx.Request]:
        return self._matching(lambda r: r.url.host == "post")

    def post_bodies(self) -> list[dict]:
        return [json.loads(request.content) for request in self.posts]


@pytest.fixture
def servers() -> FakeServers:
    return FakeServers()
