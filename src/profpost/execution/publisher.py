"""Upload profile artifacts and announce them in a chat channel."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import IO, Callable, Dict, Mapping, Sequence, Tuple, Union

import httpx

from ..core.errors import PostError, UploadError
from ..core.types import ProfileArtifact, UploadResponse

logger = logging.getLogger(__name__)

MESSAGE_TEMPLATE = "### CPU and Memory profiles for {label} ({timestamp} UTC)"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

FormValue = Union[str, IO[bytes]]


def _auth_headers(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def format_message(label: str, now: datetime | None = None) -> str:
    moment = now or datetime.now(timezone.utc)
    return MESSAGE_TEMPLATE.format(label=label, timestamp=moment.strftime(TIMESTAMP_FORMAT))


def upload_file(
    client: httpx.Client,
    url: str,
    token: str,
    values: Mapping[str, FormValue],
) -> str:
    """POST ``values`` as a multipart form and return the first uploaded file id.

    String values are sent as plain form fields, anything else is treated as
    a binary stream and sent as a file part named after the stream.
    """
    data: Dict[str, str] = {}
    files: Dict[str, Tuple[str, IO[bytes]]] = {}
    for key, value in values.items():
        if isinstance(value, str):
            data[key] = value
        else:
            filename = Path(str(getattr(value, "name", key))).name
            files[key] = (filename, value)

    try:
        response = client.post(url, data=data, files=files, headers=_auth_headers(token))
        response.raise_for_status()
    except httpx.HTTPError as exc:
        raise UploadError(f"Upload request to {url} failed: {exc}") from exc

    try:
        parsed = UploadResponse.from_payload(response.json())
    except ValueError as exc:
        raise UploadError(f"Unexpected upload response from {url}: {exc}") from exc

    if not parsed.file_infos:
        raise UploadError(f"Upload response from {url} contained no file infos")
    return parsed.file_infos[0].id


def post_files(
    client: httpx.Client,
    url: str,
    channel_id: str,
    token: str,
    label: str,
    file_ids: Sequence[str],
    *,
    now: datetime | None = None,
) -> None:
    payload = {
        "channel_id": channel_id,
        "message": format_message(label, now),
        "file_ids": list(file_ids),
    }
    headers = {**_auth_headers(token), "Content-Type": "application/json"}
    try:
        response = client.post(url, json=payload, headers=headers)
        response.raise_for_status()
    except httpx.HTTPError as exc:
        raise PostError(f"Posting files to channel {channel_id} failed: {exc}") from exc


class ArtifactPublisher(ABC):
    """Base interface for publishing a group of artifacts."""

    @abstractmethod
    def publish(self, label: str, artifacts: Sequence[ProfileArtifact]) -> list[str]:
        """Publish ``artifacts`` under ``label`` and return the remote file ids."""


class MattermostPublisher(ArtifactPublisher):
    """Uploads artifacts one by one, then posts a single message linking them."""

    def __init__(
        self,
        client: httpx.Client,
        *,
        upload_url: str,
        post_url: str,
        channel_id: str,
        token: str,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._client = client
        self._upload_url = upload_url
        self._post_url = post_url
        self._channel_id = channel_id
        self._token = token
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def publish(self, label: str, artifacts: Sequence[ProfileArtifact]) -> list[str]:
        logger.info("Uploading files in channel - %s", self._channel_id)
        file_ids: list[str] = []
        for artifact in artifacts:
            file_ids.append(self._upload(artifact))

        logger.info("Posting files")
        post_files(
            self._client,
            self._post_url,
            self._channel_id,
            self._token,
            label,
            file_ids,
            now=self._clock(),
        )
        return file_ids

    def _upload(self, artifact: ProfileArtifact) -> str:
        logger.info("Uploading file %s", artifact.path)
        try:
            handle = artifact.path.open("rb")
        except OSError as exc:
            raise UploadError(f"Cannot open {artifact.path} for upload: {exc}") from exc

        with handle:
            try:
                return upload_file(
                    self._client,
                    self._upload_url,
                    self._token,
                    {"files": handle, "channel_id": self._channel_id},
                )
            except UploadError as exc:
                raise UploadError(f"Failed to upload file {artifact.path}: {exc}") from exc


__all__ = [
    "ArtifactPublisher",
    "MattermostPublisher",
    "format_message",
    "post_files",
    "upload_file",
]
