"""Build a ``RunConfig`` from an environment mapping."""

from __future__ import annotations

import math
from pathlib import Path
from typing import Mapping

from .core.errors import ConfigurationError
from .core.types import RunConfig

VARIANTS = ("static", "cluster")

DEFAULT_REQUEST_TIMEOUT = 30.0
DEFAULT_DEBUG_PORT = 8067
MAX_PORT = 65535

_TARGETS_VARIABLE = {
    "static": "MATTERMOST_PROFILE_TARGETS",
    "cluster": "MATTERMOST_DEPLOYMENTS",
}


def _required(environ: Mapping[str, str], name: str) -> str:
    value = environ.get(name, "")
    if not value:
        raise ConfigurationError(f"{name} environment variable is not set")
    return value


def _split_list(raw: str) -> tuple[str, ...]:
    if not raw:
        return ()
    return tuple(raw.split(","))


def _parse_number(environ: Mapping[str, str], name: str, default, cast, maximum=None):
    raw = environ.get(name, "")
    if not raw:
        return default
    try:
        value = cast(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from exc
    if not math.isfinite(value) or value <= 0:
        raise ConfigurationError(f"{name} must be a positive finite number, got {raw!r}")
    if maximum is not None and value > maximum:
        raise ConfigurationError(f"{name} must be at most {maximum}, got {raw!r}")
    return value


def load_config(environ: Mapping[str, str], *, variant: str = "static") -> RunConfig:
    """Validate ``environ`` and return the settings for one run.

    Required variables are checked in a fixed order and the first missing
    one is reported. The namespace is only required for the cluster variant.
    """
    if variant not in VARIANTS:
        raise ConfigurationError(
            f"Unknown target variant '{variant}', expected one of {', '.join(VARIANTS)}"
        )

    upload_url = _required(environ, "UPLOAD_API_URL")
    post_url = _required(environ, "POST_API_URL")
    targets = _split_list(environ.get(_TARGETS_VARIABLE[variant], ""))
    namespace = _required(environ, "MATTERMOST_NAMESPACE") if variant == "cluster" else None
    profiling_time = _required(environ, "PROFILING_TIME")
    channel_id = _required(environ, "CHANNEL_ID")
    token = _required(environ, "TOKEN")
    developer_mode = environ.get("DEVELOPER_MODE") or "false"

    request_timeout = _parse_number(
        environ, "PROFILING_HTTP_TIMEOUT", DEFAULT_REQUEST_TIMEOUT, float
    )
    debug_port = _parse_number(
        environ, "PROFILING_DEBUG_PORT", DEFAULT_DEBUG_PORT, int, maximum=MAX_PORT
    )
    output_dir = Path(environ.get("PROFILING_OUTPUT_DIR") or ".")

    return RunConfig(
        upload_url=upload_url,
        post_url=post_url,
        channel_id=channel_id,
        token=token,
        profiling_time=profiling_time,
        targets=targets,
        namespace=namespace,
        developer_mode=developer_mode,
        request_timeout=request_timeout,
        debug_port=debug_port,
        output_dir=output_dir,
    )


__all__ = ["DEFAULT_DEBUG_PORT", "DEFAULT_REQUEST_TIMEOUT", "VARIANTS", "load_config"]
