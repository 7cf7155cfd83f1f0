from __future__ import annotations

from pathlib import Path

import httpx
import pytest

from profpost.config import load_config
from profpost.core.errors import ConfigurationError
from profpost.core.types import ProfileKind, Target
from profpost.execution.collector import HttpProfileCollector

REQUIRED_ORDER = ["UPLOAD_API_URL", "POST_API_URL", "PROFILING_TIME", "CHANNEL_ID", "TOKEN"]


def test_loads_static_configuration(environ: dict[str, str], tmp_path: Path) -> None:
    environ["MATTERMOST_PROFILE_TARGETS"] = "a,b"
    config = load_config(environ)

    assert config.upload_url == "http://up/api/v4/files"
    assert config.post_url == "http://post/api/v4/posts"
    assert config.targets == ("a", "b")
    assert config.profiling_time == "30"
    assert config.channel_id == "chX"
    assert config.token == "tY"
    assert config.namespace is None
    assert config.output_dir == tmp_path


def test_optional_values_use_defaults(environ: dict[str, str]) -> None:
    for name in ("MATTERMOST_PROFILE_TARGETS", "PROFILING_OUTPUT_DIR"):
        environ.pop(name)
    config = load_config(environ)

    assert config.targets == ()
    assert config.developer_mode == "false"
    assert config.request_timeout == 30.0
    assert config.debug_port == 8067
    assert config.output_dir == Path(".")


@pytest.mark.parametrize("name", REQUIRED_ORDER)
def test_missing_required_value_is_reported(environ: dict[str, str], name: str) -> None:
    environ[name] = ""
    with pytest.raises(ConfigurationError, match=f"^{name} environment variable is not set"):
        load_config(environ)


def test_first_missing_value_wins() -> None:
    with pytest.raises(ConfigurationError, match="UPLOAD_API_URL"):
        load_config({"CHANNEL_ID": "c", "TOKEN": "t"})

    with pytest.raises(ConfigurationError, match="PROFILING_TIME"):
        load_config({"UPLOAD_API_URL": "u", "POST_API_URL": "p"})


def test_duration_is_not_validated(environ: dict[str, str]) -> None:
    environ["PROFILING_TIME"] = "soon"
    assert load_config(environ).profiling_time == "soon"


class TestClusterVariant:
    def test_namespace_required_before_profiling_time(self, environ: dict[str, str]) -> None:
        environ.pop("PROFILING_TIME")
        with pytest.raises(ConfigurationError, match="MATTERMOST_NAMESPACE"):
            load_config(environ, variant="cluster")

    def test_reads_deployments_and_developer_mode(self, environ: dict[str, str]) -> None:
        environ.update(
            MATTERMOST_NAMESPACE="mm",
            MATTERMOST_DEPLOYMENTS="app,jobs",
            DEVELOPER_MODE="true",
        )
        config = load_config(environ, variant="cluster")

        assert config.namespace == "mm"
        assert config.targets == ("app", "jobs")
        assert config.developer_mode == "true"

    def test_static_target_list_is_ignored(self, environ: dict[str, str]) -> None:
        environ["MATTERMOST_NAMESPACE"] = "mm"
        assert load_config(environ, variant="cluster").targets == ()


def test_unknown_variant_is_rejected(environ: dict[str, str]) -> None:
    with pytest.raises(ConfigurationError, match="Unknown target variant"):
        load_config(environ, variant="dns")


@pytest.mark.parametrize(
    "name, raw",
    [
        ("PROFILING_HTTP_TIMEOUT", "fast"),
        ("PROFILING_HTTP_TIMEOUT", "-1"),
        ("PROFILING_DEBUG_PORT", "80.5"),
        ("PROFILING_HTTP_TIMEOUT", "nan"),
        ("PROFILING_HTTP_TIMEOUT", "inf"),
        ("PROFILING_DEBUG_PORT", "0"),
        ("PROFILING_DEBUG_PORT", "70000"),
    ],
)
def test_rejects_malformed_numeric_settings(environ: dict[str, str], name: str, raw: str) -> None:
    environ[name] = raw
    with pytest.raises(ConfigurationError, match=name):
        load_config(environ)


def test_numeric_settings_are_parsed(environ: dict[str, str]) -> None:
    environ.update(PROFILING_HTTP_TIMEOUT="2.5", PROFILING_DEBUG_PORT="6060")
    config = load_config(environ)
    assert config.request_timeout == 2.5
    assert config.debug_port == 6060


def test_highest_port_is_accepted(environ: dict[str, str]) -> None:
    environ["PROFILING_DEBUG_PORT"] = "65535"
    assert load_config(environ).debug_port == 65535


def test_default_port_matches_collector_default(environ: dict[str, str], tmp_path: Path) -> None:
    config = load_config(environ)
    with httpx.Client() as client:
        collector = HttpProfileCollector(client, output_dir=tmp_path)

    assert collector.profile_url(Target("h", "h"), ProfileKind.HEAP) == (
        f"http://h:{config.debug_port}/debug/pprof/heap"
    )
