from __future__ import annotations

import importlib
import logging

import pytest
from click.testing import CliRunner

from profpost.cli import cli
from profpost.core.registry import ResolverRegistry
from profpost.core.types import RunSummary, Target, TargetGroup

run_module = importlib.import_module("profpost.cli.run")

REQUIRED = ["UPLOAD_API_URL", "POST_API_URL", "PROFILING_TIME", "CHANNEL_ID", "TOKEN"]


@pytest.fixture(autouse=True)
def _reset_profpost_logger():
    yield
    logger = logging.getLogger("profpost")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


def test_lists_resolvers() -> None:
    result = CliRunner().invoke(cli, ["list", "resolvers"])

    assert result.exit_code == 0
    assert "static" in result.output
    assert "cluster" in result.output


def test_run_reports_missing_configuration(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in REQUIRED:
        monkeypatch.delenv(name, raising=False)

    result = CliRunner().invoke(cli, ["run"])

    assert result.exit_code == 1
    assert "UPLOAD_API_URL environment variable is not set" in result.output


def test_run_uses_selected_resolver(monkeypatch: pytest.MonkeyPatch) -> None:
    created: list[str] = []

    class FakePipeline:
        def __init__(self, resolver_id: str) -> None:
            created.append(resolver_id)

        def run(self, environ) -> RunSummary:
            summary = RunSummary()
            summary.groups.append(TargetGroup("app", (Target("app-1", "10.0.0.1"),)))
            return summary

    monkeypatch.setattr(run_module, "ProfilingPipeline", FakePipeline)
    result = CliRunner().invoke(cli, ["run"], env={"PROFPOST_RESOLVER": "cluster"})

    assert result.exit_code == 0, result.output
    assert created == ["cluster"]
    assert "1 target(s)" in result.output


def test_run_rejects_unknown_resolver() -> None:
    result = CliRunner().invoke(cli, ["run", "--resolver", "dns"])
    assert result.exit_code == 2


def test_commands_are_listed_in_definition_order() -> None:
    result = CliRunner().invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert result.output.index("  run ") < result.output.index("  list ")
    assert cli.list_commands(None) == ["run", "list"]


def test_resolver_choices_come_from_the_registry() -> None:
    option = next(param for param in cli.commands["run"].params if param.name == "resolver_id")

    assert list(option.type.choices) == list(ResolverRegistry.keys())
