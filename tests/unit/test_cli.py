"""Tests for the CLI commands."""

from __future__ import annotations

import asyncio
import json
import logging
from unittest.mock import AsyncMock, patch

import click
import pytest
from click.testing import CliRunner

from toolgate import __version__
from toolgate.cli.app import _configure_logging, _load_context, _setup_registry, cli
from toolgate.config.schema import ToolgateConfig
from toolgate.tools.extensions import EXTENSIONS_CONDITION


@pytest.fixture
def runner(tmp_path, monkeypatch) -> CliRunner:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv("TOOLGATE_CONFIG", raising=False)
    monkeypatch.delenv("TOOLGATE_EXPERIMENTAL_EXTENSIONS", raising=False)
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    return CliRunner()


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestGroup:
    def test_help_without_command(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, [])
        assert result.exit_code == 0
        assert "tools" in result.output

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--version"])
        assert __version__ in result.output


class TestToolsCommand:
    def test_nothing_without_capability(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["tools"])
        assert result.exit_code == 0
        assert "No tools available." in result.output

    def test_json_with_capability_flag(self, runner: CliRunner) -> None:
        result = runner.invoke(
            cli, ["tools", "--capability", EXTENSIONS_CONDITION, "--format", "json"]
        )
        assert result.exit_code == 0, result.output
        payload = json.loads(result.output)
        assert [t["name"] for t in payload][0] == "install_extension"
        assert len(payload) == 5
        assert payload[2]["read_only"] is True

    def test_grouped_json(self, runner: CliRunner) -> None:
        result = runner.invoke(
            cli,
            ["tools", "--capability", EXTENSIONS_CONDITION, "--group", "--format", "json"],
        )
        payload = json.loads(result.output)
        assert payload[0]["name"] == "open_extension_sidepanel"
        assert payload[0]["category"] == "debugging"

    def test_capability_from_config(self, runner: CliRunner, tmp_path) -> None:
        config = tmp_path / "cfg.toml"
        config.write_text("[capabilities]\nexperimental_extension_support = true\n")
        result = runner.invoke(
            cli, ["--config", str(config), "tools", "--format", "json"]
        )
        assert len(json.loads(result.output)) == 5

    def test_table_output(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["tools", "--capability", EXTENSIONS_CONDITION])
        assert result.exit_code == 0
        assert "Available tools" in result.output


class TestSchemaCommand:
    def test_shows_schema(self, runner: CliRunner) -> None:
        result = runner.invoke(
            cli, ["schema", "install_extension", "--capability", EXTENSIONS_CONDITION]
        )
        assert result.exit_code == 0, result.output
        assert "install_extension" in result.output
        assert "path" in result.output

    def test_gated_tool_not_found(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["schema", "install_extension"])
        assert result.exit_code == 1
        assert "Tool not found: install_extension" in result.output


class TestMcpCommand:
    def test_starts_server(self, runner: CliRunner) -> None:
        with patch("toolgate.mcp.server.run_server", new_callable=AsyncMock) as run:
            result = runner.invoke(
                cli, ["mcp", "--context", "tests.fixtures.context:FakeContext"]
            )
        assert result.exit_code == 0, result.output
        tool_server, name = run.await_args.args
        assert name == "toolgate"

    def test_server_capabilities_follow_config(
        self, runner: CliRunner, tmp_path
    ) -> None:
        config = tmp_path / "cfg.toml"
        config.write_text("[capabilities]\nexperimental_extension_support = true\n")
        with patch("toolgate.mcp.server.run_server", new_callable=AsyncMock) as run:
            result = runner.invoke(
                cli,
                [
                    "--config",
                    str(config),
                    "mcp",
                    "--context",
                    "tests.fixtures.context:FakeContext",
                ],
            )
        assert result.exit_code == 0, result.output
        tool_server, _ = run.await_args.args
        tools = asyncio.run(tool_server.list_tools())
        assert len(tools) == 5

    def test_bad_context_reference(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["mcp", "--context", "no_colon"])
        assert result.exit_code != 0
        assert "module:attribute" in result.output


class TestHelpers:
    def test_setup_registry(self) -> None:
        registry = _setup_registry()
        assert "install_extension" in registry
        assert len(registry) == 5

    def test_load_context_instantiates_class(self) -> None:
        from tests.fixtures.context import FakeContext

        context = _load_context("tests.fixtures.context:FakeContext")
        assert isinstance(context, FakeContext)

    def test_load_context_missing_module(self) -> None:
        with pytest.raises(click.BadParameter, match="Cannot import"):
            _load_context("no.such.module:thing")

    def test_load_context_missing_attribute(self) -> None:
        with pytest.raises(click.BadParameter, match="no attribute"):
            _load_context("tests.fixtures.context:Nope")

    def test_load_context_not_a_context(self) -> None:
        with pytest.raises(click.BadParameter, match="does not provide"):
            _load_context("json:__name__")

    def test_configure_logging_level(self) -> None:
        config = ToolgateConfig.model_validate({"logging": {"level": "debug"}})
        _configure_logging(config)
        assert logging.getLogger().level == logging.DEBUG

    def test_configure_logging_file(self, tmp_path) -> None:
        log_file = tmp_path / "toolgate.log"
        config = ToolgateConfig.model_validate({"logging": {"file": str(log_file)}})
        _configure_logging(config)
        logging.getLogger("toolgate.test").warning("hello")
        for handler in logging.getLogger().handlers:
            handler.flush()
            handler.close()
        assert "hello" in log_file.read_text()
