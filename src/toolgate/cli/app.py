"""Main CLI application.

Click commands for toolgate: tools, schema, mcp.
"""

from __future__ import annotations

import asyncio
import importlib
import json as json_mod
import logging
import sys
from typing import TYPE_CHECKING

import click

from toolgate import __version__
from toolgate.config.loader import load_config
from toolgate.core.errors import ConfigError, NotFoundError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from toolgate.config.schema import ToolgateConfig
    from toolgate.context import ExecutionContext
    from toolgate.tools.registry import ToolRegistry


# ── Helpers ──────────────────────────────────────────────────────


def _error(msg: str) -> None:
    """Print an error message to stderr and exit."""
    click.echo(f"Error: {msg}", err=True)
    sys.exit(1)


def _load_config(config_path: str | None) -> ToolgateConfig:
    """Load config with user-friendly error handling."""
    try:
        return load_config(path=config_path)
    except ConfigError as e:
        _error(str(e))
        raise  # unreachable, keeps mypy happy


def _configure_logging(config: ToolgateConfig) -> None:
    """Configure the root logger from the ``[logging]`` section.

    Logs go to stderr (or the configured file) so stdout stays free for
    command output and the MCP stdio transport.
    """
    level = getattr(logging, config.logging.level.upper(), logging.INFO)
    handler: logging.Handler
    if config.logging.file:
        handler = logging.FileHandler(config.logging.file)
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    )
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level)


def _setup_registry() -> ToolRegistry:
    """Create a registry holding every built-in tool."""
    from toolgate.tools.extensions import register_extension_tools
    from toolgate.tools.registry import ToolRegistry

    registry = ToolRegistry()
    register_extension_tools(registry)
    return registry


def _capabilities(config: ToolgateConfig, extra: Iterable[str]) -> frozenset[str]:
    return config.capabilities.active() | frozenset(extra)


def _load_context(ref: str) -> ExecutionContext:
    """Load an execution context from a ``module:attribute`` reference.

    A callable attribute is treated as a factory and called without
    arguments.
    """
    from toolgate.context import ExecutionContext

    module_name, _, attr = ref.partition(":")
    if not module_name or not attr:
        msg = f"Context reference must look like 'module:attribute', got {ref!r}"
        raise click.BadParameter(msg)
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        msg = f"Cannot import {module_name}: {e}"
        raise click.BadParameter(msg) from e
    try:
        obj = getattr(module, attr)
    except AttributeError as e:
        msg = f"{module_name} has no attribute {attr!r}"
        raise click.BadParameter(msg) from e

    if isinstance(obj, type) or (
        callable(obj) and not isinstance(obj, ExecutionContext)
    ):
        context = obj()
    else:
        context = obj
    if isinstance(context, type) or not isinstance(context, ExecutionContext):
        msg = f"{ref} does not provide an execution context"
        raise click.BadParameter(msg)
    return context


_capability_option = click.option(
    "--capability",
    "capabilities",
    multiple=True,
    help="Extra capability flag to treat as active (repeatable).",
)


# ── CLI group ────────────────────────────────────────────────────


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="toolgate")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True),
    default=None,
    help="Path to config file.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: str | None) -> None:
    """toolgate - condition-gated tool dispatch for browser automation.

    Declares browser tools, validates their parameters, and serves
    them to an MCP host.
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# ── tools ────────────────────────────────────────────────────────


@cli.command()
@_capability_option
@click.option("--group", is_flag=True, default=False, help="Group by category.")
@click.option(
    "--format",
    "output_fmt",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format.",
)
@click.pass_context
def tools(
    ctx: click.Context,
    capabilities: tuple[str, ...],
    group: bool,
    output_fmt: str,
) -> None:
    """List the tools available under the active capabilities."""
    config = _load_config(ctx.obj["config_path"])
    _configure_logging(config)
    registry = _setup_registry()
    listing = registry.list_available(
        _capabilities(config, capabilities), group_by_category=group
    )

    if output_fmt == "json":
        payload = [
            {
                "name": s.name,
                "description": s.description,
                "category": s.category.value,
                "read_only": s.read_only_hint,
                "input_schema": s.input_schema,
            }
            for s in listing
        ]
        click.echo(json_mod.dumps(payload, indent=2))
        return

    from toolgate.cli.display import ToolDisplay

    ToolDisplay().show_tools(listing)


# ── schema ───────────────────────────────────────────────────────


@cli.command()
@click.argument("name")
@_capability_option
@click.pass_context
def schema(ctx: click.Context, name: str, capabilities: tuple[str, ...]) -> None:
    """Show the parameter schema of one tool."""
    config = _load_config(ctx.obj["config_path"])
    _configure_logging(config)
    registry = _setup_registry()
    try:
        tool = registry.resolve(name, _capabilities(config, capabilities))
    except NotFoundError as e:
        _error(str(e))
        return

    from toolgate.cli.display import ToolDisplay

    ToolDisplay().show_schema(tool.summary())


# ── mcp ─────────────────────────────────────────────────────────


@cli.command()
@click.option(
    "--context",
    "context_ref",
    required=True,
    help="Execution context as 'module:attribute' (instance or factory).",
)
@click.pass_context
def mcp(ctx: click.Context, context_ref: str) -> None:
    """Start the MCP server for AI agent integration."""
    from toolgate.mcp.server import ToolServer, run_server

    config = _load_config(ctx.obj["config_path"])
    _configure_logging(config)
    context = _load_context(context_ref)
    # Conditions are evaluated per request against the config loaded here.
    tool_server = ToolServer(
        _setup_registry(), context, config.capabilities.active
    )
    asyncio.run(run_server(tool_server, config.server.name))
