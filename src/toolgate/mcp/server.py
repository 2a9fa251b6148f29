"""MCP server exposing a tool registry over stdio."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool
from mcp.types import ToolAnnotations as McpToolAnnotations

from toolgate.core.errors import RejectedCallError
from toolgate.mcp.render import render_response

if TYPE_CHECKING:
    from collections.abc import Callable

    from toolgate.context import ExecutionContext
    from toolgate.tools.base import ToolSummary
    from toolgate.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)


def _to_mcp_tool(summary: ToolSummary) -> Tool:
    """Convert a tool summary into the MCP wire type."""
    return Tool(
        name=summary.name,
        description=summary.description,
        inputSchema=summary.input_schema,
        annotations=McpToolAnnotations(readOnlyHint=summary.read_only_hint),
    )


class ToolServer:
    """Bridges MCP requests onto a :class:`ToolRegistry`.

    ``capabilities`` is called on every request, so flags switched at
    runtime take effect without re-registering tools.
    """

    def __init__(
        self,
        registry: ToolRegistry,
        context: ExecutionContext,
        capabilities: Callable[[], frozenset[str]],
    ) -> None:
        self._registry = registry
        self._context = context
        self._capabilities = capabilities

    async def list_tools(self) -> list[Tool]:
        """List tools available under the current capabilities."""
        listing = self._registry.list_available(self._capabilities())
        return [_to_mcp_tool(summary) for summary in listing]

    async def call_tool(
        self, name: str, arguments: dict[str, Any] | None
    ) -> list[TextContent]:
        """Invoke a tool and render its response.

        Raises:
            RejectedCallError: If the registry rejected the call or the
                handler failed.  The MCP server reports it to the host
                as an ``isError`` result carrying the rendered text.
        """
        response = await self._registry.invoke(
            name, arguments, self._capabilities(), self._context
        )
        text = render_response(response, self._context)
        if response.error is not None:
            raise RejectedCallError(text, response.error)
        return [TextContent(type="text", text=text)]


def build_server(tool_server: ToolServer, name: str = "toolgate") -> Server:
    """Create an MCP :class:`Server` wired to *tool_server*."""
    server: Server = Server(name)

    @server.list_tools()  # type: ignore[no-untyped-call, untyped-decorator]
    async def list_tools() -> list[Tool]:
        return await tool_server.list_tools()

    # Parameters are checked by the registry's own validator.
    @server.call_tool(validate_input=False)  # type: ignore[untyped-decorator]
    async def call_tool(name: str, arguments: dict) -> list[TextContent]:  # type: ignore[type-arg]
        return await tool_server.call_tool(name, arguments)

    return server


async def run_server(tool_server: ToolServer, name: str = "toolgate") -> None:
    """Start the MCP server on stdio."""
    server = build_server(tool_server, name)
    logger.info("Starting MCP server %s", name)
    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )
