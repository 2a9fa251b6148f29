"""Browser extension tools.

Install, uninstall, list and reload unpacked extensions, and open an
extension's side panel for debugging.  All of them sit behind the
``experimentalExtensionSupport`` capability.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from toolgate.tools import schema as p
from toolgate.tools.base import ToolCategory, define_tool

if TYPE_CHECKING:
    from collections.abc import Mapping

    from toolgate.context import ExecutionContext
    from toolgate.tools.registry import ToolRegistry
    from toolgate.tools.response import ResponseBuilder

EXTENSIONS_CONDITION = "experimentalExtensionSupport"


async def _install(
    params: Mapping[str, Any], response: ResponseBuilder, context: ExecutionContext
) -> None:
    extension_id = await context.install_extension(params["path"])
    response.append_response_line(f"Extension installed. Id: {extension_id}")


async def _uninstall(
    params: Mapping[str, Any], response: ResponseBuilder, context: ExecutionContext
) -> None:
    extension_id = params["id"]
    await context.uninstall_extension(extension_id)
    response.append_response_line(f"Extension uninstalled. Id: {extension_id}")


def _list(
    params: Mapping[str, Any], response: ResponseBuilder, context: ExecutionContext
) -> None:
    response.set_list_extensions()


async def _reload(
    params: Mapping[str, Any], response: ResponseBuilder, context: ExecutionContext
) -> None:
    extension_id = params["id"]
    extension = context.get_extension(extension_id)
    if extension is None:
        msg = f"Extension with ID {extension_id} not found."
        raise LookupError(msg)
    await context.install_extension(extension.path)
    response.append_response_line("Extension reloaded.")


async def _open_sidepanel(
    params: Mapping[str, Any], response: ResponseBuilder, context: ExecutionContext
) -> None:
    # Failures are rendered here rather than left to the dispatcher,
    # so the caller gets troubleshooting steps alongside the error.
    try:
        result = await context.open_extension_sidepanel(params["extensionId"])
    except Exception as exc:
        for line in (
            "# Failed to Open Sidepanel",
            "",
            f"**Error:** {exc}",
            "",
            "**Troubleshooting:**",
            "- Ensure the extension is installed and enabled",
            "- Verify the extension has a `side_panel.default_path` in its manifest.json",
            "- Check that the extension has a service worker running",
            "- Use `list_pages` to see available service workers",
        ):
            response.append_response_line(line)
        return

    for line in (
        "# Sidepanel Opened Successfully",
        "",
        f"**URL:** {result.url}",
        f"**Window ID:** {result.window_id}",
        "",
        f"> {result.note}",
        "",
        "Use `list_pages` to see the sidepanel and `select_page` to interact with it.",
    ):
        response.append_response_line(line)
    response.set_include_pages(True)


install_extension = define_tool(
    name="install_extension",
    description="Installs a Chrome extension from the given path.",
    category=ToolCategory.EXTENSIONS,
    read_only_hint=False,
    conditions=[EXTENSIONS_CONDITION],
    schema={
        "path": p.string("Absolute path to the unpacked extension folder."),
    },
    handler=_install,
)

uninstall_extension = define_tool(
    name="uninstall_extension",
    description="Uninstalls a Chrome extension by its ID.",
    category=ToolCategory.EXTENSIONS,
    read_only_hint=False,
    conditions=[EXTENSIONS_CONDITION],
    schema={
        "id": p.string("ID of the extension to uninstall."),
    },
    handler=_uninstall,
)

list_extensions = define_tool(
    name="list_extensions",
    description=(
        "Lists all extensions via this server, including their name, ID, "
        "version, and enabled status."
    ),
    category=ToolCategory.EXTENSIONS,
    read_only_hint=True,
    conditions=[EXTENSIONS_CONDITION],
    schema={},
    handler=_list,
)

reload_extension = define_tool(
    name="reload_extension",
    description="Reloads an unpacked Chrome extension by its ID.",
    category=ToolCategory.EXTENSIONS,
    read_only_hint=False,
    conditions=[EXTENSIONS_CONDITION],
    schema={
        "id": p.string("ID of the extension to reload."),
    },
    handler=_reload,
)

open_extension_sidepanel = define_tool(
    name="open_extension_sidepanel",
    description=(
        "Opens an extension's sidepanel for debugging. Due to Chrome security "
        "restrictions, the sidepanel opens in a detached popup window rather "
        "than docked to the browser sidebar. This provides full debugging "
        "capabilities (DOM inspection, console access, script evaluation) with "
        "identical code execution to docked mode. Only visual docking/layout "
        "differs.\n\n"
        "After opening, use list_pages to see the sidepanel and select_page "
        "to interact with it."
    ),
    category=ToolCategory.DEBUGGING,
    read_only_hint=False,
    conditions=[EXTENSIONS_CONDITION],
    schema={
        "extensionId": p.string(
            "The ID of the extension whose sidepanel should be opened. "
            "Find extension IDs at chrome://extensions or from list_pages "
            "service worker URLs."
        ),
    },
    handler=_open_sidepanel,
)

EXTENSION_TOOLS = (
    install_extension,
    uninstall_extension,
    list_extensions,
    reload_extension,
    open_extension_sidepanel,
)


def register_extension_tools(registry: ToolRegistry) -> None:
    """Register every extension tool on *registry*."""
    registry.register_many(EXTENSION_TOOLS)
