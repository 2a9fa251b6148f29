"""Render a finalized response into the text sent to the caller.

Handlers only record *requests* for computed data (the extension list,
the open pages).  This module fetches that data from the execution
context and appends it after the handler's own lines.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from toolgate.context import ExecutionContext
    from toolgate.tools.response import Response


def _extension_lines(context: ExecutionContext) -> list[str]:
    extensions = context.list_extensions()
    if not extensions:
        return ["## Extensions", "No extensions installed."]
    lines = ["## Extensions"]
    for ext in extensions:
        status = "Enabled" if ext.enabled else "Disabled"
        lines.append(f"{ext.id} - {ext.name}@{ext.version} ({status})")
    return lines


def _page_lines(context: ExecutionContext) -> list[str]:
    lines = ["## Pages"]
    for page in context.list_pages():
        marker = " [selected]" if page.selected else ""
        lines.append(f"{page.index}: {page.url}{marker}")
    return lines


def render_response(response: Response, context: ExecutionContext) -> str:
    """Build the final text for *response*.

    Error responses are rendered as-is; flags are ignored for them.
    """
    sections: list[list[str]] = []
    if response.lines:
        sections.append(list(response.lines))
    if not response.is_error:
        if response.list_extensions:
            sections.append(_extension_lines(context))
        if response.include_pages:
            sections.append(_page_lines(context))
    return "\n\n".join("\n".join(section) for section in sections)
