"""Rich display for tool listings and schemas."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

if TYPE_CHECKING:
    from collections.abc import Iterable

    from toolgate.tools.base import ToolSummary

_DESCRIPTION_LEN = 80


def _first_line(text: str, limit: int = _DESCRIPTION_LEN) -> str:
    """First line of *text*, truncated to *limit* characters."""
    line = text.strip().splitlines()[0] if text.strip() else ""
    if len(line) <= limit:
        return line
    return line[:limit].rstrip() + " ..."


class ToolDisplay:
    """Renders tool summaries to a :class:`~rich.console.Console`.

    Accepts an optional console for dependency injection in tests.
    """

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()

    def show_tools(self, tools: Iterable[ToolSummary]) -> None:
        summaries = list(tools)
        if not summaries:
            self._console.print("[dim]No tools available.[/dim]")
            return
        table = Table(title="Available tools")
        table.add_column("Name", style="bold cyan")
        table.add_column("Category")
        table.add_column("Read-only")
        table.add_column("Description")
        for summary in summaries:
            table.add_row(
                summary.name,
                summary.category.value,
                "yes" if summary.read_only_hint else "no",
                _first_line(summary.description),
            )
        self._console.print(table)

    def show_schema(self, summary: ToolSummary) -> None:
        self._console.print(f"[bold]{summary.name}[/bold]")
        self._console.print(summary.description)
        self._console.print()
        rendered = json.dumps(summary.input_schema, indent=2)
        self._console.print(Syntax(rendered, "json"))
