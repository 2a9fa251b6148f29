"""Tool registry: holds definitions and dispatches invocations.

Provides registration, condition-gated listing and lookup, and the
validate → execute → respond cycle for tools built with
:func:`~toolgate.tools.base.define_tool`.
"""

from __future__ import annotations

import inspect
import logging
from typing import TYPE_CHECKING, Any

from toolgate.core.errors import (
    DefinitionError,
    DispatchError,
    HandlerError,
    NotFoundError,
    ResponseFinalizedError,
)
from toolgate.tools.base import ToolCategory, capability_set
from toolgate.tools.response import ResponseBuilder
from toolgate.tools.schema import validate

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from toolgate.context import ExecutionContext
    from toolgate.tools.base import ToolDefinition, ToolSummary
    from toolgate.tools.response import Response

logger = logging.getLogger(__name__)


class ToolListing:
    """Lazy, restartable view of the tools available for a capability set.

    Each iteration re-reads the registry; nothing is cached.
    """

    def __init__(
        self,
        tools: dict[str, ToolDefinition],
        active_capabilities: frozenset[str],
        *,
        group_by_category: bool = False,
    ) -> None:
        self._tools = tools
        self._active = active_capabilities
        self._group = group_by_category

    def __iter__(self) -> Iterator[ToolSummary]:
        available = (t for t in self._tools.values() if t.is_available(self._active))
        if self._group:
            order = {category: i for i, category in enumerate(ToolCategory)}
            # sorted() is stable, so registration order holds within a category
            available = iter(
                sorted(available, key=lambda t: order[t.annotations.category])
            )
        for tool in available:
            yield tool.summary()


class ToolRegistry:
    """Registry for tool definitions.

    Populated once at startup; read-only afterwards.  Which tools are
    visible is decided per call from the active capability set.
    """

    def __init__(self) -> None:
        self._tools: dict[str, ToolDefinition] = {}

    def register(self, definition: ToolDefinition) -> None:
        """Register a tool.

        Raises:
            DefinitionError: If a tool with the same name is already
                registered.  The registry is left unchanged.
        """
        if definition.name in self._tools:
            msg = f"Tool already registered: {definition.name}"
            raise DefinitionError(msg)
        self._tools[definition.name] = definition
        logger.debug("Registered tool %s", definition.name)

    def register_many(self, definitions: Iterable[ToolDefinition]) -> None:
        """Register several tools at once; all or nothing.

        Raises:
            DefinitionError: On any duplicate, within the batch or
                against already registered tools.
        """
        batch = list(definitions)
        seen: set[str] = set()
        for definition in batch:
            if definition.name in self._tools or definition.name in seen:
                msg = f"Tool already registered: {definition.name}"
                raise DefinitionError(msg)
            seen.add(definition.name)
        for definition in batch:
            self.register(definition)

    def get(self, name: str) -> ToolDefinition:
        """Get a tool by name, ignoring conditions.

        Raises:
            KeyError: If the tool is not registered.
        """
        if name not in self._tools:
            msg = f"Tool not found: {name}"
            raise KeyError(msg)
        return self._tools[name]

    def resolve(self, name: str, active_capabilities: Iterable[str]) -> ToolDefinition:
        """Get a tool that is available under *active_capabilities*.

        Raises:
            NotFoundError: If the tool is unknown or gated out.  Both
                cases produce the same error.
        """
        tool = self._tools.get(name)
        if tool is None or not tool.is_available(active_capabilities):
            raise NotFoundError(name)
        return tool

    def list_available(
        self,
        active_capabilities: Iterable[str],
        *,
        group_by_category: bool = False,
    ) -> ToolListing:
        """Summaries of tools whose conditions are all active.

        Registration order, or grouped by category (in category
        declaration order) when *group_by_category* is set.
        """
        return ToolListing(
            self._tools,
            capability_set(active_capabilities),
            group_by_category=group_by_category,
        )

    async def invoke(
        self,
        name: str,
        raw_params: Any,
        active_capabilities: Iterable[str],
        context: ExecutionContext,
    ) -> Response:
        """Resolve, validate and run one tool call.

        Never raises for caller or handler mistakes: lookup, validation
        and handler failures come back as a :class:`Response` whose
        ``error`` holds the :class:`DispatchError`.  The handler runs at
        most once.
        """
        try:
            tool = self.resolve(name, active_capabilities)
            params = validate(tool.schema, raw_params)
        except DispatchError as exc:
            logger.info("Rejected call to %s: %s", name, exc)
            return _error_response(exc)

        builder = ResponseBuilder()
        logger.debug("Invoking tool %s", name)
        try:
            result = tool.handler(params, builder, context)
            if inspect.isawaitable(result):
                await result
        except Exception as exc:
            logger.exception("Tool %s failed", name)
            return _error_response(HandlerError(name, exc))
        if builder.finalized:
            cause = ResponseFinalizedError("Handler finalized its own response")
            return _error_response(HandlerError(name, cause))
        return builder.finalize()

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    def list_names(self) -> list[str]:
        """Return names of all registered tools, in registration order."""
        return list(self._tools.keys())


def _error_response(error: DispatchError) -> Response:
    builder = ResponseBuilder()
    builder.append_response_line(str(error))
    return builder.finalize(error=error)
