"""Tool definition types.

Defines the immutable :class:`ToolDefinition` record, its annotations,
the summary exposed to callers, and :func:`define_tool`, which checks a
definition's structure at startup.
"""

from __future__ import annotations

import enum
from collections.abc import Awaitable, Callable, Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from toolgate.core.errors import DefinitionError
from toolgate.tools.schema import Param, check_schema, to_json_schema

if TYPE_CHECKING:
    from toolgate.context import ExecutionContext
    from toolgate.tools.response import ResponseBuilder

Handler = Callable[
    [Mapping[str, Any], "ResponseBuilder", "ExecutionContext"],
    "Awaitable[None] | None",
]


def capability_set(active_capabilities: Iterable[str]) -> frozenset[str]:
    """Freeze *active_capabilities*; a bare string is one flag."""
    if isinstance(active_capabilities, str):
        return frozenset((active_capabilities,))
    return frozenset(active_capabilities)


class ToolCategory(enum.Enum):
    """Category tags.  Declaration order is the grouping order."""

    INPUT = "input"
    NAVIGATION = "navigation"
    EMULATION = "emulation"
    PERFORMANCE = "performance"
    NETWORK = "network"
    DEBUGGING = "debugging"
    EXTENSIONS = "extensions"


@dataclass(frozen=True, slots=True)
class ToolAnnotations:
    """Metadata attached to a tool.

    ``read_only_hint`` is advisory, for the caller's own policies.
    ``conditions`` names the capability flags that must all be active
    for the tool to be exposed.
    """

    category: ToolCategory
    read_only_hint: bool = False
    conditions: frozenset[str] = frozenset()


@dataclass(frozen=True, slots=True)
class ToolSummary:
    """Introspection view of a tool, suitable for listing to callers."""

    name: str
    description: str
    category: ToolCategory
    read_only_hint: bool
    input_schema: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class ToolDefinition:
    """A named, schema-validated, invokable unit."""

    name: str
    description: str
    annotations: ToolAnnotations
    schema: Mapping[str, Param]
    handler: Handler

    def is_available(self, active_capabilities: Iterable[str]) -> bool:
        """True if every condition is in *active_capabilities*."""
        return self.annotations.conditions.issubset(
            capability_set(active_capabilities)
        )

    def summary(self) -> ToolSummary:
        return ToolSummary(
            name=self.name,
            description=self.description,
            category=self.annotations.category,
            read_only_hint=self.annotations.read_only_hint,
            input_schema=to_json_schema(self.schema),
        )


def define_tool(
    *,
    name: str,
    description: str,
    handler: Handler,
    category: ToolCategory,
    schema: Mapping[str, Param] | None = None,
    read_only_hint: bool = False,
    conditions: Iterable[str] = (),
) -> ToolDefinition:
    """Build a :class:`ToolDefinition`, failing fast on structural mistakes.

    Performs no I/O.

    Raises:
        DefinitionError: On an empty name or description, a malformed
            schema, a non-callable handler, or a bad condition name.
    """
    if not isinstance(name, str) or not name.strip():
        msg = f"Tool name must be a non-empty string, got {name!r}"
        raise DefinitionError(msg)
    if not isinstance(description, str) or not description.strip():
        msg = f"Tool '{name}' needs a description"
        raise DefinitionError(msg)
    if not callable(handler):
        msg = f"Tool '{name}' handler is not callable"
        raise DefinitionError(msg)
    if not isinstance(category, ToolCategory):
        msg = f"Tool '{name}' has unknown category {category!r}"
        raise DefinitionError(msg)

    try:
        checked = check_schema(schema if schema is not None else {})
    except DefinitionError as e:
        msg = f"Tool '{name}': {e}"
        raise DefinitionError(msg) from e

    if isinstance(conditions, str):
        conditions = (conditions,)
    condition_set = frozenset(conditions)
    for condition in condition_set:
        if not isinstance(condition, str) or not condition:
            msg = f"Tool '{name}' has invalid condition {condition!r}"
            raise DefinitionError(msg)

    return ToolDefinition(
        name=name,
        description=description,
        annotations=ToolAnnotations(
            category=category,
            read_only_hint=read_only_hint,
            conditions=condition_set,
        ),
        schema=MappingProxyType(checked),
        handler=handler,
    )
