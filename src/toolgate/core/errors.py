"""Exception hierarchy for toolgate.

Every module imports from here. The hierarchy is:

    ToolgateError
    ├── DefinitionError
    ├── DispatchError
    │   ├── ValidationError(fields, problems)
    │   ├── NotFoundError(name)
    │   └── HandlerError(tool_name, cause)
    ├── ResponseFinalizedError
    ├── RejectedCallError(error)
    └── ConfigError
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping


class ToolgateError(Exception):
    """Base exception for all toolgate errors."""


# ─── Definition Errors ────────────────────────────────────────


class DefinitionError(ToolgateError):
    """Structural mistake in a tool definition (raised at startup)."""


# ─── Dispatch Errors ──────────────────────────────────────────


class DispatchError(ToolgateError):
    """Base for errors reported back to the caller of an invocation."""


class ValidationError(DispatchError):
    """Caller-supplied parameters violate the tool's schema.

    ``problems`` maps each offending key to a description of what was
    expected.  ``fields`` lists the offending keys in a stable order.
    """

    def __init__(self, problems: Mapping[str, str]) -> None:
        self.problems = dict(problems)
        self.fields = tuple(self.problems)
        detail = "; ".join(f"{key}: {why}" for key, why in self.problems.items())
        super().__init__(f"Invalid parameters: {detail}")


class NotFoundError(DispatchError):
    """Unknown tool name, or a tool gated out by its conditions."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Tool not found: {name}")


class HandlerError(DispatchError):
    """A tool handler failed while performing its domain operation."""

    def __init__(self, tool_name: str, cause: BaseException) -> None:
        self.tool_name = tool_name
        self.cause = cause
        super().__init__(f"[{tool_name}] {cause}")


# ─── Response Errors ──────────────────────────────────────────


class ResponseFinalizedError(ToolgateError):
    """A response builder was used after it was finalized."""


class RejectedCallError(ToolgateError):
    """An invocation was rejected; the message is the rendered response.

    Raised at the MCP boundary so the host sees the call as failed.
    """

    def __init__(self, text: str, error: DispatchError) -> None:
        self.error = error
        super().__init__(text)


# ─── Configuration Errors ─────────────────────────────────────


class ConfigError(ToolgateError):
    """Invalid configuration."""
