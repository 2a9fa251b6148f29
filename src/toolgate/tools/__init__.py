"""Tool framework: definitions, schemas, responses and the registry.

Tools are declared with :func:`define_tool`, registered on a
:class:`ToolRegistry`, and invoked by name against an execution context.
"""

from toolgate.tools.base import (
    ToolAnnotations,
    ToolCategory,
    ToolDefinition,
    ToolSummary,
    define_tool,
)
from toolgate.tools.registry import ToolRegistry
from toolgate.tools.response import Response, ResponseBuilder
from toolgate.tools.schema import Param, ParamType, to_json_schema, validate

__all__ = [
    "Param",
    "ParamType",
    "Response",
    "ResponseBuilder",
    "ToolAnnotations",
    "ToolCategory",
    "ToolDefinition",
    "ToolRegistry",
    "ToolSummary",
    "define_tool",
    "to_json_schema",
    "validate",
]
