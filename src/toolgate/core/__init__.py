"""Core types and errors."""

from toolgate.core.errors import (
    ConfigError,
    DefinitionError,
    DispatchError,
    HandlerError,
    NotFoundError,
    RejectedCallError,
    ResponseFinalizedError,
    ToolgateError,
    ValidationError,
)

__all__ = [
    "ConfigError",
    "DefinitionError",
    "DispatchError",
    "HandlerError",
    "NotFoundError",
    "RejectedCallError",
    "ResponseFinalizedError",
    "ToolgateError",
    "ValidationError",
]
