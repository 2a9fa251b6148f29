"""Parameter schemas: declarative descriptors and their validator.

A schema maps parameter names to :class:`Param` descriptors.  The same
value is used to validate incoming payloads (:func:`validate`) and to
document the tool for callers (:func:`to_json_schema`).
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from toolgate.core.errors import DefinitionError, ValidationError

Schema = Mapping[str, "Param"]


class ParamType(enum.Enum):
    """Primitive types a parameter may declare."""

    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"


def _matches(param_type: ParamType, value: Any) -> bool:
    # bool is a subclass of int; it only satisfies BOOLEAN
    if isinstance(value, bool):
        return param_type is ParamType.BOOLEAN
    if param_type is ParamType.STRING:
        return isinstance(value, str)
    if param_type is ParamType.INTEGER:
        return isinstance(value, int)
    if param_type is ParamType.NUMBER:
        return isinstance(value, (int, float))
    return False


@dataclass(frozen=True, slots=True)
class Param:
    """Descriptor for a single tool parameter."""

    type: ParamType
    description: str
    required: bool = True
    default: Any = None
    choices: tuple[Any, ...] | None = None

    def expectation(self) -> str:
        """Human-readable description of an acceptable value."""
        kind = "required" if self.required else "optional"
        text = f"expected {kind} {self.type.value}"
        if self.choices is not None:
            text += " (one of: " + ", ".join(repr(c) for c in self.choices) + ")"
        return text


# Shorthand constructors used by tool modules.


def string(description: str, **kwargs: Any) -> Param:
    return Param(ParamType.STRING, description, **kwargs)


def integer(description: str, **kwargs: Any) -> Param:
    return Param(ParamType.INTEGER, description, **kwargs)


def number(description: str, **kwargs: Any) -> Param:
    return Param(ParamType.NUMBER, description, **kwargs)


def boolean(description: str, **kwargs: Any) -> Param:
    return Param(ParamType.BOOLEAN, description, **kwargs)


def check_schema(schema: Any) -> dict[str, Param]:
    """Verify the descriptor grammar of *schema*.

    Returns:
        A plain dict copy of the schema, in declaration order.

    Raises:
        DefinitionError: If the schema is malformed.
    """
    if not isinstance(schema, Mapping):
        msg = f"Schema must be a mapping, got {type(schema).__name__}"
        raise DefinitionError(msg)

    checked: dict[str, Param] = {}
    for key, param in schema.items():
        if not isinstance(key, str) or not key:
            msg = f"Schema keys must be non-empty strings, got {key!r}"
            raise DefinitionError(msg)
        if not isinstance(param, Param):
            msg = f"Schema entry '{key}' is not a Param descriptor"
            raise DefinitionError(msg)
        if not isinstance(param.type, ParamType):
            msg = f"Schema entry '{key}' has unknown type {param.type!r}"
            raise DefinitionError(msg)
        if param.required and param.default is not None:
            msg = f"Schema entry '{key}' is required but declares a default"
            raise DefinitionError(msg)
        if param.choices is not None:
            if not param.choices:
                msg = f"Schema entry '{key}' declares an empty choice set"
                raise DefinitionError(msg)
            for choice in param.choices:
                if not _matches(param.type, choice):
                    msg = (
                        f"Schema entry '{key}' has choice {choice!r} "
                        f"that is not a {param.type.value}"
                    )
                    raise DefinitionError(msg)
        if param.default is not None:
            if not _matches(param.type, param.default):
                msg = f"Schema entry '{key}' has a default that is not a {param.type.value}"
                raise DefinitionError(msg)
            if param.choices is not None and param.default not in param.choices:
                msg = f"Schema entry '{key}' has a default outside its choices"
                raise DefinitionError(msg)
        checked[key] = param
    return checked


def validate(schema: Schema, raw_params: Any) -> dict[str, Any]:
    """Validate an untyped payload against *schema*.

    The schema is closed: keys it does not declare are rejected.  All
    offending keys are collected before failing.

    Returns:
        A new dict holding exactly the declared keys that were supplied,
        plus defaults for absent optional keys.

    Raises:
        ValidationError: Naming every offending key.
    """
    if raw_params is None:
        raw_params = {}
    if not isinstance(raw_params, Mapping):
        raise ValidationError(
            {"<params>": f"expected an object, got {type(raw_params).__name__}"}
        )

    problems: dict[str, str] = {}
    params: dict[str, Any] = {}

    for key, param in schema.items():
        if key not in raw_params:
            if param.required:
                problems[key] = f"missing; {param.expectation()}"
            elif param.default is not None:
                params[key] = param.default
            continue
        value = raw_params[key]
        if not _matches(param.type, value):
            problems[key] = f"{param.expectation()}, got {type(value).__name__}"
        elif param.choices is not None and value not in param.choices:
            problems[key] = f"{param.expectation()}, got {value!r}"
        else:
            params[key] = value

    for key in raw_params:
        if key not in schema:
            problems[str(key)] = "unexpected parameter"

    if problems:
        raise ValidationError(problems)
    return params


def to_json_schema(schema: Schema) -> dict[str, Any]:
    """Render *schema* as a JSON Schema object for the introspection surface."""
    properties: dict[str, Any] = {}
    required: list[str] = []
    for key, param in schema.items():
        prop: dict[str, Any] = {
            "type": param.type.value,
            "description": param.description,
        }
        if param.choices is not None:
            prop["enum"] = list(param.choices)
        if param.default is not None:
            prop["default"] = param.default
        properties[key] = prop
        if param.required:
            required.append(key)

    result: dict[str, Any] = {
        "type": "object",
        "properties": properties,
        "additionalProperties": False,
    }
    if required:
        result["required"] = required
    return result
