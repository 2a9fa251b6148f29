"""Tests for tool definitions and define_tool."""

from __future__ import annotations

from typing import Any

import pytest

from toolgate.core.errors import DefinitionError
from toolgate.tools.base import (
    ToolAnnotations,
    ToolCategory,
    ToolDefinition,
    define_tool,
)
from toolgate.tools.schema import string


def _noop(params: Any, response: Any, context: Any) -> None:
    return None


def _make(**overrides: Any) -> ToolDefinition:
    kwargs: dict[str, Any] = {
        "name": "install_extension",
        "description": "Installs an extension.",
        "category": ToolCategory.EXTENSIONS,
        "schema": {"path": string("Folder.")},
        "handler": _noop,
    }
    kwargs.update(overrides)
    return define_tool(**kwargs)


class TestDefineTool:
    def test_creation(self) -> None:
        tool = _make(conditions=["flagA"], read_only_hint=True)
        assert tool.name == "install_extension"
        assert tool.annotations == ToolAnnotations(
            category=ToolCategory.EXTENSIONS,
            read_only_hint=True,
            conditions=frozenset({"flagA"}),
        )
        assert "path" in tool.schema

    def test_defaults(self) -> None:
        tool = _make(schema=None)
        assert dict(tool.schema) == {}
        assert tool.annotations.read_only_hint is False
        assert tool.annotations.conditions == frozenset()

    def test_single_string_condition(self) -> None:
        tool = _make(conditions="flagA")
        assert tool.annotations.conditions == frozenset({"flagA"})

    def test_frozen(self) -> None:
        tool = _make()
        with pytest.raises(AttributeError):
            tool.name = "other"  # type: ignore[misc]

    def test_schema_is_read_only(self) -> None:
        tool = _make()
        with pytest.raises(TypeError):
            tool.schema["extra"] = string("x")  # type: ignore[index]

    def test_source_schema_changes_do_not_leak(self) -> None:
        source = {"path": string("Folder.")}
        tool = _make(schema=source)
        source["extra"] = string("x")
        assert "extra" not in tool.schema

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_empty_name(self, name: Any) -> None:
        with pytest.raises(DefinitionError, match="name"):
            _make(name=name)

    def test_empty_description(self) -> None:
        with pytest.raises(DefinitionError, match="description"):
            _make(description="")

    def test_handler_not_callable(self) -> None:
        with pytest.raises(DefinitionError, match="not callable"):
            _make(handler="install")

    def test_bad_category(self) -> None:
        with pytest.raises(DefinitionError, match="category"):
            _make(category="extensions")

    def test_malformed_schema_names_tool(self) -> None:
        with pytest.raises(DefinitionError, match="install_extension"):
            _make(schema={"path": "string"})

    def test_empty_condition(self) -> None:
        with pytest.raises(DefinitionError, match="condition"):
            _make(conditions=[""])


class TestAvailability:
    def test_no_conditions_always_available(self) -> None:
        assert _make().is_available(frozenset())

    def test_subset_required(self) -> None:
        tool = _make(conditions=["a", "b"])
        assert not tool.is_available({"a"})
        assert tool.is_available({"a", "b"})
        assert tool.is_available({"a", "b", "c"})

    def test_bare_string_is_one_flag(self) -> None:
        assert _make(conditions=["ab"]).is_available("ab")
        assert not _make(conditions=["a"]).is_available("ab")


class TestSummary:
    def test_summary_fields(self) -> None:
        summary = _make(read_only_hint=True).summary()
        assert summary.name == "install_extension"
        assert summary.description == "Installs an extension."
        assert summary.category is ToolCategory.EXTENSIONS
        assert summary.read_only_hint is True
        assert summary.input_schema["required"] == ["path"]
