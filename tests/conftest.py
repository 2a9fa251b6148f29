"""Shared test fixtures for toolgate."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest

from toolgate.context import InstalledExtension, PageInfo, SidepanelResult
from toolgate.tools.extensions import EXTENSIONS_CONDITION, register_extension_tools
from toolgate.tools.registry import ToolRegistry

if TYPE_CHECKING:
    from tests.fixtures.context import FakeContext as FakeContextType


@pytest.fixture
def make_extension() -> Any:
    """Factory fixture for InstalledExtension with sensible defaults."""

    def _make(**overrides: Any) -> InstalledExtension:
        defaults: dict[str, Any] = {
            "id": "ext1",
            "name": "Test Extension",
            "version": "1.0.0",
            "enabled": True,
            "path": "/tmp/ext",
        }
        defaults.update(overrides)
        return InstalledExtension(**defaults)

    return _make


@pytest.fixture
def fake_context(make_extension: Any) -> FakeContextType:
    """Context with one installed extension, two pages and a side panel."""
    from tests.fixtures.context import FakeContext

    return FakeContext(
        extensions={"ext1": make_extension()},
        pages=[
            PageInfo(index=0, url="https://example.com", selected=True),
            PageInfo(index=1, url="chrome-extension://ext1/panel.html"),
        ],
        sidepanel=SidepanelResult(
            url="chrome-extension://ext1/panel.html",
            note="Opened in a detached window.",
            window_id=42,
        ),
    )


@pytest.fixture
def extension_registry() -> ToolRegistry:
    """Registry with all extension tools registered."""
    registry = ToolRegistry()
    register_extension_tools(registry)
    return registry


@pytest.fixture
def extension_caps() -> frozenset[str]:
    return frozenset({EXTENSIONS_CONDITION})
