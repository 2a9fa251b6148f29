"""Tests for response rendering."""

from __future__ import annotations

from typing import TYPE_CHECKING

from toolgate.core.errors import NotFoundError
from toolgate.mcp.render import render_response
from toolgate.tools.response import Response

if TYPE_CHECKING:
    from tests.fixtures.context import FakeContext


class TestRenderResponse:
    def test_lines_only(self, fake_context: FakeContext) -> None:
        response = Response(lines=("a", "b"))
        assert render_response(response, fake_context) == "a\nb"

    def test_extension_list_appended(self, fake_context: FakeContext) -> None:
        response = Response(list_extensions=True)
        text = render_response(response, fake_context)
        assert text == "## Extensions\next1 - Test Extension@1.0.0 (Enabled)"

    def test_no_extensions(self) -> None:
        from tests.fixtures.context import FakeContext

        text = render_response(Response(list_extensions=True), FakeContext())
        assert "No extensions installed." in text

    def test_disabled_extension(self, make_extension) -> None:  # type: ignore[no-untyped-def]
        from tests.fixtures.context import FakeContext

        context = FakeContext(extensions={"e": make_extension(id="e", enabled=False)})
        text = render_response(Response(list_extensions=True), context)
        assert "(Disabled)" in text

    def test_pages_after_lines(self, fake_context: FakeContext) -> None:
        response = Response(lines=("Opened.",), include_pages=True)
        text = render_response(response, fake_context)
        assert text.startswith("Opened.\n\n## Pages")
        assert "0: https://example.com [selected]" in text
        assert "1: chrome-extension://ext1/panel.html" in text

    def test_both_sections_in_order(self, fake_context: FakeContext) -> None:
        response = Response(list_extensions=True, include_pages=True)
        text = render_response(response, fake_context)
        assert text.index("## Extensions") < text.index("## Pages")

    def test_error_ignores_flags(self, fake_context: FakeContext) -> None:
        response = Response(
            lines=("Tool not found: x",),
            include_pages=True,
            error=NotFoundError("x"),
        )
        assert render_response(response, fake_context) == "Tool not found: x"
