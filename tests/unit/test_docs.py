"""Tests for the documentation page in weather_mcp/transports/docs.py."""

from weather_mcp.tools import TOOL_CATALOG
from weather_mcp.transports.docs import render_documentation_page


class TestDocumentationPage:
    """Test render_documentation_page."""

    def _render(self, base_url: str = "http://localhost:8080") -> str:
        return render_documentation_page(
            base_url=base_url,
            server_name="weather-mcp-http",
            server_version="1.0.0",
            protocol_version="2025-03-26",
        )

    def test_lists_endpoints(self) -> None:
        page = self._render()

        assert "POST http://localhost:8080/</code>" in page
        assert "POST http://localhost:8080/mcp</code>" in page

    def test_lists_every_tool(self) -> None:
        page = self._render()
        for tool in TOOL_CATALOG:
            assert f"<strong>{tool.name}</strong>" in page

    def test_parameters_marked_required_or_optional(self) -> None:
        page = self._render()

        assert "location (required), days (optional)" in page
        assert "Parameters: none" in page

    def test_client_config_is_escaped(self) -> None:
        page = self._render()
        assert "&quot;mcpServers&quot;" in page

    def test_base_url_is_escaped(self) -> None:
        page = self._render('http://evil"><script>')
        assert "<script>" not in page

    def test_protocol_flow(self) -> None:
        page = self._render()
        for method in ("initialize", "tools/list", "tools/call"):
            assert f"<code>{method}</code>" in page
