"""Persistent-channel binding: MCP over process stdin/stdout.

Built on the official MCP SDK. The SDK owns framing and the initialize
handshake; list/call requests are forwarded to the shared tool provider.
stdout carries protocol frames only, so all logging goes to stderr.

Usage:
    weather-mcp-stdio
"""

from __future__ import annotations

import logging
from typing import Any

from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from ..config import ServerSettings
from ..core.types import ToolResult
from ..tools import ToolProvider

logger = logging.getLogger(__name__)


class StdioBinding:
    """Converts between the tool provider contract and MCP SDK types."""

    def __init__(self, provider: ToolProvider) -> None:
        self.provider = provider

    async def list_tools(self) -> list[types.Tool]:
        return [
            types.Tool(
                name=tool.name,
                description=tool.description,
                inputSchema=tool.input_schema,
            )
            for tool in self.provider.list_tools()
        ]

    async def call_tool(
        self, name: str, arguments: dict[str, Any] | None
    ) -> types.CallToolResult:
        logger.info(f"tools/call {name}")
        result = await self.provider.call_tool(name, arguments)
        return to_call_tool_result(result)


def to_call_tool_result(result: ToolResult) -> types.CallToolResult:
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=block.text) for block in result.content],
        isError=result.is_error,
    )


def create_stdio_server(
    provider: ToolProvider,
    name: str = "weather-mcp",
    version: str = "1.0.0",
) -> Server:
    """Create an MCP server whose tool handlers delegate to ``provider``."""
    binding = StdioBinding(provider)
    server = Server(name, version=version)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return await binding.list_tools()

    # The router applies its own loose argument checks (e.g. unclamped days)
    @server.call_tool(validate_input=False)
    async def call_tool(tool_name: str, arguments: dict[str, Any]) -> types.CallToolResult:
        return await binding.call_tool(tool_name, arguments)

    return server


async def run_stdio(provider: ToolProvider, settings: ServerSettings) -> None:
    """Serve ``provider`` over stdio until stdin closes."""
    server = create_stdio_server(provider, settings.server_name, settings.server_version)

    logger.info("Weather MCP server started (stdio)")
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())
    logger.info("stdin closed, stdio server stopped")
