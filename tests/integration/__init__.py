"""Integration tests for the weather MCP server.

Integration tests drive a whole binding (HTTP app, CLI entry point)
through the same interface a client or shell would use.

Run with: uv run pytest tests/integration/ -v
"""
