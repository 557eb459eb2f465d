"""Unit tests for the weather MCP server.

Unit tests verify individual components in isolation using mocks.
No network listeners or subprocesses are started.

Run with: uv run pytest tests/unit/ -v
"""
