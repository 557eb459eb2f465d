"""Static HTML page served on ``GET /`` by the HTTP binding."""

import html
import json

from ..tools import TOOL_CATALOG

_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>Weather MCP Server</title>
    <style>
        body {{ font-family: sans-serif; max-width: 860px; margin: 40px auto; line-height: 1.5; }}
        code, pre {{ background: #f4f4f4; border-radius: 4px; padding: 2px 6px; }}
        pre {{ padding: 12px; overflow-x: auto; }}
        .tool-item {{ margin: 10px 0; padding: 10px; border-left: 4px solid #4a90d9; background: #fafafa; }}
    </style>
</head>
<body>
    <h1>Weather MCP Server</h1>
    <p>{name} v{version} &middot; protocol {protocol}</p>

    <h2>Endpoints</h2>
    <ul>
        <li><code>POST {base_url}/</code> (JSON-RPC, root path)</li>
        <li><code>POST {base_url}/mcp</code> (JSON-RPC, alternative path)</li>
    </ul>

    <h2>Client Configuration</h2>
    <pre>{client_config}</pre>

    <h2>Available Tools</h2>
    <div class="tools-list">
{tools}
    </div>

    <h2>Supported Locations</h2>
    <p>Hong Kong, Tokyo, Osaka, Kyoto, Hiroshima, Sapporo, Fukuoka, London, New York, Sydney</p>

    <h2>Protocol Flow</h2>
    <ol>
        <li><strong>Initialize:</strong> Client sends <code>initialize</code> method</li>
        <li><strong>Get Tools:</strong> Client sends <code>tools/list</code> method</li>
        <li><strong>Call Tools:</strong> Client sends <code>tools/call</code> method</li>
    </ol>
</body>
</html>
"""

_TOOL_ITEM = """        <div class="tool-item">
            <strong>{name}</strong> - {description}
            <br><em>Parameters: {parameters}</em>
        </div>"""


def _describe_parameters(schema: dict) -> str:
    properties = schema.get("properties", {})
    if not properties:
        return "none"

    required = set(schema.get("required", []))
    return ", ".join(
        f"{name} ({'required' if name in required else 'optional'})"
        for name in properties
    )


def render_documentation_page(
    base_url: str,
    server_name: str,
    server_version: str,
    protocol_version: str,
) -> str:
    """Render the documentation page for a server reachable at ``base_url``."""
    client_config = json.dumps(
        {"mcpServers": {"weather": {"transport": "http", "url": base_url}}},
        indent=2,
    )
    tools = "\n".join(
        _TOOL_ITEM.format(
            name=html.escape(tool.name),
            description=html.escape(tool.description),
            parameters=html.escape(_describe_parameters(tool.input_schema)),
        )
        for tool in TOOL_CATALOG
    )
    return _PAGE.format(
        name=html.escape(server_name),
        version=html.escape(server_version),
        protocol=html.escape(protocol_version),
        base_url=html.escape(base_url),
        client_config=html.escape(client_config),
        tools=tools,
    )
