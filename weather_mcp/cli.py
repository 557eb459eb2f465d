"""Command-line entry points, one per transport binding.

    weather-mcp-stdio          MCP over stdin/stdout
    weather-mcp-http [PORT]    JSON-RPC over HTTP POST (default port 8080)
    weather-mcp-sse            SSE stream + POST side channel (PORT env var)
"""

import asyncio
import logging
from typing import Optional

import typer
import uvicorn
from fastapi import FastAPI
from rich.console import Console
from rich.panel import Panel

from .config import ServerSettings
from .core.container import container
from .core.exceptions import ConfigurationError
from .observability import setup_logging, setup_telemetry, shutdown_telemetry
from .transports import create_http_app, create_sse_app, run_stdio

logger = logging.getLogger(__name__)

console = Console()
err_console = Console(stderr=True)

stdio_app = typer.Typer(
    name="weather-mcp-stdio",
    help="Serve the weather tools over stdio",
    add_completion=False,
)
http_app = typer.Typer(
    name="weather-mcp-http",
    help="Serve the weather tools as JSON-RPC over HTTP",
    add_completion=False,
)
sse_app = typer.Typer(
    name="weather-mcp-sse",
    help="Serve the weather tools over Server-Sent Events",
    add_completion=False,
)


def _bootstrap(settings: ServerSettings, binding: str, telemetry: bool = True) -> None:
    """Configure logging and (optionally) tracing for a binding process."""
    service_name = f"{settings.otel_service_name}-{binding}"
    setup_logging(
        level=settings.log_level,
        json_format=settings.log_json,
        log_file=settings.log_file,
        service_name=service_name,
    )
    if telemetry and settings.otel_enabled:
        setup_telemetry(
            service_name=service_name,
            endpoint=settings.otel_endpoint,
            protocol=settings.otel_protocol,
            enabled=True,
        )


def check_port(port: int) -> int:
    if not 0 < port < 65536:
        raise ConfigurationError(f"Port must be between 1 and 65535, got {port}")
    return port


def _serve(app: FastAPI, host: str, port: int, label: str) -> None:
    """Run ``app`` under uvicorn; exit with status 1 if it cannot start."""
    try:
        check_port(port)
        uvicorn.run(app, host=host, port=port, log_config=None)
    except (ConfigurationError, OSError) as e:
        logger.error(f"{label} server failed to start on {host}:{port}: {e}")
        raise typer.Exit(code=1)
    finally:
        shutdown_telemetry()


# ============================================================================
# stdio
# ============================================================================


@stdio_app.command()
def serve_stdio() -> None:
    """Serve MCP over stdin/stdout until stdin closes."""
    settings = container.settings()
    # Console span exporter would write to stdout, so tracing needs an endpoint
    _bootstrap(settings, "stdio", telemetry=bool(settings.otel_endpoint))

    err_console.print(f"[bold]Weather MCP server[/bold] {settings.server_version} (stdio)")
    try:
        asyncio.run(run_stdio(container.tool_router(), settings))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    except Exception as e:
        logger.error(f"Server startup failed: {e}", exc_info=True)
        raise typer.Exit(code=1)
    finally:
        shutdown_telemetry()


# ============================================================================
# HTTP
# ============================================================================


@http_app.command()
def serve_http(
    port: Optional[int] = typer.Argument(
        None, help="Port to listen on (default: WEATHER_MCP_PORT or 8080)"
    ),
    host: Optional[str] = typer.Option(None, "--host", help="Interface to bind"),
) -> None:
    """Serve JSON-RPC over HTTP POST on / and /mcp."""
    settings = container.settings()
    _bootstrap(settings, "http")

    host = host or settings.host
    port = port or settings.port
    base_url = f"http://localhost:{port}"

    console.print(
        Panel(
            f"Documentation: {base_url}\n"
            f"MCP endpoint:  {base_url}/ (root path)\n"
            f"MCP endpoint:  {base_url}/mcp (alternative path)",
            title="Weather MCP Server (HTTP)",
            expand=False,
        )
    )
    _serve(create_http_app(container.tool_router(), settings), host, port, "HTTP")


# ============================================================================
# SSE
# ============================================================================


@sse_app.command()
def serve_sse() -> None:
    """Serve the SSE stream on /sse and the message endpoint on /messages."""
    settings = container.settings()
    _bootstrap(settings, "sse")

    base_url = f"http://localhost:{settings.port}"
    console.print(
        Panel(
            f"SSE endpoint:     {base_url}/sse\n"
            f"Message endpoint: {base_url}/messages",
            title="Weather MCP Server (SSE)",
            expand=False,
        )
    )
    _serve(create_sse_app(container.tool_router(), settings), settings.host, settings.port, "SSE")


if __name__ == "__main__":
    http_app()
