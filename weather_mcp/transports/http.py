"""Request/response binding: one JSON-RPC document per HTTP POST.

Routes:
    POST /, POST /mcp   JSON-RPC endpoint (equivalent paths)
    GET /               Static documentation page
    OPTIONS *           200, CORS preflight handled by middleware
    anything else       404 {"error": "Endpoint Not Found"}

Parse failures are transport errors (HTTP 400); every method-level error
travels in the JSON-RPC body with HTTP 200.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse

from ..config import ServerSettings
from ..core.container import container
from ..core.exceptions import JsonRpcParseError
from ..observability import instrument_fastapi
from ..tools import ToolProvider
from .docs import render_documentation_page
from .jsonrpc import JsonRpcDispatcher, parse_error_response, parse_message

logger = logging.getLogger(__name__)

MCP_PATHS = ("/", "/mcp")
ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD"]


def add_cors(app: FastAPI, settings: ServerSettings) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )


async def handle_rpc_body(request: Request, dispatcher: JsonRpcDispatcher) -> Response:
    """Decode a POSTed JSON-RPC message and reply with its response."""
    body = await request.body()
    try:
        message = parse_message(body)
    except JsonRpcParseError as e:
        logger.warning(
            f"Rejected malformed request body: {e.message}",
            extra={"extra": e.to_dict()},
        )
        return JSONResponse(parse_error_response(e), status_code=400)

    response = await dispatcher.dispatch(message)
    if response is None:
        return Response(status_code=202)
    return JSONResponse(response)


def create_http_app(
    provider: ToolProvider | None = None,
    settings: ServerSettings | None = None,
) -> FastAPI:
    """Build the request/response binding.

    Args:
        provider: Tool provider; the container's router by default.
        settings: Server settings; the container's settings by default.

    Returns:
        FastAPI application.
    """
    settings = settings or container.settings()
    provider = provider or container.tool_router()
    server_name = f"{settings.server_name}-http"

    dispatcher = JsonRpcDispatcher(
        provider,
        server_name=server_name,
        server_version=settings.server_version,
        protocol_version=settings.protocol_version,
    )

    app = FastAPI(
        title=server_name,
        description="Weather tools over JSON-RPC/HTTP",
        version=settings.server_version,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    add_cors(app, settings)

    @app.post("/")
    @app.post("/mcp")
    async def rpc(request: Request) -> Response:
        return await handle_rpc_body(request, dispatcher)

    @app.get("/", response_class=HTMLResponse)
    async def documentation(request: Request) -> HTMLResponse:
        return HTMLResponse(
            render_documentation_page(
                base_url=str(request.base_url).rstrip("/"),
                server_name=server_name,
                server_version=settings.server_version,
                protocol_version=settings.protocol_version,
            )
        )

    @app.options("/{path:path}")
    async def options(path: str) -> Response:
        return Response(status_code=200)

    @app.api_route("/{path:path}", methods=ALL_METHODS)
    async def not_found(path: str) -> JSONResponse:
        return JSONResponse({"error": "Endpoint Not Found"}, status_code=404)

    instrument_fastapi(app)
    return app
