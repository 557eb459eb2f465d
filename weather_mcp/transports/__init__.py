"""Transport bindings over the shared tool provider contract."""

from .http import create_http_app
from .jsonrpc import (
    JsonRpcDispatcher,
    JsonRpcErrorCode,
    JsonRpcResponse,
    parse_message,
)
from .sse import PushChannel, PushChannelRegistry, create_sse_app
from .stdio import StdioBinding, create_stdio_server, run_stdio

__all__ = [
    "JsonRpcDispatcher",
    "JsonRpcErrorCode",
    "JsonRpcResponse",
    "PushChannel",
    "PushChannelRegistry",
    "StdioBinding",
    "create_http_app",
    "create_sse_app",
    "create_stdio_server",
    "parse_message",
    "run_stdio",
]
