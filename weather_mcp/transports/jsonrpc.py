"""JSON-RPC 2.0 envelope and method dispatch shared by the HTTP bindings.

Maps ``initialize`` / ``ping`` / ``tools/list`` / ``tools/call`` onto a
``ToolProvider``. Method-level failures are returned as error envelopes;
only body parsing (``parse_message``) raises.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Any

from ..core.exceptions import JsonRpcParseError
from ..observability import LoggerAdapter
from ..tools import ToolProvider

logger = logging.getLogger(__name__)

JSONRPC_VERSION = "2.0"


class JsonRpcErrorCode(IntEnum):
    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603


@dataclass
class JsonRpcResponse:
    """JSON-RPC 2.0 response; exactly one of result/error is set."""

    id: str | int | None
    result: Any = None
    error: dict[str, Any] | None = None

    @classmethod
    def success(cls, request_id: str | int | None, result: Any) -> JsonRpcResponse:
        return cls(id=request_id, result=result)

    @classmethod
    def failure(
        cls,
        request_id: str | int | None,
        code: JsonRpcErrorCode,
        message: str,
        data: Any = None,
    ) -> JsonRpcResponse:
        error: dict[str, Any] = {"code": int(code), "message": message}
        if data:
            error["data"] = data
        return cls(id=request_id, error=error)

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"jsonrpc": JSONRPC_VERSION, "id": self.id}
        if self.error is not None:
            payload["error"] = self.error
        else:
            payload["result"] = self.result
        return payload


def parse_message(body: bytes | str) -> Any:
    """Decode a request body.

    Raises:
        JsonRpcParseError: If the body is not valid UTF-8 JSON.
    """
    try:
        return json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise JsonRpcParseError(e) from e


def parse_error_response(error: JsonRpcParseError) -> dict[str, Any]:
    """Envelope for a body that never made it to dispatch."""
    detail = str(error.cause) if error.cause else error.message
    return JsonRpcResponse.failure(
        None, JsonRpcErrorCode.PARSE_ERROR, "Parse Error", detail
    ).to_dict()


class JsonRpcDispatcher:
    """Routes decoded JSON-RPC messages to a tool provider.

    Args:
        provider: Catalog and call target.
        server_name: Reported in ``serverInfo``.
        server_version: Reported in ``serverInfo``.
        protocol_version: Reported as ``protocolVersion`` on initialize.
    """

    def __init__(
        self,
        provider: ToolProvider,
        server_name: str,
        server_version: str,
        protocol_version: str,
    ) -> None:
        self.provider = provider
        self.server_name = server_name
        self.server_version = server_version
        self.protocol_version = protocol_version

    async def dispatch(self, message: Any) -> dict[str, Any] | None:
        """Handle one decoded message.

        Returns:
            Response envelope as a dict, or None for notifications.
        """
        if not isinstance(message, dict):
            return JsonRpcResponse.failure(
                None, JsonRpcErrorCode.INVALID_REQUEST, "Invalid Request"
            ).to_dict()

        request_id = message.get("id")
        method = message.get("method")
        log = LoggerAdapter(logger, str(request_id))

        if not isinstance(method, str):
            return JsonRpcResponse.failure(
                request_id, JsonRpcErrorCode.INVALID_REQUEST, "Invalid Request"
            ).to_dict()

        if "id" not in message and method.startswith("notifications/"):
            log.debug(f"Notification received: {method}")
            return None

        log.info(f"Dispatching {method}")
        try:
            response = await self._dispatch_method(request_id, method, message.get("params"))
        except Exception as e:
            log.error(f"Error handling {method}: {e}", exc_info=True)
            response = JsonRpcResponse.failure(
                request_id, JsonRpcErrorCode.INTERNAL_ERROR, "Internal error", str(e)
            )

        return response.to_dict()

    async def _dispatch_method(
        self, request_id: str | int | None, method: str, params: Any
    ) -> JsonRpcResponse:
        if method == "initialize":
            return JsonRpcResponse.success(request_id, self.initialize_result())

        if method == "ping":
            return JsonRpcResponse.success(request_id, {})

        if method == "tools/list":
            tools = [
                tool.model_dump(mode="json", by_alias=True)
                for tool in self.provider.list_tools()
            ]
            return JsonRpcResponse.success(request_id, {"tools": tools})

        if method == "tools/call":
            if not isinstance(params, dict) or not isinstance(params.get("name"), str):
                return JsonRpcResponse.failure(
                    request_id,
                    JsonRpcErrorCode.INVALID_PARAMS,
                    "Invalid params",
                    "tools/call requires a string 'name'",
                )

            arguments = params.get("arguments")
            if arguments is not None and not isinstance(arguments, dict):
                return JsonRpcResponse.failure(
                    request_id,
                    JsonRpcErrorCode.INVALID_PARAMS,
                    "Invalid params",
                    "'arguments' must be an object",
                )

            result = await self.provider.call_tool(params["name"], arguments)
            return JsonRpcResponse.success(request_id, result.to_json_dict())

        return JsonRpcResponse.failure(
            request_id, JsonRpcErrorCode.METHOD_NOT_FOUND, "Unsupported method"
        )

    def initialize_result(self) -> dict[str, Any]:
        return {
            "protocolVersion": self.protocol_version,
            "capabilities": {"tools": {}},
            "serverInfo": {
                "name": self.server_name,
                "version": self.server_version,
            },
        }
