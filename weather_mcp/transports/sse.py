"""Server-push binding: an SSE stream plus a side-channel POST endpoint.

Clients open ``GET /sse`` and receive an ``endpoint`` event naming the
message endpoint. Requests are POSTed to ``/messages``; responses are pushed
down the event stream as ``message`` events.

Only one push channel exists per process. Opening a new stream closes and
replaces the previous one (last writer wins); POSTs are always delivered to
whichever channel is current at delivery time.
"""

from __future__ import annotations

import asyncio
import json
import logging
import uuid
from collections.abc import AsyncIterator
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse, StreamingResponse

from ..config import ServerSettings
from ..core.container import container
from ..core.exceptions import JsonRpcParseError, NoActiveChannelError
from ..observability import instrument_fastapi
from ..tools import ToolProvider
from .http import add_cors
from .jsonrpc import JsonRpcDispatcher, parse_error_response, parse_message

logger = logging.getLogger(__name__)

SSE_PATH = "/sse"
MESSAGE_PATH = "/messages"


class PushChannel:
    """One open event stream and its queue of outbound messages."""

    def __init__(self) -> None:
        self.id = uuid.uuid4().hex
        self._queue: asyncio.Queue[dict[str, Any] | None] = asyncio.Queue()
        self.closed = False

    def send(self, message: dict[str, Any]) -> None:
        """Queue a message for the stream.

        Raises:
            NoActiveChannelError: If the channel has been closed.
        """
        if self.closed:
            raise NoActiveChannelError()
        self._queue.put_nowait(message)

    async def receive(self) -> dict[str, Any] | None:
        """Wait for the next message; None once the channel is closed."""
        if self.closed and self._queue.empty():
            return None
        return await self._queue.get()

    def close(self) -> None:
        if not self.closed:
            self.closed = True
            self._queue.put_nowait(None)

    def __repr__(self) -> str:
        return f"PushChannel(id={self.id!r}, closed={self.closed})"


class PushChannelRegistry:
    """Process-wide slot holding the single current push channel.

    Single writer semantics: ``open`` always wins, ``release`` only clears
    the slot if it still holds the channel being released.
    """

    def __init__(self) -> None:
        self._current: PushChannel | None = None

    @property
    def current(self) -> PushChannel | None:
        return self._current

    def open(self) -> PushChannel:
        channel = PushChannel()
        previous = self._current
        self._current = channel

        if previous is not None:
            logger.warning(f"Push channel {previous.id} replaced by {channel.id}")
            previous.close()
        else:
            logger.info(f"Push channel {channel.id} opened")
        return channel

    def release(self, channel: PushChannel) -> None:
        channel.close()
        if self._current is channel:
            self._current = None
            logger.info(f"Push channel {channel.id} closed")


def format_event(event: str, data: str) -> str:
    return f"event: {event}\ndata: {data}\n\n"


async def stream_channel_events(
    registry: PushChannelRegistry,
    message_endpoint: str = MESSAGE_PATH,
) -> AsyncIterator[str]:
    """Open a push channel and yield its SSE frames.

    The channel is opened on first iteration, so a stream that never starts
    never occupies the slot. It is released when the channel closes or the
    client leaves.
    """
    channel = registry.open()
    try:
        yield format_event("endpoint", message_endpoint)
        while True:
            message = await channel.receive()
            if message is None:
                break
            yield format_event("message", json.dumps(message, ensure_ascii=False))
    finally:
        registry.release(channel)


def create_sse_app(
    provider: ToolProvider | None = None,
    settings: ServerSettings | None = None,
    registry: PushChannelRegistry | None = None,
) -> FastAPI:
    """Build the server-push binding.

    Args:
        provider: Tool provider; the container's router by default.
        settings: Server settings; the container's settings by default.
        registry: Channel slot; a fresh registry by default.

    Returns:
        FastAPI application with ``registry`` exposed as ``app.state.channels``.
    """
    settings = settings or container.settings()
    provider = provider or container.tool_router()
    registry = registry or PushChannelRegistry()
    server_name = f"{settings.server_name}-sse"

    dispatcher = JsonRpcDispatcher(
        provider,
        server_name=server_name,
        server_version=settings.server_version,
        protocol_version=settings.protocol_version,
    )

    app = FastAPI(
        title=server_name,
        description="Weather tools over SSE",
        version=settings.server_version,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.channels = registry
    add_cors(app, settings)

    @app.get(SSE_PATH)
    async def open_stream() -> StreamingResponse:
        return StreamingResponse(
            stream_channel_events(registry),
            media_type="text/event-stream",
            headers={"Cache-Control": "no-cache", "Connection": "keep-alive"},
        )

    @app.post(MESSAGE_PATH)
    async def post_message(request: Request) -> Response:
        if registry.current is None:
            return JSONResponse({"error": "No active SSE transport"}, status_code=400)

        try:
            message = parse_message(await request.body())
        except JsonRpcParseError as e:
            logger.warning(
                f"Rejected malformed message: {e.message}",
                extra={"extra": e.to_dict()},
            )
            return JSONResponse(parse_error_response(e), status_code=400)

        response = await dispatcher.dispatch(message)
        if response is not None:
            # The current channel may have changed while dispatching
            channel = registry.current
            try:
                if channel is None:
                    raise NoActiveChannelError()
                channel.send(response)
            except NoActiveChannelError:
                logger.error("Error handling post message: push channel went away")
                return JSONResponse({"error": "Failed to deliver message"}, status_code=500)

        return PlainTextResponse("Accepted", status_code=202)

    instrument_fastapi(app)
    return app
