"""Tests for the server-push binding in weather_mcp/transports/sse.py.

Tests cover:
- Push channel send/receive/close
- Single-slot registry (last writer wins)
- Event stream framing
- The /messages side channel
"""

import json

import httpx
import pytest
from fastapi import FastAPI

from weather_mcp.core.exceptions import NoActiveChannelError
from weather_mcp.transports.sse import (
    PushChannel,
    PushChannelRegistry,
    format_event,
    stream_channel_events,
)


def _client(app: FastAPI) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test")


class TestPushChannel:
    """Test PushChannel queueing."""

    @pytest.mark.asyncio
    async def test_send_then_receive(self) -> None:
        channel = PushChannel()
        channel.send({"id": 1})
        assert await channel.receive() == {"id": 1}

    @pytest.mark.asyncio
    async def test_close_ends_receive(self) -> None:
        channel = PushChannel()
        channel.close()

        assert channel.closed is True
        assert await channel.receive() is None
        assert await channel.receive() is None

    @pytest.mark.asyncio
    async def test_send_after_close_raises(self) -> None:
        channel = PushChannel()
        channel.close()

        with pytest.raises(NoActiveChannelError):
            channel.send({"id": 1})

    def test_unique_ids(self) -> None:
        assert PushChannel().id != PushChannel().id


class TestPushChannelRegistry:
    """Test the single current-channel slot."""

    @pytest.mark.asyncio
    async def test_open_sets_current(self, channel_registry: PushChannelRegistry) -> None:
        assert channel_registry.current is None
        channel = channel_registry.open()
        assert channel_registry.current is channel

    @pytest.mark.asyncio
    async def test_last_writer_wins(self, channel_registry: PushChannelRegistry) -> None:
        first = channel_registry.open()
        second = channel_registry.open()

        assert channel_registry.current is second
        assert first.closed is True
        assert second.closed is False

    @pytest.mark.asyncio
    async def test_release_of_stale_channel_keeps_current(
        self, channel_registry: PushChannelRegistry
    ) -> None:
        first = channel_registry.open()
        second = channel_registry.open()

        channel_registry.release(first)

        assert channel_registry.current is second

    @pytest.mark.asyncio
    async def test_release_current_clears_slot(
        self, channel_registry: PushChannelRegistry
    ) -> None:
        channel = channel_registry.open()
        channel_registry.release(channel)

        assert channel_registry.current is None
        assert channel.closed is True


class TestEventStream:
    """Test SSE framing."""

    def test_format_event(self) -> None:
        assert format_event("endpoint", "/messages") == "event: endpoint\ndata: /messages\n\n"

    @pytest.mark.asyncio
    async def test_stream_announces_endpoint_then_messages(
        self, channel_registry: PushChannelRegistry
    ) -> None:
        stream = stream_channel_events(channel_registry)

        assert await stream.__anext__() == "event: endpoint\ndata: /messages\n\n"
        channel = channel_registry.current
        assert channel is not None

        channel.send({"jsonrpc": "2.0", "id": 1, "result": {}})
        frame = await stream.__anext__()
        assert frame.startswith("event: message\ndata: ")
        assert json.loads(frame.split("data: ", 1)[1]) == {"jsonrpc": "2.0", "id": 1, "result": {}}

        channel.close()
        with pytest.raises(StopAsyncIteration):
            await stream.__anext__()
        assert channel_registry.current is None

    def test_unstarted_stream_does_not_open_channel(
        self, channel_registry: PushChannelRegistry
    ) -> None:
        """A stream that is never iterated never takes the slot."""
        stream_channel_events(channel_registry)
        assert channel_registry.current is None

    @pytest.mark.asyncio
    async def test_client_leaving_releases_channel(
        self, channel_registry: PushChannelRegistry
    ) -> None:
        stream = stream_channel_events(channel_registry)
        await stream.__anext__()
        channel = channel_registry.current

        await stream.aclose()

        assert channel_registry.current is None
        assert channel.closed is True

    @pytest.mark.asyncio
    async def test_new_stream_replaces_previous(
        self, channel_registry: PushChannelRegistry
    ) -> None:
        first = stream_channel_events(channel_registry)
        await first.__anext__()
        first_channel = channel_registry.current

        second = stream_channel_events(channel_registry)
        await second.__anext__()

        assert channel_registry.current is not first_channel
        with pytest.raises(StopAsyncIteration):
            await first.__anext__()
        assert channel_registry.current is not None
        await second.aclose()


class TestMessageEndpoint:
    """Test POST /messages."""

    @pytest.mark.asyncio
    async def test_no_channel_is_400(self, sse_app: FastAPI) -> None:
        async with _client(sse_app) as client:
            response = await client.post("/messages", json={"id": 1, "method": "ping"})

        assert response.status_code == 400
        assert response.json() == {"error": "No active SSE transport"}

    @pytest.mark.asyncio
    async def test_response_pushed_to_channel(
        self, sse_app: FastAPI, channel_registry: PushChannelRegistry
    ) -> None:
        channel = channel_registry.open()

        async with _client(sse_app) as client:
            response = await client.post(
                "/messages", json={"jsonrpc": "2.0", "id": 9, "method": "tools/list"}
            )

        assert response.status_code == 202
        assert response.text == "Accepted"
        pushed = await channel.receive()
        assert pushed["id"] == 9
        assert len(pushed["result"]["tools"]) == 5

    @pytest.mark.asyncio
    async def test_delivered_to_newest_channel(
        self, sse_app: FastAPI, channel_registry: PushChannelRegistry
    ) -> None:
        channel_registry.open()
        newest = channel_registry.open()

        async with _client(sse_app) as client:
            await client.post("/messages", json={"id": "a", "method": "ping"})

        assert await newest.receive() == {"jsonrpc": "2.0", "id": "a", "result": {}}

    @pytest.mark.asyncio
    async def test_parse_error(
        self, sse_app: FastAPI, channel_registry: PushChannelRegistry
    ) -> None:
        channel_registry.open()

        async with _client(sse_app) as client:
            response = await client.post(
                "/messages", content=b"{oops", headers={"Content-Type": "application/json"}
            )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == -32700

    @pytest.mark.asyncio
    async def test_notification_accepted_without_push(
        self, sse_app: FastAPI, channel_registry: PushChannelRegistry
    ) -> None:
        channel = channel_registry.open()

        async with _client(sse_app) as client:
            response = await client.post(
                "/messages", json={"jsonrpc": "2.0", "method": "notifications/initialized"}
            )

        assert response.status_code == 202
        channel.close()
        assert await channel.receive() is None

    @pytest.mark.asyncio
    async def test_tool_call_over_side_channel(
        self, sse_app: FastAPI, channel_registry: PushChannelRegistry
    ) -> None:
        channel = channel_registry.open()

        async with _client(sse_app) as client:
            await client.post(
                "/messages",
                json={
                    "id": 2,
                    "method": "tools/call",
                    "params": {"name": "search_locations", "arguments": {"query": "nyc"}},
                },
            )

        pushed = await channel.receive()
        assert json.loads(pushed["result"]["content"][0]["text"]) == ["New York"]

    def test_registry_exposed_on_app_state(
        self, sse_app: FastAPI, channel_registry: PushChannelRegistry
    ) -> None:
        assert sse_app.state.channels is channel_registry

    @pytest.mark.asyncio
    async def test_unknown_route_is_404(self, sse_app: FastAPI) -> None:
        async with _client(sse_app) as client:
            response = await client.get("/nope")
        assert response.status_code == 404
