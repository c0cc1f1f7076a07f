"""Integration tests for the event socket server."""

import asyncio
import json

import pytest

from flashspace_tracker.ipc_server import EventServer


class TestAccept:
    """Test line handling without a socket."""

    def test_valid_event_queued(self):
        queue = asyncio.Queue()
        server = EventServer(None, queue)

        reply = server.accept('{"sender": "mouse.entered", "name": "workspace.code"}\n')

        assert reply == {"ok": True}
        event = queue.get_nowait()
        assert event.sender == "mouse.entered"
        assert event.name == "workspace.code"

    def test_invalid_event_rejected(self):
        queue = asyncio.Queue()
        server = EventServer(None, queue)

        reply = server.accept("garbage\n")

        assert reply["ok"] is False
        assert queue.empty()


class TestEventServer:
    """Test the Unix socket lifecycle."""

    @pytest.mark.asyncio
    async def test_round_trip_in_order(self, temp_dir):
        socket_path = temp_dir / "run" / "events.sock"
        queue = asyncio.Queue()
        server = EventServer(socket_path, queue)
        await server.start()

        try:
            reader, writer = await asyncio.open_unix_connection(str(socket_path))
            for info in ["Cursor", "Slack"]:
                event = {"sender": "front_app_switched", "info": info}
                writer.write((json.dumps(event) + "\n").encode())
                await writer.drain()
                reply = json.loads(await reader.readline())
                assert reply == {"ok": True}
            writer.close()
            await writer.wait_closed()
        finally:
            await server.stop()

        assert [queue.get_nowait().info for _ in range(2)] == ["Cursor", "Slack"]
        assert not socket_path.exists()

    @pytest.mark.asyncio
    async def test_stale_socket_replaced(self, temp_dir):
        socket_path = temp_dir / "events.sock"
        socket_path.write_text("stale")
        server = EventServer(socket_path, asyncio.Queue())

        await server.start()
        try:
            assert socket_path.is_socket()
        finally:
            await server.stop()
