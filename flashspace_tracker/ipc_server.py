"""
Event socket for the workspace tracker daemon.

SketchyBar item scripts forward their SENDER/NAME/INFO environment here as
one JSON object per line. Events are queued for the daemon's single consumer.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Optional

from .errors import EventPayloadError, error_response
from .models import TrackerEvent

logger = logging.getLogger(__name__)


class EventServer:
    """Unix socket server that queues host events."""

    def __init__(self, socket_path: Path, queue: "asyncio.Queue[Optional[TrackerEvent]]"):
        """
        Initialize event server.

        Args:
            socket_path: Unix socket to listen on
            queue: Queue drained by the daemon
        """
        self.socket_path = socket_path
        self.queue = queue
        self.server: Optional[asyncio.AbstractServer] = None

    async def start(self):
        """Start listening, replacing a stale socket file."""
        self.socket_path.parent.mkdir(parents=True, exist_ok=True)

        if self.socket_path.exists():
            self.socket_path.unlink()

        self.server = await asyncio.start_unix_server(
            self._handle_client,
            path=str(self.socket_path)
        )

        logger.info(f"Event server listening on {self.socket_path}")

    async def stop(self):
        """Stop the server and remove the socket file."""
        if self.server:
            self.server.close()
            await self.server.wait_closed()
            self.server = None

        if self.socket_path.exists():
            self.socket_path.unlink()

        logger.info("Event server stopped")

    async def _handle_client(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter):
        try:
            while True:
                data = await reader.readline()
                if not data:
                    break

                reply = self.accept(data.decode("utf-8", errors="replace"))
                writer.write((json.dumps(reply) + "\n").encode())
                await writer.drain()

        except (ConnectionError, asyncio.IncompleteReadError) as e:
            logger.debug(f"Client connection closed: {e}")
        finally:
            writer.close()
            try:
                await writer.wait_closed()
            except ConnectionError:
                pass

    def accept(self, line: str) -> dict:
        """Parse one line and queue the event.

        Returns:
            Reply for the client
        """
        try:
            event = TrackerEvent.parse(line)
        except EventPayloadError as e:
            logger.warning(e.message)
            return error_response(e)

        self.queue.put_nowait(event)
        logger.debug(f"Queued {event.sender} for {event.name or '<bar>'}")
        return {"ok": True}
