"""
FlashSpace Workspace Tracker Daemon

Loads the FlashSpace profile, creates the SketchyBar widgets and reacts to
focus and mouse events forwarded by the widgets' scripts.
"""

import asyncio
import logging
import signal
from typing import List, Optional

from .app_index import AppIndex
from .config import TrackerConfig
from .display import DisplayResolver
from .dispatcher import CommandDispatcher
from .host import FRONT_APP_EVENT, MOUSE_EVENTS, SketchybarHost, WidgetHost
from .ipc_server import EventServer
from .models import TrackerEvent, WorkspaceRecord
from .profile_loader import ProfileLoader
from .reactor import FocusReactor
from .visibility import VisibilityController
from .widgets import WidgetRegistry

logger = logging.getLogger(__name__)

RELOAD_EVENT = "flashspace_reload"


class TrackerDaemon:
    """Owns the tracker components and serializes event handling."""

    def __init__(self, config: TrackerConfig, host: Optional[WidgetHost] = None):
        """
        Initialize tracker daemon.

        Args:
            config: Tracker configuration
            host: Widget host (defaults to the sketchybar CLI)
        """
        self.config = config
        self.host = host or SketchybarHost(config.sketchybar_bin, config.command_timeout)
        self.loader = ProfileLoader(profile_name=config.profile_name, main_display=config.main_display)
        self.resolver = DisplayResolver(config.flashspace_bin, config.command_timeout)
        self.dispatcher = CommandDispatcher(config.flashspace_bin, config.command_timeout)
        self.registry = WidgetRegistry(self.host, self.dispatcher, config)
        self.visibility = VisibilityController(self.resolver, self.registry, config.palette)

        self.records: List[WorkspaceRecord] = []
        self.app_index = AppIndex()
        self.reactor = FocusReactor(self.app_index, self.records, self.registry, self.visibility, config)

        self.queue: Optional["asyncio.Queue[Optional[TrackerEvent]]"] = None
        self.server: Optional[EventServer] = None
        self.running = False
        self.stop_task: Optional["asyncio.Task[None]"] = None

    def load(self) -> None:
        """Load the profile, (re)build the widgets and apply initial visibility."""
        records, app_index = self.loader.load(self.config.profile_path)
        self.records = records
        self.app_index = app_index
        self.reactor.update_profile(records, app_index)

        self.registry.build_summary()
        self.registry.build(records)
        self.visibility.refresh(records, self.registry.handles)

    def dispatch(self, event: TrackerEvent) -> None:
        """Route one host event to its handler. Never raises."""
        try:
            if event.sender == FRONT_APP_EVENT:
                self.reactor.on_front_app_switched(event.info)
            elif event.sender in MOUSE_EVENTS:
                self.registry.handle_mouse(event.name, event.sender)
            elif event.sender == RELOAD_EVENT:
                logger.info("Reloading workspace profile")
                self.load()
            else:
                logger.debug(f"Ignoring event {event.sender}")
        except Exception as e:
            logger.error(f"Error handling {event.sender} event: {e}")

    async def start(self):
        """Start the daemon and process events until stopped."""
        logger.info("Starting FlashSpace workspace tracker")

        self.queue = asyncio.Queue()
        self.load()

        self.server = EventServer(self.config.socket_path, self.queue)
        await self.server.start()

        self.running = True
        logger.info("Tracker started")
        await self._consume_events()

    async def stop(self):
        """Stop accepting events and let the consumer finish and remove the widgets."""
        logger.info("Stopping tracker...")

        if self.server:
            await self.server.stop()

        if self.queue is not None:
            self.queue.put_nowait(None)

    async def _consume_events(self):
        """Run handlers one at a time, in arrival order, then remove all widgets."""
        while True:
            event = await self.queue.get()
            if event is None:
                break
            await asyncio.to_thread(self.dispatch, event)

        # Teardown follows the last handler
        self.running = False
        self.registry.teardown()
        logger.info("Tracker stopped")


async def main(config: TrackerConfig) -> int:
    """Run the daemon until SIGINT/SIGTERM."""
    daemon = TrackerDaemon(config)

    loop = asyncio.get_running_loop()

    def signal_handler():
        logger.info("Received shutdown signal")
        if daemon.stop_task is None:
            daemon.stop_task = asyncio.create_task(daemon.stop())

    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, signal_handler)

    try:
        await daemon.start()
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        return 1
    return 0
