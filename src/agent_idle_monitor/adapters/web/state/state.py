"""State management class."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Coroutine
from typing import TYPE_CHECKING, Any

from agent_idle_monitor.adapters.web.pollers import SyncPoller

if TYPE_CHECKING:
    from pyview import LiveViewSocket

    from agent_idle_monitor.adapters.web.state.dashboard_context import DashboardContext
    from agent_idle_monitor.application.services.dashboard_service import DashboardService

logger = logging.getLogger(__name__)

DEFAULT_BROADCAST_TOPIC = "dashboard:updates"


class State:
    """Tracks connected sockets, background tasks and the sync poller."""

    def __init__(self, broadcast_topic: str = DEFAULT_BROADCAST_TOPIC) -> None:
        self.broadcast_topic = broadcast_topic
        self.connected_sockets: set[LiveViewSocket[DashboardContext]] = set()
        self.sync_poller: SyncPoller | None = None
        self._background_tasks: set[asyncio.Task[Any]] = set()

    async def start_sync_poller(
        self, dashboard_service: DashboardService, interval_seconds: int
    ) -> None:
        """Start periodic syncing; an interval of 0 leaves syncing manual."""
        if interval_seconds <= 0:
            logger.info("Automatic sync disabled")
            return
        if self.sync_poller is not None:
            logger.warning("Sync poller already running")
            return

        self.sync_poller = SyncPoller(dashboard_service, interval_seconds)
        await self.sync_poller.start()

    async def stop_sync_poller(self) -> None:
        """Stop the sync poller task."""
        if self.sync_poller is not None:
            await self.sync_poller.stop()
            self.sync_poller = None
            logger.info("Stopped sync poller")

    def spawn(self, coro: Coroutine[Any, Any, Any], name: str) -> asyncio.Task[Any]:
        """Run a dashboard operation without blocking the socket that requested it."""
        task = asyncio.create_task(coro, name=name)
        self._background_tasks.add(task)
        task.add_done_callback(self._on_task_done)
        return task

    def _on_task_done(self, task: asyncio.Task[Any]) -> None:
        self._background_tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(f"Background task {task.get_name()} failed: {error}", exc_info=error)

    async def cancel_background_tasks(self) -> None:
        for task in list(self._background_tasks):
            task.cancel()
        if self._background_tasks:
            await asyncio.gather(*self._background_tasks, return_exceptions=True)
        self._background_tasks.clear()

    def register_socket(self, socket: LiveViewSocket[DashboardContext]) -> None:
        """Register a socket for updates."""
        self.connected_sockets.add(socket)
        logger.info(f"Registered socket, total connected: {len(self.connected_sockets)}")

    def unregister_socket(self, socket: LiveViewSocket[DashboardContext]) -> None:
        """Unregister a socket. Idempotent."""
        self.connected_sockets.discard(socket)
        logger.info(f"Unregistered socket, total connected: {len(self.connected_sockets)}")
