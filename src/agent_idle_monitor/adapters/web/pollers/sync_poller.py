"""Background poller re-syncing the active profile on an interval."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from agent_idle_monitor.domain.contracts.sync_poller import SyncPollerProtocol

if TYPE_CHECKING:
    from agent_idle_monitor.application.services.dashboard_service import DashboardService

logger = logging.getLogger(__name__)


class SyncPoller(SyncPollerProtocol):
    """Periodically triggers a roster sync for whichever profile is active."""

    def __init__(self, dashboard_service: DashboardService, interval_seconds: int) -> None:
        """Initialize the sync poller.

        Args:
            dashboard_service: Service whose ``sync`` is called on every tick.
            interval_seconds: Seconds between sync attempts.
        """
        self.dashboard_service = dashboard_service
        self.interval_seconds = interval_seconds
        self._task: asyncio.Task | None = None

    async def start(self) -> None:
        """Start the sync poller."""
        if self._task is not None and not self._task.done():
            logger.warning("Sync poller already running")
            return

        self._task = asyncio.create_task(self._poll_loop())
        logger.info(f"Started sync poller task (every {self.interval_seconds}s)")

    async def stop(self) -> None:
        """Stop the sync poller."""
        if self._task and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                logger.info("Sync poller cancelled")
            logger.info("Stopped sync poller")

    async def _poll_loop(self) -> None:
        """Main polling loop."""
        try:
            while True:
                await self._sync_once()
                await asyncio.sleep(self.interval_seconds)
        except asyncio.CancelledError:
            logger.info("Sync poller cancelled")
            raise

    async def _sync_once(self) -> None:
        profile = self.dashboard_service.active_profile
        if not profile.has_credentials:
            logger.debug(f"Skipping automatic sync: profile '{profile.name}' has no credentials")
            return
        try:
            await self.dashboard_service.sync()
        except Exception as e:
            logger.error(f"Automatic sync for profile '{profile.name}' failed: {e}", exc_info=True)
