"""Contract for announcing dashboard changes to connected views."""

from typing import Protocol

from agent_idle_monitor.domain.models.dashboard_update import DashboardUpdate


class StateBroadcasterProtocol(Protocol):
    """Delivers dashboard revisions to every view subscribed to a topic."""

    async def broadcast_update(self, topic: str, update: DashboardUpdate) -> None:
        """Publish ``update`` on ``topic``. Delivery failures must not propagate."""
        ...
