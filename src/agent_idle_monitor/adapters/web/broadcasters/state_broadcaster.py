"""Pub/sub delivery of dashboard revisions."""

from __future__ import annotations

import logging

from pyview.live_socket import pub_sub_hub
from pyview.vendor.flet.pubsub import PubSub

from agent_idle_monitor.domain.contracts.state_broadcaster import StateBroadcasterProtocol
from agent_idle_monitor.domain.models.dashboard_update import DashboardUpdate

logger = logging.getLogger(__name__)


class StateBroadcaster(StateBroadcasterProtocol):
    """Sends each dashboard revision to the LiveViews subscribed on pyview's hub."""

    def __init__(self) -> None:
        self.last_sent_revision = 0

    async def broadcast_update(self, topic: str, update: DashboardUpdate) -> None:
        """Publish a revision; revisions older than the last one sent are dropped."""
        if update.revision <= self.last_sent_revision:
            logger.debug(
                f"Skipping revision {update.revision}, already sent {self.last_sent_revision}"
            )
            return

        try:
            await PubSub(pub_sub_hub, topic).send_all_on_topic_async(topic, update.to_message())
        except Exception as e:
            # A failed delivery leaves views one revision behind until the next change
            logger.error(
                f"Failed to publish revision {update.revision} for profile "
                f"{update.profile_id} on {topic}: {e}",
                exc_info=True,
            )
            return
        self.last_sent_revision = max(self.last_sent_revision, update.revision)
        logger.debug(f"Published revision {update.revision} for {update.profile_id} on {topic}")
