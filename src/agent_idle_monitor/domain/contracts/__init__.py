"""Contracts (protocols) for dashboard collaborators."""

from agent_idle_monitor.domain.contracts.state_broadcaster import StateBroadcasterProtocol
from agent_idle_monitor.domain.contracts.sync_poller import SyncPollerProtocol

__all__ = ["StateBroadcasterProtocol", "SyncPollerProtocol"]
