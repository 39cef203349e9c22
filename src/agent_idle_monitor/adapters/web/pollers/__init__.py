"""Pollers for web adapter."""

from agent_idle_monitor.adapters.web.pollers.sync_poller import SyncPoller

__all__ = ["SyncPoller"]
