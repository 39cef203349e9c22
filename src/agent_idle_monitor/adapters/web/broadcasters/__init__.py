"""Broadcasters for web adapter."""

from agent_idle_monitor.adapters.web.broadcasters.state_broadcaster import StateBroadcaster

__all__ = ["StateBroadcaster"]
