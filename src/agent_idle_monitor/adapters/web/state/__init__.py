"""State management for the dashboard LiveView and background syncing."""

from agent_idle_monitor.adapters.web.state.dashboard_context import DashboardContext
from agent_idle_monitor.adapters.web.state.state import DEFAULT_BROADCAST_TOPIC, State

__all__ = ["DEFAULT_BROADCAST_TOPIC", "DashboardContext", "State"]
