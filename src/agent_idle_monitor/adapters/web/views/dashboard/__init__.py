"""Dashboard LiveView."""

from agent_idle_monitor.adapters.web.views.dashboard.dashboard import (
    DashboardLiveView,
    create_dashboard_live_view,
    payload_value,
)

__all__ = ["DashboardLiveView", "create_dashboard_live_view", "payload_value"]
