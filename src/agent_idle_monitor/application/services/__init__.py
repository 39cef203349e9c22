"""Application services (use cases) for the agent dashboard."""

from agent_idle_monitor.application.services.dashboard_service import (
    TABS,
    DashboardService,
    DashboardState,
    RequestTicket,
)
from agent_idle_monitor.application.services.filters import (
    ROUTING_STATUS_OPTIONS,
    filter_agents,
    presence_options,
)
from agent_idle_monitor.application.services.metrics import (
    compute_metrics,
    on_queue_agents,
    snapshot_counts,
    status_distribution,
)
from agent_idle_monitor.application.services.profile_store import (
    DEFAULT_PROFILES,
    ProfileStore,
    new_profile_template,
)
from agent_idle_monitor.application.services.sync_history import (
    DEFAULT_HISTORY_SIZE,
    append_snapshot,
)

__all__ = [
    "DEFAULT_HISTORY_SIZE",
    "DEFAULT_PROFILES",
    "ROUTING_STATUS_OPTIONS",
    "TABS",
    "DashboardService",
    "DashboardState",
    "ProfileStore",
    "RequestTicket",
    "append_snapshot",
    "compute_metrics",
    "filter_agents",
    "new_profile_template",
    "on_queue_agents",
    "presence_options",
    "snapshot_counts",
    "status_distribution",
]
