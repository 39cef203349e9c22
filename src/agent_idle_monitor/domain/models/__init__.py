"""Domain models for the agent idle monitor."""

from agent_idle_monitor.domain.models.agent import ROUTING_STATUSES, Agent, normalize_presence
from agent_idle_monitor.domain.models.agent_filter import ALL, AgentFilter
from agent_idle_monitor.domain.models.ai_analysis import AIAnalysis
from agent_idle_monitor.domain.models.dashboard_update import DashboardUpdate
from agent_idle_monitor.domain.models.metric_summary import MetricSummary, StatusBucket
from agent_idle_monitor.domain.models.profile import Profile
from agent_idle_monitor.domain.models.sync_snapshot import SyncSnapshot

__all__ = [
    "ALL",
    "AIAnalysis",
    "Agent",
    "AgentFilter",
    "DashboardUpdate",
    "MetricSummary",
    "Profile",
    "ROUTING_STATUSES",
    "StatusBucket",
    "SyncSnapshot",
    "normalize_presence",
]
