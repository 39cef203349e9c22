"""Domain layer - core models, errors and ports."""

from agent_idle_monitor.domain.models import (
    AIAnalysis,
    Agent,
    AgentFilter,
    Profile,
    SyncSnapshot,
)
from agent_idle_monitor.domain.ports import (
    AgentRepository,
    DisplayAdapter,
    InsightService,
    ProfileRepository,
)

__all__ = [
    "AIAnalysis",
    "Agent",
    "AgentFilter",
    "AgentRepository",
    "DisplayAdapter",
    "InsightService",
    "Profile",
    "ProfileRepository",
    "SyncSnapshot",
]
