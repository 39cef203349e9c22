"""Ports (interfaces) for the ports-and-adapters architecture."""

from agent_idle_monitor.domain.ports.agent_repository import AgentRepository
from agent_idle_monitor.domain.ports.display_adapter import DisplayAdapter
from agent_idle_monitor.domain.ports.insight_service import InsightService
from agent_idle_monitor.domain.ports.profile_repository import ProfileRepository

__all__ = [
    "AgentRepository",
    "DisplayAdapter",
    "InsightService",
    "ProfileRepository",
]
