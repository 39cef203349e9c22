"""Genesys Cloud API adapter."""

from agent_idle_monitor.adapters.genesys_api.genesys_agent_repository import (
    GenesysAgentRepository,
)

__all__ = ["GenesysAgentRepository"]
