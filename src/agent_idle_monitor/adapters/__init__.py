"""Adapters layer - external system integrations."""

from agent_idle_monitor.adapters.config import AppConfig, ProfileConfigurationLoader
from agent_idle_monitor.adapters.gemini_api import GeminiInsightService
from agent_idle_monitor.adapters.genesys_api import GenesysAgentRepository
from agent_idle_monitor.adapters.storage import JsonProfileRepository

__all__ = [
    "AppConfig",
    "GeminiInsightService",
    "GenesysAgentRepository",
    "JsonProfileRepository",
    "ProfileConfigurationLoader",
]
