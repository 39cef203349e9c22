"""Persistence adapters."""

from agent_idle_monitor.adapters.storage.json_profile_repository import JsonProfileRepository

__all__ = ["JsonProfileRepository"]
