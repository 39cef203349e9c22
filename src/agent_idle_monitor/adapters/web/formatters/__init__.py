"""Formatters for web adapter."""

from agent_idle_monitor.adapters.web.formatters.agent_formatter import AgentFormatter

__all__ = ["AgentFormatter"]
