"""Web adapter serving the dashboard over pyview."""

from agent_idle_monitor.adapters.web.pyview_app import PyViewWebAdapter

__all__ = ["PyViewWebAdapter"]
