"""Builders for web adapter."""

from agent_idle_monitor.adapters.web.builders.template_data_builder import TemplateDataBuilder

__all__ = ["TemplateDataBuilder"]
