"""Configuration adapters."""

from agent_idle_monitor.adapters.config.app_config import AppConfig
from agent_idle_monitor.adapters.config.profile_configuration_loader import (
    ProfileConfigurationLoader,
)

__all__ = ["AppConfig", "ProfileConfigurationLoader"]
