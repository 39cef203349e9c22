"""Formatter for agent rows and sync timestamps."""

from datetime import datetime
from zoneinfo import ZoneInfo

from agent_idle_monitor.adapters.config.app_config import AppConfig
from agent_idle_monitor.domain.models.agent import COMMUNICATING, IDLE, INTERACTING, OFF_LINE

_STATUS_BADGES = {
    IDLE: "badge badge-idle",
    COMMUNICATING: "badge badge-communicating",
    OFF_LINE: "badge badge-offline",
    INTERACTING: "badge badge-interacting",
}
_DEFAULT_BADGE = "badge badge-other"


class AgentFormatter:
    """Formats agent values for display based on configuration."""

    def __init__(self, config: AppConfig) -> None:
        """Initialize the formatter.

        Args:
            config: Application configuration with the display timezone.
        """
        self.config = config
        self.timezone = ZoneInfo(config.timezone)

    def format_idle_minutes(self, minutes: int) -> str:
        return f"{minutes}m"

    def format_score(self, score: int) -> str:
        return f"{score}%"

    def status_badge_class(self, routing_status: str) -> str:
        """CSS classes for a routing-status badge; unknown statuses get a neutral badge."""
        return _STATUS_BADGES.get(routing_status, _DEFAULT_BADGE)

    def efficiency_class(self, score: int) -> str:
        if score > 85:
            return "score-high"
        if score > 60:
            return "score-mid"
        return "score-low"

    def initials(self, name: str) -> str:
        """First letter of each word, e.g. 'Ada Lovelace' -> 'AL'."""
        return "".join(part[0] for part in name.split() if part).upper()

    def format_last_synced(self, synced_at: datetime | None) -> str:
        """Format a profile's last successful sync in the configured timezone."""
        if synced_at is None:
            return "Never"
        return synced_at.astimezone(self.timezone).strftime("%Y-%m-%d %H:%M:%S")

    def format_update_time(self, update_time: datetime | None) -> str:
        """Format last update time."""
        if not update_time:
            return "Never"
        return update_time.astimezone(self.timezone).strftime("%H:%M:%S")
