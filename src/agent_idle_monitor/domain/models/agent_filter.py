"""Agent list filter model."""

from dataclasses import dataclass

ALL = "All"


@dataclass(frozen=True)
class AgentFilter:
    """Search and dropdown filters for the agent roster view."""

    search_term: str = ""
    status_filter: str = ALL
    presence_filter: str = ALL

    @property
    def is_active(self) -> bool:
        """Whether any filter narrows the roster."""
        return bool(self.search_term) or self.status_filter != ALL or self.presence_filter != ALL
