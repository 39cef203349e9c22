"""Agent domain model."""

import re
from dataclasses import dataclass

IDLE = "IDLE"
COMMUNICATING = "COMMUNICATING"
INTERACTING = "INTERACTING"
OFF_LINE = "OFF_LINE"
NOT_RESPONDING = "NOT_RESPONDING"

ROUTING_STATUSES: tuple[str, ...] = (IDLE, COMMUNICATING, INTERACTING, OFF_LINE, NOT_RESPONDING)

ON_QUEUE = "onqueue"

_WHITESPACE = re.compile(r"\s+")


def normalize_presence(presence: str) -> str:
    """Lowercase a presence label and drop all whitespace ("On Queue" -> "onqueue")."""
    return _WHITESPACE.sub("", presence.lower())


@dataclass(frozen=True)
class Agent:
    """Point-in-time snapshot of a single agent's presence and routing state."""

    id: str
    name: str
    presence: str  # System presence label, e.g. "On Queue", "Available", "Offline"
    routing_status: str  # One of ROUTING_STATUSES (unknown upstream values kept verbatim)
    idle_minutes: int  # Always 0 unless routing_status is IDLE
    last_status_change: str  # ISO 8601 timestamp
    queue: str
    efficiency_score: int  # 0-100 heuristic

    @property
    def is_on_queue(self) -> bool:
        """Whether the agent is available for routed work."""
        return normalize_presence(self.presence) == ON_QUEUE
