"""Dashboard change notification."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

MESSAGE_TYPE = "dashboard_update"


@dataclass(frozen=True)
class DashboardUpdate:
    """Announces that shared dashboard state reached a new revision.

    Revisions grow by one per published change, so a view that has already
    rendered revision N can ignore any message carrying N or less.
    """

    profile_id: str
    revision: int

    def to_message(self) -> dict[str, Any]:
        return {"type": MESSAGE_TYPE, "profile_id": self.profile_id, "revision": self.revision}

    @classmethod
    def from_message(cls, message: Any) -> DashboardUpdate | None:
        """Parse a pub/sub payload; anything that is not a dashboard update yields None."""
        if not isinstance(message, dict) or message.get("type") != MESSAGE_TYPE:
            return None
        revision = message.get("revision")
        if not isinstance(revision, int):
            return None
        return cls(profile_id=str(message.get("profile_id", "")), revision=revision)
