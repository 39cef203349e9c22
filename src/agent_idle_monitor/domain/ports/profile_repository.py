"""Profile repository port."""

from typing import Protocol

from agent_idle_monitor.domain.models.profile import Profile


class ProfileRepository(Protocol):
    """Port for persisting the saved profile list and the active-profile pointer."""

    def load_profiles(self) -> list[Profile] | None:
        """Return saved profiles, or None when nothing usable is stored."""
        ...

    def save_profiles(self, profiles: list[Profile]) -> None:
        """Persist the ordered profile list."""
        ...

    def load_active_profile_id(self) -> str | None:
        """Return the saved active-profile id, if any."""
        ...

    def save_active_profile_id(self, profile_id: str) -> None:
        """Persist the active-profile id."""
        ...
