"""Saved connection profiles and the active-profile pointer."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import TYPE_CHECKING

from agent_idle_monitor.domain.errors import LastProfileError
from agent_idle_monitor.domain.models.profile import (
    DEFAULT_API_HOST,
    DEFAULT_CORS_PROXY,
    DEFAULT_LOGIN_HOST,
    DEFAULT_REGION,
    Profile,
)

if TYPE_CHECKING:
    from agent_idle_monitor.domain.ports import ProfileRepository

logger = logging.getLogger(__name__)

DEFAULT_PROFILES: tuple[Profile, ...] = (
    Profile(
        id="examp-001",
        name="Example",
        region=DEFAULT_REGION,
        api_host=DEFAULT_API_HOST,
        login_host=DEFAULT_LOGIN_HOST,
        client_id="",
        client_secret="",
        cors_proxy=DEFAULT_CORS_PROXY,
    ),
)


def new_profile_template(now: datetime) -> Profile:
    """Build the starting point for a profile created from the admin panel."""
    return Profile(
        id=f"cust-{int(now.timestamp() * 1000)}",
        name="New Customer",
        region=DEFAULT_REGION,
        api_host=DEFAULT_API_HOST,
        login_host=DEFAULT_LOGIN_HOST,
        client_id="",
        client_secret="",
        cors_proxy=DEFAULT_CORS_PROXY,
    )


class ProfileStore:
    """Holds the ordered profile list and which profile is active.

    At least one profile always exists and the active id always resolves to one
    of them. Every mutation is written through to the repository.
    """

    def __init__(
        self,
        repository: ProfileRepository,
        defaults: list[Profile] | tuple[Profile, ...] = DEFAULT_PROFILES,
    ) -> None:
        """Load profiles from the repository, falling back to ``defaults``.

        Args:
            repository: Persistence for the profile list and active id.
            defaults: Profiles used when nothing usable is stored. Must not be empty.
        """
        if not defaults:
            raise ValueError("defaults must contain at least one profile")
        self._repository = repository
        loaded = repository.load_profiles()
        if not loaded:
            logger.info(f"No saved profiles found, using {len(defaults)} default profile(s)")
            loaded = list(defaults)
        self._profiles: list[Profile] = list(loaded)
        self._active_id = repository.load_active_profile_id() or self._profiles[0].id

    @property
    def profiles(self) -> list[Profile]:
        """Profiles in display order (a copy)."""
        return list(self._profiles)

    @property
    def active_profile(self) -> Profile:
        """The active profile, or the first profile if the pointer is dangling."""
        return self.get(self._active_id) or self._profiles[0]

    @property
    def active_profile_id(self) -> str:
        """Id of the profile returned by ``active_profile``."""
        return self.active_profile.id

    def get(self, profile_id: str) -> Profile | None:
        """Look up a profile by id."""
        return next((p for p in self._profiles if p.id == profile_id), None)

    def upsert(self, profile: Profile) -> None:
        """Replace the profile with the same id in place, or append it."""
        for index, existing in enumerate(self._profiles):
            if existing.id == profile.id:
                self._profiles[index] = profile
                logger.info(f"Updated profile '{profile.name}' ({profile.id})")
                break
        else:
            self._profiles.append(profile)
            logger.info(f"Added profile '{profile.name}' ({profile.id})")
        self._persist()

    def delete(self, profile_id: str) -> bool:
        """Delete a profile.

        Returns:
            True if the active profile changed as a result.

        Raises:
            LastProfileError: If this is the only remaining profile.
        """
        if self.get(profile_id) is None:
            logger.warning(f"Ignoring delete of unknown profile {profile_id}")
            return False
        if len(self._profiles) <= 1:
            raise LastProfileError()

        was_active = profile_id == self.active_profile_id
        self._profiles = [p for p in self._profiles if p.id != profile_id]
        if was_active:
            self._active_id = self._profiles[0].id
        logger.info(f"Deleted profile {profile_id}")
        self._persist()
        return was_active

    def select(self, profile_id: str) -> bool:
        """Make a profile active.

        Returns:
            True if the active profile changed.

        Raises:
            KeyError: If no profile has this id.
        """
        if self.get(profile_id) is None:
            raise KeyError(profile_id)
        changed = profile_id != self.active_profile_id
        self._active_id = profile_id
        self._repository.save_active_profile_id(profile_id)
        return changed

    def mark_synced(self, profile_id: str, when: datetime) -> None:
        """Record the time of the last successful sync for a profile."""
        profile = self.get(profile_id)
        if profile is not None:
            self.upsert(replace(profile, last_synced_at=when))

    def _persist(self) -> None:
        self._repository.save_profiles(self._profiles)
        self._repository.save_active_profile_id(self.active_profile_id)
