"""Test doubles shared across test modules."""

import json
from typing import Any

from agent_idle_monitor.domain.models import Profile
from agent_idle_monitor.domain.ports import ProfileRepository


class FakeResponse:
    """Minimal stand-in for an aiohttp response used as an async context manager."""

    def __init__(self, status: int, body: Any) -> None:
        self.status = status
        if isinstance(body, str):
            body = body.encode("utf-8")
        elif not isinstance(body, bytes):
            body = json.dumps(body).encode("utf-8")
        self._body = body

    async def text(self, encoding: str = "utf-8", errors: str = "strict") -> str:
        return self._body.decode(encoding, errors)

    async def __aenter__(self) -> "FakeResponse":
        return self

    async def __aexit__(self, *_exc: object) -> bool:
        return False


class InMemoryProfileRepository(ProfileRepository):
    """Profile repository keeping everything in memory."""

    def __init__(
        self, profiles: list[Profile] | None = None, active_id: str | None = None
    ) -> None:
        self.profiles = profiles
        self.active_id = active_id
        self.save_count = 0

    def load_profiles(self) -> list[Profile] | None:
        return list(self.profiles) if self.profiles is not None else None

    def save_profiles(self, profiles: list[Profile]) -> None:
        self.profiles = list(profiles)
        self.save_count += 1

    def load_active_profile_id(self) -> str | None:
        return self.active_id

    def save_active_profile_id(self, profile_id: str) -> None:
        self.active_id = profile_id
