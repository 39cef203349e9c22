"""File-backed key-value store for saved profiles."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from agent_idle_monitor.domain.models.profile import Profile
from agent_idle_monitor.domain.ports.profile_repository import ProfileRepository

logger = logging.getLogger(__name__)

PROFILES_KEY = "genesys_profiles"
ACTIVE_PROFILE_KEY = "active_profile_id"


class JsonProfileRepository(ProfileRepository):
    """Profile repository persisting two string blobs in a JSON object file.

    ``genesys_profiles`` holds the JSON-encoded profile list and
    ``active_profile_id`` the plain id of the active profile.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load_profiles(self) -> list[Profile] | None:
        blob = self._read_store().get(PROFILES_KEY)
        if not blob:
            return None
        try:
            raw = json.loads(blob) if isinstance(blob, str) else blob
            if not isinstance(raw, list):
                raise ValueError(f"expected a list, got {type(raw).__name__}")
            profiles = [Profile.from_dict(item) for item in raw]
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning(f"Ignoring corrupt profile data in {self.path}: {e}")
            return None
        return profiles or None

    def save_profiles(self, profiles: list[Profile]) -> None:
        store = self._read_store()
        store[PROFILES_KEY] = json.dumps([p.to_dict() for p in profiles])
        self._write_store(store)

    def load_active_profile_id(self) -> str | None:
        value = self._read_store().get(ACTIVE_PROFILE_KEY)
        return value if isinstance(value, str) and value else None

    def save_active_profile_id(self, profile_id: str) -> None:
        store = self._read_store()
        store[ACTIVE_PROFILE_KEY] = profile_id
        self._write_store(store)

    def _read_store(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read profile store {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Profile store {self.path} is not a JSON object, ignoring it")
            return {}
        return data

    def _write_store(self, store: dict[str, Any]) -> None:
        directory = self.path.parent
        directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=directory, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(store, f, indent=2)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
