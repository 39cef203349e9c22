"""Connection profile domain model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

DEFAULT_REGION = "ap_southeast_2"
DEFAULT_API_HOST = "https://api.mypurecloud.com.au"
DEFAULT_LOGIN_HOST = "https://login.mypurecloud.com.au"
DEFAULT_CORS_PROXY = "https://corsproxy.io/?"


@dataclass(frozen=True)
class Profile:
    """Named connection configuration for one customer organization."""

    id: str
    name: str
    region: str
    api_host: str
    login_host: str
    client_id: str
    client_secret: str
    cors_proxy: str | None = None  # URL prefix prepended verbatim to outbound requests
    last_synced_at: datetime | None = None

    @property
    def has_credentials(self) -> bool:
        """Whether both OAuth credentials are present after trimming."""
        return bool(self.client_id.strip()) and bool(self.client_secret.strip())

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the persisted camelCase keys."""
        data: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "region": self.region,
            "apiHost": self.api_host,
            "loginHost": self.login_host,
            "clientId": self.client_id,
            "clientSecret": self.client_secret,
        }
        if self.cors_proxy:
            data["corsProxy"] = self.cors_proxy
        if self.last_synced_at is not None:
            data["lastSyncedAt"] = self.last_synced_at.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Profile:
        """Build a profile from its persisted form.

        Raises:
            KeyError: If ``id`` is missing.
            ValueError: If ``lastSyncedAt`` is not an ISO 8601 timestamp.
        """
        last_synced = data.get("lastSyncedAt")
        return cls(
            id=str(data["id"]),
            name=str(data.get("name") or data["id"]),
            region=str(data.get("region", "")),
            api_host=str(data.get("apiHost", "")),
            login_host=str(data.get("loginHost", "")),
            client_id=str(data.get("clientId", "")),
            client_secret=str(data.get("clientSecret", "")),
            cors_proxy=data.get("corsProxy") or None,
            last_synced_at=datetime.fromisoformat(last_synced) if last_synced else None,
        )
