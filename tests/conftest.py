"""Shared fixtures for agent idle monitor tests."""

from collections.abc import Callable
from typing import Any

import pytest

from agent_idle_monitor.domain.models import Agent, Profile


@pytest.fixture
def make_agent() -> Callable[..., Agent]:
    """Factory for agents; keyword arguments override the defaults."""

    def _make(**overrides: Any) -> Agent:
        values: dict[str, Any] = {
            "id": "agent-1",
            "name": "Ada Lovelace",
            "presence": "On Queue",
            "routing_status": "IDLE",
            "idle_minutes": 5,
            "last_status_change": "2024-05-01T09:55:00.000Z",
            "queue": "Support",
            "efficiency_score": 40,
        }
        values.update(overrides)
        return Agent(**values)

    return _make


@pytest.fixture
def make_profile() -> Callable[..., Profile]:
    """Factory for profiles with working credentials by default."""

    def _make(**overrides: Any) -> Profile:
        values: dict[str, Any] = {
            "id": "p1",
            "name": "Acme",
            "region": "ap_southeast_2",
            "api_host": "https://api.mypurecloud.com.au",
            "login_host": "https://login.mypurecloud.com.au",
            "client_id": "client",
            "client_secret": "secret",
            "cors_proxy": None,
        }
        values.update(overrides)
        return Profile(**values)

    return _make
