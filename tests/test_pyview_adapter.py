"""Tests for PyViewWebAdapter wiring."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from agent_idle_monitor.adapters.config import AppConfig
from agent_idle_monitor.adapters.web import PyViewWebAdapter
from agent_idle_monitor.adapters.web.state import State


def test_adapter_rejects_non_config() -> None:
    with pytest.raises(TypeError, match="AppConfig"):
        PyViewWebAdapter(MagicMock(), {"port": 8000})  # type: ignore[arg-type]


def test_adapter_uses_service_topic_for_state() -> None:
    """Given a service topic, when no state is passed, then the state shares the topic."""
    service = MagicMock()
    service.broadcast_topic = "custom:topic"

    adapter = PyViewWebAdapter(service, AppConfig.for_testing())

    assert adapter.state_manager.broadcast_topic == "custom:topic"


def test_build_app_registers_routes() -> None:
    """Given an adapter, when building the app, then health and favicon routes exist."""
    service = MagicMock()
    service.broadcast_topic = "dashboard:updates"
    adapter = PyViewWebAdapter(service, AppConfig.for_testing(), State())

    app = adapter.build_app()

    paths = {getattr(route, "path", None) for route in app.routes}
    assert "/healthz" in paths
    assert "/favicon.svg" in paths


@pytest.mark.asyncio
async def test_stop_without_start_is_safe() -> None:
    state = State()
    state.stop_sync_poller = AsyncMock()  # type: ignore[method-assign]
    adapter = PyViewWebAdapter(MagicMock(), AppConfig.for_testing(), state)

    await adapter.stop()

    state.stop_sync_poller.assert_awaited_once()
