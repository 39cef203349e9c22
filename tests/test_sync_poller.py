"""Tests for the automatic sync poller and the web State manager."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from agent_idle_monitor.adapters.web.pollers import SyncPoller
from agent_idle_monitor.adapters.web.state import State


@pytest.fixture
def dashboard_service(make_profile) -> MagicMock:
    service = MagicMock()
    service.active_profile = make_profile()
    service.sync = AsyncMock(return_value=True)
    return service


@pytest.mark.asyncio
async def test_poller_syncs_immediately_and_stops_cleanly(dashboard_service: MagicMock) -> None:
    """Given a running poller, when stopped after the first tick, then one sync happened."""
    poller = SyncPoller(dashboard_service, interval_seconds=60)

    await poller.start()
    await asyncio.sleep(0)
    await poller.stop()

    dashboard_service.sync.assert_awaited_once()


@pytest.mark.asyncio
async def test_poller_skips_profiles_without_credentials(
    dashboard_service: MagicMock, make_profile
) -> None:
    """Given a profile without credentials, when ticking, then no sync is attempted."""
    dashboard_service.active_profile = make_profile(client_id="", client_secret="")
    poller = SyncPoller(dashboard_service, interval_seconds=60)

    await poller._sync_once()

    dashboard_service.sync.assert_not_called()


@pytest.mark.asyncio
async def test_poller_survives_sync_failures(dashboard_service: MagicMock) -> None:
    """Given sync raising, when ticking, then the error is logged and not raised."""
    dashboard_service.sync.side_effect = RuntimeError("boom")
    poller = SyncPoller(dashboard_service, interval_seconds=60)

    await poller._sync_once()

    dashboard_service.sync.assert_awaited_once()


@pytest.mark.asyncio
async def test_zero_interval_leaves_sync_manual(dashboard_service: MagicMock) -> None:
    state = State()

    await state.start_sync_poller(dashboard_service, 0)

    assert state.sync_poller is None


@pytest.mark.asyncio
async def test_state_starts_and_stops_poller(dashboard_service: MagicMock) -> None:
    state = State()

    await state.start_sync_poller(dashboard_service, 30)
    assert state.sync_poller is not None

    await state.stop_sync_poller()
    assert state.sync_poller is None


@pytest.mark.asyncio
async def test_spawned_task_failure_is_contained() -> None:
    """Given a failing background task, when it finishes, then it is dropped from tracking."""
    state = State()

    async def failing() -> None:
        raise RuntimeError("boom")

    task = state.spawn(failing(), name="failing-task")
    with pytest.raises(RuntimeError):
        await task
    await asyncio.sleep(0)

    assert task not in state._background_tasks


@pytest.mark.asyncio
async def test_cancel_background_tasks_cancels_pending_work() -> None:
    state = State()
    task = state.spawn(asyncio.sleep(60), name="sleeper")

    await state.cancel_background_tasks()

    assert task.cancelled()


def test_socket_registration_is_idempotent() -> None:
    state = State()
    socket = MagicMock()

    state.register_socket(socket)
    state.unregister_socket(socket)
    state.unregister_socket(socket)

    assert state.connected_sockets == set()
