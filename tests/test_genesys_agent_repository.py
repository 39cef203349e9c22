"""Tests for the Genesys Cloud agent repository."""

import logging
from datetime import UTC, datetime
from unittest.mock import MagicMock

import aiohttp
import pytest

from agent_idle_monitor.adapters.genesys_api import GenesysAgentRepository
from agent_idle_monitor.domain.errors import (
    AuthenticationFailedError,
    ConnectionBlockedError,
    FetchFailedError,
    MissingCredentialsError,
)
from tests.fakes import FakeResponse

NOW = datetime(2024, 5, 1, 10, 0, tzinfo=UTC)


def _users_page(count: int, page_count: int, offset: int = 0) -> dict:
    return {
        "entities": [
            {
                "id": f"user-{offset + i}",
                "name": f"Agent {offset + i}",
                "department": "Support",
                "presence": {"presenceDefinition": {"systemPresence": "On Queue"}},
                "routingStatus": {"status": "IDLE", "startTime": "2024-05-01T09:30:00.000Z"},
            }
            for i in range(count)
        ],
        "pageCount": page_count,
    }


def _session(token_response: FakeResponse, page_responses: list[FakeResponse]) -> MagicMock:
    session = MagicMock()
    session.post = MagicMock(return_value=token_response)
    session.get = MagicMock(side_effect=page_responses)
    return session


def _token_ok() -> FakeResponse:
    return FakeResponse(200, {"access_token": "tok-123", "token_type": "bearer"})


@pytest.mark.asyncio
async def test_when_roster_spans_pages_then_accumulates_all_entities(make_profile) -> None:
    """Given 237 users over 3 pages, when fetching, then returns 237 agents with 3 page requests."""
    session = _session(
        _token_ok(),
        [
            FakeResponse(200, _users_page(100, 3)),
            FakeResponse(200, _users_page(100, 3, offset=100)),
            FakeResponse(200, _users_page(37, 3, offset=200)),
        ],
    )
    repository = GenesysAgentRepository(session, clock=lambda: NOW)

    agents = await repository.fetch_agents(make_profile())

    assert len(agents) == 237
    assert session.get.call_count == 3
    assert [a.id for a in agents[:2]] == ["user-0", "user-1"]
    assert agents[-1].id == "user-236"
    assert agents[0].idle_minutes == 30


@pytest.mark.asyncio
async def test_when_fetching_then_requests_expanded_pages_with_bearer_token(make_profile) -> None:
    """Given a valid token, when fetching, then each page request carries paging and auth."""
    session = _session(_token_ok(), [FakeResponse(200, _users_page(1, 1))])
    repository = GenesysAgentRepository(session, clock=lambda: NOW)

    await repository.fetch_agents(make_profile())

    page_url = session.get.call_args.args[0]
    headers = session.get.call_args.kwargs["headers"]
    assert page_url.startswith("https://api.mypurecloud.com.au/api/v2/users?")
    assert "pageSize=100" in page_url
    assert "pageNumber=1" in page_url
    assert "expand=presence,routingStatus" in page_url
    assert headers["Authorization"] == "Bearer tok-123"
    assert headers["Cache-Control"] == "no-cache"


@pytest.mark.asyncio
async def test_when_proxy_configured_then_prefixes_every_url(make_profile) -> None:
    """Given a CORS proxy, when fetching, then token and page URLs are prefixed verbatim."""
    session = _session(_token_ok(), [FakeResponse(200, _users_page(1, 1))])
    repository = GenesysAgentRepository(session, clock=lambda: NOW)
    profile = make_profile(
        cors_proxy="https://corsproxy.io/?", login_host="https://login.mypurecloud.com.au/"
    )

    await repository.fetch_agents(profile)

    assert (
        session.post.call_args.args[0]
        == "https://corsproxy.io/?https://login.mypurecloud.com.au/oauth/token"
    )
    assert session.get.call_args.args[0].startswith(
        "https://corsproxy.io/?https://api.mypurecloud.com.au/api/v2/users?"
    )


@pytest.mark.asyncio
async def test_when_token_request_sent_then_uses_client_credentials_grant(make_profile) -> None:
    """Given credentials with whitespace, when requesting a token, then they are trimmed."""
    session = _session(_token_ok(), [FakeResponse(200, _users_page(0, 1))])
    repository = GenesysAgentRepository(session, clock=lambda: NOW)

    await repository.fetch_agents(make_profile(client_id=" client ", client_secret="secret\n"))

    kwargs = session.post.call_args.kwargs
    assert kwargs["data"] == {"grant_type": "client_credentials"}
    assert kwargs["headers"]["Authorization"] == "Basic Y2xpZW50OnNlY3JldA=="


@pytest.mark.asyncio
async def test_when_credentials_blank_then_raises_without_request(make_profile) -> None:
    """Given whitespace-only credentials, when fetching, then no request is made."""
    session = _session(_token_ok(), [])
    repository = GenesysAgentRepository(session)

    with pytest.raises(MissingCredentialsError) as exc_info:
        await repository.fetch_agents(make_profile(client_id="   ", client_secret="secret"))

    assert exc_info.value.display_message.startswith("Missing Credentials:")
    session.post.assert_not_called()
    session.get.assert_not_called()


@pytest.mark.asyncio
async def test_when_token_refused_then_raises_authentication_failed(make_profile) -> None:
    """Given a 401 with invalid_client, when fetching, then the error carries that detail."""
    body = {"error": "unauthorized", "error_description": "invalid_client"}
    session = _session(FakeResponse(401, body), [])
    repository = GenesysAgentRepository(session)

    with pytest.raises(AuthenticationFailedError) as exc_info:
        await repository.fetch_agents(make_profile())

    assert exc_info.value.display_message == "Authentication failed: invalid_client"
    session.get.assert_not_called()


@pytest.mark.asyncio
async def test_when_token_missing_from_response_then_raises_authentication_failed(
    make_profile,
) -> None:
    """Given a 200 without access_token, when fetching, then authentication fails."""
    session = _session(FakeResponse(200, {"token_type": "bearer"}), [])
    repository = GenesysAgentRepository(session)

    with pytest.raises(AuthenticationFailedError, match="no token"):
        await repository.fetch_agents(make_profile())


@pytest.mark.asyncio
async def test_when_page_fails_then_raises_fetch_failed_with_page_number(make_profile) -> None:
    """Given page 2 returns 500, when fetching, then the error names page 2 and the status."""
    session = _session(
        _token_ok(),
        [FakeResponse(200, _users_page(100, 3)), FakeResponse(500, "boom")],
    )
    repository = GenesysAgentRepository(session, clock=lambda: NOW)

    with pytest.raises(FetchFailedError) as exc_info:
        await repository.fetch_agents(make_profile())

    assert exc_info.value.page == 2
    assert "(Page 2): 500 - boom" in exc_info.value.display_message
    assert session.get.call_count == 2


@pytest.mark.asyncio
async def test_when_server_unreachable_then_raises_connection_blocked(make_profile) -> None:
    """Given a transport error, when fetching, then raises ConnectionBlockedError."""
    session = MagicMock()
    session.post = MagicMock(side_effect=aiohttp.ClientConnectionError("proxy down"))
    repository = GenesysAgentRepository(session)

    with pytest.raises(ConnectionBlockedError) as exc_info:
        await repository.fetch_agents(make_profile())

    assert exc_info.value.display_message.startswith("Connection failed:")
    assert exc_info.value.cause == "proxy down"


@pytest.mark.asyncio
async def test_when_token_error_body_is_not_utf8_then_raises_authentication_failed(
    make_profile,
) -> None:
    """Given a 401 with an undecodable proxy page, when fetching, then auth still fails cleanly."""
    session = _session(FakeResponse(401, b"\xff\xfe bad gateway"), [])
    repository = GenesysAgentRepository(session)

    with pytest.raises(AuthenticationFailedError) as exc_info:
        await repository.fetch_agents(make_profile())

    assert "bad gateway" in exc_info.value.display_message


@pytest.mark.asyncio
async def test_when_page_body_is_not_utf8_then_raises_fetch_failed(make_profile) -> None:
    """Given a 502 page with undecodable bytes, when fetching, then FetchFailedError is raised."""
    session = _session(_token_ok(), [FakeResponse(502, b"\x80\x81 upstream error")])
    repository = GenesysAgentRepository(session, clock=lambda: NOW)

    with pytest.raises(FetchFailedError) as exc_info:
        await repository.fetch_agents(make_profile())

    assert exc_info.value.status == 502
    assert "upstream error" in exc_info.value.display_message


@pytest.mark.asyncio
async def test_when_page_count_is_not_numeric_then_single_page_is_read(make_profile) -> None:
    """Given pageCount 'n/a', when fetching, then the first page is used and paging stops."""
    page = _users_page(2, 1)
    page["pageCount"] = "n/a"
    session = _session(_token_ok(), [FakeResponse(200, page)])
    repository = GenesysAgentRepository(session, clock=lambda: NOW)

    agents = await repository.fetch_agents(make_profile())

    assert len(agents) == 2
    assert session.get.call_count == 1


@pytest.mark.asyncio
async def test_when_server_reports_endless_pages_then_stops_at_ceiling(
    make_profile, caplog: pytest.LogCaptureFixture
) -> None:
    """Given every page claims 1000 pages, when fetching, then exactly 100 pages are read."""
    calls: list[int] = []

    def next_page(*_args, **_kwargs) -> FakeResponse:
        calls.append(1)
        return FakeResponse(200, _users_page(1, 1000, offset=len(calls)))

    session = MagicMock()
    session.post = MagicMock(return_value=_token_ok())
    session.get = MagicMock(side_effect=next_page)
    repository = GenesysAgentRepository(session, clock=lambda: NOW)

    with caplog.at_level(logging.WARNING):
        agents = await repository.fetch_agents(make_profile())

    assert session.get.call_count == 100
    assert len(agents) == 100
    assert "Stopped after 100 pages" in caplog.text
