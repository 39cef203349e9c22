"""Genesys Cloud agent repository adapter.

Authenticates with the OAuth client-credentials grant and walks the paginated
``/api/v2/users`` endpoint, expanded with presence and routing status.
"""

from __future__ import annotations

import asyncio
import base64
import json
import logging
import time
from collections.abc import Callable
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any
from urllib.parse import urlencode

import aiohttp

from agent_idle_monitor.adapters.api_request_logger import log_api_request
from agent_idle_monitor.adapters.genesys_api.agent_normalizer import normalize_users
from agent_idle_monitor.adapters.genesys_api.constants import (
    MAX_PAGES,
    NO_CACHE_HEADERS,
    PAGE_SIZE,
    TOKEN_PATH,
    USERS_EXPAND,
    USERS_PATH,
)
from agent_idle_monitor.domain.errors import (
    AuthenticationFailedError,
    ConnectionBlockedError,
    FetchFailedError,
    MissingCredentialsError,
)
from agent_idle_monitor.domain.ports.agent_repository import AgentRepository

if TYPE_CHECKING:
    from aiohttp import ClientSession

    from agent_idle_monitor.domain.models.agent import Agent
    from agent_idle_monitor.domain.models.profile import Profile

logger = logging.getLogger(__name__)


def _strip_trailing_slashes(host: str) -> str:
    return host.strip().rstrip("/")


def _basic_auth_header(client_id: str, client_secret: str) -> str:
    credentials = base64.b64encode(f"{client_id}:{client_secret}".encode()).decode("ascii")
    return f"Basic {credentials}"


def _page_count(value: Any, page_number: int) -> int:
    """Read ``pageCount``; missing, zero or non-numeric values count as a single page."""
    try:
        count = int(value or 1)
    except (TypeError, ValueError):
        logger.warning(f"Ignoring non-numeric pageCount {value!r} on page {page_number}")
        return 1
    return max(count, 1)


def _extract_error_detail(body: str, status: int) -> str:
    """Pick a human-readable detail out of an OAuth error body."""
    try:
        data = json.loads(body)
    except ValueError:
        return body or f"HTTP {status}"
    if isinstance(data, dict):
        for key in ("error_description", "message", "error"):
            if data.get(key):
                return str(data[key])
    return body or f"HTTP {status}"


class GenesysAgentRepository(AgentRepository):
    """Adapter fetching the agent roster of a Genesys Cloud organization."""

    def __init__(
        self,
        session: ClientSession | None = None,
        timeout_seconds: float = 30,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize with an aiohttp session.

        Args:
            session: Shared aiohttp session.
            timeout_seconds: Total timeout applied to every request.
            clock: Returns the current UTC time; used for idle calculations.
        """
        self._session = session
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._clock = clock or (lambda: datetime.now(UTC))

    async def fetch_agents(self, profile: Profile) -> list[Agent]:
        """Fetch and normalize every user of the profile's organization.

        Raises:
            MissingCredentialsError: If client id or secret is blank (no request is made).
            ConnectionBlockedError: If a request cannot reach the server.
            AuthenticationFailedError: If the token request is refused.
            FetchFailedError: If any roster page returns a non-success status.
        """
        if not profile.has_credentials:
            raise MissingCredentialsError()
        session = self._session
        if session is None:
            raise RuntimeError("Genesys Cloud API requires an aiohttp session")

        proxy_prefix = profile.cors_proxy or ""
        login_host = _strip_trailing_slashes(profile.login_host)
        api_host = _strip_trailing_slashes(profile.api_host)

        token = await self._request_token(
            session,
            f"{proxy_prefix}{login_host}{TOKEN_PATH}",
            profile.client_id.strip(),
            profile.client_secret.strip(),
        )
        users = await self._fetch_all_users(session, f"{proxy_prefix}{api_host}{USERS_PATH}", token)
        agents = normalize_users(users, self._clock())
        logger.info(f"Fetched {len(agents)} agent(s) for profile '{profile.name}'")
        return agents

    async def _request_token(
        self, session: ClientSession, url: str, client_id: str, client_secret: str
    ) -> str:
        """Run the client-credentials grant and return the access token."""
        headers = {
            **NO_CACHE_HEADERS,
            "Authorization": _basic_auth_header(client_id, client_secret),
        }
        form = {"grant_type": "client_credentials"}
        log_api_request("POST", url, headers=headers, payload=form)

        try:
            async with session.post(
                url, data=form, headers=headers, timeout=self._timeout
            ) as response:
                status = response.status
                body = await response.text(errors="replace")
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Token request to {url} failed: {e}")
            raise ConnectionBlockedError(str(e)) from e

        if not 200 <= status < 300:
            detail = _extract_error_detail(body, status)
            logger.error(f"Token endpoint returned status {status}: {body[:200]}")
            raise AuthenticationFailedError(detail)

        try:
            data = json.loads(body)
        except ValueError:
            data = None
        token = data.get("access_token") if isinstance(data, dict) else None
        if not token:
            logger.error("Token endpoint response did not contain an access token")
            raise AuthenticationFailedError("no token")
        return str(token)

    async def _fetch_all_users(
        self, session: ClientSession, url: str, token: str
    ) -> list[dict[str, Any]]:
        """Accumulate user entities across pages, in arrival order."""
        entities: list[dict[str, Any]] = []
        page_number = 1
        page_count = 1

        while page_number <= page_count and page_number <= MAX_PAGES:
            data = await self._fetch_page(session, url, token, page_number)
            page_entities = data.get("entities") or []
            if isinstance(page_entities, list):
                entities.extend(page_entities)
            page_count = _page_count(data.get("pageCount"), page_number)
            logger.debug(
                f"Fetched users page {page_number}/{page_count}: {len(page_entities)} entities"
            )
            page_number += 1

        if page_number > MAX_PAGES and page_number <= page_count:
            logger.warning(
                f"Stopped after {MAX_PAGES} pages although the server reported {page_count}"
            )
        return entities

    async def _fetch_page(
        self, session: ClientSession, url: str, token: str, page_number: int
    ) -> dict[str, Any]:
        params = {
            "pageSize": PAGE_SIZE,
            "pageNumber": page_number,
            "expand": USERS_EXPAND,
            "_t": int(time.time() * 1000),
        }
        page_url = f"{url}?{urlencode(params, safe=',')}"
        headers = {
            **NO_CACHE_HEADERS,
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        }
        log_api_request("GET", page_url, headers=headers)

        try:
            async with session.get(page_url, headers=headers, timeout=self._timeout) as response:
                status = response.status
                body = await response.text(errors="replace")
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Users request for page {page_number} failed: {e}")
            raise ConnectionBlockedError(str(e)) from e

        if not 200 <= status < 300:
            logger.error(f"Users API returned status {status} for page {page_number}: {body[:500]}")
            raise FetchFailedError(page_number, status, body)

        try:
            data = json.loads(body)
        except ValueError as e:
            logger.error(f"Users API returned invalid JSON for page {page_number}: {body[:200]}")
            raise FetchFailedError(page_number, status, body[:500]) from e
        return data if isinstance(data, dict) else {}
