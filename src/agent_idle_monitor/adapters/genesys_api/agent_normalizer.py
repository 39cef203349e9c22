"""Transforms Genesys Cloud user records into Agent snapshots."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from agent_idle_monitor.adapters.genesys_api.constants import (
    BASE_EFFICIENCY_SCORE,
    DEFAULT_AGENT_NAME,
    DEFAULT_PRESENCE,
    DEFAULT_QUEUE,
    DEFAULT_ROUTING_STATUS,
    EFFICIENCY_SCORES,
)
from agent_idle_monitor.domain.models.agent import IDLE, Agent

logger = logging.getLogger(__name__)


def efficiency_score(routing_status: str) -> int:
    """Look up the heuristic efficiency score for a routing status."""
    return EFFICIENCY_SCORES.get(routing_status, BASE_EFFICIENCY_SCORE)


def _parse_timestamp(value: str) -> datetime | None:
    """Parse an ISO 8601 timestamp such as ``2024-05-01T09:30:00.000Z``."""
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        logger.warning(f"Unparseable routing status startTime: {value!r}")
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def idle_minutes(routing_status: str, start_time: datetime | None, now: datetime) -> int:
    """Whole minutes spent idle; always 0 unless the agent is IDLE."""
    if routing_status != IDLE:
        return 0
    started = start_time or now
    elapsed_ms = (now - started).total_seconds() * 1000
    return max(0, int(elapsed_ms // 60000))


def normalize_user(user: dict[str, Any], now: datetime) -> Agent:
    """Build an Agent from a raw ``/api/v2/users`` entity.

    Args:
        user: Raw user entity expanded with presence and routingStatus.
        now: Reference time for idle calculations (timezone-aware).
    """
    routing = user.get("routingStatus") or {}
    routing_status = routing.get("status") or DEFAULT_ROUTING_STATUS
    raw_start = routing.get("startTime")
    start_time = _parse_timestamp(raw_start) if raw_start else None

    presence = user.get("presence") or {}
    definition = presence.get("presenceDefinition") or {}
    system_presence = definition.get("systemPresence") or DEFAULT_PRESENCE

    return Agent(
        id=str(user.get("id", "")),
        name=user.get("name") or DEFAULT_AGENT_NAME,
        presence=system_presence,
        routing_status=routing_status,
        idle_minutes=idle_minutes(routing_status, start_time, now),
        last_status_change=raw_start or now.isoformat(),
        queue=user.get("department") or DEFAULT_QUEUE,
        efficiency_score=efficiency_score(routing_status),
    )


def normalize_users(users: list[dict[str, Any]], now: datetime) -> list[Agent]:
    """Normalize user entities in arrival order."""
    return [normalize_user(user, now) for user in users if isinstance(user, dict)]
