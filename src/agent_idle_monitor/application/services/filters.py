"""Filtering for the agent roster view."""

from collections.abc import Iterable

from agent_idle_monitor.domain.models.agent import ROUTING_STATUSES, Agent, normalize_presence
from agent_idle_monitor.domain.models.agent_filter import ALL, AgentFilter

ROUTING_STATUS_OPTIONS: tuple[str, ...] = (ALL, *ROUTING_STATUSES)


def matches_filter(agent: Agent, agent_filter: AgentFilter) -> bool:
    """Check a single agent against search text, routing status and presence."""
    if agent_filter.search_term.lower() not in agent.name.lower():
        return False
    if agent_filter.status_filter != ALL and agent.routing_status != agent_filter.status_filter:
        return False
    if agent_filter.presence_filter != ALL and normalize_presence(
        agent.presence
    ) != normalize_presence(agent_filter.presence_filter):
        return False
    return True


def filter_agents(agents: Iterable[Agent], agent_filter: AgentFilter) -> list[Agent]:
    """Return the agents matching the filter, preserving roster order."""
    return [agent for agent in agents if matches_filter(agent, agent_filter)]


def presence_options(agents: Iterable[Agent]) -> list[str]:
    """Sorted unique presence labels present in the roster."""
    return sorted({agent.presence for agent in agents})
