"""Agent repository port."""

from typing import Protocol

from agent_idle_monitor.domain.models.agent import Agent
from agent_idle_monitor.domain.models.profile import Profile


class AgentRepository(Protocol):
    """Port for retrieving the current agent roster of an organization."""

    async def fetch_agents(self, profile: Profile) -> list[Agent]:
        """Fetch and normalize every agent visible with the profile's credentials.

        Raises:
            SyncError: On missing credentials, transport, auth or page failures.
        """
        ...
