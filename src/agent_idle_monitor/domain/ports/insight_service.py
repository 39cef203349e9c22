"""Insight service port."""

from typing import Protocol

from agent_idle_monitor.domain.models.agent import Agent
from agent_idle_monitor.domain.models.ai_analysis import AIAnalysis


class InsightService(Protocol):
    """Port for generating a natural-language analysis of the agent floor."""

    async def analyze(self, agents: list[Agent]) -> AIAnalysis:
        """Analyze agents. Implementations degrade to a fallback instead of raising."""
        ...
