"""Gemini-backed floor analysis.

Calls the ``generateContent`` REST endpoint with a JSON response schema. Any
failure is logged and replaced by a fixed fallback analysis, so callers never
see an exception.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import TYPE_CHECKING, Any

import aiohttp
from pydantic import ValidationError

from agent_idle_monitor.adapters.api_request_logger import log_api_request
from agent_idle_monitor.adapters.gemini_api.constants import (
    DEFAULT_API_BASE,
    DEFAULT_MODEL,
    PROMPT_TEMPLATE,
    RESPONSE_SCHEMA,
)
from agent_idle_monitor.domain.errors import AnalysisFailedError
from agent_idle_monitor.domain.models.ai_analysis import AIAnalysis
from agent_idle_monitor.domain.ports.insight_service import InsightService

if TYPE_CHECKING:
    from aiohttp import ClientSession

    from agent_idle_monitor.domain.models.agent import Agent

logger = logging.getLogger(__name__)

FALLBACK_ANALYSIS = AIAnalysis(
    summary="Error generating AI analysis. Please check your API configuration.",
    recommendations=["Ensure agents are properly logging off", "Check queue assignments"],
    bottlenecks=["Data analysis unavailable"],
)


def project_agents(agents: list[Agent]) -> list[dict[str, Any]]:
    """Reduce agents to the fields sent to the model."""
    return [
        {
            "name": agent.name,
            "queue": agent.queue,
            "idleMinutes": agent.idle_minutes,
            "status": agent.routing_status,
            "score": agent.efficiency_score,
        }
        for agent in agents
    ]


def build_prompt(agents: list[Agent]) -> str:
    return PROMPT_TEMPLATE.format(agent_data=json.dumps(project_agents(agents)))


def _extract_text(data: Any) -> str:
    """Pull the answer text out of a generateContent response."""
    try:
        return str(data["candidates"][0]["content"]["parts"][0]["text"])
    except (KeyError, IndexError, TypeError) as e:
        raise AnalysisFailedError("Response contained no candidate text") from e


class GeminiInsightService(InsightService):
    """Insight service calling Google's Gemini models over REST."""

    def __init__(
        self,
        session: ClientSession | None,
        api_key: str | None,
        model: str = DEFAULT_MODEL,
        api_base: str = DEFAULT_API_BASE,
        timeout_seconds: float = 30,
    ) -> None:
        """Initialize the service.

        Args:
            session: Shared aiohttp session.
            api_key: Gemini API key. Without one every analysis is the fallback.
            model: Model name used in the request path.
            api_base: Base URL of the Generative Language API.
            timeout_seconds: Total request timeout.
        """
        self._session = session
        self._api_key = api_key or ""
        self._model = model
        self._api_base = api_base.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    async def analyze(self, agents: list[Agent]) -> AIAnalysis:
        """Analyze agents, returning ``FALLBACK_ANALYSIS`` on any failure."""
        try:
            analysis = await self._generate(agents)
        except AnalysisFailedError as e:
            logger.error(f"AI analysis failed: {e}")
            return FALLBACK_ANALYSIS
        logger.info(
            f"AI analysis produced {len(analysis.recommendations)} recommendation(s) "
            f"and {len(analysis.bottlenecks)} bottleneck(s) for {len(agents)} agent(s)"
        )
        return analysis

    async def _generate(self, agents: list[Agent]) -> AIAnalysis:
        if not self._api_key.strip():
            raise AnalysisFailedError("No Gemini API key configured")
        if self._session is None:
            raise AnalysisFailedError("No HTTP session available")

        url = f"{self._api_base}/models/{self._model}:generateContent"
        payload = {
            "contents": [{"parts": [{"text": build_prompt(agents)}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": RESPONSE_SCHEMA,
            },
        }
        params = {"key": self._api_key}
        log_api_request("POST", url, params=params, payload=payload)

        try:
            async with self._session.post(
                url, params=params, json=payload, timeout=self._timeout
            ) as response:
                status = response.status
                body = await response.text(errors="replace")
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise AnalysisFailedError(f"Request failed: {e}") from e

        if not 200 <= status < 300:
            raise AnalysisFailedError(f"API returned status {status}: {body[:500]}")

        try:
            data = json.loads(body)
        except ValueError as e:
            raise AnalysisFailedError(f"Response is not JSON: {body[:200]}") from e

        text = _extract_text(data)
        try:
            return AIAnalysis.model_validate_json(text)
        except ValidationError as e:
            raise AnalysisFailedError(f"Model output did not match the schema: {e}") from e
