"""Gemini generative-AI adapter."""

from agent_idle_monitor.adapters.gemini_api.gemini_insight_service import (
    FALLBACK_ANALYSIS,
    GeminiInsightService,
)

__all__ = ["FALLBACK_ANALYSIS", "GeminiInsightService"]
