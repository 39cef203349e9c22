"""AI analysis domain model."""

from pydantic import BaseModel, ConfigDict


class AIAnalysis(BaseModel):
    """Structured floor analysis returned by the generative-AI service."""

    model_config = ConfigDict(frozen=True)

    summary: str
    recommendations: list[str]
    bottlenecks: list[str]
