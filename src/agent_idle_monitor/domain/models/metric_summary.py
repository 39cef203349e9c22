"""Aggregate metric models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class MetricSummary:
    """Aggregate statistics over the on-queue agents."""

    count: int = 0
    idle_count: int = 0
    avg_idle_minutes: int = 0
    max_idle_minutes: int = 0


@dataclass(frozen=True)
class StatusBucket:
    """One bar of the routing-status distribution."""

    name: str
    count: int
