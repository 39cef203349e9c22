"""Aggregate statistics over the on-queue part of an agent roster."""

from collections.abc import Iterable

from agent_idle_monitor.domain.models.agent import COMMUNICATING, IDLE, INTERACTING, Agent
from agent_idle_monitor.domain.models.metric_summary import MetricSummary, StatusBucket


def on_queue_agents(agents: Iterable[Agent]) -> list[Agent]:
    """Return the agents whose presence is "On Queue", in roster order."""
    return [agent for agent in agents if agent.is_on_queue]


def _round_half_up(value: float) -> int:
    # Half-up: 2.5 -> 3
    return int(value + 0.5)


def compute_metrics(agents: Iterable[Agent]) -> MetricSummary:
    """Compute count, idle count and idle-minute average/maximum for on-queue agents."""
    on_queue = on_queue_agents(agents)
    if not on_queue:
        return MetricSummary()

    idle_minutes = [agent.idle_minutes for agent in on_queue]
    return MetricSummary(
        count=len(on_queue),
        idle_count=sum(1 for agent in on_queue if agent.routing_status == IDLE),
        avg_idle_minutes=_round_half_up(sum(idle_minutes) / len(on_queue)),
        max_idle_minutes=max(idle_minutes),
    )


def status_distribution(agents: Iterable[Agent]) -> list[StatusBucket]:
    """Bucket on-queue agents into Idle, Communicating and Other.

    Always returns all three buckets, even when a count is zero.
    """
    on_queue = on_queue_agents(agents)
    idle = sum(1 for agent in on_queue if agent.routing_status == IDLE)
    communicating = sum(1 for agent in on_queue if agent.routing_status == COMMUNICATING)
    return [
        StatusBucket(name="Idle", count=idle),
        StatusBucket(name="Communicating", count=communicating),
        StatusBucket(name="Other", count=len(on_queue) - idle - communicating),
    ]


def snapshot_counts(agents: Iterable[Agent]) -> tuple[int, int]:
    """Return (idle, active) counts of on-queue agents for a sync snapshot.

    Active means COMMUNICATING or INTERACTING.
    """
    on_queue = on_queue_agents(agents)
    idle = sum(1 for agent in on_queue if agent.routing_status == IDLE)
    active = sum(
        1 for agent in on_queue if agent.routing_status in (COMMUNICATING, INTERACTING)
    )
    return idle, active
