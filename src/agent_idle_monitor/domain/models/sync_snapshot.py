"""Sync snapshot domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SyncSnapshot:
    """On-queue occupancy captured at the end of one successful sync."""

    time: str  # Local wall-clock time, HH:MM:SS
    idle_count: int
    active_count: int
