"""Rolling window of sync snapshots."""

from agent_idle_monitor.domain.models.sync_snapshot import SyncSnapshot

DEFAULT_HISTORY_SIZE = 15


def append_snapshot(
    history: tuple[SyncSnapshot, ...],
    snapshot: SyncSnapshot,
    limit: int = DEFAULT_HISTORY_SIZE,
) -> tuple[SyncSnapshot, ...]:
    """Append a snapshot and keep only the newest ``limit`` entries.

    Returns a new tuple; the input is never modified. No deduplication is done,
    every completed sync contributes one entry.
    """
    return (*history, snapshot)[-limit:]
