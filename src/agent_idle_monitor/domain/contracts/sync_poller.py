"""Protocol for periodic roster syncing."""

from typing import Protocol


class SyncPollerProtocol(Protocol):
    """Protocol for a background task that re-syncs the roster on an interval."""

    async def start(self) -> None:
        """Start the sync poller."""
        ...

    async def stop(self) -> None:
        """Stop the sync poller."""
        ...
