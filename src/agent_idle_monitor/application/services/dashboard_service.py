"""Dashboard orchestration: syncs, analyses, profile switching and view state."""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo

from agent_idle_monitor.application.services.filters import filter_agents, presence_options
from agent_idle_monitor.application.services.metrics import (
    compute_metrics,
    on_queue_agents,
    snapshot_counts,
    status_distribution,
)
from agent_idle_monitor.application.services.sync_history import (
    DEFAULT_HISTORY_SIZE,
    append_snapshot,
)
from agent_idle_monitor.domain.errors import SyncError
from agent_idle_monitor.domain.models.agent_filter import AgentFilter
from agent_idle_monitor.domain.models.dashboard_update import DashboardUpdate
from agent_idle_monitor.domain.models.sync_snapshot import SyncSnapshot

if TYPE_CHECKING:
    from agent_idle_monitor.application.services.profile_store import ProfileStore
    from agent_idle_monitor.domain.contracts import StateBroadcasterProtocol
    from agent_idle_monitor.domain.models import (
        AIAnalysis,
        Agent,
        MetricSummary,
        Profile,
        StatusBucket,
    )
    from agent_idle_monitor.domain.ports import AgentRepository, InsightService

logger = logging.getLogger(__name__)

TABS: tuple[str, ...] = ("dashboard", "agents", "reports", "admin")

_ticket_sequence = itertools.count(1)


@dataclass(frozen=True)
class RequestTicket:
    """Identifies one in-flight sync or analysis and the profile it was issued for."""

    profile_id: str
    sequence: int = field(default_factory=lambda: next(_ticket_sequence))


@dataclass
class DashboardState:
    """Everything the dashboard shows for the active profile."""

    agents: tuple[Agent, ...] = ()
    history: tuple[SyncSnapshot, ...] = ()
    analysis: AIAnalysis | None = None
    sync_error: str | None = None
    active_tab: str = "dashboard"
    agent_filter: AgentFilter = field(default_factory=AgentFilter)
    pending_sync: RequestTicket | None = None
    pending_analysis: RequestTicket | None = None
    last_update: datetime | None = None

    @property
    def is_syncing(self) -> bool:
        return self.pending_sync is not None

    @property
    def is_analyzing(self) -> bool:
        return self.pending_analysis is not None


class DashboardService:
    """Owns the dashboard state and applies every user-visible transition.

    Roster, history and analysis are always replaced as whole objects. Responses
    that arrive after the active profile changed are dropped.
    """

    def __init__(
        self,
        profile_store: ProfileStore,
        agent_repository: AgentRepository,
        insight_service: InsightService,
        *,
        history_size: int = DEFAULT_HISTORY_SIZE,
        timezone: str = "UTC",
        broadcaster: StateBroadcasterProtocol | None = None,
        broadcast_topic: str = "dashboard:updates",
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            profile_store: Saved profiles and the active-profile pointer.
            agent_repository: Source of roster data.
            insight_service: Generative analysis of the on-queue agents.
            history_size: Number of sync snapshots kept for the trend chart.
            timezone: IANA timezone used for snapshot time labels.
            broadcaster: Optional broadcaster notified after each state change.
            broadcast_topic: Topic passed to the broadcaster.
            clock: Returns the current UTC time; injectable for tests.
        """
        self.profile_store = profile_store
        self.agent_repository = agent_repository
        self.insight_service = insight_service
        self.history_size = history_size
        self.timezone = ZoneInfo(timezone)
        self.broadcaster = broadcaster
        self.broadcast_topic = broadcast_topic
        self._clock = clock or (lambda: datetime.now(UTC))
        self.state = DashboardState()
        self.revision = 0

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    @property
    def active_profile(self) -> Profile:
        return self.profile_store.active_profile

    @property
    def on_queue_agents(self) -> list[Agent]:
        return on_queue_agents(self.state.agents)

    @property
    def metrics(self) -> MetricSummary:
        return compute_metrics(self.state.agents)

    @property
    def status_distribution(self) -> list[StatusBucket]:
        return status_distribution(self.state.agents)

    @property
    def filtered_agents(self) -> list[Agent]:
        return filter_agents(self.state.agents, self.state.agent_filter)

    @property
    def presence_options(self) -> list[str]:
        return presence_options(self.state.agents)

    # ------------------------------------------------------------------
    # Remote operations
    # ------------------------------------------------------------------

    async def sync(self) -> bool:
        """Fetch a fresh roster for the active profile.

        Returns:
            False if a sync for the active profile was already running, True otherwise.
        """
        if self.state.pending_sync is not None:
            logger.warning("Sync already in progress, ignoring request")
            return False

        profile = self.active_profile
        ticket = RequestTicket(profile_id=profile.id)
        self.state.pending_sync = ticket
        self.state.sync_error = None
        await self.publish_update()

        try:
            agents = await self.agent_repository.fetch_agents(profile)
        except SyncError as e:
            if self._is_current(ticket, self.state.pending_sync):
                logger.error(f"Sync failed for profile '{profile.name}': {e.display_message}")
                self.state.sync_error = e.display_message
            else:
                logger.info(f"Discarding failed sync for inactive profile {profile.id}")
        else:
            if self._is_current(ticket, self.state.pending_sync):
                self._apply_roster(profile, agents)
            else:
                logger.info(
                    f"Discarding {len(agents)} agent(s) synced for inactive profile {profile.id}"
                )
        finally:
            if self.state.pending_sync is ticket:
                self.state.pending_sync = None
            await self.publish_update()
        return True

    async def analyze(self) -> bool:
        """Request an AI analysis of the on-queue agents and open the Reports tab.

        Returns:
            False if an analysis for the active profile was already running, True otherwise.
        """
        if self.state.pending_analysis is not None:
            logger.warning("Analysis already in progress, ignoring request")
            return False

        ticket = RequestTicket(profile_id=self.active_profile.id)
        self.state.pending_analysis = ticket
        await self.publish_update()

        try:
            analysis = await self.insight_service.analyze(self.on_queue_agents)
            if self._is_current(ticket, self.state.pending_analysis):
                self.state.analysis = analysis
                self.state.active_tab = "reports"
            else:
                logger.info(f"Discarding analysis for inactive profile {ticket.profile_id}")
        finally:
            if self.state.pending_analysis is ticket:
                self.state.pending_analysis = None
            await self.publish_update()
        return True

    def _is_current(self, ticket: RequestTicket, pending: RequestTicket | None) -> bool:
        return pending is ticket and ticket.profile_id == self.active_profile.id

    def _apply_roster(self, profile: Profile, agents: list[Agent]) -> None:
        now = self._clock()
        idle_count, active_count = snapshot_counts(agents)
        snapshot = SyncSnapshot(
            time=now.astimezone(self.timezone).strftime("%H:%M:%S"),
            idle_count=idle_count,
            active_count=active_count,
        )
        self.state.agents = tuple(agents)
        self.state.history = append_snapshot(self.state.history, snapshot, self.history_size)
        self.state.sync_error = None
        self.state.last_update = now
        self.profile_store.mark_synced(profile.id, now)
        logger.info(
            f"Synced {len(agents)} agent(s) for '{profile.name}': "
            f"{idle_count} idle, {active_count} active on queue"
        )

    # ------------------------------------------------------------------
    # Profile transitions
    # ------------------------------------------------------------------

    async def switch_profile(self, profile_id: str) -> None:
        """Activate another profile and discard everything scoped to the old one.

        Raises:
            KeyError: If no profile has this id.
        """
        self.profile_store.select(profile_id)
        self._reset_profile_scope()
        logger.info(f"Switched to profile '{self.active_profile.name}'")
        await self.publish_update()

    async def save_profile(self, profile: Profile) -> None:
        """Insert or replace a profile."""
        self.profile_store.upsert(profile)
        await self.publish_update()

    async def delete_profile(self, profile_id: str) -> None:
        """Delete a profile; deleting the active one clears the dashboard.

        Raises:
            LastProfileError: If this is the only remaining profile.
        """
        if self.profile_store.delete(profile_id):
            self._reset_profile_scope()
        await self.publish_update()

    def _reset_profile_scope(self) -> None:
        # Pending tickets are dropped so late responses are discarded on arrival
        self.state = DashboardState(active_tab=self.state.active_tab)

    # ------------------------------------------------------------------
    # View transitions
    # ------------------------------------------------------------------

    def set_tab(self, tab: str) -> None:
        if tab not in TABS:
            raise ValueError(f"Unknown tab: {tab}")
        self.state.active_tab = tab

    def set_filter(
        self,
        search_term: str | None = None,
        status_filter: str | None = None,
        presence_filter: str | None = None,
    ) -> None:
        """Update any subset of the roster filters."""
        current = self.state.agent_filter
        self.state.agent_filter = replace(
            current,
            search_term=current.search_term if search_term is None else search_term,
            status_filter=current.status_filter if status_filter is None else status_filter,
            presence_filter=(
                current.presence_filter if presence_filter is None else presence_filter
            ),
        )

    def clear_filters(self) -> None:
        self.state.agent_filter = AgentFilter()

    def clear_analysis(self) -> None:
        self.state.analysis = None

    def dismiss_error(self) -> None:
        self.state.sync_error = None

    async def publish_update(self) -> None:
        """Bump the revision and tell every connected view about it."""
        self.revision += 1
        if self.broadcaster is not None:
            update = DashboardUpdate(profile_id=self.active_profile.id, revision=self.revision)
            await self.broadcaster.broadcast_update(self.broadcast_topic, update)
