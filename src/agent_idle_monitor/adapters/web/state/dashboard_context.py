"""Per-socket context for the dashboard LiveView."""

from dataclasses import dataclass

from agent_idle_monitor.domain.models.profile import Profile


@dataclass
class DashboardContext:
    """State owned by a single browser tab.

    The roster, history and analysis are shared across tabs and live in the
    dashboard service; only the admin form being edited is kept per socket.
    """

    editing_profile: Profile | None = None
    is_new_profile: bool = False
    form_error: str | None = None
    seen_revision: int = 0  # Newest dashboard revision this socket has rendered
    render_count: int = 0  # Bumped per accepted revision so pyview re-renders
