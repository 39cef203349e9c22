"""Builds the template assigns for the dashboard LiveView."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from agent_idle_monitor.adapters.config.app_config import AppConfig
from agent_idle_monitor.adapters.web.formatters.agent_formatter import AgentFormatter
from agent_idle_monitor.application.services.filters import ROUTING_STATUS_OPTIONS
from agent_idle_monitor.domain.models.agent_filter import ALL

if TYPE_CHECKING:
    from agent_idle_monitor.adapters.web.state.dashboard_context import DashboardContext
    from agent_idle_monitor.application.services.dashboard_service import DashboardService
    from agent_idle_monitor.domain.models import Agent, Profile, StatusBucket, SyncSnapshot

_TAB_LABELS = {
    "dashboard": ("Dashboard", "Operations Overview"),
    "agents": ("Agents", "Real-time Agent Status"),
    "reports": ("AI Reports", "Intelligent Insights"),
    "admin": ("Administration", "Admin Settings"),
}

_BUCKET_CLASSES = {"Idle": "bar-idle", "Communicating": "bar-communicating"}


def _percent(value: int, total: int) -> int:
    return round(value * 100 / total) if total else 0


class TemplateDataBuilder:
    """Turns dashboard state into plain values the template can print."""

    def __init__(self, config: AppConfig, formatter: AgentFormatter) -> None:
        self.config = config
        self.formatter = formatter

    def build(self, service: DashboardService, context: DashboardContext) -> dict[str, Any]:
        """Build template assigns from shared dashboard state and the socket's context."""
        state = service.state
        profile = service.active_profile
        active_tab = state.active_tab
        metrics = service.metrics
        on_queue = service.on_queue_agents
        filtered = service.filtered_agents

        if state.is_syncing:
            connection_label, connection_class = "Syncing...", "dot-syncing"
        elif profile.has_credentials:
            connection_label, connection_class = "Connected", "dot-connected"
        else:
            connection_label, connection_class = "Missing Config", "dot-missing"

        agent_filter = state.agent_filter
        if agent_filter.is_active:
            roster_heading = f"Found {len(filtered)} results"
        else:
            roster_heading = f"Full Roster ({len(state.agents)} Agents)"

        analysis = state.analysis
        return {
            "title": self.config.title,
            "theme": self.config.theme,
            "banner_color": self.config.banner_color,
            "gemini_model": self.config.gemini_model,
            "tabs": [
                {"id": tab, "label": label, "active_class": "active" if tab == active_tab else ""}
                for tab, (label, _heading) in _TAB_LABELS.items()
            ],
            "heading": _TAB_LABELS[active_tab][1],
            "show_dashboard": active_tab == "dashboard",
            "show_agents": active_tab == "agents",
            "show_reports": active_tab == "reports",
            "show_admin": active_tab == "admin",
            "show_profile_badge": active_tab != "admin",
            "profiles": [
                self._profile_option(p, profile.id) for p in service.profile_store.profiles
            ],
            "active_profile_name": profile.name,
            "active_profile_region": profile.region,
            "connection_label": connection_label,
            "connection_class": connection_class,
            "is_syncing": state.is_syncing,
            "is_analyzing": state.is_analyzing,
            "sync_disabled": "disabled" if state.is_syncing else "",
            "analyze_disabled": "disabled" if state.is_analyzing or not on_queue else "",
            "has_error": state.sync_error is not None,
            "sync_error": state.sync_error or "",
            "show_configure_link": bool(
                state.sync_error and "Missing Credentials" in state.sync_error
            ),
            "has_agents": bool(state.agents),
            "show_empty_dashboard": not state.agents and not state.is_syncing,
            "update_time": self.formatter.format_update_time(state.last_update),
            # Dashboard tab
            "metric_count": str(metrics.count),
            "metric_idle_count": str(metrics.idle_count),
            "metric_avg_idle": self.formatter.format_idle_minutes(metrics.avg_idle_minutes),
            "metric_max_idle": self.formatter.format_idle_minutes(metrics.max_idle_minutes),
            "has_history": bool(state.history),
            "history_label": "Live Tracking" if state.history else "Awaiting First Sync",
            "history": self._history_points(state.history),
            "distribution": self._distribution(service.status_distribution),
            "on_queue_count": len(on_queue),
            "on_queue_rows": [self._agent_row(a) for a in on_queue],
            # Agents tab
            "search_term": agent_filter.search_term,
            "status_options": [
                {
                    "value": option,
                    "label": "All Statuses" if option == ALL else option,
                    "selected": "selected" if option == agent_filter.status_filter else "",
                }
                for option in ROUTING_STATUS_OPTIONS
            ],
            "presence_options": [
                {
                    "value": option,
                    "label": "All Presences" if option == ALL else option,
                    "selected": "selected" if option == agent_filter.presence_filter else "",
                }
                for option in (ALL, *service.presence_options)
            ],
            "filter_active": agent_filter.is_active,
            "roster_heading": roster_heading,
            "agent_rows": [self._agent_row(a) for a in filtered],
            "has_filtered_agents": bool(filtered),
            # Reports tab
            "has_analysis": analysis is not None,
            "show_analysis_prompt": analysis is None and not state.is_analyzing,
            "analysis_summary": analysis.summary if analysis else "",
            "recommendations": [
                {"number": i, "text": text}
                for i, text in enumerate(analysis.recommendations if analysis else [], start=1)
            ],
            "bottlenecks": list(analysis.bottlenecks) if analysis else [],
            # Admin tab
            **self._profile_form(context),
        }

    def _profile_option(self, profile: Profile, active_id: str) -> dict[str, Any]:
        is_active = profile.id == active_id
        return {
            "id": profile.id,
            "name": profile.name,
            "region": profile.region,
            "selected": "selected" if is_active else "",
            "is_active": is_active,
            "card_class": "profile-card active" if is_active else "profile-card",
            "has_credentials": profile.has_credentials,
            "last_synced": self.formatter.format_last_synced(profile.last_synced_at),
        }

    def _agent_row(self, agent: Agent) -> dict[str, Any]:
        return {
            "id": agent.id,
            "name": agent.name,
            "initials": self.formatter.initials(agent.name),
            "presence": agent.presence,
            "status": agent.routing_status,
            "status_class": self.formatter.status_badge_class(agent.routing_status),
            "queue": agent.queue,
            "idle": self.formatter.format_idle_minutes(agent.idle_minutes),
            "score": self.formatter.format_score(agent.efficiency_score),
            "score_class": self.formatter.efficiency_class(agent.efficiency_score),
        }

    def _history_points(self, history: tuple[SyncSnapshot, ...]) -> list[dict[str, Any]]:
        peak = max((max(s.idle_count, s.active_count) for s in history), default=0)
        return [
            {
                "time": snapshot.time,
                "idle_count": snapshot.idle_count,
                "active_count": snapshot.active_count,
                "idle_pct": _percent(snapshot.idle_count, peak),
                "active_pct": _percent(snapshot.active_count, peak),
            }
            for snapshot in history
        ]

    def _distribution(self, buckets: list[StatusBucket]) -> list[dict[str, Any]]:
        peak = max((b.count for b in buckets), default=0)
        return [
            {
                "name": bucket.name,
                "count": bucket.count,
                "pct": _percent(bucket.count, peak),
                "css": _BUCKET_CLASSES.get(bucket.name, "bar-other"),
            }
            for bucket in buckets
        ]

    def _profile_form(self, context: DashboardContext) -> dict[str, Any]:
        draft = context.editing_profile
        if draft is None:
            return {"is_editing": False, "form_error": context.form_error or ""}
        return {
            "is_editing": True,
            "form_title": "New Customer" if context.is_new_profile else f"Edit {draft.name}",
            "form_error": context.form_error or "",
            "form_id": draft.id,
            "form_name": draft.name,
            "form_region": draft.region,
            "form_api_host": draft.api_host,
            "form_login_host": draft.login_host,
            "form_client_id": draft.client_id,
            "form_client_secret": draft.client_secret,
            "form_cors_proxy": draft.cors_proxy or "",
        }
