"""Dashboard LiveView for the agent idle monitor."""

from __future__ import annotations

import logging
import os
from dataclasses import replace
from datetime import UTC, datetime
from typing import Any

from pyview import LiveView, LiveViewSocket, is_connected
from pyview.events import InfoEvent
from pyview.template.live_template import LiveRender, LiveTemplate
from pyview.vendor import ibis
from pyview.vendor.ibis.loaders import FileReloader

from agent_idle_monitor.adapters.config import AppConfig
from agent_idle_monitor.adapters.web.builders import TemplateDataBuilder
from agent_idle_monitor.adapters.web.formatters import AgentFormatter
from agent_idle_monitor.adapters.web.state import DashboardContext, State
from agent_idle_monitor.application.services.dashboard_service import DashboardService
from agent_idle_monitor.application.services.profile_store import new_profile_template
from agent_idle_monitor.domain.errors import LastProfileError
from agent_idle_monitor.domain.models.dashboard_update import DashboardUpdate

logger = logging.getLogger(__name__)

TEMPLATE_PATH = "dashboard/dashboard.html"

_PROFILE_FORM_FIELDS = ("name", "region", "api_host", "login_host", "client_id", "client_secret")


def payload_value(payload: Any, key: str, default: str = "") -> str:
    """Read one value from an event payload.

    Click payloads carry plain strings, form payloads carry lists of strings.
    """
    if not isinstance(payload, dict):
        return default
    value = payload.get(key, default)
    if isinstance(value, list):
        value = value[0] if value else default
    return str(value)


class DashboardLiveView(LiveView[DashboardContext]):
    """LiveView rendering the shared dashboard and the per-tab admin form."""

    def __init__(
        self,
        state_manager: State,
        dashboard_service: DashboardService,
        config: AppConfig,
    ) -> None:
        """Initialize the LiveView.

        Args:
            state_manager: Tracks sockets and background tasks.
            dashboard_service: Owner of the shared dashboard state.
            config: Application configuration.
        """
        super().__init__()
        self.state_manager = state_manager
        self.dashboard_service = dashboard_service
        self.config = config
        self.template_data_builder = TemplateDataBuilder(config, AgentFormatter(config))

    async def mount(self, socket: LiveViewSocket[DashboardContext], _session: dict) -> None:
        """Mount the LiveView and register socket for updates."""
        self.state_manager.register_socket(socket)
        socket.context = DashboardContext(seen_revision=self.dashboard_service.revision)

        if is_connected(socket):
            try:
                await socket.subscribe(self.state_manager.broadcast_topic)
                logger.info(
                    f"Subscribed socket to broadcast topic: {self.state_manager.broadcast_topic}"
                )
            except Exception as e:
                logger.error(
                    f"Failed to subscribe to topic {self.state_manager.broadcast_topic}: {e}",
                    exc_info=True,
                )

    async def unmount(self, socket: LiveViewSocket[DashboardContext]) -> None:
        """Unmount the LiveView and unregister socket."""
        self.state_manager.unregister_socket(socket)

    async def disconnect(self, socket: LiveViewSocket[DashboardContext]) -> None:
        """Handle socket disconnection."""
        self.state_manager.unregister_socket(socket)

    async def handle_event(
        self, event: str, payload: Any, socket: LiveViewSocket[DashboardContext]
    ) -> None:
        """Dispatch a browser event to the matching dashboard transition."""
        service = self.dashboard_service
        context = socket.context
        logger.debug(f"Handling event '{event}' with payload: {payload}")

        if event == "tab":
            try:
                service.set_tab(payload_value(payload, "tab"))
            except ValueError as e:
                logger.warning(str(e))
                return
            await service.publish_update()
        elif event == "sync":
            self.state_manager.spawn(service.sync(), name="dashboard-sync")
        elif event == "analyze":
            if not service.on_queue_agents:
                logger.info("Ignoring analysis request: no agents on queue")
                return
            self.state_manager.spawn(service.analyze(), name="dashboard-analyze")
        elif event == "select_profile":
            profile_id = payload_value(payload, "profile_id")
            try:
                await service.switch_profile(profile_id)
            except KeyError:
                logger.warning(f"Ignoring switch to unknown profile {profile_id}")
        elif event == "filter":
            service.set_filter(
                search_term=payload_value(payload, "search_term"),
                status_filter=payload_value(payload, "status_filter", "All"),
                presence_filter=payload_value(payload, "presence_filter", "All"),
            )
            await service.publish_update()
        elif event == "clear_filters":
            service.clear_filters()
            await service.publish_update()
        elif event == "clear_analysis":
            service.clear_analysis()
            await service.publish_update()
        elif event == "dismiss_error":
            service.dismiss_error()
            await service.publish_update()
        elif event == "new_profile":
            context.editing_profile = new_profile_template(datetime.now(UTC))
            context.is_new_profile = True
            context.form_error = None
        elif event == "edit_profile":
            profile = service.profile_store.get(payload_value(payload, "id"))
            if profile is None:
                logger.warning(f"Ignoring edit of unknown profile {payload_value(payload, 'id')}")
                return
            context.editing_profile = profile
            context.is_new_profile = False
            context.form_error = None
        elif event == "cancel_edit":
            self._close_form(context)
        elif event == "save_profile":
            await self._save_profile(payload, context)
        elif event == "delete_profile":
            await self._delete_profile(payload_value(payload, "id"), context)
        else:
            logger.warning(f"Unknown event: {event}")

    async def _save_profile(self, payload: Any, context: DashboardContext) -> None:
        draft = context.editing_profile
        if draft is None:
            logger.warning("Ignoring profile save without an open form")
            return

        values = {
            field: payload_value(payload, field, getattr(draft, field)).strip()
            for field in _PROFILE_FORM_FIELDS
        }
        if not values["name"]:
            context.form_error = "Profile name is required."
            return
        cors_proxy = payload_value(payload, "cors_proxy", draft.cors_proxy or "").strip()

        # Keep the sync timestamp of the stored profile; the form never edits it
        stored = self.dashboard_service.profile_store.get(draft.id)
        profile = replace(
            draft,
            **values,
            cors_proxy=cors_proxy or None,
            last_synced_at=stored.last_synced_at if stored else None,
        )
        await self.dashboard_service.save_profile(profile)
        self._close_form(context)

    async def _delete_profile(self, profile_id: str, context: DashboardContext) -> None:
        try:
            await self.dashboard_service.delete_profile(profile_id)
        except LastProfileError as e:
            context.form_error = str(e)
            return
        if context.editing_profile is not None and context.editing_profile.id == profile_id:
            self._close_form(context)
        else:
            context.form_error = None

    def _close_form(self, context: DashboardContext) -> None:
        context.editing_profile = None
        context.is_new_profile = False
        context.form_error = None

    async def handle_info(
        self, event: InfoEvent | dict[str, Any], socket: LiveViewSocket[DashboardContext]
    ) -> None:
        """Re-render when a newer dashboard revision arrives over pub/sub."""
        payload = event.payload if isinstance(event, InfoEvent) else event
        update = DashboardUpdate.from_message(payload)
        if update is None:
            logger.debug(f"Ignoring pubsub message: {event}")
            return

        context = socket.context
        if update.revision <= context.seen_revision:
            logger.debug(
                f"Skipping stale revision {update.revision} (rendered {context.seen_revision})"
            )
            return
        context.seen_revision = update.revision
        context.render_count += 1

    async def render(self, assigns: DashboardContext | dict, meta: Any) -> Any:
        """Render the HTML template."""
        context = assigns if isinstance(assigns, DashboardContext) else DashboardContext()
        try:
            template_assigns = self.template_data_builder.build(self.dashboard_service, context)
            live_template = LiveTemplate(_load_template())
            return LiveRender(live_template, template_assigns, meta)
        except Exception as e:
            logger.error(f"Error rendering template: {e}", exc_info=True)
            error_template = ibis.Template("<div>Error rendering template: {{ error }}</div>")
            return LiveRender(LiveTemplate(error_template), {"error": str(e)}, meta)


def _load_template() -> Any:
    """Load the dashboard template through ibis' reloading file loader."""
    views_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    if not isinstance(getattr(ibis, "loader", None), FileReloader):
        ibis.loader = FileReloader(views_dir)
    return ibis.loader(TEMPLATE_PATH)


def create_dashboard_live_view(
    state_manager: State,
    dashboard_service: DashboardService,
    config: AppConfig,
) -> type[DashboardLiveView]:
    """Create a configured DashboardLiveView class.

    PyView's add_live_view expects a class, not an instance, so the
    collaborators are captured in a subclass.
    """
    captured_state = state_manager
    captured_service = dashboard_service
    captured_config = config

    class ConfiguredDashboardLiveView(DashboardLiveView):
        """Configured dashboard LiveView."""

        def __init__(self) -> None:
            super().__init__(captured_state, captured_service, captured_config)

    return ConfiguredDashboardLiveView
