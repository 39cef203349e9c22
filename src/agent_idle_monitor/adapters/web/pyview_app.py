"""PyView web adapter for the agent idle dashboard."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from agent_idle_monitor.adapters.config import AppConfig
from agent_idle_monitor.domain.ports import DisplayAdapter

from .state import State
from .views.dashboard import create_dashboard_live_view

if TYPE_CHECKING:
    from agent_idle_monitor.application.services.dashboard_service import DashboardService

logger = logging.getLogger(__name__)


class PyViewWebAdapter(DisplayAdapter):
    """PyView-based web adapter serving the dashboard LiveView."""

    def __init__(
        self,
        dashboard_service: DashboardService,
        config: AppConfig,
        state_manager: State | None = None,
    ) -> None:
        """Initialize the web adapter.

        Args:
            dashboard_service: Service owning the shared dashboard state.
            config: Application configuration.
            state_manager: Socket and task tracking; created when omitted.
        """
        if not isinstance(config, AppConfig):
            raise TypeError("config must be an AppConfig instance")

        self.dashboard_service = dashboard_service
        self.config = config
        self.state_manager = state_manager or State(dashboard_service.broadcast_topic)
        self._server: Any | None = None

    def build_app(self) -> Any:
        """Create the PyView application with the dashboard and health routes."""
        from markupsafe import Markup
        from pyview import PyView
        from pyview.playground.favicon import generate_favicon_svg
        from pyview.template import defaultRootTemplate
        from starlette.responses import Response
        from starlette.routing import Route

        app = PyView()

        favicon_svg = generate_favicon_svg(
            self.config.title,
            bg_color=self.config.banner_color,
            text_color="#FFFFFF",
        )

        async def favicon_route(_request: Any) -> Response:
            response = Response(content=favicon_svg, media_type="image/svg+xml")
            response.headers["Cache-Control"] = "public, max-age=60, must-revalidate"
            return response

        app.routes.append(Route("/favicon.svg", favicon_route, methods=["GET"]))

        app.rootTemplate = defaultRootTemplate(
            title=self.config.title,
            title_suffix="",
            css=Markup('<link rel="icon" href="/favicon.svg" type="image/svg+xml">'),
        )

        live_view_class = create_dashboard_live_view(
            self.state_manager, self.dashboard_service, self.config
        )
        app.add_live_view("/", live_view_class)
        logger.info("Registered dashboard LiveView at '/'")

        async def healthz(_request: Any) -> Response:
            """Health check endpoint for load balancers and monitoring."""
            return Response(content="Ok", media_type="text/plain")

        app.routes.append(Route("/healthz", healthz, methods=["GET"]))
        return app

    async def start(self) -> None:
        """Start the sync poller and serve until shutdown."""
        import uvicorn

        app = self.build_app()

        await self.state_manager.start_sync_poller(
            self.dashboard_service, self.config.auto_sync_interval_seconds
        )

        config = uvicorn.Config(
            app,
            host=self.config.host,
            port=self.config.port,
            log_level="info",
        )
        self._server = uvicorn.Server(config)
        logger.info(f"Serving dashboard on http://{self.config.host}:{self.config.port}")

        await self._server.serve()

    async def stop(self) -> None:
        """Stop the web server."""
        await self.state_manager.stop_sync_poller()
        await self.state_manager.cancel_background_tasks()

        if self._server:
            self._server.should_exit = True
