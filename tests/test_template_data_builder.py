"""Tests for TemplateDataBuilder."""

from unittest.mock import AsyncMock

import pytest

from agent_idle_monitor.adapters.config import AppConfig
from agent_idle_monitor.adapters.web.builders import TemplateDataBuilder
from agent_idle_monitor.adapters.web.formatters import AgentFormatter
from agent_idle_monitor.adapters.web.state import DashboardContext
from agent_idle_monitor.application.services import DashboardService, ProfileStore, RequestTicket
from agent_idle_monitor.domain.models import AIAnalysis, SyncSnapshot
from tests.fakes import InMemoryProfileRepository


@pytest.fixture
def builder() -> TemplateDataBuilder:
    config = AppConfig.for_testing(timezone="UTC", title="Floor")
    return TemplateDataBuilder(config, AgentFormatter(config))


@pytest.fixture
def service(make_profile) -> DashboardService:
    store = ProfileStore(
        InMemoryProfileRepository(
            [
                make_profile(id="p1", name="Acme"),
                make_profile(id="p2", name="Empty", client_id="", client_secret=""),
            ]
        )
    )
    return DashboardService(store, AsyncMock(), AsyncMock())


def test_empty_dashboard_disables_analysis(
    builder: TemplateDataBuilder, service: DashboardService
) -> None:
    """Given no agents, when building, then the empty state shows and analyze is disabled."""
    data = builder.build(service, DashboardContext())

    assert data["title"] == "Floor"
    assert data["show_dashboard"] is True
    assert data["show_empty_dashboard"] is True
    assert data["analyze_disabled"] == "disabled"
    assert data["history_label"] == "Awaiting First Sync"
    assert data["metric_avg_idle"] == "0m"
    assert data["connection_label"] == "Connected"
    assert data["update_time"] == "Never"
    assert data["is_editing"] is False


def test_roster_rows_and_metrics(
    builder: TemplateDataBuilder, service: DashboardService, make_agent
) -> None:
    """Given a synced roster, when building, then rows and metrics are formatted."""
    service.state.agents = (
        make_agent(id="a", idle_minutes=2),
        make_agent(id="b", idle_minutes=3),
        make_agent(id="c", presence="Offline", routing_status="OFF_LINE", idle_minutes=0),
    )
    service.state.history = (SyncSnapshot(time="09:00:00", idle_count=2, active_count=0),)

    data = builder.build(service, DashboardContext())

    assert data["metric_count"] == "2"
    assert data["metric_avg_idle"] == "3m"
    assert data["analyze_disabled"] == ""
    assert [row["id"] for row in data["on_queue_rows"]] == ["a", "b"]
    assert data["roster_heading"] == "Full Roster (3 Agents)"
    assert data["agent_rows"][0]["initials"] == "AL"
    assert data["agent_rows"][0]["status_class"] == "badge badge-idle"
    assert data["history"][0]["idle_pct"] == 100
    assert data["history_label"] == "Live Tracking"
    assert [d["css"] for d in data["distribution"]] == [
        "bar-idle",
        "bar-communicating",
        "bar-other",
    ]


def test_filtered_roster_heading(
    builder: TemplateDataBuilder, service: DashboardService, make_agent
) -> None:
    service.state.agents = (make_agent(id="a", name="Ada"), make_agent(id="b", name="Bob"))
    service.set_filter(search_term="bo")

    data = builder.build(service, DashboardContext())

    assert data["roster_heading"] == "Found 1 results"
    assert data["filter_active"] is True
    assert data["search_term"] == "bo"


def test_missing_credentials_and_syncing_labels(
    builder: TemplateDataBuilder, service: DashboardService
) -> None:
    """Given a profile without credentials, when building, then Missing Config is shown."""
    service.profile_store.select("p2")

    assert builder.build(service, DashboardContext())["connection_label"] == "Missing Config"

    service.state.pending_sync = RequestTicket(profile_id="p2")
    data = builder.build(service, DashboardContext())
    assert data["connection_label"] == "Syncing..."
    assert data["sync_disabled"] == "disabled"


def test_error_banner_offers_configure_link(
    builder: TemplateDataBuilder, service: DashboardService
) -> None:
    service.state.sync_error = "Missing Credentials: Go to the 'Administration' tab"

    data = builder.build(service, DashboardContext())

    assert data["has_error"] is True
    assert data["show_configure_link"] is True


def test_analysis_is_numbered(builder: TemplateDataBuilder, service: DashboardService) -> None:
    service.state.analysis = AIAnalysis(
        summary="Busy", recommendations=["First", "Second"], bottlenecks=["Billing"]
    )
    service.set_tab("reports")

    data = builder.build(service, DashboardContext())

    assert data["heading"] == "Intelligent Insights"
    assert data["recommendations"] == [
        {"number": 1, "text": "First"},
        {"number": 2, "text": "Second"},
    ]
    assert data["bottlenecks"] == ["Billing"]
    assert data["show_analysis_prompt"] is False


def test_profile_form_values(
    builder: TemplateDataBuilder, service: DashboardService, make_profile
) -> None:
    context = DashboardContext(editing_profile=make_profile(name="Acme"), is_new_profile=False)

    data = builder.build(service, context)

    assert data["is_editing"] is True
    assert data["form_title"] == "Edit Acme"
    assert data["form_cors_proxy"] == ""
    assert [p["selected"] for p in data["profiles"]] == ["selected", ""]
