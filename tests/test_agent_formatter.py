"""Tests for AgentFormatter."""

from datetime import UTC, datetime

import pytest

from agent_idle_monitor.adapters.config import AppConfig
from agent_idle_monitor.adapters.web.formatters import AgentFormatter


@pytest.fixture
def formatter() -> AgentFormatter:
    return AgentFormatter(AppConfig.for_testing(timezone="UTC"))


def test_formats_minutes_and_scores(formatter: AgentFormatter) -> None:
    assert formatter.format_idle_minutes(42) == "42m"
    assert formatter.format_score(95) == "95%"


@pytest.mark.parametrize(
    ("status", "expected"),
    [
        ("IDLE", "badge badge-idle"),
        ("COMMUNICATING", "badge badge-communicating"),
        ("OFF_LINE", "badge badge-offline"),
        ("INTERACTING", "badge badge-interacting"),
        ("NOT_RESPONDING", "badge badge-other"),
        ("BRAND_NEW", "badge badge-other"),
    ],
)
def test_status_badges(formatter: AgentFormatter, status: str, expected: str) -> None:
    assert formatter.status_badge_class(status) == expected


def test_efficiency_classes_use_strict_thresholds(formatter: AgentFormatter) -> None:
    """Given scores on the thresholds, when classifying, then they fall to the lower band."""
    assert formatter.efficiency_class(95) == "score-high"
    assert formatter.efficiency_class(85) == "score-mid"
    assert formatter.efficiency_class(61) == "score-mid"
    assert formatter.efficiency_class(60) == "score-low"


def test_initials(formatter: AgentFormatter) -> None:
    assert formatter.initials("ada  lovelace") == "AL"
    assert formatter.initials("") == ""


def test_timestamps_use_configured_timezone() -> None:
    """Given a Sydney timezone, when formatting UTC times, then local time is shown."""
    formatter = AgentFormatter(AppConfig.for_testing(timezone="Australia/Sydney"))
    when = datetime(2024, 5, 1, 0, 30, tzinfo=UTC)

    assert formatter.format_last_synced(when) == "2024-05-01 10:30:00"
    assert formatter.format_update_time(when) == "10:30:00"


def test_missing_timestamps_show_never(formatter: AgentFormatter) -> None:
    assert formatter.format_last_synced(None) == "Never"
    assert formatter.format_update_time(None) == "Never"
