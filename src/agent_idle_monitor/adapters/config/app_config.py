"""12-factor configuration adapter using environment variables and TOML config."""

import tomllib
from pathlib import Path
from typing import Any

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from agent_idle_monitor.adapters.gemini_api.constants import DEFAULT_API_BASE, DEFAULT_MODEL

_DISPLAY_KEYS = ("title", "banner_color", "timezone", "auto_sync_interval_seconds")


def _normalize_theme(value: str) -> str:
    if value.lower() not in ("light", "dark", "auto"):
        raise ValueError("theme must be either 'light', 'dark', or 'auto'")
    return value.lower()


def _check_history_size(value: int) -> int:
    if not 1 <= value <= 100:
        raise ValueError("history_size must be between 1 and 100")
    return value


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Server configuration
    host: str = Field(default="0.0.0.0", description="Host to bind the server to")
    port: int = Field(default=8000, description="Port to bind the server to")

    # Display configuration
    title: str = Field(
        default="Agent Idle Monitor",
        description="Page title displayed in browser tab and header",
    )
    timezone: str = Field(
        default="UTC",
        description="Timezone for sync timestamps (IANA timezone name, e.g., 'Australia/Sydney')",
    )
    theme: str = Field(
        default="light",
        description="UI theme: 'light', 'dark', or 'auto' (follows system preference)",
    )
    banner_color: str = Field(
        default="#4F46E5",
        description="Banner/header background color (hex color code)",
    )

    # Persistence
    profiles_file: str = Field(
        default="profiles.json",
        description="JSON file holding saved connection profiles and the active profile id",
    )
    config_file: str | None = Field(
        default=None,
        description="Optional TOML file with [[profiles]] defaults and [display] overrides",
    )

    # Sync behaviour
    http_timeout_seconds: int = Field(
        default=30, description="Total timeout for each outbound HTTP request in seconds"
    )
    auto_sync_interval_seconds: int = Field(
        default=0,
        description="Re-sync the active profile every N seconds (0 disables automatic syncing)",
    )
    history_size: int = Field(
        default=15,
        description="Number of sync snapshots kept for the trend chart",
    )

    # Gemini configuration
    gemini_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GEMINI_API_KEY", "API_KEY"),
        description="API key for the Gemini generateContent endpoint",
    )
    gemini_model: str = Field(default=DEFAULT_MODEL, description="Gemini model name")
    gemini_api_base: str = Field(
        default=DEFAULT_API_BASE, description="Base URL of the Generative Language API"
    )

    @classmethod
    def for_testing(cls, **overrides: Any) -> "AppConfig":
        """Build a config that ignores any local .env file."""
        return cls(_env_file=None, **overrides)

    @field_validator("theme")
    @classmethod
    def validate_theme(cls, v: str) -> str:
        """Validate theme is either 'light', 'dark', or 'auto'."""
        return _normalize_theme(v)

    @field_validator("history_size")
    @classmethod
    def validate_history_size(cls, v: int) -> int:
        """Validate the trend window holds between 1 and 100 snapshots."""
        return _check_history_size(v)

    @field_validator("auto_sync_interval_seconds", "http_timeout_seconds")
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("intervals and timeouts must not be negative")
        return v

    def _load_toml_data(self) -> dict[str, Any]:
        """Load and parse TOML file, updating display settings."""
        if not self.config_file:
            return {}

        config_path = Path(self.config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)

        display = toml_data.get("display", {})
        if isinstance(display, dict):
            for key in _DISPLAY_KEYS:
                if key in display:
                    setattr(self, key, display[key])
            if "theme" in display:
                self.theme = _normalize_theme(str(display["theme"]))
            if "history_size" in display:
                self.history_size = _check_history_size(int(display["history_size"]))

        return toml_data

    def get_profiles_config(self) -> list[dict[str, Any]]:
        """Parse and return the [[profiles]] entries of the TOML file.

        Returns an empty list when no config file is set.
        """
        toml_data = self._load_toml_data()

        profiles = toml_data.get("profiles", [])
        if not isinstance(profiles, list):
            raise ValueError("TOML config 'profiles' must be a list")
        return [p for p in profiles if isinstance(p, dict)]
