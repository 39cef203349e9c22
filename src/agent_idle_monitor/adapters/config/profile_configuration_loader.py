"""Default profile loader."""

import logging

from agent_idle_monitor.adapters.config.app_config import AppConfig
from agent_idle_monitor.domain.models.profile import (
    DEFAULT_API_HOST,
    DEFAULT_CORS_PROXY,
    DEFAULT_LOGIN_HOST,
    DEFAULT_REGION,
    Profile,
)

logger = logging.getLogger(__name__)


class ProfileConfigurationLoader:
    """Loads default connection profiles from app config."""

    @staticmethod
    def load(config: AppConfig) -> list[Profile]:
        """Load default profiles from the TOML [[profiles]] tables.

        Returns an empty list when the config file defines none; callers then
        fall back to the built-in example profile.
        """
        profiles: list[Profile] = []
        seen_ids: set[str] = set()

        for profile_data in config.get_profiles_config():
            profile_id = str(profile_data.get("id") or "").strip()
            if not profile_id:
                logger.warning("Skipping profile without an 'id' in config file")
                continue
            if profile_id in seen_ids:
                raise ValueError(f"Profile ids must be unique. Duplicate id found: {profile_id}")
            seen_ids.add(profile_id)

            # An empty string disables the proxy for this profile
            cors_proxy = profile_data.get("cors_proxy", DEFAULT_CORS_PROXY)
            profiles.append(
                Profile(
                    id=profile_id,
                    name=str(profile_data.get("name") or profile_id),
                    region=str(profile_data.get("region", DEFAULT_REGION)),
                    api_host=str(profile_data.get("api_host", DEFAULT_API_HOST)),
                    login_host=str(profile_data.get("login_host", DEFAULT_LOGIN_HOST)),
                    client_id=str(profile_data.get("client_id", "")),
                    client_secret=str(profile_data.get("client_secret", "")),
                    cors_proxy=str(cors_proxy) if cors_proxy else None,
                )
            )

        if profiles:
            logger.info(f"Loaded {len(profiles)} default profile(s) from config file")
        return profiles
