"""Main entry point for the agent idle monitor."""

import asyncio
import logging
import sys

import aiohttp

from agent_idle_monitor.adapters.config import AppConfig, ProfileConfigurationLoader
from agent_idle_monitor.adapters.gemini_api import GeminiInsightService
from agent_idle_monitor.adapters.genesys_api import GenesysAgentRepository
from agent_idle_monitor.adapters.storage import JsonProfileRepository
from agent_idle_monitor.adapters.web import PyViewWebAdapter
from agent_idle_monitor.adapters.web.broadcasters import StateBroadcaster
from agent_idle_monitor.adapters.web.state import DEFAULT_BROADCAST_TOPIC
from agent_idle_monitor.application.services import (
    DEFAULT_PROFILES,
    DashboardService,
    ProfileStore,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stderr,
)

logger = logging.getLogger(__name__)


async def main() -> None:
    """Main application entry point."""
    config = AppConfig()

    try:
        default_profiles = ProfileConfigurationLoader.load(config) or list(DEFAULT_PROFILES)
    except (ValueError, FileNotFoundError) as e:
        logger.error(f"Invalid profile configuration: {e}")
        sys.exit(1)

    profile_store = ProfileStore(JsonProfileRepository(config.profiles_file), default_profiles)
    logger.info(
        f"Loaded {len(profile_store.profiles)} profile(s), "
        f"active: '{profile_store.active_profile.name}'"
    )
    if not config.gemini_api_key:
        logger.warning("GEMINI_API_KEY is not set; AI reports will show the fallback analysis")

    # Create aiohttp session for efficient HTTP connections
    async with aiohttp.ClientSession() as session:
        dashboard_service = DashboardService(
            profile_store,
            GenesysAgentRepository(session, timeout_seconds=config.http_timeout_seconds),
            GeminiInsightService(
                session,
                config.gemini_api_key,
                model=config.gemini_model,
                api_base=config.gemini_api_base,
                timeout_seconds=config.http_timeout_seconds,
            ),
            history_size=config.history_size,
            timezone=config.timezone,
            broadcaster=StateBroadcaster(),
            broadcast_topic=DEFAULT_BROADCAST_TOPIC,
        )

        display_adapter = PyViewWebAdapter(dashboard_service, config)

        try:
            await display_adapter.start()
        except KeyboardInterrupt:
            logger.info("Shutting down...")
        finally:
            await display_adapter.stop()


def run() -> None:
    """Console script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
