"""Constants for the Genesys Cloud API adapter.

API Documentation: https://developer.genesys.cloud/
"""

TOKEN_PATH = "/oauth/token"
USERS_PATH = "/api/v2/users"

PAGE_SIZE = 100
# Hard ceiling on pages per sync, for servers that never report a stable pageCount
MAX_PAGES = 100
USERS_EXPAND = "presence,routingStatus"

NO_CACHE_HEADERS = {
    "Accept": "application/json",
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
}

DEFAULT_ROUTING_STATUS = "OFF_LINE"
DEFAULT_PRESENCE = "Offline"
DEFAULT_QUEUE = "General Floor"
DEFAULT_AGENT_NAME = "Unknown Agent"

# Efficiency score heuristic: routing status -> score; anything else scores the base
BASE_EFFICIENCY_SCORE = 100
EFFICIENCY_SCORES = {
    "IDLE": 40,
    "NOT_RESPONDING": 10,
    "COMMUNICATING": 95,
}
