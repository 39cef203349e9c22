"""Constants for the Gemini generateContent API."""

DEFAULT_API_BASE = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL = "gemini-3-flash-preview"

RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "summary": {"type": "STRING"},
        "recommendations": {"type": "ARRAY", "items": {"type": "STRING"}},
        "bottlenecks": {"type": "ARRAY", "items": {"type": "STRING"}},
    },
    "required": ["summary", "recommendations", "bottlenecks"],
}

PROMPT_TEMPLATE = """
Analyze the following Genesys Cloud CX agent activity data:
{agent_data}

Provide a detailed analysis including:
1. A concise summary of the current floor state.
2. Specific recommendations to reduce idle time.
3. Potential bottlenecks or agents needing intervention.

Respond in strict JSON format.
"""
