"""
Gemini API constants

Central location for endpoint, wire-format and default generation values
shared by every transport.
"""

# Endpoint
DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com"
DEFAULT_API_VERSION = "v1beta"
DEFAULT_MODEL_NAME = "models/gemini-flash-latest"
MODEL_RESOURCE_PREFIX = "models/"

# API modes understood by the transport registry
API_MODE_REST = "rest"
API_MODE_WEBSOCKET = "websocket"
DEFAULT_API_MODE = API_MODE_REST

# Server-Sent Events framing
SSE_DATA_PREFIX = "data: "
SSE_DONE_SENTINEL = "[DONE]"

# Generation parameters (not caller-configurable)
DEFAULT_TEMPERATURE = 1.0
DEFAULT_MAX_OUTPUT_TOKENS = 8192

# WebSocket close code for a normal closure (RFC 6455)
NORMAL_CLOSURE_CODE = 1000

# Environment variables read by config.settings
ENV_API_KEY = "GEMINI_API_KEY"
ENV_API_MODE = "GEMINI_API_MODE"
ENV_MODEL_NAME = "GEMINI_MODEL_NAME"
ENV_SYSTEM_INSTRUCTION = "GEMINI_SYSTEM_INSTRUCTION"
ENV_BASE_URL = "GEMINI_BASE_URL"
ENV_API_VERSION = "GEMINI_API_VERSION"
ENV_TIMEOUT = "GEMINI_TIMEOUT"

DEFAULT_SYSTEM_INSTRUCTION = (
    "You are my helpful assistant. You can see and hear me, and respond with "
    "voice and text. If you are asked about things you do not know, you can "
    "use the google search tool to find the answer."
)
