"""
Gemini Bridge SDK - one event-driven client surface over two Gemini transports.

This package lets an application talk to Gemini through either:
- the Live API over a persistent WebSocket (duplex), or
- the REST ``streamGenerateContent`` endpoint over Server-Sent Events

Features:
- Identical events from both transports (open, setup-complete, content,
  turn-complete, error, close)
- Incremental, chunk-boundary-independent SSE decoding
- Transport selection by configuration through a registry
- Realtime audio/video input degrades to a logged no-op on REST
"""

__version__ = "0.1.0"

from .config.settings import ClientSettings, load_settings
from .errors import (
    ApiConnectionError,
    DecodeError,
    GenerationError,
    TransportError,
)
from .models.events import EventType
from .models.generation import GenerationConfig, LiveConfig
from .streaming import EventEmitter, SSEStreamDecoder, iter_sse_text
from .transports import (
    RealtimeTransport,
    RestApiClient,
    TransportState,
    create_transport,
    list_transports,
    register_transport,
    unregister_transport,
)

__all__ = [
    # Transports
    "RealtimeTransport",
    "RestApiClient",
    "TransportState",
    "create_transport",
    "list_transports",
    "register_transport",
    "unregister_transport",

    # Configuration
    "ClientSettings",
    "load_settings",
    "LiveConfig",
    "GenerationConfig",

    # Events and streaming
    "EventType",
    "EventEmitter",
    "SSEStreamDecoder",
    "iter_sse_text",

    # Errors
    "TransportError",
    "ApiConnectionError",
    "GenerationError",
    "DecodeError",
]
