"""
Transports Layer

Each transport speaks to the Gemini API over one wire protocol and exposes
the same connect/send/event surface, so the application selects one by
configuration and never branches on which is active.
"""

from .base import RealtimeTransport, TransportState
from .registry import (
    create_transport,
    get_transport_factory,
    list_transports,
    register_transport,
    unregister_transport,
)
from .rest.adapter import RestApiClient

__all__ = [
    "RealtimeTransport",
    "TransportState",
    "RestApiClient",
    "create_transport",
    "get_transport_factory",
    "list_transports",
    "register_transport",
    "unregister_transport",
]
