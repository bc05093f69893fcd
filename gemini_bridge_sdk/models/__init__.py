"""Data models shared by the transports."""

from .events import EventType, close_payload, content_payload, event_name
from .generation import GenerationConfig, LiveConfig, coerce_live_config

__all__ = [
    "EventType",
    "event_name",
    "content_payload",
    "close_payload",
    "GenerationConfig",
    "LiveConfig",
    "coerce_live_config",
]
