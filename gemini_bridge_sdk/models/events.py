"""Event models for the transport event surface.

Names and payload shapes mirror the duplex (Live) client so that host code
can subscribe to either transport without knowing which one is active.
"""

from enum import Enum
from typing import Any, Dict, Union

from ..config.constants import NORMAL_CLOSURE_CODE


class EventType(str, Enum):
    """Events every transport emits."""
    OPEN = "open"
    SETUP_COMPLETE = "setup-complete"
    CONTENT = "content"
    TURN_COMPLETE = "turn-complete"
    ERROR = "error"
    CLOSE = "close"


EventKind = Union[EventType, str]


def event_name(kind: EventKind) -> str:
    """Normalise an EventType member or a free-form name to its string key."""
    if isinstance(kind, EventType):
        return kind.value
    return str(kind)


def empty_payload() -> Dict[str, Any]:
    return {}


def content_payload(text: str) -> Dict[str, Any]:
    """Shape one text fragment like a duplex ``serverContent`` model turn."""
    return {"modelTurn": {"parts": [{"text": text}]}}


def close_payload(code: int = NORMAL_CLOSURE_CODE) -> Dict[str, Any]:
    return {"code": code}
