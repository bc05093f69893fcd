"""
Base Transport Interface

This module defines the abstract base class shared by the REST (SSE)
transport and the duplex (Live WebSocket) transport. Host code is written
against this interface only, so either transport can be selected by
configuration without changing the caller.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Optional

from ..models.events import EventKind
from ..models.generation import ConfigInput
from ..streaming.emitter import EventEmitter, Listener


class TransportState(str, Enum):
    """Connection state machine."""
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"


class RealtimeTransport(ABC):
    """
    Abstract base class for Gemini transports.

    Every transport publishes the same events:

    - ``open`` / ``setup-complete`` once a session is established
    - ``content`` for each model output fragment, shaped
      ``{"modelTurn": {"parts": [{"text": ...}]}}``
    - ``turn-complete`` when the model finished a turn
    - ``error`` with the exception that ended a turn
    - ``close`` with ``{"code": ...}`` when the session ends

    Subscription is by composition: each transport owns an EventEmitter.
    """

    def __init__(self) -> None:
        self._events = EventEmitter()
        self._state = TransportState.DISCONNECTED

    @property
    def state(self) -> TransportState:
        """Current connection state."""
        return self._state

    @property
    def is_connected(self) -> bool:
        return self._state == TransportState.CONNECTED

    def on(self, kind: EventKind, callback: Listener) -> None:
        """Register ``callback`` for events named ``kind``."""
        self._events.on(kind, callback)

    def off(self, kind: EventKind, callback: Listener) -> bool:
        """Unregister ``callback``. Returns False if it was not registered."""
        return self._events.off(kind, callback)

    def emit(self, kind: EventKind, payload: Any = None) -> None:
        self._events.emit(kind, payload)

    @abstractmethod
    async def connect(self, config: Optional[ConfigInput] = None, api_key: Optional[str] = None) -> None:
        """
        Open a session.

        Raises:
            ApiConnectionError: If the session could not be established
        """
        pass

    @abstractmethod
    async def disconnect(self) -> None:
        """Close the session. Never raises."""
        pass

    @abstractmethod
    async def send(self, message: Any) -> None:
        """
        Send one user turn.

        Failures are reported through the ``error`` event, never raised.
        """
        pass

    @abstractmethod
    async def send_realtime_input(self, data: Any) -> None:
        """Stream realtime media (audio/video chunks) to the model."""
        pass

    @abstractmethod
    def get_transport_name(self) -> str:
        """Name used in log lines and error attributes (e.g. "rest")."""
        pass
