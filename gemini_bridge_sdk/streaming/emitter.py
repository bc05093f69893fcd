from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Callable, Dict, List, Optional, Set

from ..models.events import EventKind, event_name

logger = logging.getLogger(__name__)

Listener = Callable[[Any], Any]


class EventEmitter:
    """Publish/subscribe registry keyed by event name.

    Listeners for one event run synchronously in registration order. A
    listener registered while an event is being dispatched does not see
    that event, and nothing is replayed to late subscribers.

    A listener that raises is logged and the remaining listeners still run.
    A listener that returns an awaitable (an ``async def`` callback) has it
    scheduled on the running loop.
    """

    def __init__(self) -> None:
        self._listeners: Dict[str, List[Listener]] = {}
        self._pending: Set[asyncio.Future] = set()

    def on(self, kind: EventKind, callback: Listener) -> None:
        if not callable(callback):
            raise TypeError(f"Listener for '{event_name(kind)}' must be callable")
        self._listeners.setdefault(event_name(kind), []).append(callback)

    def off(self, kind: EventKind, callback: Listener) -> bool:
        """Remove the first registration of ``callback``. Returns False if absent."""
        listeners = self._listeners.get(event_name(kind), [])
        try:
            listeners.remove(callback)
        except ValueError:
            return False
        return True

    def remove_all_listeners(self, kind: Optional[EventKind] = None) -> None:
        if kind is None:
            self._listeners.clear()
        else:
            self._listeners.pop(event_name(kind), None)

    def listener_count(self, kind: EventKind) -> int:
        return len(self._listeners.get(event_name(kind), []))

    def emit(self, kind: EventKind, payload: Any = None) -> None:
        name = event_name(kind)
        for callback in list(self._listeners.get(name, [])):
            try:
                result = callback(payload)
            except Exception:
                logger.exception(f"Listener for '{name}' event failed")
                continue

            if inspect.isawaitable(result):
                self._schedule(name, result)

    def _schedule(self, name: str, awaitable: Any) -> None:
        future = asyncio.ensure_future(awaitable)
        self._pending.add(future)

        def _done(done: asyncio.Future) -> None:
            self._pending.discard(done)
            if not done.cancelled() and done.exception() is not None:
                logger.error(f"Async listener for '{name}' event failed: {done.exception()}")

        future.add_done_callback(_done)
