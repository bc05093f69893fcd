"""
Transport registry.

Maps an API mode (``settings.api_mode``) to a factory building the
transport for it. The REST transport is registered under ``"rest"``; the
application registers its duplex Live client under ``"websocket"``.
"""

from typing import Any, Callable, Dict, List, Optional

from ..config.constants import API_MODE_REST
from ..config.settings import ClientSettings
from ..errors import TransportError
from .base import RealtimeTransport
from .rest.adapter import RestApiClient

TransportFactory = Callable[..., RealtimeTransport]

_TRANSPORTS: Dict[str, TransportFactory] = {
    API_MODE_REST: RestApiClient,
}


def register_transport(mode: str, factory: TransportFactory, replace: bool = False) -> None:
    """
    Register the factory used for ``mode``.

    The factory is called as ``factory(settings, **kwargs)`` and must
    return a RealtimeTransport.
    """
    key = mode.strip().lower()
    if key in _TRANSPORTS and not replace:
        raise ValueError(f"Transport already registered for mode '{key}'")
    _TRANSPORTS[key] = factory


def unregister_transport(mode: str) -> None:
    _TRANSPORTS.pop(mode.strip().lower(), None)


def get_transport_factory(mode: str) -> TransportFactory:
    """Get the factory for ``mode``, raising TransportError if none is registered."""
    key = mode.strip().lower()
    try:
        return _TRANSPORTS[key]
    except KeyError:
        raise TransportError(
            f"No transport registered for API mode '{key}' "
            f"(available: {', '.join(list_transports())})",
            transport=key,
        ) from None


def list_transports() -> List[str]:
    return sorted(_TRANSPORTS)


def create_transport(settings: Optional[ClientSettings] = None, **kwargs: Any) -> RealtimeTransport:
    """Build the transport selected by ``settings.api_mode``."""
    settings = settings or ClientSettings()
    transport = get_transport_factory(settings.api_mode)(settings, **kwargs)
    if not isinstance(transport, RealtimeTransport):
        raise TransportError(
            f"Factory for API mode '{settings.api_mode}' returned {type(transport).__name__}, "
            "expected a RealtimeTransport",
            transport=settings.api_mode,
        )
    return transport
