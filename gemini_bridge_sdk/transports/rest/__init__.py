"""REST (Server-Sent Events) transport."""

from .adapter import RestApiClient

__all__ = ["RestApiClient"]
