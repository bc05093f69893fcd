"""Observability layer.

This layer handles structured logging for transports. The SDK never
installs log handlers; applications configure the ``logging`` module.
"""

from .logging import TransportLogger

__all__ = ["TransportLogger"]
