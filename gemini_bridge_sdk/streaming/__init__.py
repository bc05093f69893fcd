"""Streaming and events layer.

This layer handles:
- Incremental decoding of Server-Sent Events response bodies
- Publish/subscribe dispatch of transport events
"""

from .emitter import EventEmitter
from .sse import SSEStreamDecoder, iter_sse_text

__all__ = [
    "EventEmitter",
    "SSEStreamDecoder",
    "iter_sse_text",
]
