"""
Structured logging for transports.

Log lines carry ``[transport=... key=value ...]`` prefixes so a turn can be
followed across connect, stream and close by its ``request_id``.
"""

import logging
import time
import uuid
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional


class TransportLogger:
    """Structured logger bound to one transport name."""

    def __init__(self, transport_name: str):
        self.transport = transport_name
        self.logger = logging.getLogger(f"gemini_bridge_sdk.transports.{transport_name}")

    def _format_message(self, message: str, **fields: Any) -> str:
        parts = [f"transport={self.transport}"]
        parts.extend(f"{key}={value}" for key, value in fields.items() if value is not None)
        return f"[{' '.join(parts)}] {message}"

    def _log(self, level: int, message: str, **fields: Any) -> None:
        if self.logger.isEnabledFor(level):
            self.logger.log(level, self._format_message(message, **fields))

    def debug(self, message: str, **fields: Any) -> None:
        self._log(logging.DEBUG, message, **fields)

    def info(self, message: str, **fields: Any) -> None:
        self._log(logging.INFO, message, **fields)

    def warning(self, message: str, **fields: Any) -> None:
        self._log(logging.WARNING, message, **fields)

    def error(self, message: str, error: Optional[BaseException] = None, **fields: Any) -> None:
        """Log an error; ``error`` adds its type and message as fields."""
        if error is not None:
            fields["error_type"] = type(error).__name__
            fields["error_msg"] = str(error)
        self._log(logging.ERROR, message, **fields)

    @contextmanager
    def track_request(self, method: str, model: str) -> Iterator[Dict[str, Any]]:
        """
        Time one request (``connect`` or ``stream``) and log how it ended.

        Yields:
            Dict with the generated ``request_id`` and ``start_time``
        """
        request = {"request_id": uuid.uuid4().hex[:8], "start_time": time.time()}
        self.debug(f"Starting {method} request", model=model, request_id=request["request_id"])

        try:
            yield request
        except Exception as e:
            self.error(
                f"Failed {method} request",
                error=e,
                model=model,
                request_id=request["request_id"],
                duration_ms=self._elapsed_ms(request),
            )
            raise

        self.info(
            f"Completed {method} request",
            model=model,
            request_id=request["request_id"],
            duration_ms=self._elapsed_ms(request),
        )

    @staticmethod
    def _elapsed_ms(request: Dict[str, Any]) -> int:
        return int((time.time() - request["start_time"]) * 1000)

    def log_stream_summary(self, decoder: Any, model: str, request: Dict[str, Any]) -> None:
        """
        Log what one SSE response produced.

        Chunk and character counts go to debug; token counts from
        ``usageMetadata`` go to info when the response carried them.
        """
        duration = time.time() - request["start_time"]
        total_chars = len(decoder.text)
        self.debug(
            "Streaming metrics",
            model=model,
            request_id=request["request_id"],
            chunks=decoder.chunk_count,
            total_chars=total_chars,
            chars_per_second=int(total_chars / duration) if duration > 0 else 0,
            finish_reason=decoder.finish_reason,
            malformed_lines=decoder.malformed_lines or None,
        )

        if decoder.usage:
            self.info(
                "Token usage",
                model=model,
                request_id=request["request_id"],
                prompt_tokens=decoder.usage.get("promptTokenCount", 0),
                completion_tokens=decoder.usage.get("candidatesTokenCount", 0),
                total_tokens=decoder.usage.get("totalTokenCount", 0),
            )
