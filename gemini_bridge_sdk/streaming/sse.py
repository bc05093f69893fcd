"""
Server-Sent Events decoder for ``streamGenerateContent?alt=sse`` responses.

The decoder is fed raw byte chunks in arrival order and returns the text
fragments carried by every complete ``data:`` line. It performs no I/O, so
the same instance works for httpx response bodies and for tests that feed
bytes by hand.
"""

from __future__ import annotations

import codecs
import json
import logging
from typing import Any, AsyncIterable, AsyncIterator, Dict, List, Optional, Union

from ..config.constants import SSE_DATA_PREFIX, SSE_DONE_SENTINEL
from ..errors import DecodeError

logger = logging.getLogger(__name__)


class SSEStreamDecoder:
    """
    Incremental parser turning SSE byte chunks into text fragments.

    Complete lines are processed as soon as their terminating newline
    arrives; the trailing partial line stays in ``buffer`` until the next
    chunk. Multi-byte UTF-8 sequences split across chunks are reassembled
    by an incremental codec, so the fragments produced never depend on
    where the transport happened to cut the body.

    A malformed ``data:`` line is logged and skipped. It never aborts the
    stream.

    One instance covers one response body and is discarded afterwards.
    """

    def __init__(self, prefix: str = SSE_DATA_PREFIX, sentinel: str = SSE_DONE_SENTINEL):
        self.prefix = prefix
        self.sentinel = sentinel
        self.buffer = ""
        self.chunk_count = 0
        self.malformed_lines = 0
        self.finish_reason: Optional[str] = None
        self.usage: Optional[Dict[str, Any]] = None
        self._fragments: List[str] = []
        self._codec = codecs.getincrementaldecoder("utf-8")(errors="replace")

    @property
    def text(self) -> str:
        """All text produced so far, concatenated."""
        return "".join(self._fragments)

    def feed(self, chunk: Union[bytes, str]) -> List[str]:
        """
        Consume one chunk of the response body.

        Args:
            chunk: Raw bytes (or already decoded text) as received

        Returns:
            Text fragments from every line completed by this chunk, in order
        """
        if not chunk:
            return []

        self.chunk_count += 1
        if isinstance(chunk, (bytes, bytearray)):
            self.buffer += self._codec.decode(bytes(chunk))
        else:
            self.buffer += chunk

        lines = self.buffer.split("\n")
        self.buffer = lines.pop()

        fragments: List[str] = []
        for line in lines:
            fragments.extend(self._process_line(line))
        return fragments

    def flush(self) -> List[str]:
        """
        Finish decoding once the source is exhausted.

        A final line without a terminating newline is incomplete and is
        discarded.
        """
        tail = self.buffer + self._codec.decode(b"", final=True)
        self.buffer = ""
        if tail:
            logger.debug(f"Discarding unterminated SSE line: {tail!r}")
        return []

    def _process_line(self, line: str) -> List[str]:
        line = line.rstrip("\r")
        if not line.startswith(self.prefix):
            # Comments, keepalives, event/id fields and blank separators
            return []

        data = line[len(self.prefix):]
        if data == self.sentinel:
            return []

        try:
            record = self._parse_record(data)
        except DecodeError as e:
            self.malformed_lines += 1
            logger.error(f"Error parsing SSE data: {e}")
            return []

        return self._extract_text(record)

    @staticmethod
    def _parse_record(data: str) -> Dict[str, Any]:
        try:
            record = json.loads(data)
        except json.JSONDecodeError as e:
            raise DecodeError(f"Malformed SSE payload: {e.msg} at position {e.pos}", line=data) from e

        if not isinstance(record, dict):
            raise DecodeError("SSE payload is not a JSON object", line=data)
        return record

    def _extract_text(self, record: Dict[str, Any]) -> List[str]:
        """Collect text parts of the first candidate, recording usage and finish reason."""
        usage = record.get("usageMetadata")
        if isinstance(usage, dict):
            self.usage = usage

        if "error" in record:
            logger.warning(f"Stream reported an error record: {record['error']}")

        candidates = record.get("candidates")
        if not isinstance(candidates, list) or not candidates:
            return []

        candidate = candidates[0]
        if not isinstance(candidate, dict):
            return []

        if candidate.get("finishReason"):
            self.finish_reason = candidate["finishReason"]

        content = candidate.get("content")
        parts = content.get("parts") if isinstance(content, dict) else None
        if not isinstance(parts, list):
            return []

        fragments = []
        for part in parts:
            text = part.get("text") if isinstance(part, dict) else None
            if isinstance(text, str) and text:
                fragments.append(text)

        self._fragments.extend(fragments)
        return fragments


async def iter_sse_text(
    source: AsyncIterable[bytes],
    decoder: Optional[SSEStreamDecoder] = None,
) -> AsyncIterator[str]:
    """
    Lazily decode an async byte source into text fragments.

    Exhaustion of ``source`` ends the sequence; a ``[DONE]`` line does not.

    Args:
        source: Async iterable of byte chunks (e.g. ``response.aiter_bytes()``)
        decoder: Decoder to use, so callers can inspect its state afterwards

    Yields:
        str: Text fragments in arrival order
    """
    if decoder is None:
        decoder = SSEStreamDecoder()

    async for chunk in source:
        for fragment in decoder.feed(chunk):
            yield fragment

    for fragment in decoder.flush():
        yield fragment
