from __future__ import annotations

from typing import Any, AsyncGenerator, Dict

import httpx

from ...errors import ErrorMapper
from ...streaming.sse import SSEStreamDecoder, iter_sse_text


async def stream_generate_content(
    client: httpx.AsyncClient,
    url: str,
    params: Dict[str, str],
    payload: Dict[str, Any],
    decoder: SSEStreamDecoder,
) -> AsyncGenerator[str, None]:
    """POST a ``streamGenerateContent`` request and yield text fragments as they arrive.

    Raises GenerationError when the response status is not 2xx; the error
    carries the status and the response body text.
    """
    async with client.stream("POST", url, params=params, json=payload) as response:
        if not response.is_success:
            body = (await response.aread()).decode("utf-8", errors="replace")
            raise ErrorMapper.generation_failed(
                status_code=response.status_code,
                reason=response.reason_phrase,
                body=body,
            )

        async for text in iter_sse_text(response.aiter_bytes(), decoder):
            yield text
