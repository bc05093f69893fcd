import asyncio
from typing import Any, Optional

import httpx

from ..base import RealtimeTransport, TransportState
from ...config.settings import ClientSettings
from ...errors import ApiConnectionError, ErrorMapper, GenerationError, TransportError
from ...models.events import EventType, close_payload, content_payload, empty_payload
from ...models.generation import ConfigInput, GenerationConfig, LiveConfig, coerce_live_config
from ...observability.logging import TransportLogger
from ...streaming.sse import SSEStreamDecoder
from .payloads import build_generate_payload, extract_text, models_url, stream_generate_url
from .streaming import stream_generate_content


logger = TransportLogger("rest")


class RestApiClient(RealtimeTransport):
    """
    Gemini transport over the REST ``streamGenerateContent`` SSE endpoint.

    For models without Live API support. It publishes the same events as
    the duplex WebSocket client, so host code cannot tell which transport
    is active:

    - ``connect`` checks the key against the models endpoint, then emits
      ``open`` and ``setup-complete``
    - ``send`` issues one streaming request per turn, emits every text
      fragment as ``content`` and finishes with ``turn-complete``; any
      failure is emitted as ``error`` instead of being raised
    - ``send_realtime_input`` is accepted and ignored

    Turns are serialised: a ``send`` issued while another turn is streaming
    waits for it to finish. ``disconnect`` does not cancel a turn that is
    already streaming.
    """

    def __init__(
        self,
        settings: Optional[ClientSettings] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        generation_config: Optional[GenerationConfig] = None,
    ):
        super().__init__()
        self.settings = settings or ClientSettings()
        self.base_url = self.settings.base_url
        self.api_version = self.settings.api_version
        self.generation_config = generation_config or GenerationConfig()
        self.api_key: Optional[str] = None
        self.config: Optional[LiveConfig] = None
        self._client = http_client
        self._owns_client = http_client is None
        self._turn_lock = asyncio.Lock()

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy initialization of the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.settings.timeout)
            self._owns_client = True
        return self._client

    def get_transport_name(self) -> str:
        return "rest"

    async def connect(self, config: Optional[ConfigInput] = None, api_key: Optional[str] = None) -> None:
        """
        Validate the API key and open the emulated session.

        Args:
            config: Session configuration (``model``, ``systemInstruction``);
                defaults to the one derived from settings
            api_key: API key; defaults to the one in settings

        Raises:
            ApiConnectionError: If the key is missing, the models endpoint
                answers with a non-2xx status, or the request fails. Nothing
                is stored and no event is emitted in that case.
        """
        live_config = coerce_live_config(config) if config is not None else self.settings.live_config()
        key = api_key or self.settings.api_key
        if not key:
            raise ApiConnectionError("API key not provided", transport=self.get_transport_name())

        previous_state = self._state
        self._state = TransportState.CONNECTING
        try:
            with logger.track_request("connect", live_config.model):
                await self._validate_api_key(key)
            self.api_key = key
            self.config = live_config
            self._state = TransportState.CONNECTED
        finally:
            if self._state == TransportState.CONNECTING:
                self._state = previous_state

        self.emit(EventType.OPEN, empty_payload())
        self.emit(EventType.SETUP_COMPLETE, empty_payload())
        logger.info("Connected to Gemini REST API", model=live_config.model)

    async def _validate_api_key(self, api_key: str) -> None:
        try:
            response = await self.client.get(
                models_url(self.base_url, self.api_version),
                params={"key": api_key},
            )
        except httpx.HTTPError as e:
            raise ErrorMapper.connection_failed(error=e, transport=self.get_transport_name()) from e

        if not response.is_success:
            raise ErrorMapper.connection_failed(response=response, transport=self.get_transport_name())

    async def disconnect(self) -> None:
        """Close the emulated session and emit ``close`` with a normal-closure code."""
        self._state = TransportState.DISCONNECTED
        self.api_key = None
        self.config = None
        await self._release_client_if_idle()

        self.emit(EventType.CLOSE, close_payload())
        logger.info("Disconnected from Gemini REST API")

    async def _release_client_if_idle(self) -> None:
        if not self._owns_client or self._client is None or self._turn_lock.locked():
            return

        client, self._client = self._client, None
        try:
            await client.aclose()
        except Exception as e:
            logger.warning("Error closing HTTP client", error_type=type(e).__name__, error_msg=str(e))

    async def send(self, message: Any) -> None:
        """
        Send one user turn.

        Args:
            message: A string, or an object/mapping exposing ``text``

        Never raises: when disconnected the call is ignored, and failures
        during the turn are emitted as ``error`` events.
        """
        if not self.is_connected:
            logger.error("Not connected to API")
            return

        async with self._turn_lock:
            if not self.is_connected:
                logger.warning("Disconnected before queued turn started")
                return

            try:
                await self.generate_content(extract_text(message))
            except Exception as e:
                fields = ErrorMapper.get_error_classification(e) if isinstance(e, TransportError) else {}
                logger.error("Send error", error=e, **fields)
                self.emit(EventType.ERROR, e)

        if not self.is_connected:
            await self._release_client_if_idle()

    async def generate_content(self, text: str) -> None:
        """
        Run one streaming generation and emit its events.

        Emits one ``content`` event per text fragment as soon as it is
        decoded, then ``turn-complete`` once the response body is exhausted.

        Raises:
            GenerationError: On a non-2xx response (with status and body) or
                a network failure. ``turn-complete`` is not emitted then.
        """
        config, api_key = self.config, self.api_key
        if config is None or api_key is None:
            raise GenerationError("Not connected to API", transport=self.get_transport_name())

        url = stream_generate_url(self.base_url, self.api_version, config.model)
        payload = build_generate_payload(text, config, self.generation_config)
        params = {"key": api_key, "alt": "sse"}
        decoder = SSEStreamDecoder()

        with logger.track_request("stream", config.model) as request:
            try:
                async for fragment in stream_generate_content(self.client, url, params, payload, decoder):
                    self.emit(EventType.CONTENT, content_payload(fragment))
            except httpx.HTTPError as e:
                raise ErrorMapper.generation_failed(error=e, transport=self.get_transport_name()) from e
            finally:
                logger.log_stream_summary(decoder, config.model, request)

        self.emit(EventType.TURN_COMPLETE, empty_payload())

    async def send_realtime_input(self, data: Any = None) -> None:
        """Realtime audio/video input has no REST equivalent; log and ignore it."""
        logger.warning("Realtime input (audio/video) is not supported in REST API mode")
