"""End-to-end integration tests for the Gemini bridge SDK."""

import pytest

from gemini_bridge_sdk import ClientSettings, EventType, create_transport, register_transport, unregister_transport
from gemini_bridge_sdk.transports.base import RealtimeTransport
from tests.helpers.fake_transports import FakeLiveClient
from tests.helpers.streaming_mocks import EventRecorder, build_sse_body, split_bytes


async def run_host_session(transport: RealtimeTransport, prompt: str, config):
    """Drive a transport the way a host application does."""
    recorder = EventRecorder(transport)
    await transport.connect(config, "test-key")
    await transport.send({"text": prompt})
    await transport.send_realtime_input({"mimeType": "audio/pcm", "data": "AAAA"})
    await transport.disconnect()
    return recorder


@pytest.mark.integration
class TestEndToEnd:
    """End-to-end flows across settings, registry and transports."""

    @pytest.mark.asyncio
    async def test_rest_session(self, fake_api, http_client, live_config):
        fake_api.set_stream(split_bytes(build_sse_body(["Hel", "lo", " world"]), 7))
        settings = ClientSettings(api_mode="rest", api_key="test-key")
        transport = create_transport(settings, http_client=http_client)

        recorder = await run_host_session(transport, "Say hello", live_config)

        assert recorder.names == [
            "open",
            "setup-complete",
            "content",
            "content",
            "content",
            "turn-complete",
            "close",
        ]
        assert "".join(recorder.texts()) == "Hello world"
        assert recorder.payloads("close") == [{"code": 1000}]
        assert transport.is_connected is False

        request = fake_api.stream_requests[0]
        assert request.url.path == "/v1beta/models/gemini-flash-latest:streamGenerateContent"

    @pytest.mark.asyncio
    async def test_transports_are_substitutable(self, fake_api, http_client, live_config):
        fake_api.set_stream(build_sse_body(["Hel", "lo"]))
        register_transport("websocket", lambda settings, **kwargs: FakeLiveClient(settings, replies=["Hel", "lo"]))
        try:
            rest = create_transport(ClientSettings(api_mode="rest"), http_client=http_client)
            live = create_transport(ClientSettings(api_mode="websocket"))

            rest_events = (await run_host_session(rest, "Say hello", live_config)).events
            live_events = (await run_host_session(live, "Say hello", live_config)).events
        finally:
            unregister_transport("websocket")

        assert rest_events == live_events
        assert live.sent == ["Say hello"]

    @pytest.mark.asyncio
    async def test_failed_turn_then_recovery(self, fake_api, http_client, live_config):
        fake_api.stream_responses = [
            (503, "backend unavailable"),
            (200, [build_sse_body(["Back"])]),
        ]
        transport = create_transport(ClientSettings(api_key="test-key"), http_client=http_client)
        recorder = EventRecorder(transport)

        await transport.connect(live_config)
        await transport.send("first")
        await transport.send("second")
        await transport.disconnect()

        assert recorder.names == [
            "open",
            "setup-complete",
            "error",
            "content",
            "turn-complete",
            "close",
        ]
        error = recorder.payloads(EventType.ERROR.value)[0]
        assert error.status_code == 503
        assert error.is_retryable is True
