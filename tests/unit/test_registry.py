"""Unit tests for the transport registry."""

import pytest

from gemini_bridge_sdk.config.settings import ClientSettings
from gemini_bridge_sdk.errors import TransportError
from gemini_bridge_sdk.transports.registry import (
    create_transport,
    get_transport_factory,
    list_transports,
    register_transport,
    unregister_transport,
)
from gemini_bridge_sdk.transports.base import RealtimeTransport
from gemini_bridge_sdk.transports.rest.adapter import RestApiClient
from tests.helpers.fake_transports import FakeLiveClient


@pytest.fixture
def websocket_registered():
    """Register the fake duplex client for the test's duration."""
    register_transport("websocket", FakeLiveClient)
    yield
    unregister_transport("websocket")


class TestTransportRegistry:
    """Test transport selection by API mode."""

    def test_rest_registered_by_default(self):
        assert "rest" in list_transports()
        assert get_transport_factory("REST") is RestApiClient

    def test_create_rest_transport(self, http_client):
        settings = ClientSettings(api_mode="rest", api_key="k")
        transport = create_transport(settings, http_client=http_client)

        assert isinstance(transport, RestApiClient)
        assert transport.settings is settings
        assert transport.get_transport_name() == "rest"

    def test_default_settings_select_rest(self):
        assert isinstance(create_transport(), RestApiClient)

    def test_unregistered_mode_raises(self):
        with pytest.raises(TransportError) as exc_info:
            create_transport(ClientSettings(api_mode="websocket"))

        assert "websocket" in str(exc_info.value)
        assert "rest" in str(exc_info.value)

    def test_registered_duplex_transport(self, websocket_registered):
        transport = create_transport(ClientSettings(api_mode="WebSocket"))

        assert isinstance(transport, FakeLiveClient)
        assert transport.get_transport_name() == "websocket"
        assert sorted(list_transports()) == ["rest", "websocket"]

    def test_duplicate_registration_rejected(self, websocket_registered):
        with pytest.raises(ValueError):
            register_transport("websocket", FakeLiveClient)

        register_transport("websocket", FakeLiveClient, replace=True)

    def test_factory_must_return_transport(self):
        register_transport("broken", lambda settings, **kwargs: object())
        try:
            with pytest.raises(TransportError):
                create_transport(ClientSettings(api_mode="broken"))
        finally:
            unregister_transport("broken")

    def test_transport_must_name_itself(self):
        class Unnamed(FakeLiveClient):
            get_transport_name = RealtimeTransport.get_transport_name

        with pytest.raises(TypeError):
            Unnamed()
