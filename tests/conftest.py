"""Shared pytest fixtures for Gemini bridge SDK tests."""

import pytest
import httpx

from gemini_bridge_sdk.config.settings import ClientSettings
from gemini_bridge_sdk.transports.rest.adapter import RestApiClient
from tests.helpers.streaming_mocks import EventRecorder, FakeGeminiApi


GEMINI_ENV_VARS = (
    "GEMINI_API_KEY",
    "GEMINI_API_MODE",
    "GEMINI_MODEL_NAME",
    "GEMINI_SYSTEM_INSTRUCTION",
    "GEMINI_BASE_URL",
    "GEMINI_API_VERSION",
    "GEMINI_TIMEOUT",
)


def pytest_configure(config):
    config.addinivalue_line("markers", "integration: end-to-end flows across transport components")


@pytest.fixture
def clean_env(monkeypatch):
    """Remove GEMINI_* variables and restore them (or their absence) afterwards."""
    for name in GEMINI_ENV_VARS:
        # setenv first so teardown also removes values loaded later from a .env file
        monkeypatch.setenv(name, "placeholder")
        monkeypatch.delenv(name)
    return monkeypatch


@pytest.fixture
def settings():
    """Settings for a REST session with a test key."""
    return ClientSettings(
        api_key="test-key",
        model="models/gemini-flash-latest",
        system_instruction="You are a test assistant.",
    )


@pytest.fixture
def fake_api():
    """Fake Gemini REST API."""
    return FakeGeminiApi()


@pytest.fixture
def http_client(fake_api):
    """httpx client routed to the fake API."""
    return httpx.AsyncClient(transport=fake_api.transport())


@pytest.fixture
def rest_client(settings, http_client):
    """REST transport using the fake API."""
    return RestApiClient(settings, http_client=http_client)


@pytest.fixture
def recorder(rest_client):
    """Records every standard event the REST transport emits."""
    return EventRecorder(rest_client)


@pytest.fixture
def live_config():
    """Session configuration as the host application passes it."""
    return {
        "model": "models/gemini-flash-latest",
        "systemInstruction": {"parts": [{"text": "Be brief."}]},
    }
