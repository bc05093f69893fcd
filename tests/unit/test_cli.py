"""Unit tests for the CLI."""

import pytest

from gemini_bridge_sdk import cli
from gemini_bridge_sdk.config.settings import ClientSettings
from gemini_bridge_sdk.transports.rest.adapter import RestApiClient
from tests.helpers.streaming_mocks import build_sse_body


@pytest.fixture
def cli_transport(monkeypatch, http_client):
    """Route the CLI to a REST transport backed by the fake API."""
    settings = ClientSettings(api_key="test-key")
    monkeypatch.setattr(cli, "load_settings", lambda **kwargs: settings)
    monkeypatch.setattr(
        cli, "create_transport", lambda s: RestApiClient(s, http_client=http_client)
    )
    return settings


class TestCli:
    @pytest.mark.asyncio
    async def test_chat_prints_stream(self, cli_transport, fake_api, capsys):
        fake_api.set_stream(build_sse_body(["Four", "."]))

        exit_code = await cli.chat("What is 2+2?")

        assert exit_code == 0
        assert capsys.readouterr().out == "Four.\n"

    @pytest.mark.asyncio
    async def test_chat_reports_generation_error(self, cli_transport, fake_api, capsys):
        fake_api.set_stream_error(429, "quota exceeded")

        exit_code = await cli.chat("hi")

        assert exit_code == 1
        assert "quota exceeded" in capsys.readouterr().err

    @pytest.mark.asyncio
    async def test_check_reports_rejected_key(self, cli_transport, fake_api, capsys):
        fake_api.models_status = 401

        exit_code = await cli.check()

        assert exit_code == 1
        assert "401" in capsys.readouterr().out

    def test_help_without_command(self, capsys):
        assert cli.main([]) == 0
        assert "chat" in capsys.readouterr().out
