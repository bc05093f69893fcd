"""Unit tests for client settings."""

import pytest
from pydantic import ValidationError

from gemini_bridge_sdk.config.settings import ClientSettings, load_settings


class TestClientSettings:
    def test_defaults(self):
        settings = ClientSettings()

        assert settings.api_mode == "rest"
        assert settings.model == "models/gemini-flash-latest"
        assert settings.base_url == "https://generativelanguage.googleapis.com"
        assert settings.api_version == "v1beta"
        assert settings.timeout is None
        assert settings.api_key is None

    def test_api_key_not_in_repr(self):
        assert "secret" not in repr(ClientSettings(api_key="secret"))

    def test_normalisation(self):
        settings = ClientSettings(api_mode=" WebSocket ", base_url="https://example.test/")

        assert settings.api_mode == "websocket"
        assert settings.base_url == "https://example.test"

    def test_invalid_timeout(self):
        with pytest.raises(ValidationError):
            ClientSettings(timeout=0)

    def test_live_config(self):
        config = ClientSettings(model="models/gemini-1.5-pro", system_instruction="Be terse.").live_config()

        assert config.model == "models/gemini-1.5-pro"
        assert config.system_instruction == "Be terse."

    def test_live_config_without_instruction(self):
        assert ClientSettings(system_instruction="").live_config().system_instruction is None


class TestLoadSettings:
    def test_reads_environment(self, clean_env, tmp_path):
        clean_env.setenv("GEMINI_API_KEY", "env-key")
        clean_env.setenv("GEMINI_API_MODE", "websocket")
        clean_env.setenv("GEMINI_MODEL_NAME", "models/gemini-2.0-flash-exp")
        clean_env.setenv("GEMINI_TIMEOUT", "12.5")

        settings = load_settings(env_file=str(tmp_path / "missing.env"))

        assert settings.api_key == "env-key"
        assert settings.api_mode == "websocket"
        assert settings.model == "models/gemini-2.0-flash-exp"
        assert settings.timeout == 12.5

    def test_reads_dotenv_file(self, clean_env, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("GEMINI_API_KEY=file-key\nGEMINI_SYSTEM_INSTRUCTION=From file\n")

        settings = load_settings(env_file=str(env_file))

        assert settings.api_key == "file-key"
        assert settings.system_instruction == "From file"

    def test_overrides_win(self, clean_env, tmp_path):
        clean_env.setenv("GEMINI_API_KEY", "env-key")
        clean_env.setenv("GEMINI_MODEL_NAME", "models/from-env")

        settings = load_settings(env_file=str(tmp_path / "missing.env"), api_key="arg-key", model=None)

        assert settings.api_key == "arg-key"
        assert settings.model == "models/from-env"
