"""
Client settings.

Settings are an explicit value handed to a transport's constructor. They
are read from keyword overrides first, then from ``GEMINI_*`` environment
variables (a ``.env`` file is loaded with python-dotenv), then from the
defaults in ``constants``.
"""

import os
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..models.generation import LiveConfig
from .constants import (
    DEFAULT_API_MODE,
    DEFAULT_API_VERSION,
    DEFAULT_BASE_URL,
    DEFAULT_MODEL_NAME,
    DEFAULT_SYSTEM_INSTRUCTION,
    ENV_API_KEY,
    ENV_API_MODE,
    ENV_API_VERSION,
    ENV_BASE_URL,
    ENV_MODEL_NAME,
    ENV_SYSTEM_INSTRUCTION,
    ENV_TIMEOUT,
)


class ClientSettings(BaseModel):
    """Transport selection, endpoint and session defaults."""
    model_config = ConfigDict(frozen=True)

    api_mode: str = Field(DEFAULT_API_MODE, description="Transport to use: 'rest' or 'websocket'")
    model: str = Field(DEFAULT_MODEL_NAME, min_length=1, description="Model identifier")
    system_instruction: Optional[str] = Field(DEFAULT_SYSTEM_INSTRUCTION, description="System instruction text")
    api_key: Optional[str] = Field(None, repr=False, description="API key")
    base_url: str = Field(DEFAULT_BASE_URL, description="API base URL")
    api_version: str = Field(DEFAULT_API_VERSION, description="API version path segment")
    timeout: Optional[float] = Field(None, gt=0, description="HTTP timeout in seconds, None for no timeout")

    @field_validator('api_mode')
    def validate_api_mode(cls, v):
        return v.strip().lower()

    @field_validator('base_url')
    def validate_base_url(cls, v):
        return v.rstrip("/")

    def live_config(self) -> LiveConfig:
        """Session configuration to pass to ``connect``."""
        return LiveConfig(model=self.model, system_instruction=self.system_instruction or None)


def load_settings(env_file: Optional[str] = None, **overrides: Any) -> ClientSettings:
    """
    Build settings from the environment.

    Args:
        env_file: Path of a .env file; searched for when not given
        **overrides: Field values that win over the environment (None is ignored)

    Returns:
        ClientSettings
    """
    load_dotenv(dotenv_path=env_file)

    values: Dict[str, Any] = {}
    env_fields = {
        "api_key": ENV_API_KEY,
        "api_mode": ENV_API_MODE,
        "model": ENV_MODEL_NAME,
        "system_instruction": ENV_SYSTEM_INSTRUCTION,
        "base_url": ENV_BASE_URL,
        "api_version": ENV_API_VERSION,
    }
    for field_name, env_var in env_fields.items():
        value = os.getenv(env_var)
        if value:
            values[field_name] = value

    timeout = os.getenv(ENV_TIMEOUT)
    if timeout:
        values["timeout"] = float(timeout)

    values.update({k: v for k, v in overrides.items() if v is not None})
    return ClientSettings(**values)
