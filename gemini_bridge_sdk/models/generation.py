from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from ..config.constants import (
    DEFAULT_MAX_OUTPUT_TOKENS,
    DEFAULT_MODEL_NAME,
    DEFAULT_TEMPERATURE,
)


class LiveConfig(BaseModel):
    """
    Session configuration supplied at connect time.

    Accepts the same mapping the duplex client is configured with, so the
    wire aliases (``systemInstruction``) are recognised alongside the
    snake_case field names. Fields only the duplex transport understands
    (``generationConfig``, ``tools``, ...) are kept but ignored here.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    model: str = Field(DEFAULT_MODEL_NAME, min_length=1, description="Model identifier")
    system_instruction: Optional[Union[str, Dict[str, Any]]] = Field(
        None,
        alias="systemInstruction",
        description="System instruction, plain text or a Content object",
    )


class GenerationConfig(BaseModel):
    """Fixed generation parameters sent with every request."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    temperature: float = Field(default=DEFAULT_TEMPERATURE, ge=0.0, le=2.0, description="Sampling temperature")
    max_output_tokens: int = Field(
        default=DEFAULT_MAX_OUTPUT_TOKENS,
        ge=1,
        alias="maxOutputTokens",
        description="Maximum tokens to generate",
    )

    def to_wire(self) -> Dict[str, Any]:
        """Serialize using the API's camelCase field names."""
        return self.model_dump(by_alias=True)


ConfigInput = Union[LiveConfig, Dict[str, Any]]


def coerce_live_config(config: Optional[ConfigInput]) -> LiveConfig:
    """Build a LiveConfig from a mapping, or pass an existing one through."""
    if config is None:
        return LiveConfig()
    if isinstance(config, LiveConfig):
        return config
    return LiveConfig.model_validate(config)
