from __future__ import annotations

from typing import Any, Dict, Optional, Union

from ...config.constants import MODEL_RESOURCE_PREFIX
from ...models.generation import GenerationConfig, LiveConfig


def normalize_model_name(model: str) -> str:
    """Strip the ``models/`` resource prefix so the name fits the URL path."""
    if model.startswith(MODEL_RESOURCE_PREFIX):
        return model[len(MODEL_RESOURCE_PREFIX):]
    return model


def models_url(base_url: str, api_version: str) -> str:
    return f"{base_url}/{api_version}/models"


def stream_generate_url(base_url: str, api_version: str, model: str) -> str:
    return f"{models_url(base_url, api_version)}/{normalize_model_name(model)}:streamGenerateContent"


def format_system_instruction(value: Optional[Union[str, Dict[str, Any]]]) -> Optional[Dict[str, Any]]:
    """Plain text becomes a single-part Content object; Content objects pass through."""
    if not value:
        return None
    if isinstance(value, str):
        return {"parts": [{"text": value}]}
    return dict(value)


def build_generate_payload(
    text: str,
    config: LiveConfig,
    generation_config: Optional[GenerationConfig] = None,
) -> Dict[str, Any]:
    """Build the JSON body of a ``streamGenerateContent`` request.

    The user text is sent as the single part of a single content entry.
    """
    generation_config = generation_config or GenerationConfig()
    payload: Dict[str, Any] = {
        "contents": [{"parts": [{"text": text}]}],
        "generationConfig": generation_config.to_wire(),
    }

    system_instruction = format_system_instruction(config.system_instruction)
    if system_instruction:
        payload["systemInstruction"] = system_instruction

    return payload


def extract_text(message: Any) -> str:
    """Accept a plain string or anything exposing ``text`` (attribute or key)."""
    if isinstance(message, str):
        return message

    if isinstance(message, dict):
        text = message.get("text")
    else:
        text = getattr(message, "text", None)

    if isinstance(text, str) and text:
        return text
    raise TypeError(f"Cannot send message of type {type(message).__name__}: no text")
