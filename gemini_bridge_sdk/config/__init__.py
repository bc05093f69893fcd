"""Configuration module for the Gemini bridge SDK."""

from .settings import ClientSettings, load_settings

# Import all constants
from .constants import *

__all__ = [
    "ClientSettings",
    "load_settings",
]
