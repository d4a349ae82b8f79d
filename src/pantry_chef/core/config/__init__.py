"""Configuration module with YAML and environment variable support."""

from .settings import LLMProvider, Settings, get_settings


__all__ = [
    "LLMProvider",
    "Settings",
    "get_settings",
]
