"""Provider factory: builds the configured provider or falls back to mock."""

from __future__ import annotations

import logging

from formscribe.core.config import Settings, get_settings

from .base import BaseProvider, ProviderResult
from .mock import MockProvider

logger = logging.getLogger(__name__)

__all__ = ["get_provider", "BaseProvider", "ProviderResult", "MockProvider"]

# provider name -> (settings attribute holding the key, env var for log messages)
_API_KEYS: dict[str, tuple[str, str]] = {
    "openai": ("openai_api_key", "OPENAI_API_KEY"),
    "claude": ("anthropic_api_key", "ANTHROPIC_API_KEY"),
    "groq": ("groq_api_key", "GROQ_API_KEY"),
}


def _build(name: str, api_key: str) -> BaseProvider:
    if name == "openai":
        from .openai import OpenAIProvider

        return OpenAIProvider(api_key=api_key)
    if name == "claude":
        from .claude import ClaudeProvider

        return ClaudeProvider(api_key=api_key)

    from .groq import GroqProvider

    return GroqProvider(api_key=api_key)


def get_provider(provider_name: str, settings: Settings | None = None) -> BaseProvider:
    """Return a provider instance for *provider_name*.

    Names are matched case-insensitively. An unknown or non-allowlisted
    provider, or one without an API key, degrades to ``MockProvider`` with a
    warning. A blank name is a caller bug and raises ``ValueError``.
    """
    name = (provider_name or "").strip().lower()
    if not name:
        raise ValueError("Provider name must not be empty")

    settings = settings or get_settings()

    if name not in settings.ai_allowed_providers:
        logger.warning("Provider %r not in allowlist - falling back to mock", name)
        return MockProvider()

    if name == "mock":
        return MockProvider()

    if name not in _API_KEYS:
        logger.warning("Unknown provider %r - falling back to mock", name)
        return MockProvider()

    key_attr, env_name = _API_KEYS[name]
    api_key = getattr(settings, key_attr)
    if not api_key:
        logger.warning("%s not set - falling back to mock for %r", env_name, name)
        return MockProvider()

    return _build(name, api_key)
