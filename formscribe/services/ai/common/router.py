"""AI Router: picks provider, model and limits for one extraction scope."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from formscribe.core.config import Settings, get_settings

from .providers import BaseProvider, get_provider

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScopeSettings:
    """Names of the ``Settings`` attributes that configure one scope."""

    provider_attr: str
    model_attr: str
    timeout_attr: str


SCOPES: dict[str, ScopeSettings] = {
    "form_extract": ScopeSettings(
        provider_attr="ai_form_extract_provider",
        model_attr="ai_form_extract_model",
        timeout_attr="ai_form_extract_timeout_seconds",
    ),
}


@dataclass(frozen=True)
class ResolvedConfig:
    """Provider instance and generation limits for one call."""

    provider: BaseProvider
    model: str
    temperature: float
    max_tokens: int
    timeout_seconds: float


def _pick_model(settings: Settings, provider_name: str, requested: str) -> str:
    allowed = settings.ai_allowed_models.get(provider_name, [])
    if not allowed:
        return requested
    if requested and requested not in allowed:
        logger.warning(
            "Model %r not in allowlist for %r: using first allowed: %r",
            requested,
            provider_name,
            allowed[0],
        )
        return allowed[0]
    return requested or allowed[0]


def resolve(
    scope: str,
    *,
    override_provider: str | None = None,
    override_model: str | None = None,
) -> ResolvedConfig:
    """Resolve the call configuration for *scope*.

    Request overrides win only when ``ENABLE_AI_OVERRIDES`` is on; otherwise
    the scope's ``AI_<SCOPE>_PROVIDER`` / ``AI_<SCOPE>_MODEL`` apply. The
    scope model is only used together with the scope provider. Raises
    ``ValueError`` for a scope without settings.
    """
    try:
        keys = SCOPES[scope]
    except KeyError:
        raise ValueError(f"Unknown AI scope: {scope!r}") from None

    settings = get_settings()
    scope_provider: str = getattr(settings, keys.provider_attr)

    provider_name = scope_provider
    model = ""
    if settings.enable_ai_overrides:
        if override_provider and override_provider.strip():
            provider_name = override_provider.strip().lower()
        if override_model:
            model = override_model.strip()

    if not model and provider_name == scope_provider:
        model = getattr(settings, keys.model_attr)

    return ResolvedConfig(
        provider=get_provider(provider_name),
        model=_pick_model(settings, provider_name, model),
        temperature=settings.ai_temperature,
        max_tokens=settings.ai_max_tokens,
        timeout_seconds=getattr(settings, keys.timeout_attr),
    )
