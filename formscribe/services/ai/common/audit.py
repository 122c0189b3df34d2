"""AI audit: one structured log record per provider reply; nothing is persisted."""

from __future__ import annotations

import hashlib
import logging
from typing import Any

from formscribe.core.config import get_settings

from .errors import ParseError
from .providers.base import ProviderResult

logger = logging.getLogger("formscribe.ai.audit")

# Scope-dependent audit actions. Falls back to "AI_RUN" for unknown scopes.
SCOPE_ACTIONS: dict[str, str] = {
    "form_extract": "AI_FORM_EXTRACT",
}


def _sha256(text: str) -> str:
    return hashlib.sha256(text.encode()).hexdigest()


def log_ai_run(
    *,
    scope: str,
    provider_result: ProviderResult,
    prompt_text: str,
    parsed_output: dict[str, Any] | None,
    extra_meta: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Log an audit entry for one provider call and return its metadata.

    * PII: prompt and response are always hashed; raw text is only logged
      when ``AI_DEBUG_STORE_RAW=true``.
    """
    settings = get_settings()

    metadata: dict[str, Any] = {
        "action": SCOPE_ACTIONS.get(scope, "AI_RUN"),
        "scope": scope,
        "provider": provider_result.provider,
        "model": provider_result.model,
        "prompt_tokens": provider_result.prompt_tokens,
        "completion_tokens": provider_result.completion_tokens,
        "latency_ms": provider_result.latency_ms,
        "prompt_hash": _sha256(prompt_text),
        "response_hash": _sha256(provider_result.raw_text),
        "parsed_keys": sorted(parsed_output) if parsed_output else [],
    }

    if settings.ai_debug_store_raw:
        metadata["prompt_raw"] = prompt_text
        metadata["response_raw"] = provider_result.raw_text

    if extra_meta:
        metadata.update(extra_meta)

    logger.info(
        "%s scope=%s provider=%s model=%s latency_ms=%s",
        metadata["action"],
        scope,
        metadata["provider"],
        metadata["model"],
        metadata["latency_ms"],
        extra={"ai_audit": metadata},
    )
    return metadata


def log_parse_failure(*, scope: str, error: ParseError) -> None:
    """Record an unparseable reply; raw text only with debug storage enabled."""
    settings = get_settings()
    if settings.ai_debug_store_raw:
        logger.warning("Unparseable AI reply scope=%s raw=%r", scope, error.raw_text)
    else:
        logger.warning("Unparseable AI reply scope=%s response_hash=%s", scope, _sha256(error.raw_text))
