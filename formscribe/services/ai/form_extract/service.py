"""Form field extraction service: one atomic extraction cycle."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Sequence

from ..common import router as ai_router
from ..common.audit import log_ai_run, log_parse_failure
from ..common.errors import AIError, ParseError, ServiceError
from ..common.json_tools import parse_model_json
from ..common.providers.base import BaseProvider, ProviderResult
from .contracts import ExtractionRequest, ExtractionResult, FieldDescriptor
from .diff import diff_fields
from .paths import flatten, has_nested_objects
from .prompt import FORM_EXTRACT_SYSTEM_PROMPT, build_extraction_prompt
from .updater import apply_values

logger = logging.getLogger(__name__)

SCOPE = "form_extract"


async def _call_provider(
    provider: BaseProvider,
    prompt: str,
    config: ai_router.ResolvedConfig,
) -> ProviderResult:
    try:
        return await asyncio.wait_for(
            provider.generate(
                prompt,
                system_prompt=FORM_EXTRACT_SYSTEM_PROMPT,
                model=config.model,
                temperature=config.temperature,
                max_tokens=config.max_tokens,
                timeout_seconds=config.timeout_seconds,
            ),
            timeout=config.timeout_seconds,
        )
    except asyncio.TimeoutError as exc:
        raise ServiceError(f"{provider.name} request timed out", provider=provider.name) from exc
    except AIError:
        raise
    except Exception as exc:
        logger.exception("Provider %s raised unexpectedly", provider.name)
        raise ServiceError(f"{provider.name} request failed", provider=provider.name) from exc


async def extract_fields(
    utterance: str,
    fields: Sequence[FieldDescriptor],
    context_hint: str | None = None,
    *,
    provider: BaseProvider | None = None,
    override_provider: str | None = None,
    override_model: str | None = None,
) -> ExtractionResult:
    """Fill *fields* from a free-text *utterance*.

    Returns a new FieldSet plus the labels that changed. Raises
    ``ServiceError`` or ``ParseError`` on failure; *fields* is never
    modified either way. No retries: the caller decides whether to
    resubmit.
    """
    request = ExtractionRequest(
        utterance=utterance,
        fields=tuple(fields),
        context_hint=context_hint,
    )

    config = ai_router.resolve(
        SCOPE,
        override_provider=override_provider,
        override_model=override_model,
    )
    gateway = provider or config.provider

    prompt = build_extraction_prompt(request.fields, request.utterance, request.context_hint)

    t0 = time.monotonic()
    provider_result = await _call_provider(gateway, prompt, config)

    try:
        parsed = parse_model_json(provider_result.raw_text)
        if not isinstance(parsed, dict):
            raise ParseError(provider_result.raw_text)
    except ParseError as exc:
        log_ai_run(
            scope=SCOPE,
            provider_result=provider_result,
            prompt_text=prompt,
            parsed_output=None,
            extra_meta={
                "field_count": len(request.fields),
                "input_length": len(request.utterance),
                "parse_failed": True,
            },
        )
        log_parse_failure(scope=SCOPE, error=exc)
        raise

    flat = flatten(parsed) if has_nested_objects(parsed) else dict(parsed)

    updated = apply_values(flat, request.fields)
    changed = diff_fields(request.fields, updated)
    total_ms = (time.monotonic() - t0) * 1000

    log_ai_run(
        scope=SCOPE,
        provider_result=provider_result,
        prompt_text=prompt,
        parsed_output=flat,
        extra_meta={
            "field_count": len(request.fields),
            "changed_count": len(changed),
            "input_length": len(request.utterance),
        },
    )

    return ExtractionResult(
        fields=updated,
        changed=changed,
        provider=provider_result.provider,
        model=provider_result.model,
        latency_ms=round(total_ms, 2),
    )
