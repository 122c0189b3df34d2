"""JSON extraction from LLM responses (fenced, bare, or wrapped in prose)."""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from .errors import ParseError

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json|JSON)?[ \t]*\r?\n?(.*?)```", re.DOTALL)


def extract_candidate(text: str) -> str:
    """Return the inner content of the first fenced block, or the whole text."""
    match = _FENCE_RE.search(text)
    if match:
        return match.group(1).strip()
    return text.strip()


def parse_model_json(raw_text: str | None) -> Any:
    """Parse the JSON payload out of raw model output.

    Strategy (each step only when the previous one failed):
    1. Take the content of a ```` ``` ```` / ```` ```json ```` fence if present,
       otherwise the full text.
    2. ``json.loads`` the candidate.
    3. Parse the span from the first ``{`` to the last ``}`` of the candidate.
    4. Raise ``ParseError`` carrying *raw_text*.
    """
    if raw_text is None or not raw_text.strip():
        raise ParseError(raw_text or "")

    candidate = extract_candidate(raw_text)

    # Fast path: candidate is valid JSON
    try:
        return json.loads(candidate)
    except (json.JSONDecodeError, ValueError):
        pass

    start = candidate.find("{")
    end = candidate.rfind("}")
    if start != -1 and start < end:
        try:
            return json.loads(candidate[start : end + 1])
        except (json.JSONDecodeError, ValueError):
            logger.debug("Brace span at %d..%d is not valid JSON", start, end)

    raise ParseError(raw_text)


_decoder = json.JSONDecoder()


def extract_json(text: str | None) -> dict | list | None:
    """Lenient variant of ``parse_model_json``: ``None`` instead of ``ParseError``.

    Accepts the same fenced or bare input, then scans for the first ``{`` or
    ``[`` that starts a complete JSON value. Trailing prose after that value
    is ignored. Scalars are never returned.
    """
    if not text or not text.strip():
        return None

    candidate = extract_candidate(text)
    try:
        value = json.loads(candidate)
    except (json.JSONDecodeError, ValueError):
        value = None
    if isinstance(value, (dict, list)):
        return value

    for i, ch in enumerate(candidate):
        if ch not in "{[":
            continue
        try:
            value, _ = _decoder.raw_decode(candidate, i)
        except (json.JSONDecodeError, ValueError):
            continue
        return value

    return None
