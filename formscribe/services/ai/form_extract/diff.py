"""Type-aware change detection between two FieldSets.

The rules are asymmetric on purpose: an empty extracted value never counts
as a change, so a cycle that recognized nothing cannot report (or cause)
the loss of existing data.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .contracts import FieldDescriptor

logger = logging.getLogger(__name__)


def is_empty(value: Any) -> bool:
    """None, blank string, empty list, or a dict whose every value is empty."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    if isinstance(value, dict):
        return all(is_empty(v) for v in value.values())
    return False


def string_form(value: Any) -> str:
    """Trimmed text form used to compare scalars.

    ``18``, ``18.0`` and ``" 18 "`` share the same form; booleans render
    as ``true`` / ``false``.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple, dict)):
        return json.dumps(value, sort_keys=True, ensure_ascii=False)
    return str(value).strip()


def deep_equal(a: Any, b: Any) -> bool:
    """Structural equality; lists are order-sensitive and ``True != 1``."""
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if isinstance(a, dict) and isinstance(b, dict):
        if a.keys() != b.keys():
            return False
        return all(deep_equal(a[k], b[k]) for k in a)
    if isinstance(a, (list, tuple)) and isinstance(b, (list, tuple)):
        if len(a) != len(b):
            return False
        return all(deep_equal(x, y) for x, y in zip(a, b))
    if isinstance(a, (dict, list, tuple)) or isinstance(b, (dict, list, tuple)):
        return False
    return a == b


def value_changed(old: Any, new: Any) -> bool:
    if is_empty(new):
        return False

    if isinstance(old, (list, tuple)) and isinstance(new, (list, tuple)):
        if len(old) != len(new):
            return True
        return not deep_equal(old, new)

    if isinstance(old, dict) and isinstance(new, dict):
        return not deep_equal(old, new)

    old_text = string_form(old)
    new_text = string_form(new)
    return old_text != new_text and new_text != ""


def diff_fields(
    previous: Sequence[FieldDescriptor],
    updated: Sequence[FieldDescriptor],
) -> list[str]:
    """Return the labels of fields whose value meaningfully changed.

    Both sequences must describe the same fields in the same order.
    """
    if len(previous) != len(updated):
        msg = f"FieldSet size mismatch: {len(previous)} vs {len(updated)}"
        raise ValueError(msg)

    changed: list[str] = []
    for old_field, new_field in zip(previous, updated):
        if old_field.path != new_field.path:
            msg = f"FieldSet order mismatch: {old_field.path!r} vs {new_field.path!r}"
            raise ValueError(msg)
        if value_changed(old_field.value, new_field.value) and old_field.label not in changed:
            changed.append(old_field.label)

    logger.debug("Diff found %d changed field(s)", len(changed))
    return changed
