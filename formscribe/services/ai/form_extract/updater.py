"""Apply a flat ``{path: value}`` map onto a FieldSet without mutating it."""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping, Sequence
from typing import Any

from .contracts import FieldDescriptor, FieldSet, FieldSource, value_fits_type
from .diff import is_empty, value_changed

logger = logging.getLogger(__name__)


def apply_values(
    flat: Mapping[str, Any],
    fields: Sequence[FieldDescriptor],
    *,
    source: FieldSource = "ai",
) -> FieldSet:
    """Return a new FieldSet with matching paths replaced by *flat* values.

    * Keys that match no field path are dropped; no field is ever created.
    * Empty values never replace what the field already holds.
    * Values whose shape does not fit the field type are skipped.
    * Only fields whose value meaningfully changes are replaced, and they
      are tagged with *source*.
    """
    known = {field.path for field in fields}
    dropped = [key for key in flat if key not in known]
    if dropped:
        logger.debug("Dropping %d unmatched key(s): %s", len(dropped), ", ".join(sorted(dropped)))

    updated: list[FieldDescriptor] = []
    for field in fields:
        if field.path not in flat:
            updated.append(field)
            continue

        value = flat[field.path]
        if is_empty(value):
            updated.append(field)
            continue

        if not value_fits_type(field.type, value):
            logger.warning(
                "Skipping value for %r: %s does not fit type %r",
                field.path,
                type(value).__name__,
                field.type,
            )
            updated.append(field)
            continue

        # Same content in another representation ("18" vs 18) keeps the stored value.
        if not value_changed(field.value, value):
            updated.append(field)
            continue

        updated.append(field.model_copy(update={"value": copy.deepcopy(value), "source": source}))

    return tuple(updated)
