"""Bind a FieldSet to a nested record (e.g. an examination) and back."""

from __future__ import annotations

import copy
import logging
from collections.abc import Sequence
from typing import Any

from .contracts import FieldDescriptor, FieldSet, validate_field_set, value_fits_type
from .diff import is_empty
from .paths import get_path, unflatten

logger = logging.getLogger(__name__)


def fields_from_record(
    record: dict[str, Any],
    templates: Sequence[FieldDescriptor],
) -> FieldSet:
    """Return *templates* with values read from *record* at each dot-path.

    Missing paths become ``""``; values that do not fit the field type are
    left out with a warning.
    """
    fields: list[FieldDescriptor] = []
    for template in templates:
        value = get_path(record, template.path)
        if value is None:
            value = ""
        elif not value_fits_type(template.type, value):
            logger.warning("Record value at %r does not fit type %r - left empty", template.path, template.type)
            value = ""
        fields.append(template.model_copy(update={"value": copy.deepcopy(value)}))
    return validate_field_set(fields)


def _merge_into(base: dict[str, Any], overlay: dict[str, Any]) -> None:
    for key, value in overlay.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge_into(base[key], value)
        else:
            base[key] = copy.deepcopy(value)


def record_from_fields(
    record: dict[str, Any],
    fields: Sequence[FieldDescriptor],
) -> dict[str, Any]:
    """Return a copy of *record* with every non-empty field value written back."""
    overlay = unflatten({field.path: field.value for field in fields if not is_empty(field.value)})
    result = copy.deepcopy(record)
    _merge_into(result, overlay)
    return result
