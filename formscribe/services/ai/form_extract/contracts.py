"""Form extract scope contracts: field descriptors, request and result models."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, JsonValue, field_validator, model_validator

from .diff import is_empty

FieldType = Literal[
    "text",
    "textarea",
    "email",
    "tel",
    "select",
    "radio",
    "date",
    "number",
    "checkbox",
    "multiselect",
    "group",
]

FieldSource = Literal["user", "ai"]

_SCALAR_TYPES = frozenset({"text", "textarea", "email", "tel", "select", "radio", "date"})


def _is_scalar(value: Any) -> bool:
    return isinstance(value, (str, int, float, bool))


def value_fits_type(field_type: str, value: Any) -> bool:
    """Return True if *value* has a runtime shape acceptable for *field_type*.

    Empty values fit every type.
    """
    if is_empty(value):
        return True
    if field_type in _SCALAR_TYPES:
        return _is_scalar(value)
    if field_type == "number":
        if isinstance(value, bool):
            return False
        if isinstance(value, (int, float)):
            return True
        if isinstance(value, str):
            try:
                float(value.strip())
            except ValueError:
                return False
            return True
        return False
    if field_type == "checkbox":
        if isinstance(value, list):
            return all(_is_scalar(item) for item in value)
        return isinstance(value, (bool, str))
    if field_type == "multiselect":
        return isinstance(value, list)
    if field_type == "group":
        return isinstance(value, dict)
    return False


class FieldOption(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    value: JsonValue = None


class FieldDescriptor(BaseModel):
    """One target field of a form, addressed by its dot-notation ``path``."""

    model_config = ConfigDict(frozen=True)

    id: str = ""
    path: str = Field(..., min_length=1)
    type: FieldType = "text"
    label: str = ""
    value: JsonValue = None
    options: Optional[tuple[FieldOption, ...]] = None
    required: bool = False
    source: Optional[FieldSource] = None

    @model_validator(mode="before")
    @classmethod
    def _defaults_from_path(cls, data: Any) -> Any:
        # The edge payloads call the path "name"; accept both.
        if isinstance(data, dict):
            data = dict(data)
            if "path" not in data and "name" in data:
                data["path"] = data.pop("name")
            path = data.get("path") or ""
            if not data.get("id"):
                data["id"] = path
            if not data.get("label"):
                data["label"] = path
        return data

    @field_validator("path")
    @classmethod
    def path_segments_non_empty(cls, v: str) -> str:
        v = v.strip()
        if any(segment == "" for segment in v.split(".")):
            msg = f"Invalid dot-path {v!r}: empty segment"
            raise ValueError(msg)
        return v

    @model_validator(mode="after")
    def value_matches_type(self) -> "FieldDescriptor":
        if not value_fits_type(self.type, self.value):
            msg = (
                f"Value of type {type(self.value).__name__} does not fit "
                f"field {self.path!r} of type {self.type!r}"
            )
            raise ValueError(msg)
        return self


FieldSet = tuple[FieldDescriptor, ...]


def validate_field_set(fields: Sequence[FieldDescriptor]) -> FieldSet:
    """Return *fields* as an immutable FieldSet, rejecting duplicate paths."""
    seen: set[str] = set()
    for field in fields:
        if field.path in seen:
            msg = f"Duplicate field path {field.path!r}"
            raise ValueError(msg)
        seen.add(field.path)
    return tuple(fields)


class ExtractionRequest(BaseModel):
    """Immutable input of one extraction cycle."""

    model_config = ConfigDict(frozen=True)

    utterance: str = Field(..., min_length=1)
    fields: FieldSet
    context_hint: Optional[str] = None

    @field_validator("utterance")
    @classmethod
    def utterance_not_blank(cls, v: str) -> str:
        if not v.strip():
            msg = "Utterance must not be blank"
            raise ValueError(msg)
        return v

    @field_validator("fields")
    @classmethod
    def unique_paths(cls, v: FieldSet) -> FieldSet:
        return validate_field_set(v)


NOTHING_RECOGNIZED_MESSAGE = "No form fields were recognized in the input"


class ExtractionResult(BaseModel):
    """Outcome of a successful extraction cycle."""

    model_config = ConfigDict(frozen=True)

    fields: FieldSet
    changed: list[str] = []
    provider: str = ""
    model: str = ""
    latency_ms: float = 0.0

    @property
    def message(self) -> str:
        if not self.changed:
            return NOTHING_RECOGNIZED_MESSAGE
        return f"Updated {len(self.changed)} field(s): {', '.join(self.changed)}"

    def values_by_path(self) -> dict[str, Any]:
        return {field.path: field.value for field in self.fields}
