"""AI endpoints: extract-fields."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field, field_validator

from formscribe.core.config import get_settings
from formscribe.services.ai.common.errors import ParseError, ServiceError
from formscribe.services.ai.form_extract.contracts import FieldDescriptor, validate_field_set

logger = logging.getLogger(__name__)

router = APIRouter()


def _ensure_ai_form_extract_enabled() -> None:
    settings = get_settings()
    if not settings.enable_ai_form_extract:
        raise HTTPException(404, "Not found")


class ExtractFieldsRequest(BaseModel):
    text: str = Field(..., min_length=1, max_length=10000)
    fields: list[FieldDescriptor] = Field(..., min_length=1)
    context_hint: str | None = Field(default=None, max_length=2000)
    override_provider: str | None = None
    override_model: str | None = None

    @field_validator("fields")
    @classmethod
    def unique_paths(cls, v: list[FieldDescriptor]) -> list[FieldDescriptor]:
        validate_field_set(v)
        return v


class ExtractFieldsResponse(BaseModel):
    fields: list[FieldDescriptor]
    changed: list[str]
    message: str
    provider: str
    model: str
    latency_ms: float


@router.post(
    "/ai/extract-fields",
    response_model=ExtractFieldsResponse,
    summary="Fill form fields from dictated or typed text",
)
async def extract_fields_endpoint(body: ExtractFieldsRequest):
    _ensure_ai_form_extract_enabled()

    from formscribe.services.ai.form_extract.service import extract_fields

    try:
        result = await extract_fields(
            body.text,
            body.fields,
            body.context_hint,
            override_provider=body.override_provider,
            override_model=body.override_model,
        )
    except ServiceError as exc:
        raise HTTPException(502, str(exc)) from exc
    except ParseError as exc:
        raise HTTPException(422, str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(422, str(exc)) from exc

    return ExtractFieldsResponse(
        fields=list(result.fields),
        changed=result.changed,
        message=result.message,
        provider=result.provider,
        model=result.model,
        latency_ms=result.latency_ms,
    )
