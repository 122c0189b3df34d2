from functools import lru_cache
import json
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _parse_list_value(value: str) -> list[str]:
    if not value:
        return []
    if isinstance(value, str):
        raw = value.strip()
        if raw == "":
            return []
        try:
            parsed = json.loads(raw)
            if isinstance(parsed, list):
                return [str(item).strip() for item in parsed if str(item).strip()]
        except json.JSONDecodeError:
            pass
        return [item.strip() for item in raw.split(",") if item.strip()]
    if isinstance(value, list):
        return [str(item).strip() for item in value if str(item).strip()]
    return []


def _parse_models_value(value: str) -> dict[str, list[str]]:
    """Parse ``AI_ALLOWED_MODELS`` (JSON object: provider -> list or csv)."""
    if not value or not value.strip():
        return {}
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError:
        return {}
    if not isinstance(parsed, dict):
        return {}
    models: dict[str, list[str]] = {}
    for provider, entries in parsed.items():
        if isinstance(entries, (list, tuple)):
            entries = list(entries)
        models[str(provider).strip().lower()] = _parse_list_value(entries)
    return models


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        extra="ignore",
        validate_by_name=True,
        populate_by_name=True,
    )

    docs_enabled: bool = Field(default=True)
    openapi_enabled: bool = Field(default=True)
    expose_error_details: bool = False

    cors_allow_origins_raw: str = Field(
        default="",
        validation_alias=AliasChoices("CORS_ALLOW_ORIGINS"),
    )

    enable_ai_form_extract: bool = Field(
        default=True,
        validation_alias=AliasChoices("ENABLE_AI_FORM_EXTRACT", "ENABLE_AI_ASSISTANT"),
    )
    enable_ai_overrides: bool = False

    ai_form_extract_provider: str = "mock"
    ai_form_extract_model: str = ""
    ai_form_extract_timeout_seconds: float = 15.0

    ai_allowed_providers_raw: str = Field(
        default="mock,openai,claude,groq",
        validation_alias=AliasChoices("AI_ALLOWED_PROVIDERS"),
    )
    ai_allowed_models_raw: str = Field(
        default="",
        validation_alias=AliasChoices("AI_ALLOWED_MODELS"),
    )
    ai_temperature: float = 0.1
    ai_max_tokens: int = 1000
    ai_timeout_seconds: float = 15.0
    ai_debug_store_raw: bool = False

    openai_api_key: str = ""
    anthropic_api_key: str = ""
    groq_api_key: str = ""

    @field_validator("ai_form_extract_provider", mode="before")
    @classmethod
    def _normalize_provider(cls, value):
        if value is None:
            return "mock"
        return str(value).strip().lower() or "mock"

    @property
    def cors_allow_origins(self) -> list[str]:
        return _parse_list_value(self.cors_allow_origins_raw)

    @property
    def ai_allowed_providers(self) -> list[str]:
        return [item.lower() for item in _parse_list_value(self.ai_allowed_providers_raw)]

    @property
    def ai_allowed_models(self) -> dict[str, list[str]]:
        return _parse_models_value(self.ai_allowed_models_raw)


@lru_cache
def get_settings() -> Settings:
    return Settings()
