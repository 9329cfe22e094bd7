"""Static field schemas for every configurable gateway service."""

from __future__ import annotations

from ..enums import DynamicSource, FieldType, ServiceKind
from ..errors import SchemaException
from .models import FieldSchema, SectionSchema, ServiceSchema

COMMON_DEFAULTS = {
    "default_model": "gpt-4o",
    "backup_model": "gpt-4o-mini",
    "default_provider": "openai",
    "backup_provider": "openai",
}

DEFAULT_SUPPORTED_FORMATS = ["image/jpeg", "image/png", "application/pdf"]

HELP_TEXTS = {
    "config.default_model": "Model used for every request unless the caller overrides it.",
    "config.backup_model": "Fallback model used when the default model fails.",
    "config.default_provider": "Provider serving the default model.",
    "config.backup_provider": "Provider serving the backup model.",
    "config.allowed_models": "Models callers may request explicitly. Leave empty to allow only the defaults.",
    "config.system_prompt": "Instructions prepended to every conversation.",
    "config.temperature": "Higher values give more varied output.",
    "config.max_tokens": "Upper bound on tokens generated per request.",
    "config.supported_formats": "MIME types accepted for upload.",
    "limits.daily": "Maximum cost per day for this service.",
    "limits.monthly": "Maximum cost per month for this service.",
    "enabled": "Disabled services reject requests from this project.",
}


def _field(path: str, label: str, type: FieldType, **kwargs) -> tuple[str, FieldSchema]:
    return path, FieldSchema(type=type, label=label, help_text=HELP_TEXTS.get(path), **kwargs)


def _model_fields() -> list[tuple[str, FieldSchema]]:
    return [
        _field("config.default_model", "Default Model", FieldType.DROPDOWN, required=True, dynamic=DynamicSource.MODELS),
        _field("config.backup_model", "Backup Model", FieldType.DROPDOWN, required=True, dynamic=DynamicSource.MODELS),
        _field("config.default_provider", "Default Provider", FieldType.DROPDOWN, required=True, dynamic=DynamicSource.PROVIDERS),
        _field("config.backup_provider", "Backup Provider", FieldType.DROPDOWN, required=True, dynamic=DynamicSource.PROVIDERS),
        _field("config.allowed_models", "Allowed Models", FieldType.MULTISELECT, dynamic=DynamicSource.MODELS),
    ]


def _limit_fields() -> list[tuple[str, FieldSchema]]:
    return [
        _field("limits.daily", "Daily Limit", FieldType.NUMBER, min=0, required=True),
        _field("limits.monthly", "Monthly Limit", FieldType.NUMBER, min=0, required=True),
        _field("enabled", "Enabled", FieldType.SWITCH),
    ]


def _sections(fields: dict[str, FieldSchema]) -> list[SectionSchema]:
    models = [p for p in fields if p in ("config.default_model", "config.backup_model",
                                        "config.default_provider", "config.backup_provider",
                                        "config.allowed_models")]
    limits = [p for p in fields if p.startswith("limits.") or p == "enabled"]
    behaviour = [p for p in fields if p not in models and p not in limits]

    sections = [SectionSchema(id="models", title="Models", description="Model and provider routing", fields=models)]
    if behaviour:
        sections.append(SectionSchema(id="behaviour", title="Behaviour", fields=behaviour))
    sections.append(SectionSchema(id="limits", title="Limits", description="Cost limits and availability", fields=limits))
    return sections


def _service(kind: ServiceKind, title: str, config: dict, limits: dict, extra_fields: list) -> ServiceSchema:
    fields = dict(_model_fields() + extra_fields + _limit_fields())
    return ServiceSchema(
        service=kind.value,
        title=title,
        initial={
            "service": kind.value,
            "config": {**COMMON_DEFAULTS, "allowed_models": [], **config},
            "limits": limits,
            "enabled": True,
        },
        fields=fields,
        sections=_sections(fields),
    )


SERVICE_SCHEMAS: dict[str, ServiceSchema] = {
    ServiceKind.INFERENCE.value: _service(
        ServiceKind.INFERENCE,
        "Configure Inference",
        config={
            "system_prompt": "You are a helpful assistant that provides accurate and helpful responses.",
            "temperature": 0.7,
            "max_tokens": 1000,
        },
        limits={"daily": 100, "monthly": 300},
        extra_fields=[
            _field("config.system_prompt", "System Prompt", FieldType.TEXTAREA),
            _field("config.temperature", "Temperature", FieldType.SLIDER, min=0, max=2, step=0.1, required=True),
            _field("config.max_tokens", "Max Tokens", FieldType.NUMBER, min=1, max=200000, required=True),
        ],
    ),
    ServiceKind.SUMMARIZATION.value: _service(
        ServiceKind.SUMMARIZATION,
        "Configure Summarization",
        config={
            "system_prompt": "You are a helpful assistant that creates concise summaries.",
            "temperature": 0.7,
            "max_tokens": 1000,
        },
        limits={"daily": 100, "monthly": 300},
        extra_fields=[
            _field("config.system_prompt", "System Prompt", FieldType.TEXTAREA),
            _field("config.temperature", "Temperature", FieldType.SLIDER, min=0, max=2, step=0.1),
            _field("config.max_tokens", "Max Tokens", FieldType.NUMBER, min=1, max=200000),
        ],
    ),
    ServiceKind.EMBEDDING.value: _service(
        ServiceKind.EMBEDDING,
        "Configure Embedding",
        config={"max_tokens": 8191},
        limits={"daily": 1000, "monthly": 10000},
        extra_fields=[
            _field("config.max_tokens", "Max Tokens", FieldType.NUMBER, min=1, max=200000),
        ],
    ),
    ServiceKind.OCR.value: _service(
        ServiceKind.OCR,
        "Configure OCR",
        config={
            "max_tokens": 4096,
            "supported_formats": list(DEFAULT_SUPPORTED_FORMATS),
        },
        limits={"daily": 50, "monthly": 1000},
        extra_fields=[
            _field("config.max_tokens", "Max Tokens", FieldType.NUMBER, min=1, max=200000),
            _field("config.supported_formats", "Supported Formats", FieldType.CHIPS),
        ],
    ),
    ServiceKind.CHATBOT.value: _service(
        ServiceKind.CHATBOT,
        "Configure Chatbot",
        config={
            "system_prompt": (
                "You are a helpful AI assistant that provides accurate and helpful "
                "responses based on the knowledge base."
            ),
            "temperature": 0.7,
        },
        limits={"daily": 100, "monthly": 300},
        extra_fields=[
            _field("config.system_prompt", "System Prompt", FieldType.TEXTAREA),
            _field("config.temperature", "Temperature", FieldType.SLIDER, min=0, max=2, step=0.1),
        ],
    ),
}


def get_schema(service: str) -> ServiceSchema:
    try:
        return SERVICE_SCHEMAS[service.lower()]
    except KeyError:
        known = ", ".join(SERVICE_SCHEMAS)
        raise SchemaException(f"Unknown service '{service}'. Known services: {known}") from None


def list_services() -> list[str]:
    return list(SERVICE_SCHEMAS)
