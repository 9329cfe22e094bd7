"""Schema-driven service configuration form.

A ``ServiceForm`` owns one editing session: it holds the current config dict,
replaces it on every edit, keeps model/provider pairs consistent, validates
against the schema and describes one control per field for whatever UI draws
it. It performs no network calls; callers receive the config through the
``on_change``/``on_submit`` callbacks.
"""

from __future__ import annotations

import logging
import math
from numbers import Real
from typing import Any, Callable, Iterable, Mapping, Optional

from pydantic import BaseModel

from .catalog import (
    ModelChoice,
    ModelRow,
    ProviderRow,
    active_providers,
    models_for_service,
    parse_models,
    parse_providers,
)
from .consts import MODEL_PROVIDER_PAIRS, PROVIDER_MODEL_PAIRS
from .enums import DynamicSource, FieldType
from .merge import merge_with_initial
from .paths import JsonObj, get_by_path, set_by_path
from .schema import FieldSchema, Option, ServiceSchema

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[JsonObj], None]
SubmitCallback = Callable[[JsonObj], None]


class FieldControl(BaseModel):
    """Everything a renderer needs to draw one field."""

    path: str
    section: str
    type: FieldType
    label: str
    value: Any = None
    required: bool = False
    placeholder: Optional[str] = None
    helper_text: str = ""
    error: Optional[str] = None
    options: list[Option] = []
    min: Optional[float] = None
    max: Optional[float] = None
    step: Optional[float] = None
    disabled: bool = False


def _fmt_bound(n: float) -> str:
    if isinstance(n, float) and n.is_integer():
        return str(int(n))
    return str(n)


def is_empty(value: Any) -> bool:
    return value is None or value == "" or (isinstance(value, list) and len(value) == 0)


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def validate_field(path: str, field: FieldSchema, value: Any) -> Optional[str]:
    """Return the message for ``value`` at ``path`` or ``None`` when it is valid.

    Empty values only trip the required check. Bounds apply to numeric and
    slider fields holding a value; a value above ``max`` reports ``max``.
    """
    label = field.display_label(path)
    message = None

    if field.required and is_empty(value):
        message = f"{label} is required"

    if field.is_numeric and not is_empty(value):
        if not _is_number(value):
            return f"{label} must be a number"
        if field.min is not None and value < field.min:
            message = f"{label} must be ≥ {_fmt_bound(field.min)}"
        if field.max is not None and value > field.max:
            message = f"{label} must be ≤ {_fmt_bound(field.max)}"

    return message


def validate_config(schema: ServiceSchema, config: Mapping[str, Any]) -> dict[str, str]:
    errors = {}
    for path, field in schema.fields.items():
        message = validate_field(path, field, get_by_path(config, path))
        if message:
            errors[path] = message
    return errors


def initial_config(schema: ServiceSchema, saved: Mapping[str, Any] | None = None) -> JsonObj:
    """Start an editing session from the schema defaults plus any saved config."""
    return merge_with_initial(schema.initial_config(), saved)


class ServiceForm:
    def __init__(
        self,
        schema: ServiceSchema,
        service_key: str | None = None,
        models: Iterable[dict | ModelRow] | None = None,
        providers: Iterable[dict | ProviderRow] | None = None,
        value: Mapping[str, Any] | None = None,
        on_change: ChangeCallback | None = None,
    ):
        self.schema = schema
        self.service_key = (service_key or schema.service).lower()
        self.models = parse_models(models)
        self.providers = parse_providers(providers)
        self.errors: dict[str, str] = {}
        self._on_change = on_change
        self._allowed_models = models_for_service(self.models, self.service_key)

        start = dict(value) if value is not None else schema.initial_config()
        self.value = self._sync_providers(start)

    @property
    def allowed_models(self) -> list[ModelChoice]:
        return list(self._allowed_models)

    def _find_model(self, name: Any) -> ModelChoice | None:
        if not name:
            return None
        return next((m for m in self._allowed_models if m.value == str(name)), None)

    def _sync_providers(self, value: JsonObj) -> JsonObj:
        for model_path, provider_path in MODEL_PROVIDER_PAIRS.items():
            model = self._find_model(get_by_path(value, model_path))
            if model and not get_by_path(value, provider_path):
                logger.debug(f"Filling {provider_path} from model {model.value}: {model.provider}")
                value = set_by_path(value, provider_path, model.provider)
        return value

    def _commit(self, value: JsonObj) -> JsonObj:
        self.value = value
        if self._on_change:
            self._on_change(value)
        return value

    def field_options(self, path: str, field: FieldSchema | None = None) -> list[Option]:
        field = field or self.schema.field(path)

        if field.options:
            return list(field.options)

        if field.dynamic == DynamicSource.MODELS:
            provider_path = MODEL_PROVIDER_PAIRS.get(path)
            provider = get_by_path(self.value, provider_path) if provider_path else None
            choices = self._allowed_models
            if provider:
                choices = [m for m in choices if m.provider == str(provider)]
            return [Option(label=m.label, value=m.value) for m in choices]

        if field.dynamic == DynamicSource.PROVIDERS:
            return [Option(label=p.name, value=p.name) for p in active_providers(self.providers)]

        return []

    def set_value(self, path: str, value: Any) -> JsonObj:
        """Replace the config with ``path`` set to ``value``.

        A model chosen while its paired provider is empty back-fills that
        provider from the model catalog. A provider already chosen is kept.
        """
        self.schema.field(path)
        return self._commit(self._sync_providers(set_by_path(self.value, path, value)))

    def change_provider(self, path: str, provider: str) -> JsonObj:
        """Select a provider and move the paired model onto one it serves.

        The paired model is kept when it already belongs to ``provider``;
        otherwise it becomes the first allowed model of that provider, or ``""``.
        """
        self.schema.field(path)
        next_value = set_by_path(self.value, path, provider)

        model_path = PROVIDER_MODEL_PAIRS.get(path)
        if model_path:
            current = self._find_model(get_by_path(self.value, model_path))
            if current is None or current.provider != provider:
                replacement = next((m.value for m in self._allowed_models if m.provider == provider), "")
                next_value = set_by_path(next_value, model_path, replacement)

        return self._commit(next_value)

    def validate(self) -> dict[str, str]:
        self.errors = validate_config(self.schema, self.value)
        return dict(self.errors)

    def is_valid(self) -> bool:
        return not self.validate()

    def submit(self, on_submit: SubmitCallback | None = None) -> bool:
        """Validate and hand the config to ``on_submit``; return whether it was called."""
        if self.validate():
            logger.debug(f"Submit blocked for {self.schema.service}: {sorted(self.errors)}")
            return False
        if on_submit:
            on_submit(self.value)
        return True

    def clear_error(self, path: str) -> None:
        self.errors.pop(path, None)

    def apply_server_errors(self, errors: Mapping[str, Any]) -> dict[str, str]:
        """Fold field errors reported by the API into the form's error map.

        Server keys may omit the ``config.`` prefix. Keys that match no field
        are returned so the caller can surface them elsewhere.
        """
        unmatched = {}
        for key, raw in errors.items():
            message = ", ".join(str(m) for m in raw if m) if isinstance(raw, list) else str(raw or "")
            if not message:
                continue
            for candidate in (key, f"config.{key}"):
                if candidate in self.schema.fields:
                    self.errors[candidate] = message
                    break
            else:
                unmatched[key] = message
        return unmatched

    def controls(self) -> list[FieldControl]:
        controls = []
        for section in self.schema.grouped():
            for path in section.fields:
                field = self.schema.fields[path]
                value = get_by_path(self.value, path)
                options = self.field_options(path, field)
                error = self.errors.get(path)
                controls.append(
                    FieldControl(
                        path=path,
                        section=section.id,
                        type=field.type,
                        label=field.display_label(path),
                        value=field.default if value is None else value,
                        required=field.required,
                        placeholder=field.placeholder,
                        helper_text=error or field.help_text or "",
                        error=error,
                        options=options,
                        min=field.min,
                        max=field.max,
                        step=field.step,
                        disabled=(
                            field.type == FieldType.DROPDOWN
                            and field.dynamic == DynamicSource.MODELS
                            and not options
                        ),
                    )
                )
        return controls
