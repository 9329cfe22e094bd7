"""Tests for the schema-driven service form"""

import json

import pytest

from dockyard.enums import FieldType
from dockyard.errors import SchemaException
from dockyard.form import ServiceForm, initial_config, is_empty, validate_config, validate_field
from dockyard.paths import get_by_path, set_by_path
from dockyard.schema import SERVICE_SCHEMAS, FieldSchema, get_schema

MODELS = [
    {"id": "1", "name": "gpt-4o", "provider": "openai", "allowed_services": ["inference", "embedding"], "status": "active"},
    {"id": "2", "name": "gpt-4o-mini", "provider": "openai", "allowed_services": ["Inference"], "status": "active"},
    {"id": "3", "name": "claude-3", "provider": "anthropic", "allowed_services": ["inference", "embedding"], "status": "active"},
    {"id": "4", "name": "claude-2", "provider": "anthropic", "allowed_services": ["inference"], "status": "inactive"},
    {"id": "5", "name": "text-embed", "provider": "openai", "allowed_services": ["embedding"], "status": "active"},
]

PROVIDERS = [
    {"id": "p1", "name": "openai", "status": "active"},
    {"id": "p2", "name": "anthropic", "status": "active"},
    {"id": "p3", "name": "legacy", "status": "disabled"},
]

EMPTY_VALUES = ["", None, []]


def _blank(schema, *paths):
    value = schema.initial_config()
    for path in paths:
        value = set_by_path(value, path, "")
    return value


def _required_paths():
    return [
        (service, path)
        for service, schema in SERVICE_SCHEMAS.items()
        for path, field in schema.fields.items()
        if field.required
    ]


def _bounded_paths():
    return [
        (service, path)
        for service, schema in SERVICE_SCHEMAS.items()
        for path, field in schema.fields.items()
        if field.is_numeric and (field.min is not None or field.max is not None)
    ]


@pytest.fixture
def embedding_form():
    return ServiceForm(get_schema("embedding"), models=MODELS, providers=PROVIDERS)


@pytest.mark.parametrize("service", list(SERVICE_SCHEMAS))
def test_initial_config_is_valid(service):
    """Test initial config is valid"""
    schema = get_schema(service)
    assert validate_config(schema, schema.initial_config()) == {}


@pytest.mark.parametrize("service,path", _required_paths())
@pytest.mark.parametrize("empty", EMPTY_VALUES)
def test_required_field_rejects_empty(service, path, empty):
    """Test required field rejects empty"""
    schema = get_schema(service)
    config = set_by_path(schema.initial_config(), path, empty)
    errors = validate_config(schema, config)
    assert errors[path] == f"{schema.fields[path].label} is required"


@pytest.mark.parametrize("service,path", _required_paths())
def test_required_field_rejects_missing(service, path):
    """Test required field rejects missing"""
    schema = get_schema(service)
    parent, _, leaf = path.rpartition(".")
    config = schema.initial_config()
    container = get_by_path(config, parent) if parent else config
    del container[leaf]
    assert path in validate_config(schema, config)


@pytest.mark.parametrize("service,path", _bounded_paths())
def test_bounds(service, path):
    """Test bounds"""
    schema = get_schema(service)
    field = schema.fields[path]
    initial = schema.initial_config()

    if field.min is not None:
        assert path in validate_config(schema, set_by_path(initial, path, field.min - 1))
        assert path not in validate_config(schema, set_by_path(initial, path, field.min))
    if field.max is not None:
        assert path in validate_config(schema, set_by_path(initial, path, field.max + 1))
        assert path not in validate_config(schema, set_by_path(initial, path, field.max))


class TestValidateField:
    def test_messages(self):
        """Test messages"""
        field = FieldSchema(type=FieldType.NUMBER, label="Max Tokens", min=1, max=200000)
        assert validate_field("config.max_tokens", field, 0) == "Max Tokens must be ≥ 1"
        assert validate_field("config.max_tokens", field, 200001) == "Max Tokens must be ≤ 200000"
        assert validate_field("config.max_tokens", field, 10) is None

    def test_fractional_bound_is_kept(self):
        """Test fractional bound is kept"""
        field = FieldSchema(type=FieldType.SLIDER, label="Temperature", min=0, max=1.5)
        assert validate_field("t", field, 2) == "Temperature must be ≤ 1.5"

    def test_non_number(self):
        """Test non number"""
        field = FieldSchema(type=FieldType.NUMBER, label="Daily Limit", min=0)
        assert validate_field("limits.daily", field, "abc") == "Daily Limit must be a number"
        assert validate_field("limits.daily", field, True) == "Daily Limit must be a number"

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_number(self, value):
        """Test NaN and infinity are rejected as numbers"""
        field = FieldSchema(type=FieldType.NUMBER, label="Daily Limit", min=0, max=1000)
        assert validate_field("limits.daily", field, value) == "Daily Limit must be a number"

    def test_optional_empty_number_is_valid(self):
        """Test optional empty number is valid"""
        field = FieldSchema(type=FieldType.NUMBER, label="N", min=1)
        assert validate_field("n", field, None) is None
        assert validate_field("n", field, "") is None

    def test_label_falls_back_to_path(self):
        """Test label falls back to path"""
        field = FieldSchema(type=FieldType.TEXT, required=True)
        assert validate_field("config.system_prompt", field, "") == "config.system_prompt is required"


def test_is_empty():
    """Test is empty"""
    assert is_empty(None)
    assert is_empty("")
    assert is_empty([])
    assert not is_empty(0)
    assert not is_empty(False)
    assert not is_empty({})


def test_embedding_scenario(embedding_form):
    """Test embedding scenario"""
    embedding_form.set_value("limits.daily", -5)
    assert embedding_form.validate() == {"limits.daily": "Daily Limit must be ≥ 0"}

    embedding_form.set_value("limits.daily", 500)
    assert embedding_form.validate() == {}


def test_nan_limit_from_json_is_rejected(embedding_form):
    """Test a NaN limit parsed from JSON does not validate clean"""
    embedding_form.set_value("limits.daily", json.loads("NaN"))
    assert embedding_form.validate() == {"limits.daily": "Daily Limit must be a number"}
    assert not embedding_form.submit(lambda value: None)


def test_fixing_one_field_keeps_other_errors(embedding_form):
    """Test fixing one field keeps other errors"""
    embedding_form.set_value("limits.daily", -5)
    embedding_form.set_value("limits.monthly", -1)
    assert set(embedding_form.validate()) == {"limits.daily", "limits.monthly"}

    embedding_form.set_value("limits.daily", 500)
    assert embedding_form.validate() == {"limits.monthly": "Monthly Limit must be ≥ 0"}


class TestProviderBackfill:
    def test_model_fills_empty_provider(self):
        """Test model fills empty provider"""
        schema = get_schema("inference")
        value = _blank(schema, "config.default_model", "config.default_provider")
        form = ServiceForm(schema, models=MODELS, providers=PROVIDERS, value=value)

        form.set_value("config.default_model", "claude-3")

        assert get_by_path(form.value, "config.default_provider") == "anthropic"

    def test_model_does_not_override_chosen_provider(self):
        """Test model does not override chosen provider"""
        form = ServiceForm(get_schema("inference"), models=MODELS, providers=PROVIDERS)
        assert get_by_path(form.value, "config.default_provider") == "openai"

        form.set_value("config.default_model", "claude-3")

        assert get_by_path(form.value, "config.default_provider") == "openai"

    def test_backup_pair_is_independent(self):
        """Test backup pair is independent"""
        schema = get_schema("inference")
        value = _blank(schema, "config.backup_model", "config.backup_provider")
        form = ServiceForm(schema, models=MODELS, providers=PROVIDERS, value=value)

        form.set_value("config.backup_model", "claude-3")

        assert get_by_path(form.value, "config.backup_provider") == "anthropic"
        assert get_by_path(form.value, "config.default_provider") == "openai"

    def test_backfill_on_construction(self):
        """Test backfill on construction"""
        schema = get_schema("inference")
        value = set_by_path(schema.initial_config(), "config.default_provider", "")
        form = ServiceForm(schema, models=MODELS, value=value)
        assert get_by_path(form.value, "config.default_provider") == "openai"

    def test_unknown_model_leaves_provider_empty(self):
        """Test unknown model leaves provider empty"""
        schema = get_schema("inference")
        value = _blank(schema, "config.default_model", "config.default_provider")
        form = ServiceForm(schema, models=MODELS, value=value)

        form.set_value("config.default_model", "not-in-catalog")

        assert get_by_path(form.value, "config.default_provider") == ""


class TestChangeProvider:
    def test_switches_model_to_provider(self):
        """Test switches model to provider"""
        form = ServiceForm(get_schema("inference"), models=MODELS, providers=PROVIDERS)
        form.change_provider("config.default_provider", "anthropic")

        assert get_by_path(form.value, "config.default_provider") == "anthropic"
        assert get_by_path(form.value, "config.default_model") == "claude-3"

    def test_keeps_matching_model(self):
        """Test keeps matching model"""
        form = ServiceForm(get_schema("inference"), models=MODELS, providers=PROVIDERS)
        form.set_value("config.default_model", "gpt-4o-mini")
        form.change_provider("config.default_provider", "openai")

        assert get_by_path(form.value, "config.default_model") == "gpt-4o-mini"

    def test_clears_model_when_provider_has_none(self):
        """Test clears model when provider has none"""
        form = ServiceForm(get_schema("inference"), models=MODELS, providers=PROVIDERS)
        form.change_provider("config.default_provider", "legacy")

        assert get_by_path(form.value, "config.default_model") == ""


class TestFieldOptions:
    def test_models_filtered_by_service_status_and_provider(self, embedding_form):
        """Test models filtered by service status and provider"""
        values = [o.value for o in embedding_form.field_options("config.default_model")]
        assert values == ["gpt-4o", "text-embed"]

    def test_models_unfiltered_without_provider(self):
        """Test models unfiltered without provider"""
        schema = get_schema("inference")
        value = _blank(schema, "config.default_model", "config.default_provider")
        form = ServiceForm(schema, models=MODELS, value=value)

        values = [o.value for o in form.field_options("config.default_model")]
        assert values == ["gpt-4o", "gpt-4o-mini", "claude-3"]

    def test_allowed_models_ignore_provider(self, embedding_form):
        """Test allowed models ignore provider"""
        values = [o.value for o in embedding_form.field_options("config.allowed_models")]
        assert values == ["gpt-4o", "claude-3", "text-embed"]

    def test_providers_are_active_only(self, embedding_form):
        """Test providers are active only"""
        values = [o.value for o in embedding_form.field_options("config.default_provider")]
        assert values == ["openai", "anthropic"]

    def test_static_options_win(self):
        """Test static options win"""
        from dockyard.schema import Option, ServiceSchema

        schema = ServiceSchema(
            service="inference",
            title="T",
            fields={
                "config.default_model": FieldSchema(
                    type=FieldType.DROPDOWN,
                    options=[Option(label="Fixed", value="fixed")],
                    dynamic="models",
                )
            },
            initial={"config": {"default_model": "fixed"}},
        )
        form = ServiceForm(schema, models=MODELS)
        assert [o.value for o in form.field_options("config.default_model")] == ["fixed"]

    def test_plain_field_has_no_options(self, embedding_form):
        """Test plain field has no options"""
        assert embedding_form.field_options("limits.daily") == []


class TestFormSession:
    def test_set_value_replaces_config(self, embedding_form):
        """Test set value replaces config"""
        before = embedding_form.value
        after = embedding_form.set_value("limits.daily", 10)

        assert after is embedding_form.value
        assert after is not before
        assert before["limits"]["daily"] == 1000
        assert after["config"] is before["config"]

    def test_set_value_unknown_path(self, embedding_form):
        """Test set value unknown path"""
        with pytest.raises(SchemaException):
            embedding_form.set_value("config.nope", 1)

    def test_on_change_receives_each_value(self):
        """Test on change receives each value"""
        seen = []
        form = ServiceForm(get_schema("embedding"), on_change=seen.append)
        form.set_value("limits.daily", 1)
        form.set_value("limits.monthly", 2)

        assert [v["limits"] for v in seen] == [
            {"daily": 1, "monthly": 10000},
            {"daily": 1, "monthly": 2},
        ]

    def test_submit_blocked_when_invalid(self, embedding_form):
        """Test submit blocked when invalid"""
        submitted = []
        embedding_form.set_value("limits.daily", -5)

        assert embedding_form.submit(submitted.append) is False
        assert submitted == []
        assert "limits.daily" in embedding_form.errors

    def test_submit_passes_config(self, embedding_form):
        """Test submit passes config"""
        submitted = []
        assert embedding_form.submit(submitted.append) is True
        assert submitted == [embedding_form.value]

    def test_clear_error(self, embedding_form):
        """Test clear error"""
        embedding_form.set_value("limits.daily", -5)
        embedding_form.validate()
        embedding_form.clear_error("limits.daily")
        assert embedding_form.errors == {}

    def test_apply_server_errors(self, embedding_form):
        """Test apply server errors"""
        unmatched = embedding_form.apply_server_errors(
            {
                "default_model": ["not allowed", "", "inactive"],
                "limits.daily": "too high",
                "billing": "card expired",
                "empty": "",
            }
        )

        assert embedding_form.errors == {
            "config.default_model": "not allowed, inactive",
            "limits.daily": "too high",
        }
        assert unmatched == {"billing": "card expired"}


class TestControls:
    def test_one_control_per_field_in_section_order(self, embedding_form):
        """Test one control per field in section order"""
        controls = embedding_form.controls()
        assert sorted(c.path for c in controls) == sorted(embedding_form.schema.fields)
        assert controls[0].section == "models"
        assert controls[-1].path == "enabled"

    def test_error_replaces_helper_text(self, embedding_form):
        """Test error replaces helper text"""
        embedding_form.set_value("limits.daily", -5)
        embedding_form.validate()
        daily = next(c for c in embedding_form.controls() if c.path == "limits.daily")

        assert daily.error == "Daily Limit must be ≥ 0"
        assert daily.helper_text == daily.error
        assert daily.value == -5
        assert daily.min == 0

    def test_model_dropdown_disabled_without_catalog(self):
        """Test model dropdown disabled without catalog"""
        form = ServiceForm(get_schema("embedding"))
        controls = {c.path: c for c in form.controls()}

        assert controls["config.default_model"].disabled is True
        assert controls["config.allowed_models"].disabled is False
        assert controls["config.default_provider"].disabled is False


def test_initial_config_merges_saved():
    """Test initial config merges saved"""
    schema = get_schema("embedding")
    config = initial_config(schema, {"limits": {"daily": 5, "monthly": None}})
    assert config["limits"] == {"daily": 5, "monthly": 10000}
    assert config["config"]["max_tokens"] == 8191
