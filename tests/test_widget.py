"""Tests for widget config normalization"""

import copy

import pytest

from dockyard.widget import DEFAULT_WIDGET_CONFIG, default_widget_config, normalize_widget_config, update_widget_field
from dockyard.widget.defaults import BRAND_ACCENT
from dockyard.widget.normalize import (
    ACCENT_COLOR_DARK,
    BUBBLE_POSITION,
    COMPOSER_MAX_CHARS,
    COMPOSER_MULTILINE,
    PRIMARY_COLOR_DARK,
    PRIMARY_COLOR_LIGHT,
    SUGGESTIONS,
    THEME_MODE,
)


@pytest.mark.parametrize("incoming", [None, "not a config", 42, ["widget"]])
def test_non_mapping_returns_defaults(incoming):
    """Test non mapping returns defaults"""
    assert normalize_widget_config(incoming) == DEFAULT_WIDGET_CONFIG


def test_result_is_independent_of_defaults():
    """Test result is independent of defaults"""
    config = normalize_widget_config(None)
    config["widget"]["theme"]["dark"]["colors"]["primary"] = "#000"
    assert DEFAULT_WIDGET_CONFIG["widget"]["theme"]["dark"]["colors"]["primary"] != "#000"

    fresh = default_widget_config()
    fresh["widget"]["enabled"] = False
    assert DEFAULT_WIDGET_CONFIG["widget"]["enabled"] is True


def test_partial_theme_keeps_sibling_colors():
    """Test partial theme keeps sibling colors"""
    config = normalize_widget_config({"widget": {"theme": {"dark": {"colors": {"primary": "#fff"}}}}})

    assert PRIMARY_COLOR_DARK.get(config) == "#fff"
    assert ACCENT_COLOR_DARK.get(config) == BRAND_ACCENT
    assert PRIMARY_COLOR_LIGHT.get(config) == DEFAULT_WIDGET_CONFIG["widget"]["theme"]["light"]["colors"]["primary"]
    assert THEME_MODE.get(config) == "dark"


def test_deep_merge_applies_outside_theme():
    """Test deep merge applies outside theme"""
    incoming = {
        "widget": {
            "header": {"actions": {"showPopout": True}},
            "layouts": {"bubble": {"position": "bottom-left", "panel": {"width": 400}}},
        }
    }
    config = normalize_widget_config(incoming)

    assert config["widget"]["header"]["actions"] == {
        "showClose": True,
        "showMinimize": True,
        "showReset": True,
        "showPopout": True,
    }
    assert config["widget"]["header"]["title"] == "Shiprocket Assistant"
    assert BUBBLE_POSITION.get(config) == "bottom-left"
    assert config["widget"]["layouts"]["bubble"]["panel"]["height"] == 560
    assert config["widget"]["layouts"]["bubble"]["panel"]["width"] == 400


def test_lists_replace():
    """Test lists replace"""
    config = normalize_widget_config({"widget": {"messages": {"suggestions": ["Only one"]}}})
    assert SUGGESTIONS.get(config) == ["Only one"]


def test_multiline_is_pinned():
    """Test multiline is pinned"""
    config = normalize_widget_config({"widget": {"composer": {"multiline": False, "maxChars": 500}}})
    assert COMPOSER_MULTILINE.get(config) is True
    assert COMPOSER_MAX_CHARS.get(config) == 500


def test_unknown_keys_survive():
    """Test unknown keys survive"""
    config = normalize_widget_config({"widget": {"custom": {"x": 1}}, "extra": True})
    assert config["widget"]["custom"] == {"x": 1}
    assert config["extra"] is True


def test_input_not_mutated():
    """Test input not mutated"""
    incoming = {"widget": {"theme": {"dark": {"colors": {"primary": "#fff"}}}}}
    snapshot = copy.deepcopy(incoming)
    normalize_widget_config(incoming)
    assert incoming == snapshot


def test_update_widget_field():
    """Test update widget field"""
    config = default_widget_config()
    updated = update_widget_field(config, "widget.header.title", "Help")

    assert updated["widget"]["header"]["title"] == "Help"
    assert config["widget"]["header"]["title"] == "Shiprocket Assistant"
    assert updated["widget"]["theme"] is config["widget"]["theme"]


def test_null_widget_falls_back_to_defaults():
    """Test a null widget branch yields the default widget tree"""
    assert normalize_widget_config({"widget": None}) == DEFAULT_WIDGET_CONFIG


def test_null_theme_keeps_default_theme():
    """Test a null theme keeps both default theme variants"""
    config = normalize_widget_config({"widget": {"theme": None, "header": {"title": "Help"}}})

    assert config["widget"]["theme"] == DEFAULT_WIDGET_CONFIG["widget"]["theme"]
    assert PRIMARY_COLOR_DARK.get(config) == DEFAULT_WIDGET_CONFIG["widget"]["theme"]["dark"]["colors"]["primary"]
    assert config["widget"]["header"]["title"] == "Help"


def test_null_scalar_still_replaces():
    """Test a null leaf value overrides its default"""
    config = normalize_widget_config({"widget": {"header": {"subtitle": None}}})
    assert config["widget"]["header"]["subtitle"] is None
