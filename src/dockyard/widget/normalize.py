"""Reconcile partial widget configs with the canonical default tree."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from ..merge import deep_merge
from ..paths import Lens, set_by_path
from .defaults import DEFAULT_WIDGET_CONFIG, default_widget_config

logger = logging.getLogger(__name__)

WIDGET = Lens[dict]("widget")
WIDGET_ENABLED = WIDGET / "enabled"
LAYOUT_TYPE = WIDGET / "type"
THEME_MODE = WIDGET / "theme.mode"
PRIMARY_COLOR_DARK = WIDGET / "theme.dark.colors.primary"
PRIMARY_COLOR_LIGHT = WIDGET / "theme.light.colors.primary"
ACCENT_COLOR_DARK = WIDGET / "theme.dark.colors.accent"
ACCENT_COLOR_LIGHT = WIDGET / "theme.light.colors.accent"
BUBBLE_POSITION = WIDGET / "layouts.bubble.position"
HEADER_TITLE = WIDGET / "header.title"
WELCOME_MESSAGE = WIDGET / "messages.welcome"
SUGGESTIONS = WIDGET / "messages.suggestions"
COMPOSER_MULTILINE = WIDGET / "composer.multiline"
COMPOSER_MAX_CHARS = WIDGET / "composer.maxChars"
DEFAULT_LOCALE = WIDGET / "i18n.defaultLocale"

# Values the preview always forces, whatever the saved config says.
PINNED = {
    COMPOSER_MULTILINE: True,
}


def normalize_widget_config(incoming: Any) -> dict[str, Any]:
    """Return a fully populated widget config.

    ``incoming`` is merged recursively onto the default tree: nested objects
    merge key by key at every depth, lists and scalars replace. A ``None``
    where the defaults hold an object keeps the default branch. Anything that
    is not a mapping yields a fresh copy of the defaults. Neither argument is
    mutated.
    """
    if not isinstance(incoming, Mapping):
        if incoming is not None:
            logger.warning(f"Ignoring widget config of type {type(incoming).__name__}")
        return default_widget_config()

    merged = deep_merge(DEFAULT_WIDGET_CONFIG, incoming, none_keeps_mappings=True)
    for lens, value in PINNED.items():
        merged = lens.set(merged, value)
    return merged


def update_widget_field(config: Mapping[str, Any], path: str, value: Any) -> dict[str, Any]:
    """Overwrite one field of a live config, sharing untouched branches."""
    return set_by_path(config, path, value)
