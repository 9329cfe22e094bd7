from __future__ import annotations

from .defaults import DEFAULT_WIDGET_CONFIG, default_widget_config
from .normalize import normalize_widget_config, update_widget_field
from .snippet import build_integration_snippet

__all__ = [
    "DEFAULT_WIDGET_CONFIG",
    "build_integration_snippet",
    "default_widget_config",
    "normalize_widget_config",
    "update_widget_field",
]
