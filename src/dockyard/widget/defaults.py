"""Canonical default configuration of the embeddable chat widget.

Treat everything in this module as read-only; ``default_widget_config()``
hands out an independent copy.
"""

from __future__ import annotations

import copy
from typing import Any

FONT_FAMILY = "Inter, system-ui, -apple-system, Segoe UI, Roboto, Helvetica, Arial"

BRAND_PRIMARY = "#7720FF"
BRAND_ACCENT = "#26D07C"


def _theme_variant(colors: dict[str, str], blur_glass: bool) -> dict[str, Any]:
    return {
        "preset": "brand",
        "colors": colors,
        "gradient": {
            "enabled": False,
            "type": "linear",
            "angle": 135,
            "stops": [BRAND_PRIMARY, BRAND_ACCENT],
        },
        "typography": {
            "fontFamily": FONT_FAMILY,
            "baseFontSize": 14,
            "scale": 1.0,
        },
        "shape": {
            "radius": 10,
            "bubbleRadius": 999,
            "borderWidth": 1,
        },
        "density": "normal",
        "effects": {
            "blurGlass": blur_glass,
            "shadow": "md",
            "reducedMotionRespect": True,
        },
    }


DARK_THEME = _theme_variant(
    {
        "primary": BRAND_PRIMARY,
        "accent": BRAND_ACCENT,
        "background": "#050816",
        "surface": "#0B1020",
        "surfaceAlt": "#060814",
        "text": "#F9FAFB",
        "mutedText": "#9CA3AF",
        "border": "rgba(148,163,184,0.35)",
        "shadow": "rgba(15,23,42,0.75)",
        "danger": "#EF4444",
        "warning": "#F59E0B",
        "success": "#22C55E",
    },
    blur_glass=True,
)

LIGHT_THEME = _theme_variant(
    {
        "primary": BRAND_PRIMARY,
        "accent": BRAND_ACCENT,
        "background": "#F5F5FA",
        "surface": "#FFFFFF",
        "surfaceAlt": "#F3F4F6",
        "text": "#111827",
        "mutedText": "#6B7280",
        "border": "rgba(15,23,42,0.08)",
        "shadow": "rgba(15,23,42,0.12)",
        "danger": "#DC2626",
        "warning": "#D97706",
        "success": "#15803D",
    },
    blur_glass=False,
)

THEME = {
    "mode": "dark",
    "light": LIGHT_THEME,
    "dark": DARK_THEME,
}

DEFAULT_WIDGET_CONFIG: dict[str, Any] = {
    "widget": {
        "enabled": True,
        "type": "bubble",
        "layouts": {
            "bubble": {
                "enabled": True,
                "position": "bottom-right",
                "offset": {"x": 20, "y": 20},
                "launcher": {
                    "variant": "bubble",
                    "showLabel": False,
                    "label": "Chat",
                    "icon": "spark",
                    "size": "md",
                    "pulse": True,
                    "badge": {"enabled": False, "text": "1"},
                },
                "panel": {
                    "width": 380,
                    "height": 560,
                    "minWidth": 320,
                    "minHeight": 420,
                    "maxWidth": 440,
                    "maxHeight": 680,
                    "mobileBehavior": "fullscreen",
                    "backdrop": {"enabled": False, "blur": 0},
                },
            },
            "drawer": {
                "enabled": False,
                "side": "right",
                "width": 380,
                "maxWidth": 520,
                "mobileWidth": "100%",
                "backdrop": {"enabled": True, "blur": 6, "closeOnClick": True},
                "animation": {"type": "slide", "durationMs": 240},
                "btn_text": "Need help?",
                "btn_styles": {},
            },
            "fullscreen": {
                "enabled": False,
                "backdrop": {"enabled": False, "blur": 0, "closeOnClick": False},
                "animation": {"type": "fade", "durationMs": 200},
            },
        },
        "theme": THEME,
        "header": {
            "show": True,
            "title": "Shiprocket Assistant",
            "subtitle": "Ask about orders, shipping, and support",
            "logo": {"enabled": False, "url": ""},
            "actions": {
                "showClose": True,
                "showMinimize": True,
                "showReset": True,
                "showPopout": False,
            },
        },
        "messages": {
            "welcome": "Hi! 👋 How can I help you today?",
            "placeholder": "Type your message…",
            "emptyState": {
                "title": "Start a conversation",
                "description": "Ask questions or pick a suggestion below.",
            },
            "suggestions": [
                "Track my order",
                "What are your shipping rates?",
                "How do I create a return?",
            ],
            "timestamp": {"enabled": True, "format": "relative"},
            "typingIndicator": {"enabled": True, "style": "dots"},
            "readReceipts": {"enabled": False},
            "messageStyles": {
                "assistant": {"avatar": {"enabled": True, "type": "bot"}},
                "user": {"avatar": {"enabled": False}},
            },
            "richCards": {
                "enabled": True,
                "allowLinks": True,
                "allowImages": True,
                "allowButtons": True,
            },
        },
        "composer": {
            "enabled": True,
            "multiline": True,
            "maxChars": 2000,
            "enterToSend": True,
            "attachments": {
                "enabled": False,
                "maxFiles": 3,
                "maxSizeMb": 10,
                "allowedMimeTypes": ["image/png", "image/jpeg", "application/pdf"],
            },
            "voice": {
                "enabled": False,
                "mode": "push-to-talk",
                "autoStopSilenceMs": 1200,
            },
            "buttons": {
                "showSend": True,
                "showStop": True,
                "showMic": False,
                "showAttach": False,
            },
        },
        "behavior": {
            "defaultOpen": False,
            "autoOpen": {
                "enabled": False,
                "delayMs": 2500,
                "oncePerSession": True,
            },
            "closeOnEsc": True,
            "closeOnOutsideClick": True,
            "focusTrap": True,
            "persistConversation": {
                "enabled": True,
                "storage": "localStorage",
                "key": "sr_widget_conversation_v1",
                "ttlDays": 30,
            },
            "rateLimit": {"enabled": True, "maxMessagesPerMinute": 20},
        },
        "handoff": {
            "enabled": False,
            "provider": "custom",
            "rules": {
                "onIntent": ["talk_to_human", "agent", "support"],
                "onSentiment": {"enabled": False, "threshold": -0.6},
                "onKeyword": ["refund", "complaint"],
            },
            "contact": {
                "email": "support@yourdomain.com",
                "whatsapp": "",
                "phone": "",
            },
        },
        "analytics": {
            "enabled": False,
            "ga4": {
                "enabled": False,
                "measurementId": "G-XXXXXXXXXX",
                "debug": False,
            },
            "clarity": {
                "enabled": False,
                "projectId": "XXXXXXXX",
            },
            "events": {
                "trackOpenClose": True,
                "trackMessageSent": True,
                "trackMessageReceived": True,
                "trackErrors": True,
                "trackHandoff": True,
            },
        },
        "security": {
            "allowedOrigins": ["*"],
            "sanitize": {"enabled": True, "allowBasicHtml": False},
        },
        "i18n": {
            "enabled": True,
            "defaultLocale": "en",
            "supportedLocales": ["en", "hi"],
            "strings": {
                "en": {
                    "title": "Shiprocket Assistant",
                    "inputPlaceholder": "Type your message…",
                    "send": "Send",
                    "close": "Close",
                    "reset": "Reset",
                },
                "hi": {
                    "title": "शिपरॉकेट असिस्टेंट",
                    "inputPlaceholder": "अपना संदेश लिखें…",
                    "send": "भेजें",
                    "close": "बंद करें",
                    "reset": "रीसेट",
                },
            },
        },
    },
}


def default_widget_config() -> dict[str, Any]:
    return copy.deepcopy(DEFAULT_WIDGET_CONFIG)
