"""HTML embed snippet for the chat widget."""

from __future__ import annotations

from jinja2 import Environment

from ..consts import REACT_DOM_UMD_URL, REACT_UMD_URL, WIDGET_ELEMENT

_env = Environment(autoescape=True, trim_blocks=True, lstrip_blocks=True, keep_trailing_newline=False)

SNIPPET_TEMPLATE = _env.from_string(
    """\
{% if load_react %}
<script src="{{ react_url }}"></script>
<script src="{{ react_dom_url }}"></script>
{% endif %}
{% if script_url %}
<script{% if is_module %} type="module"{% endif %} src="{{ script_url }}"></script>
{% endif %}
<{{ element }} agent-id="{{ agent_id }}" user-id="USER_ID" x-auth-token="YOUR_AUTH_TOKEN"></{{ element }}>"""
)


def script_flavour(script_url: str) -> str:
    """``module`` for ES builds, ``iife`` for self-contained builds, else ``umd``."""
    if script_url.endswith((".es.js", ".mjs")):
        return "module"
    if script_url.endswith(".iife.js"):
        return "iife"
    return "umd"


def build_integration_snippet(
    agent_id: str,
    script_url: str = "",
    react_url: str | None = None,
    react_dom_url: str | None = None,
) -> str:
    """Render the markup a site owner pastes to embed the agent widget.

    UMD builds expect React on the page, so the React scripts are included
    only when the widget script is neither an ES module nor an IIFE bundle.
    """
    flavour = script_flavour(script_url)
    return SNIPPET_TEMPLATE.render(
        load_react=flavour == "umd",
        react_url=react_url or REACT_UMD_URL,
        react_dom_url=react_dom_url or REACT_DOM_UMD_URL,
        script_url=script_url,
        is_module=flavour == "module",
        element=WIDGET_ELEMENT,
        agent_id=agent_id,
    ).lstrip("\n")
