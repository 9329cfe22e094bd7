"""Payload construction and error mapping for agent setup."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from .models import AgentRecord, BuilderConfig, ServiceSetup

AGENT_NODE = "agent"
TOOL_NODE = "tool"

# server key (without "config.") -> builder field key
SERVICE_FIELD_ERROR_MAP = {
    "default_model": "defaultModel",
    "backup_model": "backupModel",
    "default_provider": "defaultProvider",
    "backup_provider": "backupProvider",
    "allowed_models": "allowedModels",
    "temperature": "temperature",
    "limits.daily": "dailyLimit",
    "limits.monthly": "monthlyLimit",
    "service_alert_limit.daily": "dailyAlert",
    "service_alert_limit.monthly": "monthlyAlert",
}


def build_graph(include_tool: bool) -> dict[str, Any]:
    """The agent graph: a single ``agent`` node, or ``agent -> tool``."""
    nodes = [{"id": AGENT_NODE, "type": "agent", "config": {}}]
    edges = []
    if include_tool:
        nodes.append({"id": TOOL_NODE, "type": "tool", "config": {}})
        edges.append({"from": AGENT_NODE, "to": TOOL_NODE})
    return {"nodes": nodes, "edges": edges, "entry_point": AGENT_NODE, "state_schema": {}}


def build_agent_setup_payload(
    project_id: str,
    config: BuilderConfig,
    include_tools: bool,
    include_graph: Optional[bool] = None,
    ui_config: Optional[Mapping[str, Any]] = None,
) -> dict[str, Any]:
    """Body for ``POST /api/v1/agent/setup``.

    Args:
        project_id: Project the agent belongs to
        config: Current builder state
        include_tools: Attach the MCP url and KB collection when they are usable
        include_graph: Attach ``graph_json``; defaults to ``include_tools``
        ui_config: Widget config to store with the agent

    Returns:
        The JSON payload. The tool node is added only when the MCP server
        was checked and found valid.
    """
    if include_graph is None:
        include_graph = include_tools

    mcp = config.tools.mcp
    collection = config.tools.kb.collection_name.strip()
    has_mcp = include_tools and mcp.is_valid

    payload: dict[str, Any] = {
        "project_id": project_id,
        "name": config.agent.name,
        "system_prompt": config.agent.system_prompt,
        "max_steps": config.agent.max_steps,
    }
    if include_graph:
        payload["graph_json"] = build_graph(has_mcp)
    if has_mcp:
        payload["mcp_url"] = mcp.url.strip()
    if include_tools and collection:
        payload["kb_collection"] = collection
    if ui_config is not None:
        payload["ui_config"] = dict(ui_config)
    return payload


def service_setup_payload(setup: ServiceSetup, enabled: bool = True) -> dict[str, Any]:
    """Body for adding the chat service to a project."""
    return {
        "service_id": setup.service_id,
        "config": {
            "default_model": setup.default_model,
            "backup_model": setup.backup_model,
            "default_provider": setup.default_provider,
            "backup_provider": setup.backup_provider,
            "allowed_models": list(setup.allowed_models),
            "temperature": setup.temperature,
        },
        "limits": setup.limits.model_dump(),
        "service_alert_limit": setup.service_alert_limit.model_dump(),
        "enabled": enabled,
    }


def map_service_validation_errors(errors: Mapping[str, Any]) -> dict[str, str]:
    mapped = {}
    for raw_key, value in errors.items():
        key = raw_key[len("config."):] if raw_key.startswith("config.") else raw_key
        if isinstance(value, list):
            message = ", ".join(str(v) for v in value if v)
        else:
            message = str(value) if value else ""
        if not message:
            continue
        mapped[SERVICE_FIELD_ERROR_MAP.get(key) or SERVICE_FIELD_ERROR_MAP.get(raw_key) or key] = message
    return mapped


def parse_agent_record(payload: Any) -> AgentRecord:
    """Read an agent config body that may use either snake_case or camelCase keys."""
    if not isinstance(payload, Mapping):
        return AgentRecord()

    def pick(*keys: str, default: Any = "") -> Any:
        for key in keys:
            if payload.get(key):
                return payload[key]
        return default

    return AgentRecord(
        id=str(pick("id", "agent_id", "agentId")),
        name=str(pick("name", "agent_name")),
        system_prompt=str(pick("system_prompt", "systemPrompt")),
        reviewer_prompt=str(pick("reviewer_prompt", "reviewerPrompt")),
        max_steps=int(pick("max_steps", "maxSteps", default=0)),
        mcp_url=str(pick("mcp_url", "mcpUrl")),
        kb_collection=str(pick("kb_collection", "kbCollection")),
        ui_config=pick("ui_config", "uiConfig", default=None),
    )


class FieldErrors:
    """Per-field error messages for the builder's service step."""

    def __init__(self):
        self._errors: dict[str, str] = {}

    @property
    def errors(self) -> dict[str, str]:
        return dict(self._errors)

    def get(self, key: str) -> Optional[str]:
        return self._errors.get(key)

    def set(self, errors: Mapping[str, str]) -> None:
        self._errors = dict(errors)

    def set_from_server(self, errors: Mapping[str, Any]) -> None:
        self.set(map_service_validation_errors(errors))

    def clear(self, key: str) -> None:
        self._errors.pop(key, None)

    def reset(self) -> None:
        self._errors = {}

    def __bool__(self) -> bool:
        return bool(self._errors)
