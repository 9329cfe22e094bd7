from .builder import (
    SERVICE_FIELD_ERROR_MAP,
    FieldErrors,
    build_agent_setup_payload,
    build_graph,
    map_service_validation_errors,
    parse_agent_record,
    service_setup_payload,
)
from .models import AgentNode, AgentRecord, BuilderConfig, ServiceSetup, ToolingConfig

__all__ = [
    "SERVICE_FIELD_ERROR_MAP",
    "AgentNode",
    "AgentRecord",
    "BuilderConfig",
    "FieldErrors",
    "ServiceSetup",
    "ToolingConfig",
    "build_agent_setup_payload",
    "build_graph",
    "map_service_validation_errors",
    "parse_agent_record",
    "service_setup_payload",
]
