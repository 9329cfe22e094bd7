"""Agent builder state: service setup, tools and the agent node."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field

KbStatus = Literal["idle", "uploading", "processing", "ready", "failed"]
McpStatus = Literal["idle", "checking", "valid", "invalid"]

DEFAULT_SYSTEM_PROMPT = (
    "You are an AI agent that helps users with their queries. "
    "Use the available tools to provide accurate responses."
)
DEFAULT_REVIEWER_PROMPT = "Review tool call suggestions and ensure they are appropriate for the user's query."


class DailyMonthly(BaseModel):
    daily: float
    monthly: float


class ServiceSetup(BaseModel):
    service_id: str = "69313811f2214e98ad240396"
    default_model: str = "gpt-4o"
    backup_model: str = "gpt-4o-mini"
    default_provider: str = "openai"
    backup_provider: str = "openai"
    allowed_models: list[str] = Field(default_factory=lambda: ["gpt-4o", "gpt-4o-mini"])
    temperature: float = 0.7
    limits: DailyMonthly = Field(default_factory=lambda: DailyMonthly(daily=100, monthly=300))
    service_alert_limit: DailyMonthly = Field(default_factory=lambda: DailyMonthly(daily=80, monthly=80))


class KnowledgeBaseTool(BaseModel):
    chunking_size: int = Field(default=1000, ge=1)
    overlapping_size: int = Field(default=200, ge=0)
    status: KbStatus = "idle"
    collection_name: str = ""
    selection: Literal["existing", "new"] = "new"


class McpTool(BaseModel):
    url: str = ""
    status: McpStatus = "idle"

    @property
    def is_valid(self) -> bool:
        return bool(self.url.strip()) and self.status == "valid"


class ToolingConfig(BaseModel):
    kb: KnowledgeBaseTool = Field(default_factory=KnowledgeBaseTool)
    mcp: McpTool = Field(default_factory=McpTool)


class AgentNode(BaseModel):
    name: str = ""
    system_prompt: str = DEFAULT_SYSTEM_PROMPT
    reviewer_prompt: str = DEFAULT_REVIEWER_PROMPT
    max_steps: int = Field(default=12, ge=1)


class BuilderConfig(BaseModel):
    service: ServiceSetup = Field(default_factory=ServiceSetup)
    tools: ToolingConfig = Field(default_factory=ToolingConfig)
    agent: AgentNode = Field(default_factory=AgentNode)


class AgentRecord(BaseModel):
    """Agent configuration as read back from the gateway."""

    id: str = ""
    name: str = ""
    system_prompt: str = ""
    reviewer_prompt: str = ""
    max_steps: int = 0
    mcp_url: str = ""
    kb_collection: str = ""
    ui_config: Optional[dict] = None
