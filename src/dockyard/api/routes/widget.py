from typing import Any

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ...widget import build_integration_snippet, default_widget_config, normalize_widget_config

router = APIRouter(prefix="/widget", tags=["widget"])


class WidgetConfigResponse(BaseModel):
    success: bool = True
    config: dict


class NormalizeRequest(BaseModel):
    config: Any = None


class SnippetRequest(BaseModel):
    agent_id: str
    script_url: str = ""


class SnippetResponse(BaseModel):
    success: bool = True
    snippet: str | None = None
    error: str | None = None


@router.get("/default", response_model=WidgetConfigResponse)
def get_default_widget_config():
    return WidgetConfigResponse(config=default_widget_config())


@router.post("/normalize", response_model=WidgetConfigResponse)
def normalize_widget(request: NormalizeRequest):
    return WidgetConfigResponse(config=normalize_widget_config(request.config))


@router.post("/snippet", response_model=SnippetResponse)
def get_snippet(request: SnippetRequest):
    if not request.agent_id.strip():
        return JSONResponse(
            status_code=400,
            content=SnippetResponse(success=False, error="'agent_id' is required").model_dump(),
        )
    return SnippetResponse(snippet=build_integration_snippet(request.agent_id, request.script_url))
