from typing import Any

from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ...errors import SchemaException
from ...form import initial_config, validate_config
from ...schema import ServiceSchema, get_schema, list_services

router = APIRouter(prefix="/schemas", tags=["schemas"])


class ServiceSummary(BaseModel):
    service: str
    title: str


class SchemaListResponse(BaseModel):
    success: bool = True
    services: list[ServiceSummary]


class InitialConfigResponse(BaseModel):
    success: bool = True
    config: dict


class ValidateRequest(BaseModel):
    config: Any = None
    saved: bool = False


class ValidateResponse(BaseModel):
    success: bool
    errors: dict[str, str] = {}
    error: str | None = None


def _schema_or_404(service: str) -> ServiceSchema:
    try:
        return get_schema(service)
    except SchemaException as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("", response_model=SchemaListResponse)
def get_schemas():
    return SchemaListResponse(
        services=[ServiceSummary(service=s, title=get_schema(s).title) for s in list_services()]
    )


@router.get("/{service}")
def get_service_schema(service: str):
    return _schema_or_404(service).model_dump(mode="json")


@router.get("/{service}/initial", response_model=InitialConfigResponse)
def get_initial_config(service: str):
    return InitialConfigResponse(config=_schema_or_404(service).initial_config())


@router.post("/{service}/validate", response_model=ValidateResponse)
def validate_service_config(service: str, request: ValidateRequest):
    schema = _schema_or_404(service)
    if not isinstance(request.config, dict):
        return JSONResponse(
            status_code=400,
            content=ValidateResponse(success=False, error="'config' must be an object").model_dump(),
        )

    config = initial_config(schema, request.config) if request.saved else request.config
    errors = validate_config(schema, config)
    return ValidateResponse(success=not errors, errors=errors)
