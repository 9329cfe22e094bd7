"""Model and provider catalog rows as returned by the gateway."""

from __future__ import annotations

from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict, Field

from .consts import ACTIVE_STATUS


class ModelRow(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str = ""
    name: str
    provider: str = ""
    allowed_services: list[str] = Field(default_factory=list)
    status: str = ACTIVE_STATUS

    @property
    def is_active(self) -> bool:
        return self.status == ACTIVE_STATUS

    def allows(self, service: str) -> bool:
        service = service.lower()
        return any(s.lower() == service for s in self.allowed_services)


class ProviderRow(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str = ""
    name: str
    status: str = ACTIVE_STATUS

    @property
    def is_active(self) -> bool:
        return self.status == ACTIVE_STATUS


class ModelChoice(BaseModel):
    label: str
    value: str
    provider: str


def parse_models(rows: Iterable[dict[str, Any] | ModelRow] | None) -> list[ModelRow]:
    return [r if isinstance(r, ModelRow) else ModelRow.model_validate(r) for r in rows or []]


def parse_providers(rows: Iterable[dict[str, Any] | ProviderRow] | None) -> list[ProviderRow]:
    return [r if isinstance(r, ProviderRow) else ProviderRow.model_validate(r) for r in rows or []]


def models_for_service(models: Iterable[ModelRow], service: str) -> list[ModelChoice]:
    """Active models whose allowed services include ``service`` (case-insensitive)."""
    return [
        ModelChoice(label=m.name, value=m.name, provider=m.provider)
        for m in models
        if m.is_active and m.allows(service)
    ]


def active_providers(providers: Iterable[ProviderRow]) -> list[ProviderRow]:
    return [p for p in providers if p.is_active]
