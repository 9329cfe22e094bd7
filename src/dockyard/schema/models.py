from __future__ import annotations

import copy
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, model_validator

from ..enums import DynamicSource, FieldType
from ..errors import SchemaException
from ..paths import has_path


class Option(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    value: str


class FieldSchema(BaseModel):
    """One configurable field of a service.

    Choice fields (dropdown, multiselect) take their options either from the
    static ``options`` list or from a runtime catalog named by ``dynamic``.
    When both are given the static list wins.
    """

    model_config = ConfigDict(frozen=True)

    type: FieldType
    label: Optional[str] = None
    required: bool = False
    placeholder: Optional[str] = None
    help_text: Optional[str] = None
    default: Any = None
    min: Optional[float] = None
    max: Optional[float] = None
    step: Optional[float] = None
    options: list[Option] = []
    dynamic: Optional[DynamicSource] = None

    @model_validator(mode="after")
    def validate_bounds(self) -> "FieldSchema":
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError(f"min ({self.min}) must not exceed max ({self.max})")
        return self

    @property
    def is_numeric(self) -> bool:
        return self.type in (FieldType.NUMBER, FieldType.SLIDER)

    @property
    def is_choice(self) -> bool:
        return self.type in (FieldType.DROPDOWN, FieldType.MULTISELECT)

    def display_label(self, path: str) -> str:
        return self.label or path


class SectionSchema(BaseModel):
    """Layout grouping only; carries no behaviour."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str = ""
    fields: list[str]


class ServiceSchema(BaseModel):
    model_config = ConfigDict(frozen=True)

    service: str
    title: str
    fields: dict[str, FieldSchema]
    initial: dict[str, Any]
    sections: list[SectionSchema] = []

    @model_validator(mode="after")
    def validate_paths(self) -> "ServiceSchema":
        for path in self.fields:
            if not has_path(self.initial, path):
                raise ValueError(f"Field '{path}' has no value in the initial config")

        for section in self.sections:
            for path in section.fields:
                if path not in self.fields:
                    raise ValueError(f"Section '{section.id}' references unknown field '{path}'")
        return self

    def field(self, path: str) -> FieldSchema:
        try:
            return self.fields[path]
        except KeyError:
            raise SchemaException(f"Unknown field '{path}' for service '{self.service}'") from None

    def initial_config(self) -> dict[str, Any]:
        return copy.deepcopy(self.initial)

    def grouped(self) -> list[SectionSchema]:
        """Sections in display order; ungrouped fields land in a trailing 'Other' section."""
        if not self.sections:
            return [SectionSchema(id="all", title=self.title, fields=list(self.fields))]

        grouped = {path for section in self.sections for path in section.fields}
        rest = [path for path in self.fields if path not in grouped]
        if not rest:
            return list(self.sections)
        return [*self.sections, SectionSchema(id="other", title="Other", fields=rest)]
