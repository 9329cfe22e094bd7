from __future__ import annotations

from .catalog import SERVICE_SCHEMAS, get_schema, list_services
from .models import FieldSchema, Option, SectionSchema, ServiceSchema

__all__ = [
    "FieldSchema",
    "Option",
    "SERVICE_SCHEMAS",
    "SectionSchema",
    "ServiceSchema",
    "get_schema",
    "list_services",
]
