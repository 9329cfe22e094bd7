"""Enumeration type definitions"""

from enum import Enum


class FieldType(str, Enum):
    """Editable control kinds a service field can declare"""

    TEXT = "text"
    TEXTAREA = "textarea"
    NUMBER = "number"
    SWITCH = "switch"
    DROPDOWN = "dropdown"
    MULTISELECT = "multiselect"
    SLIDER = "slider"
    CHIPS = "chips"


class DynamicSource(str, Enum):
    """Runtime catalogs that can feed a choice field"""

    MODELS = "models"
    PROVIDERS = "providers"


class ServiceKind(str, Enum):
    INFERENCE = "inference"
    SUMMARIZATION = "summarization"
    EMBEDDING = "embedding"
    OCR = "ocr"
    CHATBOT = "chatbot"


class ErrorKind(str, Enum):
    FE = "fe_err"
    API = "api_err"


class MemberRole(str, Enum):
    ADMIN = "admin"
    OWNER = "owner"
    MEMBER = "member"
