from .endpoints import Gateway
from .http import DockyardClient, parse_response
from .results import (
    APIError,
    Envelope,
    ErrorResult,
    FEError,
    ValidationErrorDetail,
    extract_validation_errors,
    is_error,
    unwrap,
)
from .token_store import TokenStore

__all__ = [
    "APIError",
    "DockyardClient",
    "Envelope",
    "ErrorResult",
    "FEError",
    "Gateway",
    "TokenStore",
    "ValidationErrorDetail",
    "extract_validation_errors",
    "is_error",
    "parse_response",
    "unwrap",
]
