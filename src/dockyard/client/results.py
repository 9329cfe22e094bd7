"""Typed results returned by the REST client instead of raised exceptions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel

from ..enums import ErrorKind

T = TypeVar("T")


@dataclass
class ValidationErrorDetail:
    """Field-level validation errors carried by a 422 response."""

    status: int
    message: str
    errors: dict[str, str] = field(default_factory=dict)
    raw: Any = None


@dataclass
class FEError:
    """The request never produced a usable response (network or parse failure)."""

    error: str
    exception: Optional[BaseException] = None

    kind = ErrorKind.FE

    def to_dict(self) -> dict[str, Any]:
        return {"status": False, "error": {"type": self.kind.value, "message": self.error}}


@dataclass
class APIError:
    """The gateway answered with a non-2xx status."""

    status: int
    payload: Any = None
    validation: Optional[ValidationErrorDetail] = None

    kind = ErrorKind.API

    @property
    def message(self) -> str:
        if isinstance(self.payload, dict):
            for key in ("message", "detail", "error"):
                value = self.payload.get(key)
                if isinstance(value, str) and value:
                    return value
        if isinstance(self.payload, str) and self.payload:
            return self.payload
        return f"HTTP {self.status}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": False,
            "error": {
                "type": self.kind.value,
                "message": {"status": self.status, "payload": self.payload},
            },
        }


ErrorResult = FEError | APIError


def is_error(result: Any) -> bool:
    return isinstance(result, (FEError, APIError))


class Envelope(BaseModel, Generic[T]):
    """Standard gateway response body ``{success, data, status_code, message?}``."""

    success: bool = False
    data: Optional[T] = None
    status_code: Optional[int] = None
    message: Optional[str] = None


def unwrap(result: Any, default: Any = None) -> Any:
    """Return ``data`` from a successful envelope, ``default`` for errors or failures.

    Bodies that are not envelopes are returned unchanged.
    """
    if is_error(result) or result is None:
        return default
    if isinstance(result, dict) and "success" in result:
        envelope = Envelope[Any].model_validate(result)
        return envelope.data if envelope.success else default
    return result


def extract_validation_errors(status: int, payload: Any) -> ValidationErrorDetail:
    """Normalise the shapes the gateway uses for 422 bodies.

    Supports ``{"message": ..., "errors": {field: msg | [msgs]}}`` and
    FastAPI's ``{"detail": [{"loc": [...], "msg": ...}]}``.
    """
    errors: dict[str, str] = {}
    message = "Validation failed"

    if isinstance(payload, dict):
        if isinstance(payload.get("message"), str) and payload["message"]:
            message = payload["message"]

        raw_errors = payload.get("errors")
        if raw_errors is None and isinstance(payload.get("data"), dict):
            raw_errors = payload["data"].get("errors")

        if isinstance(raw_errors, dict):
            for key, value in raw_errors.items():
                text = ", ".join(str(v) for v in value if v) if isinstance(value, list) else str(value or "")
                if text:
                    errors[str(key)] = text

        detail = payload.get("detail")
        if isinstance(detail, list):
            for item in detail:
                if not isinstance(item, dict):
                    continue
                loc = [str(p) for p in item.get("loc", []) if p not in ("body", "query", "path")]
                key = ".".join(loc) or "non_field"
                msg = str(item.get("msg", ""))
                errors[key] = f"{errors[key]}, {msg}" if key in errors else msg
        elif isinstance(detail, str) and detail and message == "Validation failed":
            message = detail

    return ValidationErrorDetail(status=status, message=message, errors=errors, raw=payload)
