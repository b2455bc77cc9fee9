"""Error envelope for element API responses.

{
  "error": {
    "code": "elements.not_found",
    "message": "...",
    "http_status": 404,
    "resource_kind": "pillars",
    "details": {}
  }
}

Validation failures add a top-level ``errors`` field map next to ``error`` so
form clients can bind messages to inputs directly.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from content_engines.elements.errors import ElementsError, ElementValidationError, ErrorMap


class ErrorDetail(BaseModel):
    code: str
    message: str
    http_status: int
    resource_kind: Optional[str] = None
    details: Dict[str, Any] = Field(default_factory=dict)


class ErrorEnvelope(BaseModel):
    error: ErrorDetail
    errors: Optional[ErrorMap] = None


def envelope_for(exc: ElementsError, resource_kind: Optional[str] = None) -> ErrorEnvelope:
    """Envelope describing ``exc``; validation errors also carry their field map."""
    return ErrorEnvelope(
        error=ErrorDetail(
            code=exc.error_code,
            message=exc.message,
            http_status=exc.status_code,
            resource_kind=resource_kind,
            details=exc.details,
        ),
        errors=exc.errors if isinstance(exc, ElementValidationError) else None,
    )


def validation_response(exc: ElementValidationError, resource_kind: Optional[str] = None) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=envelope_for(exc, resource_kind).model_dump(mode="json"),
    )


def raise_http_error(exc: ElementsError, resource_kind: Optional[str] = None) -> None:
    """Raise an HTTPException whose detail is the envelope of ``exc``."""
    detail = {"error": envelope_for(exc, resource_kind).error.model_dump(mode="json")}
    raise HTTPException(status_code=exc.status_code, detail=detail) from exc
