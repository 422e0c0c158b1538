"""Unified API response wrapper.

All API endpoints return this format:
{
    "code": 0,           // 0=success, non-0=error code
    "message": "success",
    "data": { ... },     // null on error
    "errors": [ ... ],   // field-level breakdown, validation failures only
    "timestamp": "...",
    "request_id": "..."
}
"""

import uuid
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field
from starlette.requests import Request


class FieldError(BaseModel):
    field: str
    message: str


class ApiResponse(BaseModel):
    code: int = 0
    message: str = "success"
    data: Any = None
    errors: list[FieldError] | None = None
    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    request_id: str = Field(default_factory=lambda: f"req_{uuid.uuid4().hex[:12]}")


def success_response(data: Any = None, message: str = "success") -> ApiResponse:
    return ApiResponse(code=0, message=message, data=data)


def error_response(
    code: int, message: str, errors: list[dict[str, str]] | None = None
) -> ApiResponse:
    field_errors = [FieldError(**e) for e in errors] if errors is not None else None
    return ApiResponse(code=code, message=message, data=None, errors=field_errors)


def request_response(request: Request, data: Any = None, message: str = "success") -> ApiResponse:
    """success_response stamped with the request_id set by RequestLogMiddleware."""
    resp = success_response(data, message)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
