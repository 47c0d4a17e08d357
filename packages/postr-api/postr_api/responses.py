"""
Response envelope helpers.

Every REST response has the same shape:

    {"success": true, "data": ..., "meta": {...}, "timestamp": "..."}
    {"success": false, "error": {"message": ..., "details": {...}}, "timestamp": "..."}
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import status
from fastapi.responses import JSONResponse

from postr.models import Page


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def success(
    data: Any,
    meta: Optional[Dict[str, Any]] = None,
    status_code: int = status.HTTP_200_OK,
) -> JSONResponse:
    """Success response with data and optional metadata."""
    body: Dict[str, Any] = {"success": True, "data": data}
    if meta:
        body["meta"] = meta
    body["timestamp"] = _timestamp()
    return JSONResponse(status_code=status_code, content=body)


def paginated(page: Page) -> JSONResponse:
    """Success response for list endpoints; pagination goes under meta."""
    return success(
        [item.to_dict() for item in page.items],
        meta={"pagination": page.pagination()},
    )


def created(data: Any) -> JSONResponse:
    """201 response for a newly created resource."""
    return success(data, status_code=status.HTTP_201_CREATED)


def error(
    message: str,
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
    details: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    """Error response with message and optional details."""
    err: Dict[str, Any] = {"message": message}
    if details:
        err["details"] = details
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": err, "timestamp": _timestamp()},
    )


def validation_error(errors: Dict[str, List[str]]) -> JSONResponse:
    """400 response listing field-level validation messages."""
    return error(
        "Validation failed",
        status.HTTP_400_BAD_REQUEST,
        details={"validation": errors},
    )


def not_found(resource: str) -> JSONResponse:
    """404 response: "<resource> not found"."""
    return error(f"{resource} not found", status.HTTP_404_NOT_FOUND)
