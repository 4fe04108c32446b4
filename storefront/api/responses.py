"""
Response envelope helpers.

Write endpoints answer with ``{success, statusCode, data, timestamp}`` and
every error with ``{success, statusCode, error{code, message, details},
timestamp}``. Listing endpoints return their bare ``{"items": [...]}`` body.
"""
from typing import Any, Dict, List, Optional, Sequence

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from storefront.utils import utc_now


def success(data: Any, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder({
            "success": True,
            "statusCode": status_code,
            "data": data,
            "timestamp": utc_now(),
        }),
    )


def created(data: Any) -> JSONResponse:
    return success(data, status.HTTP_201_CREATED)


def error_response(
    status_code: int,
    code: str,
    message: str,
    details: Optional[Any] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder({
            "success": False,
            "statusCode": status_code,
            "error": {"code": code, "message": message, "details": details},
            "timestamp": utc_now(),
        }),
        headers=headers,
    )


def format_validation_errors(errors: Sequence[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Reduce pydantic error dicts to field + message pairs"""
    formatted = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        message = str(error.get("msg", ""))
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        formatted.append({"field": ".".join(loc), "message": message, "type": error.get("type")})
    return formatted


def validation_message(details: List[Dict[str, Any]]) -> str:
    if not details:
        return "Invalid request data"
    first = details[0]
    if first["type"] == "missing" and first["field"]:
        return f"{first['field']} is required"
    return first["message"]
