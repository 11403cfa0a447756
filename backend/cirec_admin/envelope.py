"""Response envelope helpers.

Every admin endpoint answers with ``{"success": bool, "message"?: str, ...}``.
Failures of any kind are rendered through the handlers installed here so no
error escapes the handler boundary in a different shape.
"""
from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from .domain_errors import DomainError

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


def ok(data: Any = None, *, message: str | None = None, **extra: Any) -> dict[str, Any]:
    """Build a success envelope."""
    payload: dict[str, Any] = {"success": True}
    if message is not None:
        payload["message"] = message
    if data is not None:
        payload["data"] = data
    payload.update(extra)
    return payload


def build_error_response(
    status_code: int,
    message: str,
    *,
    code: str | None = None,
    details: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    payload: dict[str, Any] = {"success": False, "message": message}
    if code is not None:
        payload["code"] = code
    if details is not None:
        payload["details"] = details
    return JSONResponse(status_code=status_code, content=payload, headers=headers)


def build_domain_error_response(exc: DomainError) -> JSONResponse:
    """Render DomainError with its stable code."""
    return build_error_response(
        exc.http_status,
        exc.message,
        code=exc.code,
        details=exc.details,
    )


async def _handle_domain_error(_: Request, exc: DomainError) -> JSONResponse:
    if exc.http_status >= 500:
        logger.error("Domain failure %s: %s", exc.code, exc.message)
    return build_domain_error_response(exc)


async def _handle_http_exception(_: Request, exc: HTTPException) -> JSONResponse:
    if isinstance(exc.detail, str):
        message = exc.detail
    else:
        try:
            message = HTTPStatus(exc.status_code).phrase
        except ValueError:
            message = "Request failed"
    return build_error_response(exc.status_code, message, headers=getattr(exc, "headers", None))


async def _handle_validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path"))
    reason = first.get("msg", "Invalid request")
    message = f"{location}: {reason}" if location else reason
    return build_error_response(
        400,
        message,
        code="VALIDATION_ERROR",
        details={"errors": [{"loc": list(e.get("loc", ())), "msg": e.get("msg")} for e in errors]},
    )


async def _handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return build_error_response(500, INTERNAL_ERROR_MESSAGE, code="INTERNAL_ERROR")


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, _handle_domain_error)
    app.add_exception_handler(HTTPException, _handle_http_exception)
    app.add_exception_handler(RequestValidationError, _handle_validation_error)
    app.add_exception_handler(Exception, _handle_unexpected_error)
