from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from hello_api.core.logging_utils import log_event
from hello_api.middleware.security import DEFAULT_SECURITY_HEADERS

logger = logging.getLogger("hello_api.errors")

_STATUS_CODES = {
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
}


def error_payload(code: str, message: str, details: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"error": {"code": code, "message": message}}
    if details is not None:
        payload["error"]["details"] = details
    return payload


def err(request: Request, code: str, message: str, status: int, details: dict | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status,
        content=jsonable_encoder(error_payload(code, message, details)),
        headers={"x-request-id": getattr(request.state, "request_id", "")},
    )


def normalize_http_exception_detail(detail: Any) -> Dict[str, Any] | None:
    if not isinstance(detail, dict):
        return None
    if "error" in detail and isinstance(detail["error"], dict):
        inner = detail["error"]
        if isinstance(inner.get("code"), str) and isinstance(inner.get("message"), str):
            return detail
    code = detail.get("code")
    message = detail.get("message")
    if isinstance(code, str) and isinstance(message, str):
        return error_payload(code, message, detail.get("details"))
    return None


def sanitize_validation_errors(errors: list[dict[str, Any]]) -> list[dict[str, Any]]:
    sanitized: list[dict[str, Any]] = []
    for error in errors:
        entry = dict(error)
        ctx = entry.get("ctx")
        if isinstance(ctx, dict):
            safe_ctx: dict[str, Any] = {}
            for key, value in ctx.items():
                try:
                    json.dumps(value)
                    safe_ctx[key] = value
                except TypeError:
                    safe_ctx[key] = repr(value)
            entry["ctx"] = safe_ctx
        sanitized.append(entry)
    return sanitized


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    normalized = normalize_http_exception_detail(exc.detail)
    headers = dict(exc.headers or {})
    headers["x-request-id"] = getattr(request.state, "request_id", "")
    if normalized is not None:
        return JSONResponse(status_code=exc.status_code, content=normalized, headers=headers)

    code = _STATUS_CODES.get(exc.status_code, "HTTP_ERROR")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_payload(code=code, message=str(exc.detail)),
        headers=headers,
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = {"errors": sanitize_validation_errors(list(exc.errors()))}
    return err(request, "VALIDATION_ERROR", "Request validation failed.", 422, details)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    log_event(
        logger,
        "unhandled_exception",
        level=logging.ERROR,
        request_id=getattr(request.state, "request_id", ""),
        path=request.url.path,
        error=repr(exc),
    )
    response = err(request, "INTERNAL_ERROR", "Internal server error.", 500)
    # rendered by ServerErrorMiddleware, outside SecurityHeadersMiddleware
    for key, value in DEFAULT_SECURITY_HEADERS.items():
        response.headers.setdefault(key, value)
    return response


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
