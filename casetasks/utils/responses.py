# casetasks/utils/responses.py
"""
Uniform response envelope.

Success: ``{"success": true, "data": ...}``
Failure: ``{"success": false, "error": {"message", "details"?, "stack"?}}``
"""

import logging
import traceback
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from casetasks.errors import AppError

logger = logging.getLogger(__name__)


def envelope(data: Any) -> Dict[str, Any]:
    return {"success": True, "data": data}


def error_response(
    status_code: int,
    message: str,
    details: Optional[List[Dict[str, Any]]] = None,
    stack: Optional[str] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    error: Dict[str, Any] = {"message": message}
    if details:
        error["details"] = details
    if stack:
        error["stack"] = stack
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": error},
        headers=headers,
    )


def _error_message(error: Dict[str, Any]) -> str:
    # custom ValueErrors raised in validators carry their own text
    ctx_error = (error.get("ctx") or {}).get("error")
    if isinstance(ctx_error, Exception):
        return str(ctx_error)
    return error["msg"]


def validation_details(errors) -> List[Dict[str, str]]:
    """Flatten pydantic errors into ``[{field, message}]``"""
    details = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        details.append({
            "field": ".".join(loc) or "body",
            "message": _error_message(error),
        })
    return details


def _stack_for(request: Request, exc: Exception) -> Optional[str]:
    settings = request.app.state.settings
    if settings.is_production:
        return None
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    stack = _stack_for(request, exc) if exc.status_code >= 500 else None
    return error_response(exc.status_code, exc.message, details=exc.details, stack=stack, headers=headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = validation_details(exc.errors())
    logger.info("Validation failed for %s %s: %s", request.method, request.url.path, details)
    return error_response(400, "Validation failed", details=details)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(500, "Internal Server Error", stack=_stack_for(request, exc))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
