# feedback_api/core/errors.py
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger("feedback_api")


# -------------------------
# Domain errors (raised by services and stores)
# -------------------------
class FeedbackError(Exception):
    def __init__(self, message: str, param: str | None = None):
        super().__init__(message)
        self.message = message
        self.param = param


class ValidationError(FeedbackError):
    """Malformed or missing input. Always raised before any store mutation."""


class NotFoundError(FeedbackError):
    """The referenced entity does not exist."""


class StoreError(FeedbackError):
    """Unexpected failure in the persistence backend. Message is internal only."""


# -------------------------
# HTTP errors
# -------------------------
class ApiError(Exception):
    def __init__(self, status_code: int, code: str, message: str, param: str | None = None):
        self.status_code = status_code
        self.code = code
        self.message = message
        self.param = param


def error_body(code: str, message: str, param: str | None = None, type_: str = "invalid_request_error"):
    body = {
        "error": {
            "type": type_,
            "code": code,
            "message": message,
        }
    }
    if param:
        body["error"]["param"] = param
    return body


def _first_validation_problem(exc: RequestValidationError) -> tuple[str, str | None]:
    errors = exc.errors()
    if not errors:
        return "Invalid request", None

    first = errors[0]
    loc = [str(p) for p in first.get("loc", ()) if p not in ("body", "query", "path")]
    param = loc[-1] if loc else None
    if first.get("type") == "missing":
        return f"{param or 'field'} is required", param
    return f"Invalid value for {param or 'request'}: {first.get('msg', 'invalid')}", param


def register_exception_handlers(app: FastAPI):
    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        type_ = "api_error" if exc.status_code >= 500 else "invalid_request_error"
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.code, exc.message, exc.param, type_=type_),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        message, param = _first_validation_problem(exc)
        return JSONResponse(
            status_code=400,
            content=error_body("invalid_request_error", message, param),
        )

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return JSONResponse(
            status_code=400,
            content=error_body("invalid_request_error", exc.message, exc.param),
        )

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return JSONResponse(
            status_code=404,
            content=error_body("resource_missing", exc.message, exc.param),
        )

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        logger.error("store failure on %s %s: %s", request.method, request.url.path, exc.message)
        return JSONResponse(
            status_code=500,
            content=error_body("internal_error", "Internal server error", type_="api_error"),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        # do not leak internals in API response
        logger.error(
            "unhandled error on %s %s",
            request.method,
            request.url.path,
            exc_info=(type(exc), exc, exc.__traceback__),
        )
        return JSONResponse(
            status_code=500,
            content=error_body("internal_error", "Internal server error", type_="api_error"),
        )
