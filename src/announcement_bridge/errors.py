"""JSON error envelope and FastAPI exception handlers.

Every error response has the shape
``{status, message, code?, name?, type?, stack?}``. ``stack`` is only
attached outside production.
"""

import logging
import traceback

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from announcement_bridge.announcement.models import Failure
from announcement_bridge.config import get_settings

logger = logging.getLogger(__name__)


def error_response(
    status: int,
    message: str,
    *,
    code: str | None = None,
    name: str | None = None,
    type_: str | None = None,
    exc: BaseException | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Build the error envelope. Statuses below 400 are reported as 500."""
    if status < 400:
        status = 500

    body: dict = {"status": status, "message": message}
    if code is not None:
        body["code"] = code
    if name is not None:
        body["name"] = name
    if type_ is not None:
        body["type"] = type_
    if exc is not None and not get_settings().is_production:
        body["stack"] = "".join(traceback.format_exception(exc))

    return JSONResponse(status_code=status, content=body, headers=headers)


def failure_response(failure: Failure) -> JSONResponse:
    """Convert a pipeline Failure into the error envelope."""
    return error_response(
        failure.status,
        failure.message,
        code=failure.code,
        name=failure.kind.value,
        type_=failure.subject,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    logger.warning("HTTP %d on %s %s: %s", exc.status_code, request.method, request.url.path, exc.detail)
    return error_response(
        exc.status_code,
        str(exc.detail),
        name="HTTPException",
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed JSON or wrongly typed fields: 400 with the first error's message."""
    errors = exc.errors()
    logger.warning("Request validation failed on %s: %s", request.url.path, errors)
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = first.get("msg", "Invalid request")
    if location:
        message = f"{location}: {message}"
    return error_response(
        400,
        message,
        code=first.get("type"),
        name="RequestValidationError",
        type_="request.validation",
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Unclassified errors: 500 with a generic message, details only outside production."""
    logger.error(
        "Unhandled error on %s %s: %s", request.method, request.url.path, exc, exc_info=exc
    )
    production = get_settings().is_production
    return error_response(
        500,
        "Internal server error",
        name=None if production else type(exc).__name__,
        exc=exc,
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
