"""Centralized error responder.

Handlers raise :class:`BookError` subclasses instead of building error
responses themselves; the handler registered here picks the status from
the error and renders a JSON message. Request bodies FastAPI cannot parse
are answered through the same response shape.
"""

from __future__ import annotations

import uuid

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from loguru import logger
from starlette.responses import JSONResponse

from src.bookshelf.core.errors import BookError, ValidationError

GENERIC_ERROR_MESSAGE = "Internal Server Error"


def error_response(
    request: Request, status_code: int, content: dict[str, str]
) -> JSONResponse:
    request_id = getattr(request.state, "request_id", None) or str(uuid.uuid4())
    return JSONResponse(
        status_code=status_code,
        content={**content, "request_id": request_id},
        headers={"X-Request-ID": request_id},
    )


def describe_validation_error(exc: RequestValidationError) -> str:
    """One-line summary of the first problem in a rejected request."""
    errors = exc.errors()
    if not errors:
        return "Invalid request body."
    first_error = errors[0]
    if first_error.get("type") == "json_invalid":
        return "Request body is not valid JSON."
    field = ".".join(str(loc) for loc in first_error.get("loc", ()))
    return f"Invalid request body: {field}: {first_error.get('msg', 'invalid value')}"


async def book_error_handler(request: Request, exc: Exception) -> JSONResponse:
    if not isinstance(exc, BookError):
        raise exc

    status_code = getattr(exc, "status_code", None) or 500
    log = logger.bind(
        status_code=status_code,
        error_kind=exc.kind.value,
        path=request.url.path,
    )
    if status_code >= 500:
        # Store details stay in the logs
        log.opt(exception=exc).error("request.store_error")
        return error_response(
            request, status_code, {"message": GENERIC_ERROR_MESSAGE}
        )

    log.warning("request.rejected: {}", exc.message)
    return error_response(request, status_code, exc.to_dict())


async def request_validation_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """Answer unparseable or wrongly typed bodies with 400."""
    if not isinstance(exc, RequestValidationError):
        raise exc

    return await book_error_handler(
        request, ValidationError(describe_validation_error(exc))
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers on the FastAPI app."""
    app.add_exception_handler(BookError, book_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
