"""Global exception handlers: domain errors become JSON error envelopes.

The views already turn GitHub failures into empty or "not found" states, so
these only see what the JSON routes raise on purpose, request validation
failures and genuine bugs.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from user_finder.domain.exceptions import (
    GitHubRateLimitError,
    UpstreamError,
    UserFinderError,
    UserNotFoundError,
)
from user_finder.interface.schemas import ErrorResponse

logger = logging.getLogger(__name__)

ExceptionHandler = Callable[[Request, Exception], Awaitable[JSONResponse]]

_EXCEPTION_STATUS: list[tuple[type[UserFinderError], int]] = [
    (UserNotFoundError, 404),
    (GitHubRateLimitError, 429),
    (UpstreamError, 502),
]


def _error_json(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(message=message).model_dump(),
    )


def _status_handler(status_code: int) -> ExceptionHandler:
    async def handler(request: Request, exc: Exception) -> JSONResponse:
        logger.info("%s: %s", type(exc).__name__, exc)
        return _error_json(status_code, str(exc))

    return handler


def register_error_handlers(app: FastAPI) -> None:
    """Attach exception handlers to the FastAPI application."""

    for exc_type, code in _EXCEPTION_STATUS:
        app.add_exception_handler(exc_type, _status_handler(code))

    @app.exception_handler(RequestValidationError)
    async def validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        messages = []
        for err in exc.errors():
            loc = ".".join(str(p) for p in err.get("loc", []))
            messages.append(f"{loc}: {err.get('msg', 'validation error')}")
        return _error_json(422, "; ".join(messages))

    @app.exception_handler(Exception)
    async def generic_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception")
        return _error_json(500, "An unexpected error occurred. Please try again later.")
