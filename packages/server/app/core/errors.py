"""
Error taxonomy for the task board and its translation to HTTP responses.

Services raise these; the handlers registered here choose the HTTP status
from the error class.
"""

from __future__ import annotations

import structlog
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.requests import Request
from starlette.responses import JSONResponse

log = structlog.get_logger()


class TaskBoardError(Exception):
    """Base class for errors that carry a client-facing message."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TaskBoardError):
    """Malformed input: bad title, description, status or order."""

    status_code = 400


class NotFoundError(TaskBoardError):
    """The referenced task does not exist."""

    status_code = 404


class InconsistentStateError(TaskBoardError):
    """A row that was just written could not be read back."""

    status_code = 500


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


async def _task_board_error_handler(request: Request, exc: TaskBoardError) -> JSONResponse:
    if exc.status_code >= 500:
        log.error("request.failed", path=request.url.path, error=exc.message)
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    log.info("request.invalid_body", path=request.url.path, errors=len(exc.errors()))
    return JSONResponse(status_code=400, content={"message": "Invalid request body"})


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log.exception("request.unhandled_error", path=request.url.path)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TaskBoardError, _task_board_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
