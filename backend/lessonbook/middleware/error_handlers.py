"""Map domain exceptions onto JSON error responses."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from lessonbook.errors import (
    BadRequestError,
    NotFoundError,
    SchedulingConflictError,
    SlotValidationError,
)

logger = logging.getLogger(__name__)


def _body(exc: Exception, message: str) -> dict:
    body = {"detail": message, "error": type(exc).__name__}
    if isinstance(exc, SlotValidationError):
        body["rule"] = exc.rule
    if isinstance(exc, SchedulingConflictError) and exc.conflicting_lesson_id:
        body["conflicting_lesson_id"] = exc.conflicting_lesson_id
    return body


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
        logger.info("%s %s - 404 - %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=404, content=_body(exc, exc.message))

    @app.exception_handler(BadRequestError)
    async def bad_request_handler(request: Request, exc: BadRequestError) -> JSONResponse:
        logger.info("%s %s - 400 - %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=400, content=_body(exc, exc.message))
