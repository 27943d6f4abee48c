"""Translate domain errors into JSON error responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from eventplanner.domain.errors import (
    ConflictError,
    DuplicateUserError,
    EventInPastError,
    EventPlannerError,
    ForbiddenError,
    InvalidTimeRangeError,
    MalformedTimeError,
    NotFoundError,
    SelfDeletionError,
    UnauthorizedError,
)

logger = logging.getLogger(__name__)

# (status code, short error label) per error type; first match wins.
_ERROR_MAP: list[tuple[type[EventPlannerError], int, str]] = [
    (MalformedTimeError, status.HTTP_422_UNPROCESSABLE_ENTITY, "Invalid time"),
    (InvalidTimeRangeError, status.HTTP_422_UNPROCESSABLE_ENTITY, "Invalid time range"),
    (EventInPastError, status.HTTP_422_UNPROCESSABLE_ENTITY, "Event in the past"),
    (NotFoundError, status.HTTP_404_NOT_FOUND, "Not found"),
    (ForbiddenError, status.HTTP_403_FORBIDDEN, "Forbidden"),
    (UnauthorizedError, status.HTTP_401_UNAUTHORIZED, "Unauthorized"),
    (DuplicateUserError, status.HTTP_409_CONFLICT, "Duplicate user"),
    (SelfDeletionError, status.HTTP_400_BAD_REQUEST, "Bad request"),
]


def _error_body(error: str, details, **extra) -> dict:
    return {"error": error, "details": details, **extra}


async def conflict_handler(request: Request, exc: ConflictError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content=jsonable_encoder(
            _error_body(
                "Event time conflict",
                str(exc),
                conflicting_event=exc.conflicting_event,
            )
        ),
    )


async def domain_error_handler(request: Request, exc: EventPlannerError) -> JSONResponse:
    for error_type, status_code, label in _ERROR_MAP:
        if isinstance(exc, error_type):
            return JSONResponse(status_code=status_code, content=_error_body(label, str(exc)))
    logger.error("Unmapped domain error on %s %s: %r", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("Internal server error", []),
    )


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=jsonable_encoder(_error_body("Validation error", exc.errors())),
    )


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("Internal server error", []),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ConflictError, conflict_handler)
    app.add_exception_handler(EventPlannerError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
