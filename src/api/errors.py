"""RFC 7807 error responses.

Domain errors carry a kind (see ``src.domain.exceptions``); this module maps
the kind to a status code and renders the error as problem details. The
identifiers a domain error carries become extension members, so a
``PendingSessionResourcesError`` response includes ``pending_count``.

Kind to status:
    NotFoundError -> 404
    InvalidStateError, ConflictError, InvalidInputError -> 400
    ForbiddenError -> 403
    UnexpectedError and anything unanticipated -> 500 (logged)
"""

import re
from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.domain.exceptions import (
    CaseEngineError,
    ConflictError,
    ForbiddenError,
    InvalidInputError,
    InvalidStateError,
    NotFoundError,
    UnexpectedError,
)

logger = structlog.get_logger(__name__)

PROBLEM_MEDIA_TYPE = "application/problem+json"
PROBLEM_TYPE_PREFIX = "urn:case-engine:error:"

STATUS_BY_KIND: dict[type[CaseEngineError], int] = {
    NotFoundError: 404,
    InvalidStateError: 400,
    ConflictError: 400,
    InvalidInputError: 400,
    ForbiddenError: 403,
    UnexpectedError: 500,
}

# RFC 7807 members; an error attribute with one of these names is renamed
PROBLEM_MEMBERS = frozenset({"type", "title", "status", "detail", "instance"})

UNEXPECTED_DETAIL = "An unexpected error occurred"

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def status_for(exc: CaseEngineError) -> int:
    """Status code for the kind ``exc`` belongs to."""
    for cls in type(exc).__mro__:
        if cls in STATUS_BY_KIND:
            return STATUS_BY_KIND[cls]
    return 500


def problem_type(exc: CaseEngineError) -> str:
    """``urn:case-engine:error:pending-session-resources`` style type URI."""
    name = type(exc).__name__.removesuffix("Error")
    return PROBLEM_TYPE_PREFIX + _CAMEL_BOUNDARY.sub("-", name).lower()


def problem_extensions(exc: CaseEngineError) -> dict[str, Any]:
    """Public attributes of a domain error, JSON-encoded.

    ``status`` on a SessionNotOpenError becomes ``error_status`` so it cannot
    shadow the HTTP status member.
    """
    return {
        (f"error_{key}" if key in PROBLEM_MEMBERS else key): jsonable_encoder(value)
        for key, value in vars(exc).items()
        if not key.startswith("_") and key != "message"
    }


def problem_response(
    request: Request,
    status: int,
    title: str,
    detail: str,
    type_: str,
    **extensions: Any,
) -> JSONResponse:
    """Build an RFC 7807 JSON response."""
    body = {
        "type": type_,
        "title": title,
        "status": status,
        "detail": detail,
        "instance": str(request.url.path),
        **extensions,
    }
    return JSONResponse(status_code=status, content=body, media_type=PROBLEM_MEDIA_TYPE)


async def case_engine_error_handler(request: Request, exc: CaseEngineError) -> JSONResponse:
    status = status_for(exc)
    if status >= 500:
        logger.exception(
            "unexpected_error",
            path=request.url.path,
            error_type=type(exc).__name__,
            message=exc.message,
            exc_info=exc,
        )
        return problem_response(
            request, 500, UnexpectedError.title, UNEXPECTED_DETAIL, PROBLEM_TYPE_PREFIX + "unexpected"
        )

    logger.info(
        "request_rejected",
        path=request.url.path,
        status_code=status,
        error_type=type(exc).__name__,
    )
    return problem_response(
        request,
        status,
        exc.title,
        exc.message,
        problem_type(exc),
        **problem_extensions(exc),
    )


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed request bodies and parameters are 400, not 422."""
    return problem_response(
        request,
        400,
        InvalidInputError.title,
        "Request validation failed",
        PROBLEM_TYPE_PREFIX + "invalid-input",
        errors=jsonable_encoder(exc.errors()),
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    detail = exc.detail if isinstance(exc.detail, str) else "HTTP error"
    response = problem_response(
        request,
        exc.status_code,
        detail if exc.status_code in (401, 404, 405) else "HTTP Error",
        detail,
        PROBLEM_TYPE_PREFIX + f"http-{exc.status_code}",
    )
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log everything, expose nothing."""
    logger.exception(
        "unexpected_error",
        path=request.url.path,
        error_type=type(exc).__name__,
        exc_info=exc,
    )
    return problem_response(
        request, 500, UnexpectedError.title, UNEXPECTED_DETAIL, PROBLEM_TYPE_PREFIX + "unexpected"
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the problem-details handlers on ``app``."""
    app.add_exception_handler(CaseEngineError, case_engine_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
