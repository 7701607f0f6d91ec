"""Maps certificate core failures and framework errors onto the error envelope."""

import structlog
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from ...domain.exceptions import (
    CertificateError,
    Conflict,
    GenerationExhausted,
    InvalidInput,
    NotFound,
    PreconditionFailed,
)
from .responses import ErrorResponse

logger = structlog.get_logger()

STATUS_CODES: dict[type[CertificateError], int] = {
    InvalidInput: status.HTTP_400_BAD_REQUEST,
    PreconditionFailed: status.HTTP_422_UNPROCESSABLE_ENTITY,
    NotFound: status.HTTP_404_NOT_FOUND,
    Conflict: status.HTTP_409_CONFLICT,
    GenerationExhausted: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_code_for(exc: CertificateError) -> int:
    for cls in type(exc).__mro__:
        if cls in STATUS_CODES:
            return STATUS_CODES[cls]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(status_code: int, message: str, error=None, headers=None) -> JSONResponse:
    body = ErrorResponse(message=message, error=error)
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(body),
        headers=headers,
    )


async def certificate_error_handler(request: Request, exc: CertificateError) -> JSONResponse:
    status_code = status_code_for(exc)
    log = logger.error if status_code >= 500 else logger.info
    log(
        "Request failed",
        error_type=type(exc).__name__,
        error=exc.message,
        status_code=status_code,
    )
    return error_response(status_code, exc.message, exc.detail)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"field": ".".join(str(p) for p in e.get("loc", ())), "message": e.get("msg")}
        for e in exc.errors()
    ]
    logger.info("Request validation failed", errors=errors)
    return error_response(status.HTTP_400_BAD_REQUEST, "Invalid input", errors)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    # Statement text and parameters stay in the logs, not in the response
    logger.error("Database error", error_type=type(exc).__name__, error=str(exc), exc_info=exc)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CertificateError, certificate_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
