"""
Error handling middleware.

Domain exceptions raised by use cases become JSON error responses here, so
routes do not need their own try/except blocks.
"""

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from marketplace.config.logging import get_logger
from marketplace.domain.exceptions.access_error import ForbiddenError, NotFoundError
from marketplace.domain.exceptions.lifecycle_error import (
    ConflictError,
    InvalidStateError,
)
from marketplace.domain.exceptions.validation_error import ValidationError
from marketplace.infrastructure.monitoring.metrics import record_error

logger = get_logger(__name__)


class ErrorHandlerMiddleware:
    """Error handling middleware for FastAPI."""

    def __init__(self, app: FastAPI):
        self.app = app
        add_error_handlers(app)


def _error_body(error: str, message: str, error_type: str, **extra) -> dict:
    body = {"error": error, "message": message, "type": error_type}
    body.update(extra)
    return body


def add_error_handlers(app: FastAPI) -> None:
    """Add custom error handlers to FastAPI app."""

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        logger.warning("Validation error", error=str(exc), path=request.url.path)
        return JSONResponse(
            status_code=422,
            content=_error_body(
                "Validation Error",
                str(exc),
                "validation_error",
                errors=[e.to_dict() for e in exc.errors],
            ),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(
        request: Request, exc: RequestValidationError
    ):
        errors = [
            {
                "field": ".".join(str(part) for part in err["loc"][1:]) or "body",
                "message": err["msg"],
            }
            for err in exc.errors()
        ]
        logger.warning("Request validation error", path=request.url.path, errors=errors)
        return JSONResponse(
            status_code=422,
            content=_error_body(
                "Validation Error",
                "Request payload is invalid",
                "validation_error",
                errors=errors,
            ),
        )

    @app.exception_handler(ForbiddenError)
    async def forbidden_error_handler(request: Request, exc: ForbiddenError):
        logger.warning("Forbidden", error=str(exc), path=request.url.path)
        return JSONResponse(
            status_code=403,
            content=_error_body("Forbidden", str(exc), "forbidden"),
        )

    @app.exception_handler(NotFoundError)
    async def not_found_error_handler(request: Request, exc: NotFoundError):
        return JSONResponse(
            status_code=404,
            content=_error_body("Not Found", str(exc), "not_found"),
        )

    @app.exception_handler(InvalidStateError)
    async def invalid_state_error_handler(request: Request, exc: InvalidStateError):
        logger.info(
            "Invalid state transition",
            error=str(exc),
            current_status=exc.current_status,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=400,
            content=_error_body(
                "Invalid State",
                str(exc),
                "invalid_state",
                current_status=exc.current_status,
            ),
        )

    @app.exception_handler(ConflictError)
    async def conflict_error_handler(request: Request, exc: ConflictError):
        logger.info("Conflict", error=str(exc), path=request.url.path)
        return JSONResponse(
            status_code=409,
            content=_error_body("Conflict", str(exc), "conflict"),
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error("Database error", error=str(exc), path=request.url.path)
        record_error(type(exc).__name__, "database")
        return JSONResponse(
            status_code=500,
            content=_error_body(
                "Database Error", "A database error occurred", "database_error"
            ),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body("HTTP Error", str(exc.detail), "http_error"),
            headers=exc.headers,
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled exception",
            error=str(exc),
            path=request.url.path,
            exc_info=exc,
        )
        record_error(type(exc).__name__, "api")
        return JSONResponse(
            status_code=500,
            content=_error_body(
                "Internal Server Error",
                "An unexpected error occurred",
                "internal_error",
            ),
        )
