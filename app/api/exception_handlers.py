"""Centralized exception handlers for FastAPI application."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError

from app.api.schemas.common import APIResponse
from app.core.exceptions import (
    GENERIC_BAD_REQUEST,
    DatabaseException,
    DatabaseHealthCheckError,
    MemberConflictError,
    MemberNotFoundException,
    ProjectCreationError,
    ProjectException,
    ProjectNotFoundException,
    ProjectPersistenceError,
    ProjectValidationError,
)


def _error_response(status_code: int, code: str, message: str, details: str | None = None) -> JSONResponse:
    response = APIResponse.fail(code=code, message=message, details=details)
    return JSONResponse(
        status_code=status_code,
        content=response.model_dump(mode="json"),
    )


async def database_exception_handler(
    request: Request, exc: DatabaseException
) -> JSONResponse:
    """Handle custom database exceptions."""
    logger.error(f"Database error: {exc.message}")

    if isinstance(exc, DatabaseHealthCheckError):
        error_code = "DATABASE_HEALTH_CHECK_ERROR"
        status_code = 503
    else:
        error_code = "DATABASE_ERROR"
        status_code = 500

    return _error_response(status_code, error_code, exc.message)


async def project_exception_handler(
    request: Request, exc: ProjectException
) -> JSONResponse:
    """Map project errors to the two client outcomes: 404 and 400."""
    logger.warning(f"Project error on {request.method} {request.url.path}: {exc.message}")

    if isinstance(exc, ProjectNotFoundException):
        error_code = "PROJECT_NOT_FOUND"
        status_code = 404
    elif isinstance(exc, MemberNotFoundException):
        error_code = "MEMBER_NOT_FOUND"
        status_code = 404
    elif isinstance(exc, ProjectValidationError):
        error_code = "PROJECT_VALIDATION_ERROR"
        status_code = 400
    elif isinstance(exc, MemberConflictError):
        error_code = "MEMBER_CONFLICT"
        status_code = 400
    elif isinstance(exc, ProjectCreationError):
        error_code = "PROJECT_CREATION_ERROR"
        status_code = 400
    elif isinstance(exc, ProjectPersistenceError):
        error_code = "PROJECT_PERSISTENCE_ERROR"
        status_code = 400
    else:
        error_code = "PROJECT_ERROR"
        status_code = 500

    return _error_response(status_code, error_code, exc.message)


async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed paths and bodies as a generic bad request."""
    logger.warning(f"Malformed request on {request.method} {request.url.path}: {exc.errors()}")
    return _error_response(400, "BAD_REQUEST", GENERIC_BAD_REQUEST)


async def sqlalchemy_exception_handler(
    request: Request, exc: SQLAlchemyError
) -> JSONResponse:
    """Handle SQLAlchemy errors."""
    logger.error(f"SQLAlchemy error: {str(exc)}")
    return _error_response(500, "DATABASE_ERROR", "A database error occurred")


async def generic_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """Handle unhandled exceptions."""
    logger.exception(f"Unhandled exception: {str(exc)}")
    return _error_response(500, "INTERNAL_SERVER_ERROR", "An unexpected error occurred")


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(DatabaseException, database_exception_handler)
    app.add_exception_handler(ProjectException, project_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
