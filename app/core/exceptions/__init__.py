"""Core exceptions for the application."""

from app.core.exceptions.db_exceptions import (
    DatabaseException,
    DatabaseHealthCheckError,
)
from app.core.exceptions.project import (
    GENERIC_BAD_REQUEST,
    MemberConflictError,
    MemberNotFoundException,
    ProjectCreationError,
    ProjectException,
    ProjectNotFoundException,
    ProjectPersistenceError,
    ProjectValidationError,
)

__all__ = [
    # Database
    "DatabaseException",
    "DatabaseHealthCheckError",
    # Project
    "GENERIC_BAD_REQUEST",
    "ProjectException",
    "ProjectNotFoundException",
    "MemberNotFoundException",
    "ProjectValidationError",
    "MemberConflictError",
    "ProjectPersistenceError",
    "ProjectCreationError",
]
