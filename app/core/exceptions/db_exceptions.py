"""Custom database exceptions for handling database-related errors."""


class DatabaseException(Exception):
    """Base exception for all database-related errors."""

    def __init__(self, message: str = "A database error occurred"):
        self.message = message
        super().__init__(self.message)


class DatabaseHealthCheckError(DatabaseException):
    """Raised when the health probe query against the project store fails."""

    def __init__(self, message: str = "Project store health check failed"):
        super().__init__(message)
