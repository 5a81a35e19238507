"""Common API schemas for request/response formatting."""

from datetime import datetime, timezone
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class APIError(BaseModel):
    """Standard error detail format."""

    code: str = Field(..., description="Error code for programmatic handling")
    message: str = Field(..., description="Human-readable error message")
    details: str | None = Field(default=None, description="Additional error details")


class APIResponse(BaseModel, Generic[T]):
    """Standard API response wrapper.

    Success Response:
    {
        "success": true,
        "data": {"projectId": 7, "status": "PREPARATION", ...},
        "error": null,
        "timestamp": "2026-03-02T10:30:00Z"
    }

    Error Response:
    {
        "success": false,
        "data": null,
        "error": {
            "code": "PROJECT_NOT_FOUND",
            "message": "Project not found: 7",
            "details": null
        },
        "timestamp": "2026-03-02T10:30:00Z"
    }
    """

    success: bool = Field(..., description="Whether the request was successful")
    data: T | None = Field(default=None, description="Response data on success")
    error: APIError | None = Field(default=None, description="Error details on failure")
    timestamp: datetime = Field(default_factory=_utcnow, description="Response timestamp")

    @classmethod
    def ok(cls, data: T) -> "APIResponse[T]":
        """Create a successful response."""
        return cls(success=True, data=data, error=None)

    @classmethod
    def fail(
        cls,
        code: str,
        message: str,
        details: str | None = None,
    ) -> "APIResponse[None]":
        """Create a failure response."""
        return cls(
            success=False,
            data=None,
            error=APIError(code=code, message=message, details=details),
        )


class MessageResponse(BaseModel):
    """Acknowledgement for operations that return no entity."""

    message: str = "OK"
