"""Response envelope and error schemas."""
from typing import Any

from pydantic import BaseModel, Field


class ErrorBody(BaseModel):
    """Error details carried in a failed response."""

    error: str = Field(
        ...,
        description="Error type identifier",
        examples=["invalid_credentials", "invitation_expired", "validation_error"],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["Invalid email or password"],
    )
    details: dict | None = Field(
        None,
        description="Additional error context (field validation errors, etc.)",
        examples=[{"password": "Password is required"}],
    )


class Envelope(BaseModel):
    """Standard response envelope used by every endpoint."""

    success: bool = Field(..., description="Whether the request succeeded")
    data: Any | None = Field(None, description="Response payload on success")
    error: ErrorBody | None = Field(None, description="Error details on failure")
