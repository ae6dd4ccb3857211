"""
Pydantic schemas for error responses.
"""

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    Standard error response format.

    Examples:
        400: {"error": "validation_failed", "message": "Missing required fields"}
        500: {"error": "credential_not_found", "message": "No MSP found for organization org9"}
        500: {"error": "remote_rejected", "message": "the asset asset7 does not exist"}
    """

    error: str = Field(
        ...,
        description="Error kind",
        examples=["validation_failed", "credential_not_found", "remote_unavailable", "remote_rejected"],
    )
    message: str = Field(
        ...,
        description="String form of the underlying error",
    )
    details: dict[str, Any] | None = Field(
        default=None,
        description="Optional additional error details",
    )


class ValidationErrorDetail(BaseModel):
    """Detail for validation errors."""

    loc: list[str | int]
    msg: str
    type: str


class ValidationErrorResponse(BaseModel):
    """Response for validation errors (400)."""

    error: str = "validation_failed"
    message: str = "Missing required fields"
    details: list[ValidationErrorDetail]
