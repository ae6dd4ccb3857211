"""
Custom exceptions for the Fabric Asset Gateway.

Errors fall into a closed set of kinds. Request validation is a client
error (400); every downstream failure is a server error (500) whose kind
is carried in the response body.
"""

import enum
from typing import Any


class ErrorKind(str, enum.Enum):
    """Closed enumeration of gateway error kinds."""

    VALIDATION = "validation_failed"
    CREDENTIAL_NOT_FOUND = "credential_not_found"
    REMOTE_UNAVAILABLE = "remote_unavailable"
    REMOTE_REJECTED = "remote_rejected"


class GatewayAPIException(Exception):
    """Base exception for all gateway errors."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        self.kind = kind
        self.error = kind.value
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to response dictionary."""
        response = {
            "error": self.error,
            "message": self.message,
        }
        if self.details:
            response["details"] = self.details
        return response


class ValidationException(GatewayAPIException):
    """400 - Missing or empty required fields."""

    def __init__(self, message: str = "Missing required fields", details: dict[str, Any] | None = None):
        super().__init__(
            kind=ErrorKind.VALIDATION,
            message=message,
            status_code=400,
            details=details,
        )


class CredentialNotFoundException(GatewayAPIException):
    """500 - Organization has no MSP mapping or user has no stored identity."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            kind=ErrorKind.CREDENTIAL_NOT_FOUND,
            message=message,
            status_code=500,
            details=details,
        )


class RemoteUnavailableException(GatewayAPIException):
    """500 - Connection profile unreadable or ledger network unreachable."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            kind=ErrorKind.REMOTE_UNAVAILABLE,
            message=message,
            status_code=500,
            details=details,
        )


class RemoteRejectedException(GatewayAPIException):
    """500 - Chaincode returned an error or an unreadable result."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            kind=ErrorKind.REMOTE_REJECTED,
            message=message,
            status_code=500,
            details=details,
        )
