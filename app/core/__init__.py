"""Core utilities and exceptions for the Fabric Asset Gateway."""

from app.core.exceptions import (
    ErrorKind,
    GatewayAPIException,
    ValidationException,
    CredentialNotFoundException,
    RemoteUnavailableException,
    RemoteRejectedException,
)
from app.core.organizations import OrganizationRegistry, get_organizations

__all__ = [
    "ErrorKind",
    "GatewayAPIException",
    "ValidationException",
    "CredentialNotFoundException",
    "RemoteUnavailableException",
    "RemoteRejectedException",
    "OrganizationRegistry",
    "get_organizations",
]
