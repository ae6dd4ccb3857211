"""
Pydantic schemas for request/response validation.
"""

from app.schemas.asset import (
    IdentityRequest,
    AssetAttributes,
    AssetCreate,
    AssetUpdate,
    AssetTransfer,
    AssetDelete,
    MessageResponse,
)
from app.schemas.error import ErrorResponse, ValidationErrorResponse

__all__ = [
    # Asset schemas
    "IdentityRequest",
    "AssetAttributes",
    "AssetCreate",
    "AssetUpdate",
    "AssetTransfer",
    "AssetDelete",
    "MessageResponse",
    # Error schemas
    "ErrorResponse",
    "ValidationErrorResponse",
]
