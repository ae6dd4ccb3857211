"""
Pydantic schemas for asset request/response validation.

Every field listed here is required and must be non-empty. Asset
attributes are opaque to the gateway: strings or numbers are accepted and
forwarded to the chaincode as strings.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _coerce_ledger_value(value: Any) -> Any:
    """Numbers are sent to the chaincode in their string form."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return value


# ===================
# Base Schemas
# ===================

class IdentityRequest(BaseModel):
    """Caller identity used to pick a credential and connection profile."""

    model_config = ConfigDict(populate_by_name=True)

    org_name: str = Field(
        ...,
        alias="orgName",
        min_length=1,
        description="Short organization name (e.g. org1)",
        examples=["org1"],
    )
    user_name: str = Field(
        ...,
        alias="userName",
        min_length=1,
        description="Enrolled user name in the organization's wallet",
        examples=["appUser"],
    )


class AssetAttributes(BaseModel):
    """Mutable asset attributes."""

    model_config = ConfigDict(populate_by_name=True)

    color: str = Field(..., min_length=1, examples=["blue"])
    size: str = Field(..., min_length=1, examples=["5"])
    owner: str = Field(..., min_length=1, examples=["Tomoko"])
    appraised_value: str = Field(..., alias="appraisedValue", min_length=1, examples=["300"])

    @field_validator("color", "size", "owner", "appraised_value", mode="before")
    @classmethod
    def coerce_numbers(cls, v: Any) -> Any:
        return _coerce_ledger_value(v)

    def as_args(self) -> tuple[str, str, str, str]:
        """Chaincode argument order for the attribute fields."""
        return (self.color, self.size, self.owner, self.appraised_value)


# ===================
# Request Schemas
# ===================

class AssetCreate(IdentityRequest, AssetAttributes):
    """Body of POST /asset."""

    asset_id: str = Field(..., alias="assetID", min_length=1, examples=["asset7"])

    @field_validator("asset_id", mode="before")
    @classmethod
    def coerce_asset_id(cls, v: Any) -> Any:
        return _coerce_ledger_value(v)


class AssetUpdate(IdentityRequest, AssetAttributes):
    """Body of PUT /asset/{id}."""


class AssetTransfer(IdentityRequest):
    """Body of POST /asset/{id}/transfer."""

    new_owner: str = Field(..., alias="newOwner", min_length=1, examples=["Max"])


class AssetDelete(IdentityRequest):
    """Body of DELETE /asset/{id}."""


# ===================
# Response Schemas
# ===================

class MessageResponse(BaseModel):
    """Confirmation returned by state-changing operations."""

    message: str = Field(..., examples=["Asset asset7 created successfully!"])
