"""
FastAPI dependency injection functions.
Provides common dependencies used across endpoints.
"""

from typing import Annotated

from fastapi import Depends, Query

from app.config import Settings, get_settings
from app.core.organizations import OrganizationRegistry, get_organizations
from app.ledger import LedgerBackend, get_ledger
from app.schemas.asset import IdentityRequest
from app.services.asset_service import AssetService


# Type aliases for cleaner endpoint signatures
Ledger = Annotated[LedgerBackend, Depends(get_ledger)]
Organizations = Annotated[OrganizationRegistry, Depends(get_organizations)]
AppSettings = Annotated[Settings, Depends(get_settings)]


def get_asset_service(ledger: Ledger, organizations: Organizations) -> AssetService:
    """Build the asset service; no ledger connection is opened here."""
    return AssetService(ledger, organizations)


def get_query_identity(
    orgName: str = Query(..., min_length=1, description="Organization name"),
    userName: str = Query(..., min_length=1, description="Enrolled user name"),
) -> IdentityRequest:
    """Caller identity for read routes, taken from the query string."""
    return IdentityRequest(orgName=orgName, userName=userName)


Assets = Annotated[AssetService, Depends(get_asset_service)]
QueryIdentity = Annotated[IdentityRequest, Depends(get_query_identity)]
