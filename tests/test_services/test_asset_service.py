"""
Tests for the asset service.
"""

from contextlib import asynccontextmanager

import pytest

from app.core.exceptions import (
    CredentialNotFoundException,
    RemoteRejectedException,
    RemoteUnavailableException,
)
from app.core.organizations import OrganizationRegistry
from app.ledger import LedgerBackend, LedgerContract, LedgerIdentity
from app.schemas.asset import AssetCreate, AssetTransfer, IdentityRequest
from app.services.asset_service import AssetService

CALLER = IdentityRequest(orgName="org2", userName="appUser")


class CannedContract(LedgerContract):
    def __init__(self, payload: bytes):
        self.payload = payload

    async def submit(self, transaction: str, *args: str) -> bytes:
        return self.payload

    async def evaluate(self, transaction: str, *args: str) -> bytes:
        return self.payload


class CannedLedger(LedgerBackend):
    """Returns a fixed payload for every transaction."""

    name = "canned"

    def __init__(self, payload: bytes = b"", error: Exception | None = None):
        self.payload = payload
        self.error = error
        self.identities: list[LedgerIdentity] = []

    @asynccontextmanager
    async def connect(self, identity: LedgerIdentity):
        self.identities.append(identity)
        if self.error:
            raise self.error
        yield CannedContract(self.payload)


@pytest.fixture
def organizations() -> OrganizationRegistry:
    return OrganizationRegistry({"org1": "Org1MSP", "org2": "Org2MSP"})


@pytest.mark.asyncio
async def test_identity_carries_msp(organizations):
    ledger = CannedLedger(payload=b"{}")
    service = AssetService(ledger, organizations)

    await service.read_asset("a1", CALLER)

    assert ledger.identities == [LedgerIdentity(org_name="org2", user_name="appUser", msp_id="Org2MSP")]


@pytest.mark.asyncio
async def test_unknown_organization_skips_ledger(organizations):
    ledger = CannedLedger()
    service = AssetService(ledger, organizations)

    with pytest.raises(CredentialNotFoundException, match="No MSP found for organization org3"):
        await service.delete_asset("a1", IdentityRequest(orgName="org3", userName="appUser"))

    assert ledger.identities == []


@pytest.mark.asyncio
async def test_history_order_is_untouched(organizations):
    payload = b'[{"txId": "3"}, {"txId": "1"}, {"txId": "2"}]'
    service = AssetService(CannedLedger(payload=payload), organizations)

    history = await service.get_asset_history("a1", CALLER)

    assert [entry["txId"] for entry in history] == ["3", "1", "2"]


@pytest.mark.asyncio
async def test_malformed_read_result(organizations):
    service = AssetService(CannedLedger(payload=b"not json"), organizations)

    with pytest.raises(RemoteRejectedException, match="ReadAsset returned a malformed response"):
        await service.read_asset("a1", CALLER)


@pytest.mark.asyncio
async def test_unexpected_ledger_error_is_unavailable(organizations):
    service = AssetService(CannedLedger(error=ConnectionRefusedError("peer0 unreachable")), organizations)

    with pytest.raises(RemoteUnavailableException, match="peer0 unreachable"):
        await service.read_asset("a1", CALLER)


@pytest.mark.asyncio
async def test_write_confirmations(organizations):
    service = AssetService(CannedLedger(), organizations)
    create = AssetCreate(
        orgName="org1",
        userName="appUser",
        assetID="a1",
        color="blue",
        size="5",
        owner="Tomoko",
        appraisedValue="300",
    )

    assert await service.create_asset(create) == "Asset a1 created successfully!"
    assert await service.transfer_asset(
        "a1", AssetTransfer(orgName="org1", userName="appUser", newOwner="Max")
    ) == "Asset a1 transferred to Max successfully!"
    assert await service.delete_asset("a1", CALLER) == "Asset a1 deleted successfully!"
