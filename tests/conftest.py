"""
Pytest configuration and fixtures for Fabric Asset Gateway tests.
"""

from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from app.core.organizations import OrganizationRegistry, get_organizations
from app.ledger import LedgerContract, LedgerIdentity, MemoryLedgerBackend, get_ledger
from app.main import app


class RecordingLedgerBackend(MemoryLedgerBackend):
    """Memory backend that records every session and transaction."""

    def __init__(self, identities=None):
        super().__init__(identities=identities)
        self.sessions: list[LedgerIdentity] = []
        self.calls: list[tuple[str, str, tuple[str, ...]]] = []

    @asynccontextmanager
    async def connect(self, identity: LedgerIdentity) -> AsyncIterator[LedgerContract]:
        self.sessions.append(identity)
        async with super().connect(identity) as contract:
            yield _RecordingContract(contract, self.calls)


class _RecordingContract(LedgerContract):
    def __init__(self, inner: LedgerContract, calls: list):
        self.inner = inner
        self.calls = calls

    async def submit(self, transaction: str, *args: str) -> bytes:
        self.calls.append(("submit", transaction, args))
        return await self.inner.submit(transaction, *args)

    async def evaluate(self, transaction: str, *args: str) -> bytes:
        self.calls.append(("evaluate", transaction, args))
        return await self.inner.evaluate(transaction, *args)


@pytest.fixture
def organizations() -> OrganizationRegistry:
    """Organization registry used by the test application."""
    return OrganizationRegistry({"org1": "Org1MSP", "org2": "Org2MSP"})


@pytest.fixture
def ledger() -> RecordingLedgerBackend:
    """In-memory ledger with one enrolled user per organization."""
    return RecordingLedgerBackend(identities={"org1": ["appUser"], "org2": ["appUser"]})


@pytest_asyncio.fixture(scope="function")
async def client(ledger, organizations) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client."""

    def override_get_ledger():
        return ledger

    def override_get_organizations():
        return organizations

    app.dependency_overrides[get_ledger] = override_get_ledger
    app.dependency_overrides[get_organizations] = override_get_organizations

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def identity() -> dict[str, str]:
    """Caller identity fields."""
    return {"orgName": "org1", "userName": "appUser"}


@pytest.fixture
def sample_asset_data(identity) -> dict[str, Any]:
    """Body for POST /asset."""
    return {
        **identity,
        "assetID": "asset7",
        "color": "blue",
        "size": "5",
        "owner": "Tomoko",
        "appraisedValue": "300",
    }
