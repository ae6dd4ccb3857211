"""
Abstract ledger backend interface.
Defines the contract for all ledger client implementations.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass


@dataclass(frozen=True)
class LedgerIdentity:
    """Caller identity for a single request."""

    org_name: str
    user_name: str
    msp_id: str


class LedgerContract(ABC):
    """
    Handle to a deployed chaincode contract, bound to one identity.

    Arguments are passed to the chaincode as strings; results are the raw
    payload returned by the peer.
    """

    @abstractmethod
    async def submit(self, transaction: str, *args: str) -> bytes:
        """
        Submit a state-changing transaction for ordering and commit.

        Raises:
            RemoteRejectedException: If the chaincode returns an error
            RemoteUnavailableException: If the network cannot be reached
        """
        pass

    @abstractmethod
    async def evaluate(self, transaction: str, *args: str) -> bytes:
        """
        Evaluate a read-only transaction on a peer.

        Raises:
            RemoteRejectedException: If the chaincode returns an error
            RemoteUnavailableException: If the network cannot be reached
        """
        pass


class LedgerBackend(ABC):
    """
    Abstract base class for ledger backends.

    A backend resolves a stored credential for an identity and opens a
    session to the configured channel and chaincode.
    """

    name: str = "abstract"

    @abstractmethod
    def connect(self, identity: LedgerIdentity) -> AbstractAsyncContextManager[LedgerContract]:
        """
        Open a session for the identity and yield its contract handle.

        The session is released when the context exits.

        Usage:
            async with backend.connect(identity) as contract:
                payload = await contract.evaluate("ReadAsset", asset_id)

        Raises:
            CredentialNotFoundException: If no credential is stored for the user
            RemoteUnavailableException: If the network cannot be reached
        """
        pass

    async def close(self) -> None:
        """Release backend-wide resources."""
        return None
