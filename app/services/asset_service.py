"""
Asset service - maps asset operations onto chaincode transactions.
Each operation resolves the caller's identity and invokes exactly one
transaction on the ledger.
"""

import json
import logging
from typing import Any

from app.core.exceptions import (
    GatewayAPIException,
    RemoteRejectedException,
    RemoteUnavailableException,
)
from app.core.organizations import OrganizationRegistry
from app.ledger.base import LedgerBackend, LedgerIdentity
from app.schemas.asset import AssetCreate, AssetTransfer, AssetUpdate, IdentityRequest

logger = logging.getLogger(__name__)


class AssetService:
    """Service class for asset operations."""

    def __init__(self, ledger: LedgerBackend, organizations: OrganizationRegistry):
        self.ledger = ledger
        self.organizations = organizations

    def resolve_identity(self, caller: IdentityRequest) -> LedgerIdentity:
        """
        Resolve the MSP for the caller's organization.

        Raises:
            CredentialNotFoundException: If the organization has no MSP mapping
        """
        msp_id = self.organizations.resolve_msp(caller.org_name)
        return LedgerIdentity(
            org_name=caller.org_name,
            user_name=caller.user_name,
            msp_id=msp_id,
        )

    async def _submit(self, caller: IdentityRequest, transaction: str, *args: str) -> bytes:
        return await self._invoke(caller, transaction, args, submit=True)

    async def _evaluate(self, caller: IdentityRequest, transaction: str, *args: str) -> bytes:
        return await self._invoke(caller, transaction, args, submit=False)

    async def _invoke(
        self,
        caller: IdentityRequest,
        transaction: str,
        args: tuple[str, ...],
        submit: bool,
    ) -> bytes:
        identity = self.resolve_identity(caller)
        mode = "submit" if submit else "evaluate"
        logger.info(f"{mode} {transaction}{list(args)} as {identity.user_name}@{identity.org_name}")

        try:
            async with self.ledger.connect(identity) as contract:
                if submit:
                    return await contract.submit(transaction, *args)
                return await contract.evaluate(transaction, *args)
        except GatewayAPIException:
            raise
        except Exception as e:
            raise RemoteUnavailableException(str(e), details={"transaction": transaction}) from e

    @staticmethod
    def _decode(payload: bytes, transaction: str) -> Any:
        try:
            return json.loads(payload.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise RemoteRejectedException(
                f"{transaction} returned a malformed response: {e}",
                details={"transaction": transaction},
            ) from e

    # ===================
    # Write operations
    # ===================

    async def create_asset(self, data: AssetCreate) -> str:
        await self._submit(data, "CreateAsset", data.asset_id, *data.as_args())
        return f"Asset {data.asset_id} created successfully!"

    async def update_asset(self, asset_id: str, data: AssetUpdate) -> str:
        await self._submit(data, "UpdateAsset", asset_id, *data.as_args())
        return f"Asset {asset_id} updated successfully!"

    async def transfer_asset(self, asset_id: str, data: AssetTransfer) -> str:
        await self._submit(data, "TransferAsset", asset_id, data.new_owner)
        return f"Asset {asset_id} transferred to {data.new_owner} successfully!"

    async def delete_asset(self, asset_id: str, caller: IdentityRequest) -> str:
        await self._submit(caller, "DeleteAsset", asset_id)
        return f"Asset {asset_id} deleted successfully!"

    # ===================
    # Read operations
    # ===================

    async def read_asset(self, asset_id: str, caller: IdentityRequest) -> Any:
        """Current state of an asset, exactly as the chaincode returns it."""
        payload = await self._evaluate(caller, "ReadAsset", asset_id)
        return self._decode(payload, "ReadAsset")

    async def get_asset_history(self, asset_id: str, caller: IdentityRequest) -> Any:
        """
        Modification history of an asset.

        Entries are returned in the order the chaincode reports them.
        """
        payload = await self._evaluate(caller, "GetAssetHistory", asset_id)
        return self._decode(payload, "GetAssetHistory")
