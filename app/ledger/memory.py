"""
In-process ledger backend.

Emulates the asset-transfer chaincode against a dictionary world state so
the gateway can run without a Fabric network (development and tests).
"""

import copy
import json
import logging
from collections.abc import AsyncIterator, Iterable, Mapping
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from app.core.exceptions import CredentialNotFoundException, RemoteRejectedException
from app.ledger.base import LedgerBackend, LedgerContract, LedgerIdentity

logger = logging.getLogger(__name__)


class MemoryWorldState:
    """Asset world state with per-key modification history."""

    def __init__(self) -> None:
        self.assets: dict[str, dict[str, Any]] = {}
        self.history: dict[str, list[dict[str, Any]]] = {}

    def _record(self, asset_id: str, record: dict[str, Any] | None, is_delete: bool) -> None:
        self.history.setdefault(asset_id, []).append(
            {
                "txId": uuid4().hex,
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "isDelete": is_delete,
                "record": record,
            }
        )

    def put(self, asset: dict[str, Any]) -> None:
        self.assets[asset["ID"]] = asset
        self._record(asset["ID"], dict(asset), is_delete=False)

    def delete(self, asset_id: str) -> None:
        del self.assets[asset_id]
        self._record(asset_id, None, is_delete=True)


class MemoryContract(LedgerContract):
    """Asset-transfer chaincode executed against a MemoryWorldState."""

    def __init__(self, state: MemoryWorldState, identity: LedgerIdentity):
        self.state = state
        self.identity = identity

    async def submit(self, transaction: str, *args: str) -> bytes:
        return self._invoke(transaction, args, read_only=False)

    async def evaluate(self, transaction: str, *args: str) -> bytes:
        return self._invoke(transaction, args, read_only=True)

    def _invoke(self, transaction: str, args: tuple[str, ...], read_only: bool) -> bytes:
        handler = self._transactions().get(transaction)
        if handler is None:
            raise RemoteRejectedException(f"Function {transaction} not found in contract")

        writes, func, arity = handler
        if len(args) != arity:
            raise RemoteRejectedException(
                f"Incorrect number of params. Expected {arity}, received {len(args)}"
            )
        if read_only and writes:
            # Evaluated writes run against a scratch copy and are never committed
            logger.debug(f"Simulating {transaction} without commit")
            scratch = MemoryContract(copy.deepcopy(self.state), self.identity)
            return scratch._invoke(transaction, args, read_only=False)

        result = func(*args)
        if result is None:
            return b""
        return json.dumps(result).encode("utf-8")

    def _transactions(self) -> dict[str, tuple[bool, Any, int]]:
        return {
            "CreateAsset": (True, self._create_asset, 5),
            "ReadAsset": (False, self._read_asset, 1),
            "UpdateAsset": (True, self._update_asset, 5),
            "DeleteAsset": (True, self._delete_asset, 1),
            "TransferAsset": (True, self._transfer_asset, 2),
            "AssetExists": (False, self._asset_exists, 1),
            "GetAllAssets": (False, self._get_all_assets, 0),
            "GetAssetHistory": (False, self._get_asset_history, 1),
        }

    def _require(self, asset_id: str) -> dict[str, Any]:
        asset = self.state.assets.get(asset_id)
        if asset is None:
            raise RemoteRejectedException(f"the asset {asset_id} does not exist")
        return asset

    def _create_asset(self, asset_id: str, color: str, size: str, owner: str, appraised_value: str) -> None:
        if asset_id in self.state.assets:
            raise RemoteRejectedException(f"the asset {asset_id} already exists")
        self.state.put(
            {
                "ID": asset_id,
                "Color": color,
                "Size": size,
                "Owner": owner,
                "AppraisedValue": appraised_value,
            }
        )

    def _read_asset(self, asset_id: str) -> dict[str, Any]:
        return dict(self._require(asset_id))

    def _update_asset(self, asset_id: str, color: str, size: str, owner: str, appraised_value: str) -> None:
        self._require(asset_id)
        self.state.put(
            {
                "ID": asset_id,
                "Color": color,
                "Size": size,
                "Owner": owner,
                "AppraisedValue": appraised_value,
            }
        )

    def _delete_asset(self, asset_id: str) -> None:
        self._require(asset_id)
        self.state.delete(asset_id)

    def _transfer_asset(self, asset_id: str, new_owner: str) -> str:
        asset = dict(self._require(asset_id))
        old_owner = asset["Owner"]
        asset["Owner"] = new_owner
        self.state.put(asset)
        return old_owner

    def _asset_exists(self, asset_id: str) -> bool:
        return asset_id in self.state.assets

    def _get_all_assets(self) -> list[dict[str, Any]]:
        return [dict(asset) for _, asset in sorted(self.state.assets.items())]

    def _get_asset_history(self, asset_id: str) -> list[dict[str, Any]]:
        return [dict(entry) for entry in self.state.history.get(asset_id, [])]


class MemoryLedgerBackend(LedgerBackend):
    """
    Ledger backend backed by process memory.

    Args:
        identities: Optional mapping of organization name to enrolled user
            names. When omitted every user is accepted.
    """

    name = "memory"

    def __init__(self, identities: Mapping[str, Iterable[str]] | None = None):
        self.state = MemoryWorldState()
        self.identities = (
            {org: frozenset(users) for org, users in identities.items()}
            if identities is not None
            else None
        )

    @asynccontextmanager
    async def connect(self, identity: LedgerIdentity) -> AsyncIterator[LedgerContract]:
        if self.identities is not None and identity.user_name not in self.identities.get(identity.org_name, ()):
            raise CredentialNotFoundException(
                f"Identity not found for user {identity.user_name} in {identity.org_name}. "
                "Register the user before proceeding.",
            )
        yield MemoryContract(self.state, identity)
