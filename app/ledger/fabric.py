"""
Hyperledger Fabric ledger backend.

Uses the Fabric Python SDK (fabric-sdk-py, imported as ``hfc``) to load a
per-organization connection profile, look up the caller in a file-system
wallet, and open a gateway session to the configured channel and chaincode.
"""

import json
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

import aiofiles

from app.config import Settings, get_settings
from app.core.exceptions import (
    CredentialNotFoundException,
    GatewayAPIException,
    RemoteRejectedException,
    RemoteUnavailableException,
)
from app.ledger.base import LedgerBackend, LedgerContract, LedgerIdentity

logger = logging.getLogger(__name__)


async def load_connection_profile(path: Path) -> dict[str, Any]:
    """
    Read and parse a connection profile JSON file.

    Raises:
        RemoteUnavailableException: If the file is missing or not valid JSON
    """
    try:
        async with aiofiles.open(path, "r", encoding="utf-8") as f:
            content = await f.read()
    except OSError as e:
        raise RemoteUnavailableException(
            f"Connection profile not readable: {path}",
            details={"path": str(path), "reason": str(e)},
        ) from e

    try:
        profile = json.loads(content)
    except json.JSONDecodeError as e:
        raise RemoteUnavailableException(
            f"Connection profile is not valid JSON: {path}",
            details={"path": str(path), "reason": str(e)},
        ) from e

    if not isinstance(profile, dict):
        raise RemoteUnavailableException(f"Connection profile is not a JSON object: {path}")
    return profile


def _as_bytes(payload: Any) -> bytes:
    if payload is None:
        return b""
    if isinstance(payload, bytes):
        return payload
    if isinstance(payload, str):
        return payload.encode("utf-8")
    return json.dumps(payload).encode("utf-8")


class FabricContract(LedgerContract):
    """Wraps an ``hfc`` gateway contract bound to one requestor."""

    def __init__(self, contract: Any, requestor: Any, identity: LedgerIdentity):
        self._contract = contract
        self._requestor = requestor
        self.identity = identity

    async def submit(self, transaction: str, *args: str) -> bytes:
        try:
            result = await self._contract.submit_transaction(transaction, list(args), self._requestor)
        except GatewayAPIException:
            raise
        except Exception as e:
            raise RemoteRejectedException(str(e), details={"transaction": transaction}) from e
        return _as_bytes(result)

    async def evaluate(self, transaction: str, *args: str) -> bytes:
        try:
            result = await self._contract.evaluate_transaction(transaction, list(args), self._requestor)
        except GatewayAPIException:
            raise
        except Exception as e:
            raise RemoteRejectedException(str(e), details={"transaction": transaction}) from e
        return _as_bytes(result)


class FabricLedgerBackend(LedgerBackend):
    """
    Fabric network backend.

    A gateway is opened for every request and disconnected afterwards;
    nothing is cached between requests.
    """

    name = "fabric"

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()

    def _open_wallet(self, org_name: str) -> Any:
        try:
            from hfc.fabric_network import wallet
        except ImportError as e:
            raise RemoteUnavailableException(
                "Fabric SDK is not installed (pip install fabric-sdk-py)"
            ) from e

        wallet_path = self.settings.wallet_path(org_name)
        return wallet.FileSystenWallet(str(wallet_path))

    @asynccontextmanager
    async def connect(self, identity: LedgerIdentity) -> AsyncIterator[LedgerContract]:
        fs_wallet = self._open_wallet(identity.org_name)
        if not fs_wallet.exists(identity.user_name):
            raise CredentialNotFoundException(
                f"Identity not found for user {identity.user_name} in {identity.org_name}. "
                "Register the user before proceeding.",
                details={"orgName": identity.org_name, "userName": identity.user_name},
            )

        profile_path = self.settings.connection_profile_path(identity.org_name)
        profile = await load_connection_profile(profile_path)

        client_org = profile.get("client", {}).get("organization", identity.org_name)
        requestor = fs_wallet.create_user(identity.user_name, client_org, identity.msp_id)

        from hfc.fabric_network.gateway import Gateway

        gateway = Gateway()
        try:
            # hfc only accepts the profile by path and parses the file again itself
            await gateway.connect(
                str(profile_path),
                {
                    "wallet": fs_wallet,
                    "identity": identity.user_name,
                    "discovery": {
                        "enabled": True,
                        "asLocalhost": self.settings.DISCOVERY_AS_LOCALHOST,
                    },
                },
            )
            network = await gateway.get_network(self.settings.CHANNEL_NAME, requestor)
            contract = network.get_contract(self.settings.CHAINCODE_NAME)
        except Exception as e:
            gateway.disconnect()
            raise RemoteUnavailableException(
                str(e),
                details={
                    "channel": self.settings.CHANNEL_NAME,
                    "chaincode": self.settings.CHAINCODE_NAME,
                },
            ) from e

        logger.debug(
            f"Gateway connected for {identity.user_name}@{identity.org_name} "
            f"({identity.msp_id}) on {self.settings.CHANNEL_NAME}/{self.settings.CHAINCODE_NAME}"
        )
        try:
            yield FabricContract(contract, requestor, identity)
        finally:
            gateway.disconnect()
