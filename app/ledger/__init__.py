"""
Ledger client layer for the Fabric Asset Gateway.
Supports multiple backends: Hyperledger Fabric and an in-process emulation.
"""

from app.ledger.base import LedgerBackend, LedgerContract, LedgerIdentity
from app.ledger.fabric import FabricLedgerBackend, load_connection_profile
from app.ledger.memory import MemoryLedgerBackend
from app.ledger.factory import get_ledger_backend, get_ledger

__all__ = [
    "LedgerBackend",
    "LedgerContract",
    "LedgerIdentity",
    "FabricLedgerBackend",
    "MemoryLedgerBackend",
    "load_connection_profile",
    "get_ledger_backend",
    "get_ledger",
]
