"""
Ledger backend factory.
Provides configuration-driven backend selection.
"""

from functools import lru_cache

from app.config import get_settings
from app.ledger.base import LedgerBackend
from app.ledger.fabric import FabricLedgerBackend
from app.ledger.memory import MemoryLedgerBackend


@lru_cache
def get_ledger_backend() -> LedgerBackend:
    """
    Get the configured ledger backend.

    Uses LRU cache to ensure only one instance is created.
    Backend selection is based on LEDGER_BACKEND setting.

    Raises:
        ValueError: If unknown ledger backend is configured
    """
    settings = get_settings()
    backend = settings.LEDGER_BACKEND.lower()

    if backend == "fabric":
        return FabricLedgerBackend(settings)
    elif backend == "memory":
        return MemoryLedgerBackend()
    else:
        raise ValueError(f"Unknown ledger backend: {backend}")


def get_ledger() -> LedgerBackend:
    """
    Dependency function for FastAPI.

    Usage:
        @router.get("/asset/{asset_id}")
        async def read(ledger: LedgerBackend = Depends(get_ledger)):
            ...
    """
    return get_ledger_backend()
