"""
Configuration management for the Fabric Asset Gateway.
Uses pydantic-settings for environment-based configuration.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

# Base directory for relative wallet and connection profile paths
SERVICE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API Settings
    API_PREFIX: str = ""
    PROJECT_NAME: str = "Fabric Asset Gateway"
    DEBUG: bool = False

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 5000

    CORS_ORIGINS: list[str] = ["*"]

    # Ledger Backend Selection
    LEDGER_BACKEND: Literal["fabric", "memory"] = "fabric"

    # Organization -> MSP mapping (JSON object in the environment)
    ORG_MSP_MAP: dict[str, str] = {
        "org1": "Org1MSP",
        "org2": "Org2MSP",
    }

    # Fabric network
    CHANNEL_NAME: str = "mychannel"
    CHAINCODE_NAME: str = "basic"
    WALLET_ROOT: str = "./wallet"
    CONNECTION_PROFILE_ROOT: str = "../../../fabric-samples/test-network/organizations"
    CONNECTION_PROFILE_PATTERN: str = "peerOrganizations/{org}.example.com/connection-{org}.json"
    DISCOVERY_AS_LOCALHOST: bool = True

    # Logging
    LOG_LEVEL: str = "INFO"

    def connection_profile_path(self, org_name: str) -> Path:
        """Filesystem location of the connection profile for an organization."""
        relative = self.CONNECTION_PROFILE_PATTERN.format(org=org_name)
        return (SERVICE_DIR / self.CONNECTION_PROFILE_ROOT).resolve() / relative

    def wallet_path(self, org_name: str) -> Path:
        """Directory of the credential store for an organization."""
        return (SERVICE_DIR / self.WALLET_ROOT).resolve() / org_name


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.
    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
