"""
Organization to membership service provider (MSP) mapping.
Built once from settings and shared read-only by every request.
"""

from collections.abc import Mapping
from functools import lru_cache
from types import MappingProxyType

from app.config import get_settings
from app.core.exceptions import CredentialNotFoundException


class OrganizationRegistry:
    """Immutable lookup of organization name to MSP id."""

    def __init__(self, mapping: Mapping[str, str]):
        self._mapping = MappingProxyType(dict(mapping))

    def resolve_msp(self, org_name: str) -> str:
        """
        Get the MSP id for an organization.

        Raises:
            CredentialNotFoundException: If the organization is not mapped
        """
        msp_id = self._mapping.get(org_name)
        if not msp_id:
            raise CredentialNotFoundException(
                f"No MSP found for organization {org_name}",
                details={"orgName": org_name},
            )
        return msp_id

    @property
    def names(self) -> list[str]:
        return sorted(self._mapping)

    def as_mapping(self) -> Mapping[str, str]:
        return self._mapping

    def __contains__(self, org_name: object) -> bool:
        return org_name in self._mapping

    def __len__(self) -> int:
        return len(self._mapping)


@lru_cache
def get_organizations() -> OrganizationRegistry:
    """Dependency function returning the configured registry."""
    return OrganizationRegistry(get_settings().ORG_MSP_MAP)
