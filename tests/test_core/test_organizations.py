"""
Tests for the organization registry and error types.
"""

import pytest

from app.core.exceptions import (
    CredentialNotFoundException,
    ErrorKind,
    RemoteRejectedException,
    RemoteUnavailableException,
    ValidationException,
)
from app.core.organizations import OrganizationRegistry


def test_resolve_msp():
    registry = OrganizationRegistry({"org1": "Org1MSP"})

    assert registry.resolve_msp("org1") == "Org1MSP"
    assert "org1" in registry
    assert len(registry) == 1


def test_resolve_unknown_organization():
    registry = OrganizationRegistry({"org1": "Org1MSP"})

    with pytest.raises(CredentialNotFoundException) as exc_info:
        registry.resolve_msp("org2")

    assert str(exc_info.value) == "No MSP found for organization org2"
    assert exc_info.value.to_dict()["details"] == {"orgName": "org2"}


def test_registry_is_read_only():
    source = {"org1": "Org1MSP"}
    registry = OrganizationRegistry(source)
    source["org2"] = "Org2MSP"

    assert "org2" not in registry
    with pytest.raises(TypeError):
        registry.as_mapping()["org3"] = "Org3MSP"


def test_names_are_sorted():
    registry = OrganizationRegistry({"org2": "Org2MSP", "org1": "Org1MSP"})

    assert registry.names == ["org1", "org2"]


@pytest.mark.parametrize(
    "exc,kind,status",
    [
        (ValidationException(), ErrorKind.VALIDATION, 400),
        (CredentialNotFoundException("x"), ErrorKind.CREDENTIAL_NOT_FOUND, 500),
        (RemoteUnavailableException("x"), ErrorKind.REMOTE_UNAVAILABLE, 500),
        (RemoteRejectedException("x"), ErrorKind.REMOTE_REJECTED, 500),
    ],
)
def test_error_kinds(exc, kind, status):
    assert exc.kind is kind
    assert exc.status_code == status
    assert exc.to_dict()["error"] == kind.value
