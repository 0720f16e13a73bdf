"""Tests for domain exceptions (error_code, message, details)."""

from topology.domain.exceptions import (
    AuthorizationException,
    ChainCheckFailedException,
    ContainmentChainBrokenException,
    MalformedEntityException,
    ResourceNotFoundException,
    SqlNotConfiguredException,
    StoreUnavailableException,
    TopologyException,
    TypeMismatchException,
    ValidationException,
)


def test_topology_exception_default_error_code() -> None:
    """Base TopologyException uses class name as error_code when not provided."""
    exc = TopologyException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "TopologyException"
    assert exc.details == {}


def test_topology_exception_to_dict() -> None:
    exc = TopologyException("Oops", error_code="CUSTOM", details={"key": "value"})
    assert exc.to_dict() == {
        "error": "CUSTOM",
        "message": "Oops",
        "details": {"key": "value"},
    }


def test_validation_exception_field_in_details() -> None:
    exc = ValidationException("Invalid chain", field="chain")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "chain"}


def test_authorization_exception_defaults() -> None:
    assert AuthorizationException().message == "Permission denied"
    exc = AuthorizationException(resource="asset:a1", action="delete")
    assert exc.error_code == "PERMISSION_DENIED"
    assert exc.message == "Permission denied: delete on asset:a1"
    assert exc.details["resource"] == "asset:a1"
    assert exc.details["action"] == "delete"


def test_resource_not_found_exception() -> None:
    exc = ResourceNotFoundException("asset", "a1")
    assert exc.error_code == "RESOURCE_NOT_FOUND"
    assert "a1" in exc.message
    assert exc.details == {"resource_type": "asset", "resource_id": "a1"}


def test_broken_chain_names_both_ends() -> None:
    """The message names the pair whose Contains edge is missing."""
    exc = ContainmentChainBrokenException("t1", "b1")
    assert exc.error_code == "BROKEN_CHAIN"
    assert exc.message == "There is no relation between t1 and b1"
    assert exc.details == {"from_id": "t1", "to_id": "b1"}


def test_broken_chain_and_not_found_have_distinct_codes() -> None:
    broken = ContainmentChainBrokenException("t1", "b1")
    missing = ResourceNotFoundException("asset", "b1")
    assert broken.error_code != missing.error_code


def test_chain_check_failed_carries_reason() -> None:
    exc = ChainCheckFailedException("t1", "b1", "timeout")
    assert exc.error_code == "CHAIN_CHECK_FAILED"
    assert exc.details == {"from_id": "t1", "to_id": "b1", "reason": "timeout"}


def test_type_mismatch_exception() -> None:
    exc = TypeMismatchException("Building", "Room")
    assert exc.error_code == "TYPE_MISMATCH"
    assert exc.details == {"expected_type": "Building", "actual_type": "Room"}


def test_malformed_entity_exception() -> None:
    assert MalformedEntityException().details == {}
    assert MalformedEntityException("Room").details == {"entity_type": "Room"}
    assert MalformedEntityException().error_code == "MALFORMED_ENTITY"


def test_store_unavailable_exception() -> None:
    exc = StoreUnavailableException("relation", "connection refused")
    assert exc.error_code == "STORE_UNAVAILABLE"
    assert exc.details == {"store": "relation", "reason": "connection refused"}


def test_sql_not_configured_exception() -> None:
    exc = SqlNotConfiguredException()
    assert exc.error_code == "SERVICE_UNAVAILABLE"
    assert "SQL" in exc.message
