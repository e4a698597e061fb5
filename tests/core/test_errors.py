"""Fault Taxonomy: kinds, statuses and the wire envelope.

Tests:
    - Each fault class maps to its kind and status
    - to_response() carries kind, message and correlation id, never the cause
    - Validation details surface only when present
"""

import pytest

from registry.core.errors import (
    FAULT_STATUS, FaultKind, RegistryError,
    BadRequestError, UnauthorizedError, ResourceNotFoundError, ConflictError,
    InputValidationError, ExternalServiceError, DataAccessError, ServiceError,
)


@pytest.mark.parametrize("fault, kind, status", [
    (BadRequestError("bad"), FaultKind.BAD_REQUEST, 400),
    (UnauthorizedError(), FaultKind.UNAUTHORIZED, 401),
    (ResourceNotFoundError("Company", 5), FaultKind.NOT_FOUND, 404),
    (ConflictError("race"), FaultKind.CONFLICT, 409),
    (InputValidationError("invalid"), FaultKind.VALIDATION, 422),
    (ExternalServiceError("ssn-validation", "down"), FaultKind.EXTERNAL_SERVICE, 502),
    (DataAccessError("boom", "commit"), FaultKind.DATA_ACCESS, 500),
    (ServiceError("oops"), FaultKind.SERVICE, 500),
])
def test_fault_maps_to_kind_and_status(fault, kind, status):
    assert isinstance(fault, RegistryError)
    assert fault.kind is kind
    assert fault.http_status == status


def test_every_kind_has_a_status():
    assert set(FAULT_STATUS) == set(FaultKind)


def test_not_found_message_names_resource():
    fault = ResourceNotFoundError("Company", 42)
    assert fault.message == "Company with ID 42 not found."
    assert fault.resource_id == 42


def test_to_response_carries_kind_message_and_correlation_id():
    body = ConflictError("Company was updated by another user.").to_response("abc123")
    error = body["error"]
    assert error["kind"] == "Conflict"
    assert error["status"] == 409
    assert error["message"] == "Company was updated by another user."
    assert error["correlationId"] == "abc123"


def test_to_response_never_includes_cause():
    cause = RuntimeError("password=hunter2 at db.internal:5432")
    fault = DataAccessError("Connection or operational error", "execute", cause=cause)
    assert fault.cause is cause
    assert "hunter2" not in str(fault.to_response("x"))
    assert "RuntimeError" not in str(fault.to_response("x"))


def test_validation_details_only_when_present():
    plain = InputValidationError("invalid").to_response()
    detailed = InputValidationError(
        "invalid", details=[{"field": "body.name", "message": "required", "type": "missing"}],
    ).to_response()
    assert "details" not in plain["error"]
    assert detailed["error"]["details"][0]["field"] == "body.name"


def test_external_service_message_names_service():
    fault = ExternalServiceError("ssn-validation", "timeout")
    assert "ssn-validation" in fault.message
    assert fault.service_name == "ssn-validation"
