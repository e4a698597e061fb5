"""Company Schemas: boundary validation and camelCase wire names.

Invariants:
    - name is required, stripped, non-empty
    - email must look like an address when present
    - socialSecurityNumber is required on input, nullable on output
    - id defaults to 0 (unset)
"""

import pytest
from pydantic import ValidationError

from registry.schemas.company import (
    CompanyPayload, CompanyView, OwnerPayload, OwnerView, SsnCheckResponse,
)


# --- CompanyPayload ------------------------------------------------------------

def test_company_payload_accepts_camel_case_body():
    payload = CompanyPayload.model_validate({
        "id": 1,
        "name": "Acme",
        "country": "DE",
        "email": "info@acme.test",
        "owners": [{"id": 10, "name": "Alice", "socialSecurityNumber": "111-11-1111"}],
    })
    assert payload.owners[0].social_security_number == "111-11-1111"


def test_company_payload_id_defaults_to_unset():
    assert CompanyPayload(name="Acme").id == 0


def test_company_payload_owners_default_to_none():
    assert CompanyPayload(name="Acme").owners is None


def test_company_name_is_stripped():
    assert CompanyPayload(name="  Acme  ").name == "Acme"


def test_company_name_whitespace_rejected():
    with pytest.raises(ValidationError):
        CompanyPayload(name="   ")


def test_company_name_required():
    with pytest.raises(ValidationError):
        CompanyPayload.model_validate({"country": "DE"})


def test_invalid_email_rejected():
    with pytest.raises(ValidationError):
        CompanyPayload(name="Acme", email="not-an-email")


def test_email_optional():
    assert CompanyPayload(name="Acme", email=None).email is None


def test_negative_id_rejected():
    with pytest.raises(ValidationError):
        CompanyPayload(id=-1, name="Acme")


# --- OwnerPayload --------------------------------------------------------------

def test_owner_ssn_required():
    with pytest.raises(ValidationError):
        OwnerPayload.model_validate({"name": "Alice"})


def test_owner_blank_ssn_rejected():
    with pytest.raises(ValidationError):
        OwnerPayload(name="Alice", social_security_number="  ")


# --- Views ---------------------------------------------------------------------

def test_owner_view_serializes_camel_case_with_null_ssn():
    dumped = OwnerView(id=1, name="Alice").model_dump(by_alias=True)
    assert dumped == {"id": 1, "name": "Alice", "socialSecurityNumber": None}


def test_company_view_from_entity_reads_attributes():
    class _Owner:
        id, name, social_security_number = 10, "Alice", "111-11-1111"

    class _Company:
        id, name, country, email = 1, "Acme", None, None
        owners = [_Owner()]

    view = CompanyView.from_entity(_Company())
    assert view.owners[0].social_security_number == "111-11-1111"


def test_ssn_check_response_alias():
    assert SsnCheckResponse(is_valid=True).model_dump(by_alias=True) == {"isValid": True}
