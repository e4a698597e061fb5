"""SSN Redaction: views without the elevated role never carry an SSN."""

from registry.core.redaction import redact_companies, redact_company, redact_owner
from registry.infrastructure.security import TokenCallerContext
from registry.schemas.company import CompanyView, OwnerView

ADMIN = TokenCallerContext("admin", frozenset({"Admin"}), "Admin")
USER = TokenCallerContext("jane", frozenset({"User"}), "Admin")


def _company():
    return CompanyView(
        id=1, name="Acme", owners=[
            OwnerView(id=10, name="Alice", social_security_number="111-11-1111"),
            OwnerView(id=11, name="Bob", social_security_number="222-22-2222"),
        ],
    )


def test_user_gets_null_ssn_on_every_owner():
    redacted = redact_company(_company(), USER)
    assert [o.social_security_number for o in redacted.owners] == [None, None]
    assert [o.name for o in redacted.owners] == ["Alice", "Bob"]


def test_admin_gets_stored_values():
    view = _company()
    assert redact_company(view, ADMIN) == view


def test_redaction_does_not_mutate_input():
    view = _company()
    redact_company(view, USER)
    assert view.owners[0].social_security_number == "111-11-1111"


def test_redact_owner():
    owner = OwnerView(id=10, name="Alice", social_security_number="111-11-1111")
    assert redact_owner(owner, USER).social_security_number is None
    assert redact_owner(owner, ADMIN).social_security_number == "111-11-1111"


def test_redact_companies_applies_to_all():
    views = redact_companies([_company(), _company()], USER)
    assert all(
        o.social_security_number is None for v in views for o in v.owners
    )


def test_company_without_owners():
    view = CompanyView(id=2, name="Empty")
    assert redact_company(view, USER).owners == []
