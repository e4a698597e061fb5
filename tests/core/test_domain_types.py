"""Domain Types: identity wrappers, the unset-id marker and roles."""

from registry.core.domain_types import CompanyId, OwnerId, Role, UNSET_ID, is_unset


def test_identity_types_wrap_int():
    assert CompanyId(5) == 5
    assert OwnerId(7) == 7


def test_unset_id():
    assert UNSET_ID == 0
    assert is_unset(0)
    assert is_unset(None)
    assert not is_unset(12)


def test_roles_serialize_to_claim_values():
    assert Role.ADMIN.value == "Admin"
    assert Role.USER.value == "User"
