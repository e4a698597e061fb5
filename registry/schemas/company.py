"""Company Schemas: inbound payloads and outbound views for the Company aggregate.

Invariants:
    - CompanyPayload.name and OwnerPayload.name are stripped and non-empty
    - OwnerPayload.social_security_number is required on input
    - OwnerView.social_security_number is nullable (redacted views carry None)
    - id == 0 on a payload means "not persisted yet"

Design Decisions:
    - One base model with a camelCase alias generator: matches the JSON shape
      existing clients send (socialSecurityNumber, companyId)
    - from_entity() builds views from anything with the right attributes, so the
      schemas never import ORM models
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from registry.core.domain_types import UNSET_ID

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class CamelModel(BaseModel):
    """Base for all wire models: camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _strip_required(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("must not be empty or whitespace")
    return v


# --- Inbound -----------------------------------------------------------------

class OwnerPayload(CamelModel):
    """Owner as submitted by a client."""
    id: int = Field(UNSET_ID, ge=0)
    name: str = Field(min_length=1, max_length=200)
    social_security_number: str = Field(min_length=1, max_length=32)

    @field_validator("name", "social_security_number")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return _strip_required(v)


class CompanyPayload(CamelModel):
    """Company as submitted by a client (create and full-overwrite update)."""
    id: int = Field(UNSET_ID, ge=0)
    name: str = Field(min_length=1, max_length=200)
    country: str | None = Field(None, max_length=100)
    email: str | None = Field(None, max_length=254, pattern=EMAIL_PATTERN)
    owners: list[OwnerPayload] | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return _strip_required(v)


# --- Outbound ----------------------------------------------------------------

class OwnerView(CamelModel):
    """Owner as returned to a caller. SSN is None when redacted."""
    id: int
    name: str
    social_security_number: str | None = None

    @classmethod
    def from_entity(cls, owner) -> "OwnerView":
        return cls(
            id=owner.id,
            name=owner.name,
            social_security_number=owner.social_security_number,
        )


class CompanyView(CamelModel):
    """Company as returned to a caller, owners included."""
    id: int
    name: str
    country: str | None = None
    email: str | None = None
    owners: list[OwnerView] = Field(default_factory=list)

    @classmethod
    def from_entity(cls, company) -> "CompanyView":
        return cls(
            id=company.id,
            name=company.name,
            country=company.country,
            email=company.email,
            owners=[OwnerView.from_entity(o) for o in company.owners or []],
        )


class SsnCheckResponse(CamelModel):
    is_valid: bool
