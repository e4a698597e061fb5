"""Boundary Protocols: contracts between the service core and its collaborators.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - Store, Validator and Caller Context are reached only through these Protocols
    - Every Store method either returns a value or raises a RegistryError

Design Decisions:
    - Protocol over ABC: structural subtyping, pydantic payloads and ORM rows both
      satisfy the *Like contracts without inheriting anything
    - CallerContext is passed explicitly into every service call; there is no
      ambient "current user"
"""

from collections.abc import Sequence
from typing import Protocol

from registry.core.domain_types import CompanyId, OwnerId


class OwnerLike(Protocol):
    """Structural contract for an Owner, persisted or submitted."""
    id: int
    name: str
    social_security_number: str | None


class CompanyLike(Protocol):
    """Structural contract for a persisted Company with its owners loaded."""
    id: int
    name: str
    country: str | None
    email: str | None
    owners: Sequence[OwnerLike]


class CompanyDraft(Protocol):
    """Structural contract for a submitted Company (owners may be unset)."""
    id: int
    name: str
    country: str | None
    email: str | None
    owners: Sequence[OwnerLike] | None


class CompanyStore(Protocol):
    """Contract for Company aggregate persistence: implemented by the shell."""
    async def list_companies(self) -> list[CompanyLike]: ...
    async def get_company(self, company_id: CompanyId) -> CompanyLike: ...
    async def create_company(self, draft: CompanyDraft) -> CompanyLike: ...
    async def update_company(self, draft: CompanyDraft) -> None: ...
    async def add_owners(
        self, company_id: CompanyId, owners: Sequence[OwnerLike],
    ) -> None: ...
    async def add_owner(self, company_id: CompanyId, owner: OwnerLike) -> None: ...
    async def get_owner(
        self, company_id: CompanyId, owner_id: OwnerId,
    ) -> OwnerLike: ...


class SsnValidator(Protocol):
    """Contract for the downstream SSN check."""
    async def validate(self, ssn: str) -> bool: ...


class CallerContext(Protocol):
    """Per-request view of the authenticated caller."""
    subject: str

    def has_elevated_role(self) -> bool: ...
