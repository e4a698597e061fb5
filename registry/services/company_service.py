"""Company Service: orchestrates the Store, the SSN validator and SSN redaction.

Invariants:
    - Every view leaving this service has passed through redaction for its caller
    - update_company checks path/body id consistency before touching the Store
    - update_company rejects colliding owner ids before touching the Store
    - RegistryError from the Store or the validator propagates unchanged
    - Any other exception leaves as ServiceError with the original attached as cause

Design Decisions:
    - CallerContext is an explicit argument on every call: views are redacted
      for it, writes are logged with its subject. The service holds no
      per-request state and can be shared
    - Entity -> view mapping done by the schemas' from_entity(), no mapper library
"""

import logging
from collections.abc import Sequence
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from registry.core.domain_types import CompanyId, OwnerId
from registry.core.errors import BadRequestError, RegistryError, ServiceError
from registry.core.reconcile_owners import check_unique_owner_ids
from registry.core.redaction import redact_companies, redact_company, redact_owner
from registry.core.repository_protocols import (
    CallerContext, CompanyStore, SsnValidator,
)
from registry.schemas.company import (
    CompanyPayload, CompanyView, OwnerPayload, OwnerView,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _service_boundary(operation: str, **fields) -> AsyncGenerator[None, None]:
    """Let faults through, wrap anything unexpected as ServiceError."""
    try:
        yield
    except RegistryError as e:
        logger.warning(
            f"{e.kind.value} while {operation}: {e.message}",
            extra={"error_code": e.code, **fields},
        )
        raise
    except Exception as e:
        logger.error(
            f"Unexpected error while {operation}: {e}",
            exc_info=True, extra=fields,
        )
        raise ServiceError(
            f"An unexpected error occurred while {operation}.", cause=e,
        ) from e


class CompanyService:
    """Company aggregate use cases."""

    def __init__(self, store: CompanyStore, validator: SsnValidator):
        self._store = store
        self._validator = validator

    async def get_companies(self, caller: CallerContext) -> list[CompanyView]:
        async with _service_boundary("fetching companies"):
            companies = await self._store.list_companies()
            views = [CompanyView.from_entity(c) for c in companies]
            return redact_companies(views, caller)

    async def get_company(
        self, company_id: CompanyId, caller: CallerContext,
    ) -> CompanyView:
        async with _service_boundary("fetching the company", company_id=company_id):
            company = await self._store.get_company(company_id)
            return redact_company(CompanyView.from_entity(company), caller)

    async def create_company(
        self, payload: CompanyPayload, caller: CallerContext,
    ) -> CompanyView:
        async with _service_boundary("creating the company"):
            company = await self._store.create_company(payload)
            logger.info(
                f"New company created: {company.name}",
                extra={"company_id": company.id},
            )
            return redact_company(CompanyView.from_entity(company), caller)

    async def update_company(
        self, company_id: CompanyId, payload: CompanyPayload, caller: CallerContext,
    ) -> None:
        async with _service_boundary("updating the company", company_id=company_id):
            if company_id != payload.id:
                raise BadRequestError(
                    f"Company ID mismatch: path {company_id} != body {payload.id}.",
                )
            check_unique_owner_ids(payload.owners or [])
            await self._store.update_company(payload)
            logger.info(
                "Company updated",
                extra={"company_id": company_id, "caller": caller.subject},
            )

    async def add_owners(
        self, company_id: CompanyId, owners: Sequence[OwnerPayload],
        caller: CallerContext,
    ) -> None:
        async with _service_boundary("adding owners", company_id=company_id):
            await self._store.add_owners(company_id, owners)
            logger.info(
                f"Added {len(owners)} owner(s)",
                extra={"company_id": company_id, "caller": caller.subject},
            )

    async def add_owner(
        self, company_id: CompanyId, owner: OwnerPayload, caller: CallerContext,
    ) -> None:
        async with _service_boundary("adding an owner", company_id=company_id):
            await self._store.add_owner(company_id, owner)
            logger.info(
                "Added owner",
                extra={"company_id": company_id, "caller": caller.subject},
            )

    async def get_owner(
        self, company_id: CompanyId, owner_id: OwnerId, caller: CallerContext,
    ) -> OwnerView:
        async with _service_boundary(
            "fetching the owner", company_id=company_id, owner_id=owner_id,
        ):
            owner = await self._store.get_owner(company_id, owner_id)
            return redact_owner(OwnerView.from_entity(owner), caller)

    async def check_social_security_number(
        self, ssn: str, caller: CallerContext,
    ) -> bool:
        # The SSN itself is never logged
        async with _service_boundary("validating the Social Security Number"):
            is_valid = await self._validator.validate(ssn)
            logger.info("SSN check completed", extra={"caller": caller.subject})
            return is_valid
