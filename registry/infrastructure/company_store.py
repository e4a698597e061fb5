"""Company Store: SQLAlchemy persistence for the Company aggregate.

Invariants:
    - Every public method either returns a value or raises a RegistryError
    - Reads always include the owner collection (selectin)
    - update_company applies removal, then upsert, then commits once; the company
      row version is bumped and checked on every update
    - Owner ids on create/add payloads are ignored: the database assigns them
    - Only _find_* helpers may return None for absence

Design Decisions:
    - One store per AsyncSession (per request); the store commits, the caller never does
    - Reads use populate_existing so a long-lived session never serves a stale
      owner collection from its identity map
    - Foreign owner ids are adopted: the row moves to the target company and the
      company it left gets its version bumped in the same transaction
"""

import logging
from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from registry.core.domain_types import CompanyId, OwnerId, is_unset
from registry.core.errors import ResourceNotFoundError
from registry.core.reconcile_owners import plan_owner_reconciliation
from registry.core.repository_protocols import CompanyDraft, OwnerLike
from registry.infrastructure.database import translate_db_errors
from registry.models.company import Company
from registry.models.owner import Owner

logger = logging.getLogger(__name__)


def _new_owner(source: OwnerLike) -> Owner:
    return Owner(name=source.name, social_security_number=source.social_security_number)


class SqlCompanyStore:
    """CompanyStore backed by an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db

    # ─── Query helpers ──────────────────────────────────────────

    async def _find_company(self, company_id: int) -> Company | None:
        result = await self._db.execute(
            select(Company)
            .where(Company.id == company_id)
            .execution_options(populate_existing=True),
        )
        return result.scalar_one_or_none()

    async def _require_company(self, company_id: int) -> Company:
        company = await self._find_company(company_id)
        if company is None:
            raise ResourceNotFoundError("Company", company_id)
        return company

    async def _find_owner(self, owner_id: int) -> Owner | None:
        return await self._db.get(Owner, owner_id, populate_existing=True)

    # ─── Reads ──────────────────────────────────────────────────

    async def list_companies(self) -> list[Company]:
        async with translate_db_errors(self._db, "list_companies"):
            result = await self._db.execute(
                select(Company)
                .order_by(Company.id)
                .execution_options(populate_existing=True),
            )
            return list(result.scalars().all())

    async def get_company(self, company_id: CompanyId) -> Company:
        async with translate_db_errors(self._db, "get_company"):
            return await self._require_company(company_id)

    async def get_owner(self, company_id: CompanyId, owner_id: OwnerId) -> Owner:
        async with translate_db_errors(self._db, "get_owner"):
            result = await self._db.execute(
                select(Owner).where(
                    Owner.id == owner_id, Owner.company_id == company_id,
                ),
            )
            owner = result.scalar_one_or_none()
            if owner is None:
                raise ResourceNotFoundError(
                    "Owner", owner_id,
                    f"Owner with ID {owner_id} not found in company {company_id}.",
                )
            return owner

    # ─── Writes ─────────────────────────────────────────────────

    async def create_company(self, draft: CompanyDraft) -> Company:
        async with translate_db_errors(self._db, "create_company"):
            company = Company(
                name=draft.name,
                country=draft.country,
                email=draft.email,
                version=1,
                owners=[_new_owner(o) for o in draft.owners or []],
            )
            self._db.add(company)
            await self._db.commit()
            logger.info(
                f"Company created with {len(company.owners)} owner(s)",
                extra={"company_id": company.id},
            )
            return company

    async def update_company(self, draft: CompanyDraft) -> None:
        """Reconcile the stored aggregate with a full-overwrite payload."""
        async with translate_db_errors(self._db, "update_company"):
            existing = await self._require_company(draft.id)

            existing.name = draft.name
            existing.country = draft.country
            existing.email = draft.email
            existing.version = existing.version + 1

            await self._reconcile_owners(existing, draft.owners)
            await self._db.commit()
            logger.info(
                "Company updated", extra={"company_id": existing.id},
            )

    async def _reconcile_owners(
        self, company: Company, incoming: Sequence[OwnerLike] | None,
    ) -> None:
        plan = plan_owner_reconciliation((o.id for o in company.owners), incoming)
        by_id = {o.id: o for o in company.owners}

        for owner_id in plan.remove_ids:
            company.owners.remove(by_id[owner_id])

        for source in plan.updates:
            target = by_id[source.id]
            target.name = source.name
            target.social_security_number = source.social_security_number

        bumped: set[int] = set()
        for source in plan.inserts:
            adopted = None if is_unset(source.id) else await self._find_owner(source.id)
            if adopted is None:
                company.owners.append(_new_owner(source))
                continue
            logger.info(
                f"Adopting owner from company {adopted.company_id}",
                extra={"company_id": company.id, "owner_id": adopted.id},
            )
            if adopted.company_id != company.id and adopted.company_id not in bumped:
                await self._bump_previous_parent(adopted.company_id)
                bumped.add(adopted.company_id)
            adopted.name = source.name
            adopted.social_security_number = source.social_security_number
            company.owners.append(adopted)

        logger.debug(
            f"Owner reconciliation: removed={len(plan.remove_ids)} "
            f"updated={len(plan.updates)} inserted={len(plan.inserts)}",
            extra={"company_id": company.id},
        )

    async def _bump_previous_parent(self, company_id: int) -> None:
        # Losing an owner changes that company's aggregate too; a writer still
        # holding its old version must fail with Conflict
        previous = await self._db.get(Company, company_id)
        if previous is not None:
            previous.version = previous.version + 1

    async def add_owners(
        self, company_id: CompanyId, owners: Sequence[OwnerLike],
    ) -> None:
        async with translate_db_errors(self._db, "add_owners"):
            company = await self._require_company(company_id)
            company.owners.extend(_new_owner(o) for o in owners)
            await self._db.commit()

    async def add_owner(self, company_id: CompanyId, owner: OwnerLike) -> None:
        await self.add_owners(company_id, [owner])
