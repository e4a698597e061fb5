"""Companies: CRUD over the Company aggregate and the SSN check.

Invariants:
    - Every route requires a bearer token (CallerContext dependency)
    - Routes contain no business logic and never catch faults
    - Owner SSNs in responses are already redacted by the service

Design Decisions:
    - PUT is a full overwrite that returns 204; clients re-read for the new state
    - /check-ssn is declared before /{company_id} routes for readability only;
      the int converter keeps the paths apart
"""

import logging

from fastapi import APIRouter, Depends, Response, status

from registry.api.dependencies import get_caller_context, get_company_service
from registry.core.domain_types import CompanyId, OwnerId
from registry.core.repository_protocols import CallerContext
from registry.schemas.company import (
    CompanyPayload, CompanyView, OwnerPayload, OwnerView, SsnCheckResponse,
)
from registry.services.company_service import CompanyService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/companies", tags=["companies"])


@router.get("/check-ssn/{ssn}", response_model=SsnCheckResponse)
async def check_ssn(
    ssn: str,
    caller: CallerContext = Depends(get_caller_context),
    service: CompanyService = Depends(get_company_service),
):
    """Ask the downstream service whether an SSN is valid."""
    is_valid = await service.check_social_security_number(ssn, caller)
    return SsnCheckResponse(is_valid=is_valid)


@router.get("", response_model=list[CompanyView])
async def list_companies(
    caller: CallerContext = Depends(get_caller_context),
    service: CompanyService = Depends(get_company_service),
):
    return await service.get_companies(caller)


@router.get("/{company_id}", response_model=CompanyView)
async def get_company(
    company_id: int,
    caller: CallerContext = Depends(get_caller_context),
    service: CompanyService = Depends(get_company_service),
):
    return await service.get_company(CompanyId(company_id), caller)


@router.post(
    "", response_model=CompanyView, status_code=status.HTTP_201_CREATED,
)
async def create_company(
    body: CompanyPayload,
    response: Response,
    caller: CallerContext = Depends(get_caller_context),
    service: CompanyService = Depends(get_company_service),
):
    created = await service.create_company(body, caller)
    response.headers["Location"] = f"{router.prefix}/{created.id}"
    return created


@router.put("/{company_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_company(
    company_id: int,
    body: CompanyPayload,
    caller: CallerContext = Depends(get_caller_context),
    service: CompanyService = Depends(get_company_service),
):
    await service.update_company(CompanyId(company_id), body, caller)
    logger.info(
        "updateCompany request completed", extra={"company_id": company_id},
    )


@router.post("/{company_id}/owners", status_code=status.HTTP_204_NO_CONTENT)
async def add_owners(
    company_id: int,
    body: list[OwnerPayload],
    caller: CallerContext = Depends(get_caller_context),
    service: CompanyService = Depends(get_company_service),
):
    await service.add_owners(CompanyId(company_id), body, caller)


@router.post("/{company_id}/owner", status_code=status.HTTP_204_NO_CONTENT)
async def add_owner(
    company_id: int,
    body: OwnerPayload,
    caller: CallerContext = Depends(get_caller_context),
    service: CompanyService = Depends(get_company_service),
):
    await service.add_owner(CompanyId(company_id), body, caller)


@router.get("/{company_id}/owners/{owner_id}", response_model=OwnerView)
async def get_owner(
    company_id: int,
    owner_id: int,
    caller: CallerContext = Depends(get_caller_context),
    service: CompanyService = Depends(get_company_service),
):
    return await service.get_owner(CompanyId(company_id), OwnerId(owner_id), caller)
