"""Request Dependencies: per-request caller context and service wiring.

Invariants:
    - Every /companies route resolves a CallerContext or fails Unauthorized
    - One CompanyService (and one SqlCompanyStore) per request, bound to its session
"""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from registry.config import Settings, get_settings
from registry.core.errors import UnauthorizedError
from registry.core.repository_protocols import CallerContext, SsnValidator
from registry.infrastructure.company_store import SqlCompanyStore
from registry.infrastructure.database import get_db
from registry.infrastructure.security import caller_from_token
from registry.infrastructure.ssn_validator import SimulatedSsnValidator
from registry.services.company_service import CompanyService

_bearer = HTTPBearer(auto_error=False)


def get_caller_context(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(get_settings),
) -> CallerContext:
    if credentials is None:
        raise UnauthorizedError()
    return caller_from_token(credentials.credentials, settings)


def get_ssn_validator(settings: Settings = Depends(get_settings)) -> SsnValidator:
    return SimulatedSsnValidator(latency_ms=settings.ssn_validator_latency_ms)


def get_company_service(
    db: AsyncSession = Depends(get_db),
    validator: SsnValidator = Depends(get_ssn_validator),
) -> CompanyService:
    return CompanyService(SqlCompanyStore(db), validator)
