"""Service test fixtures: async DB, per-request stores, callers and the API client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - store_session() opens a new AsyncSession per call, like one HTTP request
    - get_db and get_ssn_validator overridden for route tests
    - db_manager patched for the readiness probe

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for store and
      route tests (PostgreSQL-specific features not exercised here)
"""

from contextlib import asynccontextmanager

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from registry.api.dependencies import get_ssn_validator
from registry.config import get_settings
from registry.core.domain_types import Role
from registry.db.base import Base
from registry.infrastructure.company_store import SqlCompanyStore
from registry.infrastructure.database import get_db, DatabaseSessionManager
from registry.infrastructure.security import TokenCallerContext, create_access_token
from registry.schemas.company import CompanyPayload, OwnerPayload
import registry.infrastructure.database as db_module
import registry.models  # noqa: F401
from registry.main import app


class FixedSsnValidator:
    """SsnValidator double returning a preset answer and recording calls."""

    def __init__(self, answer: bool = True):
        self.answer = answer
        self.calls: list[str] = []

    async def validate(self, ssn: str) -> bool:
        self.calls.append(ssn)
        return self.answer


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def store_session(test_session_factory):
    """Open a SqlCompanyStore on a fresh session: `async with store_session() as store`."""

    @asynccontextmanager
    async def _open():
        async with test_session_factory() as db:
            yield SqlCompanyStore(db)

    return _open


@pytest.fixture
async def seed_company(store_session):
    """Company 'Acme' with owners Alice (111-11-1111) and Bob (222-22-2222)."""
    async with store_session() as store:
        return await store.create_company(CompanyPayload(
            name="Acme",
            country="DE",
            email="info@acme.test",
            owners=[
                OwnerPayload(name="Alice", social_security_number="111-11-1111"),
                OwnerPayload(name="Bob", social_security_number="222-22-2222"),
            ],
        ))


@pytest.fixture
def admin_caller():
    return TokenCallerContext(
        subject="admin", roles=frozenset({Role.ADMIN.value}), elevated_role="Admin",
    )


@pytest.fixture
def user_caller():
    return TokenCallerContext(
        subject="jane", roles=frozenset({Role.USER.value}), elevated_role="Admin",
    )


@pytest.fixture
def ssn_validator():
    return FixedSsnValidator(answer=True)


@pytest.fixture
def admin_headers():
    token, _ = create_access_token("admin", [Role.ADMIN.value], get_settings())
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_headers():
    token, _ = create_access_token("jane", [Role.USER.value], get_settings())
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def client(test_engine, test_session_factory, ssn_validator):
    """FastAPI test client with DB and validator dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_ssn_validator] = lambda: ssn_validator

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
