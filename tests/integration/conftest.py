"""Integration test fixtures for database and HTTP client operations.

Runs against in-memory SQLite (aiosqlite) with a StaticPool so every session
in a test shares one connection. Tables come from SQLModel metadata; the
partial unique index on open diet assignments is created the same way.
"""

from collections.abc import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from src.foodservice import models  # noqa: F401
from src.foodservice.api.dependencies import get_db_session
from src.foodservice.core.db import build_engine, get_session
from src.foodservice.crud import EntityRegistry, TenantContext
from src.foodservice.main import create_app
from src.foodservice.models import DietType, Site, Tenant
from src.foodservice.models.enums import UserRole
from tests.helpers import context_for, create_diet_type, create_tenant_with_site


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    """Fresh in-memory database per test."""
    test_engine = build_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield test_engine
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Provide an async session for database operations.

    The session does NOT auto-commit; helpers and services commit explicitly.
    """
    async with get_session(engine) as session:
        yield session


@pytest.fixture
async def tenant_a(db_session: AsyncSession) -> tuple[Tenant, Site]:
    return await create_tenant_with_site(db_session, tenant_code="ALPHA")


@pytest.fixture
async def tenant_b(db_session: AsyncSession) -> tuple[Tenant, Site]:
    return await create_tenant_with_site(db_session, tenant_code="BRAVO")


@pytest.fixture
def ctx_a(tenant_a: tuple[Tenant, Site]) -> TenantContext:
    return context_for(tenant_a[0])


@pytest.fixture
def ctx_b(tenant_b: tuple[Tenant, Site]) -> TenantContext:
    return context_for(tenant_b[0])


@pytest.fixture
def admin_a(tenant_a: tuple[Tenant, Site]) -> TenantContext:
    return context_for(tenant_a[0], role=UserRole.ADMIN)


@pytest.fixture
async def system_diets(db_session: AsyncSession) -> dict[str, DietType]:
    """System-wide REGULAR and DIABETIC diets visible to every tenant."""
    regular = await create_diet_type(db_session, diet_type_name="Regular")
    diabetic = await create_diet_type(
        db_session,
        diet_type_name="Diabetic",
        description="Consistent carbohydrate",
        carb_limit_g=60,
    )
    return {"REGULAR": regular, "DIABETIC": diabetic}


@pytest.fixture
def app(engine: AsyncEngine, registry: EntityRegistry) -> FastAPI:
    """App wired to the test database."""
    application = create_app(registry)

    async def _test_session() -> AsyncGenerator[AsyncSession]:
        async with get_session(engine) as session:
            yield session

    application.dependency_overrides[get_db_session] = _test_session
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """HTTP client for the app (no network)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
