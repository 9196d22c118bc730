import os

# Settings are read at import time; point them at SQLite before the app loads
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test_org_hierarchy.db")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool

from org_hierarchy.main import app
from org_hierarchy.database import Base, get_db

from tests.factories import (
    BrandFactory,
    BusinessFactory,
    FranchiseFactory,
    OrganizationFactory,
)


@pytest_asyncio.fixture
async def test_db(tmp_path):
    """Create an isolated test database and tables."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        poolclass=NullPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )

    async with async_session() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def client(test_db: AsyncSession):
    """Create test client with overridden database."""

    async def override_get_db():
        yield test_db

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


async def _create(client: AsyncClient, path: str, payload: dict) -> dict:
    response = await client.post(path, json=payload)
    assert response.status_code == 201, response.text
    return response.json()["data"]


@pytest_asyncio.fixture
async def organization(client: AsyncClient) -> dict:
    return await _create(client, "/api/organizations", OrganizationFactory())


@pytest_asyncio.fixture
async def brand(client: AsyncClient, organization: dict) -> dict:
    return await _create(client, "/api/brands", BrandFactory(organization_id=organization["id"]))


@pytest_asyncio.fixture
async def business(client: AsyncClient, organization: dict, brand: dict) -> dict:
    return await _create(
        client,
        "/api/businesses",
        BusinessFactory(organization_id=organization["id"], brand_id=brand["id"]),
    )


@pytest_asyncio.fixture
async def franchise(client: AsyncClient, business: dict) -> dict:
    return await _create(client, "/api/franchises", FranchiseFactory(business_id=business["id"]))
