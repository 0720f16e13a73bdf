"""Pytest configuration and fixtures for topology.

Uses topology.main:app for HTTP tests. Service and API tests run against
the in-memory stores in tests.fakes; repository tests need Postgres.
"""

from typing import Annotated

import pytest
from fastapi import Depends
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from topology.api.v1.dependencies import (
    get_hierarchy_service,
    get_hierarchy_service_for_write,
    get_principal,
)
from topology.application.dtos.security import Principal
from topology.domain.enums import HierarchyLevel
from topology.infrastructure.persistence import database
from topology.main import app

from tests.fakes import Stores, make_stores

TENANT_ID = "tenant-a"
OTHER_TENANT_ID = "tenant-b"
CUSTOMER_ID = "customer-1"


@pytest.fixture
def stores() -> Stores:
    """Empty in-memory asset, device and relation stores for TENANT_ID."""
    return make_stores(TENANT_ID)


@pytest.fixture
def admin() -> Principal:
    return Principal(tenant_id=TENANT_ID)


@pytest.fixture
def customer_user() -> Principal:
    return Principal(tenant_id=TENANT_ID, customer_id=CUSTOMER_ID)


@pytest.fixture
def tree(stores: Stores):
    """Seed T -> B -> R -> D (all Contains edges) and return the four entities."""
    t = stores.assets.seed(TENANT_ID, "North", HierarchyLevel.TERRITORY.value)
    b = stores.assets.seed(TENANT_ID, "HQ", HierarchyLevel.BUILDING.value)
    r = stores.assets.seed(TENANT_ID, "Lab", HierarchyLevel.ROOM.value)
    d = stores.devices.seed(TENANT_ID, "Thermostat", HierarchyLevel.DEVICE.value)
    stores.relations.link(t, b)
    stores.relations.link(b, r)
    stores.relations.link(r, d)
    return t, b, r, d


@pytest.fixture
async def client() -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def api_client(stores: Stores) -> AsyncClient:
    """HTTP client whose hierarchy service runs on the in-memory stores.

    The principal still comes from the request headers.
    """

    def _service(principal: Annotated[Principal, Depends(get_principal)]):
        return stores.service(principal)

    app.dependency_overrides[get_hierarchy_service] = _service
    app.dependency_overrides[get_hierarchy_service_for_write] = _service
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
async def db_session() -> AsyncSession:
    """Database session for repository tests. Rolls back after each test.

    Requires DATABASE_URL (postgresql+asyncpg) and `alembic upgrade head`.
    Skips when Postgres is not configured; run without DB via:
    pytest -m 'not requires_db'.
    """
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        pytest.skip(
            "Postgres not configured: set DATABASE_URL, then run: alembic upgrade head"
        )
    async with database.AsyncSessionLocal() as session:
        yield session
        await session.rollback()


@pytest.fixture
def without_database(monkeypatch: pytest.MonkeyPatch) -> None:
    """Make the SQL stores look unconfigured, whatever DATABASE_URL says."""
    monkeypatch.setattr(database, "_ensure_engine", lambda: None)
    monkeypatch.setattr(database, "AsyncSessionLocal", None)
