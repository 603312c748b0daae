"""Pytest configuration and fixtures for itam.

HTTP tests run create_app() against the in-process 'memory' record store,
with the lifespan (seed included) entered explicitly. The upstream
authentication layer is replaced by a dependency override that picks a
principal from the X-Principal-Id header.

SQL fixtures use a file-backed SQLite database per test (aiosqlite).
"""

import os

# Select the in-process store before anything reads settings.
os.environ["DATABASE_BACKEND"] = "memory"
os.environ["SEED_ON_STARTUP"] = "true"

import pytest
from fastapi import FastAPI, Request
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from itam.api.v1.dependencies import get_current_principal
from itam.application.services.principal_service import PrincipalSnapshotService
from itam.core.config import get_settings
from itam.domain.entities.principal import Principal
from itam.infrastructure.persistence.database import create_schema, enable_sqlite_savepoints
from itam.infrastructure.persistence.repositories import (
    InMemoryPermissionRepository,
    InMemoryRoleRepository,
    MemoryStore,
)
from itam.main import create_app

get_settings.cache_clear()


@pytest.fixture
def memory_store() -> MemoryStore:
    """Empty in-process store."""
    return MemoryStore()


@pytest.fixture
def permission_repo(memory_store: MemoryStore) -> InMemoryPermissionRepository:
    return InMemoryPermissionRepository(memory_store)


@pytest.fixture
def role_repo(memory_store: MemoryStore) -> InMemoryRoleRepository:
    return InMemoryRoleRepository(memory_store)


@pytest.fixture
async def app() -> FastAPI:
    """Fresh application with startup (store + seed) run; shutdown on teardown."""
    application = create_app()
    async with application.router.lifespan_context(application):
        yield application


@pytest.fixture
async def principals(app: FastAPI) -> dict[str, Principal]:
    """Principals snapshotted from the seeded built-in roles, keyed by header value.

    - root: super_admin
    - ent: enterprise_admin on enterprise e1, branches b1/b2
    - branch: branch_admin on branch b1
    - viewer: user on branch b1
    """
    snapshots = PrincipalSnapshotService(InMemoryRoleRepository(app.state.memory_store))
    return {
        "root": await snapshots.snapshot("root", "super_admin"),
        "ent": await snapshots.snapshot(
            "ent",
            "enterprise_admin",
            assigned_branches=["b1", "b2"],
            assigned_enterprises=["e1"],
        ),
        "branch": await snapshots.snapshot("branch", "branch_admin", assigned_branches=["b1"]),
        "viewer": await snapshots.snapshot("viewer", "user", assigned_branches=["b1"]),
    }


@pytest.fixture
async def client(app: FastAPI, principals: dict[str, Principal]) -> AsyncClient:
    """Async HTTP client against the app (ASGI). Send X-Principal-Id to authenticate."""

    def _principal_from_header(request: Request) -> Principal | None:
        return principals.get(request.headers.get("X-Principal-Id", ""))

    app.dependency_overrides[get_current_principal] = _principal_from_header
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def db_session(tmp_path) -> AsyncSession:
    """Session on a fresh SQLite database with the schema created.

    Rolls back after test.
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'itam.db'}")
    enable_sqlite_savepoints(engine)
    await create_schema(engine)
    factory = async_sessionmaker(bind=engine, expire_on_commit=False, autoflush=False)
    async with factory() as session:
        yield session
        await session.rollback()
    await engine.dispose()
