"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic (SRP). Used by main.py;
no business logic here, only wiring of the record store, the
authorization service and the RBAC seed.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from itam.application.services.authorization_service import AuthorizationService
from itam.application.services.decision_audit_service import LoggingAuditHook
from itam.core.config import Settings, get_settings
from itam.infrastructure.persistence import database
from itam.infrastructure.persistence.repositories import (
    InMemoryPermissionRepository,
    InMemoryRoleRepository,
    MemoryStore,
    PermissionRepository,
    RoleRepository,
)
from itam.infrastructure.services.rbac_seed_service import seed_catalog_and_roles
from itam.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


async def _run_seed(app: FastAPI, settings: Settings) -> None:
    if settings.database_backend == "sql":
        async with database.session_scope() as session:
            await seed_catalog_and_roles(PermissionRepository(session), RoleRepository(session))
        return
    store: MemoryStore = app.state.memory_store
    await seed_catalog_and_roles(
        InMemoryPermissionRepository(store), InMemoryRoleRepository(store)
    )


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: logging, record store (schema when sql), authorization
    service, RBAC seed (when seed_on_startup). The seed finishes before any
    request is served. Shutdown disposes the SQL engine.
    """
    settings = get_settings()

    # ---- Startup ----
    setup_logging()

    app.state.memory_store = MemoryStore() if settings.database_backend == "memory" else None
    if settings.database_backend == "sql" and settings.database_create_schema:
        await database.create_schema()
        logger.info("Database schema ensured")

    audit_hook = LoggingAuditHook() if settings.authz_audit_enabled else None
    app.state.authorization_service = AuthorizationService(audit_hook=audit_hook)

    if settings.seed_on_startup:
        await _run_seed(app, settings)

    yield

    # ---- Shutdown ----
    if database.engine is not None:
        await database.dispose_engine()
        logger.info("Database engine disposed")
