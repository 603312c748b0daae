"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the record store, application services,
the current principal and per-route authorization gates. Routes depend
only on these dependencies, not on infra directly.

When database_backend is 'sql', repositories use SQLAlchemy with one
transactional session per request. When it is 'memory', they share the
MemoryStore created at startup. Switch backends via DATABASE_BACKEND.
"""

from __future__ import annotations

import json
import logging
from collections.abc import AsyncIterator, Mapping
from typing import Annotated, Any

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from itam.application.dtos.decision import OperationContext
from itam.application.interfaces.repositories import IPermissionRepository, IRoleRepository
from itam.application.services.authorization_service import AuthorizationService
from itam.application.services.permission_catalog import PermissionCatalogService
from itam.application.services.principal_service import PrincipalSnapshotService
from itam.application.services.role_service import RoleService
from itam.core.config import get_settings
from itam.domain.entities.principal import Principal
from itam.domain.exceptions import NotAuthenticatedException, ResourceNotFoundException
from itam.domain.policies import AllOf, AnyOf, Policy, ScopedSingle, Single
from itam.infrastructure.persistence.database import session_scope
from itam.infrastructure.persistence.repositories import (
    InMemoryPermissionRepository,
    InMemoryRoleRepository,
    PermissionRepository,
    RoleRepository,
)

logger = logging.getLogger(__name__)


# ---- Record store ----


async def get_store_session(request: Request) -> AsyncIterator[AsyncSession | None]:
    """One transactional session per request for the sql backend; None for memory."""
    if getattr(request.app.state, "memory_store", None) is not None:
        yield None
        return
    async with session_scope() as session:
        yield session


def get_permission_repo(
    request: Request,
    session: Annotated[AsyncSession | None, Depends(get_store_session)],
) -> IPermissionRepository:
    """Permission catalog repository for the configured backend."""
    if session is None:
        return InMemoryPermissionRepository(request.app.state.memory_store)
    return PermissionRepository(session)


def get_role_repo(
    request: Request,
    session: Annotated[AsyncSession | None, Depends(get_store_session)],
) -> IRoleRepository:
    """Role repository for the configured backend."""
    if session is None:
        return InMemoryRoleRepository(request.app.state.memory_store)
    return RoleRepository(session)


# ---- Application services ----


def get_permission_catalog(
    permission_repo: Annotated[IPermissionRepository, Depends(get_permission_repo)],
) -> PermissionCatalogService:
    return PermissionCatalogService(permission_repo)


def get_role_service(
    role_repo: Annotated[IRoleRepository, Depends(get_role_repo)],
    permission_repo: Annotated[IPermissionRepository, Depends(get_permission_repo)],
) -> RoleService:
    return RoleService(role_repo, permission_repo)


def get_authorization_service(request: Request) -> AuthorizationService:
    """Authorization service built at startup (carries the audit hook)."""
    return request.app.state.authorization_service


# ---- Principal ----


def get_principal_snapshot_service(
    role_repo: Annotated[IRoleRepository, Depends(get_role_repo)],
) -> PrincipalSnapshotService:
    return PrincipalSnapshotService(role_repo)


async def get_current_principal(
    request: Request,
    snapshots: Annotated[PrincipalSnapshotService, Depends(get_principal_snapshot_service)],
) -> Principal | None:
    """Principal for the request, or None when unauthenticated.

    The upstream authentication layer attaches request.state.principal as
    either a Principal or an identity mapping:

        {"id": ..., "role": ..., "assigned_branches": [...], "assigned_enterprises": [...]}

    An identity is snapshotted from its role's current permission set once
    per request and the Principal replaces it on request.state. An identity
    whose role is missing or inactive is treated as unauthenticated.
    """
    attached = getattr(request.state, "principal", None)
    if attached is None or isinstance(attached, Principal):
        return attached
    if not isinstance(attached, Mapping):
        return None
    principal_id = attached.get("id")
    role_name = attached.get("role") or attached.get("role_name")
    if not principal_id or not role_name:
        return None
    try:
        principal = await snapshots.snapshot(
            str(principal_id),
            str(role_name),
            assigned_branches=attached.get("assigned_branches"),
            assigned_enterprises=attached.get("assigned_enterprises"),
        )
    except ResourceNotFoundException:
        logger.warning(
            "Principal %s references unknown or inactive role %r; treating as unauthenticated",
            principal_id,
            role_name,
        )
        return None
    request.state.principal = principal
    return principal


def require_authenticated(
    principal: Annotated[Principal | None, Depends(get_current_principal)],
) -> Principal:
    """Dependency: reject with 401 when no principal is attached."""
    if principal is None:
        raise NotAuthenticatedException()
    return principal


# ---- Authorization gates ----


async def get_operation_target(request: Request) -> list[Mapping[str, Any]]:
    """Sources for scope fields in lookup order: JSON body, path params, query."""
    sources: list[Mapping[str, Any]] = []
    body = await request.body()
    if body and "json" in request.headers.get("content-type", ""):
        try:
            payload = json.loads(body)
        except ValueError:
            logger.debug("Request body is not valid JSON; scope fields read from params only")
            payload = None
        if isinstance(payload, dict):
            sources.append(payload)
    sources.append(request.path_params)
    sources.append(request.query_params)
    return sources


async def enforce_policy(
    request: Request,
    principal: Principal | None,
    auth_svc: AuthorizationService,
    policy: Policy,
) -> Principal:
    """Run the gate for policy; raise the domain exception for a denial (401 / 403).

    On success the OperationContext is attached to request.state.operation_context.
    """
    target = await get_operation_target(request) if isinstance(policy, ScopedSingle) else None
    context = OperationContext()
    request.state.operation_context = context
    auth_svc.require(principal, policy, target, context)
    return principal


def require_policy(policy: Policy):
    """Dependency factory: run the authorization gate for policy and return the principal."""

    async def _require(
        request: Request,
        principal: Annotated[Principal | None, Depends(get_current_principal)],
        auth_svc: Annotated[AuthorizationService, Depends(get_authorization_service)],
    ) -> Principal:
        return await enforce_policy(request, principal, auth_svc, policy)

    return _require


def require_permission(key: str):
    """Dependency factory: principal must hold key (or the wildcard)."""
    return require_policy(Single(key))


def require_any_permission(*keys: str):
    """Dependency factory: principal must hold at least one of keys."""
    return require_policy(AnyOf(keys))


def require_all_permissions(*keys: str):
    """Dependency factory: principal must hold every key."""
    return require_policy(AllOf(keys))


def require_scoped_permission(
    key: str,
    branch_field: str | None = None,
    enterprise_field: str | None = None,
):
    """Dependency factory: key plus branch/enterprise reachability of the request target.

    Field names default to SCOPE_BRANCH_FIELD / SCOPE_ENTERPRISE_FIELD,
    resolved per request so settings are not read at import time.
    """
    # Fail fast on a malformed key.
    Single(key)

    async def _require(
        request: Request,
        principal: Annotated[Principal | None, Depends(get_current_principal)],
        auth_svc: Annotated[AuthorizationService, Depends(get_authorization_service)],
    ) -> Principal:
        settings = get_settings()
        policy = ScopedSingle(
            key,
            branch_field=branch_field or settings.scope_branch_field,
            enterprise_field=enterprise_field or settings.scope_enterprise_field,
        )
        return await enforce_policy(request, principal, auth_svc, policy)

    return _require
